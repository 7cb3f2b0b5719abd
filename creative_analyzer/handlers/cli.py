"""Command line entry point."""

import argparse
import json
import logging
import mimetypes
import sys
from dataclasses import dataclass
from datetime import date, timedelta
from pathlib import Path

from ..clients import ConfigurationError, GeminiClient
from ..config import GEMINI_API_KEY, GEMINI_MODEL, STORE_PATH
from ..models import CreativeSet, SQUARE_LIKE, VERTICAL
from ..services import (
    AnalysisCache,
    AnalysisService,
    ClientService,
    ConnectionService,
    InsightsService,
    PerformanceService,
)
from ..services.analysis import SetupRequiredError
from ..services.media import CreativeLoadError
from ..services.metrics import filter_by_date, summarize, top_creatives
from ..services.performance import AlreadyProcessedError
from ..services.report import EmptyReportError
from ..storage import JsonFileStore, KeyValueStore


@dataclass
class Services:
    cache: AnalysisCache
    performance: PerformanceService
    clients: ClientService
    connection: ConnectionService
    analysis: AnalysisService
    insights: InsightsService


def build_services(store: KeyValueStore) -> Services:
    """Wire services around one store. External clients are optional."""
    try:
        gemini = GeminiClient(api_key=GEMINI_API_KEY, model=GEMINI_MODEL)
    except ConfigurationError:
        gemini = None

    cache = AnalysisCache(store)
    performance = PerformanceService(store, cache)
    clients = ClientService(store, cache, performance)
    connection = ConnectionService(store)
    analysis = AnalysisService(cache, clients, connection, gemini)
    return Services(
        cache=cache,
        performance=performance,
        clients=clients,
        connection=connection,
        analysis=analysis,
        insights=InsightsService(gemini),
    )


# ===== Commands =====

def cmd_connect(services: Services, args) -> int:
    config = {
        "host": args.host,
        "port": args.port,
        "user": args.user,
        "pass": args.password,
        "database": args.database,
    }
    if services.connection.test_connection(config):
        print("Connection OK")
        return 0
    print("Connection failed: host, port, user, password and database are required")
    return 1


def cmd_clients(services: Services, args) -> int:
    if args.action == "add":
        if not args.name:
            print("Client name required")
            return 1
        client = services.clients.create_client(args.name, currency=args.currency, logo=args.logo, user_id=args.user)
        print(f"Created client {client.id} ({client.name})")
    elif args.action == "delete":
        if not services.clients.delete_client(args.client_id):
            print(f"Client not found: {args.client_id}")
            return 1
    else:
        counts = services.clients.analysis_counts()
        for client in services.clients.list_clients(args.user):
            print(f"{client.id}\t{client.name}\t{client.currency}\t{client.user_id}\t{counts.get(client.id, 0)} analyses")
    return 0


def cmd_analyze(services: Services, args) -> int:
    path = Path(args.file)
    mime_type = args.mime or mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    check = services.analysis.start_upload(path.read_bytes(), path.name, mime_type)

    client_id = check.duplicate_of.client_id if check.duplicate_of else args.client
    client_id = client_id or services.clients.current_client_id()
    if not services.clients.get_client(client_id):
        print("Select a client with --client")
        return 1
    services.clients.set_current_client(client_id)

    creative = check.creative
    format_group = args.format or (SQUARE_LIKE if creative.format == "square" else VERTICAL)
    outcome = services.analysis.analyze(CreativeSet.of(creative), format_group, client_id, args.lang)

    print(json.dumps(outcome.result.to_dict(), indent=2, ensure_ascii=False))
    return 1 if outcome.result.is_error else 0


def cmd_report(services: Services, args) -> int:
    client = services.clients.get_client(args.client)
    if not client:
        print(f"Client not found: {args.client}")
        return 1

    if args.action == "ingest":
        if not args.file:
            print("--file required")
            return 1
        result = services.performance.ingest_report(client.id, Path(args.file).read_bytes())
        print(f"File hash: {result.file_hash} (use it with 'report undo')")
    elif args.action == "undo":
        if not args.file_hash:
            print("--hash required")
            return 1
        restored = services.performance.undo_last_upload(client.id, args.file_hash)
        print(f"Upload undone, {len(restored)} records remain")
    elif args.action == "clear":
        services.performance.clear_client_data(client.id)
        print(f"Performance data of {client.name} deleted")
    else:
        end = date.fromisoformat(args.end) if args.end else date.today()
        start = date.fromisoformat(args.start) if args.start else end - timedelta(days=7)
        records = filter_by_date(services.performance.matched_records(client.id), start, end)
        top = top_creatives(records)
        if args.action == "insights":
            print(services.insights.generate(top, args.lang) or "No analysed creatives in range")
            return 0

        summary = summarize([m.record for m in records])
        print(f"{client.name} {start} .. {end}: {len(records)} rows")
        print(f"  Spend {summary.spend:.2f} {client.currency}  ROAS {summary.roas:.2f}  CPA {summary.cpa:.2f}  "
              f"CTR {summary.ctr:.2f}%  CPM {summary.cpm:.2f}")
        print("Top creatives:")
        for t in top:
            print(f"  {t.roas:.2f}  {t.creative}  spend={t.spend:.2f}  value={t.value:.2f}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="creative-analyzer", description="Meta Ads creative assistant")
    parser.add_argument("--store", default=STORE_PATH, help="Store directory")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("connect", help="Test and save connection settings")
    for name in ("host", "port", "user", "password", "database"):
        p.add_argument(f"--{name}", default="")

    p = sub.add_parser("clients", help="Manage clients")
    p.add_argument("action", choices=["list", "add", "delete"])
    p.add_argument("name", nargs="?", help="Client name (add)")
    p.add_argument("--id", dest="client_id", help="Client id (delete)")
    p.add_argument("--currency", default="EUR")
    p.add_argument("--logo", default="")
    p.add_argument("--user", default="admin")

    p = sub.add_parser("analyze", help="Analyse a creative")
    p.add_argument("file")
    p.add_argument("--client")
    p.add_argument("--format", choices=[SQUARE_LIKE, VERTICAL])
    p.add_argument("--lang", choices=["es", "en"], default="es")
    p.add_argument("--mime")

    p = sub.add_parser("report", help="Performance reports")
    p.add_argument("action", choices=["ingest", "undo", "clear", "summary", "insights"])
    p.add_argument("--client", required=True)
    p.add_argument("--file", help="Report .xlsx (ingest)")
    p.add_argument("--hash", dest="file_hash", help="File hash (undo)")
    p.add_argument("--start")
    p.add_argument("--end")
    p.add_argument("--lang", choices=["es", "en"], default="es")
    return parser


COMMANDS = {
    "connect": cmd_connect,
    "clients": cmd_clients,
    "analyze": cmd_analyze,
    "report": cmd_report,
}


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    args = build_parser().parse_args(argv)
    services = build_services(JsonFileStore(args.store))

    try:
        return COMMANDS[args.command](services, args)
    except (SetupRequiredError, CreativeLoadError, AlreadyProcessedError, EmptyReportError, FileNotFoundError) as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
