"""Performance report ingestion, deduplication, undo and reconciliation."""

import logging
from dataclasses import dataclass
from typing import Any

from ..models import AnalysisHistoryEntry, Client, MatchedPerformanceRecord, PerformanceRecord
from ..storage import KeyValueStore, StorageReadError
from ..storage import keys
from ..utils import parse_day
from .cache import AnalysisCache
from .hashing import content_hash
from .metrics import PerformanceSummary, summarize
from .report import parse_report

logger = logging.getLogger(__name__)


class AlreadyProcessedError(Exception):
    """This report file was already ingested for the client."""

    def __init__(self, client_id: str, file_hash: str):
        self.client_id = client_id
        self.file_hash = file_hash
        super().__init__("This file has already been processed for this client.")


@dataclass
class UploadResult:
    """Outcome of one report upload. Keep it to undo the upload."""
    client_id: str
    file_hash: str
    records_added: int
    duplicates: int


@dataclass
class ClientPerformance:
    """List-view summary of a client's performance data."""
    client: Client
    summary: PerformanceSummary
    total_ads: int
    matched_count: int


def merge_rows(
    existing: list[PerformanceRecord],
    new_rows: list[dict[str, Any]],
    client_id: str,
    file_hash: str,
) -> tuple[list[PerformanceRecord], int]:
    """
    Coerce parsed rows into records, skipping rows whose composite key is
    already stored (or appeared earlier in the same batch). First write wins.

    Returns:
        (added records in input order, number of duplicates skipped)
    """
    seen = {r.unique_id for r in existing}
    added: list[PerformanceRecord] = []
    duplicates = 0

    for row in new_rows:
        key = PerformanceRecord.row_key(row)
        if key in seen:
            duplicates += 1
            continue
        added.append(PerformanceRecord.from_row(row, client_id, file_hash))
        seen.add(key)

    return added, duplicates


def find_history_match(
    record: PerformanceRecord, history: list[AnalysisHistoryEntry]
) -> AnalysisHistoryEntry | None:
    """
    Heuristic link from a report row to an analysed creative: the first entry
    of the same client whose filename occurs inside the row's creative
    identifier. Not a foreign key; a short filename can match unrelated rows.
    """
    if not record.creative:
        return None
    for entry in history:
        if entry.client_id == record.client_id and entry.filename and entry.filename in record.creative:
            return entry
    return None


def reconcile(
    records: list[PerformanceRecord], history: list[AnalysisHistoryEntry]
) -> list[MatchedPerformanceRecord]:
    """Annotate each record with its history match, keeping record order."""
    matched = []
    for record in records:
        entry = find_history_match(record, history)
        matched.append(MatchedPerformanceRecord(
            record=record,
            is_matched=entry is not None,
            creative_description=entry.description if entry else None,
        ))
    return matched


class PerformanceService:
    """Per-client performance records and processed report hashes."""

    def __init__(self, store: KeyValueStore, cache: AnalysisCache):
        self.store = store
        self.cache = cache

    # ===== Storage =====

    def _read_map(self, key: str) -> dict[str, list]:
        try:
            value = self.store.get(key, {})
        except StorageReadError as e:
            logger.warning(f"{key} unreadable, treating as empty: {e}")
            return {}
        return value if isinstance(value, dict) else {}

    def _write_client_list(self, key: str, client_id: str, items: list) -> None:
        """Store a client's list; an empty list removes the client's entry."""
        data = self._read_map(key)
        if items:
            data[client_id] = items
        else:
            data.pop(client_id, None)
        self.store.put(key, data)

    def client_records(self, client_id: str) -> list[PerformanceRecord]:
        raw = self._read_map(keys.PERFORMANCE_DATA).get(client_id, [])
        try:
            return [PerformanceRecord.from_dict(r) for r in raw]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Performance data of {client_id} unreadable, treating as empty: {e}")
            return []

    def processed_hashes(self, client_id: str) -> list[str]:
        raw = self._read_map(keys.PROCESSED_REPORT_HASHES).get(client_id, [])
        if not isinstance(raw, list) or not all(isinstance(h, str) for h in raw):
            logger.warning(f"Processed report hashes of {client_id} unreadable, treating as empty")
            return []
        return list(raw)

    # ===== Ingestion =====

    def dedup_file(self, file_hash: str, client_id: str) -> None:
        """Reject a report file already ingested for this client."""
        if file_hash in self.processed_hashes(client_id):
            raise AlreadyProcessedError(client_id, file_hash)

    def ingest_report(self, client_id: str, data: bytes) -> UploadResult:
        """
        Ingest a report file for a client.

        1. Hash the file and reject it if already processed
        2. Parse rows (EmptyReportError if none)
        3. Merge new rows, counting duplicates
        4. Persist rows and the file hash (only if something was added)
        """
        file_hash = content_hash(data)
        self.dedup_file(file_hash, client_id)

        rows = parse_report(data)
        existing = self.client_records(client_id)
        added, duplicates = merge_rows(existing, rows, client_id, file_hash)

        if added:
            self._write_client_list(
                keys.PERFORMANCE_DATA, client_id, [r.to_dict() for r in existing + added]
            )
            self._write_client_list(
                keys.PROCESSED_REPORT_HASHES, client_id, self.processed_hashes(client_id) + [file_hash]
            )

        print(f"Report processed: {len(added)} new records, {duplicates} duplicates ignored", flush=True)
        return UploadResult(
            client_id=client_id, file_hash=file_hash, records_added=len(added), duplicates=duplicates
        )

    def undo_last_upload(self, client_id: str, file_hash: str) -> list[PerformanceRecord]:
        """Remove every record of a report file and forget its hash."""
        restored = [r for r in self.client_records(client_id) if r.file_hash != file_hash]
        self._write_client_list(keys.PERFORMANCE_DATA, client_id, [r.to_dict() for r in restored])
        hashes = [h for h in self.processed_hashes(client_id) if h != file_hash]
        self._write_client_list(keys.PROCESSED_REPORT_HASHES, client_id, hashes)
        return restored

    def clear_client_data(self, client_id: str) -> None:
        """Drop all performance records and processed hashes of a client."""
        self._write_client_list(keys.PERFORMANCE_DATA, client_id, [])
        self._write_client_list(keys.PROCESSED_REPORT_HASHES, client_id, [])

    # ===== Views =====

    def matched_records(self, client_id: str) -> list[MatchedPerformanceRecord]:
        """Reconciled records of a client, newest day first."""
        matched = reconcile(self.client_records(client_id), self.cache.history())
        return sorted(
            matched,
            key=lambda m: parse_day(m.record.day) or parse_day("0001-01-01"),
            reverse=True,
        )

    def client_summaries(self, clients: list[Client]) -> list[ClientPerformance]:
        history = self.cache.history()
        summaries = []
        for client in clients:
            records = self.client_records(client.id)
            summaries.append(ClientPerformance(
                client=client,
                summary=summarize(records),
                total_ads=len(records),
                matched_count=sum(1 for r in records if find_history_match(r, history)),
            ))
        return summaries
