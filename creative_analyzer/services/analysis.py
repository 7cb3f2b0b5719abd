"""Creative analysis service - cache lookup, Gemini call, history recording."""

import json
import logging
from dataclasses import dataclass
from typing import Callable

from ..clients.gemini import GeminiClient, RemoteRejection
from ..models import AnalysisHistoryEntry, AnalysisResult, Creative, CreativeSet, error_result
from ..utils import now_iso
from .accounts import ClientService, ConnectionService
from .cache import AnalysisCache
from .media import load_creative
from .messages import message
from .prompts import ANALYSIS_SCHEMA, build_analysis_prompt

logger = logging.getLogger(__name__)

# finish_reason -> message key prefix
_REJECTION_MESSAGES = {
    "SAFETY": "safety",
    "RECITATION": "recitation",
    "MAX_TOKENS": "max_tokens",
}


class SetupRequiredError(Exception):
    """Uploads need a tested connection and at least one client."""

    pass


@dataclass
class UploadCheck:
    """A loaded creative and, if it was analysed before, its history entry."""
    creative: Creative
    duplicate_of: AnalysisHistoryEntry | None = None


@dataclass
class AnalysisOutcome:
    result: AnalysisResult
    from_cache: bool = False


class AnalysisService:
    """Analyse creatives against Meta Ads placements, with caching and history."""

    def __init__(
        self,
        cache: AnalysisCache,
        clients: ClientService,
        connection: ConnectionService,
        gemini: GeminiClient | None,
        clock: Callable[[], str] = now_iso,
    ):
        self.cache = cache
        self.clients = clients
        self.connection = connection
        self.gemini = gemini
        self.clock = clock

    def start_upload(self, data: bytes, filename: str, mime_type: str) -> UploadCheck:
        """
        Load an uploaded creative and look for an identical earlier upload.

        When `duplicate_of` is set the caller skips client selection and
        reuses that entry's client.
        """
        if not self.connection.is_ready():
            raise SetupRequiredError("Configure and test the database connection before uploading a file.")
        if not self.clients.list_clients():
            raise SetupRequiredError("No clients found. Create a client before uploading a file.")

        creative = load_creative(data, filename, mime_type)
        duplicate = self.cache.find_duplicate_upload(creative.hash, creative.filename, creative.size)
        if duplicate:
            print(f"Creative already analysed for client {duplicate.client_id}, assigning automatically", flush=True)
            self.clients.set_current_client(duplicate.client_id)
        return UploadCheck(creative=creative, duplicate_of=duplicate)

    def analyze(
        self,
        creative_set: CreativeSet,
        format_group: str,
        client_id: str,
        language: str = "es",
    ) -> AnalysisOutcome:
        """
        Analyse the creative of a format group for a client.

        1. Serve a fresh cached result if one exists
        2. Otherwise build the history context and call Gemini
        3. Cache the result and append it to the history (successful results only)
        """
        creative = creative_set.for_format_group(format_group)
        if creative is None:
            return AnalysisOutcome(result=self._no_creative_result(language))

        cached = self.cache.lookup_cache(creative.hash, client_id, language, format_group)
        if cached:
            print("Recent analysis (< 48h) found in cache, returning saved result", flush=True)
            return AnalysisOutcome(result=cached, from_cache=True)

        context = self.build_context(client_id, language)
        print(f"Analysing {creative.filename} for {format_group}...", flush=True)
        result = self.request_analysis(creative, format_group, language, context)

        if not result.is_error:
            self.cache.store_result(creative.hash, client_id, language, format_group, result)
            self.cache.record_analysis(AnalysisHistoryEntry(
                client_id=client_id,
                filename=creative.filename,
                hash=creative.hash,
                size=creative.size,
                date=self.clock(),
                description=result.creative_description,
            ))
        return AnalysisOutcome(result=result)

    def build_context(self, client_id: str, language: str) -> str:
        """Client line plus the client's recent analysis history."""
        client = self.clients.get_client(client_id)
        client_line = (
            message(language, "client_line", name=client.name, currency=client.currency) if client else ""
        )
        history = self.cache.build_context(client_id, language)
        return f"{client_line}\n\n{history}".strip()

    def request_analysis(
        self, creative: Creative, format_group: str, language: str, context: str
    ) -> AnalysisResult:
        """Call Gemini. Every failure becomes an error result; nothing is raised."""
        if self.gemini is None:
            return error_result(
                headline=message(language, "config_headline"),
                message=message(language, "config_message"),
                description=message(language, "config_description"),
                funnel_stage="N/A",
            )

        prompt = build_analysis_prompt(format_group, language, context)
        try:
            data = self.gemini.generate_json(prompt, creative.data, creative.mime_type, ANALYSIS_SCHEMA)
            return AnalysisResult.from_dict(data)
        except RemoteRejection as e:
            logger.warning(f"Gemini returned no content: {e}")
            prefix = _REJECTION_MESSAGES.get(str(e.finish_reason), "empty")
            return error_result(
                headline=message(language, f"{prefix}_headline"),
                message=message(language, f"{prefix}_message"),
            )
        except json.JSONDecodeError as e:
            logger.warning(f"Gemini returned invalid JSON: {e}")
            return error_result(
                headline=message(language, "analysis_headline"),
                message=message(language, "invalid_json_message"),
            )
        except Exception as e:
            logger.warning(f"Gemini analysis failed: {e}")
            return error_result(
                headline=message(language, "analysis_headline"),
                message=str(e) or message(language, "analysis_message"),
            )

    def _no_creative_result(self, language: str) -> AnalysisResult:
        return error_result(
            headline=message(language, "no_creative_headline"),
            message=message(language, "no_creative_message"),
            description=message(language, "no_creative_description"),
            funnel_stage="N/A",
        )
