"""Analysis cache and history - content-addressed, time-boxed, bounded."""

import logging
from typing import Callable

from ..config import CACHE_TTL_HOURS, CONTEXT_LIMIT, HISTORY_LIMIT
from ..models import AnalysisHistoryEntry, AnalysisResult
from ..storage import KeyValueStore, StorageReadError
from ..storage import keys
from ..utils import now_ms
from .messages import message

logger = logging.getLogger(__name__)


class AnalysisCache:
    """
    Cache of analysis results keyed by (hash, client, language, format group),
    plus the append-only analysis history shared by all clients.

    Expired entries are ignored on read and overwritten on the next write;
    nothing is evicted in the background. Corrupt persisted values degrade to
    "no cache" / "no history".
    """

    def __init__(
        self,
        store: KeyValueStore,
        clock: Callable[[], int] = now_ms,
        ttl_hours: int = CACHE_TTL_HOURS,
        history_limit: int = HISTORY_LIMIT,
        context_limit: int = CONTEXT_LIMIT,
    ):
        self.store = store
        self.clock = clock
        self.ttl_ms = ttl_hours * 60 * 60 * 1000
        self.history_limit = history_limit
        self.context_limit = context_limit

    # ===== Cache =====

    def lookup_cache(
        self, content_hash: str, client_id: str, language: str, format_group: str
    ) -> AnalysisResult | None:
        """Return the cached result if present and not older than the TTL."""
        key = keys.cache_key(content_hash, client_id, language, format_group)
        try:
            entry = self.store.get(key)
            if not entry:
                return None
            if self.clock() - entry["timestamp"] > self.ttl_ms:
                logger.debug(f"Cache expired for {key}")
                return None
            return AnalysisResult.from_dict(entry["result"])
        except (StorageReadError, KeyError, TypeError, AttributeError) as e:
            logger.warning(f"Ignoring unreadable cache entry {key}: {e}")
            return None

    def store_result(
        self,
        content_hash: str,
        client_id: str,
        language: str,
        format_group: str,
        result: AnalysisResult,
    ) -> bool:
        """Cache a successful result. Error results are never cached."""
        if result.is_error:
            return False
        key = keys.cache_key(content_hash, client_id, language, format_group)
        self.store.put(key, {"result": result.to_dict(), "timestamp": self.clock()})
        return True

    # ===== History =====

    def history(self) -> list[AnalysisHistoryEntry]:
        """All history entries in insertion order (oldest first)."""
        try:
            raw = self.store.get(keys.ANALYSIS_HISTORY, [])
            return [AnalysisHistoryEntry.from_dict(item) for item in raw]
        except (StorageReadError, KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Analysis history unreadable, treating as empty: {e}")
            return []

    def client_history(self, client_id: str) -> list[AnalysisHistoryEntry]:
        return [h for h in self.history() if h.client_id == client_id]

    def record_analysis(self, entry: AnalysisHistoryEntry) -> list[AnalysisHistoryEntry]:
        """Append an entry, dropping the oldest ones beyond the history limit."""
        try:
            self.store.append_bounded(keys.ANALYSIS_HISTORY, entry.to_dict(), self.history_limit)
        except StorageReadError as e:
            logger.warning(f"Analysis history unreadable, starting a new one: {e}")
            self.store.put(keys.ANALYSIS_HISTORY, [entry.to_dict()])
        return self.history()

    def find_duplicate_upload(self, content_hash: str, filename: str, size: int) -> AnalysisHistoryEntry | None:
        """Entry with the same hash, filename and size, if any."""
        for entry in self.history():
            if entry.hash == content_hash and entry.filename == filename and entry.size == size:
                return entry
        return None

    def build_context(self, client_id: str, language: str) -> str:
        """Recent history of a client rendered as prompt context."""
        recent = self.client_history(client_id)[-self.context_limit:]
        rendered = "\n\n".join(
            f"File: {h.filename}\nDate: {h.date}\nDescription: {h.description}" for h in recent
        )
        return f"{message(language, 'history_intro')}\n{rendered or message(language, 'no_history')}"

    def remove_client(self, client_id: str) -> int:
        """Drop all history of a client. Returns the number of removed entries."""
        history = self.history()
        kept = [h for h in history if h.client_id != client_id]
        self.store.put(keys.ANALYSIS_HISTORY, [h.to_dict() for h in kept])
        return len(history) - len(kept)

    def counts_by_client(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for entry in self.history():
            counts[entry.client_id] = counts.get(entry.client_id, 0) + 1
        return counts
