"""Analysis history entry."""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class AnalysisHistoryEntry:
    """A past successful analysis. Used for duplicate detection and prompt context."""

    client_id: str
    filename: str
    hash: str
    size: int
    date: str                # ISO-8601
    description: str

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "AnalysisHistoryEntry":
        return AnalysisHistoryEntry(
            client_id=data["client_id"],
            filename=data["filename"],
            hash=data["hash"],
            size=int(data["size"]),
            date=data["date"],
            description=data.get("description", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
