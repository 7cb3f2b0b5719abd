"""Client (advertiser account) model."""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass
class Client:
    """An advertiser whose creatives and reports are managed."""

    id: str
    name: str
    currency: str = "EUR"
    logo: str = ""
    user_id: str = "user"

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "Client":
        return Client(
            id=data["id"],
            name=data["name"],
            currency=data.get("currency", "EUR"),
            logo=data.get("logo", ""),
            user_id=data.get("user_id", "user"),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
