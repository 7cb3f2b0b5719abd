"""Creative model - an uploaded image or video."""

from dataclasses import dataclass

from ..config import SQUARE_RATIO_THRESHOLD

SQUARE_LIKE = "SQUARE_LIKE"
VERTICAL = "VERTICAL"
FORMAT_GROUPS = (SQUARE_LIKE, VERTICAL)


def classify_aspect(width: int, height: int) -> str:
    """Return "square" or "vertical" for the given pixel dimensions."""
    if height <= 0:
        return "square"
    return "square" if width / height > SQUARE_RATIO_THRESHOLD else "vertical"


@dataclass
class Creative:
    """An uploaded creative. Held in memory only; never persisted."""

    data: bytes
    filename: str
    mime_type: str
    width: int
    height: int
    hash: str

    @property
    def kind(self) -> str:
        """ "image" or "video" """
        return "image" if self.mime_type.startswith("image/") else "video"

    @property
    def format(self) -> str:
        return classify_aspect(self.width, self.height)

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass
class CreativeSet:
    """At most one creative per aspect format."""

    square: Creative | None = None
    vertical: Creative | None = None

    @staticmethod
    def of(creative: Creative) -> "CreativeSet":
        """Build a set holding a single creative in its own slot."""
        if creative.format == "square":
            return CreativeSet(square=creative)
        return CreativeSet(vertical=creative)

    def for_format_group(self, format_group: str) -> Creative | None:
        """Creative to analyse for a format group, falling back to the other format."""
        if format_group == SQUARE_LIKE:
            return self.square or self.vertical
        return self.vertical or self.square
