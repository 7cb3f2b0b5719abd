"""Meta Ads placements and their format requirements."""

from dataclasses import dataclass, field

from .creative import SQUARE_LIKE, VERTICAL


@dataclass(frozen=True)
class SafeZone:
    top: str
    bottom: str
    left: str | None = None
    right: str | None = None


@dataclass(frozen=True)
class Placement:
    """A Meta surface a creative can be delivered to."""

    id: str
    platform: str                # "Facebook", "Instagram", "Messenger", "Audience Network"
    name: str
    ui_type: str                 # "FEED", "STORIES", "REELS", "MARKETPLACE", "MESSENGER_INBOX", "GENERIC"
    group: str                   # format group
    aspect_ratios: list[str] = field(default_factory=list)
    recommended_resolution: str = ""
    safe_zone: SafeZone = SafeZone(top="0%", bottom="0%")


_FEED_ZONE = SafeZone(top="0%", bottom="0%")
_STORIES_ZONE = SafeZone(top="14%", bottom="20%")
_REELS_ZONE = SafeZone(top="14%", bottom="35%", right="6%")

PLACEMENTS: list[Placement] = [
    Placement("FB_FEED", "Facebook", "Facebook Feed", "FEED", SQUARE_LIKE, ["1:1", "4:5"], "1440x1800", _FEED_ZONE),
    Placement("FB_VIDEO_FEED", "Facebook", "Facebook Video Feeds", "FEED", SQUARE_LIKE, ["1:1", "4:5"], "1440x1800", _FEED_ZONE),
    Placement("FB_MARKETPLACE", "Facebook", "Facebook Marketplace", "MARKETPLACE", SQUARE_LIKE, ["1:1"], "1440x1440", _FEED_ZONE),
    Placement("IG_FEED", "Instagram", "Instagram Feed", "FEED", SQUARE_LIKE, ["1:1", "4:5"], "1440x1800", _FEED_ZONE),
    Placement("IG_EXPLORE", "Instagram", "Instagram Explore", "FEED", SQUARE_LIKE, ["1:1", "4:5"], "1440x1800", _FEED_ZONE),
    Placement("MESSENGER_INBOX", "Messenger", "Messenger Inbox", "MESSENGER_INBOX", SQUARE_LIKE, ["1:1"], "1440x1440", _FEED_ZONE),
    Placement("AUDIENCE_NETWORK", "Audience Network", "Audience Network Native, Banner and Interstitial", "GENERIC", SQUARE_LIKE, ["1:1", "9:16"], "1440x1440", _FEED_ZONE),
    Placement("FB_STORIES", "Facebook", "Facebook Stories", "STORIES", VERTICAL, ["9:16"], "1440x2560", _STORIES_ZONE),
    Placement("FB_REELS", "Facebook", "Facebook Reels", "REELS", VERTICAL, ["9:16"], "1440x2560", _REELS_ZONE),
    Placement("IG_STORIES", "Instagram", "Instagram Stories", "STORIES", VERTICAL, ["9:16"], "1440x2560", _STORIES_ZONE),
    Placement("IG_REELS", "Instagram", "Instagram Reels", "REELS", VERTICAL, ["9:16"], "1440x2560", _REELS_ZONE),
    Placement("MESSENGER_STORIES", "Messenger", "Messenger Stories", "STORIES", VERTICAL, ["9:16"], "1440x2560", _STORIES_ZONE),
]


def get_placements_for_group(format_group: str) -> list[Placement]:
    """Placements belonging to a format group, in catalogue order."""
    return [p for p in PLACEMENTS if p.group == format_group]
