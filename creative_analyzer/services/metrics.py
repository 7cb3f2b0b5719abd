"""Aggregate metrics over performance records. All ratios are 0 on a zero denominator."""

from dataclasses import dataclass
from datetime import date

from ..config import TOP_CREATIVES_LIMIT
from ..models import MatchedPerformanceRecord, PerformanceRecord
from ..utils import parse_day


@dataclass(frozen=True)
class PerformanceSummary:
    spend: float
    purchases: int
    value: float
    impressions: int
    clicks: int
    roas: float
    cpa: float
    ctr: float               # percent
    cpm: float


@dataclass(frozen=True)
class TopCreative:
    creative: str
    spend: float
    value: float
    roas: float
    description: str | None = None


def _ratio(numerator: float, denominator: float, scale: float = 1.0) -> float:
    return numerator / denominator * scale if denominator > 0 else 0.0


def summarize(records: list[PerformanceRecord]) -> PerformanceSummary:
    spend = sum(r.spend for r in records)
    purchases = sum(r.purchases for r in records)
    value = sum(r.purchase_value for r in records)
    impressions = sum(r.impressions for r in records)
    clicks = sum(r.link_clicks for r in records)
    return PerformanceSummary(
        spend=spend,
        purchases=purchases,
        value=value,
        impressions=impressions,
        clicks=clicks,
        roas=_ratio(value, spend),
        cpa=_ratio(spend, purchases),
        ctr=_ratio(clicks, impressions, 100),
        cpm=_ratio(spend, impressions, 1000),
    )


def filter_by_date(
    records: list[MatchedPerformanceRecord], start: date, end: date
) -> list[MatchedPerformanceRecord]:
    """Records whose day falls within [start, end]. Rows without a readable day are dropped."""
    kept = []
    for m in records:
        day = parse_day(m.record.day)
        if day is not None and start <= day <= end:
            kept.append(m)
    return kept


def top_creatives(
    records: list[MatchedPerformanceRecord], limit: int = TOP_CREATIVES_LIMIT
) -> list[TopCreative]:
    """Group by creative identifier, rank groups by ROAS (highest first)."""
    groups: dict[str, dict] = {}
    for m in records:
        key = m.record.creative or ""
        group = groups.setdefault(key, {"spend": 0.0, "value": 0.0, "description": None})
        group["spend"] += m.record.spend
        group["value"] += m.record.purchase_value
        # the last row of the group decides the description
        group["description"] = m.creative_description

    ranked = [
        TopCreative(
            creative=key,
            spend=g["spend"],
            value=g["value"],
            roas=_ratio(g["value"], g["spend"]),
            description=g["description"],
        )
        for key, g in groups.items()
    ]
    return sorted(ranked, key=lambda t: t.roas, reverse=True)[:limit]
