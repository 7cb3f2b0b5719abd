from datetime import date

import pytest

from creative_analyzer.models import MatchedPerformanceRecord, PerformanceRecord
from creative_analyzer.services.metrics import filter_by_date, summarize, top_creatives

from .helpers import report_row


def _matched(creative="ad1.mp4", day="2024-01-01", spend=10, value=40, description=None, **extra):
    record = PerformanceRecord.from_row(
        report_row(ad=f"{creative}-{day}-{spend}", day=day, spend=spend, value=value, creative=creative, **extra),
        "c1",
        "f1",
    )
    return MatchedPerformanceRecord(record=record, is_matched=description is not None, creative_description=description)


def test_summary_of_nothing_is_all_zero():
    summary = summarize([])
    assert summary.spend == 0
    assert (summary.roas, summary.cpa, summary.ctr, summary.cpm) == (0, 0, 0, 0)


def test_summary_zero_denominators_are_zero():
    record = _matched(spend=0, value=0, impressions=0, clicks=0, purchases=0).record
    summary = summarize([record])
    assert (summary.roas, summary.cpa, summary.ctr, summary.cpm) == (0, 0, 0, 0)


def test_summary_ignores_non_numeric_spend():
    records = [_matched(spend="NaN", value=40).record, _matched(spend="inf", value=0, day="2024-01-02").record]
    summary = summarize(records)

    assert (summary.spend, summary.cpa, summary.cpm) == (0, 0, 0)
    assert summary.roas == 0


def test_summary_sums_and_ratios():
    records = [
        _matched(spend=10, value=40, impressions=1000, clicks=20, purchases=2).record,
        _matched(spend=30, value=20, impressions=3000, clicks=20, purchases=2).record,
    ]
    summary = summarize(records)

    assert summary.spend == 40
    assert summary.value == 60
    assert summary.purchases == 4
    assert summary.roas == pytest.approx(1.5)
    assert summary.cpa == pytest.approx(10)
    assert summary.ctr == pytest.approx(1.0)
    assert summary.cpm == pytest.approx(10)


def test_filter_by_date_is_inclusive():
    records = [_matched(day=f"2024-01-0{i}") for i in range(1, 6)] + [_matched(day="not a date")]

    kept = filter_by_date(records, date(2024, 1, 2), date(2024, 1, 4))

    assert [m.record.day for m in kept] == ["2024-01-02", "2024-01-03", "2024-01-04"]


def test_top_creatives_groups_and_ranks_by_roas():
    records = [
        _matched(creative="a.mp4", spend=10, value=10),
        _matched(creative="a.mp4", spend=10, value=50, day="2024-01-02"),
        _matched(creative="b.jpg", spend=10, value=20, description="Blue banner"),
        _matched(creative="c.jpg", spend=0, value=0),
    ]

    top = top_creatives(records)

    assert [t.creative for t in top] == ["a.mp4", "b.jpg", "c.jpg"]
    assert top[0].spend == 20
    assert top[0].roas == pytest.approx(3.0)
    assert top[0].description is None
    assert top[1].description == "Blue banner"
    assert top[2].roas == 0


def test_top_creatives_limit():
    records = [_matched(creative=f"ad{i}.mp4", spend=10, value=i) for i in range(10)]

    top = top_creatives(records)

    assert len(top) == 6
    assert top[0].creative == "ad9.mp4"
    assert len(top_creatives(records, limit=2)) == 2


def test_top_creative_description_comes_from_last_row_of_group():
    records = [
        _matched(creative="a.mp4", description="first"),
        _matched(creative="a.mp4", day="2024-01-02", description="second"),
    ]

    assert top_creatives(records)[0].description == "second"
