from datetime import datetime

import pytest

from creative_analyzer.models import AnalysisHistoryEntry, PerformanceRecord
from creative_analyzer.services.hashing import content_hash
from creative_analyzer.services.performance import (
    AlreadyProcessedError,
    find_history_match,
    merge_rows,
    reconcile,
)
from creative_analyzer.services.report import EmptyReportError, parse_report
from creative_analyzer.storage import keys

from .helpers import report_row, xlsx_bytes


def _history(client_id="c1", filename="ad1.mp4", description="Sneaker close-up"):
    return AnalysisHistoryEntry(
        client_id=client_id,
        filename=filename,
        hash="h",
        size=1,
        date="2024-01-01T00:00:00.000Z",
        description=description,
    )


def _record(creative="ad1.mp4", client_id="c1", day="2024-01-01"):
    return PerformanceRecord.from_row(report_row(creative=creative, day=day), client_id, "f1")


# ===== Parsing =====

def test_parse_report_reads_header_and_skips_blank_cells():
    rows = parse_report(xlsx_bytes([report_row(), report_row(ad="Ad2", Objetivo=None)]))

    assert len(rows) == 2
    assert rows[0]["Nombre del anuncio"] == "Ad1"
    assert rows[0]["Importe gastado (EUR)"] == 10
    assert "Objetivo" not in rows[1]


def test_parse_report_header_only_is_empty():
    with pytest.raises(EmptyReportError):
        parse_report(xlsx_bytes([], headers=["Nombre de la campaña", "Día"]))


def test_parse_report_unreadable_file_is_empty():
    with pytest.raises(EmptyReportError):
        parse_report(b"this is not a workbook")


def test_record_coerces_numbers_with_zero_default():
    row = report_row(spend="12,5", impressions="n/a", clicks=None, purchases=3.0)
    record = PerformanceRecord.from_row(row, "c1", "f1")

    assert record.spend == 12.5
    assert record.impressions == 0
    assert record.link_clicks == 0
    assert record.purchases == 3
    assert record.reach == 0
    assert record.unique_id == "Campaign1_Set1_Ad1_2024-01-01"


@pytest.mark.parametrize("cell", ["NaN", "nan", "inf", "-Infinity"])
def test_record_non_finite_numbers_become_zero(cell):
    record = PerformanceRecord.from_row(report_row(spend=cell, impressions=cell, value=cell), "c1", "f1")

    assert (record.spend, record.impressions, record.purchase_value) == (0, 0, 0)


@pytest.mark.parametrize("cell, expected", [
    ("1234.56", 1234.56),
    ("1234,56", 1234.56),
    ("1.234,56", 1234.56),
    ("1,234.56", 1234.56),
    (" 7 ", 7.0),
])
def test_record_accepts_decimal_and_thousands_separators(cell, expected):
    record = PerformanceRecord.from_row(report_row(spend=cell), "c1", "f1")
    assert record.spend == pytest.approx(expected)


def test_record_accepts_english_headers_and_datetime_days():
    row = {
        "Campaign name": "Spring",
        "Ad set name": "Broad",
        "Ad name": "Video A",
        "Day": datetime(2024, 3, 5),
        "Amount spent (EUR)": 20,
        "Purchases conversion value": 60,
    }
    record = PerformanceRecord.from_row(row, "c1", "f1")

    assert record.day == "2024-03-05"
    assert record.unique_id == "Spring_Broad_Video A_2024-03-05"
    assert record.spend == 20.0
    assert record.purchase_value == 60.0


# ===== Merge =====

def test_merge_rows_is_idempotent():
    rows = [report_row(ad="Ad1"), report_row(ad="Ad2")]
    added, duplicates = merge_rows([], rows, "c1", "f1")
    assert (len(added), duplicates) == (2, 0)

    again, duplicates = merge_rows(added, rows, "c1", "f2")
    assert again == []
    assert duplicates == 2


def test_merge_rows_first_write_wins_within_batch():
    rows = [report_row(spend=10), report_row(spend=99), report_row(ad="Ad2")]
    added, duplicates = merge_rows([], rows, "c1", "f1")

    assert [r.ad_name for r in added] == ["Ad1", "Ad2"]
    assert added[0].spend == 10
    assert duplicates == 1


def test_report_reupload_counts_all_rows_as_duplicates():
    rows = [report_row(day=f"2024-01-0{i}") for i in range(1, 4)]
    first, _ = merge_rows([], rows, "c1", "f1")

    added, duplicates = merge_rows(first, rows, "c1", "f1")
    assert added == []
    assert duplicates == 3


# ===== Service =====

def test_ingest_report_persists_rows_and_hash(performance):
    data = xlsx_bytes([report_row(ad="Ad1"), report_row(ad="Ad2")])
    result = performance.ingest_report("c1", data)

    assert result.records_added == 2
    assert result.duplicates == 0
    assert result.file_hash == content_hash(data)
    assert [r.ad_name for r in performance.client_records("c1")] == ["Ad1", "Ad2"]
    assert performance.processed_hashes("c1") == [result.file_hash]
    assert performance.client_records("c2") == []


def test_ingest_same_file_twice_is_rejected(performance):
    data = xlsx_bytes([report_row()])
    performance.ingest_report("c1", data)

    with pytest.raises(AlreadyProcessedError):
        performance.ingest_report("c1", data)

    # another client may ingest the same file
    assert performance.ingest_report("c2", data).records_added == 1


def test_overlapping_report_only_adds_new_rows(performance):
    performance.ingest_report("c1", xlsx_bytes([report_row(ad="Ad1")]))
    result = performance.ingest_report("c1", xlsx_bytes([report_row(ad="Ad1"), report_row(ad="Ad2")]))

    assert result.records_added == 1
    assert result.duplicates == 1
    assert len(performance.client_records("c1")) == 2


def test_report_with_only_known_rows_is_not_marked_processed(performance):
    performance.ingest_report("c1", xlsx_bytes([report_row(ad="Ad1")]))
    repeat = xlsx_bytes([report_row(ad="Ad1", spend=99)])

    result = performance.ingest_report("c1", repeat)

    assert result.records_added == 0
    assert result.duplicates == 1
    assert len(performance.processed_hashes("c1")) == 1


def test_undo_restores_store_exactly(performance, store):
    performance.ingest_report("c1", xlsx_bytes([report_row(ad="Ad1")]))
    before = (store.get_raw(keys.PERFORMANCE_DATA), store.get_raw(keys.PROCESSED_REPORT_HASHES))

    result = performance.ingest_report("c1", xlsx_bytes([report_row(ad="Ad2"), report_row(ad="Ad3")]))
    remaining = performance.undo_last_upload("c1", result.file_hash)

    assert [r.ad_name for r in remaining] == ["Ad1"]
    assert (store.get_raw(keys.PERFORMANCE_DATA), store.get_raw(keys.PROCESSED_REPORT_HASHES)) == before


def test_undo_of_first_upload_leaves_no_client_data(performance, store):
    performance.ingest_report("c2", xlsx_bytes([report_row()]))
    before = (store.get_raw(keys.PERFORMANCE_DATA), store.get_raw(keys.PROCESSED_REPORT_HASHES))

    result = performance.ingest_report("c1", xlsx_bytes([report_row()]))
    performance.undo_last_upload("c1", result.file_hash)

    assert (store.get_raw(keys.PERFORMANCE_DATA), store.get_raw(keys.PROCESSED_REPORT_HASHES)) == before


def test_clear_client_data_keeps_other_clients(performance):
    data = xlsx_bytes([report_row()])
    performance.ingest_report("c1", data)
    performance.ingest_report("c2", data)

    performance.clear_client_data("c1")

    assert performance.client_records("c1") == []
    assert performance.processed_hashes("c1") == []
    assert len(performance.client_records("c2")) == 1
    # the file may be ingested again after clearing
    assert performance.ingest_report("c1", data).records_added == 1


def test_corrupt_performance_data_reads_as_empty(performance, store):
    store.set_raw(keys.PERFORMANCE_DATA, "[[[")
    assert performance.client_records("c1") == []


@pytest.mark.parametrize("stored", [
    {"c1": [1, 2]},
    {"c1": ["not a record"]},
    {"c1": [{"campaign_name": "missing ids"}]},
    {"c1": 5},
])
def test_badly_shaped_performance_data_reads_as_empty(performance, store, stored):
    store.put(keys.PERFORMANCE_DATA, stored)

    assert performance.client_records("c1") == []
    assert performance.matched_records("c1") == []
    assert performance.ingest_report("c1", xlsx_bytes([report_row()])).records_added == 1


def test_badly_shaped_processed_hashes_read_as_empty(performance, store):
    store.put(keys.PROCESSED_REPORT_HASHES, {"c1": "abc"})

    assert performance.processed_hashes("c1") == []
    performance.dedup_file("abc", "c1")


# ===== Reconciliation =====

def test_match_by_filename_substring():
    match = find_history_match(_record(creative="123_ad1.mp4_v2"), [_history()])
    assert match is not None
    assert match.description == "Sneaker close-up"


def test_match_takes_first_entry_in_history_order():
    history = [_history(filename="ad1", description="first"), _history(filename="ad1.mp4", description="second")]
    assert find_history_match(_record(), history).description == "first"


def test_match_requires_same_client():
    assert find_history_match(_record(client_id="c2"), [_history(client_id="c1")]) is None


def test_empty_filename_or_creative_never_matches():
    assert find_history_match(_record(), [_history(filename="")]) is None
    assert find_history_match(_record(creative=None), [_history()]) is None


def test_reconcile_keeps_order_and_flags():
    records = [_record(creative="ad1.mp4"), _record(creative="other.jpg")]
    matched = reconcile(records, [_history()])

    assert [m.is_matched for m in matched] == [True, False]
    assert matched[0].creative_description == "Sneaker close-up"
    assert matched[1].creative_description is None
    assert [m.record for m in matched] == records


def test_matched_records_newest_day_first(performance, cache):
    cache.record_analysis(_history())
    performance.ingest_report("c1", xlsx_bytes([
        report_row(day="2024-01-01"),
        report_row(day="2024-01-03"),
        report_row(day="2024-01-02", creative="other.jpg"),
    ]))

    matched = performance.matched_records("c1")

    assert [m.record.day for m in matched] == ["2024-01-03", "2024-01-02", "2024-01-01"]
    assert [m.is_matched for m in matched] == [True, False, True]


def test_client_summaries(performance, cache, clients):
    acme = clients.create_client("Acme")
    empty = clients.create_client("Empty")
    cache.record_analysis(_history(client_id=acme.id))
    performance.ingest_report(acme.id, xlsx_bytes([
        report_row(ad="Ad1", spend=10, value=40, purchases=2),
        report_row(ad="Ad2", spend=30, value=20, purchases=1, creative="x.jpg"),
    ]))

    by_id = {s.client.id: s for s in performance.client_summaries(clients.list_clients())}

    assert by_id[acme.id].total_ads == 2
    assert by_id[acme.id].matched_count == 1
    assert by_id[acme.id].summary.spend == 40
    assert by_id[acme.id].summary.roas == pytest.approx(1.5)
    assert by_id[empty.id].total_ads == 0
    assert by_id[empty.id].summary.roas == 0
