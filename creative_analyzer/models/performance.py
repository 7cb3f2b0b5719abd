"""Performance report records."""

import math
from dataclasses import asdict, dataclass, fields
from datetime import date, datetime
from typing import Any


@dataclass(frozen=True)
class Column:
    """A report column: record attribute, export header, accepted aliases and value kind."""
    attr: str
    header: str
    kind: str = "text"                    # "text", "float" or "int"
    aliases: tuple[str, ...] = ()


# Meta Ads Manager export (Spanish headers, English aliases)
COLUMNS: list[Column] = [
    Column("campaign_name", "Nombre de la campaña", aliases=("Campaign name",)),
    Column("ad_set_name", "Nombre del conjunto de anuncios", aliases=("Ad set name",)),
    Column("ad_name", "Nombre del anuncio", aliases=("Ad name",)),
    Column("day", "Día", aliases=("Day",)),
    Column("creative", "Imagen, video y presentación", aliases=("Image, video and slideshow",)),
    Column("spend", "Importe gastado (EUR)", "float", ("Amount spent (EUR)",)),
    Column("campaign_delivery", "Entrega de la campaña", aliases=("Campaign delivery",)),
    Column("ad_set_delivery", "Entrega del conjunto de anuncios", aliases=("Ad set delivery",)),
    Column("ad_delivery", "Entrega del anuncio", aliases=("Ad delivery",)),
    Column("impressions", "Impresiones", "int", ("Impressions",)),
    Column("link_clicks", "Clics en el enlace", "int", ("Link clicks",)),
    Column("cpc", "CPC (Coste por clic)", "float", ("CPC (cost per link click)",)),
    Column("ctr", "CTR (todos)", "float", ("CTR (all)",)),
    Column("reach", "Alcance", "int", ("Reach",)),
    Column("frequency", "Frecuencia", "float", ("Frequency",)),
    Column("purchases", "Compras", "int", ("Purchases",)),
    Column("purchase_value", "Valor de conversión de compras", "float", ("Purchases conversion value",)),
    Column("delivery_status", "Estado de la entrega", aliases=("Delivery status",)),
    Column("delivery_level", "Nivel de la entrega", aliases=("Delivery level",)),
    Column("objective", "Objetivo", aliases=("Objective",)),
    Column("buying_type", "Tipo de compra", aliases=("Buying type",)),
    Column("report_start", "Inicio del informe", aliases=("Reporting starts",)),
    Column("report_end", "Fin del informe", aliases=("Reporting ends",)),
    Column("attention", "Atencion", "int", ("Attention",)),
    Column("interest", "Interes", "int", ("Interest",)),
    Column("desire", "Deseo", "int", ("Desire",)),
]


def _to_text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def _normalize_decimal(text: str) -> str:
    """
    Accept "1234.56", "1234,56", "1,234.56" and "1.234,56". When both
    separators occur the last one is the decimal mark and the other one
    groups thousands.
    """
    if "," in text and "." in text:
        if text.rfind(",") > text.rfind("."):
            return text.replace(".", "").replace(",", ".")
        return text.replace(",", "")
    return text.replace(",", ".")


def _to_float(value: Any) -> float:
    """Coerce to a finite float, 0 on failure (NaN and infinities included)."""
    if isinstance(value, bool):
        return float(value)
    try:
        number = float(_normalize_decimal(str(value).strip()))
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _to_int(value: Any) -> int:
    """Coerce to int (truncating), 0 on failure."""
    return int(_to_float(value))


def _cell(row: dict[str, Any], column: Column) -> Any:
    """Look a column up by header, then by alias."""
    for name in (column.header, *column.aliases):
        if name in row:
            return row[name]
    return None


def composite_key(campaign: Any, ad_set: Any, ad: Any, day: Any) -> str:
    """Natural key of a report row: campaign_adset_ad_day."""
    return "_".join("" if part is None else str(part) for part in (campaign, ad_set, ad, day))


@dataclass(frozen=True)
class PerformanceRecord:
    """One typed row of an ingested report."""

    client_id: str
    unique_id: str
    file_hash: str
    campaign_name: str | None = None
    ad_set_name: str | None = None
    ad_name: str | None = None
    day: str | None = None
    creative: str | None = None            # creative identifier (file name of the asset)
    spend: float = 0.0
    campaign_delivery: str | None = None
    ad_set_delivery: str | None = None
    ad_delivery: str | None = None
    impressions: int = 0
    link_clicks: int = 0
    cpc: float = 0.0
    ctr: float = 0.0
    reach: int = 0
    frequency: float = 0.0
    purchases: int = 0
    purchase_value: float = 0.0
    delivery_status: str | None = None
    delivery_level: str | None = None
    objective: str | None = None
    buying_type: str | None = None
    report_start: str | None = None
    report_end: str | None = None
    attention: int = 0
    interest: int = 0
    desire: int = 0

    @staticmethod
    def row_key(row: dict[str, Any]) -> str:
        """Composite key of a loosely-typed parsed row."""
        by_attr = {c.attr: c for c in COLUMNS}
        return composite_key(*(
            _to_text(_cell(row, by_attr[attr]))
            for attr in ("campaign_name", "ad_set_name", "ad_name", "day")
        ))

    @staticmethod
    def from_row(row: dict[str, Any], client_id: str, file_hash: str) -> "PerformanceRecord":
        """Coerce a parsed spreadsheet row into a strict record."""
        values: dict[str, Any] = {}
        for column in COLUMNS:
            raw = _cell(row, column)
            if column.kind == "float":
                values[column.attr] = _to_float(raw)
            elif column.kind == "int":
                values[column.attr] = _to_int(raw)
            else:
                values[column.attr] = _to_text(raw)
        return PerformanceRecord(
            client_id=client_id,
            unique_id=PerformanceRecord.row_key(row),
            file_hash=file_hash,
            **values,
        )

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "PerformanceRecord":
        known = {f.name for f in fields(PerformanceRecord)}
        return PerformanceRecord(**{k: v for k, v in data.items() if k in known})

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class MatchedPerformanceRecord:
    """A record annotated with its (heuristic) link to an analysed creative."""

    record: PerformanceRecord
    is_matched: bool
    creative_description: str | None = None
