"""Test doubles and builders for reports and creatives."""

from io import BytesIO

from openpyxl import Workbook
from PIL import Image


HOUR_MS = 60 * 60 * 1000


class FakeClock:
    def __init__(self, now: int = 1_700_000_000_000):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int):
        self.now += ms


class FakeGemini:
    """Stands in for GeminiClient; returns a canned answer or raises."""

    def __init__(self, response=None, error: Exception | None = None, text: str = "They all show the product in use."):
        self.response = response if response is not None else analysis_payload()
        self.error = error
        self.text = text
        self.calls = []

    def generate_json(self, prompt, media, mime_type, schema):
        self.calls.append({"prompt": prompt, "media": media, "mime_type": mime_type})
        if self.error:
            raise self.error
        return self.response

    def generate_text(self, system_prompt, prompt):
        self.calls.append({"system_prompt": system_prompt, "prompt": prompt})
        if self.error:
            raise self.error
        return self.text


def analysis_payload(headline: str = "Strong offer, fix the Stories safe zone", description: str = "A red sneaker on a white background") -> dict:
    return {
        "creativeDescription": description,
        "effectivenessScore": 72,
        "effectivenessJustification": "The offer is clear.",
        "clarityScore": 80,
        "clarityJustification": "One product, one message.",
        "textToImageRatio": 12,
        "textToImageRatioJustification": "Only the logo and CTA.",
        "funnelStage": "BOFU",
        "funnelStageJustification": "Direct discount.",
        "recommendations": [{"headline": "Bigger CTA", "points": ["Increase contrast"]}],
        "advantagePlusAnalysis": [
            {"enhancement": "Music", "applicable": "ACTIVATE", "justification": "Adds energy."}
        ],
        "placementSummaries": [{"placementId": "IG_FEED", "summary": ["No issues."]}],
        "overallConclusion": {
            "headline": headline,
            "checklist": [{"severity": "POSITIVE", "text": "Logo visible"}],
        },
    }


def png_bytes(width: int, height: int, color=(255, 0, 0)) -> bytes:
    buf = BytesIO()
    Image.new("RGB", (width, height), color).save(buf, format="PNG")
    return buf.getvalue()


def xlsx_bytes(rows: list[dict], headers: list[str] | None = None) -> bytes:
    """Build a one-sheet workbook with a header row."""
    headers = headers or list(dict.fromkeys(k for row in rows for k in row))
    wb = Workbook()
    ws = wb.active
    ws.append(headers)
    for row in rows:
        ws.append([row.get(h) for h in headers])
    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()


def report_row(campaign="Campaign1", ad_set="Set1", ad="Ad1", day="2024-01-01", spend=10, **extra) -> dict:
    row = {
        "Nombre de la campaña": campaign,
        "Nombre del conjunto de anuncios": ad_set,
        "Nombre del anuncio": ad,
        "Día": day,
        "Imagen, video y presentación": extra.pop("creative", "ad1.mp4"),
        "Importe gastado (EUR)": spend,
        "Impresiones": extra.pop("impressions", 1000),
        "Clics en el enlace": extra.pop("clicks", 20),
        "Compras": extra.pop("purchases", 2),
        "Valor de conversión de compras": extra.pop("value", 40),
    }
    row.update(extra)
    return row


