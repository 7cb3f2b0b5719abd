"""Winner insights - ask Gemini why the top creatives performed well."""

import logging

from ..clients.gemini import GeminiClient
from .messages import message
from .metrics import TopCreative

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a Meta Ads performance strategist.

You receive descriptions of the best performing creatives of an ad account, ranked by ROAS.
Explain what they have in common and why they likely worked, then suggest concrete next steps
for the next round of creatives. Be brief and specific. Answer in {language_name}.
"""


class InsightsService:
    """Turn the top creatives into a short strategic summary."""

    def __init__(self, gemini: GeminiClient | None):
        self.gemini = gemini

    def generate(self, top: list[TopCreative], language: str = "es") -> str | None:
        """
        Returns the insight text, None when there is nothing to analyse, or a
        localized error string if the call fails.
        """
        described = [t for t in top if t.description]
        if not described:
            return None
        if self.gemini is None:
            return message(language, "insights_error")

        lines = [f"{i}. ROAS {t.roas:.2f} - {t.description}" for i, t in enumerate(described, start=1)]
        print(f"Generating insights for {len(described)} creatives...", flush=True)
        try:
            return self.gemini.generate_text(
                SYSTEM_PROMPT.format(language_name=message(language, "language_name")),
                "Top creatives:\n" + "\n".join(lines),
            )
        except Exception as e:
            logger.warning(f"Failed to generate insights: {e}")
            return message(language, "insights_error")
