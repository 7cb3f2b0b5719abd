"""Prompt and response schema for the creative analysis call."""

from typing import Any

from ..models.placement import get_placements_for_group
from .messages import message

META_ADS_GUIDELINES = """
META ADS PLACEMENT SPECIFICATIONS
- Feeds (Facebook Feed, Instagram Feed, Explore, Video Feeds): 1:1 or 4:5, 1440x1800 recommended.
  Primary text is truncated after ~125 characters. Keep key elements away from the edges.
- Stories (Facebook, Instagram, Messenger): 9:16, 1440x2560. Keep the top 14% (~250px) and the
  bottom 20% (~340px) free of text, logos and CTAs: profile header and reply bar cover them.
- Reels (Facebook, Instagram): 9:16, 1440x2560. Keep the top 14% and the bottom 35% free of key
  elements, and ~6% on the right where the like/comment/share buttons sit.
- Marketplace and Messenger Inbox: 1:1, small thumbnails; the product must read at small size.
- Audience Network: 1:1 or 9:16 depending on the publisher; avoid fine print.
- Text on image: less text performs better; prefer short headlines and a clear CTA.
- Video: captions recommended (most feed videos are watched muted); hook in the first 3 seconds.

META ADVANTAGE+ CREATIVE ENHANCEMENTS
- Visual touch-ups: automatic cropping and expansion to fit more placements.
- Text improvements: swaps primary text, headline and description between positions.
- Brightness and contrast: adjusts image brightness and contrast.
- Music: adds music to images and videos in Reels and Stories.
- Image animation: animates still images (subtle motion).
- 3D animation: turns images into a 3D-like animation.
- Relevant comments: shows relevant comments under the ad.
- Add overlays: adds text overlays (e.g. product name, price) drawn from the catalogue.
- Image templates: adds frames/templates around the image in feeds.
- Enhance CTA: displays key phrases of the ad text next to the CTA button.
"""

PROMPT_TEMPLATE = """
**Master Instruction:**
You act as an art director and marketing strategist for Meta Ads with an extremely critical, friendly
and detail-oriented eye. Your task is a HOLISTIC analysis of the provided creative for the format
group '{format_group}'. Your analysis must be specific, actionable and grounded in the creative and the
specifications. ALL the text of your answer must be exclusively in {language_name}.

**Additional Context:**
{context}

**Step 0: Understand the Creative's Objective (FUNDAMENTAL):**
Before ANYTHING else, understand what the creative is selling or which key offer it communicates.
Identify the product, service or main message. All scores, justifications and recommendations must
be grounded in that objective.

**Placements to Consider for '{format_group}':**
{placement_list}

**MANDATORY ANALYSIS TASKS (based on Step 0):**

**1. DETAILED CREATIVE DESCRIPTION:**
- **creativeDescription**: Describe the image or video precisely: products, people, main text,
  setting, dominant colours. It will be used as context for future analyses. Be specific.

**2. GLOBAL STRATEGIC ANALYSIS:**
- **effectivenessJustification**: Be consistent. If the score is LOW (<50), explain why the creative
  fails to communicate its objective. If HIGH (>=50), highlight how it succeeds.
- **textToImageRatio**: Ignore generated or burnt-in subtitles that transcribe the audio. Only count
  graphic overlay text, logos or calls to action that are part of the design.
- **recommendations**: General recommendations to improve how the creative communicates its objective.

**3. SAFE ZONE ANALYSIS (THE MOST IMPORTANT TASK):**
- **placementSummaries**: TOP PRIORITY. Analyse the creative visually, frame by frame for videos.
  Detect whether any element (text, logos, disclaimers, product) is covered, cut or unreadable by the
  Meta interface (buttons, profile, etc.) AT ANY MOMENT. Classify as CRITICAL if it affects the CTA,
  the offer or the brand. If there are no problems, say so positively.

**4. ADVANTAGE+ ENHANCEMENTS ANALYSIS:**
- **advantagePlusAnalysis**: Using the "Meta Advantage+ creative enhancements" document below, analyse
  EACH listed enhancement. Say whether to 'ACTIVATE' it or use it with 'CAUTION', and justify it by how
  it would strengthen (or hurt) the creative's objective.

**5. FINAL CONCLUSION:**
- **overallConclusion**: An object with a concise 'headline' and a prioritised, actionable 'checklist'
  focused on the creative's objective.

**Mandatory Output Format (JSON ONLY):**
Answer with a single JSON object. ALL text must be in {language_name}.

--- SPECIFICATIONS DOCUMENT (META ADS AND ADVANTAGE+) ---
{guidelines}
--- END OF DOCUMENT ---
"""


def build_analysis_prompt(format_group: str, language: str, context: str) -> str:
    """Render the full analysis prompt for a format group."""
    placement_list = "\n".join(
        f"- {p.name} (ID: {p.id})" for p in get_placements_for_group(format_group)
    )
    return PROMPT_TEMPLATE.format(
        format_group=format_group,
        language_name=message(language, "language_name"),
        context=context,
        placement_list=placement_list,
        guidelines=META_ADS_GUIDELINES.strip(),
    ).strip()


def _string_list() -> dict[str, Any]:
    return {"type": "ARRAY", "items": {"type": "STRING"}}


ANALYSIS_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "creativeDescription": {
            "type": "STRING",
            "description": (
                "A detailed description of the creative's visual content: products, people, text, "
                "setting and colours. Used as context for future analyses."
            ),
        },
        "effectivenessScore": {"type": "NUMBER"},
        "effectivenessJustification": {"type": "STRING"},
        "clarityScore": {"type": "NUMBER"},
        "clarityJustification": {"type": "STRING"},
        "textToImageRatio": {"type": "NUMBER"},
        "textToImageRatioJustification": {"type": "STRING"},
        "funnelStage": {"type": "STRING", "enum": ["TOFU", "MOFU", "BOFU"]},
        "funnelStageJustification": {"type": "STRING"},
        "recommendations": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "headline": {"type": "STRING"},
                    "points": _string_list(),
                },
                "required": ["headline", "points"],
            },
        },
        "advantagePlusAnalysis": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "enhancement": {"type": "STRING"},
                    "applicable": {"type": "STRING", "enum": ["ACTIVATE", "CAUTION"]},
                    "justification": {"type": "STRING"},
                },
                "required": ["enhancement", "applicable", "justification"],
            },
        },
        "placementSummaries": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "placementId": {"type": "STRING"},
                    "summary": _string_list(),
                },
                "required": ["placementId", "summary"],
            },
        },
        "overallConclusion": {
            "type": "OBJECT",
            "properties": {
                "headline": {"type": "STRING"},
                "checklist": {
                    "type": "ARRAY",
                    "items": {
                        "type": "OBJECT",
                        "properties": {
                            "severity": {"type": "STRING", "enum": ["CRITICAL", "ACTIONABLE", "POSITIVE"]},
                            "text": {"type": "STRING"},
                        },
                        "required": ["severity", "text"],
                    },
                },
            },
            "required": ["headline", "checklist"],
        },
    },
    "required": [
        "creativeDescription",
        "effectivenessScore", "effectivenessJustification",
        "clarityScore", "clarityJustification",
        "textToImageRatio", "textToImageRatioJustification",
        "funnelStage", "funnelStageJustification",
        "recommendations", "advantagePlusAnalysis", "placementSummaries", "overallConclusion",
    ],
}
