"""Analysis result returned by the remote analysis call."""

from dataclasses import dataclass, field
from typing import Any

# Every error result carries this marker in its headline
ERROR_MARKER = "error"


@dataclass(frozen=True)
class RecommendationItem:
    headline: str
    points: list[str]


@dataclass(frozen=True)
class AdvantagePlusRecommendation:
    enhancement: str
    applicable: str          # "ACTIVATE" or "CAUTION"
    justification: str


@dataclass(frozen=True)
class PlacementSummary:
    placement_id: str
    summary: list[str]


@dataclass(frozen=True)
class ChecklistItem:
    severity: str            # "CRITICAL", "ACTIONABLE" or "POSITIVE"
    text: str


@dataclass(frozen=True)
class OverallConclusion:
    headline: str
    checklist: list[ChecklistItem] = field(default_factory=list)


@dataclass(frozen=True)
class AnalysisResult:
    """Structured verdict for one creative and format group."""

    creative_description: str
    effectiveness_score: float
    effectiveness_justification: str
    clarity_score: float
    clarity_justification: str
    text_to_image_ratio: float
    text_to_image_ratio_justification: str
    funnel_stage: str        # "TOFU", "MOFU", "BOFU", "Error" or "N/A"
    funnel_stage_justification: str
    recommendations: list[RecommendationItem]
    advantage_plus_analysis: list[AdvantagePlusRecommendation]
    placement_summaries: list[PlacementSummary]
    overall_conclusion: OverallConclusion

    @property
    def is_error(self) -> bool:
        """True for results produced by a failed analysis."""
        return ERROR_MARKER in self.overall_conclusion.headline.lower()

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "AnalysisResult":
        """Build from the camelCase JSON shape returned by the model."""
        conclusion = data.get("overallConclusion") or {}
        return AnalysisResult(
            creative_description=data.get("creativeDescription", ""),
            effectiveness_score=data.get("effectivenessScore", 0),
            effectiveness_justification=data.get("effectivenessJustification", ""),
            clarity_score=data.get("clarityScore", 0),
            clarity_justification=data.get("clarityJustification", ""),
            text_to_image_ratio=data.get("textToImageRatio", 0),
            text_to_image_ratio_justification=data.get("textToImageRatioJustification", ""),
            funnel_stage=data.get("funnelStage", "N/A"),
            funnel_stage_justification=data.get("funnelStageJustification", ""),
            recommendations=[
                RecommendationItem(headline=r.get("headline", ""), points=list(r.get("points", [])))
                for r in data.get("recommendations", [])
            ],
            advantage_plus_analysis=[
                AdvantagePlusRecommendation(
                    enhancement=a.get("enhancement", ""),
                    applicable=a.get("applicable", "CAUTION"),
                    justification=a.get("justification", ""),
                )
                for a in data.get("advantagePlusAnalysis", [])
            ],
            placement_summaries=[
                PlacementSummary(placement_id=str(p.get("placementId", "")), summary=list(p.get("summary", [])))
                for p in data.get("placementSummaries", [])
            ],
            overall_conclusion=OverallConclusion(
                headline=conclusion.get("headline", ""),
                checklist=[
                    ChecklistItem(severity=c.get("severity", "ACTIONABLE"), text=c.get("text", ""))
                    for c in conclusion.get("checklist", [])
                ],
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize back to the camelCase JSON shape."""
        return {
            "creativeDescription": self.creative_description,
            "effectivenessScore": self.effectiveness_score,
            "effectivenessJustification": self.effectiveness_justification,
            "clarityScore": self.clarity_score,
            "clarityJustification": self.clarity_justification,
            "textToImageRatio": self.text_to_image_ratio,
            "textToImageRatioJustification": self.text_to_image_ratio_justification,
            "funnelStage": self.funnel_stage,
            "funnelStageJustification": self.funnel_stage_justification,
            "recommendations": [
                {"headline": r.headline, "points": list(r.points)} for r in self.recommendations
            ],
            "advantagePlusAnalysis": [
                {"enhancement": a.enhancement, "applicable": a.applicable, "justification": a.justification}
                for a in self.advantage_plus_analysis
            ],
            "placementSummaries": [
                {"placementId": p.placement_id, "summary": list(p.summary)} for p in self.placement_summaries
            ],
            "overallConclusion": {
                "headline": self.overall_conclusion.headline,
                "checklist": [
                    {"severity": c.severity, "text": c.text} for c in self.overall_conclusion.checklist
                ],
            },
        }


def error_result(headline: str, message: str, description: str = "Error", funnel_stage: str = "Error") -> AnalysisResult:
    """Well-formed result standing in for a failed analysis."""
    return AnalysisResult(
        creative_description=description,
        effectiveness_score=0,
        effectiveness_justification=description,
        clarity_score=0,
        clarity_justification=description,
        text_to_image_ratio=0,
        text_to_image_ratio_justification=description,
        funnel_stage=funnel_stage,
        funnel_stage_justification=description,
        recommendations=[],
        advantage_plus_analysis=[],
        placement_summaries=[],
        overall_conclusion=OverallConclusion(
            headline=headline,
            checklist=[ChecklistItem(severity="CRITICAL", text=message)],
        ),
    )
