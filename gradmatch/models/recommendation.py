"""
Recommendation Data Models

Canonical shapes produced by normalizing AI-model university recommendations
and CV analyses.
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Category = Literal["reach", "target", "safety"]

CATEGORIES: tuple[Category, ...] = ("reach", "target", "safety")


class AdmissionRequirements(BaseModel):
    """Admission requirement thresholds as free text (e.g. "3.5+", "320+")."""

    gpa_requirement: Optional[str] = None
    gre_requirement: Optional[str] = None
    toefl_requirement: Optional[str] = None
    ielts_requirement: Optional[str] = None


class RecommendationEntry(BaseModel):
    """One normalized university/program match.

    Attributes:
        name: University display name (never empty)
        program: Program name (never empty)
        location: Free-text location, "Unknown Location" when absent
        match_score: Compatibility percentage in [0, 100]
        category: reach / target / safety
        ranking: Optional ranking text, passed through
        why_recommended: Reasons for the match, falsy entries removed
        concerns: Possible concerns, falsy entries removed
        admission_requirements: Requirement thresholds
        research_areas: Research areas (only kept when the source gave a list)
        faculty_highlights: Notable faculty (only kept when the source gave a list)
    """

    name: str = Field(..., min_length=1)
    program: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    match_score: int = Field(..., ge=0, le=100)
    category: Category = "target"
    ranking: Optional[str] = None
    why_recommended: list[str] = Field(default_factory=list)
    concerns: list[str] = Field(default_factory=list)
    logo_url: Optional[str] = None
    website_url: Optional[str] = None
    application_deadline: Optional[str] = None
    tuition_fee: Optional[str] = None
    admission_requirements: AdmissionRequirements = Field(
        default_factory=AdmissionRequirements
    )
    research_areas: list[Any] = Field(default_factory=list)
    faculty_highlights: list[Any] = Field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the wire shape, omitting unset optional values."""
        return self.model_dump(exclude_none=True)


class AnalysisSummary(BaseModel):
    """Summary analytics derived from a list of normalized entries."""

    total_matches: int = Field(..., ge=0)
    reach_schools: int = Field(..., ge=0)
    target_schools: int = Field(..., ge=0)
    safety_schools: int = Field(..., ge=0)
    primary_field: str
    confidence_score: int = Field(..., ge=0, le=100)


class RecommendationSet(BaseModel):
    """Parsed AI recommendation payload.

    `analysis` is either the source's own analysis mapping (kept verbatim, even
    when inconsistent with `universities`) or a derived AnalysisSummary dump.
    """

    universities: list[RecommendationEntry] = Field(default_factory=list)
    analysis: dict[str, Any] = Field(default_factory=dict)
    analysis_provided: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the wire shape: {"universities": [...], "analysis": {...}}."""
        return {
            "universities": [entry.to_dict() for entry in self.universities],
            "analysis": dict(self.analysis),
        }


class CVAnalysisResult(BaseModel):
    """Parsed CV analysis; contents are passed through without coercion."""

    model_config = ConfigDict(extra="allow")

    user_profile: Any
    recommendations: Any
    university_matches: Any = Field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return the parsed payload, extra keys included."""
        return self.model_dump(exclude_unset=True)
