"""Candidate profile data models used for match scoring and student discovery."""

from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field, field_validator


class CandidateProfile(BaseModel):
    """Subset of an applicant/mentee record consumed by match scoring.

    Attributes:
        user_id: Store identifier of the applicant (optional)
        display_name: Name shown in discovery lists
        bio: Free-text bio
        research_interests: Research interest keywords
        skills: Skill keywords
        gpa: Grade point average, None when missing or unparseable
        current_institution: Current school or employer
        field_of_study: Declared field of study
        academic_level: Academic level (e.g. "undergraduate", "masters")
        location: Free-text location
    """

    user_id: Optional[str] = None
    display_name: Optional[str] = None
    bio: Optional[str] = None
    research_interests: list[str] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    gpa: Optional[float] = None
    current_institution: Optional[str] = None
    field_of_study: Optional[str] = None
    academic_level: Optional[str] = None
    location: Optional[str] = None

    @field_validator("research_interests", "skills", mode="before")
    @classmethod
    def coerce_keyword_list(cls, v: Any) -> list[str]:
        """Treat null as empty and drop falsy items."""
        if v is None:
            return []
        if isinstance(v, str):
            return [v] if v.strip() else []
        if isinstance(v, (list, tuple)):
            return [str(item) for item in v if item]
        return []

    @field_validator("gpa", mode="before")
    @classmethod
    def coerce_gpa(cls, v: Any) -> Optional[float]:
        """Unparseable GPA values become None instead of failing validation."""
        if v is None or isinstance(v, bool):
            return None
        try:
            return float(v)
        except (TypeError, ValueError):
            return None

    @field_validator(
        "user_id",
        "display_name",
        "bio",
        "current_institution",
        "field_of_study",
        "academic_level",
        "location",
        mode="before",
    )
    @classmethod
    def coerce_text(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        return str(v)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "CandidateProfile":
        """Build a profile from a store row, ignoring unknown keys.

        Args:
            record: Arbitrary key/value profile row

        Returns:
            CandidateProfile with known fields populated
        """
        known = {key: record[key] for key in cls.model_fields if key in record}
        return cls(**known)


class ScoredCandidate(BaseModel):
    """Candidate profile paired with a match score computed once at load."""

    profile: CandidateProfile
    match_score: int = Field(..., ge=0, le=100)
    connection_status: str = "none"
