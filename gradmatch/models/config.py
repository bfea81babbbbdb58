"""
Configuration Models

Pydantic models for normalizer, scorer and advisor configuration.
Keyword and synonym tables are tuples on frozen models so they are fixed once
a component is constructed.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from gradmatch.utils.validator import SYSTEM_PARAMS_SCHEMA, SchemaValidator


class NormalizerConfig(BaseModel):
    """Synonym tables, keyword tables and defaults for AI response normalization."""

    model_config = ConfigDict(frozen=True)

    default_match_score: int = Field(default=75, ge=0, le=100)
    default_category: str = Field(default="target")
    default_reason: str = Field(default="Good academic fit")

    unknown_name: str = Field(default="Unknown University", min_length=1)
    unknown_program: str = Field(default="Unknown Program", min_length=1)
    unknown_location: str = Field(default="Unknown Location", min_length=1)

    # Entry-list envelope keys, tried in order (a bare top-level list is
    # accepted between the second and third key)
    entries_keys: tuple[str, ...] = ("universities", "university_matches")
    fallback_entries_key: str = "recommendations"

    name_keys: tuple[str, ...] = ("name", "university_name", "institution")
    program_keys: tuple[str, ...] = ("program", "program_name", "degree")
    location_keys: tuple[str, ...] = ("location", "city_country", "address")
    match_score_keys: tuple[str, ...] = ("match_score", "compatibility", "fit_score")
    category_keys: tuple[str, ...] = ("category", "type", "school_type")
    ranking_keys: tuple[str, ...] = ("ranking", "rank", "university_ranking")
    reason_keys: tuple[str, ...] = ("strengths", "reasons")
    concern_keys: tuple[str, ...] = ("weaknesses", "challenges")
    logo_url_keys: tuple[str, ...] = ("logo_url", "image_url", "logo")
    website_url_keys: tuple[str, ...] = ("website_url", "website", "url")
    deadline_keys: tuple[str, ...] = ("application_deadline", "deadline")
    tuition_keys: tuple[str, ...] = ("tuition_fee", "tuition", "cost")
    requirement_keys: tuple[str, ...] = (
        "gpa_requirement",
        "gre_requirement",
        "toefl_requirement",
        "ielts_requirement",
    )

    reach_keywords: tuple[str, ...] = ("reach", "stretch", "ambitious")
    safety_keywords: tuple[str, ...] = ("safety", "safe", "backup")

    # Ordered (field, keywords) table; first matching row wins
    field_keywords: tuple[tuple[str, tuple[str, ...]], ...] = (
        ("Computer Science", ("computer science", "cs")),
        ("Engineering", ("engineering",)),
        ("Business", ("business", "mba")),
        ("Medicine", ("medicine", "medical")),
        ("Law", ("law",)),
        ("Psychology", ("psychology",)),
        ("Biology", ("biology", "bio")),
        ("Physics", ("physics",)),
        ("Chemistry", ("chemistry",)),
        ("Mathematics", ("mathematics", "math")),
    )
    default_field: str = Field(default="Graduate Studies", min_length=1)

    balanced_confidence: int = Field(default=85, ge=0, le=100)
    unbalanced_confidence: int = Field(default=70, ge=0, le=100)

    @field_validator("reach_keywords", "safety_keywords", "field_keywords")
    @classmethod
    def validate_non_empty(cls, v: tuple) -> tuple:
        """Keyword tables must have at least one row."""
        if not v:
            raise ValueError("Keyword table must not be empty")
        return v

    @field_validator("default_category")
    @classmethod
    def validate_default_category(cls, v: str) -> str:
        """Default category must be one of reach/target/safety."""
        if v not in ("reach", "target", "safety"):
            raise ValueError("default_category must be one of: reach, target, safety")
        return v


class ScoringConfig(BaseModel):
    """Weights for candidate profile match scoring."""

    model_config = ConfigDict(frozen=True)

    base_score: int = Field(default=50)
    bio_weight: int = Field(default=10, ge=0)
    research_interests_weight: int = Field(default=15, ge=0)
    skills_weight: int = Field(default=10, ge=0)
    gpa_weight: int = Field(default=10, ge=0)
    gpa_threshold: float = Field(default=3.5, ge=0.0)
    institution_weight: int = Field(default=5, ge=0)
    jitter_span: int = Field(default=20, ge=0)
    jitter_offset: int = Field(default=10, ge=0)
    min_score: int = Field(default=0)
    max_score: int = Field(default=100)

    @field_validator("max_score")
    @classmethod
    def validate_score_bounds(cls, v: int, info: ValidationInfo) -> int:
        """Validate that min_score < max_score."""
        low = info.data.get("min_score", 0)
        if v <= low:
            raise ValueError(
                f"max_score ({v}) must be greater than min_score ({low})"
            )
        return v


class AdvisorConfig(BaseModel):
    """AI advisor service configuration."""

    model_config = ConfigDict(frozen=True)

    ai_enabled: bool = Field(default=False)
    max_attempts: int = Field(default=3, gt=0, le=10)
    wait_min: float = Field(default=2.0, ge=0.0)
    wait_max: float = Field(default=10.0, ge=0.0)
    university_confidence: int = Field(default=85, ge=0, le=100)
    cv_confidence: int = Field(default=80, ge=0, le=100)
    chat_confidence: int = Field(default=90, ge=0, le=100)

    @field_validator("wait_max")
    @classmethod
    def validate_wait_ordering(cls, v: float, info: ValidationInfo) -> float:
        """Validate that wait_max >= wait_min."""
        low = info.data.get("wait_min", 2.0)
        if v < low:
            raise ValueError(f"wait_max ({v}) must be >= wait_min ({low})")
        return v

    @classmethod
    def from_env(cls, env_file: Path | str | None = None) -> "AdvisorConfig":
        """Build config with ai_enabled taken from GRADMATCH_AI_ENABLED.

        Args:
            env_file: Optional .env file to load first (defaults to ./.env)

        Returns:
            AdvisorConfig with the remaining fields at their defaults
        """
        load_dotenv(env_file)
        enabled = os.getenv("GRADMATCH_AI_ENABLED", "false").strip().lower() == "true"
        return cls(ai_enabled=enabled)


class SystemParams(BaseModel):
    """System parameters configuration model."""

    normalizer: NormalizerConfig = Field(default_factory=NormalizerConfig)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    advisor: AdvisorConfig = Field(default_factory=AdvisorConfig)
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {', '.join(valid_levels)}")
        return v.upper()

    @classmethod
    def load(cls, config_path: Path | str | None = None) -> "SystemParams":
        """Load system parameters from config file.

        Args:
            config_path: Path to system_params.json (defaults to config/system_params.json)

        Returns:
            SystemParams: Validated configuration

        Raises:
            FileNotFoundError: If config file doesn't exist
            ConfigurationError: If the file is not valid JSON or fails
                system_params_schema.json
            ValueError: If config validation fails
        """
        if config_path is None:
            config_path = Path("config/system_params.json")
        else:
            config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}. "
                f"Copy {config_path.stem}.example.json to {config_path.name}"
            )

        config_data = SchemaValidator().validate_file(config_path, SYSTEM_PARAMS_SCHEMA)
        return cls(**config_data)
