"""Tests for configuration models."""

import json
import os
from pathlib import Path

import pytest
from pydantic import ValidationError

from gradmatch.models.config import (
    AdvisorConfig,
    NormalizerConfig,
    ScoringConfig,
    SystemParams,
)
from gradmatch.utils.validator import ConfigurationError

EXAMPLE_CONFIG = Path(__file__).resolve().parents[2] / "config" / "system_params.example.json"


class TestNormalizerConfig:
    """Test cases for NormalizerConfig."""

    def test_defaults(self):
        """Test documented defaults."""
        # Act
        config = NormalizerConfig()

        # Assert
        assert config.default_match_score == 75
        assert config.default_category == "target"
        assert config.default_reason == "Good academic fit"
        assert config.entries_keys == ("universities", "university_matches")
        assert config.fallback_entries_key == "recommendations"
        assert config.field_keywords[0] == ("Computer Science", ("computer science", "cs"))
        assert config.default_field == "Graduate Studies"

    def test_frozen(self):
        """Test that config cannot be mutated after construction."""
        config = NormalizerConfig()
        with pytest.raises(ValidationError):
            config.default_match_score = 10

    def test_invalid_default_category_rejected(self):
        """Test that default_category must be a known category."""
        with pytest.raises(ValidationError, match="default_category"):
            NormalizerConfig(default_category="likely")

    def test_empty_keyword_table_rejected(self):
        """Test that keyword tables must not be empty."""
        with pytest.raises(ValidationError, match="must not be empty"):
            NormalizerConfig(reach_keywords=())

    def test_default_score_range(self):
        """Test that default_match_score must be within [0, 100]."""
        with pytest.raises(ValidationError):
            NormalizerConfig(default_match_score=101)

    def test_field_keywords_from_json_lists(self):
        """Test that JSON-style nested lists are accepted for the field table."""
        # Act
        config = NormalizerConfig(field_keywords=[["Art", ["art", "design"]]])

        # Assert
        assert config.field_keywords == (("Art", ("art", "design")),)


class TestScoringConfig:
    """Test cases for ScoringConfig."""

    def test_defaults(self):
        """Test default weights."""
        # Act
        config = ScoringConfig()

        # Assert
        assert config.base_score == 50
        assert (
            config.bio_weight
            + config.research_interests_weight
            + config.skills_weight
            + config.gpa_weight
            + config.institution_weight
        ) == 50
        assert config.gpa_threshold == 3.5
        assert (config.jitter_span, config.jitter_offset) == (20, 10)

    def test_bounds_must_be_ordered(self):
        """Test that max_score must exceed min_score."""
        with pytest.raises(ValidationError, match="must be greater than"):
            ScoringConfig(min_score=50, max_score=50)

    def test_negative_weight_rejected(self):
        """Test that weights cannot be negative."""
        with pytest.raises(ValidationError):
            ScoringConfig(bio_weight=-1)


class TestAdvisorConfig:
    """Test cases for AdvisorConfig."""

    def test_defaults(self):
        """Test that AI is disabled by default."""
        # Act
        config = AdvisorConfig()

        # Assert
        assert config.ai_enabled is False
        assert config.max_attempts == 3
        assert (config.university_confidence, config.cv_confidence, config.chat_confidence) == (
            85,
            80,
            90,
        )

    def test_wait_ordering(self):
        """Test that wait_max must not be below wait_min."""
        with pytest.raises(ValidationError, match="wait_max"):
            AdvisorConfig(wait_min=5, wait_max=1)

    @pytest.mark.parametrize("attempts", [0, 11])
    def test_max_attempts_range(self, attempts):
        """Test max_attempts bounds."""
        with pytest.raises(ValidationError):
            AdvisorConfig(max_attempts=attempts)

    def test_from_env_enabled(self, monkeypatch, tmp_path):
        """Test that GRADMATCH_AI_ENABLED=true enables AI calls."""
        # Arrange
        monkeypatch.setenv("GRADMATCH_AI_ENABLED", "TRUE")

        # Act
        config = AdvisorConfig.from_env(tmp_path / "missing.env")

        # Assert
        assert config.ai_enabled is True

    def test_from_env_disabled_by_default(self, monkeypatch, tmp_path):
        """Test that a missing variable leaves AI disabled."""
        # Arrange
        monkeypatch.delenv("GRADMATCH_AI_ENABLED", raising=False)

        # Act
        config = AdvisorConfig.from_env(tmp_path / "missing.env")

        # Assert
        assert config.ai_enabled is False

    def test_from_env_reads_dotenv_file(self, mocker, tmp_path):
        """Test that the flag can come from a .env file."""
        # Arrange
        mocker.patch.dict(os.environ)
        os.environ.pop("GRADMATCH_AI_ENABLED", None)
        env_file = tmp_path / ".env"
        env_file.write_text("GRADMATCH_AI_ENABLED=true\n", encoding="utf-8")

        # Act
        config = AdvisorConfig.from_env(env_file)

        # Assert
        assert config.ai_enabled is True


class TestSystemParams:
    """Test cases for SystemParams."""

    def test_load_from_file(self, tmp_path):
        """Test loading nested configuration from JSON."""
        # Arrange
        config_path = tmp_path / "system_params.json"
        config_path.write_text(
            json.dumps(
                {
                    "normalizer": {"default_match_score": 60},
                    "scoring": {"gpa_threshold": 3.0},
                    "advisor": {"ai_enabled": True},
                    "log_level": "DEBUG",
                }
            ),
            encoding="utf-8",
        )

        # Act
        params = SystemParams.load(config_path)

        # Assert
        assert params.normalizer.default_match_score == 60
        assert params.scoring.gpa_threshold == 3.0
        assert params.advisor.ai_enabled is True
        assert params.log_level == "DEBUG"

    def test_missing_file_raises(self, tmp_path):
        """Test that a missing config file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError, match="Copy system_params.example.json"):
            SystemParams.load(tmp_path / "system_params.json")

    def test_invalid_log_level(self):
        """Test that unknown log levels are rejected."""
        with pytest.raises(ValidationError, match="Log level"):
            SystemParams(log_level="VERBOSE")

    def test_log_level_normalized_to_upper(self):
        """Test that log levels are upper-cased."""
        assert SystemParams(log_level="debug").log_level == "DEBUG"

    def test_load_rejects_schema_violation(self, tmp_path):
        """Test that load() checks the file against the system params schema."""
        # Arrange
        config_path = tmp_path / "system_params.json"
        config_path.write_text(
            json.dumps({"advisor": {"max_attempts": 0}, "verbose": True}),
            encoding="utf-8",
        )

        # Act & Assert
        with pytest.raises(ConfigurationError, match="system_params_schema.json"):
            SystemParams.load(config_path)

    def test_load_rejects_invalid_json(self, tmp_path):
        """Test that malformed JSON surfaces as ConfigurationError."""
        # Arrange
        config_path = tmp_path / "system_params.json"
        config_path.write_text('{"log_level": "INFO",}', encoding="utf-8")

        # Act & Assert
        with pytest.raises(ConfigurationError, match="Invalid JSON"):
            SystemParams.load(config_path)

    def test_load_example_config(self):
        """Test that the shipped example config loads."""
        # Act
        params = SystemParams.load(EXAMPLE_CONFIG)

        # Assert
        assert params.scoring.base_score == 50
        assert params.advisor.ai_enabled is False
