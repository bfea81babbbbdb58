"""
Unit tests for Schema Validator Module
"""

import json
from pathlib import Path

import pytest

from gradmatch.utils.validator import (
    RECOMMENDATION_SCHEMA,
    SYSTEM_PARAMS_SCHEMA,
    ConfigurationError,
    ResponseValidationError,
    SchemaValidationError,
    SchemaValidator,
)

EXAMPLE_CONFIG = Path(__file__).resolve().parents[2] / "config" / "system_params.example.json"


@pytest.fixture
def validator():
    """Create a SchemaValidator instance for testing."""
    return SchemaValidator()


@pytest.fixture
def valid_entries():
    """Return canonical recommendation entries."""
    return [
        {
            "name": "Stanford University",
            "program": "MS in Computer Science",
            "location": "Stanford, CA, USA",
            "match_score": 98,
            "category": "reach",
            "why_recommended": ["Strong AI lab"],
            "concerns": [],
        },
        {
            "name": "University of Washington",
            "program": "MS in Computer Science",
            "location": "Seattle, WA, USA",
            "match_score": 85.5,
        },
    ]


class TestLoadSchema:
    """Test cases for schema loading."""

    def test_loads_packaged_schema(self, validator):
        """Test that the recommendation schema ships with the package."""
        # Act
        schema = validator.load_schema(RECOMMENDATION_SCHEMA)

        # Assert
        assert "anyOf" in schema

    def test_schema_cached(self, validator):
        """Test that schemas are loaded once."""
        # Act
        first = validator.load_schema(SYSTEM_PARAMS_SCHEMA)
        second = validator.load_schema(SYSTEM_PARAMS_SCHEMA)

        # Assert
        assert first is second

    def test_missing_schema_raises(self, tmp_path):
        """Test that a missing schema file raises ConfigurationError."""
        # Arrange
        validator = SchemaValidator(schema_dir=tmp_path)

        # Act & Assert
        with pytest.raises(ConfigurationError, match="Schema file not found"):
            validator.load_schema("nope.json")

    def test_invalid_schema_json_raises(self, tmp_path):
        """Test that a malformed schema file raises ConfigurationError."""
        # Arrange
        (tmp_path / "broken.json").write_text("{not json", encoding="utf-8")
        validator = SchemaValidator(schema_dir=tmp_path)

        # Act & Assert
        with pytest.raises(ConfigurationError, match="Invalid JSON"):
            validator.load_schema("broken.json")


class TestValidateResponse:
    """Test cases for canonical recommendation validation."""

    def test_object_with_universities_passes(self, validator, valid_entries):
        """Test the preferred envelope."""
        validator.validate_response({"universities": valid_entries, "analysis": {}})

    def test_university_matches_envelope_passes(self, validator, valid_entries):
        """Test the alternate envelope."""
        validator.validate_response({"university_matches": valid_entries})

    def test_bare_list_passes(self, validator, valid_entries):
        """Test a top-level list of entries."""
        validator.validate_response(valid_entries)

    def test_empty_name_fails(self, validator, valid_entries):
        """Test that empty required strings are rejected."""
        # Arrange
        valid_entries[0]["name"] = ""

        # Act & Assert
        with pytest.raises(ResponseValidationError):
            validator.validate_response({"universities": valid_entries})

    def test_missing_score_fails(self, validator, valid_entries):
        """Test that match_score is required."""
        # Arrange
        del valid_entries[1]["match_score"]

        # Act & Assert
        with pytest.raises(ResponseValidationError, match="Unrecognized structure"):
            validator.validate_response({"universities": valid_entries})

    def test_invalid_universities_not_rescued_by_matches(self, validator, valid_entries):
        """Test that a broken 'universities' list is not bypassed via 'university_matches'."""
        with pytest.raises(ResponseValidationError):
            validator.validate_response(
                {"universities": [{"name": "X"}], "university_matches": valid_entries}
            )

    def test_response_error_is_schema_error(self):
        """Test the exception hierarchy."""
        assert issubclass(ResponseValidationError, SchemaValidationError)
        assert issubclass(ConfigurationError, SchemaValidationError)

    def test_is_valid_response(self, validator, valid_entries):
        """Test the boolean form."""
        assert validator.is_valid_response(valid_entries) is True
        assert validator.is_valid_response([]) is True
        assert validator.is_valid_response(None) is False
        assert validator.is_valid_response({"analysis": {}}) is False


class TestValidateFile:
    """Test cases for configuration file validation."""

    def test_example_config_is_valid(self, validator):
        """Test that the shipped example config passes its schema."""
        # Act
        config = validator.validate_file(EXAMPLE_CONFIG, SYSTEM_PARAMS_SCHEMA)

        # Assert
        assert config["log_level"] == "INFO"

    def test_missing_file_raises(self, validator, tmp_path):
        """Test that a missing config file raises ConfigurationError."""
        with pytest.raises(ConfigurationError, match="not found"):
            validator.validate_file(tmp_path / "system_params.json", SYSTEM_PARAMS_SCHEMA)

    def test_invalid_json_raises(self, validator, tmp_path):
        """Test that malformed JSON is reported with a hint."""
        # Arrange
        config_path = tmp_path / "system_params.json"
        config_path.write_text('{"log_level": "INFO",}', encoding="utf-8")

        # Act & Assert
        with pytest.raises(ConfigurationError, match="trailing commas"):
            validator.validate_file(config_path, SYSTEM_PARAMS_SCHEMA)

    def test_unknown_key_rejected(self, validator, tmp_path):
        """Test that unknown top-level keys are rejected."""
        # Arrange
        config_path = tmp_path / "system_params.json"
        config_path.write_text(json.dumps({"log_level": "INFO", "debug": True}), encoding="utf-8")

        # Act & Assert
        with pytest.raises(ConfigurationError):
            validator.validate_file(config_path, SYSTEM_PARAMS_SCHEMA)
