"""
Schema Validator Module
Validates configuration files and canonical AI payloads against JSON schemas.
"""

import json
from pathlib import Path
from typing import Any, Dict, List

import structlog
from jsonschema import Draft7Validator, FormatChecker, ValidationError

logger = structlog.get_logger(__name__)

SCHEMA_DIR = Path(__file__).resolve().parent.parent / "schemas"

RECOMMENDATION_SCHEMA = "recommendation_response_schema.json"
SYSTEM_PARAMS_SCHEMA = "system_params_schema.json"


class SchemaValidationError(Exception):
    """Base class for schema validation failures."""

    pass


class ConfigurationError(SchemaValidationError):
    """Raised when configuration validation fails."""

    pass


class ResponseValidationError(SchemaValidationError):
    """Raised when an AI payload does not match its canonical schema."""

    pass


class SchemaValidator:
    """Validates payloads against JSON schemas shipped with the package."""

    def __init__(self, schema_dir: Path = SCHEMA_DIR):
        """
        Initialize validator with schema directory.

        Args:
            schema_dir: Path to directory containing JSON schemas
        """
        self.schema_dir = schema_dir
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Load JSON schema from file.

        Args:
            schema_name: Schema filename (e.g., "recommendation_response_schema.json")

        Returns:
            Loaded schema dictionary

        Raises:
            ConfigurationError: If schema file not found or invalid
        """
        if schema_name in self._schemas:
            logger.debug("schema_loaded_from_cache", schema_name=schema_name)
            return self._schemas[schema_name]

        schema_path = self.schema_dir / schema_name
        if not schema_path.exists():
            logger.error(
                "schema_not_found",
                schema_name=schema_name,
                schema_path=str(schema_path),
            )
            raise ConfigurationError(f"Schema file not found: {schema_path}")

        try:
            with open(schema_path, "r", encoding="utf-8") as f:
                schema = json.load(f)
            self._schemas[schema_name] = schema
            logger.info(
                "schema_loaded", schema_name=schema_name, schema_path=str(schema_path)
            )
            return schema
        except json.JSONDecodeError as e:
            logger.error("schema_invalid_json", schema_name=schema_name, error=str(e))
            raise ConfigurationError(f"Invalid JSON in schema {schema_name}: {e}")

    def iter_errors(self, payload: Any, schema_name: str) -> List[ValidationError]:
        """Return all schema violations for a payload (empty when valid)."""
        schema = self.load_schema(schema_name)
        validator = Draft7Validator(schema, format_checker=FormatChecker())
        return list(validator.iter_errors(payload))

    def validate(
        self,
        payload: Any,
        schema_name: str,
        error_class: type[SchemaValidationError] = ConfigurationError,
    ) -> None:
        """
        Validate a payload against a schema.

        Args:
            payload: Decoded JSON value to validate
            schema_name: Schema filename to validate against
            error_class: Exception type raised on failure

        Raises:
            SchemaValidationError: (error_class) if validation fails
        """
        logger.debug("validating_payload", schema_name=schema_name)
        errors = self.iter_errors(payload, schema_name)
        if not errors:
            logger.debug("validation_passed", schema_name=schema_name)
            return

        logger.warning(
            "validation_failed", schema_name=schema_name, error_count=len(errors)
        )
        error_messages = self._format_validation_errors(errors, schema_name)
        raise error_class("\n".join(error_messages))

    def validate_file(self, config_path: Path, schema_name: str) -> Dict[str, Any]:
        """
        Load and validate configuration file.

        Args:
            config_path: Path to configuration JSON file
            schema_name: Schema filename to validate against

        Returns:
            Validated configuration dictionary

        Raises:
            ConfigurationError: If file not found or validation fails
        """
        if not config_path.exists():
            logger.error("config_file_not_found", config_path=str(config_path))
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(
                "config_invalid_json", config_path=str(config_path), error=str(e)
            )
            raise ConfigurationError(
                f"Invalid JSON in {config_path.name}: {e}\n"
                f"Check for trailing commas, missing quotes, or invalid syntax."
            )

        self.validate(config, schema_name)
        logger.info(
            "file_validation_complete",
            config_path=str(config_path),
            schema_name=schema_name,
        )
        return config

    def validate_response(self, payload: Any) -> None:
        """Validate a canonical recommendation payload.

        Raises:
            ResponseValidationError: If any entry lacks name, program,
                location or a numeric match_score
        """
        self.validate(payload, RECOMMENDATION_SCHEMA, error_class=ResponseValidationError)

    def is_valid_response(self, payload: Any) -> bool:
        """Return True if the payload passes validate_response()."""
        if payload is None:
            return False
        return not self.iter_errors(payload, RECOMMENDATION_SCHEMA)

    def _format_validation_errors(
        self, errors: List[ValidationError], schema_name: str
    ) -> List[str]:
        """
        Format validation errors into user-friendly messages.

        Args:
            errors: List of validation errors from jsonschema
            schema_name: Schema name for context

        Returns:
            List of formatted error messages
        """
        messages = [f"\n[X] Validation failed for {schema_name}:\n"]

        for error in errors:
            path = " -> ".join([str(p) for p in error.absolute_path]) or "(root)"

            if error.validator == "required":
                missing_field = error.message.split("'")[1]
                messages.append(f"  * Missing required field: '{missing_field}' at {path}")
            elif error.validator == "type":
                messages.append(
                    f"  * Type mismatch at '{path}': {error.message}\n"
                    f"    -> Expected type: {error.validator_value}"
                )
            elif error.validator in ("minimum", "maximum", "minLength", "minItems"):
                messages.append(f"  * Value out of range at '{path}': {error.message}")
            elif error.validator == "enum":
                messages.append(
                    f"  * Invalid value at '{path}': {error.message}\n"
                    f"    -> Allowed values: {error.validator_value}"
                )
            elif error.validator == "anyOf":
                messages.append(
                    f"  * Unrecognized structure at '{path}': expected a list of "
                    f"universities, or an object with 'universities' or 'university_matches'"
                )
            else:
                messages.append(f"  * Validation error at '{path}': {error.message}")

        return messages
