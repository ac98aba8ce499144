"""
Configuration management for the schema compatibility layer.
Loads and validates environment variables using Pydantic Settings.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from schema_compat.constants import SchemaTarget


class Settings(BaseSettings):
    """Library settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SCHEMA_COMPAT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Rendering
    default_schema_target: str = Field(
        default=SchemaTarget.JSON_SCHEMA_7.value,
        description="Dialect used when a compat layer does not name one: jsonSchema7 or openApi3"
    )

    include_schema_uri: bool = Field(
        default=True,
        description="Emit the $schema keyword at the root of jsonSchema7 output"
    )

    # Environment
    environment: str = Field(
        default="development",
        description="Runtime environment: development, production, test"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL"
    )

    @property
    def schema_target(self) -> SchemaTarget:
        """Get the default dialect as an enum member."""
        return SchemaTarget(self.default_schema_target)

    def validate_configuration(self) -> None:
        """Validate configuration settings."""
        errors = []

        valid_targets = {target.value for target in SchemaTarget}
        if self.default_schema_target not in valid_targets:
            errors.append(
                f"SCHEMA_COMPAT_DEFAULT_SCHEMA_TARGET must be one of {sorted(valid_targets)}, "
                f"got: {self.default_schema_target}"
            )

        valid_environments = {"development", "production", "test"}
        if self.environment not in valid_environments:
            errors.append(
                f"SCHEMA_COMPAT_ENVIRONMENT must be one of {valid_environments}, "
                f"got: {self.environment}"
            )

        valid_log_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.log_level.upper() not in valid_log_levels:
            errors.append(
                f"SCHEMA_COMPAT_LOG_LEVEL must be one of {valid_log_levels}, "
                f"got: {self.log_level}"
            )

        if errors:
            raise ValueError(
                "Configuration validation failed:\n" +
                "\n".join(f"  - {error}" for error in errors)
            )


@lru_cache()
def get_settings() -> Settings:
    """Get library settings (cached)."""
    settings = Settings()
    settings.validate_configuration()
    return settings
