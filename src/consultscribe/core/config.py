"""
Configuration management for Consult-Scribe.

This module provides centralized configuration using Pydantic Settings
for environment-based configuration management.
"""

from typing import List, Optional

import os
from pathlib import Path

from pydantic import Field, validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..domain.value_objects.speaker_features import ScoringWeights


class CORSSettings(BaseSettings):
    """CORS configuration settings."""

    model_config = SettingsConfigDict(env_prefix="CORS_")

    allowed_origins: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:8080"],
        description="Allowed CORS origins",
    )
    allowed_methods: List[str] = Field(
        default=["GET", "POST", "OPTIONS"],
        description="Allowed HTTP methods",
    )
    allowed_headers: List[str] = Field(
        default=["*"], description="Allowed HTTP headers"
    )
    allow_credentials: bool = Field(
        default=True, description="Allow credentials in CORS"
    )

    @validator("allowed_origins", pre=True)
    def parse_allowed_origins(cls, v):
        """Parse allowed origins from string or list."""
        if isinstance(v, str):
            # Handle JSON-like string format
            if v.startswith("[") and v.endswith("]"):
                import json

                try:
                    return json.loads(v)
                except json.JSONDecodeError:
                    return [v.strip()]
            return [v.strip()]
        return v


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = Field(default="INFO", description="Logging level")
    format: str = Field(default="json", description="Log format (json or text)")

    @validator("level")
    def validate_log_level(cls, v: str) -> str:
        """Validate logging level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @validator("format")
    def validate_log_format(cls, v: str) -> str:
        if v.lower() not in ("json", "text"):
            raise ValueError("Log format must be 'json' or 'text'")
        return v.lower()


class SpeakerSettings(BaseSettings):
    """Speaker attribution configuration settings."""

    model_config = SettingsConfigDict(env_prefix="SPEAKER_")

    doctor_overrides_first: bool = Field(
        default=True,
        description="Check doctor hard overrides before patient overrides",
    )
    trust_existing_labels: bool = Field(
        default=True,
        description="Pass through turns already tagged Doctor/Patient without reclassifying",
    )
    max_transcript_chars: int = Field(
        default=50000, description="Largest transcript accepted by the API"
    )

    weight_medical_terms: float = Field(default=1.5)
    weight_sentence_complexity: float = Field(default=0.8)
    weight_question_density: float = Field(default=0.6)
    weight_first_person: float = Field(default=-1.8)
    weight_directive_language: float = Field(default=1.2)
    weight_symptom_description: float = Field(default=-2.0)
    weight_technical_jargon: float = Field(default=2.0)
    after_speaker_bias: float = Field(
        default=2.0, description="Push toward the other role after each turn"
    )
    after_question_bias: float = Field(
        default=4.0, description="Extra push toward Patient after a doctor question"
    )
    after_symptoms_bias: float = Field(
        default=4.0, description="Extra push toward Doctor after a symptom description"
    )
    turn_parity_bias: float = Field(
        default=1.0, description="Alternating nudge by turn parity"
    )

    @validator("max_transcript_chars")
    def validate_max_transcript_chars(cls, v: int) -> int:
        if not 1 <= v <= 500000:
            raise ValueError("max_transcript_chars must be between 1 and 500000")
        return v

    def scoring_weights(self) -> ScoringWeights:
        """Build the classifier weights from configured values."""
        return ScoringWeights(
            medical_terms=self.weight_medical_terms,
            sentence_complexity=self.weight_sentence_complexity,
            question_density=self.weight_question_density,
            first_person=self.weight_first_person,
            directive_language=self.weight_directive_language,
            symptom_description=self.weight_symptom_description,
            technical_jargon=self.weight_technical_jargon,
            after_speaker_bias=self.after_speaker_bias,
            after_question_bias=self.after_question_bias,
            after_symptoms_bias=self.after_symptoms_bias,
            turn_parity_bias=self.turn_parity_bias,
        )


class AzureOpenAISettings(BaseSettings):
    """Azure OpenAI configuration settings."""

    model_config = SettingsConfigDict(env_prefix="AZURE_OPENAI_")

    endpoint: str = Field(default="", description="Azure OpenAI endpoint URL")
    api_key: str = Field(default="", description="Azure OpenAI API key")
    api_version: str = Field(default="2024-12-01-preview", description="Azure OpenAI API version")
    deployment_name: str = Field(default="gpt-4o-mini", description="Azure OpenAI chat deployment name")

    @validator("endpoint")
    def validate_endpoint(cls, v: str) -> str:
        """Validate Azure OpenAI endpoint format."""
        if v and not (v.startswith("https://") and ".openai.azure.com" in v):
            raise ValueError("Invalid Azure OpenAI endpoint format. Must be: https://xxx.openai.azure.com/")
        return v

    @property
    def is_configured(self) -> bool:
        return bool(self.endpoint and self.api_key)


class SpeakerCorrectionSettings(BaseSettings):
    """LLM speaker correction configuration settings."""

    model_config = SettingsConfigDict(env_prefix="SPEAKER_CORRECTION_")

    enabled: bool = Field(default=False, description="Allow requests to use LLM correction")
    temperature: float = Field(default=0.1, description="Temperature for correction prompts")
    max_tokens: int = Field(default=4000, description="Maximum tokens for the corrected transcript")
    min_confidence: float = Field(
        default=0.85, description="Corrections reported below this confidence are rejected"
    )

    @validator("temperature")
    def validate_temperature(cls, v: float) -> float:
        """Validate temperature."""
        if not 0.0 <= v <= 2.0:
            raise ValueError("Temperature must be between 0.0 and 2.0")
        return v

    @validator("min_confidence")
    def validate_min_confidence(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError("min_confidence must be between 0.0 and 1.0")
        return v


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Application settings
    app_name: str = Field(default="Consult-Scribe", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    app_env: str = Field(default="development", description="Application environment")
    debug: bool = Field(default=False, description="Debug mode")
    port: int = Field(default=8000, description="Application port")
    host: str = Field(default="0.0.0.0", description="Application host")

    # Sub-settings
    cors: CORSSettings = Field(default_factory=CORSSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    speaker: SpeakerSettings = Field(default_factory=SpeakerSettings)
    azure_openai: AzureOpenAISettings = Field(default_factory=AzureOpenAISettings)
    speaker_correction: SpeakerCorrectionSettings = Field(
        default_factory=SpeakerCorrectionSettings
    )

    @validator("app_env")
    def validate_app_env(cls, v: str) -> str:
        """Validate application environment."""
        valid_envs = ["development", "staging", "production", "testing"]
        if v.lower() not in valid_envs:
            raise ValueError(f"App environment must be one of: {valid_envs}")
        return v.lower()

    @validator("port")
    def validate_port(cls, v: int) -> int:
        """Validate port number."""
        if not 1 <= v <= 65535:
            raise ValueError("Port must be between 1 and 65535")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.app_env == "testing"


# Global settings instance (loaded after attempting to read .env)
_settings: Optional[Settings] = None


def _load_env_file_if_available() -> None:
    """Best-effort load of .env by searching current and parent directories.

    This helps in environments where the working directory isn't the project root
    and pydantic's env_file doesn't get resolved as expected.
    """
    from dotenv import load_dotenv

    cwd = Path(os.getcwd()).resolve()
    for parent in [cwd, *cwd.parents]:
        candidate = parent / ".env"
        if candidate.exists():
            # Do not override already-set environment variables
            load_dotenv(dotenv_path=str(candidate), override=False)
            break


def get_settings() -> Settings:
    """Get application settings instance (lazy-init with .env discovery)."""
    global _settings
    if _settings is None:
        _load_env_file_if_available()
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
