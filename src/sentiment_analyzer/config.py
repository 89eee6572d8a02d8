from __future__ import annotations

import logging
from enum import Enum
from typing import Optional
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClassifierBackend(str, Enum):
    AUTO = "auto"
    LOCAL = "local"
    LLM = "llm"


CLASSIFIER_BACKENDS = tuple(b.value for b in ClassifierBackend)


class Settings(BaseSettings):
    """Application settings with validation.

    All settings are loaded from environment variables.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Input guard limits
    max_text_length: int = 10000
    min_text_length: int = 1
    max_special_char_ratio: float = 0.30

    # Characters of oversized input echoed back in error records
    error_echo_length: int = 100

    # Sentence classifier
    classifier_backend: str = "auto"  # auto, local or llm

    # OpenAI-compatible chat completions endpoint
    llm_api_key: str = ""
    llm_base_url: str = "https://api.openai.com/v1"
    llm_model: str = "gpt-4o-mini"
    llm_timeout_seconds: float = 30.0

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    @field_validator("max_text_length", "min_text_length")
    @classmethod
    def length_must_be_positive(cls, v: int, info) -> int:
        if v < 1:
            raise ValueError(f"{info.field_name} must be >= 1, got {v}")
        return v

    @model_validator(mode="after")
    def validate_length_order(self) -> "Settings":
        if self.min_text_length > self.max_text_length:
            raise ValueError(
                f"min_text_length ({self.min_text_length}) must be <= "
                f"max_text_length ({self.max_text_length})"
            )
        return self

    @field_validator("max_special_char_ratio")
    @classmethod
    def ratio_range(cls, v: float) -> float:
        if v <= 0 or v > 1:
            raise ValueError(f"max_special_char_ratio must be in (0, 1], got {v}")
        return v

    @field_validator("error_echo_length")
    @classmethod
    def echo_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"error_echo_length must be >= 0, got {v}")
        return v

    @field_validator("classifier_backend")
    @classmethod
    def validate_backend(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in CLASSIFIER_BACKENDS:
            raise ValueError(
                f"classifier_backend must be one of {', '.join(CLASSIFIER_BACKENDS)}, got {v!r}"
            )
        return v

    @field_validator("llm_timeout_seconds")
    @classmethod
    def timeout_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"llm_timeout_seconds must be > 0, got {v}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.strip().upper()
        if not isinstance(logging.getLevelName(v), int):
            raise ValueError(f"Invalid log level: {v}")
        return v

    @property
    def use_llm(self) -> bool:
        """Whether the LLM classifier should back the analysis."""
        if self.classifier_backend == "llm":
            return True
        return self.classifier_backend == "auto" and bool(self.llm_api_key)

    def validate_llm_credentials(self) -> None:
        """Raise if the LLM classifier is selected but has no API key."""
        if self.classifier_backend == "llm" and not self.llm_api_key:
            raise ValueError("LLM_API_KEY must be set when CLASSIFIER_BACKEND=llm")


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Force reload settings from environment."""
    global _settings
    _settings = Settings()
    return _settings
