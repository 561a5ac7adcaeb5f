"""
Configuration

Loads and manages sanitizer configuration from markup_guard.yaml
"""

import codecs
import os
from pathlib import Path
from typing import List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from markup_guard.models.tables import SanitizerTables


def _known_charset(charset: str) -> str:
    try:
        return codecs.lookup(charset).name
    except LookupError as e:
        raise ValueError(f"Unknown charset: {charset}") from e


class PurifierConfig(BaseModel):
    """Rich-text purifier configuration."""
    tables: SanitizerTables = Field(default_factory=SanitizerTables)
    charset: str = "utf-8"

    # Upper bound for every fixed-point loop in the pipeline
    max_iterations: int = Field(default=100, ge=1)

    @field_validator("charset")
    @classmethod
    def check_charset(cls, charset: str) -> str:
        return _known_charset(charset)


class EscaperConfig(BaseModel):
    """Context escaper configuration."""
    allowed_schemes: List[str] = Field(default_factory=lambda: ["http", "https"])
    charset: str = "utf-8"
    double_encode: bool = True

    @field_validator("charset")
    @classmethod
    def check_charset(cls, charset: str) -> str:
        return _known_charset(charset)


class TranslationConfig(BaseModel):
    """Translation lookup configuration."""
    locale: str = "en"
    default_domain: str = "markup_guard"
    locale_dir: Optional[str] = None


class GuardConfig(BaseModel):
    """Main configuration model."""
    purifier: PurifierConfig = Field(default_factory=PurifierConfig)
    escaper: EscaperConfig = Field(default_factory=EscaperConfig)
    translation: TranslationConfig = Field(default_factory=TranslationConfig)


def load_config(config_path: Optional[Path] = None) -> GuardConfig:
    """
    Load configuration from YAML file.

    Falls back to environment variables and defaults.
    """
    env_path = Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    if config_path is None:
        config_path = Path.cwd() / "config" / "markup_guard.yaml"

    config_data = {}

    if config_path.exists():
        with open(config_path) as f:
            config_data = yaml.safe_load(f) or {}

    # Override with environment variables
    purifier = config_data.setdefault("purifier", {})
    escaper = config_data.setdefault("escaper", {})
    translation = config_data.setdefault("translation", {})

    if os.getenv("MARKUP_GUARD_CHARSET"):
        purifier["charset"] = os.getenv("MARKUP_GUARD_CHARSET")
        escaper["charset"] = os.getenv("MARKUP_GUARD_CHARSET")

    if os.getenv("MARKUP_GUARD_MAX_ITERATIONS"):
        purifier["max_iterations"] = int(os.getenv("MARKUP_GUARD_MAX_ITERATIONS"))

    if os.getenv("MARKUP_GUARD_ALLOWED_SCHEMES"):
        schemes = os.getenv("MARKUP_GUARD_ALLOWED_SCHEMES").split(",")
        escaper["allowed_schemes"] = [s.strip().lower() for s in schemes if s.strip()]

    if os.getenv("MARKUP_GUARD_LOCALE"):
        translation["locale"] = os.getenv("MARKUP_GUARD_LOCALE")

    if os.getenv("MARKUP_GUARD_LOCALE_DIR"):
        translation["locale_dir"] = os.getenv("MARKUP_GUARD_LOCALE_DIR")

    return GuardConfig(**config_data)
