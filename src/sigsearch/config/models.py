"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (SIGSEARCH__SECTION__KEY)
3. Repo YAML (.sigsearch/config.yaml)
4. Global YAML (~/.config/sigsearch/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    SIGSEARCH__<SECTION>__<KEY>=<VALUE>

Examples:
    SIGSEARCH__LOGGING__LEVEL=DEBUG
    SIGSEARCH__MATCH__MAX_TYPE_DEPTH=128
    SIGSEARCH__SEARCH__LIMIT=50
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from sigsearch.config.constants import MAX_TYPE_DEPTH_CEILING, SEARCH_MAX_LIMIT

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        SIGSEARCH__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every comparison step and is very verbose.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class MatchConfig(BaseModel):
    """Matcher configuration.

    Env vars:
        SIGSEARCH__MATCH__MAX_TYPE_DEPTH: Deepest type nesting the comparator descends into
    """

    max_type_depth: int = Field(
        default=64,
        description="Maximum nesting depth of a type comparison. Subtrees below it "
        "are judged Different instead of being walked.",
    )

    @field_validator("max_type_depth")
    @classmethod
    def validate_max_type_depth(cls, v: int) -> int:
        if not (1 <= v <= MAX_TYPE_DEPTH_CEILING):
            raise ValueError(f"max_type_depth must be 1-{MAX_TYPE_DEPTH_CEILING}, got {v}")
        return v


class SearchConfig(BaseModel):
    """Ranking defaults.

    Env vars:
        SIGSEARCH__SEARCH__LIMIT: Default number of ranked hits
        SIGSEARCH__SEARCH__THRESHOLD: Drop hits scoring above this (0.0 = exact only)
    """

    limit: int = Field(
        default=30,
        description="Default number of hits returned by rank().",
    )
    threshold: float | None = Field(
        default=None,
        description="Score cut-off. Hits with a higher (worse) score are dropped. "
        "None keeps every scored candidate.",
    )

    @field_validator("limit")
    @classmethod
    def validate_limit(cls, v: int) -> int:
        if not (1 <= v <= SEARCH_MAX_LIMIT):
            raise ValueError(f"limit must be 1-{SEARCH_MAX_LIMIT}, got {v}")
        return v

    @field_validator("threshold")
    @classmethod
    def validate_threshold(cls, v: float | None) -> float | None:
        if v is not None and not (0.0 <= v <= 1.0):
            raise ValueError(f"threshold must be within 0.0-1.0, got {v}")
        return v


class SigSearchConfig(BaseModel):
    """Root configuration for sigsearch.

    All settings can be configured via:
    1. Environment variables: SIGSEARCH__SECTION__KEY
    2. YAML config files (repo or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    match: MatchConfig = Field(default_factory=MatchConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
