"""
Runtime settings for stubrecon.

Values come from the environment (a ``.env`` file is loaded when present) and
can be overridden by CLI options.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv, find_dotenv
from pydantic import BaseModel, Field, field_validator

load_dotenv(find_dotenv(usecwd=True))

ENV_PREFIX = "STUBRECON_"
DEFAULT_OUTPUT = Path("./data/compiled_classes.json")


class CompilerSettings(BaseModel):
    """Settings for one compiler run."""
    descriptors: Optional[Path] = Field(None, description="Reflective class descriptor dump")
    docs_dir: Optional[Path] = Field(None, description="Root of pre-parsed documentation pages")
    exclude_file: Optional[Path] = Field(None, description="File listing classes to exclude")
    output: Path = Field(DEFAULT_OUTPUT, description="Where the compiled result is written")
    workers: int = Field(1, ge=1, description="Number of workers (1 = sequential)")
    log_level: str = Field("INFO", description="Logging level name")

    @field_validator('log_level')
    @classmethod
    def check_log_level(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return v

    @classmethod
    def from_env(cls) -> "CompilerSettings":
        """Build settings from STUBRECON_* environment variables."""
        values = {}
        for name in cls.model_fields:
            raw = os.getenv(ENV_PREFIX + name.upper())
            if raw is not None and raw.strip():
                values[name] = raw.strip()
        return cls(**values)
