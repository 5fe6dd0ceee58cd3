"""
Runtime settings, read from the environment (and a ``.env`` file if present).

    FGU_BUILDER_LOG_LEVEL    logging level name (default: INFO)
    FGU_BUILDER_OUTPUT_DIR   base directory for relative output paths
                             (default: current directory)
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, field_validator

LOG_LEVEL_ENV = "FGU_BUILDER_LOG_LEVEL"
OUTPUT_DIR_ENV = "FGU_BUILDER_OUTPUT_DIR"


class Settings(BaseModel):
    log_level: str = Field(default="INFO", description="Logging level name")
    output_dir: Path = Field(default_factory=Path.cwd, description="Base for relative output paths")

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    def resolve_output(self, path: Path | str) -> Path:
        """Anchor a relative output path at ``output_dir``."""
        path = Path(path)
        return path if path.is_absolute() else self.output_dir / path


def load_settings(**overrides: object) -> Settings:
    """Build settings from the environment; ``None`` overrides are ignored."""
    load_dotenv(find_dotenv(usecwd=True))
    values: dict[str, object] = {}
    if os.getenv(LOG_LEVEL_ENV):
        values["log_level"] = os.environ[LOG_LEVEL_ENV]
    if os.getenv(OUTPUT_DIR_ENV):
        values["output_dir"] = Path(os.environ[OUTPUT_DIR_ENV])
    values.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**values)
