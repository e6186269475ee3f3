"""Configuration loading from environment variables and files."""

import json
import logging
import os
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

__all__ = ["LOG_LEVELS", "Settings", "load_settings"]

load_dotenv()

logger = logging.getLogger(__name__)

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseModel):
    """Runtime configuration for the command-line runner.

    Attributes:
        payload_file_path: Path to JSON file with one payload or a list.
        output_file_path: Optional file receiving the results (stdout if unset).
        log_level: Level for the application loggers.
        payloads: Request payloads (loaded from file).
        is_batch: True when the payload file holds a JSON array.
    """

    payload_file_path: str = Field(..., description="Path to JSON file containing request payloads")
    output_file_path: str | None = Field(
        default=None,
        description="Optional file receiving the results. If not set, results go to stdout.",
    )
    log_level: str = Field(default="INFO", description="Level for the reqcore loggers.")
    payloads: list[dict[str, Any]] = Field(
        default_factory=list,
        description="List of request payloads (populated from file).",
    )
    is_batch: bool = False

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize the log level name.

        Args:
            v: Level name, case-insensitive.

        Returns:
            The uppercased level name.

        Raises:
            ValueError: If the name is not a standard level.
        """
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level {v!r}, expected one of {', '.join(LOG_LEVELS)}")
        return level

    def load_payloads(self) -> None:
        """Load and validate payloads from JSON file.

        A JSON object is a single request; a JSON array is a batch.

        Raises:
            ValueError: If file not found, invalid JSON, wrong format, or empty.
        """
        try:
            with open(self.payload_file_path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise ValueError(f"Payload file not found: {self.payload_file_path}") from e
        except json.JSONDecodeError as e:
            raise ValueError(f"Payload file contains invalid JSON: {self.payload_file_path}") from e

        if isinstance(data, dict):
            self.payloads = [data]
            self.is_batch = False
        elif isinstance(data, list):
            if not data:
                raise ValueError("Payload file is empty")
            if not all(isinstance(x, dict) for x in data):
                raise ValueError("Each payload must be a JSON object")
            self.payloads = data
            self.is_batch = True
        else:
            raise ValueError("Payload file must be a JSON object or array")

        logger.debug(f"Loaded {len(self.payloads)} payloads from {self.payload_file_path}")


def load_settings() -> Settings:
    """Load and validate settings from environment and files.

    Required environment variables:
    - PAYLOAD_FILE_PATH: Path to JSON file with request payloads.

    Optional:
    - OUTPUT_FILE_PATH: File receiving the results.
    - LOG_LEVEL: Standard level name (default INFO).

    Returns:
        Validated Settings object.

    Raises:
        RuntimeError: If required env vars missing.
        ValueError: If configuration is invalid.
    """
    try:
        payload_path = os.environ["PAYLOAD_FILE_PATH"]
    except KeyError as e:
        raise RuntimeError(f"Missing required environment variable: {e.args[0]}") from e

    settings = Settings(
        payload_file_path=payload_path,
        output_file_path=os.getenv("OUTPUT_FILE_PATH") or None,
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )

    settings.load_payloads()

    logger.info(
        f"Runner configured: payloads={len(settings.payloads)}, "
        f"output={settings.output_file_path or '<stdout>'}, "
        f"log_level={settings.log_level}"
    )

    return settings
