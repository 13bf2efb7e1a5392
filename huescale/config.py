"""
Huescale Configuration
Manages environment variables and defaults for pattern loading and palette generation.
"""
import os
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv

from huescale.errors import HuescaleError

load_dotenv()

PACKAGE_ROOT = Path(__file__).resolve().parent
DEFAULT_PATTERN_PATH = PACKAGE_ROOT / "patterns" / "default.json"

ColorSpace = Literal["hex", "rgb", "oklch", "oklab"]
COLOR_SPACES = ("hex", "rgb", "oklch", "oklab")

MAX_WORKERS = 64


class ConfigError(HuescaleError):
    """A configuration value is outside its allowed domain."""
    kind = "ConfigError"


class Config:
    """Configuration class for Huescale services."""

    # Pattern source
    PATTERN_SOURCE: str = os.environ.get("HUESCALE_PATTERN_SOURCE", str(DEFAULT_PATTERN_PATH))

    # Output defaults
    DEFAULT_OUTPUT_FORMAT: str = os.environ.get("HUESCALE_DEFAULT_OUTPUT_FORMAT", "hex")
    DEFAULT_PALETTE_NAME: str = os.environ.get("HUESCALE_DEFAULT_PALETTE_NAME", "generated")
    DEFAULT_BATCH_NAME: str = os.environ.get("HUESCALE_DEFAULT_BATCH_NAME", "batch")

    # Bounded fan-out for batch and one-to-many work
    MAX_CONCURRENCY: int = int(os.environ.get("HUESCALE_MAX_CONCURRENCY", "3"))

    # Logging and metrics
    LOG_LEVEL: str = os.environ.get("HUESCALE_LOG_LEVEL", "INFO")
    METRICS_ENABLED: bool = bool(int(os.environ.get("HUESCALE_METRICS_ENABLED", "1")))

    @classmethod
    def validate_output_format(cls, output_format: str) -> bool:
        """Validate output color space."""
        return output_format in COLOR_SPACES

    @classmethod
    def validate_concurrency(cls, workers: int) -> bool:
        """Validate worker pool size."""
        return isinstance(workers, int) and 1 <= workers <= MAX_WORKERS

    @classmethod
    def validate(cls) -> None:
        """
        Check every setting that has a fixed domain.

        Raises:
            ConfigError: Naming the first invalid setting
        """
        if not cls.validate_output_format(cls.DEFAULT_OUTPUT_FORMAT):
            raise ConfigError(
                f"Invalid HUESCALE_DEFAULT_OUTPUT_FORMAT {cls.DEFAULT_OUTPUT_FORMAT!r}, "
                f"expected one of {', '.join(COLOR_SPACES)}"
            )
        if not cls.validate_concurrency(cls.MAX_CONCURRENCY):
            raise ConfigError(
                f"Invalid HUESCALE_MAX_CONCURRENCY {cls.MAX_CONCURRENCY!r}, expected 1-{MAX_WORKERS}"
            )


# Global config instance
config = Config()
config.validate()
