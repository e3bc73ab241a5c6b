"""Runtime settings for biomodel.

Resolution order: CLI flags > env vars (BIOMODEL_*) > .env file > defaults.
"""

from functools import lru_cache
from pathlib import Path
from typing import List, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parent
PACKAGE_SCHEMAS_DIR = PACKAGE_DIR / "schemas"
PACKAGE_EXAMPLES_DIR = PACKAGE_DIR / "examples"

# Non-standard keywords carried by the schema documents. They are consumed by
# tooling and must never affect instance validation.
CUSTOM_KEYWORDS = (
    "mixinProperties",
    "linkTo",
    "linkSubmitsFor",
    "permission",
    "serverDefault",
    "requestMethod",
    "uniqueKey",
    "comment",
    "rdfs:subPropertyOf",
    "accessionType",
)


class BiomodelSettings(BaseSettings):
    """Central configuration for schema loading and validation."""

    model_config = SettingsConfigDict(
        env_prefix="BIOMODEL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Paths ---
    schemas_dir: Optional[Path] = None
    examples_dir: Optional[Path] = None

    # --- Validation ---
    validate_formats: bool = False
    custom_keywords: List[str] = Field(default_factory=lambda: list(CUSTOM_KEYWORDS))

    # --- Logging ---
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        return v.upper() if isinstance(v, str) else v

    @property
    def resolved_schemas_dir(self) -> Path:
        return self.schemas_dir or PACKAGE_SCHEMAS_DIR

    @property
    def resolved_examples_dir(self) -> Path:
        return self.examples_dir or PACKAGE_EXAMPLES_DIR


@lru_cache(maxsize=1)
def get_settings() -> BiomodelSettings:
    """Return the global settings singleton."""
    return BiomodelSettings()
