"""Configuration settings."""
import os
from dataclasses import dataclass
from typing import Final

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
load_dotenv()

DEFAULT_REF_TYPE: Final[str] = "article"


@dataclass
class Config:
    """Configuration settings for the reference manager."""

    # File paths
    REFERENCES_FILE: str = "references.csv"
    PROJECTS_FILE: str = "projects.csv"

    # Logging
    LOG_DIR: str = "logs"
    LOG_LEVEL: str = "INFO"

    # New references
    DEFAULT_REF_TYPE: str = DEFAULT_REF_TYPE

    @classmethod
    def from_env(cls) -> "Config":
        """Build a config from the environment (and .env, if present)."""
        return cls(
            REFERENCES_FILE=os.getenv("BIBMANAGER_REFERENCES_FILE", "references.csv"),
            PROJECTS_FILE=os.getenv("BIBMANAGER_PROJECTS_FILE", "projects.csv"),
            LOG_DIR=os.getenv("BIBMANAGER_LOG_DIR", "logs"),
            LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO"),
        )
