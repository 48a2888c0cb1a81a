"""
Configuration loaders for SWARM.

Two sources:
- .swarm/swarm.env: tool settings (KEY=value, see envparse)
- .swarm/config.md: the project configuration record (YAML header)
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from swarm.lib import constants, envparse, frontmatter
from swarm.lib.validate import validate_config

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class ConfigError(Exception):
    """Project configuration record missing or invalid."""

    def __init__(self, message: str, details: list[str] | None = None):
        self.details = details or []
        super().__init__(message)


@dataclass
class Settings:
    """Tool settings from .swarm/swarm.env"""
    knowledge_dir: str = constants.KNOWLEDGE_DIR  # Relative to the base directory
    default_author: str = "swarm-cli"
    repo_name: str = ""
    log_level: str = "WARNING"


@dataclass
class ProjectConfig:
    """Project-level configuration from .swarm/config.md"""
    project: str
    prefix: str                                # Story ID prefix, e.g. PROJ
    counter: int = 0                           # Last story number handed out
    definition_of_ready: list[str] = field(default_factory=list)
    definition_of_done: list[str] = field(default_factory=list)
    ways_of_working: dict[str, Any] = field(default_factory=dict)
    hierarchy: Optional[dict[str, Any]] = None


def load_settings(base_dir: Path) -> Settings:
    """Load .swarm/swarm.env, falling back to defaults for anything unset."""
    env = envparse.load_env(base_dir / constants.SETTINGS_FILE)

    log_level = env.get("LOG_LEVEL", "WARNING").upper()
    if log_level not in VALID_LOG_LEVELS:
        logger.warning(f"Unknown LOG_LEVEL '{log_level}', using WARNING")
        log_level = "WARNING"

    return Settings(
        knowledge_dir=env.get("KNOWLEDGE_DIR") or constants.KNOWLEDGE_DIR,
        default_author=env.get("DEFAULT_AUTHOR") or "swarm-cli",
        repo_name=env.get("REPO_NAME", ""),
        log_level=log_level,
    )


def load_project_config(path: Path) -> ProjectConfig:
    """Load and validate the project configuration record.

    Raises:
        ConfigError: if the file is missing, has no header, or fails validation
    """
    if not path.exists():
        raise ConfigError(f"Config not found: {path}")

    record = frontmatter.parse(path.read_text())
    if record is None:
        raise ConfigError(f"Config has no valid frontmatter: {path}")

    return project_config_from_header(record.header)


def project_config_from_header(header: dict) -> ProjectConfig:
    """Validate a config header and build ProjectConfig from it.

    Raises:
        ConfigError: if the header fails the config schema
    """
    result = validate_config(header)
    if not result.valid:
        raise ConfigError("Invalid config", result.details())

    return ProjectConfig(
        project=header["project"],
        prefix=header["prefix"],
        counter=header.get("counter", 0),
        definition_of_ready=list(header.get("definition_of_ready") or []),
        definition_of_done=list(header.get("definition_of_done") or []),
        ways_of_working=dict(header.get("ways_of_working") or {}),
        hierarchy=header.get("hierarchy"),
    )


def format_story_id(prefix: str, number: int) -> str:
    """PROJ, 7 -> PROJ-007"""
    return f"{prefix}-{number:0{constants.STORY_ID_WIDTH}d}"
