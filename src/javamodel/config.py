"""Project settings read from ``.javamodel.toml`` or ``pyproject.toml``."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Mapping

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    """How a project's sources are parsed and which resolvers back them."""

    parser: str = "javalang"
    jdk_catalog: bool = True
    javap: bool = False
    classpath: list[str] = field(default_factory=list)
    source_dirs: list[str] = field(default_factory=lambda: ["src/main/java"])
    encoding: str = "utf-8"
    skip_errors: bool = True


def settings_from_mapping(data: Mapping[str, Any]) -> Settings:
    """Build :class:`Settings` from a config table, ignoring unknown keys."""
    known = {f.name for f in fields(Settings)}
    values: dict[str, Any] = {}
    for key, value in data.items():
        name = key.replace("-", "_")
        if name not in known:
            logger.debug("Ignoring unknown javamodel setting %r", key)
            continue
        values[name] = value
    return Settings(**values)


def load_settings(project_dir: Path) -> Settings:
    """Read settings for *project_dir*, falling back to defaults."""
    table = _read_config(project_dir)
    if table is None:
        return Settings()
    return settings_from_mapping(table)


def _read_config(project_dir: Path) -> dict[str, Any] | None:
    """Read the javamodel table from .javamodel.toml or pyproject.toml."""
    # Try .javamodel.toml first
    javamodel_toml = project_dir / ".javamodel.toml"
    if javamodel_toml.exists():
        try:
            with open(javamodel_toml, "rb") as f:
                data = tomllib.load(f)
            table = data.get("javamodel")
            if table is not None:
                return table
            logger.debug("No [javamodel] table in %s", javamodel_toml)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.warning("Could not read %s: %s", javamodel_toml, e)

    # Fall back to [tool.javamodel] in pyproject.toml
    pyproject = project_dir / "pyproject.toml"
    if pyproject.exists():
        try:
            with open(pyproject, "rb") as f:
                data = tomllib.load(f)
            return data.get("tool", {}).get("javamodel", None)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.warning("Could not read %s: %s", pyproject, e)

    return None
