"""
Session configuration for abacus.

Settings come from the ``[abacus]`` table of an ``abacus.toml`` file, then
from environment variables, then from explicit overrides passed by the
caller (CLI flags).

Example abacus.toml:

    [abacus]
    output_style = "marked"
    unicode_operators = true
    check_arity = true
    prompt = "> "
    continuation_prompt = "... "

Environment variables:
    ABACUS_OUTPUT_STYLE: "plain" or "marked"
    ABACUS_LOG_LEVEL: logging level name used by the CLI
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, fields, replace
from enum import StrEnum
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "abacus.toml"
OUTPUT_STYLE_ENV_VAR = "ABACUS_OUTPUT_STYLE"
LOG_LEVEL_ENV_VAR = "ABACUS_LOG_LEVEL"


class OutputStyle(StrEnum):
    """How results are rendered for the result sink."""

    PLAIN = "plain"
    MARKED = "marked"


@dataclass(frozen=True)
class SessionConfig:
    """Settings that shape lexing, parsing and result formatting."""

    output_style: OutputStyle = OutputStyle.PLAIN
    unicode_operators: bool = True  # accept ≤ ≥ ≠
    check_arity: bool = True  # reject calls whose argument count differs
    prompt: str = "> "
    continuation_prompt: str = "... "

    def with_overrides(self, **overrides: Any) -> SessionConfig:
        """Return a copy with every non-None override applied."""
        applied = {k: v for k, v in overrides.items() if v is not None}
        if "output_style" in applied:
            applied["output_style"] = OutputStyle(applied["output_style"])
        return replace(self, **applied)


def parse_output_style(value: str) -> OutputStyle:
    """Parse an output style name, falling back to plain with a warning."""
    normalized = value.lower().strip()
    try:
        return OutputStyle(normalized)
    except ValueError:
        logger.warning(
            "Unknown output style '%s'. Valid values: plain, marked. Defaulting to plain.",
            value,
        )
        return OutputStyle.PLAIN


def load_config(path: Path | None = None) -> SessionConfig:
    """
    Load session configuration.

    Args:
        path: Explicit config file. When omitted, ``abacus.toml`` in the
            current directory is used if it exists.

    Returns:
        SessionConfig with file values and environment overrides applied.

    Raises:
        FileNotFoundError: If an explicit path does not exist.
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    config = SessionConfig()

    if path is None:
        candidate = Path.cwd() / CONFIG_FILENAME
        path = candidate if candidate.exists() else None
    if path is not None:
        config = _apply_file(config, path)

    env_style = os.environ.get(OUTPUT_STYLE_ENV_VAR, "").strip()
    if env_style:
        config = replace(config, output_style=parse_output_style(env_style))

    return config


def _apply_file(config: SessionConfig, path: Path) -> SessionConfig:
    with open(path, "rb") as f:
        data = tomllib.load(f)

    section = data.get("abacus", {})
    known = {item.name for item in fields(SessionConfig)}
    values: dict[str, Any] = {}
    for key, value in section.items():
        if key not in known:
            logger.warning("Ignoring unknown setting '%s' in %s", key, path)
            continue
        values[key] = value

    if "output_style" in values:
        values["output_style"] = parse_output_style(str(values["output_style"]))

    logger.debug("Loaded configuration from %s", path)
    return replace(config, **values)


def log_level_from_env(default: str = "WARNING") -> str:
    return os.environ.get(LOG_LEVEL_ENV_VAR, default).upper()
