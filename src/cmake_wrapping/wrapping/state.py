"""Readers for the JSON files written by the generated wrappers.

- CacheUseSignal: written by the toolchain wrapper on every configure
- BuildGenerationState: written by the CMakeLists wrapper on every configure

render_build_generation_state() produces the same text the CMakeLists
wrapper writes, from a plain mapping of variables.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from cmake_wrapping.consts import (
    ANDROID_GRADLE_BUILD_COMPILER_SETTINGS_CACHE_RECORDED_VERSION,
    IS_CACHE_USED_KEY,
    PROPERTIES_KEY,
)
from cmake_wrapping.utils.logging import make_logger
from cmake_wrapping.wrapping.cmakelists import escape_build_variable_value

logger = make_logger(__name__)


@dataclass(frozen=True)
class CacheUseSignal:
    is_cache_used: bool


@dataclass(frozen=True)
class BuildVariable:
    name: str
    value: str


@dataclass(frozen=True)
class BuildGenerationState:
    """CMake variables recorded at the end of a configure, sorted by name."""

    properties: tuple[BuildVariable, ...] = field(default_factory=tuple)

    def get(self, name: str) -> str | None:
        for prop in self.properties:
            if prop.name == name:
                return prop.value
        return None

    @property
    def recorded_version(self) -> str | None:
        return self.get(ANDROID_GRADLE_BUILD_COMPILER_SETTINGS_CACHE_RECORDED_VERSION)

    def is_stale(self, expected_version: str) -> bool:
        """True if the state was not recorded by the expected generator version."""
        return self.recorded_version != expected_version

    def variables(self) -> dict[str, str]:
        """Recorded CMake variables, without the synthetic version record."""
        return {
            prop.name: prop.value
            for prop in self.properties
            if prop.name != ANDROID_GRADLE_BUILD_COMPILER_SETTINGS_CACHE_RECORDED_VERSION
        }


def _load_json(path: Path) -> Any:
    with open(path, encoding="utf-8") as f:
        content = f.read()
    try:
        # The wrapper does not escape tabs or other control characters
        return json.loads(content, strict=False)
    except json.JSONDecodeError as e:
        raise ValueError(f"Malformed JSON in {path}: {e}") from e


def read_cache_use_signal(path: str | os.PathLike) -> CacheUseSignal | None:
    """Read the cache use signal file.

    Returns:
        The signal, or None if the toolchain wrapper has not run yet

    Raises:
        ValueError: If the file is not a JSON object with a boolean isCacheUsed
    """
    path = Path(path)
    if not path.exists():
        logger.debug(f"No cache use signal at {path}")
        return None

    data = _load_json(path)
    if not isinstance(data, dict) or not isinstance(data.get(IS_CACHE_USED_KEY), bool):
        raise ValueError(f"Expected {{\"{IS_CACHE_USED_KEY}\": <bool>}} in {path}")

    signal = CacheUseSignal(is_cache_used=data[IS_CACHE_USED_KEY])
    logger.debug(f"Cache use signal at {path}: {signal.is_cache_used}")
    return signal


def read_build_generation_state(path: str | os.PathLike) -> BuildGenerationState:
    """Read the variables recorded by the CMakeLists wrapper.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the content does not match the expected schema
    """
    path = Path(path)
    data = _load_json(path)
    if not isinstance(data, dict) or not isinstance(data.get(PROPERTIES_KEY), list):
        raise ValueError(f"Expected a '{PROPERTIES_KEY}' list in {path}")

    properties = []
    for entry in data[PROPERTIES_KEY]:
        if (
            not isinstance(entry, dict)
            or not isinstance(entry.get("name"), str)
            or not isinstance(entry.get("value"), str)
        ):
            raise ValueError(f"Malformed property entry in {path}: {entry!r}")
        properties.append(BuildVariable(name=entry["name"], value=entry["value"]))

    logger.debug(f"Read {len(properties)} properties from {path}")
    return BuildGenerationState(properties=tuple(properties))


def render_build_generation_state(
    variables: Mapping[str, str],
    version: str,
    is_windows: bool = False,
) -> str:
    """Render the state file exactly as the generated CMakeLists wrapper writes it."""
    nl = "\r\n" if is_windows else "\n"
    parts = ["{" + nl + f'  "{PROPERTIES_KEY}": [' + nl]
    for name in sorted(variables):
        value = escape_build_variable_value(variables[name])
        parts.append(f'    {{"name" : "{name}", "value" : "{value}"}},{nl}')
    parts.append(
        f'    {{"name" : "{ANDROID_GRADLE_BUILD_COMPILER_SETTINGS_CACHE_RECORDED_VERSION}", '
        f'"value" : "{version}" }} ] }}{nl}'
    )
    return "".join(parts)
