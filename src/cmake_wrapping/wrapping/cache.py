"""Compiler settings cache.

After a configure that missed the cache, the variables recorded by the
CMakeLists wrapper hold everything CMake learned while probing the compilers.
The subset needed to skip that probing is written as a CMake-language file
that the toolchain wrapper includes on later configures.
"""

from __future__ import annotations

import os
from pathlib import Path

from cmake_wrapping.consts import (
    ANDROID_GRADLE_BUILD_COMPILER_SETTINGS_CACHE_RECORDED_VERSION,
    ANDROID_GRADLE_BUILD_COMPILER_SETTINGS_CACHE_USED,
    CMAKE_C_COMPILER_FORCED,
    CMAKE_CXX_COMPILER_FORCED,
)
from cmake_wrapping.utils.logging import make_logger
from cmake_wrapping.utils.paths import substitute_cmake_paths
from cmake_wrapping.wrapping.config import DEFAULT_SETTINGS, WrapperSettings, WrappingLayout
from cmake_wrapping.wrapping.state import (
    BuildGenerationState,
    BuildVariable,
    read_build_generation_state,
    read_cache_use_signal,
)

logger = make_logger(__name__)

# Variables set by CMake's compiler detection (CMakeDetermine*Compiler and the
# generated CMake*Compiler.cmake files).
COMPILER_SETTINGS_PREFIXES = (
    "CMAKE_C_COMPILER",
    "CMAKE_CXX_COMPILER",
    "CMAKE_C_ABI_",
    "CMAKE_CXX_ABI_",
    "CMAKE_C_IMPLICIT_",
    "CMAKE_CXX_IMPLICIT_",
    "CMAKE_C_SIZEOF_",
    "CMAKE_CXX_SIZEOF_",
    "CMAKE_C_STANDARD_COMPUTED_DEFAULT",
    "CMAKE_CXX_STANDARD_COMPUTED_DEFAULT",
    "CMAKE_C_LIBRARY_ARCHITECTURE",
    "CMAKE_CXX_LIBRARY_ARCHITECTURE",
    "CMAKE_C90_",
    "CMAKE_C99_",
    "CMAKE_C11_",
    "CMAKE_CXX98_",
    "CMAKE_CXX11_",
    "CMAKE_CXX14_",
    "CMAKE_CXX17_",
)

COMPILER_SETTINGS_NAMES = frozenset(
    {
        "CMAKE_AR",
        "CMAKE_RANLIB",
        "CMAKE_LINKER",
        "CMAKE_SIZEOF_VOID_P",
        "CMAKE_COMPILER_IS_GNUCC",
        "CMAKE_COMPILER_IS_GNUCXX",
        "CMAKE_C_COMPILE_FEATURES",
        "CMAKE_CXX_COMPILE_FEATURES",
        "CMAKE_C_PLATFORM_ID",
        "CMAKE_CXX_PLATFORM_ID",
        "CMAKE_C_SOURCE_FILE_EXTENSIONS",
        "CMAKE_CXX_SOURCE_FILE_EXTENSIONS",
        "CMAKE_C_IGNORE_EXTENSIONS",
        "CMAKE_CXX_IGNORE_EXTENSIONS",
        "CMAKE_C_LINKER_PREFERENCE",
        "CMAKE_CXX_LINKER_PREFERENCE",
    }
)

# Set by the toolchain wrapper itself; caching them would defeat the guard.
EXCLUDED_NAMES = frozenset(
    {
        CMAKE_C_COMPILER_FORCED,
        CMAKE_CXX_COMPILER_FORCED,
        ANDROID_GRADLE_BUILD_COMPILER_SETTINGS_CACHE_USED,
        ANDROID_GRADLE_BUILD_COMPILER_SETTINGS_CACHE_RECORDED_VERSION,
    }
)


def is_compiler_setting(name: str) -> bool:
    if name in EXCLUDED_NAMES:
        return False
    return name in COMPILER_SETTINGS_NAMES or name.startswith(COMPILER_SETTINGS_PREFIXES)


def select_compiler_settings(state: BuildGenerationState) -> list[BuildVariable]:
    """Return the recorded compiler settings, sorted by name."""
    return sorted(
        (prop for prop in state.properties if is_compiler_setting(prop.name)),
        key=lambda prop: prop.name,
    )


def quote_cmake_argument(value: str) -> str:
    """Quote a value as a CMake quoted argument."""
    escaped = (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("$", "\\$")
        .replace("\r", "\\r")
        .replace("\n", "\\n")
    )
    return f'"{escaped}"'


def compiler_settings_cache_text(
    state: BuildGenerationState,
    android_ndk: str | os.PathLike | None = None,
    settings: WrapperSettings | None = None,
) -> str:
    """Build the CMake-language cache file from recorded variables.

    Args:
        state: Variables recorded by the CMakeLists wrapper on a cache miss
        android_ndk: NDK root; literal occurrences become ${ANDROID_NDK} so
            the cache stays valid on machines with the NDK elsewhere
        settings: Header text and line separator

    Returns:
        CMake code with one set() per compiler setting
    """
    settings = settings or DEFAULT_SETTINGS
    lines = [f"# {settings.header_text}"]
    for prop in select_compiler_settings(state):
        lines.append(f"set({prop.name} {quote_cmake_argument(prop.value)})")
    block = "\n".join(lines)
    if android_ndk:
        block = substitute_cmake_paths(block, android_ndk)
    return settings.finish(block)


def record_compiler_settings_cache(
    layout: WrappingLayout,
    android_ndk: str | os.PathLike | None = None,
    settings: WrapperSettings | None = None,
) -> bool:
    """Write the compiler settings cache after a configure that missed it.

    Args:
        layout: Files of the wrapped variant
        android_ndk: NDK root to substitute with ${ANDROID_NDK}
        settings: Expected generator version and formatting

    Returns:
        True if the cache file was written, False if there was nothing to record
    """
    settings = settings or DEFAULT_SETTINGS

    signal = read_cache_use_signal(layout.cache_use_signal_file)
    if signal is None:
        logger.warning(
            f"No cache use signal at {layout.cache_use_signal_file}; "
            "has the wrapped project been configured?"
        )
        return False
    if signal.is_cache_used:
        logger.info("Compiler settings came from the cache; nothing to record")
        return False

    if not layout.build_generation_state_file.exists():
        logger.warning(f"No build generation state at {layout.build_generation_state_file}")
        return False

    state = read_build_generation_state(layout.build_generation_state_file)
    if state.is_stale(settings.generator_version):
        logger.warning(
            f"Build generation state was recorded by version {state.recorded_version}, "
            f"expected {settings.generator_version}; reconfigure to refresh it"
        )
        return False

    text = compiler_settings_cache_text(state, android_ndk=android_ndk, settings=settings)
    cache_file = Path(layout.cache_file)
    cache_file.parent.mkdir(parents=True, exist_ok=True)
    with open(cache_file, "w", encoding="utf-8", newline="") as f:
        f.write(text)
    logger.info(f"Recorded {len(select_compiler_settings(state))} compiler settings to {cache_file}")
    return True
