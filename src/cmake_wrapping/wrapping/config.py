"""Settings and file layout for CMake wrapping.

This module provides:
- WrapperSettings: constants injected into the generators
- WrappingLayout: where generated wrappers and artifacts live for one variant
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path

from cmake_wrapping import __version__
from cmake_wrapping.consts import HEADER_TEXT, MINIMUM_CMAKE_VERSION

IS_WINDOWS = sys.platform == "win32"

WRAPPER_FOLDER = "wrapper"
WRAPPED_TOOLCHAIN_FILENAME = "android_gradle_build_toolchain.cmake"
WRAPPED_CMAKE_LISTS_FILENAME = "CMakeLists.txt"
PROJECT_BUILD_FOLDER = "project"
CMAKE_BUILD_FOLDER = "build"
CACHE_USE_SIGNAL_FILENAME = "compiler_settings_cache_use.json"
BUILD_GENERATION_STATE_FILENAME = "build_generation_state.json"
COMPILER_SETTINGS_CACHE_FILENAME = "compiler_settings_cache.cmake"


@dataclass(frozen=True)
class WrapperSettings:
    """Constants written into generated scripts.

    Injected rather than global so callers (and tests) control the recorded
    version and the line separator of the final text.
    """

    header_text: str = HEADER_TEXT
    generator_version: str = __version__
    minimum_cmake_version: str = MINIMUM_CMAKE_VERSION
    line_separator: str = os.linesep

    def finish(self, text: str) -> str:
        """Convert a '\\n'-joined script to the configured line separator."""
        return text.replace("\n", self.line_separator)


DEFAULT_SETTINGS = WrapperSettings()


@dataclass(frozen=True)
class WrappingLayout:
    """Files used to wrap one CMake project for one build variant.

    Everything lives under ``root``, e.g. ``.cxx/cmake/debug/x86``. The
    compiler settings cache can be shared between variants, so it may be
    placed elsewhere with ``cache_file``.
    """

    root: Path
    cache_file_override: Path | None = None

    @property
    def wrapper_folder(self) -> Path:
        return self.root / WRAPPER_FOLDER

    @property
    def toolchain_wrapper(self) -> Path:
        return self.wrapper_folder / WRAPPED_TOOLCHAIN_FILENAME

    @property
    def cmake_lists_wrapper(self) -> Path:
        return self.wrapper_folder / WRAPPED_CMAKE_LISTS_FILENAME

    @property
    def project_build_folder(self) -> Path:
        """Binary folder handed to add_subdirectory for the original project."""
        return self.root / PROJECT_BUILD_FOLDER

    @property
    def cmake_build_folder(self) -> Path:
        return self.root / CMAKE_BUILD_FOLDER

    @property
    def cache_use_signal_file(self) -> Path:
        return self.root / CACHE_USE_SIGNAL_FILENAME

    @property
    def build_generation_state_file(self) -> Path:
        return self.root / BUILD_GENERATION_STATE_FILENAME

    @property
    def cache_file(self) -> Path:
        if self.cache_file_override is not None:
            return self.cache_file_override
        return self.root / COMPILER_SETTINGS_CACHE_FILENAME
