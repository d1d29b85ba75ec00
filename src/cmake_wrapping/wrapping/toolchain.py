"""Toolchain wrapper generation.

The wrapper includes the original toolchain file and then performs a
handshake with the compiler settings cache:

- MISS: the cache file does not exist. CMake detects compilers as usual and
  the wrapper records ``{ "isCacheUsed": false }`` in the signal file.
- HIT: the cache file exists. The first time the wrapper runs in a configure
  it records ``{ "isCacheUsed": true }``, marks the C and C++ compilers as
  forced and includes the cache file. A toolchain file may be included several
  times in one configure (try_compile, nested project() calls), so the guard
  variable makes the cache apply at most once.

The signal file's existence only decides whether the informational message is
printed; the guard variable decides whether the cache is applied.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from cmake_wrapping.consts import (
    ANDROID_GRADLE_BUILD_COMPILER_SETTINGS_CACHE_USED,
    CACHE_HIT_MESSAGE,
    CMAKE_C_COMPILER_FORCED,
    CMAKE_CXX_COMPILER_FORCED,
    IS_CACHE_USED_KEY,
)
from cmake_wrapping.utils.paths import convert_backslash_to_forward_slash
from cmake_wrapping.wrapping.config import DEFAULT_SETTINGS, WrapperSettings


@dataclass(frozen=True)
class ToolchainWrapRequest:
    """Inputs for wrapping a toolchain file."""

    original_toolchain_file: str | os.PathLike
    cache_file: str | os.PathLike
    cache_use_signal_file: str | os.PathLike

    def render(self, settings: WrapperSettings | None = None) -> str:
        return wrap_cmake_toolchain(
            self.original_toolchain_file,
            self.cache_file,
            self.cache_use_signal_file,
            settings=settings,
        )


def _write_signal(signal_file: str, used: bool) -> str:
    value = "true" if used else "false"
    return f'file(WRITE "{signal_file}" "{{ \\"{IS_CACHE_USED_KEY}\\": {value} }}")'


def wrap_cmake_toolchain(
    original_toolchain_file: str | os.PathLike,
    cache_file: str | os.PathLike,
    cache_use_signal_file: str | os.PathLike,
    settings: WrapperSettings | None = None,
) -> str:
    """Write a toolchain file that calls back into the original toolchain file.

    Args:
        original_toolchain_file: The toolchain file being wrapped
        cache_file: CMake-language file holding compiler settings discovered
            by an earlier configure of the same build environment
        cache_use_signal_file: JSON file the wrapper always writes, recording
            whether the cache was used. On a hit there is no point recording
            build variables downstream since they came from the cache.
        settings: Header text and line separator; defaults to DEFAULT_SETTINGS

    Returns:
        The CMake-language toolchain wrapper
    """
    settings = settings or DEFAULT_SETTINGS
    toolchain = convert_backslash_to_forward_slash(original_toolchain_file)
    cache = convert_backslash_to_forward_slash(cache_file)
    signal = convert_backslash_to_forward_slash(cache_use_signal_file)
    guard = ANDROID_GRADLE_BUILD_COMPILER_SETTINGS_CACHE_USED

    lines = [
        f"# {settings.header_text}",
        f'include("{toolchain}")',
        f'if (EXISTS "{cache}")',
        f'  if (NOT EXISTS "{signal}")',
        f'    message("{CACHE_HIT_MESSAGE}")',
        "  endif()",
        f"  if (NOT DEFINED {guard})",
        f"    {_write_signal(signal, True)}",
        f"    set({guard} true)",
        f"    set({CMAKE_C_COMPILER_FORCED} true)",
        f"    set({CMAKE_CXX_COMPILER_FORCED} true)",
        f'    include("{cache}")',
        "  endif()",
        "else()",
        f"  set({guard} false)",
        f"  {_write_signal(signal, False)}",
        "endif()",
    ]
    return settings.finish("\n".join(lines))
