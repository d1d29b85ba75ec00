"""CMake invocation for wrapped projects."""

from cmake_wrapping.build.cmake import (
    CMakeOptions,
    cmake_configure,
    cmake_configure_command,
    format_command,
)

__all__ = [
    "CMakeOptions",
    "cmake_configure",
    "cmake_configure_command",
    "format_command",
]
