"""CMake wrapper generation.

Provides generators for the toolchain and CMakeLists wrappers, readers for
the files they write when CMake runs, and the compiler settings cache.

Example:
    from cmake_wrapping.wrapping import wrap_cmake_toolchain

    text = wrap_cmake_toolchain(
        "/ndk/build/cmake/android.toolchain.cmake",
        "/out/compiler_settings_cache.cmake",
        "/out/compiler_settings_cache_use.json",
    )
"""

from cmake_wrapping.wrapping.cache import (
    compiler_settings_cache_text,
    record_compiler_settings_cache,
    select_compiler_settings,
)
from cmake_wrapping.wrapping.cmakelists import (
    VALUE_ESCAPES,
    CmakeListsWrapRequest,
    escape_build_variable_value,
    wrap_cmake_lists,
)
from cmake_wrapping.wrapping.config import (
    DEFAULT_SETTINGS,
    IS_WINDOWS,
    WrapperSettings,
    WrappingLayout,
)
from cmake_wrapping.wrapping.protocols import BuildTask
from cmake_wrapping.wrapping.state import (
    BuildGenerationState,
    BuildVariable,
    CacheUseSignal,
    read_build_generation_state,
    read_cache_use_signal,
    render_build_generation_state,
)
from cmake_wrapping.wrapping.task import CmakeWrappingTask
from cmake_wrapping.wrapping.toolchain import ToolchainWrapRequest, wrap_cmake_toolchain

__all__ = [
    "BuildGenerationState",
    "BuildTask",
    "BuildVariable",
    "CacheUseSignal",
    "CmakeListsWrapRequest",
    "CmakeWrappingTask",
    "DEFAULT_SETTINGS",
    "IS_WINDOWS",
    "ToolchainWrapRequest",
    "VALUE_ESCAPES",
    "WrapperSettings",
    "WrappingLayout",
    "compiler_settings_cache_text",
    "escape_build_variable_value",
    "read_build_generation_state",
    "read_cache_use_signal",
    "record_compiler_settings_cache",
    "render_build_generation_state",
    "select_compiler_settings",
    "wrap_cmake_lists",
    "wrap_cmake_toolchain",
]
