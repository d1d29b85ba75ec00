"""CMakeLists.txt wrapper generation.

The wrapper adds the original project with add_subdirectory() and then writes
every CMake variable to a JSON file that is read back after configure:

    {
      "properties": [
        {"name" : "CMAKE_AR", "value" : "/ndk/.../llvm-ar"},
        ...
        {"name" : "ANDROID_GRADLE_BUILD_COMPILER_SETTINGS_CACHE_RECORDED_VERSION", "value" : "3.3.0" } ] }

JSON has its own escaping rules, so each value goes through VALUE_ESCAPES
inside CMake before it is written, e.g.

    string(REPLACE "=" "\\u003d" value "${value}")
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from cmake_wrapping.consts import (
    ANDROID_GRADLE_BUILD_COMPILER_SETTINGS_CACHE_RECORDED_VERSION,
    PROPERTIES_KEY,
)
from cmake_wrapping.utils.paths import convert_backslash_to_forward_slash
from cmake_wrapping.wrapping.config import DEFAULT_SETTINGS, IS_WINDOWS, WrapperSettings

WRITE_FUNCTION_NAME = "android_gradle_build_write_build_variables"

# (character, CMake literal for the character, JSON escape written instead)
# Order matters: backslash goes first so later escapes are not escaped again.
# CR maps to \u000a and LF to \u000d. The pair is transposed relative to the
# real code points; existing state files were written this way and are kept
# byte-compatible.
VALUE_ESCAPES: tuple[tuple[str, str, str], ...] = (
    ("\\", "\\\\", "\\u005c"),
    ("\r", "\\r", "\\u000a"),
    ("\n", "\\n", "\\u000d"),
    ('"', '\\"', "\\u0022"),
    ("=", "=", "\\u003d"),
)


def escape_build_variable_value(value: str) -> str:
    """Escape a variable value the same way the generated wrapper does."""
    for character, _, replacement in VALUE_ESCAPES:
        value = value.replace(character, replacement)
    return value


def newline_token(is_windows: bool) -> str:
    """CMake string escape for a line break on the platform running CMake."""
    return "\\r\\n" if is_windows else "\\n"


@dataclass(frozen=True)
class CmakeListsWrapRequest:
    """Inputs for wrapping a CMakeLists.txt folder."""

    original_cmake_lists_folder: str | os.PathLike
    build_output_folder: str | os.PathLike
    build_generation_state_file: str | os.PathLike
    is_windows: bool = IS_WINDOWS

    def render(self, settings: WrapperSettings | None = None) -> str:
        return wrap_cmake_lists(
            self.original_cmake_lists_folder,
            self.build_output_folder,
            self.build_generation_state_file,
            is_windows=self.is_windows,
            settings=settings,
        )


def _escape_statements() -> list[str]:
    statements = []
    for _, pattern, replacement in VALUE_ESCAPES:
        cmake_replacement = replacement.replace("\\", "\\\\")
        statements.append(
            f'string(REPLACE "{pattern}" "{cmake_replacement}" value "${{value}}")'
        )
    return statements


def wrap_cmake_lists(
    original_cmake_lists_folder: str | os.PathLike,
    build_output_folder: str | os.PathLike,
    build_generation_state_file: str | os.PathLike,
    is_windows: bool = IS_WINDOWS,
    settings: WrapperSettings | None = None,
) -> str:
    """Emit a CMakeLists.txt that adds the original project and records variables.

    Args:
        original_cmake_lists_folder: Folder of the CMakeLists.txt being wrapped
        build_output_folder: Binary folder for the original project, like
            ./.cxx/cmake/debug/x86/project
        build_generation_state_file: File the variables are written to
        is_windows: Whether CMake will run on Windows. Selects the line break
            written into the state file, which may differ from the host's.
        settings: Header, minimum version, recorded version and line separator

    Returns:
        The CMake-language wrapper
    """
    settings = settings or DEFAULT_SETTINGS
    source = convert_backslash_to_forward_slash(original_cmake_lists_folder)
    binary = convert_backslash_to_forward_slash(build_output_folder)
    state_file = convert_backslash_to_forward_slash(build_generation_state_file)
    nl = newline_token(is_windows)
    out = "${build_variables_file}"
    version_key = ANDROID_GRADLE_BUILD_COMPILER_SETTINGS_CACHE_RECORDED_VERSION

    lines = [
        f"# {settings.header_text}",
        f"cmake_minimum_required(VERSION {settings.minimum_cmake_version})",
        f'add_subdirectory("{source}" "{binary}" )',
        f"function({WRITE_FUNCTION_NAME})",
        "  get_cmake_property(variableNames VARIABLES)",
        f'  set(build_variables_file "{state_file}")',
        "  list(SORT variableNames)",
        f'  file(WRITE {out} "{{{nl}  \\"{PROPERTIES_KEY}\\": [{nl}")',
        "  foreach (variableName ${variableNames})",
        '    set(value "${${variableName}}")',
    ]
    lines += [f"    {statement}" for statement in _escape_statements()]
    lines += [
        f'    file(APPEND {out} "    {{\\"name\\" : \\"${{variableName}}\\", ")',
        f'    file(APPEND {out} "\\"value\\" : \\"${{value}}\\"}},{nl}")',
        "  endforeach()",
        f'  file(APPEND {out} "    {{\\"name\\" : \\"{version_key}\\", '
        f'\\"value\\" : \\"{settings.generator_version}\\" }} ] }}{nl}")',
        "endfunction()",
        f"{WRITE_FUNCTION_NAME}()",
    ]
    return settings.finish("\n".join(lines))
