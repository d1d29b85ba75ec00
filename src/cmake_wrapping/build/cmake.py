"""CMake configuration of a wrapped project."""

import os
import subprocess
from dataclasses import dataclass, field

from cmake_wrapping.consts import ANDROID_NDK
from cmake_wrapping.utils.logging import make_logger
from cmake_wrapping.utils.paths import convert_backslash_to_forward_slash
from cmake_wrapping.utils.shell_utils import check_tool_exists, run_command
from cmake_wrapping.wrapping.config import WrappingLayout

logger = make_logger(__name__)


def format_command(cmd: list[str], indent: str = "  ") -> str:
    """Format a command list for nice display, one arg per line."""
    if not cmd:
        return ""
    lines = [cmd[0] + " \\"]
    for arg in cmd[1:-1]:
        lines.append(f"{indent}{arg} \\")
    if len(cmd) > 1:
        lines.append(f"{indent}{cmd[-1]}")
    return "\n".join(lines)


@dataclass
class CMakeOptions:
    """Options for configuring a wrapped project."""

    cmake: str = "cmake"
    generator: str | None = None  # Ninja when available
    build_type: str = "Debug"
    android_ndk: str | None = None
    defines: dict[str, str] = field(default_factory=dict)


def cmake_configure_command(layout: WrappingLayout, options: CMakeOptions) -> list[str]:
    """Build the cmake command line that configures the wrapper project."""
    cmd = [
        options.cmake,
        "-S",
        convert_backslash_to_forward_slash(layout.wrapper_folder),
        "-B",
        convert_backslash_to_forward_slash(layout.cmake_build_folder),
    ]

    generator = options.generator
    if generator is None and check_tool_exists("ninja"):
        generator = "Ninja"
    if generator:
        cmd.extend(["-G", generator])

    cmd.append(
        "-DCMAKE_TOOLCHAIN_FILE="
        + convert_backslash_to_forward_slash(layout.toolchain_wrapper)
    )
    cmd.append(f"-DCMAKE_BUILD_TYPE={options.build_type}")

    # Read by the NDK toolchain; the compiler settings cache refers to ${ANDROID_NDK}
    if options.android_ndk:
        ndk = convert_backslash_to_forward_slash(options.android_ndk)
        cmd.append(f"-D{ANDROID_NDK}={ndk}")

    for name, value in sorted(options.defines.items()):
        cmd.append(f"-D{name}={value}")

    return cmd


def cmake_configure(
    layout: WrappingLayout,
    options: CMakeOptions,
    dry_run: bool = False,
) -> bool:
    """Configure the wrapped project.

    Args:
        layout: Files of the wrapped variant; wrappers must already be written
        options: CMake configuration options
        dry_run: If True, print the command without executing

    Returns:
        True if successful, False otherwise
    """
    logger.info("Configuring wrapped CMake project...")

    if not dry_run and not layout.cmake_lists_wrapper.exists():
        logger.error(f"No CMakeLists wrapper at {layout.cmake_lists_wrapper}; run wrap first")
        return False

    cmake_cmd = cmake_configure_command(layout, options)

    if dry_run:
        print("\n[DRY RUN] CMake configure command:")
        print(format_command(cmake_cmd, indent="    "))
        print()
        return True

    os.makedirs(layout.cmake_build_folder, exist_ok=True)
    try:
        run_command(cmake_cmd)
    except (subprocess.CalledProcessError, FileNotFoundError) as e:
        logger.error(f"CMake configuration failed: {e}")
        return False

    logger.info("CMake configuration completed successfully")
    return True
