"""Task that writes the toolchain and CMakeLists wrappers for one variant."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from cmake_wrapping.utils.logging import make_logger
from cmake_wrapping.wrapping.cmakelists import CmakeListsWrapRequest
from cmake_wrapping.wrapping.config import (
    DEFAULT_SETTINGS,
    IS_WINDOWS,
    WrapperSettings,
    WrappingLayout,
)
from cmake_wrapping.wrapping.toolchain import ToolchainWrapRequest

logger = make_logger(__name__)


@dataclass
class CmakeWrappingTask:
    """Write wrapper scripts for a CMake project into a WrappingLayout.

    Implements the BuildTask protocol.

    Wrappers always embed literal paths. The toolchain wrapper runs before
    the delegate toolchain has defined ANDROID_NDK (and again inside
    try_compile projects that never see -D cache entries), so only the
    compiler settings cache may refer to ${ANDROID_NDK}.
    """

    layout: WrappingLayout
    original_cmake_lists_folder: Path
    original_toolchain_file: Path
    is_windows: bool = IS_WINDOWS
    settings: WrapperSettings = DEFAULT_SETTINGS
    dry_run: bool = False
    written: list[Path] = field(default_factory=list, init=False)

    def toolchain_request(self) -> ToolchainWrapRequest:
        return ToolchainWrapRequest(
            original_toolchain_file=self.original_toolchain_file,
            cache_file=self.layout.cache_file,
            cache_use_signal_file=self.layout.cache_use_signal_file,
        )

    def cmake_lists_request(self) -> CmakeListsWrapRequest:
        return CmakeListsWrapRequest(
            original_cmake_lists_folder=self.original_cmake_lists_folder,
            build_output_folder=self.layout.project_build_folder,
            build_generation_state_file=self.layout.build_generation_state_file,
            is_windows=self.is_windows,
        )

    def inputs(self) -> list[Path]:
        return [
            self.original_cmake_lists_folder / "CMakeLists.txt",
            self.original_toolchain_file,
        ]

    def outputs(self) -> list[Path]:
        return [self.layout.toolchain_wrapper, self.layout.cmake_lists_wrapper]

    def render(self) -> dict[Path, str]:
        """Generate wrapper text keyed by destination file."""
        return {
            self.layout.toolchain_wrapper: self.toolchain_request().render(self.settings),
            self.layout.cmake_lists_wrapper: self.cmake_lists_request().render(self.settings),
        }

    def execute(self) -> bool:
        """Write both wrappers.

        Returns:
            True if the wrappers were written (or would be, in a dry run)

        Raises:
            FileNotFoundError: If the original CMakeLists.txt or toolchain is missing
        """
        self.written = []
        for path in self.inputs():
            if not path.exists():
                raise FileNotFoundError(f"Required input not found: {path}")

        generated = self.render()

        if self.dry_run:
            for path, text in generated.items():
                print(f"\n[DRY RUN] Would write {path} with content:")
                print(text)
            return True

        os.makedirs(self.layout.wrapper_folder, exist_ok=True)
        for path, text in generated.items():
            # Recorded before writing so a half-written file is cleaned up too
            self.written.append(path)
            # Text already carries the configured line separator
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(text)
            logger.debug(f"Wrote {path}")

        logger.info(f"Wrapped {self.original_cmake_lists_folder} into {self.layout.wrapper_folder}")
        return True

    def on_failure(self, error: Exception) -> None:
        """Remove wrappers written by the failed run; earlier wrappers stay."""
        logger.error(f"Wrapping {self.original_cmake_lists_folder} failed: {error}")
        for path in self.written:
            if path.exists():
                logger.debug(f"Removing partial output {path}")
                path.unlink()
        self.written = []
