"""Protocol definitions for host build-engine integration.

A host engine (Gradle, a custom task runner) schedules work; this package
only supplies tasks that fit the shape below. Scheduling, up-to-date checks
and incremental input tracking stay with the host.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class BuildTask(Protocol):
    """Protocol for a unit of work a host build engine can run.

    Implementations:
        - CmakeWrappingTask: Write toolchain and CMakeLists wrappers
    """

    def inputs(self) -> list[Path]:
        """Files the task reads. The host uses these for up-to-date checks."""
        ...

    def outputs(self) -> list[Path]:
        """Files the task writes."""
        ...

    def execute(self) -> bool:
        """Run the task.

        Returns:
            True if the task succeeded, False otherwise
        """
        ...

    def on_failure(self, error: Exception) -> None:
        """Called by the host when execute() raised."""
        ...
