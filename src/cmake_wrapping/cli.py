"""CLI commands for CMake wrapping.

Usage:
    cmake-wrap toolchain ORIGINAL CACHE SIGNAL [-o FILE]
    cmake-wrap cmakelists FOLDER OUTPUT STATE [--windows/--no-windows] [-o FILE]
    cmake-wrap wrap OUTPUT_ROOT --project DIR --toolchain FILE [--dry-run]
    cmake-wrap configure OUTPUT_ROOT [--generator G] [--dry-run]
    cmake-wrap record-cache OUTPUT_ROOT [--ndk DIR]
    cmake-wrap show-state STATE_FILE [--filter PREFIX]
"""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from cmake_wrapping.build.cmake import CMakeOptions, cmake_configure
from cmake_wrapping.utils.logging import make_logger, setup_logging
from cmake_wrapping.wrapping.cache import is_compiler_setting, record_compiler_settings_cache
from cmake_wrapping.wrapping.cmakelists import wrap_cmake_lists
from cmake_wrapping.wrapping.config import DEFAULT_SETTINGS, IS_WINDOWS, WrappingLayout
from cmake_wrapping.wrapping.state import read_build_generation_state
from cmake_wrapping.wrapping.task import CmakeWrappingTask
from cmake_wrapping.wrapping.toolchain import wrap_cmake_toolchain

logger = make_logger(__name__)
console = Console()


def _emit(text: str, output: Path | None) -> None:
    """Print generated text, or write it to a file."""
    if output is None:
        click.echo(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, "w", encoding="utf-8", newline="") as f:
        f.write(text)
    logger.info(f"Wrote {output}")


def _layout(output_root: Path, cache_file: Path | None) -> WrappingLayout:
    return WrappingLayout(root=output_root, cache_file_override=cache_file)


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default="info",
    help="Log level",
)
def main(log_level: str) -> None:
    """Wrap CMake projects so compiler detection can be cached between configures.

    Examples:

        # Write wrappers for a debug x86 variant
        cmake-wrap wrap .cxx/cmake/debug/x86 --project app/src/main/cpp \\
            --toolchain $NDK/build/cmake/android.toolchain.cmake

        # Configure, then save the compiler settings for the next configure
        cmake-wrap configure .cxx/cmake/debug/x86
        cmake-wrap record-cache .cxx/cmake/debug/x86 --ndk $NDK
    """
    setup_logging(log_level.upper(), logger)


@main.command()
@click.argument("original_toolchain", type=click.Path(path_type=Path))
@click.argument("cache_file", type=click.Path(path_type=Path))
@click.argument("signal_file", type=click.Path(path_type=Path))
@click.option("-o", "--output", type=click.Path(path_type=Path), help="Write to FILE instead of stdout")
def toolchain(
    original_toolchain: Path,
    cache_file: Path,
    signal_file: Path,
    output: Path | None,
) -> None:
    """Generate a toolchain wrapper."""
    _emit(wrap_cmake_toolchain(original_toolchain, cache_file, signal_file), output)


@main.command()
@click.argument("original_folder", type=click.Path(path_type=Path))
@click.argument("output_folder", type=click.Path(path_type=Path))
@click.argument("state_file", type=click.Path(path_type=Path))
@click.option(
    "--windows/--no-windows",
    default=IS_WINDOWS,
    help="Line breaks for CMake running on Windows (default: host platform)",
)
@click.option("-o", "--output", type=click.Path(path_type=Path), help="Write to FILE instead of stdout")
def cmakelists(
    original_folder: Path,
    output_folder: Path,
    state_file: Path,
    windows: bool,
    output: Path | None,
) -> None:
    """Generate a CMakeLists.txt wrapper."""
    _emit(
        wrap_cmake_lists(original_folder, output_folder, state_file, is_windows=windows),
        output,
    )


@main.command()
@click.argument("output_root", type=click.Path(path_type=Path))
@click.option(
    "--project",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    required=True,
    help="Folder containing the original CMakeLists.txt",
)
@click.option(
    "--toolchain",
    "toolchain_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="Original toolchain file",
)
@click.option(
    "--cache-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Compiler settings cache (default: OUTPUT_ROOT/compiler_settings_cache.cmake)",
)
@click.option("--windows/--no-windows", default=IS_WINDOWS, help="CMake runs on Windows")
@click.option("--dry-run", is_flag=True, help="Print wrappers instead of writing them")
def wrap(
    output_root: Path,
    project: Path,
    toolchain_file: Path,
    cache_file: Path | None,
    windows: bool,
    dry_run: bool,
) -> None:
    """Write toolchain and CMakeLists wrappers under OUTPUT_ROOT."""
    task = CmakeWrappingTask(
        layout=_layout(output_root, cache_file),
        original_cmake_lists_folder=project,
        original_toolchain_file=toolchain_file,
        is_windows=windows,
        dry_run=dry_run,
    )
    try:
        task.execute()
    except OSError as e:
        task.on_failure(e)
        raise click.ClickException(str(e)) from e

    if not dry_run:
        click.echo(f"Toolchain wrapper:  {task.layout.toolchain_wrapper}")
        click.echo(f"CMakeLists wrapper: {task.layout.cmake_lists_wrapper}")


@main.command()
@click.argument("output_root", type=click.Path(path_type=Path))
@click.option("--generator", "-G", default=None, help="CMake generator (default: Ninja if available)")
@click.option("--build-type", default="Debug", help="CMAKE_BUILD_TYPE")
@click.option("--cmake", default="cmake", help="cmake executable")
@click.option("--ndk", type=click.Path(path_type=Path), default=None, envvar="CMAKE_WRAP_NDK")
@click.option("--cache-file", type=click.Path(path_type=Path), default=None)
@click.option("-D", "defines", multiple=True, help="Extra NAME=VALUE definitions")
@click.option("--dry-run", is_flag=True, help="Print the command without running it")
def configure(
    output_root: Path,
    generator: str | None,
    build_type: str,
    cmake: str,
    ndk: Path | None,
    cache_file: Path | None,
    defines: tuple[str, ...],
    dry_run: bool,
) -> None:
    """Run CMake on the wrapped project under OUTPUT_ROOT."""
    parsed = {}
    for define in defines:
        name, sep, value = define.partition("=")
        if not sep or not name:
            raise click.BadParameter(f"Expected NAME=VALUE, got {define!r}", param_hint="-D")
        parsed[name] = value

    options = CMakeOptions(
        cmake=cmake,
        generator=generator,
        build_type=build_type,
        android_ndk=str(ndk) if ndk else None,
        defines=parsed,
    )
    if not cmake_configure(_layout(output_root, cache_file), options, dry_run=dry_run):
        raise click.ClickException("CMake configuration failed")


@main.command("record-cache")
@click.argument("output_root", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option(
    "--ndk",
    type=click.Path(path_type=Path),
    default=None,
    envvar="CMAKE_WRAP_NDK",
    help="NDK root to replace with ${ANDROID_NDK} in the cache (env: CMAKE_WRAP_NDK)",
)
@click.option("--cache-file", type=click.Path(path_type=Path), default=None)
def record_cache(output_root: Path, ndk: Path | None, cache_file: Path | None) -> None:
    """Save compiler settings from the last configure for reuse."""
    layout = _layout(output_root, cache_file)
    try:
        written = record_compiler_settings_cache(layout, android_ndk=ndk)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    if written:
        click.echo(f"Compiler settings cache: {layout.cache_file}")
    else:
        click.echo("Compiler settings cache not written")


@main.command("show-state")
@click.argument("state_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--filter", "prefix", default=None, help="Only show names starting with PREFIX")
@click.option("--compiler-only", is_flag=True, help="Only show cached compiler settings")
def show_state(state_file: Path, prefix: str | None, compiler_only: bool) -> None:
    """Display variables recorded by a CMakeLists wrapper."""
    try:
        state = read_build_generation_state(state_file)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    table = Table(title=escape(str(state_file)))
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")

    shown = 0
    for name, value in state.variables().items():
        if prefix and not name.startswith(prefix):
            continue
        if compiler_only and not is_compiler_setting(name):
            continue
        table.add_row(escape(name), escape(value))
        shown += 1

    console.print(table)

    recorded = escape(state.recorded_version) if state.recorded_version else "[red]missing[/red]"
    stale = state.is_stale(DEFAULT_SETTINGS.generator_version)
    console.print(f"{shown} variables shown. Recorded version: {recorded}")
    if stale:
        console.print(
            f"[yellow]Stale: expected version {escape(DEFAULT_SETTINGS.generator_version)}[/yellow]"
        )


if __name__ == "__main__":
    main()
