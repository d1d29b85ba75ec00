import pytest

from cmake_wrapping.wrapping.protocols import BuildTask
from cmake_wrapping.wrapping.task import CmakeWrappingTask


def _task(layout, project, settings, **kwargs) -> CmakeWrappingTask:
    source, toolchain = project
    return CmakeWrappingTask(
        layout=layout,
        original_cmake_lists_folder=source,
        original_toolchain_file=toolchain,
        is_windows=False,
        settings=settings,
        **kwargs,
    )


def test_implements_build_task(layout, project, settings):
    assert isinstance(_task(layout, project, settings), BuildTask)


def test_inputs_and_outputs(layout, project, settings):
    source, toolchain = project
    task = _task(layout, project, settings)
    assert task.inputs() == [source / "CMakeLists.txt", toolchain]
    assert task.outputs() == [layout.toolchain_wrapper, layout.cmake_lists_wrapper]


def test_execute_writes_wrappers(layout, project, settings):
    source, toolchain = project
    task = _task(layout, project, settings)
    assert task.execute()

    toolchain_text = layout.toolchain_wrapper.read_text()
    assert f'include("{toolchain.as_posix()}")' in toolchain_text
    assert f'if (EXISTS "{layout.cache_file.as_posix()}")' in toolchain_text
    assert layout.cache_use_signal_file.as_posix() in toolchain_text

    lists_text = layout.cmake_lists_wrapper.read_text()
    assert (
        f'add_subdirectory("{source.as_posix()}" "{layout.project_build_folder.as_posix()}" )'
        in lists_text
    )
    assert layout.build_generation_state_file.as_posix() in lists_text
    assert "9.9.9-test" in lists_text


def test_wrappers_embed_literal_paths(layout, project, settings):
    _, toolchain = project
    task = _task(layout, project, settings)
    task.execute()
    text = layout.toolchain_wrapper.read_text()
    assert f'include("{toolchain.as_posix()}")' in text.split("\n")[1]
    assert "${ANDROID_NDK}" not in text
    assert "${ANDROID_NDK}" not in layout.cmake_lists_wrapper.read_text()


def test_dry_run_writes_nothing(layout, project, settings, capsys):
    task = _task(layout, project, settings, dry_run=True)
    assert task.execute()
    assert not layout.wrapper_folder.exists()
    out = capsys.readouterr().out
    assert "[DRY RUN] Would write" in out
    assert "ANDROID_GRADLE_BUILD_COMPILER_SETTINGS_CACHE_USED" in out


def test_missing_input_raises(layout, project, settings):
    source, _ = project
    (source / "CMakeLists.txt").unlink()
    task = _task(layout, project, settings)
    with pytest.raises(FileNotFoundError):
        task.execute()
    assert not layout.wrapper_folder.exists()


def test_on_failure_removes_outputs(layout, project, settings):
    task = _task(layout, project, settings)
    task.execute()
    task.on_failure(RuntimeError("boom"))
    assert not layout.toolchain_wrapper.exists()
    assert not layout.cmake_lists_wrapper.exists()


def test_failed_rewrap_keeps_earlier_wrappers(layout, project, settings):
    source, _ = project
    _task(layout, project, settings).execute()
    (source / "CMakeLists.txt").unlink()

    task = _task(layout, project, settings)
    with pytest.raises(FileNotFoundError) as excinfo:
        task.execute()
    task.on_failure(excinfo.value)

    assert layout.toolchain_wrapper.exists()
    assert layout.cmake_lists_wrapper.exists()


def test_on_failure_removes_only_what_was_written(layout, project, settings, monkeypatch):
    task = _task(layout, project, settings)
    real_open = open
    calls = []

    def failing_open(path, *args, **kwargs):
        calls.append(path)
        if len(calls) == 2:
            raise OSError("disk full")
        return real_open(path, *args, **kwargs)

    monkeypatch.setattr("builtins.open", failing_open)
    with pytest.raises(OSError) as excinfo:
        task.execute()
    monkeypatch.undo()

    assert layout.toolchain_wrapper.exists()
    assert task.written == [layout.toolchain_wrapper, layout.cmake_lists_wrapper]
    task.on_failure(excinfo.value)
    assert not layout.toolchain_wrapper.exists()
    assert not layout.cmake_lists_wrapper.exists()
