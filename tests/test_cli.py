from click.testing import CliRunner

from cmake_wrapping.cli import main
from cmake_wrapping.wrapping.config import DEFAULT_SETTINGS, WrappingLayout
from cmake_wrapping.wrapping.state import render_build_generation_state


def test_toolchain_to_stdout():
    result = CliRunner().invoke(
        main, ["toolchain", "C:\\ndk\\tc.cmake", "/out/cache.cmake", "/out/signal.json"]
    )
    assert result.exit_code == 0, result.output
    assert 'include("C:/ndk/tc.cmake")' in result.output
    assert "ANDROID_GRADLE_BUILD_COMPILER_SETTINGS_CACHE_USED" in result.output


def test_cmakelists_to_file(tmp_path):
    out = tmp_path / "wrapper" / "CMakeLists.txt"
    result = CliRunner().invoke(
        main,
        ["cmakelists", "/proj", "/out", "/out/state.json", "--windows", "-o", str(out)],
    )
    assert result.exit_code == 0, result.output
    text = out.read_text()
    assert 'add_subdirectory("/proj" "/out" )' in text
    assert "\\r\\n" in text


def test_wrap_writes_layout(tmp_path, project):
    source, toolchain = project
    root = tmp_path / "variant"
    result = CliRunner().invoke(
        main,
        ["wrap", str(root), "--project", str(source), "--toolchain", str(toolchain), "--no-windows"],
    )
    assert result.exit_code == 0, result.output
    layout = WrappingLayout(root=root)
    assert layout.toolchain_wrapper.exists()
    assert layout.cmake_lists_wrapper.exists()


def test_wrap_requires_existing_project(tmp_path):
    result = CliRunner().invoke(
        main,
        ["wrap", str(tmp_path / "v"), "--project", str(tmp_path / "nope"), "--toolchain", "x"],
    )
    assert result.exit_code != 0


def test_configure_rejects_bad_define(tmp_path):
    result = CliRunner().invoke(main, ["configure", str(tmp_path), "-D", "NOVALUE", "--dry-run"])
    assert result.exit_code != 0
    assert "NAME=VALUE" in result.output


def test_configure_dry_run(tmp_path):
    result = CliRunner().invoke(
        main, ["configure", str(tmp_path), "-G", "Ninja", "-D", "ANDROID_ABI=x86", "--dry-run"]
    )
    assert result.exit_code == 0, result.output
    assert "-DANDROID_ABI=x86" in result.output


def _configured(root, used: bool, version: str):
    root.mkdir(parents=True)
    layout = WrappingLayout(root=root)
    layout.cache_use_signal_file.write_text('{ "isCacheUsed": %s }' % str(used).lower())
    layout.build_generation_state_file.write_text(
        render_build_generation_state({"CMAKE_C_COMPILER": "/ndk/clang", "X": "1"}, version)
    )
    return layout


def test_record_cache(tmp_path):
    layout = _configured(tmp_path / "v", used=False, version=DEFAULT_SETTINGS.generator_version)
    result = CliRunner().invoke(main, ["record-cache", str(layout.root), "--ndk", "/ndk"])
    assert result.exit_code == 0, result.output
    assert 'set(CMAKE_C_COMPILER "${ANDROID_NDK}/clang")' in layout.cache_file.read_text()


def test_record_cache_skips_hit(tmp_path):
    layout = _configured(tmp_path / "v", used=True, version=DEFAULT_SETTINGS.generator_version)
    result = CliRunner().invoke(main, ["record-cache", str(layout.root)])
    assert result.exit_code == 0, result.output
    assert "not written" in result.output
    assert not layout.cache_file.exists()


def test_record_cache_malformed_signal(tmp_path):
    layout = _configured(tmp_path / "v", used=False, version=DEFAULT_SETTINGS.generator_version)
    layout.cache_use_signal_file.write_text("{")
    result = CliRunner().invoke(main, ["record-cache", str(layout.root)])
    assert result.exit_code != 0
    assert "Malformed JSON" in result.output


def test_show_state(tmp_path):
    layout = _configured(tmp_path / "v", used=False, version="0.0.1")
    result = CliRunner().invoke(
        main, ["show-state", str(layout.build_generation_state_file), "--compiler-only"]
    )
    assert result.exit_code == 0, result.output
    assert "CMAKE_C_COMPILER" in result.output
    assert "1 variables shown" in result.output
    assert "Stale" in result.output


def test_show_state_malformed(tmp_path):
    path = tmp_path / "state.json"
    path.write_text("{}")
    result = CliRunner().invoke(main, ["show-state", str(path)])
    assert result.exit_code != 0


def test_show_state_prints_bracketed_values_verbatim(tmp_path):
    path = tmp_path / "[state].json"
    path.write_text(
        render_build_generation_state(
            {"CMAKE_REGEX": "[/\\]", "STYLE": "[bold]x[/bold]"},
            DEFAULT_SETTINGS.generator_version,
        )
    )
    result = CliRunner().invoke(main, ["show-state", str(path)])
    assert result.exit_code == 0, result.output
    assert "[/\\]" in result.output
    assert "[bold]x[/bold]" in result.output
