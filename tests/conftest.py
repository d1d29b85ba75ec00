import pytest

from cmake_wrapping.wrapping.config import WrapperSettings, WrappingLayout

TEST_VERSION = "9.9.9-test"


@pytest.fixture
def settings() -> WrapperSettings:
    """Deterministic version and '\\n' line breaks regardless of host."""
    return WrapperSettings(generator_version=TEST_VERSION, line_separator="\n")


@pytest.fixture
def layout(tmp_path) -> WrappingLayout:
    return WrappingLayout(root=tmp_path / "cxx" / "debug" / "x86")


@pytest.fixture
def project(tmp_path):
    """An original CMake project and toolchain file on disk."""
    source = tmp_path / "app" / "cpp"
    source.mkdir(parents=True)
    (source / "CMakeLists.txt").write_text("project(native)\n")
    toolchain = tmp_path / "ndk" / "build" / "cmake" / "android.toolchain.cmake"
    toolchain.parent.mkdir(parents=True)
    toolchain.write_text("# toolchain\n")
    return source, toolchain
