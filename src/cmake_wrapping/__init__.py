"""CMake toolchain and CMakeLists wrapping for Android native builds."""

__version__ = "3.3.0"
