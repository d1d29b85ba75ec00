import os

from cmake_wrapping.consts import ANDROID_NDK


def convert_backslash_to_forward_slash(path: str | os.PathLike) -> str:
    """Convert a path to the form CMake accepts everywhere.

    CMake treats backslash as an escape introducer and tolerates Windows
    separators inconsistently, so every backslash becomes a forward slash:

        c:\\path\\to\\file -> c:/path/to/file
    """
    return os.fspath(path).replace("\\", "/")


def substitute_cmake_paths(
    block: str,
    android_ndk: str | os.PathLike,
    variable: str = ANDROID_NDK,
) -> str:
    """Replace literal NDK paths in a block of CMake code with ${ANDROID_NDK}.

    This is textual: every occurrence of the normalized root is replaced.
    """
    root = convert_backslash_to_forward_slash(android_ndk)
    if not root:
        return block
    return block.replace(root, "${" + variable + "}")
