HEADER_TEXT = "This file is generated by Android Studio Gradle plugin. Do not modify."

MINIMUM_CMAKE_VERSION = "3.4.1"

# Names below are read by downstream parsers and must not change.
ANDROID_NDK = "ANDROID_NDK"
ANDROID_GRADLE_BUILD_COMPILER_SETTINGS_CACHE_USED = (
    "ANDROID_GRADLE_BUILD_COMPILER_SETTINGS_CACHE_USED"
)
ANDROID_GRADLE_BUILD_COMPILER_SETTINGS_CACHE_RECORDED_VERSION = (
    "ANDROID_GRADLE_BUILD_COMPILER_SETTINGS_CACHE_RECORDED_VERSION"
)
CMAKE_C_COMPILER_FORCED = "CMAKE_C_COMPILER_FORCED"
CMAKE_CXX_COMPILER_FORCED = "CMAKE_CXX_COMPILER_FORCED"

IS_CACHE_USED_KEY = "isCacheUsed"
PROPERTIES_KEY = "properties"

CACHE_HIT_MESSAGE = "Using compiler settings cached by Android Gradle Plugin"
