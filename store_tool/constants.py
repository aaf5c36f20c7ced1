"""Global constants for store-tool"""

from enum import Enum
import re

APP_NAME = "store-tool"
LOG_FORMAT = "%(message)s"

# Configuration
PROJECT_CONFIG_FILE = ".store-tool.yaml"
CONFIG_VERSION = "1.0"
DEFAULT_FLUTTER_EXECUTABLE = "flutter"


# Project types known to the configurator registry
class ProjectType(Enum):
    UWP = "UWP"
    FLUTTER = "Flutter"


# Store API backends
class StoreApiType(Enum):
    FILESYSTEM = "filesystem"
    CUSTOM = "custom"

# Metadata key embedded into manifests
STORE_APP_ID_KEY = "MSStoreCLIAppId"

# UWP manifest
UWP_MANIFEST_FILE = "Package.appxmanifest"
UWP_PACKAGE_EXTENSION = ".msixupload"
UWP_DEFAULT_PACKAGE_DIR = "AppPackages"
UWP_PUBLISH_WORK_DIR = ("obj", "store-tool")
UWP_SUBMISSION_DESCRIPTION = "My UWP App"

APPX_FOUNDATION_NS = "http://schemas.microsoft.com/appx/manifest/foundation/windows10"
APPX_PHONE_NS = "http://schemas.microsoft.com/appx/2014/phone/manifest"
APPX_UAP_NS = "http://schemas.microsoft.com/appx/manifest/uap/windows10"
APPX_BUILD_NS = "http://schemas.microsoft.com/developer/appx/2015/build"
APPX_BUILD_PREFIX = "build"

# Windows build toolchain
VSWHERE_RELATIVE_PATH = ("Microsoft Visual Studio", "Installer", "vswhere.exe")
VSWHERE_MSBUILD_QUERY = [
    "-latest",
    "-requires", "Microsoft.Component.MSBuild",
    "-find", "MSBuild\\**\\Bin\\MSBuild.exe",
]
MSBUILD_RESTORE_ARGS = ["/t:restore"]
MSBUILD_STORE_PROPERTIES = (
    "Configuration=Release",
    "AppxBundle=Always",
    "Platform=x64",
    "AppxBundlePlatforms=x64|ARM64",
)
MSBUILD_OUTPUT_ARROW = "->"

# Flutter project
FLUTTER_MANIFEST_FILE = "pubspec.yaml"
FLUTTER_PACKAGE_EXTENSION = ".msix"
FLUTTER_DEFAULT_PACKAGE_DIR = ("build", "windows", "runner", "Release")
FLUTTER_PUBLISH_WORK_DIR = ("build", "windows", "store-tool")
FLUTTER_RESOURCES_DIR = ("windows", "runner", "resources")
FLUTTER_SUBMISSION_DESCRIPTION = "My Flutter App"

MSIX_CONFIG_KEY = "msix_config"
MSIX_APP_ID_KEY = "msstore_appId"
MSIX_DEFAULT_VERSION = "0.0.1.0"
MSIX_DEPENDENCY = "msix"
MSIX_NO_CHANGES_MARKER = "No dependencies would change"
MSIX_ALREADY_PRESENT_EXIT_CODE = 65
MSIX_ALREADY_PRESENT_MARKER = '"msix" is already in "dev_dependencies"'
MSIX_CREATED_MARKER = "msix created:"
MSIX_CREATED_SEPARATOR = ": "

ANSI_ESCAPE_PATTERN = re.compile(r"\x1b([^\[\]]|\[.*?[a-zA-Z]|\].*?\x07)")


# Operation return codes
class ReturnCode:
    SUCCESS = 0
    NO_APP_IDENTITY = -1
    UNSUPPORTED_PLATFORM = -1
    TOOLCHAIN_MISSING = -1
    PRECONDITION_FAILED = -2
    NO_PACKAGE_FILES = -1


# Error codes
class ErrorCode:
    CONFIG_FORMAT_ERROR = "ST001"
    PROJECT_NOT_FOUND = "ST002"
    TOOLCHAIN_NOT_FOUND = "ST003"
    OPERATION_FAILED = "ST004"
    MANIFEST_INVALID = "ST005"
    OUTPUT_PARSE_FAILED = "ST006"
    APP_IDENTITY_MISSING = "ST007"
    PACKAGE_NOT_FOUND = "ST008"
    PUBLISH_FAILED = "ST009"


# Environment variables
ENV_CONFIG_PATH = "STORE_TOOL_CONFIG"
ENV_LOG_LEVEL = "STORE_TOOL_LOG_LEVEL"
ENV_PROGRAM_FILES_X86 = "ProgramFiles(x86)"

# Display constants
EMOJI_SUCCESS = "✓"
EMOJI_ERROR = "✗"
EMOJI_WARNING = "⚠"
EMOJI_PACKAGE = "📦"
EMOJI_ROCKET = "🚀"

# Messages templates
MSG_UWP_CONFIGURED = "UWP project at '{path}' is now configured to build to the Microsoft Store!"
MSG_UWP_MORE_INFO = (
    "For more information on building your UWP project to the Microsoft Store, "
    "see https://learn.microsoft.com/windows/msix/package/packaging-uwp-apps"
)
MSG_FLUTTER_CONFIGURED = "Flutter project '{path}' is now configured to build to the Microsoft Store!"
MSG_FLUTTER_MORE_INFO = (
    "For more information on building your Flutter project to the Microsoft Store, "
    "see https://pub.dev/packages/msix#microsoft-store-icon-publishing-to-the-microsoft-store"
)
