"""Exception definitions for store-tool API"""

from ..constants import ErrorCode


class StoreToolError(Exception):
    """Base exception for store-tool"""

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.error_code = error_code


class ConfigError(StoreToolError):
    """Configuration error"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.CONFIG_FORMAT_ERROR)


class ProjectNotFoundError(StoreToolError):
    """No configurator recognises the project directory"""

    def __init__(self, path: str, message: str = None):
        if message is None:
            message = (
                f"No supported project found at '{path}'. Please ensure:\n"
                "1. The path points to the project root directory\n"
                "2. The root contains Package.appxmanifest (UWP) or pubspec.yaml (Flutter)"
            )
        super().__init__(message, ErrorCode.PROJECT_NOT_FOUND)
        self.path = path


class ToolchainNotFoundError(StoreToolError):
    """A required external build tool is not installed"""

    def __init__(self, tool: str, message: str = None):
        super().__init__(message or f"Required tool not found: {tool}", ErrorCode.TOOLCHAIN_NOT_FOUND)
        self.tool = tool


class OperationFailedError(StoreToolError):
    """An external command returned a failure"""

    def __init__(self, message: str, stderr: str = ""):
        if stderr and stderr.strip():
            message = f"{message}\n{stderr.strip()}"
        super().__init__(message, ErrorCode.OPERATION_FAILED)
        self.stderr = stderr


class ManifestError(StoreToolError):
    """Project manifest is missing, malformed or lacks an expected entry"""

    def __init__(self, message: str, path: str = None):
        super().__init__(message, ErrorCode.MANIFEST_INVALID)
        self.path = path


class OutputParseError(StoreToolError):
    """Expected marker not found in a build tool's output"""

    def __init__(self, message: str, output: str = ""):
        super().__init__(message, ErrorCode.OUTPUT_PARSE_FAILED)
        self.output = output


class AppIdentityError(StoreToolError):
    """Application identity could not be resolved"""

    def __init__(self, message: str = "No application identity"):
        super().__init__(message, ErrorCode.APP_IDENTITY_MISSING)


class PackageNotFoundError(StoreToolError):
    """Package input directory or artifact is missing"""

    def __init__(self, path: str, message: str = None):
        super().__init__(message or f"Package directory not found: {path}", ErrorCode.PACKAGE_NOT_FOUND)
        self.path = path


class PublishError(StoreToolError):
    """Publishing operation error"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.PUBLISH_FAILED)
