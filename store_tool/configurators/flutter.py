# store_tool/configurators/flutter.py
"""Flutter project configurator"""

from pathlib import Path
from typing import Optional, Tuple

from ..api.exceptions import AppIdentityError, OperationFailedError, OutputParseError
from ..constants import (
    ANSI_ESCAPE_PATTERN,
    DEFAULT_FLUTTER_EXECUTABLE,
    FLUTTER_DEFAULT_PACKAGE_DIR,
    FLUTTER_MANIFEST_FILE,
    FLUTTER_PACKAGE_EXTENSION,
    FLUTTER_PUBLISH_WORK_DIR,
    FLUTTER_RESOURCES_DIR,
    FLUTTER_SUBMISSION_DESCRIPTION,
    MSG_FLUTTER_CONFIGURED,
    MSG_FLUTTER_MORE_INFO,
    MSIX_ALREADY_PRESENT_EXIT_CODE,
    MSIX_ALREADY_PRESENT_MARKER,
    MSIX_CREATED_MARKER,
    MSIX_CREATED_SEPARATOR,
    MSIX_DEPENDENCY,
    MSIX_NO_CHANGES_MARKER,
    ProjectType,
    ReturnCode,
)
from ..core.command_runner import CommandRunner
from ..core.pubspec import (
    append_msix_config,
    build_msix_config_block,
    has_msix_config,
    load_pubspec,
    read_app_id,
    save_pubspec,
)
from ..core.status import StatusReporter
from ..models import AppIdentity, CommandResult, OperationResult
from ..services.image_converter import ImageConverter
from ..services.store_api import PublishCollaborators, StoreAPI
from ..utils.file_utils import relative_posix_path
from .base import PathLike, ProjectConfigurator


def is_msix_installed(result: CommandResult) -> bool:
    """Interpret the output of a dry-run ``pub add`` for the msix package"""
    if result.exit_code == 0 and MSIX_NO_CHANGES_MARKER in result.stdout:
        return True
    return (result.exit_code == MSIX_ALREADY_PRESENT_EXIT_CODE
            and MSIX_ALREADY_PRESENT_MARKER in result.stderr)


def parse_msix_path(output: str) -> Optional[str]:
    """
    Find the package path reported by ``msix:pack``

    Terminal escape sequences are stripped first. The last line carrying
    the creation marker wins and the path is the text after its first
    ``": "`` separator.
    """
    cleaned = ANSI_ESCAPE_PATTERN.sub("", output)
    lines = [line for line in cleaned.splitlines() if MSIX_CREATED_MARKER in line]
    if not lines:
        return None

    line = lines[-1]
    index = line.find(MSIX_CREATED_SEPARATOR)
    if index == -1:
        return None

    return line[index + len(MSIX_CREATED_SEPARATOR):].strip() or None


class FlutterProjectConfigurator(ProjectConfigurator):
    """Configurator for Flutter projects packaged with the msix package"""

    project_type = ProjectType.FLUTTER
    supported_project_patterns = (FLUTTER_MANIFEST_FILE,)
    package_extension = FLUTTER_PACKAGE_EXTENSION
    submission_description = FLUTTER_SUBMISSION_DESCRIPTION

    def __init__(self,
                 command_runner: Optional[CommandRunner] = None,
                 store_api: Optional[StoreAPI] = None,
                 status_reporter: Optional[StatusReporter] = None,
                 collaborators: Optional[PublishCollaborators] = None,
                 image_converter: Optional[ImageConverter] = None,
                 flutter_executable: str = DEFAULT_FLUTTER_EXECUTABLE):
        """
        Initialize Flutter configurator

        Args:
            command_runner: Runner for external build tools
            store_api: Store API client used by publish
            status_reporter: Observer for long-running steps
            collaborators: Helpers passed through to the store API
            image_converter: Converts the app icon into a store logo
            flutter_executable: Flutter command or path
        """
        super().__init__(command_runner, store_api, status_reporter, collaborators)
        self.image_converter = image_converter or ImageConverter()
        self.flutter_executable = flutter_executable

    async def configure(self,
                        path_or_url: PathLike,
                        app: AppIdentity,
                        publisher_display_name: Optional[str] = None,
                        output: Optional[PathLike] = None) -> OperationResult:
        project_root, pubspec_file = self.get_info(path_or_url)

        if app is None or not app.is_resolved:
            raise AppIdentityError("An application id is required to configure a Flutter project")

        await self._pub_get(project_root)
        await self.ensure_msix_dependency(project_root)

        text = await load_pubspec(pubspec_file)
        if has_msix_config(text):
            self.logger.info(f"{pubspec_file} already has an msix_config section, leaving it unchanged")
        else:
            converted, logo_file = await self._generate_logo(project_root)
            if not converted:
                return OperationResult.failure(ReturnCode.PRECONDITION_FAILED)

            logo_path = relative_posix_path(logo_file, project_root) if logo_file else None
            block = build_msix_config_block(
                app,
                publisher_display_name or app.publisher_display_name,
                logo_path,
            )
            await save_pubspec(pubspec_file, append_msix_config(text, block))
            self.logger.info(f"Added msix_config for {app.id} to {pubspec_file}")

            self.status.message(MSG_FLUTTER_CONFIGURED.format(path=project_root))
            self.status.message(MSG_FLUTTER_MORE_INFO)

        return OperationResult.success(Path(output) if output else None)

    async def package(self,
                      path_or_url: PathLike,
                      app: Optional[AppIdentity] = None,
                      output: Optional[PathLike] = None) -> OperationResult:
        project_root, _ = self.get_info(path_or_url)

        # configure already ran pub get when it handed us an identity
        if app is None:
            await self._pub_get(project_root)

        await self.ensure_msix_dependency(project_root)

        arguments = ["--store"]
        if output:
            arguments += ["--output-path", str(Path(output).resolve())]

        async with self.status.track("Packaging 'msix'...") as status:
            result = await self._flutter(project_root, "pub", "run", "msix:build", *arguments)
            if not result.succeeded:
                raise OperationFailedError("Failed to build the Windows application.",
                                           result.stderr or result.stdout)

            result = await self._flutter(project_root, "pub", "run", "msix:pack", *arguments)
            if not result.succeeded:
                raise OperationFailedError("Failed to generate the msix package.",
                                           result.stderr or result.stdout)

            msix_path = parse_msix_path(result.stdout)
            if msix_path is None:
                raise OutputParseError("Failed to find the path to the packaged msix file.", result.stdout)

            msix_file = Path(msix_path)
            if not msix_file.is_absolute():
                msix_file = project_root / msix_file

            status.success("Store package built successfully!")

        self.logger.info(f"Store package: {msix_file}")
        return OperationResult.success(msix_file.parent)

    async def publish(self,
                      path_or_url: PathLike,
                      app: Optional[AppIdentity] = None,
                      input_dir: Optional[PathLike] = None) -> int:
        project_root, pubspec_file = self.get_info(path_or_url)

        async def recover_app_id() -> Optional[str]:
            return read_app_id(await load_pubspec(pubspec_file))

        return await self._publish_packages(
            app,
            recover_app_id,
            input_dir,
            project_root.joinpath(*FLUTTER_DEFAULT_PACKAGE_DIR),
            project_root.joinpath(*FLUTTER_PUBLISH_WORK_DIR),
        )

    async def ensure_msix_dependency(self, project_root: Path) -> bool:
        """
        Add the msix package as a dev dependency when it is missing

        Args:
            project_root: Flutter project root

        Returns:
            True if the package was installed by this call

        Raises:
            OperationFailedError: If installing the package fails
        """
        async with self.status.track(f"Checking if package '{MSIX_DEPENDENCY}' is already installed...") as status:
            result = await self._flutter(project_root, "pub", "add", "--dev", MSIX_DEPENDENCY, "--dry-run")
            installed = is_msix_installed(result)
            if installed:
                status.success(f"'{MSIX_DEPENDENCY}' package is already installed, no need to install it again.")
            else:
                status.success(f"'{MSIX_DEPENDENCY}' package is not yet installed.")

        if installed:
            return False

        async with self.status.track(f"Installing '{MSIX_DEPENDENCY}' package...") as status:
            result = await self._flutter(project_root, "pub", "add", "--dev", MSIX_DEPENDENCY)
            if not result.succeeded:
                raise OperationFailedError(f"Failed to install the '{MSIX_DEPENDENCY}' package.",
                                           result.stderr or result.stdout)
            status.success(f"'{MSIX_DEPENDENCY}' package installed successfully!")

        return True

    async def _pub_get(self, project_root: Path) -> None:
        async with self.status.track("Running 'flutter pub get'...") as status:
            result = await self._flutter(project_root, "pub", "get")
            if not result.succeeded:
                raise OperationFailedError("Failed to run 'flutter pub get'.", result.stderr or result.stdout)
            status.success("'flutter pub get' ran successfully.")

    async def _generate_logo(self, project_root: Path) -> Tuple[bool, Optional[Path]]:
        """
        Convert the Windows runner icon into a PNG logo

        Returns:
            (False, None) when conversion failed, otherwise (True, logo file
            or None when the project has no icon)
        """
        resources_dir = project_root.joinpath(*FLUTTER_RESOURCES_DIR)
        if not resources_dir.is_dir():
            self.logger.debug(f"No resources directory at {resources_dir}, skipping logo")
            return True, None

        icons = sorted(p for p in resources_dir.glob("*.ico") if p.is_file())
        if not icons:
            self.logger.debug(f"No .ico file in {resources_dir}, skipping logo")
            return True, None

        icon_file = icons[0]
        logo_file = resources_dir / f"{icon_file.stem}.png"

        async with self.status.track(f"Generating logo from '{icon_file.name}'...") as status:
            converted = await self.image_converter.convert_icon_to_image(icon_file, logo_file)
            if not converted:
                status.error(f"Error generating '{logo_file.name}' from '{icon_file.name}'.")
                return False, None
            status.success(f"Logo '{logo_file.name}' generated.")

        return True, logo_file

    async def _flutter(self, project_root: Path, *arguments: str) -> CommandResult:
        return await self.command_runner.run(self.flutter_executable, arguments, project_root)
