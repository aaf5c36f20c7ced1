# store_tool/configurators/uwp.py
"""UWP project configurator"""

import os
import sys
from pathlib import Path
from typing import Optional

from ..api.exceptions import AppIdentityError, OperationFailedError, OutputParseError
from ..constants import (
    ENV_PROGRAM_FILES_X86,
    MSBUILD_OUTPUT_ARROW,
    MSBUILD_RESTORE_ARGS,
    MSBUILD_STORE_PROPERTIES,
    MSG_UWP_CONFIGURED,
    MSG_UWP_MORE_INFO,
    ProjectType,
    ReturnCode,
    UWP_DEFAULT_PACKAGE_DIR,
    UWP_MANIFEST_FILE,
    UWP_PACKAGE_EXTENSION,
    UWP_PUBLISH_WORK_DIR,
    UWP_SUBMISSION_DESCRIPTION,
    VSWHERE_MSBUILD_QUERY,
    VSWHERE_RELATIVE_PATH,
)
from ..core.appx_manifest import AppxManifest
from ..models import AppIdentity, OperationResult
from .base import PathLike, ProjectConfigurator


def is_windows_host() -> bool:
    """Check whether packaging tools for Windows can run here"""
    return sys.platform == "win32"


def find_vswhere() -> Optional[Path]:
    """Locate the Visual Studio installer's vswhere.exe"""
    program_files = os.environ.get(ENV_PROGRAM_FILES_X86)
    if not program_files:
        return None

    vswhere = Path(program_files).joinpath(*VSWHERE_RELATIVE_PATH)
    return vswhere if vswhere.is_file() else None


def parse_msixupload_path(output: str) -> Optional[str]:
    """
    Find the upload file MSBuild reports in its output

    The first line mentioning the upload extension is used; the path is
    the text after the last arrow on that line.
    """
    for line in output.splitlines():
        if UWP_PACKAGE_EXTENSION in line:
            return line.split(MSBUILD_OUTPUT_ARROW)[-1].strip()
    return None


class UWPProjectConfigurator(ProjectConfigurator):
    """Configurator for UWP projects built with MSBuild"""

    project_type = ProjectType.UWP
    supported_project_patterns = (UWP_MANIFEST_FILE,)
    package_extension = UWP_PACKAGE_EXTENSION
    submission_description = UWP_SUBMISSION_DESCRIPTION

    async def configure(self,
                        path_or_url: PathLike,
                        app: AppIdentity,
                        publisher_display_name: Optional[str] = None,
                        output: Optional[PathLike] = None) -> OperationResult:
        project_root, manifest_file = self.get_info(path_or_url)

        if app is None or not app.is_resolved:
            raise AppIdentityError("An application id is required to configure a UWP project")

        manifest = await AppxManifest.load(manifest_file)
        manifest.set_app_id(app.id)
        manifest.apply_identity(app, publisher_display_name or app.publisher_display_name)
        product_id = manifest.regenerate_phone_product_id()
        if product_id:
            self.logger.debug(f"New PhoneProductId: {product_id}")

        await manifest.save()
        self.logger.info(f"Wrote store identity for {app.id} to {manifest_file}")

        self.status.message(MSG_UWP_CONFIGURED.format(path=project_root))
        self.status.message(MSG_UWP_MORE_INFO)

        return OperationResult.success(Path(output) if output else None)

    async def package(self,
                      path_or_url: PathLike,
                      app: Optional[AppIdentity] = None,
                      output: Optional[PathLike] = None) -> OperationResult:
        project_root, _ = self.get_info(path_or_url)

        if not is_windows_host():
            self.logger.error("Packaging UWP apps is only supported on Windows")
            return OperationResult.failure(ReturnCode.UNSUPPORTED_PLATFORM)

        vswhere = find_vswhere()
        if vswhere is None:
            self.logger.error("Visual Studio 2017 or later is required to package UWP apps")
            return OperationResult.failure(ReturnCode.TOOLCHAIN_MISSING)

        msbuild = await self._find_msbuild(vswhere, project_root)
        if msbuild is None:
            return OperationResult.failure(ReturnCode.TOOLCHAIN_MISSING)

        await self._restore_packages(msbuild, project_root)

        output_dir = Path(output).resolve() if output else project_root / UWP_DEFAULT_PACKAGE_DIR
        upload_file = await self._build_package(msbuild, project_root, output_dir)

        return OperationResult.success(upload_file.parent)

    async def publish(self,
                      path_or_url: PathLike,
                      app: Optional[AppIdentity] = None,
                      input_dir: Optional[PathLike] = None) -> int:
        project_root, manifest_file = self.get_info(path_or_url)

        async def recover_app_id() -> Optional[str]:
            manifest = await AppxManifest.load(manifest_file)
            return manifest.get_app_id()

        return await self._publish_packages(
            app,
            recover_app_id,
            input_dir,
            project_root / UWP_DEFAULT_PACKAGE_DIR,
            project_root.joinpath(*UWP_PUBLISH_WORK_DIR),
        )

    async def _find_msbuild(self, vswhere: Path, project_root: Path) -> Optional[str]:
        async with self.status.track("Finding MSBuild...") as status:
            result = await self.command_runner.run(vswhere, VSWHERE_MSBUILD_QUERY, project_root)

            candidates = [
                line.strip() for line in result.stdout.splitlines()
                if line.strip().lower().endswith("msbuild.exe")
            ]
            if not result.succeeded or not candidates:
                status.error("Could not find MSBuild.")
                return None

            status.success("Found MSBuild.")
            return candidates[0]

    async def _restore_packages(self, msbuild: str, project_root: Path) -> None:
        async with self.status.track("Restoring packages...") as status:
            result = await self.command_runner.run(msbuild, MSBUILD_RESTORE_ARGS, project_root)
            if not result.succeeded:
                raise OperationFailedError("Failed to restore packages.", result.stderr or result.stdout)
            status.success("Packages restored successfully!")

    async def _build_package(self, msbuild: str, project_root: Path, output_dir: Path) -> Path:
        properties = [
            *MSBUILD_STORE_PROPERTIES,
            f"AppxPackageDir={output_dir}",
            "UapAppxPackageBuildMode=StoreUpload",
        ]

        async with self.status.track("Building MSIX...") as status:
            result = await self.command_runner.run(msbuild, ["/p:" + ";".join(properties)], project_root)
            if not result.succeeded:
                raise OperationFailedError("Failed to build the UWP package.", result.stderr or result.stdout)

            upload_path = parse_msixupload_path(result.stdout)
            if not upload_path:
                raise OutputParseError(f"Could not find '{UWP_PACKAGE_EXTENSION}' file!", result.stdout)

            upload_file = Path(upload_path)
            if not upload_file.is_absolute():
                upload_file = project_root / upload_file

            status.success("Store package built successfully!")

        self.logger.info(f"Store package: {upload_file}")
        return upload_file
