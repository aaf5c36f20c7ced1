from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import pytest
from PIL import Image

from store_tool.core.status import StatusReporter
from store_tool.models import AppIdentity, CommandResult
from store_tool.services.store_api import StoreAPI

SAMPLE_APPX_MANIFEST = """<?xml version="1.0" encoding="utf-8"?>
<Package xmlns="http://schemas.microsoft.com/appx/manifest/foundation/windows10" xmlns:mp="http://schemas.microsoft.com/appx/2014/phone/manifest" xmlns:uap="http://schemas.microsoft.com/appx/manifest/uap/windows10" IgnorableNamespaces="uap mp">

  <Identity Name="00000000-0000-0000-0000-000000000000" Publisher="CN=Developer" Version="1.0.0.0"/>

  <mp:PhoneIdentity PhoneProductId="11111111-1111-1111-1111-111111111111" PhonePublisherId="00000000-0000-0000-0000-000000000000"/>

  <Properties>
    <DisplayName>SampleApp</DisplayName>
    <PublisherDisplayName>Developer</PublisherDisplayName>
    <Logo>Assets\\StoreLogo.png</Logo>
  </Properties>

  <!-- application entry -->
  <Applications>
    <Application Id="App" Executable="$targetnametoken$.exe" EntryPoint="SampleApp.App">
      <uap:VisualElements DisplayName="SampleApp" Square150x150Logo="Assets\\Square150x150Logo.png" Square44x44Logo="Assets\\Square44x44Logo.png" Description="SampleApp" BackgroundColor="transparent"/>
    </Application>
  </Applications>
</Package>
"""

SAMPLE_PUBSPEC = """name: sample_app
description: A new Flutter project.
# msix_config: left over from an old template
publish_to: 'none'
version: 1.0.0+1

environment:
  sdk: '>=3.0.0 <4.0.0'

dependencies:
  flutter:
    sdk: flutter

dev_dependencies:
  flutter_test:
    sdk: flutter
"""


class FakeCommandRunner:
    """Scripted CommandRunner stand-in

    Each scripted response names leading arguments; an argument matches when
    it starts with the scripted text. The longest match wins and unmatched
    calls succeed with empty output.
    """

    def __init__(self):
        self.calls: List[Tuple[str, List[str], Optional[Path]]] = []
        self._responses: List[Tuple[Tuple[str, ...], CommandResult]] = []

    def add(self, *argument_prefix: str, exit_code: int = 0, stdout: str = "", stderr: str = "") -> None:
        self._responses.append((tuple(argument_prefix), CommandResult(exit_code, stdout, stderr)))

    async def run(self, executable, arguments: Sequence[str] = (), working_directory=None) -> CommandResult:
        arguments = [str(arg) for arg in arguments]
        self.calls.append((str(executable), arguments, working_directory))

        matches = [
            (prefix, result) for prefix, result in self._responses
            if len(arguments) >= len(prefix)
            and all(arg.startswith(p) for arg, p in zip(arguments, prefix))
        ]
        if not matches:
            return CommandResult(0)
        return max(matches, key=lambda match: len(match[0]))[1]

    def arguments(self) -> List[List[str]]:
        return [arguments for _, arguments, _ in self.calls]


class RecordingStoreAPI(StoreAPI):
    """Store API that records what it was asked to publish"""

    def __init__(self, result: int = 0):
        super().__init__()
        self.result = result
        self.published = []

    async def ensure_app_initialized(self, app, recover_app_id):
        if app is not None and app.is_resolved:
            return app
        app_id = await recover_app_id()
        return AppIdentity(id=app_id) if app_id else None

    async def publish(self, app, submission_data, output_dir, package_files, collaborators):
        data = await submission_data("en-us")
        self.published.append({
            'app': app,
            'submission': data,
            'output_dir': output_dir,
            'package_files': list(package_files),
            'collaborators': collaborators,
        })
        return self.result


class RecordingStatusReporter(StatusReporter):
    def __init__(self):
        self.events = []

    def message(self, text):
        self.events.append(("message", text))

    def on_start(self, message):
        self.events.append(("start", message))

    def on_success(self, message):
        self.events.append(("success", message))

    def on_error(self, message):
        self.events.append(("error", message))


def create_icon(path: Path, size: int = 64) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    image = Image.new("RGBA", (size, size), (0, 120, 215, 255))
    image.save(path, format="ICO", sizes=[(size, size)])
    return path


@pytest.fixture()
def app_identity() -> AppIdentity:
    return AppIdentity(
        id="9NBLGGH4R315",
        package_identity_name="Contoso.SampleApp",
        publisher_name="CN=12345678-ABCD-4321-ABCD-1234567890AB",
        primary_name="Sample App",
        publisher_display_name="Contoso",
    )


@pytest.fixture()
def uwp_project(tmp_path: Path) -> Path:
    project = tmp_path / "SampleApp"
    project.mkdir()
    (project / "Package.appxmanifest").write_text(SAMPLE_APPX_MANIFEST, encoding="utf-8")
    (project / "SampleApp.csproj").write_text("<Project/>", encoding="utf-8")
    return project


@pytest.fixture()
def flutter_project(tmp_path: Path) -> Path:
    project = tmp_path / "sample_app"
    project.mkdir()
    (project / "pubspec.yaml").write_text(SAMPLE_PUBSPEC, encoding="utf-8")
    return project


@pytest.fixture()
def fake_runner() -> FakeCommandRunner:
    return FakeCommandRunner()


@pytest.fixture()
def store_api() -> RecordingStoreAPI:
    return RecordingStoreAPI()
