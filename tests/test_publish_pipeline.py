from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from store_tool.api.exceptions import PackageNotFoundError
from store_tool.core.publish_pipeline import PublishPipeline, find_package_artifacts
from store_tool.models import AppIdentity, SubmissionData
from store_tool.services.store_api import PublishCollaborators
from .conftest import RecordingStoreAPI


async def no_app_id():
    return None


async def submission(listing_language: str) -> SubmissionData:
    return SubmissionData(description="My App")


def make_packages(directory: Path, *names: str) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    for name in names:
        (directory / name).write_bytes(b"")
    return directory


def test_find_package_artifacts_filters_by_exact_suffix(tmp_path: Path) -> None:
    directory = make_packages(tmp_path / "pkg", "b.msix", "a.msix", "a.msixupload", "a.msix.zip", "readme.txt")
    (directory / "sub").mkdir()
    (directory / "sub" / "c.msix").write_bytes(b"")

    assert [p.name for p in find_package_artifacts(directory, ".msix")] == ["a.msix", "b.msix"]
    assert [p.name for p in find_package_artifacts(directory, ".msixupload")] == ["a.msixupload"]


def test_find_package_artifacts_reads_disk_each_time(tmp_path: Path) -> None:
    directory = make_packages(tmp_path / "pkg")
    assert find_package_artifacts(directory, ".msix") == []
    make_packages(directory, "late.msix")
    assert [p.name for p in find_package_artifacts(directory, ".msix")] == ["late.msix"]


def test_find_package_artifacts_missing_directory(tmp_path: Path) -> None:
    with pytest.raises(PackageNotFoundError):
        find_package_artifacts(tmp_path / "missing", ".msix")


def test_pipeline_returns_store_result_unchanged(tmp_path: Path) -> None:
    store = RecordingStoreAPI(result=7)
    collaborators = PublishCollaborators(browser_launcher=object())
    packages = make_packages(tmp_path / "in", "app.msix")

    code = asyncio.run(PublishPipeline(store, collaborators).run(
        AppIdentity(id="9N1"), no_app_id, packages, tmp_path / "default",
        tmp_path / "work", ".msix", submission,
    ))

    assert code == 7
    (published,) = store.published
    assert published['collaborators'] is collaborators
    assert published['submission'].description == "My App"
    assert (tmp_path / "work").is_dir()


def test_pipeline_uses_default_input_dir(tmp_path: Path) -> None:
    store = RecordingStoreAPI()
    make_packages(tmp_path / "default", "app.msix")

    code = asyncio.run(PublishPipeline(store).run(
        AppIdentity(id="9N1"), no_app_id, None, tmp_path / "default",
        tmp_path / "work", ".msix", submission,
    ))

    assert code == 0
    assert store.published[0]['package_files'] == [tmp_path / "default" / "app.msix"]


def test_pipeline_without_identity(tmp_path: Path) -> None:
    store = RecordingStoreAPI()

    code = asyncio.run(PublishPipeline(store).run(
        None, no_app_id, None, tmp_path / "default", tmp_path / "work", ".msix", submission,
    ))

    assert code == -1
    assert store.published == []
    assert not (tmp_path / "work").exists()


def test_pipeline_recovers_identity(tmp_path: Path) -> None:
    store = RecordingStoreAPI()
    make_packages(tmp_path / "default", "app.msix")

    async def recover():
        return "9NRECOVERED"

    asyncio.run(PublishPipeline(store).run(
        AppIdentity(), recover, None, tmp_path / "default", tmp_path / "work", ".msix", submission,
    ))

    assert store.published[0]['app'].id == "9NRECOVERED"
