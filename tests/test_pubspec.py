from __future__ import annotations

import asyncio

import pytest

from store_tool.api.exceptions import ManifestError
from store_tool.core.pubspec import (
    append_msix_config,
    build_msix_config_block,
    has_msix_config,
    key_position,
    load_pubspec,
    read_app_id,
)
from .conftest import SAMPLE_PUBSPEC


def test_key_position_ignores_commented_keys() -> None:
    assert key_position("msix_config:", "msix_config") == 0
    assert key_position("  MSStore_AppId: 9N", "msstore_appId") == 2
    assert key_position("# msix_config:", "msix_config") == -1
    assert key_position("   ", "msix_config") == -1
    assert key_position("name: app # msix_config", "msix_config") == -1


def test_commented_block_does_not_count_as_present() -> None:
    assert not has_msix_config(SAMPLE_PUBSPEC)


def test_build_block_without_logo(app_identity) -> None:
    block = build_msix_config_block(app_identity, "Contoso")
    assert block == [
        "msix_config:",
        "  display_name: Sample App",
        "  publisher_display_name: Contoso",
        "  publisher: CN=12345678-ABCD-4321-ABCD-1234567890AB",
        "  identity_name: Contoso.SampleApp",
        "  msix_version: 0.0.1.0",
        "  msstore_appId: 9NBLGGH4R315",
    ]


def test_build_block_with_logo(app_identity) -> None:
    block = build_msix_config_block(app_identity, "Contoso", "windows/runner/resources/app_icon.png")
    assert block[-2:] == [
        "  logo_path: windows/runner/resources/app_icon.png",
        "  msstore_appId: 9NBLGGH4R315",
    ]


def test_append_separates_block_with_one_blank_line(app_identity) -> None:
    block = build_msix_config_block(app_identity, "Contoso")
    updated = append_msix_config(SAMPLE_PUBSPEC, block)

    assert updated.startswith(SAMPLE_PUBSPEC)
    assert updated[len(SAMPLE_PUBSPEC):] == "\n" + "".join(f"{line}\n" for line in block)
    assert has_msix_config(updated)
    assert read_app_id(updated) == "9NBLGGH4R315"


def test_append_terminates_unterminated_last_line(app_identity) -> None:
    block = build_msix_config_block(app_identity, "Contoso")
    updated = append_msix_config("name: sample_app", block)
    assert updated.startswith("name: sample_app\n\nmsix_config:\n")


def test_append_keeps_crlf_newlines(app_identity) -> None:
    text = SAMPLE_PUBSPEC.replace("\n", "\r\n")
    updated = append_msix_config(text, build_msix_config_block(app_identity, "Contoso"))
    assert "\n" not in updated.replace("\r\n", "")
    assert updated.endswith("  msstore_appId: 9NBLGGH4R315\r\n")


def test_read_app_id_strips_trailing_comment() -> None:
    text = "msix_config:\n  msstore_appId: 9NBLGGH4R315 # store id\n"
    assert read_app_id(text) == "9NBLGGH4R315"


def test_read_app_id_ignores_commented_lines() -> None:
    assert read_app_id("msix_config:\n  # msstore_appId: 9NOLD\n") is None


def test_read_app_id_last_occurrence_wins() -> None:
    text = "msix_config:\n  msstore_appId: 9NFIRST\n  msstore_appId: 9NSECOND\n"
    assert read_app_id(text) == "9NSECOND"


def test_read_app_id_empty_value_raises() -> None:
    with pytest.raises(ManifestError):
        read_app_id("msix_config:\n  msstore_appId:\n")


def test_load_pubspec_strips_bom(tmp_path) -> None:
    path = tmp_path / "pubspec.yaml"
    path.write_bytes(b"\xef\xbb\xbfname: sample_app\n")
    assert asyncio.run(load_pubspec(path)) == "name: sample_app\n"


def test_load_pubspec_rejects_invalid_utf8(tmp_path) -> None:
    path = tmp_path / "pubspec.yaml"
    path.write_bytes(b"name: sample_app\nauthor: Ren\xe9\n")

    with pytest.raises(ManifestError) as excinfo:
        asyncio.run(load_pubspec(path))

    assert "UTF-8" in str(excinfo.value)
    assert excinfo.value.path == str(path)
