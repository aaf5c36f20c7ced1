from __future__ import annotations

from pathlib import Path

import pytest

from store_tool.models import AppIdentity, OperationResult, StoreConfig, SubmissionData, SubmissionImage, ToolConfig


def test_app_identity_merge_prefers_own_values() -> None:
    explicit = AppIdentity(id="9N1", primary_name=None)
    defaults = AppIdentity(id="9NDEFAULT", primary_name="Sample App", publisher_name="CN=Contoso")

    merged = explicit.merged_with(defaults)

    assert merged == AppIdentity(id="9N1", primary_name="Sample App", publisher_name="CN=Contoso")
    assert explicit.primary_name is None


def test_app_identity_dict_round_trip() -> None:
    app = AppIdentity(id="9N1", package_identity_name="Contoso.App")
    assert app.to_dict() == {'id': '9N1', 'package_identity_name': 'Contoso.App'}
    assert AppIdentity.from_dict({**app.to_dict(), 'unknown': 1}) == app
    assert not AppIdentity.from_dict(None).is_resolved


def test_operation_result() -> None:
    assert OperationResult.success(Path("out")) == OperationResult(0, Path("out"))
    assert not OperationResult.failure(-2).is_success


def test_submission_data_to_dict() -> None:
    data = SubmissionData("My App", [SubmissionImage("logo.png", "StoreLogo")])
    assert data.to_dict() == {
        'description': 'My App',
        'images': [{'file_name': 'logo.png', 'image_type': 'StoreLogo', 'description': None}],
    }


def test_store_config_validation() -> None:
    with pytest.raises(ValueError):
        StoreConfig(type="custom")
    with pytest.raises(ValueError):
        StoreConfig(type="ftp")


def test_tool_config_round_trip() -> None:
    config = ToolConfig.from_dict({
        'publisher_display_name': 'Contoso',
        'store': {'type': 'filesystem', 'path': 'drop'},
        'app': {'id': '9N1'},
    })
    assert ToolConfig.from_dict(config.to_dict()) == config
