from __future__ import annotations

import asyncio
import codecs
import re
from pathlib import Path

import pytest

from store_tool.api.exceptions import ManifestError
from store_tool.core.appx_manifest import AppxManifest
from .conftest import SAMPLE_APPX_MANIFEST

PHONE_ID = re.compile(r'PhoneProductId="[^"]*"')


def parse(text: str) -> AppxManifest:
    return AppxManifest.parse(text.encode("utf-8"), "Package.appxmanifest")


def test_untouched_manifest_round_trips_byte_for_byte() -> None:
    manifest = parse(SAMPLE_APPX_MANIFEST)
    assert manifest.to_bytes() == SAMPLE_APPX_MANIFEST.encode("utf-8")


def test_crlf_and_bom_are_preserved() -> None:
    raw = codecs.BOM_UTF8 + SAMPLE_APPX_MANIFEST.replace("\n", "\r\n").encode("utf-8")
    manifest = AppxManifest.parse(raw, "Package.appxmanifest")
    assert manifest.to_bytes() == raw


def test_set_app_id_adds_namespace_and_metadata() -> None:
    manifest = parse(SAMPLE_APPX_MANIFEST)
    manifest.set_app_id("9NBLGGH4R315")
    text = manifest.to_bytes().decode("utf-8")

    assert 'IgnorableNamespaces="uap mp build"' in text
    assert 'xmlns:build="http://schemas.microsoft.com/developer/appx/2015/build"' in text
    assert '<build:Item Name="MSStoreCLIAppId" Value="9NBLGGH4R315"/>' in text
    assert manifest.get_app_id() == "9NBLGGH4R315"


def test_set_app_id_twice_keeps_single_entries() -> None:
    manifest = parse(SAMPLE_APPX_MANIFEST)
    manifest.set_app_id("FIRST")
    manifest = parse(manifest.to_bytes().decode("utf-8"))
    manifest.set_app_id("SECOND")
    text = manifest.to_bytes().decode("utf-8")

    assert text.count("<build:Metadata") == 1
    assert text.count('Name="MSStoreCLIAppId"') == 1
    assert text.count("xmlns:build=") == 1
    ignorable = re.search(r'IgnorableNamespaces="([^"]*)"', text).group(1)
    assert ignorable.split().count("build") == 1
    assert manifest.get_app_id() == "SECOND"


def test_missing_ignorable_namespaces_attribute_is_created() -> None:
    manifest = parse(SAMPLE_APPX_MANIFEST.replace(' IgnorableNamespaces="uap mp"', ""))
    manifest.ensure_build_namespace()
    assert manifest.package.getAttribute("IgnorableNamespaces") == "build"


def test_apply_identity_overwrites_fields(app_identity) -> None:
    manifest = parse(SAMPLE_APPX_MANIFEST)
    manifest.apply_identity(app_identity, "Contoso Ltd")
    text = manifest.to_bytes().decode("utf-8")

    assert 'Name="Contoso.SampleApp"' in text
    assert 'Publisher="CN=12345678-ABCD-4321-ABCD-1234567890AB"' in text
    assert "<DisplayName>Sample App</DisplayName>" in text
    assert "<PublisherDisplayName>Contoso Ltd</PublisherDisplayName>" in text
    assert 'uap:VisualElements DisplayName="Sample App"' in text
    # untouched attributes keep their values
    assert 'Version="1.0.0.0"' in text
    assert 'Description="SampleApp"' in text


def test_regenerate_phone_product_id() -> None:
    manifest = parse(SAMPLE_APPX_MANIFEST)
    first = manifest.regenerate_phone_product_id()
    second = manifest.regenerate_phone_product_id()

    assert first and second and first != second
    assert f'PhoneProductId="{second}"' in manifest.to_bytes().decode("utf-8")


def test_regenerate_phone_product_id_without_phone_identity() -> None:
    text = PHONE_ID.sub("", SAMPLE_APPX_MANIFEST.replace("<mp:PhoneIdentity", "<mp:Other"))
    manifest = parse(text)
    assert manifest.regenerate_phone_product_id() is None


def test_save_and_load_recovers_app_id(tmp_path: Path) -> None:
    path = tmp_path / "Package.appxmanifest"
    path.write_text(SAMPLE_APPX_MANIFEST, encoding="utf-8")

    async def scenario():
        manifest = await AppxManifest.load(path)
        manifest.set_app_id("9NBLGGH4R315")
        await manifest.save()
        return (await AppxManifest.load(path)).get_app_id()

    assert asyncio.run(scenario()) == "9NBLGGH4R315"
    assert [p.name for p in tmp_path.iterdir()] == ["Package.appxmanifest"]


def test_get_app_id_absent() -> None:
    assert parse(SAMPLE_APPX_MANIFEST).get_app_id() is None


def test_invalid_xml_raises_manifest_error() -> None:
    with pytest.raises(ManifestError):
        parse("<Package><Identity></Package>")


def test_wrong_root_element_raises_manifest_error() -> None:
    with pytest.raises(ManifestError):
        parse('<?xml version="1.0"?>\n<Project xmlns="urn:other"/>\n')


def test_missing_file_raises_manifest_error(tmp_path: Path) -> None:
    with pytest.raises(ManifestError):
        asyncio.run(AppxManifest.load(tmp_path / "Package.appxmanifest"))


def test_build_namespace_is_declared_before_ordinary_attributes() -> None:
    manifest = parse(SAMPLE_APPX_MANIFEST)
    manifest.set_app_id("9NBLGGH4R315")
    saved = manifest.to_bytes()

    reloaded = AppxManifest.parse(saved, "Package.appxmanifest")
    assert reloaded.to_bytes() == saved

    names = [manifest.package.attributes.item(i).name for i in range(manifest.package.attributes.length)]
    assert names[-1] == "IgnorableNamespaces"
    assert names.index("xmlns:build") < names.index("IgnorableNamespaces")


def test_original_xml_declaration_is_kept() -> None:
    declaration = "<?xml version='1.0' encoding='UTF-8' standalone='yes'?>"
    text = SAMPLE_APPX_MANIFEST.replace('<?xml version="1.0" encoding="utf-8"?>', declaration)

    manifest = parse(text)
    assert manifest.to_bytes() == text.encode("utf-8")

    manifest.set_app_id("9NBLGGH4R315")
    assert manifest.to_bytes().decode("utf-8").startswith(declaration + "\n")


def test_manifest_without_declaration_stays_without_one() -> None:
    text = SAMPLE_APPX_MANIFEST.split("\n", 1)[1]
    assert parse(text).to_bytes() == text.encode("utf-8")
