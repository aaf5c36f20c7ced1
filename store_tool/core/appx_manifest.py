"""Package.appxmanifest reading and editing

The manifest is parsed into a whitespace preserving DOM, mutated in memory
and written back in one atomic replace. Newline style, byte order mark and
the XML declaration of the original file are kept.
"""

import codecs
import logging
import uuid
from pathlib import Path
from typing import List, Optional, Union
from xml.dom import XMLNS_NAMESPACE, minidom
from xml.dom.minidom import Document, Element
from xml.parsers.expat import ExpatError

from ..api.exceptions import ManifestError
from ..constants import (
    APPX_BUILD_NS,
    APPX_BUILD_PREFIX,
    APPX_FOUNDATION_NS,
    APPX_PHONE_NS,
    APPX_UAP_NS,
    STORE_APP_ID_KEY,
)
from ..models import AppIdentity
from ..utils.file_utils import atomic_write, read_bytes

logger = logging.getLogger(__name__)

DEFAULT_XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>'


def _child_elements(parent: Element, namespace: str, local_name: str) -> List[Element]:
    return [
        node for node in parent.childNodes
        if node.nodeType == node.ELEMENT_NODE
        and node.namespaceURI == namespace
        and node.localName == local_name
    ]


def _first_child_element(parent: Optional[Element], namespace: str, local_name: str) -> Optional[Element]:
    if parent is None:
        return None
    children = _child_elements(parent, namespace, local_name)
    return children[0] if children else None


def _read_declaration(body: bytes) -> Optional[str]:
    """Return the XML declaration exactly as written, if the file has one"""
    body = body.lstrip()
    if not body.startswith(b"<?xml"):
        return None
    end = body.find(b"?>")
    return body[:end + 2].decode("utf-8") if end != -1 else None


class AppxManifest:
    """Editable view over a UWP Package.appxmanifest"""

    def __init__(self,
                 path: Path,
                 document: Document,
                 newline: str = "\n",
                 has_bom: bool = False,
                 declaration: Optional[str] = DEFAULT_XML_DECLARATION,
                 trailing_newline: bool = True):
        self.path = Path(path)
        self.document = document
        self.newline = newline
        self.has_bom = has_bom
        self.declaration = declaration
        self.trailing_newline = trailing_newline

    @classmethod
    async def load(cls, path: Union[str, Path]) -> 'AppxManifest':
        """
        Read and parse a manifest file

        Args:
            path: Manifest file path

        Returns:
            Parsed manifest

        Raises:
            ManifestError: If the file is not a valid appx manifest
        """
        path = Path(path)
        try:
            raw = await read_bytes(path)
        except OSError as e:
            raise ManifestError(f"Cannot read manifest '{path}': {e}", str(path)) from e
        return cls.parse(raw, path)

    @classmethod
    def parse(cls, raw: bytes, path: Union[str, Path]) -> 'AppxManifest':
        """Parse manifest bytes"""
        try:
            document = minidom.parseString(raw)
        except ExpatError as e:
            raise ManifestError(f"Invalid XML in manifest '{path}': {e}", str(path)) from e

        root = document.documentElement
        if root.namespaceURI != APPX_FOUNDATION_NS or root.localName != "Package":
            raise ManifestError(
                f"Manifest '{path}' has no <Package> root in namespace {APPX_FOUNDATION_NS}",
                str(path)
            )

        body = raw[len(codecs.BOM_UTF8):] if raw.startswith(codecs.BOM_UTF8) else raw
        return cls(
            path=Path(path),
            document=document,
            newline="\r\n" if b"\r\n" in raw else "\n",
            has_bom=raw.startswith(codecs.BOM_UTF8),
            declaration=_read_declaration(body),
            trailing_newline=raw.endswith(b"\n"),
        )

    @property
    def package(self) -> Element:
        return self.document.documentElement

    def ensure_build_namespace(self) -> None:
        """Declare the build namespace and mark it ignorable"""
        package = self.package

        tokens = package.getAttribute("IgnorableNamespaces").split()
        if APPX_BUILD_PREFIX not in tokens:
            tokens.append(APPX_BUILD_PREFIX)
            package.setAttribute("IgnorableNamespaces", " ".join(tokens))

        if not package.hasAttribute(f"xmlns:{APPX_BUILD_PREFIX}"):
            package.setAttributeNS(XMLNS_NAMESPACE, f"xmlns:{APPX_BUILD_PREFIX}", APPX_BUILD_NS)
            self._move_declarations_first(package)

    @staticmethod
    def _move_declarations_first(element: Element) -> None:
        # The parser lists namespace declarations before ordinary attributes,
        # so a saved file must use the same order to load back unchanged.
        attributes = [element.attributes.item(i) for i in range(element.attributes.length)]
        ordinary = [
            (attr.namespaceURI, attr.name, attr.value) for attr in attributes
            if attr.name != "xmlns" and not attr.name.startswith("xmlns:")
        ]
        for attr in attributes:
            if attr.name != "xmlns" and not attr.name.startswith("xmlns:"):
                element.removeAttributeNode(attr)
        for namespace, name, value in ordinary:
            element.setAttributeNS(namespace, name, value)

    def _metadata(self, create: bool = False) -> Optional[Element]:
        metadata = _first_child_element(self.package, APPX_BUILD_NS, "Metadata")
        if metadata is None and create:
            metadata = self.document.createElementNS(APPX_BUILD_NS, f"{APPX_BUILD_PREFIX}:Metadata")
            self.package.appendChild(metadata)
        return metadata

    def _app_id_item(self, metadata: Optional[Element]) -> Optional[Element]:
        if metadata is None:
            return None
        for item in _child_elements(metadata, APPX_BUILD_NS, "Item"):
            if item.getAttribute("Name") == STORE_APP_ID_KEY:
                return item
        return None

    def set_app_id(self, app_id: str) -> None:
        """
        Store the application id in the build metadata

        A single metadata container and a single keyed item are created on
        first use; later calls only overwrite the item's value.
        """
        self.ensure_build_namespace()
        metadata = self._metadata(create=True)

        item = self._app_id_item(metadata)
        if item is None:
            item = self.document.createElementNS(APPX_BUILD_NS, f"{APPX_BUILD_PREFIX}:Item")
            item.setAttribute("Name", STORE_APP_ID_KEY)
            metadata.appendChild(item)

        item.setAttribute("Value", app_id)

    def get_app_id(self) -> Optional[str]:
        """Read the application id written by ``set_app_id``"""
        item = self._app_id_item(self._metadata())
        if item is None or not item.hasAttribute("Value"):
            return None
        return item.getAttribute("Value")

    def apply_identity(self, app: AppIdentity, publisher_display_name: Optional[str]) -> None:
        """Overwrite identity, publisher and display name fields"""
        identity = _first_child_element(self.package, APPX_FOUNDATION_NS, "Identity")
        if identity is not None:
            if identity.hasAttribute("Name"):
                identity.setAttribute("Name", app.package_identity_name or "")
            if identity.hasAttribute("Publisher"):
                identity.setAttribute("Publisher", app.publisher_name or "")

        properties = _first_child_element(self.package, APPX_FOUNDATION_NS, "Properties")
        display_name = _first_child_element(properties, APPX_FOUNDATION_NS, "DisplayName")
        if display_name is not None:
            self._set_text(display_name, app.primary_name or "")

        publisher_display = _first_child_element(properties, APPX_FOUNDATION_NS, "PublisherDisplayName")
        if publisher_display is not None:
            self._set_text(publisher_display, publisher_display_name or "")

        applications = _first_child_element(self.package, APPX_FOUNDATION_NS, "Applications")
        application = _first_child_element(applications, APPX_FOUNDATION_NS, "Application")
        visual_elements = _first_child_element(application, APPX_UAP_NS, "VisualElements")
        if visual_elements is not None and visual_elements.hasAttribute("DisplayName"):
            visual_elements.setAttribute("DisplayName", app.primary_name or "")

    def regenerate_phone_product_id(self) -> Optional[str]:
        """Give the phone identity a fresh product id, if the manifest has one"""
        phone_identity = _first_child_element(self.package, APPX_PHONE_NS, "PhoneIdentity")
        if phone_identity is None or not phone_identity.hasAttribute("PhoneProductId"):
            return None

        product_id = str(uuid.uuid4())
        phone_identity.setAttribute("PhoneProductId", product_id)
        return product_id

    def _set_text(self, element: Element, text: str) -> None:
        for child in list(element.childNodes):
            element.removeChild(child)
        element.appendChild(self.document.createTextNode(text))

    def to_bytes(self) -> bytes:
        """Serialize the document the way it was read"""
        parts = [node.toxml() for node in self.document.childNodes]
        if self.declaration:
            parts.insert(0, self.declaration)

        text = "\n".join(parts).replace("\r\n", "\n")
        if self.trailing_newline and not text.endswith("\n"):
            text += "\n"
        if self.newline != "\n":
            text = text.replace("\n", self.newline)

        data = text.encode("utf-8")
        return codecs.BOM_UTF8 + data if self.has_bom else data

    async def save(self) -> None:
        """Write the manifest back to its file"""
        await atomic_write(self.path, self.to_bytes())
        logger.debug(f"Saved manifest {self.path}")
