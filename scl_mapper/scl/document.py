"""Read-only, namespace-agnostic view over an SCL document.

The resolution passes only ever need "first child with tag", "all
children with tag" in document order, attribute values and element
text. Tags are matched on their local name so files with and without
the SCL default namespace behave the same.
"""

from __future__ import annotations

import logging
from pathlib import Path

from lxml import etree

from ..core.errors import DocumentError, FileAccessError


logger = logging.getLogger(__name__)

SCL_NAMESPACE = "http://www.iec.ch/61850/2003/SCL"


def _local_name(element) -> str | None:
    # Comments and processing instructions have a non-string tag.
    if not isinstance(element.tag, str):
        return None
    return etree.QName(element).localname


class SclNode:
    """A single element of the structural document."""

    __slots__ = ("_element",)

    def __init__(self, element):
        self._element = element

    @property
    def tag(self) -> str:
        return _local_name(self._element) or ""

    @property
    def text(self) -> str:
        return (self._element.text or "").strip()

    def attribute(self, name: str, default: str = "") -> str:
        return self._element.get(name, default)

    def has_attribute(self, name: str) -> bool:
        return name in self._element.attrib

    def children(self, tag: str) -> list[SclNode]:
        return [SclNode(child) for child in self._element if _local_name(child) == tag]

    def child(self, tag: str) -> SclNode | None:
        for child in self._element:
            if _local_name(child) == tag:
                return SclNode(child)
        return None

    def find(self, *tags: str) -> SclNode | None:
        """Follow the first child at each step, like chained ``child()`` calls."""
        node: SclNode | None = self
        for tag in tags:
            if node is None:
                return None
            node = node.child(tag)
        return node

    def __repr__(self) -> str:
        return f"SclNode({self.tag!r})"


class SclDocument:
    """A parsed SCL file (SCD/ICD/CID)."""

    def __init__(self, root, source: str = "<string>"):
        self.root = SclNode(root)
        self.source = source

    @classmethod
    def from_bytes(cls, data: bytes, source: str = "<string>") -> SclDocument:
        parser = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=True)
        try:
            root = etree.fromstring(data, parser)
        except etree.XMLSyntaxError as e:
            raise DocumentError(f"Error parsing SCL file {source}: {e}", source) from e
        return cls(root, source)

    @classmethod
    def from_string(cls, content: str, source: str = "<string>") -> SclDocument:
        return cls.from_bytes(content.encode("utf-8"), source)

    @classmethod
    def load(cls, path: Path) -> SclDocument:
        """Read and parse an SCL file from disk."""
        path = Path(path)
        logger.info("Parsing SCL file %s", path)
        if not path.is_file():
            raise FileAccessError(f"Failed to open SCL file {path}!", path)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise FileAccessError(f"Failed to read SCL file {path}: {e.strerror or e}", path) from e
        return cls.from_bytes(data, str(path))

    def ied(self) -> SclNode | None:
        return self.root.child("IED")

    def ied_name(self) -> str:
        ied = self.ied()
        return ied.attribute("name") if ied is not None else ""

    def logical_device(self) -> SclNode | None:
        """First LDevice of the first access point that hosts a server.

        Only one logical device per document is supported; any further
        LDevice elements are ignored.
        """
        ied = self.ied()
        if ied is None:
            return None
        for access_point in ied.children("AccessPoint"):
            ldevice = access_point.find("Server", "LDevice")
            if ldevice is not None:
                return ldevice
        return None

    def device_prefix(self) -> str:
        """IED name immediately followed by the LDevice instance."""
        ldevice = self.logical_device()
        ld_inst = ldevice.attribute("inst") if ldevice is not None else ""
        return self.ied_name() + ld_inst

    def data_type_templates(self) -> SclNode | None:
        return self.root.child("DataTypeTemplates")

    def communication(self) -> SclNode | None:
        return self.root.child("Communication")
