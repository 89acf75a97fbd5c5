"""Recursive discovery of variable annotations on data attributes.

Path to the annotations::

    DataTypeTemplates > DOType > DA > Private [> Private]* > Property
"""

import logging
from ..core.types import (
    PATH_DELIMITER,
    AttributeBindingRecord,
    BindingKind,
    BindingTable,
    DataObjectIndex,
)
from .document import SclDocument, SclNode


logger = logging.getLogger(__name__)


PROPERTY_KINDS: dict[str, BindingKind] = {
    "sMonitoringVar": BindingKind.MONITOR,
    "sControlVar": BindingKind.CONTROL,
}


def get_binding_kind(property_name: str) -> BindingKind | None:
    """Get the binding kind announced by a property name."""
    return PROPERTY_KINDS.get(property_name)


def _property_field(node: SclNode, name: str) -> str:
    # OpenPLC61850 writes Name/Value; accept the lowercase spelling too.
    if node.has_attribute(name):
        return node.attribute(name)
    return node.attribute(name.lower())


class AttributePathWalker:
    """Walks DOType templates and resolves annotated variables."""

    def __init__(self, bindings: BindingTable):
        self.bindings = bindings

    def walk(self, node: SclNode, path: str) -> list[AttributeBindingRecord]:
        """Return the records found below ``node`` in document order."""
        records: list[AttributeBindingRecord] = []

        containers = node.children("Private")
        if containers:
            for container in containers:
                child_path = path + PATH_DELIMITER + container.attribute("name")
                records.extend(self.walk(container, child_path))
            return records

        for prop in node.children("Property"):
            record = self._resolve_property(prop, path)
            if record is not None:
                records.append(record)
        return records

    def _resolve_property(self, prop: SclNode, path: str) -> AttributeBindingRecord | None:
        kind = get_binding_kind(_property_field(prop, "Name"))
        variable = _property_field(prop, "Value")
        if kind is None or not variable:
            return None

        address = self.bindings.resolve(variable)
        if address is None:
            logger.debug("Variable %s for %s is not declared", variable, path)

        return AttributeBindingRecord(kind=kind, path=path, variable=variable, address=address)

    def walk_document(
        self,
        document: SclDocument,
        data_objects: DataObjectIndex,
    ) -> list[AttributeBindingRecord]:
        """Walk every DA of every DOType in the document."""
        templates = document.data_type_templates()
        if templates is None:
            return []

        records: list[AttributeBindingRecord] = []
        for do_type in templates.children("DOType"):
            do_type_id = do_type.attribute("id")
            start = data_objects.path_for(do_type_id)
            if start is None:
                logger.debug("%s: DOType %s is not used by any LNodeType", document.source, do_type_id)
                start = ""

            for da in do_type.children("DA"):
                records.extend(self.walk(da, start))

        return records
