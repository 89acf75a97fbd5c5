"""Structural indexing of logical nodes and data objects."""

import logging
from dataclasses import dataclass

from ..core.types import (
    DEVICE_DELIMITER,
    PATH_DELIMITER,
    DataObjectIndex,
    LogicalNodeIndex,
)
from .document import SclDocument


logger = logging.getLogger(__name__)


@dataclass
class StructuralIndex:
    """Per-document lookup tables produced by the indexer."""
    device_prefix: str
    logical_nodes: LogicalNodeIndex
    data_objects: DataObjectIndex


class StructuralIndexer:
    """Builds the LN-type and DO-type lookup tables of one document."""

    def index_logical_nodes(self, document: SclDocument) -> LogicalNodeIndex:
        """Map each LN type id to its label (lnClass + inst)."""
        index = LogicalNodeIndex()
        ldevice = document.logical_device()
        if ldevice is None:
            logger.debug("%s: no logical device found", document.source)
            return index

        for ln in ldevice.children("LN"):
            ln_type = ln.attribute("lnType")
            index.labels[ln_type] = ln.attribute("lnClass") + ln.attribute("inst")

        return index

    def index_data_objects(
        self,
        document: SclDocument,
        logical_nodes: LogicalNodeIndex,
    ) -> DataObjectIndex:
        """
        Map each DO type id to the object reference of the data object using it.

        The path is ``<ied><ldInst>/<lnLabel>.<doName>``. An LNodeType with no
        matching LN contributes an empty label.
        """
        index = DataObjectIndex()
        templates = document.data_type_templates()
        if templates is None:
            return index

        prefix = document.device_prefix()
        for lnode_type in templates.children("LNodeType"):
            ln_type = lnode_type.attribute("id")
            label = logical_nodes.label_for(ln_type)
            if label is None:
                logger.debug("%s: LNodeType %s is not instantiated", document.source, ln_type)
                label = ""

            for do in lnode_type.children("DO"):
                index.paths[do.attribute("type")] = (
                    prefix + DEVICE_DELIMITER + label + PATH_DELIMITER + do.attribute("name")
                )

        return index

    def build(self, document: SclDocument) -> StructuralIndex:
        logical_nodes = self.index_logical_nodes(document)
        data_objects = self.index_data_objects(document, logical_nodes)
        logger.debug(
            "%s: indexed %d LN types, %d DO types",
            document.source, len(logical_nodes.labels), len(data_objects.paths),
        )
        return StructuralIndex(
            device_prefix=document.device_prefix(),
            logical_nodes=logical_nodes,
            data_objects=data_objects,
        )
