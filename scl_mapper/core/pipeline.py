"""Pipeline driver: bindings once, then every structural document in order."""

import logging
from pathlib import Path

from ..scl.communication import EndpointExtractor
from ..scl.document import SclDocument
from ..scl.indexer import StructuralIndexer
from ..scl.reports import ReportDatasetResolver
from ..scl.walker import AttributePathWalker
from ..st.loader import BindingTableLoader
from .types import (
    BindingKind,
    BindingTable,
    DocumentResult,
    MappingResult,
    Role,
)


logger = logging.getLogger(__name__)


class MappingPipeline:
    """Owns the state of one run and drives every resolution pass."""

    def __init__(self, role: Role, bindings: BindingTable):
        self.role = role
        self.bindings = bindings
        self.indexer = StructuralIndexer()
        self.walker = AttributePathWalker(bindings)
        self.report_resolver = ReportDatasetResolver()
        self.endpoint_extractor = EndpointExtractor()

    @classmethod
    def from_st_file(cls, role: Role, st_file: Path) -> "MappingPipeline":
        """Create a pipeline with bindings loaded from an ST file."""
        bindings = BindingTableLoader().load_file(st_file)
        return cls(role, bindings)

    def process_document(self, document: SclDocument) -> DocumentResult:
        """Run all passes for a single document."""
        index = self.indexer.build(document)
        records = self.walker.walk_document(document, index.data_objects)

        result = DocumentResult(
            source=document.source,
            device_name=index.device_prefix,
            records=records,
        )

        if self.role == Role.CLIENT:
            result.control_variables = [r for r in records if r.kind == BindingKind.CONTROL]
            result.endpoints = self.endpoint_extractor.extract(document)
            result.report_instances = self.report_resolver.resolve(document)

        logger.info(
            "%s: %d mapped attributes, %d report instances",
            document.source, len(result.records), len(result.report_instances),
        )
        return result

    def run(self, documents: list[SclDocument]) -> MappingResult:
        result = MappingResult(role=self.role)
        for document in documents:
            result.documents.append(self.process_document(document))
        return result

    def run_files(self, scl_files: list[Path]) -> MappingResult:
        """Load and process documents one at a time, in the given order."""
        result = MappingResult(role=self.role)
        for path in scl_files:
            document = SclDocument.load(path)
            result.documents.append(self.process_document(document))
        return result
