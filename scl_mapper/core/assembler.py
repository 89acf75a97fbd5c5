"""Output assembly: turns a MappingResult into the ordered record stream."""

from .types import (
    AttributeBindingRecord,
    DocumentResult,
    MappingResult,
    OutputFormat,
    Role,
)


class OutputAssembler:
    """Renders mapping results in the role-specific line order."""

    def mapping_line(self, record: AttributeBindingRecord) -> str:
        return f"{record.kind.value} {record.path} {record.rendered_address}"

    def mapping_lines(self, result: MappingResult) -> list[str]:
        return [self.mapping_line(r) for r in result.records]

    def device_lines(self, document: DocumentResult) -> list[str]:
        """
        One client group: endpoint, then report instances, then control variables.
        """
        lines = [document.endpoint]
        lines.extend(f"{ri.path} {ri.rendered_dataset}" for ri in document.report_instances)
        lines.extend(f"{cv.path} {cv.rendered_address}" for cv in document.control_variables)
        return lines

    def lines(self, result: MappingResult) -> list[str]:
        if result.role == Role.SERVER:
            return self.mapping_lines(result)

        lines: list[str] = []
        for document in result.documents:
            lines.extend(self.device_lines(document))
        lines.append("")
        lines.extend(self.mapping_lines(result))
        return lines

    def render(self, result: MappingResult, output_format: OutputFormat = OutputFormat.TEXT) -> str:
        if output_format == OutputFormat.JSON:
            return result.model_dump_json(indent=2) + "\n"
        return "".join(line + "\n" for line in self.lines(result))
