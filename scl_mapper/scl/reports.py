"""Report control block and dataset resolution (client role)."""

import logging

from ..core.types import DEVICE_DELIMITER, ReportInstance
from .document import SclDocument, SclNode


logger = logging.getLogger(__name__)

DATASET_INFIX = DEVICE_DELIMITER + "LLN0$"
REPORT_INFIX = DEVICE_DELIMITER + "LLN0.RP."

# IEC 61850-6 default for RptEnabled/@max when not given.
DEFAULT_MAX_INSTANCES = 1


class ReportDatasetResolver:
    """Enumerates report instances declared on the root logical node."""

    def dataset_reference(self, ln0: SclNode, prefix: str, dataset_name: str) -> str | None:
        """Resolve a ``datSet`` name to its dataset reference, or None."""
        for dataset in ln0.children("DataSet"):
            if dataset.attribute("name") == dataset_name:
                return prefix + DATASET_INFIX + dataset_name
        return None

    def max_instances(self, report: SclNode) -> int:
        enabled = report.child("RptEnabled")
        if enabled is None or not enabled.has_attribute("max"):
            return DEFAULT_MAX_INSTANCES

        raw = enabled.attribute("max")
        try:
            count = int(raw)
        except ValueError:
            logger.warning("ReportControl %s: invalid RptEnabled max %r", report.attribute("name"), raw)
            return 0
        if count < 0:
            logger.warning("ReportControl %s: negative RptEnabled max %d", report.attribute("name"), count)
            return 0
        return count

    def resolve(self, document: SclDocument) -> list[ReportInstance]:
        """
        Resolve every ReportControl of LN0 in declaration order.

        Each control yields ``max`` instances named ``<rcb>01``, ``<rcb>02``...
        all sharing the control's dataset reference.
        """
        ldevice = document.logical_device()
        ln0 = ldevice.child("LN0") if ldevice is not None else None
        if ln0 is None:
            return []

        prefix = document.device_prefix()
        instances: list[ReportInstance] = []
        for report in ln0.children("ReportControl"):
            report_name = report.attribute("name")
            dataset_name = report.attribute("datSet")
            dataset_path = self.dataset_reference(ln0, prefix, dataset_name)
            if dataset_path is None:
                logger.debug("ReportControl %s: dataset %r not declared", report_name, dataset_name)

            for i in range(1, self.max_instances(report) + 1):
                instances.append(ReportInstance(
                    path=f"{prefix}{REPORT_INFIX}{report_name}{i:02d}",
                    dataset_path=dataset_path,
                ))

        return instances
