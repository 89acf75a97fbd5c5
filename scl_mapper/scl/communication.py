"""Network endpoint extraction from the Communication section (client role)."""

import logging

from ..core.types import Endpoint
from .document import SclDocument, SclNode


logger = logging.getLogger(__name__)

IP_ADDRESS_TYPE = "IP"


class EndpointExtractor:
    """Collects the IP addresses published for a document's IED."""

    def connected_access_point(self, document: SclDocument) -> SclNode | None:
        """
        The ConnectedAP describing this document's IED.

        Prefers the entry whose ``iedName`` matches the IED; falls back to
        the first ConnectedAP of the first SubNetwork.
        """
        communication = document.communication()
        if communication is None:
            return None

        ied_name = document.ied_name()
        for subnetwork in communication.children("SubNetwork"):
            for connected_ap in subnetwork.children("ConnectedAP"):
                if ied_name and connected_ap.attribute("iedName") == ied_name:
                    return connected_ap

        return communication.find("SubNetwork", "ConnectedAP")

    def extract(self, document: SclDocument) -> list[Endpoint]:
        connected_ap = self.connected_access_point(document)
        address = connected_ap.child("Address") if connected_ap is not None else None
        if address is None:
            logger.debug("%s: no ConnectedAP address found", document.source)
            return []

        return [
            Endpoint(address=p.text)
            for p in address.children("P")
            if p.attribute("type") == IP_ADDRESS_TYPE and p.text
        ]
