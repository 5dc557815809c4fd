"""
Record store interface.

Persistence lives outside this package. The pipeline only reads through this
protocol; callers persist RFP drafts, proposals and comparison results
themselves (see VendorEvaluation.to_record_update()).
"""

from typing import Any, Mapping, Protocol, Sequence, runtime_checkable

from .models.comparison import VendorProposal
from .models.rfp import RfpDraft


@runtime_checkable
class RecordStore(Protocol):
    """Read access to stored RFPs and the proposals received for them."""

    async def get_rfp(self, rfp_id: str) -> RfpDraft | Mapping[str, Any] | None:
        """Return the RFP with this identifier, or None if it does not exist."""
        ...

    async def list_proposals(
        self, rfp_id: str
    ) -> Sequence[VendorProposal | Mapping[str, Any]]:
        """Return every proposal received for the RFP, in a stable order."""
        ...
