"""
Main procurement AI pipeline.

Exposes the three entry points used by the orchestration layer:
- synthesize_rfp(text)            free text -> RfpDraft
- extract_proposal(rfp, email)    vendor email -> ProposalExtract
- compare_proposals(rfp, list)    N proposals -> ComparisonResult

Each call runs in its own logging context with a fresh trace ID and logs
stage timings on completion. Failures propagate unchanged; the caller decides
what a failed extraction or comparison means for the user.
"""

from typing import Any, Mapping, Sequence

from ..config import Settings, get_settings
from ..errors import RecordNotFound
from ..gateway import ModelGateway
from ..logging import get_logger, pipeline_call
from ..models.comparison import ComparisonResult, VendorProposal
from ..models.proposal import ProposalExtract
from ..models.rfp import RfpDraft
from ..repository import RecordStore
from .comparator import ProposalComparator
from .proposal_extraction import ProposalExtractor
from .rfp_synthesis import RfpSynthesizer

logger = get_logger(__name__)


class ProcurementPipeline:
    """
    Facade over RFP synthesis, proposal extraction and proposal comparison.

    All three share one stateless ModelGateway, so a single pipeline instance
    can serve concurrent requests.
    """

    def __init__(self, gateway: ModelGateway):
        """
        Initialize the pipeline.

        Args:
            gateway: Model gateway shared by all components
        """
        self.gateway = gateway
        self.synthesizer = RfpSynthesizer(gateway)
        self.extractor = ProposalExtractor(gateway)
        self.comparator = ProposalComparator(gateway)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> 'ProcurementPipeline':
        """Build a pipeline backed by the OpenAI client."""
        return cls(ModelGateway.from_settings(settings or get_settings()))

    async def synthesize_rfp(self, text: str) -> RfpDraft:
        """Generate a structured RFP draft from free text."""
        with pipeline_call('synthesize_rfp') as timer:
            with timer.stage('synthesize'):
                draft = await self.synthesizer.synthesize(text)
            logger.info('pipeline.synthesize_rfp.completed', timing=timer.summary())
            return draft

    async def extract_proposal(
        self,
        rfp: RfpDraft | Mapping[str, Any],
        email_body: str,
        rfp_id: str | None = None,
    ) -> ProposalExtract:
        """Extract a structured proposal from a vendor email reply."""
        with pipeline_call('extract_proposal', rfp_id=rfp_id) as timer:
            with timer.stage('extract'):
                proposal = await self.extractor.extract(rfp, email_body)
            logger.info('pipeline.extract_proposal.completed', timing=timer.summary())
            return proposal

    async def compare_proposals(
        self,
        rfp: RfpDraft | Mapping[str, Any],
        proposals: Sequence[VendorProposal | Mapping[str, Any]],
        rfp_id: str | None = None,
    ) -> ComparisonResult:
        """Score and compare proposals, recommending one."""
        with pipeline_call('compare_proposals', rfp_id=rfp_id) as timer:
            with timer.stage('compare'):
                result = await self.comparator.compare(rfp, proposals)
            logger.info(
                'pipeline.compare_proposals.completed',
                proposal_count=result.expected_count,
                degraded=result.is_degraded,
                timing=timer.summary(),
            )
            return result

    async def compare_proposals_for_rfp(
        self,
        rfp_id: str,
        store: RecordStore,
    ) -> ComparisonResult:
        """
        Load an RFP and its proposals from the record store and compare them.

        Raises:
            RecordNotFound: the store has no RFP with this identifier
            InsufficientInput: fewer than two proposals have been received
        """
        rfp = await store.get_rfp(rfp_id)
        if rfp is None:
            raise RecordNotFound('RFP not found', context={'rfp_id': rfp_id})

        proposals = await store.list_proposals(rfp_id)
        return await self.compare_proposals(rfp, list(proposals), rfp_id=rfp_id)
