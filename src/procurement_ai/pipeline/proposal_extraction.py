"""
Proposal extraction service.

Turns one vendor email body, read against its originating RFP, into a
structured ProposalExtract. Extraction is best-effort: the model may under-
or over-match RFP items and no cross-check is enforced.
"""

from typing import Any, Mapping

from pydantic import ValidationError

from ..errors import GenerationFailed, InvalidInput, ModelError
from ..gateway import ModelGateway
from ..logging import get_logger
from ..models.proposal import ProposalExtract
from ..models.rfp import RfpDraft
from ..parsing import find_missing_fields, validation_error_fields
from ..prompts.extract_proposal import PROPOSAL_REQUIRED_FIELDS, build_proposal_prompt

logger = get_logger(__name__)


def coerce_rfp(rfp: RfpDraft | Mapping[str, Any]) -> RfpDraft:
    """
    Accept an RfpDraft or a stored RFP record and return an RfpDraft.

    Raises:
        InvalidInput: the record cannot be read as an RFP
    """
    if isinstance(rfp, RfpDraft):
        return rfp
    if not isinstance(rfp, Mapping):
        raise InvalidInput(
            'RFP must be an RfpDraft or a mapping',
            context={'rfp_type': type(rfp).__name__},
        )
    try:
        return RfpDraft.model_validate(dict(rfp))
    except ValidationError as exc:
        raise InvalidInput(
            'RFP record is invalid',
            context={'invalid_fields': validation_error_fields(exc)},
        ) from exc


class ProposalExtractor:
    """Extracts structured proposals from vendor email replies."""

    def __init__(self, gateway: ModelGateway):
        """
        Initialize the extractor.

        Args:
            gateway: Model gateway used for the extraction call
        """
        self.gateway = gateway

    async def extract(
        self,
        rfp: RfpDraft | Mapping[str, Any],
        email_body: str,
    ) -> ProposalExtract:
        """
        Extract a structured proposal from a vendor email.

        Args:
            rfp: The RFP the vendor is responding to
            email_body: Raw vendor email body

        Returns:
            Validated ProposalExtract (currency defaults to USD)

        Raises:
            InvalidInput: missing RFP, missing or blank email body
            GenerationFailed: the model call failed or its output is invalid
        """
        if not rfp or email_body is None:
            raise InvalidInput('RFP and email body are required')
        if not isinstance(email_body, str) or not email_body.strip():
            raise InvalidInput('Email body must be a non-empty string')

        rfp_draft = coerce_rfp(rfp)
        log = logger.bind(rfp_title=rfp_draft.title, email_chars=len(email_body))
        prompt = build_proposal_prompt(rfp_draft, email_body)

        try:
            result = await self.gateway.invoke(prompt)
        except ModelError as exc:
            log.error('proposal_extraction.model_failed', kind=exc.kind.value, error=exc.message)
            raise GenerationFailed(
                f"Failed to parse vendor response: {exc.message}",
                context={'cause_kind': exc.kind.value},
            ) from exc

        proposal = self._validate(result)
        log.info(
            'proposal_extraction.completed',
            total_price=proposal.total_price,
            currency=proposal.currency,
            item_count=len(proposal.items),
        )
        return proposal

    def _validate(self, result: dict[str, Any]) -> ProposalExtract:
        """Apply required-field and schema checks to the model output."""
        missing = find_missing_fields(result, PROPOSAL_REQUIRED_FIELDS)
        if missing:
            raise GenerationFailed(
                f"Failed to parse vendor response: missing required fields in AI response: "
                f"{', '.join(missing)}",
                context={'missing_fields': missing},
            )

        if not isinstance(result['items'], list):
            raise GenerationFailed(
                'Failed to parse vendor response: items must be an array',
                context={'invalid_fields': ['items']},
            )

        try:
            return ProposalExtract.model_validate(result)
        except ValidationError as exc:
            fields = validation_error_fields(exc)
            raise GenerationFailed(
                f"Failed to parse vendor response: invalid fields in AI response: "
                f"{', '.join(fields)}",
                context={'invalid_fields': fields},
            ) from exc
