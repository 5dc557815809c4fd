"""
Proposal comparison service.

Scores N proposals against their RFP with a single model call, validates the
shape of the evaluation set and re-attaches vendor identities by position.

Pipeline:
1. Build a VendorIndex from the input order (position i <=> "Vendor i+1")
2. Render the comparison prompt and invoke the model gateway
3. Check required fields, evaluation count and the recommended index
4. Substitute "Vendor N" placeholders in summaries and the explanation
5. Resolve each evaluation's vendorIndex; drop entries that are invalid or unresolvable
"""

from typing import Any, Mapping, Sequence

from pydantic import ValidationError

from ..errors import ComparisonFailed, InsufficientInput, InvalidInput, ModelError
from ..gateway import ModelGateway
from ..logging import get_logger
from ..models.comparison import (
    ComparisonResponse,
    ComparisonResult,
    DroppedEvaluation,
    Evaluation,
    VendorEvaluation,
    VendorProposal,
)
from ..models.rfp import RfpDraft
from ..parsing import find_missing_fields, validation_error_fields
from ..prompts.compare_proposals import COMPARISON_REQUIRED_FIELDS, build_comparison_prompt
from .proposal_extraction import coerce_rfp
from .vendor_index import VendorIndex

logger = get_logger(__name__)

MIN_PROPOSALS = 2


def coerce_vendor_proposal(proposal: VendorProposal | Mapping[str, Any]) -> VendorProposal:
    """Accept a VendorProposal or an equivalent mapping."""
    if isinstance(proposal, VendorProposal):
        return proposal
    try:
        return VendorProposal.model_validate(proposal)
    except ValidationError as exc:
        raise InvalidInput(
            'Proposal entry is invalid',
            context={'invalid_fields': validation_error_fields(exc)},
        ) from exc


class ProposalComparator:
    """
    Compares vendor proposals and recommends one.

    An evaluation entry is dropped rather than failing the comparison when it
    is not an object, has invalid fields (e.g. a score outside 0-100), or has
    an out-of-range or repeated vendorIndex. Each drop is recorded in
    ComparisonResult.dropped_evaluations; callers should check is_degraded.
    """

    def __init__(self, gateway: ModelGateway):
        """
        Initialize the comparator.

        Args:
            gateway: Model gateway used for the comparison call
        """
        self.gateway = gateway

    async def compare(
        self,
        rfp: RfpDraft | Mapping[str, Any],
        proposals: Sequence[VendorProposal | Mapping[str, Any]],
    ) -> ComparisonResult:
        """
        Compare proposals for an RFP.

        Args:
            rfp: The RFP the proposals respond to
            proposals: Proposals in the order that defines each vendor's index

        Returns:
            ComparisonResult with resolved evaluations and the recommendation

        Raises:
            InvalidInput: the RFP is missing or an entry is malformed
            InsufficientInput: fewer than two proposals were supplied
            ComparisonFailed: the model call failed or its output has the wrong shape
        """
        if not rfp:
            raise InvalidInput('RFP is required for comparison')
        count = len(proposals) if proposals is not None else 0
        if count < MIN_PROPOSALS:
            raise InsufficientInput(
                f'At least {MIN_PROPOSALS} proposals are required for comparison',
                context={'proposal_count': count},
            )

        rfp_draft = coerce_rfp(rfp)
        index = VendorIndex([coerce_vendor_proposal(p) for p in proposals])
        log = logger.bind(rfp_title=rfp_draft.title, proposal_count=len(index))

        prompt = build_comparison_prompt(rfp_draft, index.entries)
        try:
            raw = await self.gateway.invoke(prompt)
        except ModelError as exc:
            log.error('comparator.model_failed', kind=exc.kind.value, error=exc.message)
            raise ComparisonFailed(
                f"Failed to compare proposals: {exc.message}",
                context={'cause_kind': exc.kind.value},
            ) from exc

        response = self._validate_response(raw, len(index))
        result = self._resolve(response, index)

        if result.is_degraded:
            log.warning(
                'comparator.degraded',
                resolved=len(result.evaluations),
                dropped=len(result.dropped_evaluations),
            )
        log.info(
            'comparator.completed',
            recommended_vendor_index=result.recommended_vendor_index,
            recommended_vendor=result.recommended_vendor_name,
        )
        return result

    def _validate_response(self, raw: dict[str, Any], expected: int) -> ComparisonResponse:
        """Check the top-level shape of the model's comparison response."""
        missing = find_missing_fields(raw, COMPARISON_REQUIRED_FIELDS)
        if missing:
            raise ComparisonFailed(
                f"Failed to compare proposals: missing required fields in AI response: "
                f"{', '.join(missing)}",
                context={'missing_fields': missing},
            )

        evaluations = raw['evaluations']
        if not isinstance(evaluations, list) or len(evaluations) != expected:
            raise ComparisonFailed(
                'Failed to compare proposals: evaluations array length must match '
                'proposals array length',
                context={
                    'expected': expected,
                    'received': len(evaluations) if isinstance(evaluations, list) else None,
                },
            )

        try:
            response = ComparisonResponse.model_validate(raw)
        except ValidationError as exc:
            fields = validation_error_fields(exc)
            raise ComparisonFailed(
                f"Failed to compare proposals: invalid fields in AI response: {', '.join(fields)}",
                context={'invalid_fields': fields},
            ) from exc

        if not 0 <= response.recommended_vendor_index < expected:
            raise ComparisonFailed(
                'Failed to compare proposals: recommended vendor index is out of range',
                context={
                    'recommended_vendor_index': response.recommended_vendor_index,
                    'proposal_count': expected,
                },
            )
        return response

    def _resolve(self, response: ComparisonResponse, index: VendorIndex) -> ComparisonResult:
        """Re-attach vendor identities to evaluations by position."""
        recommended_index = response.recommended_vendor_index
        resolved: list[VendorEvaluation] = []
        dropped: list[DroppedEvaluation] = []
        seen: set[int] = set()

        for position, entry in enumerate(response.evaluations):
            outcome = self._resolve_entry(entry, index, seen, recommended_index)
            if isinstance(outcome, VendorEvaluation):
                seen.add(outcome.vendor_index)
                resolved.append(outcome)
                continue

            raw_index = entry.get('vendorIndex') if isinstance(entry, dict) else None
            logger.warning(
                'comparator.evaluation_dropped',
                position=position,
                vendor_index=raw_index,
                reason=outcome,
            )
            dropped.append(
                DroppedEvaluation(position=position, vendor_index=raw_index, reason=outcome)
            )

        resolved.sort(key=lambda evaluation: evaluation.vendor_index)
        recommended = index.get(recommended_index)

        return ComparisonResult(
            evaluations=resolved,
            recommended_vendor_index=recommended_index,
            recommended_proposal_id=recommended.proposal_id,
            recommended_vendor_name=recommended.display_name,
            overall_explanation=index.substitute_placeholders(response.overall_explanation) or '',
            dropped_evaluations=dropped,
            expected_count=len(index),
        )

    @staticmethod
    def _resolve_entry(
        entry: Any,
        index: VendorIndex,
        seen: set[int],
        recommended_index: int,
    ) -> VendorEvaluation | str:
        """Resolve one evaluation entry, or return the reason it is dropped."""
        if not isinstance(entry, dict):
            return 'evaluation is not an object'
        try:
            evaluation = Evaluation.model_validate(entry)
        except ValidationError as exc:
            return f"invalid evaluation fields: {', '.join(validation_error_fields(exc))}"

        vendor = index.get(evaluation.vendor_index)
        if vendor is None:
            return 'vendorIndex out of range'
        if evaluation.vendor_index in seen:
            return 'duplicate vendorIndex'

        return VendorEvaluation(
            vendor_index=evaluation.vendor_index,
            proposal_id=vendor.proposal_id,
            vendor_id=vendor.vendor_id,
            vendor_name=vendor.display_name,
            score=evaluation.score,
            pros=evaluation.pros,
            cons=evaluation.cons,
            summary=index.substitute_placeholders(evaluation.summary) or '',
            is_recommended=evaluation.vendor_index == recommended_index,
        )
