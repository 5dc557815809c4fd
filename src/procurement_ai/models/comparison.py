"""
Proposal comparison models.

The comparator hands the model only positions and display names. Evaluation
and ComparisonResponse describe what the model sends back; VendorEvaluation
and ComparisonResult are the same data after vendor identities have been
re-attached locally from position.
"""

from typing import Any

from pydantic import BaseModel, Field

from .proposal import ProposalExtract
from .rfp import CAMEL_CASE_CONFIG


class VendorProposal(BaseModel):
    """One entry of the comparator input: a vendor and its extracted proposal."""

    model_config = CAMEL_CASE_CONFIG

    vendor_name: str | None = Field(default=None, description='Vendor display name')
    proposal: ProposalExtract = Field(..., description='Extracted proposal data')
    proposal_id: str | None = Field(default=None, description='Stored proposal identifier')
    vendor_id: str | None = Field(default=None, description='Stored vendor identifier')

    @property
    def display_name(self) -> str:
        if self.vendor_name:
            return self.vendor_name
        if self.vendor_id:
            return f'Vendor {self.vendor_id}'
        return 'Unknown'


# =============================================================================
# Model Response Shapes
# =============================================================================


class Evaluation(BaseModel):
    """A single per-vendor evaluation as produced by the model."""

    model_config = CAMEL_CASE_CONFIG

    vendor_index: int = Field(..., description='0-based position of the vendor')
    score: float = Field(..., ge=0, le=100, description='Overall score (0-100)')
    pros: list[str] = Field(default_factory=list, description='Key strengths')
    cons: list[str] = Field(default_factory=list, description='Key concerns')
    summary: str = Field(default='', description='Short summary of the proposal')


class ComparisonResponse(BaseModel):
    """
    Top-level comparison response.

    Evaluations stay as raw values here so that one malformed entry can be
    dropped without rejecting the whole response.
    """

    model_config = CAMEL_CASE_CONFIG

    evaluations: list[Any] = Field(..., description='Per-vendor evaluations')
    recommended_vendor_index: int = Field(..., description='Index of the recommended vendor')
    overall_explanation: str = Field(..., description='Why the vendor is recommended')


# =============================================================================
# Resolved Results
# =============================================================================


class VendorEvaluation(BaseModel):
    """An evaluation re-attached to the proposal and vendor it describes."""

    model_config = CAMEL_CASE_CONFIG

    vendor_index: int
    proposal_id: str | None = None
    vendor_id: str | None = None
    vendor_name: str
    score: float
    pros: list[str] = Field(default_factory=list)
    cons: list[str] = Field(default_factory=list)
    summary: str = ''
    is_recommended: bool = False

    def to_record_update(self) -> dict[str, Any]:
        """Fields the record store writes back onto the evaluated proposal."""
        return {
            'aiScore': self.score,
            'aiSummary': self.summary,
            'aiPros': list(self.pros),
            'aiCons': list(self.cons),
            'aiRecommendation': self.is_recommended,
        }


class DroppedEvaluation(BaseModel):
    """Diagnostic for an evaluation entry that could not be resolved."""

    model_config = CAMEL_CASE_CONFIG

    position: int = Field(..., description='Position of the entry in the model response')
    vendor_index: Any = Field(default=None, description='vendorIndex as sent by the model')
    reason: str


class ComparisonResult(BaseModel):
    """Ranked, explained comparison across proposals."""

    model_config = CAMEL_CASE_CONFIG

    evaluations: list[VendorEvaluation] = Field(default_factory=list)
    recommended_vendor_index: int
    recommended_proposal_id: str | None = None
    recommended_vendor_name: str
    overall_explanation: str
    dropped_evaluations: list[DroppedEvaluation] = Field(default_factory=list)
    expected_count: int = Field(..., description='Number of proposals compared')

    @property
    def is_degraded(self) -> bool:
        """True when fewer evaluations survived than proposals were compared."""
        return len(self.evaluations) < self.expected_count

    @property
    def recommended(self) -> VendorEvaluation | None:
        for evaluation in self.evaluations:
            if evaluation.vendor_index == self.recommended_vendor_index:
                return evaluation
        return None
