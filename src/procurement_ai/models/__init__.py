"""
Data models for the procurement AI pipeline.

All models accept camelCase (wire) or snake_case (Python) keys.
"""

from .rfp import LineItem, RfpDraft
from .proposal import ProposalExtract, ProposalLineItem
from .comparison import (
    ComparisonResponse,
    ComparisonResult,
    DroppedEvaluation,
    Evaluation,
    VendorEvaluation,
    VendorProposal,
)

__all__ = [
    'LineItem',
    'RfpDraft',
    'ProposalExtract',
    'ProposalLineItem',
    'ComparisonResponse',
    'ComparisonResult',
    'DroppedEvaluation',
    'Evaluation',
    'VendorEvaluation',
    'VendorProposal',
]
