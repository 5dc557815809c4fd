"""
Pipeline components for RFP synthesis, proposal extraction and proposal comparison.
"""

from .rfp_synthesis import RfpSynthesizer
from .proposal_extraction import ProposalExtractor, coerce_rfp
from .vendor_index import VendorIndex
from .comparator import ProposalComparator
from .pipeline import ProcurementPipeline

__all__ = [
    # Main Pipeline
    'ProcurementPipeline',
    # Components
    'RfpSynthesizer',
    'ProposalExtractor',
    'ProposalComparator',
    'VendorIndex',
    'coerce_rfp',
]
