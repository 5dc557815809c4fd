"""
LLM prompts for the procurement AI pipeline.
"""

from .common import JSON_SYSTEM_PROMPT, render_rfp_summary
from .generate_rfp import RFP_REQUIRED_FIELDS, build_rfp_prompt
from .extract_proposal import PROPOSAL_REQUIRED_FIELDS, build_proposal_prompt
from .compare_proposals import (
    COMPARISON_REQUIRED_FIELDS,
    build_comparison_prompt,
    render_proposal_block,
)

__all__ = [
    'JSON_SYSTEM_PROMPT',
    'render_rfp_summary',
    # RFP generation
    'RFP_REQUIRED_FIELDS',
    'build_rfp_prompt',
    # Proposal extraction
    'PROPOSAL_REQUIRED_FIELDS',
    'build_proposal_prompt',
    # Proposal comparison
    'COMPARISON_REQUIRED_FIELDS',
    'build_comparison_prompt',
    'render_proposal_block',
]
