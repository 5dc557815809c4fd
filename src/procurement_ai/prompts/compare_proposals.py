"""
Prompt for scoring and comparing vendor proposals.

Vendors are presented by position only ("Vendor 1", "Vendor 2", ...) plus
their display name. The model answers with 0-based vendorIndex values that
the comparator maps back to real proposals.
"""

from typing import Sequence

from ..models.comparison import VendorProposal
from ..models.rfp import RfpDraft
from .common import (
    JSON_ONLY_INSTRUCTION,
    NOT_SPECIFIED,
    format_amount,
    render_example,
    render_rfp_summary,
)

COMPARISON_REQUIRED_FIELDS = ['evaluations', 'recommendedVendorIndex', 'overallExplanation']

COMPARISON_EXAMPLE = {
    'evaluations': [
        {
            'vendorIndex': 0,
            'score': 85,
            'pros': ['Competitive pricing', 'Fast delivery', 'Good warranty'],
            'cons': ['Payment terms less favorable', 'Limited support'],
            'summary': 'Tech Solutions Inc. offers strong overall value with competitive '
            'pricing and a good delivery timeline.',
        },
        {
            'vendorIndex': 1,
            'score': 72,
            'pros': ['Excellent warranty', 'Flexible payment'],
            'cons': ['Higher price', 'Longer delivery time'],
            'summary': 'Premium IT Solutions is a premium option with better terms '
            'but at higher cost.',
        },
    ],
    'recommendedVendorIndex': 0,
    'overallExplanation': 'Tech Solutions Inc. offers the best balance of price, delivery '
    'speed, and value. While Premium IT Solutions has better warranty terms, the significant '
    'price difference and faster delivery from Tech Solutions Inc. make it the recommended '
    'choice for this procurement.',
}

COMPARISON_USER_PROMPT_TEMPLATE = """You are an expert procurement analyst. Analyze and compare the following vendor proposals for an RFP and provide recommendations.

RFP Requirements:
{rfp_summary}

Vendor Proposals:
{proposals_summary}

For each vendor, provide:
- vendorIndex: The 0-based position of the vendor in the list above (Vendor 1 is 0, Vendor 2 is 1, and so on). Return exactly one evaluation per vendor.
- score: A score from 0-100 based on:
  * Price competitiveness (lower is better, but consider value)
  * Delivery timeline (meets deadline = higher score)
  * Payment terms alignment
  * Warranty coverage
  * Overall value proposition
- pros: Array of 2-4 key advantages/strengths
- cons: Array of 2-4 key disadvantages/concerns
- summary: 2-3 sentence summary of this vendor's proposal. Use the actual vendor name (e.g., "Tech Solutions Inc.") instead of "Vendor 1" or "Vendor 2".

Then provide:
- recommendedVendorIndex: The 0-based index of the vendor you recommend
- overallExplanation: A 3-5 sentence explanation of why this vendor is recommended, considering all factors. Use actual vendor names instead of "Vendor 1", "Vendor 2", etc.

{json_only}

Example format:
{example}"""


def render_proposal_block(position: int, proposal: VendorProposal) -> str:
    """Render one proposal as the "Vendor {position+1}" block of the prompt."""
    parsed = proposal.proposal
    delivery = f'{parsed.delivery_days} days' if parsed.delivery_days is not None else NOT_SPECIFIED
    return '\n'.join(
        [
            f'Vendor {position + 1}: {proposal.display_name}',
            f'- Total Price: {parsed.currency} {format_amount(parsed.total_price)}',
            f'- Delivery: {delivery}',
            f'- Payment Terms: {parsed.payment_terms or NOT_SPECIFIED}',
            f'- Warranty: {parsed.warranty or NOT_SPECIFIED}',
            f'- Notes: {parsed.notes or "None"}',
        ]
    )


def build_comparison_prompt(rfp: RfpDraft, proposals: Sequence[VendorProposal]) -> str:
    """
    Build the proposal comparison prompt.

    Args:
        rfp: The RFP the proposals respond to
        proposals: Proposals in positional order; position i is "Vendor i+1"

    Returns:
        User prompt text for the model
    """
    proposals_summary = '\n\n'.join(
        render_proposal_block(position, proposal)
        for position, proposal in enumerate(proposals)
    )
    return COMPARISON_USER_PROMPT_TEMPLATE.format(
        rfp_summary=render_rfp_summary(rfp, include_details=False),
        proposals_summary=proposals_summary,
        json_only=JSON_ONLY_INSTRUCTION,
        example=render_example(COMPARISON_EXAMPLE),
    )
