"""
Prompt for extracting a structured proposal from a vendor email reply.
"""

from ..models.rfp import RfpDraft
from .common import JSON_ONLY_INSTRUCTION, render_example, render_rfp_summary

PROPOSAL_REQUIRED_FIELDS = ['totalPrice', 'items']

PROPOSAL_EXAMPLE = {
    'items': [
        {
            'name': 'Laptop',
            'quantity': 20,
            'unitPrice': 1200,
            'totalPrice': 24000,
            'specs': 'Dell Latitude 7420, 16GB RAM, 512GB SSD',
        },
        {
            'name': 'Monitor',
            'quantity': 15,
            'unitPrice': 350,
            'totalPrice': 5250,
            'specs': '27-inch 4K Dell UltraSharp',
        },
    ],
    'totalPrice': 29250,
    'currency': 'USD',
    'deliveryDays': 21,
    'paymentTerms': 'Net 30',
    'warranty': '1 year manufacturer warranty',
    'notes': 'Free shipping included, setup assistance available',
}

PROPOSAL_USER_PROMPT_TEMPLATE = """You are an expert procurement assistant. Parse the following vendor email response and extract structured proposal data.

Original RFP Requirements:
<rfp>
{rfp_summary}
</rfp>

Vendor Email Response:
<email>
{email_body}
</email>

Extract the following information from the vendor's response:
- items: Array matching the RFP items, each with:
  - name: Item name (should match or be similar to the RFP item)
  - quantity: Quantity offered
  - unitPrice: Price per unit
  - totalPrice: Total price for this item (quantity x unitPrice)
  - specs: Any specifications mentioned
- totalPrice: Total price for the entire proposal (number)
- currency: Currency code (e.g., "USD", "EUR"); default to "USD" if not clear
- deliveryDays: Number of days until delivery (convert dates to days if needed)
- paymentTerms: Payment terms offered (e.g., "Net 30", "50% upfront")
- warranty: Warranty details offered
- notes: Any additional important notes or terms

If information is missing or unclear, use null for optional fields. For required fields like totalPrice, make your best estimate from the email text.

{json_only}

Example format:
{example}"""


def build_proposal_prompt(rfp: RfpDraft, email_body: str) -> str:
    """
    Build the proposal extraction prompt.

    Args:
        rfp: The RFP the vendor is responding to
        email_body: Raw vendor email body

    Returns:
        User prompt text for the model
    """
    return PROPOSAL_USER_PROMPT_TEMPLATE.format(
        rfp_summary=render_rfp_summary(rfp),
        email_body=email_body.strip(),
        json_only=JSON_ONLY_INSTRUCTION,
        example=render_example(PROPOSAL_EXAMPLE),
    )
