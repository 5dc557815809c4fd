"""
Prompt for converting a natural language procurement request into an RFP.
"""

from .common import JSON_ONLY_INSTRUCTION, render_example

RFP_REQUIRED_FIELDS = ['title', 'description', 'items']

RFP_EXAMPLE = {
    'title': 'Office Equipment Procurement',
    'description': 'Procurement of laptops and monitors for new office setup',
    'budgetAmount': 50000,
    'budgetCurrency': 'USD',
    'deliveryDeadline': '2024-02-15',
    'paymentTerms': 'Net 30',
    'warrantyTerms': '1 year warranty required',
    'items': [
        {
            'name': 'Laptop',
            'quantity': 20,
            'specs': '16GB RAM, 512GB SSD, Intel i7 or equivalent',
        },
        {
            'name': 'Monitor',
            'quantity': 15,
            'specs': '27-inch, 4K resolution',
        },
    ],
}

RFP_USER_PROMPT_TEMPLATE = """You are an expert procurement assistant. Convert the following natural language procurement request into a structured RFP (Request for Proposal) JSON format.

User's Request:
{user_text}

Extract and structure the following information:
- title: A concise title for this RFP (string)
- description: Detailed description of what needs to be procured (string)
- budgetAmount: Numeric budget amount if mentioned, otherwise null
- budgetCurrency: Three-letter currency code (e.g., "USD", "EUR"); default to "USD" if not specified
- deliveryDeadline: ISO date string (YYYY-MM-DD) if a specific date is mentioned, otherwise null
- paymentTerms: Payment terms mentioned (e.g., "Net 30", "50% upfront") or null
- warrantyTerms: Warranty requirements mentioned or null
- items: Array of line items, each with:
  - name: Item name (string)
  - quantity: Numeric quantity (greater than zero)
  - specs: Specifications/requirements for this item (string or null)

{json_only}

Example format:
{example}"""


def build_rfp_prompt(user_text: str) -> str:
    """
    Build the RFP generation prompt.

    Args:
        user_text: The user's free-text description of the purchase

    Returns:
        User prompt text for the model
    """
    return RFP_USER_PROMPT_TEMPLATE.format(
        user_text=user_text.strip(),
        json_only=JSON_ONLY_INSTRUCTION,
        example=render_example(RFP_EXAMPLE),
    )
