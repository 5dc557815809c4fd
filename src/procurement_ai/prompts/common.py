"""
Shared prompt pieces: the JSON-only system prompt and RFP rendering.
"""

import json
from typing import Any

from ..models.rfp import RfpDraft

JSON_SYSTEM_PROMPT = (
    'You are a helpful assistant that responds ONLY with valid JSON. '
    'Never include markdown code blocks, explanations, or any text outside the JSON object.'
)

JSON_ONLY_INSTRUCTION = (
    'IMPORTANT: Respond ONLY with valid JSON. Do not include any explanatory text, '
    'markdown formatting, or code blocks. Just the raw JSON object.'
)

NOT_SPECIFIED = 'Not specified'


def format_amount(amount: float | int | None) -> str:
    """Render a number without a trailing .0 for whole values."""
    if amount is None:
        return NOT_SPECIFIED
    if float(amount).is_integer():
        return str(int(amount))
    return str(amount)


def render_example(example: dict[str, Any]) -> str:
    """Render a worked output example as indented JSON."""
    return json.dumps(example, indent=2)


def render_rfp_summary(rfp: RfpDraft, include_details: bool = True) -> str:
    """
    Render an RFP as plain text for embedding in a prompt.

    Args:
        rfp: The RFP to render
        include_details: Include the description and the numbered item list

    Returns:
        Multi-line summary text
    """
    budget = (
        f'{rfp.budget_currency} {format_amount(rfp.budget_amount)}'
        if rfp.budget_amount is not None
        else NOT_SPECIFIED
    )
    deadline = rfp.delivery_deadline.isoformat() if rfp.delivery_deadline else NOT_SPECIFIED

    lines = [f'RFP Title: {rfp.title}']
    if include_details:
        lines.append(f'Description: {rfp.description}')
    lines.extend(
        [
            f'Budget: {budget}',
            f'Delivery Deadline: {deadline}',
            f'Payment Terms Required: {rfp.payment_terms or NOT_SPECIFIED}',
            f'Warranty Required: {rfp.warranty_terms or NOT_SPECIFIED}',
        ]
    )

    if include_details:
        lines.append('')
        lines.append('Required Items:')
        if rfp.items:
            for idx, item in enumerate(rfp.items, 1):
                lines.append(
                    f'{idx}. {item.name} - Quantity: {format_amount(item.quantity)} '
                    f'- Specs: {item.specs or "N/A"}'
                )
        else:
            lines.append('None listed')

    return '\n'.join(lines)
