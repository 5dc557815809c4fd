"""
RFP draft models.

RfpDraft is produced once by RFP synthesis from free text. It is also the
shape in which a stored RFP is handed back to the pipeline for proposal
extraction and comparison.

Field names are snake_case in Python and camelCase on the wire, matching
the keys the model is asked to emit.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

DEFAULT_CURRENCY = 'USD'

CAMEL_CASE_CONFIG = {
    'alias_generator': to_camel,
    'populate_by_name': True,
    'str_strip_whitespace': True,
}


def default_currency(value: object) -> object:
    """Map a missing or blank currency to the default currency code."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return DEFAULT_CURRENCY
    if isinstance(value, str):
        return value.strip().upper()
    return value


class LineItem(BaseModel):
    """A single line item requested by an RFP."""

    model_config = {**CAMEL_CASE_CONFIG, 'frozen': True}

    name: str = Field(..., min_length=1, description='Item name')
    quantity: float = Field(..., gt=0, description='Requested quantity')
    specs: str | None = Field(default=None, description='Specifications or requirements')


class RfpDraft(BaseModel):
    """Structured Request for Proposal."""

    model_config = {**CAMEL_CASE_CONFIG, 'frozen': True}

    title: str = Field(..., min_length=1, description='Concise RFP title')
    description: str = Field(
        ..., min_length=1, description='What needs to be procured'
    )
    budget_amount: float | None = Field(
        default=None, ge=0, description='Budget amount, if stated'
    )
    budget_currency: str = Field(
        default=DEFAULT_CURRENCY,
        pattern=r'^[A-Z]{3}$',
        description='ISO currency code for the budget',
    )
    delivery_deadline: date | None = Field(
        default=None, description='Required delivery date'
    )
    payment_terms: str | None = Field(default=None, description='e.g. "Net 30"')
    warranty_terms: str | None = Field(default=None, description='Warranty requirements')
    items: list[LineItem] = Field(default_factory=list, description='Requested line items')

    @field_validator('budget_currency', mode='before')
    @classmethod
    def normalize_currency(cls, value: object) -> object:
        return default_currency(value)

    @field_validator('delivery_deadline', mode='before')
    @classmethod
    def deadline_as_date(cls, value: object) -> object:
        # Stored records may carry a timestamp; only the calendar day is kept
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, str):
            text = value.strip()
            if not text:
                return None
            if 'T' in text or ' ' in text:
                try:
                    return datetime.fromisoformat(text.replace('Z', '+00:00')).date()
                except ValueError:
                    return value
        return value
