"""
Proposal extraction models.

ProposalExtract is produced once per (RFP, vendor email) pair. Line items
are best-effort since they are derived from unstructured text, so numeric
fields that cannot be read as numbers are dropped to None rather than
failing the whole extraction.
"""

import re

from pydantic import BaseModel, Field, field_validator

from .rfp import CAMEL_CASE_CONFIG, DEFAULT_CURRENCY, default_currency

_NUMBER_NOISE = re.compile(r'[,\s$€£¥]')
# "21", "21 days", "10 business days", "3 weeks"; ranges and other units don't match
_DURATION = re.compile(
    r'^(\d+(?:\.\d+)?)\s*(?:(?:business|working|calendar)\s+)?(days?|weeks?)?$',
    re.IGNORECASE,
)
_DAYS_PER_WEEK = 7


def coerce_number(value: object) -> float | None:
    """Read a loosely formatted number ("1,200", "$350") or return None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        if ',' in value and '.' in value and value.rfind(',') > value.rfind('.'):
            # "1.200,50": decimal comma, ambiguous with thousands separators
            return None
        cleaned = _NUMBER_NOISE.sub('', value)
        try:
            return float(cleaned)
        except ValueError:
            return None
    return None


def parse_delivery_days(text: str) -> int | None:
    """Read a delivery lead time in days, converting weeks; None when unclear."""
    match = _DURATION.match(text.strip())
    if not match:
        return None
    amount = float(match.group(1))
    unit = (match.group(2) or 'days').lower()
    if unit.startswith('week'):
        amount *= _DAYS_PER_WEEK
    return round(amount)


class ProposalLineItem(BaseModel):
    """A single priced line item offered by a vendor."""

    model_config = CAMEL_CASE_CONFIG

    name: str | None = Field(default=None, description='Item name as offered')
    quantity: float | None = Field(default=None, description='Quantity offered')
    unit_price: float | None = Field(default=None, description='Price per unit')
    total_price: float | None = Field(default=None, description='Line total')
    specs: str | None = Field(default=None, description='Offered specifications')

    @field_validator('quantity', 'unit_price', 'total_price', mode='before')
    @classmethod
    def best_effort_number(cls, value: object) -> float | None:
        return coerce_number(value)

    @field_validator('name', 'specs', mode='before')
    @classmethod
    def stringify(cls, value: object) -> str | None:
        if value is None or isinstance(value, str):
            return value
        return str(value)


class ProposalExtract(BaseModel):
    """Structured proposal extracted from a vendor email."""

    model_config = CAMEL_CASE_CONFIG

    items: list[ProposalLineItem] = Field(
        default_factory=list, description='Offered line items'
    )
    total_price: float = Field(..., ge=0, description='Total price for the proposal')
    currency: str = Field(default=DEFAULT_CURRENCY, description='Currency code')
    delivery_days: int | None = Field(
        default=None, ge=0, description='Days until delivery'
    )
    payment_terms: str | None = Field(default=None, description='Payment terms offered')
    warranty: str | None = Field(default=None, description='Warranty offered')
    notes: str | None = Field(default=None, description='Other notable terms')

    @field_validator('currency', mode='before')
    @classmethod
    def normalize_currency(cls, value: object) -> object:
        return default_currency(value)

    @field_validator('total_price', mode='before')
    @classmethod
    def loose_total(cls, value: object) -> object:
        if isinstance(value, str):
            number = coerce_number(value)
            return value if number is None else number
        return value

    @field_validator('delivery_days', mode='before')
    @classmethod
    def whole_days(cls, value: object) -> object:
        if isinstance(value, float) and value >= 0:
            return round(value)
        if isinstance(value, str):
            return parse_delivery_days(value)
        return value
