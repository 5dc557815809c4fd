"""
Pytest configuration and shared fixtures.

Key fixtures:
- settings: Settings with a dummy API key
- mock_client: AsyncMock model client (chat_complete)
- recording_sleep: Fake sleep that records backoff waits
- gateway: ModelGateway wired to mock_client and recording_sleep
- mock_gateway: AsyncMock gateway for component tests
- sample_rfp / sample_proposals: Domain fixtures
- openai_api_key: Real API key for live tests (skips when unset)
"""

import os
import sys
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

# Add src to path for imports
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

# Load environment variables
from dotenv import load_dotenv

env_file = Path(__file__).parent.parent / '.env'
if env_file.exists():
    load_dotenv(env_file)

from procurement_ai.config import Settings
from procurement_ai.gateway import ModelGateway
from procurement_ai.models import ProposalExtract, RfpDraft, VendorProposal


class RecordingSleep:
    """Stands in for asyncio.sleep and records each requested wait."""

    def __init__(self):
        self.waits: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.waits.append(seconds)


@pytest.fixture
def openai_api_key() -> str:
    """Get OpenAI API key from environment."""
    key = os.getenv('OPENAI_API_KEY')
    if not key:
        pytest.skip('OPENAI_API_KEY not set')
    return key


@pytest.fixture
def settings() -> Settings:
    """Settings with a dummy key and default retry policy."""
    return Settings(
        OPENAI_API_KEY='sk-test',
        MODEL_TEMPERATURE=0.3,
        MODEL_MAX_RETRIES=2,
        MODEL_BACKOFF_BASE_SECONDS=1.0,
    )


@pytest.fixture
def mock_client():
    """Create a mocked model endpoint client."""
    client = AsyncMock()
    client.chat_complete = AsyncMock()
    return client


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def gateway(mock_client, settings, recording_sleep) -> ModelGateway:
    """ModelGateway backed by the mocked client and fake sleep."""
    return ModelGateway(client=mock_client, settings=settings, sleep=recording_sleep)


@pytest.fixture
def mock_gateway():
    """Create a mocked ModelGateway."""
    gw = AsyncMock()
    gw.invoke = AsyncMock()
    return gw


@pytest.fixture
def sample_user_text() -> str:
    return (
        'I need to procure laptops and monitors for our new office. Budget is $50,000 total. '
        'Need delivery within 30 days. We need 20 laptops with 16GB RAM and 15 monitors 27-inch. '
        'Payment terms should be net 30, and we need at least 1 year warranty.'
    )


@pytest.fixture
def sample_rfp_response() -> dict:
    """A well-formed RFP generation response as the model would send it."""
    return {
        'title': 'Office Equipment Procurement',
        'description': 'Laptops and monitors for the new office',
        'budgetAmount': 50000,
        'budgetCurrency': 'USD',
        'deliveryDeadline': '2024-02-15',
        'paymentTerms': 'Net 30',
        'warrantyTerms': '1 year warranty required',
        'items': [
            {'name': 'Laptop', 'quantity': 20, 'specs': '16GB RAM'},
            {'name': 'Monitor', 'quantity': 15, 'specs': '27-inch'},
        ],
    }


@pytest.fixture
def sample_rfp(sample_rfp_response) -> RfpDraft:
    return RfpDraft.model_validate(sample_rfp_response)


@pytest.fixture
def sample_email() -> str:
    return """Hi,

Thanks for the RFP. We can supply 20 Dell Latitude laptops (16GB RAM) at $1,200 each
and 15 Dell UltraSharp 27" monitors at $350 each, for a total of $29,250.
Delivery in 21 days. Payment Net 30. 1 year manufacturer warranty.

Best,
Acme Co Sales"""


@pytest.fixture
def sample_proposal_response() -> dict:
    return {
        'items': [
            {'name': 'Laptop', 'quantity': 20, 'unitPrice': 1200, 'totalPrice': 24000},
            {'name': 'Monitor', 'quantity': 15, 'unitPrice': 350, 'totalPrice': 5250},
        ],
        'totalPrice': 29250,
        'deliveryDays': 21,
        'paymentTerms': 'Net 30',
        'warranty': '1 year manufacturer warranty',
        'notes': None,
    }


def make_vendor_proposal(position: int, name: str, total: float, days: int | None = 14):
    return VendorProposal(
        vendor_name=name,
        proposal_id=f'prop-{position}',
        vendor_id=f'vendor-{position}',
        proposal=ProposalExtract(total_price=total, delivery_days=days),
    )


@pytest.fixture
def sample_proposals() -> list[VendorProposal]:
    return [
        make_vendor_proposal(0, 'Acme Co', 29250, 21),
        make_vendor_proposal(1, 'Globex', 31000, 14),
        make_vendor_proposal(2, 'Initech', 27500, None),
    ]
