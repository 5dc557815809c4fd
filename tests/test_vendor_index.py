"""
Tests for the positional vendor index and placeholder substitution.
"""

import pytest

from procurement_ai.models import ProposalExtract, VendorProposal
from procurement_ai.pipeline.vendor_index import VendorIndex


def build_index(*names: str) -> VendorIndex:
    return VendorIndex(
        [
            VendorProposal(
                vendor_name=name,
                proposal_id=f'prop-{i}',
                proposal=ProposalExtract(total_price=1000 + i),
            )
            for i, name in enumerate(names)
        ]
    )


class TestVendorIndex:
    """Test position lookups."""

    def test_positions(self, sample_proposals):
        index = VendorIndex(sample_proposals)

        assert len(index) == 3
        assert index.display_names == ['Acme Co', 'Globex', 'Initech']
        for position, proposal in enumerate(sample_proposals):
            assert index.get(position) is proposal
            assert index.position_of(proposal.proposal_id) == position

    @pytest.mark.parametrize('position', [-1, 3, 99, True, '1', 1.0, None])
    def test_out_of_range_or_wrong_type(self, sample_proposals, position):
        index = VendorIndex(sample_proposals)

        assert not index.contains(position)
        assert index.get(position) is None

    def test_unknown_proposal_id(self, sample_proposals):
        assert VendorIndex(sample_proposals).position_of('prop-missing') is None

    def test_preserves_input_order(self):
        index = build_index('Zeta', 'Alpha')

        assert list(p.vendor_name for p in index) == ['Zeta', 'Alpha']


class TestPlaceholderSubstitution:
    """Test "Vendor N" replacement in model prose."""

    def test_basic_substitution(self):
        index = build_index('Acme Co', 'Globex')

        assert (
            index.substitute_placeholders('Vendor 1 is cheaper than Vendor 2')
            == 'Acme Co is cheaper than Globex'
        )

    def test_case_and_whitespace_insensitive(self):
        index = build_index('Acme Co', 'Globex')

        assert index.substitute_placeholders('VENDOR  2 and vendor\n1') == 'Globex and Acme Co'

    def test_out_of_range_left_unchanged(self):
        index = build_index('Acme Co', 'Globex')

        assert index.substitute_placeholders('Vendor 3 and Vendor 0') == 'Vendor 3 and Vendor 0'

    def test_multi_digit_positions(self):
        names = [f'Supplier {chr(65 + i)}' for i in range(12)]
        index = build_index(*names)

        assert index.substitute_placeholders('Vendor 12 beats Vendor 1') == (
            'Supplier L beats Supplier A'
        )

    def test_no_chained_substitution(self):
        """A substituted name that itself looks like a placeholder is not replaced again."""
        index = build_index('Vendor 2 Ltd', 'Globex')

        assert index.substitute_placeholders('Vendor 1 wins') == 'Vendor 2 Ltd wins'

    def test_embedded_word_not_matched(self):
        index = build_index('Acme Co', 'Globex')

        assert index.substitute_placeholders('Subvendor 1 is late') == 'Subvendor 1 is late'

    @pytest.mark.parametrize('text', ['', None])
    def test_empty_text(self, text):
        assert build_index('A', 'B').substitute_placeholders(text) == text
