"""
Tests for response normalization and required-field validation.
"""

import json

import pytest

from procurement_ai.errors import InvalidInput, MalformedResponse
from procurement_ai.parsing import (
    find_missing_fields,
    get_nested_value,
    normalize_response,
)


SAMPLE_VALUE = {
    'title': 'Office Equipment',
    'items': [{'name': 'Laptop', 'quantity': 20}],
    'budgetAmount': None,
    'nested': {'flag': True, 'text': 'braces } inside { strings'},
}


class TestNormalizeResponse:
    """Test recovery of JSON from noisy model output."""

    def test_plain_json(self):
        assert normalize_response(json.dumps(SAMPLE_VALUE)) == SAMPLE_VALUE

    def test_fenced_json_with_language_tag(self):
        raw = '```json\n' + json.dumps(SAMPLE_VALUE, indent=2) + '\n```'
        assert normalize_response(raw) == SAMPLE_VALUE

    def test_fenced_json_without_language_tag(self):
        raw = '```\n' + json.dumps(SAMPLE_VALUE) + '\n```'
        assert normalize_response(raw) == SAMPLE_VALUE

    def test_fenced_json_with_surrounding_prose(self):
        """Fenced JSON with commentary before and after returns the original value."""
        raw = (
            'Sure! Here is the structured RFP you asked for:\n'
            '```json\n' + json.dumps(SAMPLE_VALUE, indent=2) + '\n```\n'
            'Let me know if you need anything else.'
        )
        assert normalize_response(raw) == SAMPLE_VALUE

    def test_fence_first_with_trailing_prose(self):
        raw = '```json\n' + json.dumps(SAMPLE_VALUE) + '\n```\nHope this helps!'
        assert normalize_response(raw) == SAMPLE_VALUE

    def test_prose_with_braces_after_closing_fence(self):
        raw = '```json\n{"a": 1}\n```\nNote: fields marked {optional} may be null.'
        assert normalize_response(raw) == {'a': 1}

    def test_leading_and_trailing_commentary(self):
        raw = 'Result: ' + json.dumps(SAMPLE_VALUE) + ' -- end of result'
        assert normalize_response(raw) == SAMPLE_VALUE

    def test_surrounding_whitespace(self):
        assert normalize_response('\n\n  {"a": 1}  \n') == {'a': 1}

    def test_no_braces_still_parsed(self):
        """Without braces the whole trimmed text is parsed."""
        assert normalize_response('  [1, 2, 3] ') == [1, 2, 3]

    def test_no_braces_invalid_fails_cleanly(self):
        with pytest.raises(MalformedResponse):
            normalize_response('I could not find any proposal data in this email.')

    def test_invalid_json_raises_malformed(self):
        with pytest.raises(MalformedResponse) as exc_info:
            normalize_response('{"title": "Missing quote, "items": [}')

        assert 'raw_response' in exc_info.value.context

    def test_raw_response_truncated_in_context(self):
        raw = '{' + 'x' * 2000
        with pytest.raises(MalformedResponse) as exc_info:
            normalize_response(raw)

        assert len(exc_info.value.context['raw_response']) == 500

    @pytest.mark.parametrize('bad_input', ['', None, 42, {'a': 1}])
    def test_empty_or_non_text_input(self, bad_input):
        with pytest.raises(InvalidInput):
            normalize_response(bad_input)


class TestFieldValidator:
    """Test dot-path resolution and missing-field detection."""

    def test_nested_array_path_present(self):
        assert find_missing_fields({'a': {'b': [{'c': 1}]}}, ['a.b.0.c']) == []

    def test_nested_array_path_missing(self):
        assert find_missing_fields({}, ['a.b.0.c']) == ['a.b.0.c']

    def test_null_counts_as_missing(self):
        data = {'title': None, 'description': 'x'}
        assert find_missing_fields(data, ['title', 'description']) == ['title']

    def test_falsy_values_are_present(self):
        data = {'quantity': 0, 'flag': False, 'text': '', 'items': []}
        assert find_missing_fields(data, ['quantity', 'flag', 'text', 'items']) == []

    def test_index_out_of_range_is_missing(self):
        data = {'items': [{'name': 'Laptop'}]}
        assert find_missing_fields(data, ['items.0.name', 'items.3.name']) == ['items.3.name']

    def test_traversal_through_scalar_is_missing(self):
        assert find_missing_fields({'title': 'RFP'}, ['title.length']) == ['title.length']

    def test_non_numeric_segment_on_list_is_missing(self):
        assert get_nested_value({'items': [1, 2]}, 'items.first') is None

    def test_preserves_order_of_missing_fields(self):
        missing = find_missing_fields({}, ['totalPrice', 'items'])
        assert missing == ['totalPrice', 'items']

    def test_get_nested_value(self):
        data = {'items': [{'name': 'Laptop', 'specs': {'ram': '16GB'}}]}
        assert get_nested_value(data, 'items.0.specs.ram') == '16GB'
