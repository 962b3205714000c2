"""
Tests for extraction.parsing

Test Coverage:
- extract_candidate(): fence + array isolation composition
- parse_json_content(): direct parse, bracket-matching recovery, error types
"""

import pytest

from core.errors import ExtractionExhaustedError, ParseFailureError
from extraction.parsing import extract_candidate, parse_json_content


def test_candidate_from_fenced_array_with_prose():
    raw = 'Here are your questions:\n```json\n[{"question": "Q"}]\n```\nEnjoy!'

    assert extract_candidate(raw) == '[{"question": "Q"}]'


def test_candidate_isolates_array_from_prose_without_fence():
    raw = 'The questions are [{"question": "Q"}] as requested.'

    assert extract_candidate(raw) == '[{"question": "Q"}]'


def test_candidate_keeps_wrapper_object_whole():
    raw = '{"questions": [{"question": "Q"}]}'

    assert extract_candidate(raw) == raw


def test_candidate_never_raises_on_plain_text():
    assert extract_candidate("plain text") == "plain text"


def test_direct_parse():
    assert parse_json_content('[1, 2]', '[1, 2]') == [1, 2]


def test_recovery_scans_original_text_not_candidate():
    original = 'Sure thing! {"questions": []} Let me know.'

    assert parse_json_content("Sure thing! garbage", original) == {"questions": []}


def test_failure_reports_first_parse_error():
    with pytest.raises(ParseFailureError) as exc_info:
        parse_json_content('[{"question": "Q"', '[{"question": "Q"')

    assert "Expecting" in str(exc_info.value)


def test_recovered_fragment_that_fails_raises_parse_failure():
    with pytest.raises(ParseFailureError):
        parse_json_content("{not json}", "{not json}")


def test_no_json_anywhere_is_extraction_exhausted():
    with pytest.raises(ExtractionExhaustedError):
        parse_json_content("plain text", "plain text")
