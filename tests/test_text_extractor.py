"""Tests for JSON candidate extraction from model output."""

import json

import pytest

from artifact_core.extraction import (
    STRATEGY_BRACE,
    STRATEGY_DIRECT,
    STRATEGY_FENCE,
    decode_json,
    extract,
    extract_json_candidate,
    extract_payload,
    strip_progress_markers,
)


# ---------------------------------------------------------------------------
# Strategy selection
# ---------------------------------------------------------------------------

class TestStrategyOrder:
    """Strategies are tried in order and the first success wins."""

    def test_clean_json_uses_direct_parse(self):
        text = '  {"score": 90, "wins": [], "fixes": []}  \n'
        candidate, strategy = extract_json_candidate(text)
        assert strategy == STRATEGY_DIRECT
        assert candidate == '{"score": 90, "wins": [], "fixes": []}'

    def test_fenced_json_with_prose(self):
        text = (
            "Here's my analysis:\n```json\n"
            '{"score": 85, "summary": "ok", "wins": ["a"], "fixes": ["b"]}\n'
            "```\nThanks"
        )
        candidate, strategy = extract_json_candidate(text)
        assert strategy == STRATEGY_FENCE
        assert json.loads(candidate)["score"] == 85

    def test_fence_without_language_tag(self):
        text = 'Result:\n```\n{"a": 1}\n```'
        candidate, strategy = extract_json_candidate(text)
        assert strategy == STRATEGY_FENCE
        assert candidate == '{"a": 1}'

    def test_uppercase_json_tag(self):
        candidate, strategy = extract_json_candidate('```JSON\n{"a": 1}\n```')
        assert strategy == STRATEGY_FENCE
        assert candidate == '{"a": 1}'

    def test_fence_preferred_over_loose_braces(self):
        text = 'Prefix {"loose": true} then\n```json\n{"fenced": true}\n```'
        candidate, strategy = extract_json_candidate(text)
        assert strategy == STRATEGY_FENCE
        assert json.loads(candidate) == {"fenced": True}

    def test_second_fence_used_when_first_is_invalid(self):
        text = '```json\n{not json}\n```\nretry:\n```json\n{"ok": 1}\n```'
        candidate, strategy = extract_json_candidate(text)
        assert strategy == STRATEGY_FENCE
        assert json.loads(candidate) == {"ok": 1}

    def test_non_json_language_fence_is_skipped(self):
        text = '```python\nx = {"a": 1}\n```'
        candidate, strategy = extract_json_candidate(text)
        # Falls through to the brace walk, which finds the dict literal
        assert strategy == STRATEGY_BRACE
        assert candidate == '{"a": 1}'

    def test_prose_wrapped_json_uses_brace_walk(self):
        text = 'Some prose {"score": 150, "wins": [], "fixes": []} trailing'
        candidate, strategy = extract_json_candidate(text)
        assert strategy == STRATEGY_BRACE
        assert candidate == '{"score": 150, "wins": [], "fixes": []}'


# ---------------------------------------------------------------------------
# Brace walk
# ---------------------------------------------------------------------------

class TestBraceWalk:
    """The brace walk must respect string literals and escapes."""

    def test_braces_inside_strings_are_ignored(self):
        text = 'Note: {"text": "use } and { freely", "n": 1} end'
        assert extract(text) == '{"text": "use } and { freely", "n": 1}'

    def test_escaped_quote_does_not_end_string(self):
        text = r'x {"q": "say \"}\" now", "n": 2} y'
        candidate = extract(text)
        assert json.loads(candidate) == {"q": 'say "}" now', "n": 2}

    def test_escaped_backslash_before_quote(self):
        text = r'x {"path": "C:\\", "n": 3} y'
        candidate = extract(text)
        assert json.loads(candidate) == {"path": "C:\\", "n": 3}

    def test_nested_objects(self):
        text = 'out {"a": {"b": {"c": 1}}} out'
        assert extract(text) == '{"a": {"b": {"c": 1}}}'

    def test_unbalanced_returns_none(self):
        assert extract('start {"a": {"b": 1} never closed') is None

    def test_balanced_but_invalid_returns_none(self):
        # No loose fallback: the first balanced span is the only candidate
        assert extract('{not: valid} and later {"a": 1}') is None


# ---------------------------------------------------------------------------
# Rejections and properties
# ---------------------------------------------------------------------------

class TestRejections:

    @pytest.mark.parametrize("text", ["", "   ", "no json here", "[1, 2, 3]", "42", '"str"'])
    def test_no_object_found(self, text):
        assert extract(text) is None

    def test_non_string_input(self):
        assert extract(None) is None
        assert extract_json_candidate(123) == (None, "")

    def test_nan_literal_rejected(self):
        assert extract('{"score": NaN}') is None

    def test_decode_json_rejects_infinity(self):
        with pytest.raises(ValueError):
            decode_json('{"x": Infinity}')

    def test_array_of_objects_yields_first_object(self):
        assert extract('[{"a": 1}, {"b": 2}]') == '{"a": 1}'


class TestIdempotence:
    """A successful extraction re-extracts to itself."""

    @pytest.mark.parametrize("text", [
        '{"a": 1}',
        'intro ```json\n{"a": [1, 2]}\n``` outro',
        'prefix {"s": "}{", "b": true} suffix',
        '```\n  {"x": null}  \n```',
    ])
    def test_extract_of_candidate_is_candidate(self, text):
        candidate = extract(text)
        assert candidate is not None
        assert extract(candidate) == candidate


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class TestExtractPayload:

    def test_decodes_candidate(self):
        result = extract_payload('ok {"a": 1}')
        assert result.found
        assert result.decoded == {"a": 1}
        assert result.strategy == STRATEGY_BRACE

    def test_not_found(self):
        result = extract_payload("nothing structured")
        assert not result.found
        assert result.decoded is None
        assert result.strategy == ""

    def test_strips_progress_markers(self):
        text = 'generate: 1/3 (33%)\n{"a": 1}\ngenerate: 3/3 (100%)'
        assert extract_payload(text, strip_progress=True).candidate == '{"a": 1}'

    def test_strip_progress_markers_case_insensitive(self):
        assert strip_progress_markers("Generate: 2/5 (40%) done") == " done"
