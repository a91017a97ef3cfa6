"""Unit tests for provider reply parsing."""

import pytest

from bff.errors import ResponseShapeError
from bff.services.parsing import (
    parse_assessment,
    parse_json_object,
    parse_word_list,
    require_audio,
    strip_code_fence,
)


class TestStripCodeFence:

    def test_plain_text_is_untouched(self):
        assert strip_code_fence('  {"a": 1} ') == '{"a": 1}'

    def test_json_fence(self):
        assert strip_code_fence('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_bare_fence(self):
        assert strip_code_fence('```\n{"a": 1}\n```\n') == '{"a": 1}'


class TestParseJsonObject:

    def test_fenced_object(self):
        assert parse_json_object('```json\n{"words": ["x"]}\n```') == {"words": ["x"]}

    @pytest.mark.parametrize("text", [None, "", "not json", "[1, 2]"])
    def test_rejects_non_objects(self, text):
        with pytest.raises(ResponseShapeError):
            parse_json_object(text)


class TestParseWordList:

    def test_truncates_to_ten(self):
        letters = list("abcdefghijk")
        text = '{"words": [%s]}' % ", ".join(f'"{c}"' for c in letters)
        assert parse_word_list(text) == letters[:10]

    def test_keeps_shorter_lists(self):
        assert parse_word_list('{"words": ["uno", "dos"]}') == ["uno", "dos"]

    @pytest.mark.parametrize("text", [
        '{"items": ["a"]}',
        '{"words": []}',
        '{"words": "a, b"}',
        '{"words": [1, 2]}',
    ])
    def test_missing_or_malformed_words_fail(self, text):
        with pytest.raises(ResponseShapeError):
            parse_word_list(text)


class TestParseAssessment:

    def test_valid_assessment(self):
        result = parse_assessment('{"score": 87, "feedback": "Great vowels!"}')
        assert result.score == 87
        assert result.feedback == "Great vowels!"

    @pytest.mark.parametrize("text", [
        '{"feedback": "ok"}',
        '{"score": 50}',
        '{"score": "50", "feedback": "ok"}',
        '{"score": 50.5, "feedback": "ok"}',
        '{"score": true, "feedback": "ok"}',
        '{"score": 0, "feedback": "ok"}',
        '{"score": 101, "feedback": "ok"}',
        '{"score": 50, "feedback": 3}',
    ])
    def test_invalid_assessment_fails(self, text):
        with pytest.raises(ResponseShapeError):
            parse_assessment(text)


class TestRequireAudio:

    def test_returns_payload(self):
        assert require_audio("UklGRg==") == "UklGRg=="

    @pytest.mark.parametrize("value", [None, ""])
    def test_missing_audio(self, value):
        with pytest.raises(ResponseShapeError, match="No audio data received"):
            require_audio(value)
