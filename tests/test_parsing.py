"""Tests for prdgen.utils.parsing: strip_fences, response_text."""

from unittest.mock import MagicMock

from prdgen.utils.parsing import response_text, strip_fences


# --- strip_fences ---

class TestStripFences:
    def test_strip_json_fences(self):
        text = '```json\n{"key": "value"}\n```'
        assert strip_fences(text) == '{"key": "value"}'

    def test_strip_plain_fences(self):
        text = '```\n{"key": "value"}\n```'
        assert strip_fences(text) == '{"key": "value"}'

    def test_no_fences_returns_stripped(self):
        text = '  {"key": "value"}  '
        assert strip_fences(text) == '{"key": "value"}'


# --- response_text ---

class TestResponseText:
    def test_string_content(self):
        response = MagicMock()
        response.content = '{"ok": true}'
        assert response_text(response) == '{"ok": true}'

    def test_list_of_parts(self):
        response = MagicMock()
        response.content = [{"type": "text", "text": '{"ok": '}, "true}", {"type": "image_url"}]
        assert response_text(response) == '{"ok": true}'
