"""
Tests for model-reply parsing and lenient value coercion.
"""

from datetime import datetime, timezone

import pytest

from brainforge.application.coercion import clamp_progress, clip_title, coerce_enum, parse_date
from brainforge.boundary.db.models import TaskPriority
from brainforge.core.ai.parsing import extract_json_object, strip_code_fences, try_extract_json_object


class TestJsonExtraction:
    """Test suite for JSON recovery from model replies."""

    def test_strip_code_fences(self):
        assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'
        assert strip_code_fences("```\nplain\n```") == "plain"
        assert strip_code_fences("no fences") == "no fences"

    def test_object_inside_prose(self):
        reply = 'Here you go:\n{"tasks": [{"title": "Ship"}]}\nGood luck!'

        assert extract_json_object(reply) == {"tasks": [{"title": "Ship"}]}

    def test_fenced_object(self):
        assert extract_json_object('```JSON\n{"nodes": [], "edges": []}\n```') == {"nodes": [], "edges": []}

    @pytest.mark.parametrize("reply", ["no json here", "} backwards {", '{"broken": ', "[1, 2, 3]"])
    def test_failures_raise_value_error(self, reply):
        with pytest.raises(ValueError):
            extract_json_object(reply)

    def test_try_variant_returns_none(self):
        assert try_extract_json_object("nothing") is None
        assert try_extract_json_object('{"ok": true}') == {"ok": True}


class TestCoercion:
    """Test suite for coercion of generated values."""

    def test_coerce_enum(self):
        assert coerce_enum(TaskPriority, " high ", TaskPriority.MEDIUM) == TaskPriority.HIGH
        assert coerce_enum(TaskPriority, "someday", TaskPriority.MEDIUM) == TaskPriority.MEDIUM
        assert coerce_enum(TaskPriority, 3, TaskPriority.LOW) == TaskPriority.LOW
        assert coerce_enum(TaskPriority, TaskPriority.URGENT, TaskPriority.LOW) == TaskPriority.URGENT

    def test_clip_title(self):
        assert clip_title("  Launch  ", "Untitled") == "Launch"
        assert clip_title("", "Untitled") == "Untitled"
        assert clip_title(None, "Untitled") == "Untitled"
        assert len(clip_title("x" * 500, "Untitled")) == 200

    def test_parse_date(self):
        assert parse_date("2026-03-01") == datetime(2026, 3, 1, tzinfo=timezone.utc)
        assert parse_date("2026-03-01T10:00:00Z") == datetime(2026, 3, 1, 10, tzinfo=timezone.utc)
        assert parse_date("next tuesday") is None
        assert parse_date(None) is None
        assert parse_date("  ") is None

    def test_clamp_progress(self):
        assert clamp_progress(140) == 100
        assert clamp_progress(-5) == 0
        assert clamp_progress("42") == 42
        assert clamp_progress("lots") == 0
        assert clamp_progress(None) == 0
