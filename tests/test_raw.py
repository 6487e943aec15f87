"""Tests mode brut et contrôles de sauvegarde."""
import json

import pytest

from sitecms.editor.raw import RawBuffer
from sitecms.editor.validation import missing_paths, validate_save


class TestRawBuffer:
    def test_initial_text_is_pretty_json(self):
        buf = RawBuffer({"title": "首页"})
        assert buf.text == '{\n  "title": "首页"\n}'
        assert buf.valid

    def test_valid_edit_replaces_value(self):
        buf = RawBuffer({"a": 1})
        assert buf.update('{"a": 2}') is True
        assert buf.value == {"a": 2}
        assert buf.error is None

    def test_invalid_edit_keeps_last_value(self):
        buf = RawBuffer({"a": 1})
        assert buf.update('{"a": ') is False
        assert buf.value == {"a": 1}
        assert buf.text == '{"a": '
        assert buf.error.startswith("Invalid JSON syntax")
        assert not buf.valid

    def test_non_standard_constant_keeps_last_value(self):
        buf = RawBuffer({"a": 1})
        assert buf.update('{"a": NaN}') is False
        assert buf.value == {"a": 1}
        assert buf.error.startswith("Invalid JSON syntax")
        assert "NaN" in buf.error

    @pytest.mark.parametrize("doc", [
        {"title": "首页", "blocks": [{"type": "hero", "stats": [{"value": 1.5, "on": True}]}], "seo": None},
        [{"id": "a", "tags": ["é", "ü", "😀"]}, []],
        "纯文本",
    ])
    def test_text_round_trip(self, doc):
        buf = RawBuffer(doc)
        assert json.loads(buf.text) == doc
        assert buf.update(buf.text) is True
        assert buf.value == doc

    def test_recovers_after_fix(self):
        buf = RawBuffer([])
        buf.update("[1,")
        buf.update("[1]")
        assert buf.valid
        assert buf.value == [1]

    def test_reset_from_form(self):
        buf = RawBuffer({})
        buf.update("oops")
        buf.reset({"b": True})
        assert buf.state() == {"text": '{\n  "b": true\n}', "value": {"b": True}, "valid": True, "error": None}


class TestValidateSave:
    def test_no_original(self):
        assert validate_save(None, []) is None

    def test_root_type_mismatch(self):
        assert validate_save({"a": 1}, [1]) == "Root type mismatch: object → array"

    def test_missing_keys_listed(self):
        warning = validate_save({"title": "x", "items": [], "seo": {}}, {"title": "y"})
        assert warning == "Missing critical keys: items, seo"

    def test_added_keys_are_fine(self):
        assert validate_save({"title": "x"}, {"title": "x", "new": 1}) is None

    def test_arrays_of_any_length(self):
        assert validate_save([1, 2, 3], []) is None


class TestMissingPaths:
    def test_nested(self):
        master = {"title": "t", "hero": {"cta": "c", "sub": "s"}, "items": [{"id": 1, "x": 2}]}
        doc = {"title": "t", "hero": {"cta": "c"}, "items": [{"id": 1}]}
        assert missing_paths(master, doc) == ["hero.sub", "items[0].x"]

    def test_shorter_array(self):
        assert missing_paths({"a": [1, 2]}, {"a": [1]}) == ["a[1]"]

    def test_type_mismatch_at_root(self):
        assert missing_paths({"a": 1}, []) == ["$"]

    def test_identical(self):
        assert missing_paths({"a": [1]}, {"a": [1]}) == []
