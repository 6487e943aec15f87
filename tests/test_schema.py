"""Tests inférence de schéma — priorité des règles, sous-types de tableaux, libellés."""
import pytest

from sitecms.blocks import FieldHint, get_spec
from sitecms.editor.schema import (
    ArrayKind, EditType, classify_array, humanize, infer_field_type,
)


class TestInferFieldType:
    def test_hint_wins_over_everything(self):
        hints = {"layout": FieldHint(type=EditType.SELECT, options=["grid", "alternating"])}
        assert infer_field_type("layout", "grid", hints) is EditType.SELECT

    def test_hint_as_plain_dict(self):
        assert infer_field_type("url", "", {"url": {"type": "image"}}) is EditType.IMAGE

    def test_media_url_forced_to_image_by_registry(self):
        hints = get_spec("media").hints
        assert infer_field_type("url", "https://youtu.be/x", hints) is EditType.IMAGE

    @pytest.mark.parametrize("key", ["image", "heroImage", "bgImg", "icon", "companyLogo", "poster", "IMAGE"])
    def test_image_suffix(self, key):
        assert infer_field_type(key, "x.png") is EditType.IMAGE

    def test_image_suffix_beats_null(self):
        assert infer_field_type("backgroundImage", None) is EditType.IMAGE

    def test_null_is_text(self):
        assert infer_field_type("title", None) is EditType.TEXT

    def test_bool_before_number(self):
        assert infer_field_type("enabled", True) is EditType.BOOLEAN
        assert infer_field_type("count", 0) is EditType.NUMBER
        assert infer_field_type("ratio", 1.5) is EditType.NUMBER

    def test_long_string_is_textarea(self):
        assert infer_field_type("desc", "a" * 101) is EditType.TEXTAREA
        assert infer_field_type("desc", "a" * 100) is EditType.TEXT

    def test_long_color_string_is_still_textarea(self):
        assert infer_field_type("color", "x" * 150) is EditType.TEXTAREA

    @pytest.mark.parametrize("key", ["color", "textColor", "background", "bgTone"])
    def test_color_keys(self, key):
        assert infer_field_type(key, "blue") is EditType.COLOR

    def test_containers(self):
        assert infer_field_type("items", []) is EditType.ARRAY
        assert infer_field_type("seo", {}) is EditType.OBJECT

    def test_total_on_novel_values(self):
        assert infer_field_type("x", object()) is EditType.TEXT


class TestClassifyArray:
    def test_blocks_key(self):
        assert classify_array("blocks", []) is ArrayKind.BLOCKS

    def test_image_key(self):
        assert classify_array("images", ["/images/a.png"]) is ArrayKind.IMAGES
        assert classify_array("images", []) is ArrayKind.IMAGES
        assert classify_array("logos", ["/l.svg"]) is ArrayKind.IMAGES

    def test_image_values(self):
        assert classify_array("gallery2", ["/images/a.png", "/images/b.png"]) is ArrayKind.IMAGES
        assert classify_array("shots", ["/images/a.png"]) is ArrayKind.IMAGES

    def test_primitives(self):
        assert classify_array("features", ["Fast", "Cheap"]) is ArrayKind.PRIMITIVES
        assert classify_array("ids", [1, 2, 3]) is ArrayKind.PRIMITIVES

    def test_records(self):
        assert classify_array("items", [{"id": "a"}]) is ArrayKind.RECORDS
        assert classify_array("items", []) is ArrayKind.RECORDS

    def test_image_key_with_objects_is_records(self):
        assert classify_array("images", [{"src": "/a.png"}]) is ArrayKind.RECORDS


class TestHumanize:
    def test_camel_case(self):
        assert humanize("ctaText") == "Cta Text"
        assert humanize("backgroundImage") == "Background Image"

    def test_snake_case(self):
        assert humanize("product_ids") == "Product ids"

    def test_index(self):
        assert humanize(0) == "0"
