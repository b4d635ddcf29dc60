"""
Lumina Primitives — Validation Tests

Structural checks only: the validator decides whether an intent payload or a
persisted document is well-formed. Whether referenced blocks exist is the
reducer's concern and is not tested here.
"""

import pytest

from engine.kernel.primitives import INTENT_TYPES, validate_block_dict, validate_document_data, validate_intent

# ============================================================================
# Intent type
# ============================================================================


class TestIntentType:
    def test_unknown_type(self):
        errors = validate_intent("block.explode", {})
        assert errors == ["Unknown intent type: block.explode"]

    def test_payload_must_be_dict(self):
        errors = validate_intent("block.remove", None)
        assert "Payload must be a non-null object" in errors

    @pytest.mark.parametrize("intent_type", ["selection.clear", "drag.end", "document.clear"])
    def test_payload_free_intents(self, intent_type):
        assert validate_intent(intent_type, {}) == []

    def test_all_types_known(self):
        assert "block.resize" in INTENT_TYPES
        assert "document.replace" in INTENT_TYPES


# ============================================================================
# Block intents
# ============================================================================


class TestBlockIntents:
    def test_add_valid(self):
        assert validate_intent("block.add", {"kind": "container"}) == []

    def test_add_missing_kind(self):
        assert validate_intent("block.add", {}) == ["block.add requires 'kind'"]

    def test_add_bad_kind(self):
        assert validate_intent("block.add", {"kind": "video"}) == ["Invalid block kind: video"]

    def test_drop_move_valid(self):
        assert validate_intent("block.drop", {"source_id": "a", "target_id": "b"}) == []

    def test_drop_palette_without_target_valid(self):
        assert validate_intent("block.drop", {"kind": "text"}) == []

    def test_drop_move_requires_target(self):
        errors = validate_intent("block.drop", {"source_id": "a"})
        assert any("requires 'target_id'" in e for e in errors)

    def test_drop_needs_a_source(self):
        errors = validate_intent("block.drop", {"target_id": "b"})
        assert any("exactly one of" in e for e in errors)

    def test_drop_empty_target_rejected(self):
        errors = validate_intent("block.drop", {"kind": "text", "target_id": ""})
        assert "'target_id' must be a non-empty string" in errors

    @pytest.mark.parametrize("intent_type", ["block.remove", "block.duplicate", "selection.set", "drag.start"])
    def test_id_required(self, intent_type):
        assert validate_intent(intent_type, {}) == [f"{intent_type} requires 'id'"]

    @pytest.mark.parametrize("intent_type", ["block.remove", "block.duplicate"])
    def test_id_must_be_string(self, intent_type):
        assert validate_intent(intent_type, {"id": 7}) == ["'id' must be a non-empty string"]

    def test_update_content_valid(self):
        assert validate_intent("block.update_content", {"id": "a", "content": ""}) == []

    def test_update_content_missing(self):
        assert validate_intent("block.update_content", {"id": "a"}) == ["block.update_content requires 'content'"]

    def test_update_style_valid(self):
        assert validate_intent("block.update_style", {"id": "a", "key": "gap", "value": "8px"}) == []

    def test_update_style_null_value(self):
        assert validate_intent("block.update_style", {"id": "a", "key": "gap", "value": None}) == []

    def test_update_style_camel_case(self):
        assert validate_intent("block.update_style", {"id": "a", "key": "borderRadius", "value": "4px"}) == []

    def test_update_style_unknown_key(self):
        errors = validate_intent("block.update_style", {"id": "a", "key": "position", "value": "fixed"})
        assert errors == ["Unknown style key: position"]

    def test_update_style_value_required(self):
        errors = validate_intent("block.update_style", {"id": "a", "key": "gap"})
        assert errors == ["block.update_style requires 'value'"]

    def test_update_style_numeric_value(self):
        errors = validate_intent("block.update_style", {"id": "a", "key": "gap", "value": 8})
        assert errors == ["'value' must be a string or null"]

    @pytest.mark.parametrize("width", [70, 42.5, 0, 500])
    def test_resize_numbers_accepted(self, width):
        assert validate_intent("block.resize", {"id": "a", "width": width}) == []

    @pytest.mark.parametrize("width", ["70%", True, float("nan")])
    def test_resize_non_numbers_rejected(self, width):
        assert validate_intent("block.resize", {"id": "a", "width": width}) != []

    def test_resize_width_required(self):
        assert validate_intent("block.resize", {"id": "a"}) == ["block.resize requires 'width'"]


# ============================================================================
# Persisted documents
# ============================================================================


def text_block(block_id="t", **extra):
    return {"id": block_id, "type": "text", "content": "x", "styles": {}, **extra}


class TestDocumentValidation:
    def test_valid_forest(self):
        data = [
            {"id": "c", "type": "container", "content": "", "styles": {"gap": "4px"}, "children": [text_block()]},
            text_block("u"),
        ]
        assert validate_document_data(data) == []

    def test_empty_forest_valid(self):
        assert validate_document_data([]) == []

    def test_not_a_list(self):
        assert validate_document_data({"blocks": []}) == ["Document must be a list of blocks"]

    def test_block_not_object(self):
        assert validate_document_data(["nope"]) == ["[0]: block must be an object"]

    def test_missing_id(self):
        errors = validate_block_dict({"type": "text", "styles": {}})
        assert any("non-empty string 'id'" in e for e in errors)

    def test_unknown_type(self):
        errors = validate_block_dict({"id": "a", "type": "video", "styles": {}})
        assert any("invalid block type" in e for e in errors)

    def test_content_must_be_string(self):
        errors = validate_block_dict(text_block(content=3))
        assert any("'content' must be a string" in e for e in errors)

    def test_container_requires_children(self):
        errors = validate_block_dict({"id": "c", "type": "container", "styles": {}})
        assert any("container requires 'children'" in e for e in errors)

    def test_leaf_with_children(self):
        errors = validate_block_dict(text_block(children=[]))
        assert any("only containers may have 'children'" in e for e in errors)

    def test_unknown_style_key(self):
        errors = validate_block_dict(text_block(styles={"position": "fixed"}))
        assert any("unknown style key" in e for e in errors)

    def test_camel_case_style_key_accepted(self):
        assert validate_block_dict(text_block(styles={"fontSize": "18px"})) == []

    def test_non_string_style_value(self):
        errors = validate_block_dict(text_block(styles={"gap": 4}))
        assert any("must be a string" in e for e in errors)

    def test_duplicate_ids_across_levels(self):
        data = [
            {"id": "c", "type": "container", "styles": {}, "children": [text_block("dup")]},
            text_block("dup"),
        ]
        errors = validate_document_data(data)
        assert errors == ["[1]: duplicate block id 'dup'"]

    def test_nested_error_path(self):
        data = [{"id": "c", "type": "container", "styles": {}, "children": [text_block(content=None)]}]
        errors = validate_document_data(data)
        assert errors == ["[0].children[0]: 'content' must be a string"]
