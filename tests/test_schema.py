import pytest

from apidoc_openapi.exceptions import SchemaDepthError
from apidoc_openapi.generator.context import TransformContext
from apidoc_openapi.generator.schema import FieldIndex, SchemaInferencer, max_length
from apidoc_openapi.parser.base import ApiField


def _field(path: str, type_: str | None = "String", optional: bool = False, **kwargs) -> ApiField:
    return ApiField(field=path, type=type_, optional=optional, **kwargs)


def _infer(fields: list[ApiField], path: str, context: TransformContext | None = None) -> dict:
    inferencer = SchemaInferencer(fields, context or TransformContext(), "Test.Op")
    target = next(f for f in fields if f.field == path)
    return inferencer.infer(target)


class TestFieldIndex:
    def test_groups_by_parent_path(self):
        fields = [
            _field("user", "Object"),
            _field("user.name"),
            _field("user.address", "Object"),
            _field("user.address.city"),
            _field("total", "Number"),
        ]
        index = FieldIndex(fields)
        assert [f.field for f in index.roots()] == ["user", "total"]
        assert [f.field for f in index.children("user")] == ["user.name", "user.address"]
        assert [f.field for f in index.children("user.address")] == ["user.address.city"]
        assert index.children("total") == []


class TestScalarSchema:
    def test_lowercases_type(self):
        assert _infer([_field("count", "Number")], "count") == {"type": "number"}

    def test_string_size_sets_max_length_as_text(self):
        schema = _infer([_field("name", "String", size="4..20")], "name")
        assert schema == {"type": "string", "maxLength": "20"}

    def test_size_ignored_for_non_string(self):
        assert _infer([_field("n", "Number", size="1..5")], "n") == {"type": "number"}

    def test_allowed_values_copied_to_enum(self):
        schema = _infer([_field("role", "String", allowed_values=["admin", "user"])], "role")
        assert schema == {"type": "string", "enum": ["admin", "user"]}

    def test_unknown_type_is_untyped_and_warns(self):
        context = TransformContext()
        schema = _infer([_field("since", "Date")], "since", context)
        assert schema == {}
        assert len(context.warnings) == 1
        assert context.warnings[0].field == "since"
        assert context.warnings[0].declared_type == "Date"
        assert context.warnings[0].operation_id == "Test.Op"

    def test_null_type(self):
        context = TransformContext()
        assert _infer([_field("gone", "Null")], "gone", context) == {"type": "null"}
        assert context.warnings == []

    def test_lowercase_object_is_unknown(self):
        context = TransformContext()
        assert _infer([_field("meta", "object")], "meta", context) == {}
        assert [w.declared_type for w in context.warnings] == ["object"]

    def test_missing_type_warns(self):
        context = TransformContext()
        assert _infer([_field("blob", None)], "blob", context) == {}
        assert len(context.warnings) == 1

    def test_resolve_returns_result_without_reporting(self):
        context = TransformContext()
        fields = [_field("since", "Date")]
        result = SchemaInferencer(fields, context).resolve(fields[0])
        assert result.ok is False
        assert result.schema == {}
        assert context.warnings == []


class TestObjectSchema:
    def test_direct_children_become_properties(self):
        fields = [
            _field("address", "Object"),
            _field("address.city", "String"),
            _field("address.zip", "String", optional=True),
        ]
        schema = _infer(fields, "address")
        assert schema == {
            "type": "object",
            "properties": {"city": {"type": "string"}, "zip": {"type": "string"}},
            "required": ["city"],
        }

    def test_grandchildren_nest_under_their_parent(self):
        fields = [
            _field("user", "Object"),
            _field("user.address", "Object"),
            _field("user.address.city", "String"),
        ]
        schema = _infer(fields, "user")
        assert list(schema["properties"]) == ["address"]
        assert schema["properties"]["address"]["properties"]["city"] == {"type": "string"}

    def test_object_without_children(self):
        assert _infer([_field("meta", "Object")], "meta") == {
            "type": "object",
            "properties": {},
            "required": [],
        }

    def test_prefix_sibling_is_not_a_child(self):
        fields = [_field("user", "Object"), _field("username", "String")]
        assert _infer(fields, "user")["properties"] == {}


class TestArraySchema:
    def test_scalar_array(self):
        assert _infer([_field("scores", "Number[]")], "scores") == {
            "type": "array",
            "items": {"type": "number"},
        }

    def test_array_of_objects_uses_children(self):
        fields = [_field("items", "Object[]"), _field("items.sku", "String")]
        schema = _infer(fields, "items")
        assert schema["type"] == "array"
        assert schema["items"]["properties"] == {"sku": {"type": "string"}}
        assert schema["items"]["required"] == ["sku"]

    def test_nested_arrays(self):
        assert _infer([_field("grid", "Number[][]")], "grid") == {
            "type": "array",
            "items": {"type": "array", "items": {"type": "number"}},
        }

    def test_string_array_keeps_element_constraints(self):
        schema = _infer([_field("tags", "String[]", size="1..8")], "tags")
        assert schema == {"type": "array", "items": {"type": "string", "maxLength": "8"}}


class TestDepthLimit:
    def test_exceeding_max_depth_raises(self):
        fields = [_field("a", "Object"), _field("a.b", "Object"), _field("a.b.c", "Object"), _field("a.b.c.d")]
        with pytest.raises(SchemaDepthError, match="a.b.c"):
            _infer(fields, "a", TransformContext(max_depth=2))

    def test_within_max_depth(self):
        fields = [_field("a", "Object"), _field("a.b", "Object"), _field("a.b.c")]
        schema = _infer(fields, "a", TransformContext(max_depth=2))
        assert schema["properties"]["b"]["properties"]["c"] == {"type": "string"}


class TestMaxLength:
    def test_upper_bound(self):
        assert max_length("4..20") == "20"

    def test_open_lower_bound(self):
        assert max_length("..20") == "20"

    def test_open_upper_bound(self):
        assert max_length("4..") is None

    def test_no_separator(self):
        assert max_length("20") is None

    def test_absent(self):
        assert max_length(None) is None
