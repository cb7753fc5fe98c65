"""Schema inference from apiDoc's flat, dot-path field lists.

apiDoc never stores a tree: ``user``, ``user.address`` and
``user.address.city`` arrive as siblings, and nesting is implied by the
path prefix. :class:`FieldIndex` groups such a list by parent path once, and
:class:`SchemaInferencer` walks that index top-down to build Schema Objects.

Type handling:

* ``Object`` -- an object schema whose properties are the field's direct
  children; a child is required unless it is marked optional.
* ``<type>[]`` -- an array schema; ``items`` is the same field resolved with
  the marker removed, so ``Object[]`` picks up the field's children.
* anything else -- a scalar ``{"type": <lower-cased type>}``. Strings with a
  ``min..max`` size get ``maxLength`` set to the text after ``..`` (kept as a
  string, apiDoc's raw value). ``allowedValues`` is copied into ``enum``.

Known scalar types are string, number, integer, boolean and null; a lower-case
``object`` is not the ``Object`` marker and counts as unknown. Unknown types
are not rejected: they produce an untyped ``{}`` schema and a
:class:`~apidoc_openapi.generator.context.SchemaWarning`.
"""

from dataclasses import dataclass, field as dataclass_field

from apidoc_openapi.exceptions import SchemaDepthError
from apidoc_openapi.generator.context import SchemaWarning, TransformContext
from apidoc_openapi.parser.base import ApiField

OBJECT_TYPE = "Object"
ARRAY_MARKER = "[]"
SIZE_SEPARATOR = ".."
SCALAR_TYPES = frozenset({"string", "number", "integer", "boolean", "null"})


def object_schema() -> dict:
    return {"type": "object", "properties": {}, "required": []}


def add_property(schema: dict, name: str, prop: dict, optional: bool) -> None:
    schema["properties"][name] = prop
    if not optional:
        schema["required"].append(name)


def max_length(size: str | None) -> str | None:
    """Upper bound of a ``min..max`` size, as text. ``None`` when absent."""
    if not size:
        return None
    _, separator, upper = size.partition(SIZE_SEPARATOR)
    if not separator or not upper:
        return None
    return upper


class FieldIndex:
    """Fields of one scope grouped by their parent dot path.

    Direct fields are stored under the empty path.
    """

    def __init__(self, fields: list[ApiField]):
        self._children: dict[str, list[ApiField]] = {}
        for f in fields:
            self._children.setdefault(f.parent, []).append(f)

    def children(self, path: str) -> list[ApiField]:
        return self._children.get(path, [])

    def roots(self) -> list[ApiField]:
        return self.children("")


@dataclass
class SchemaResult:
    """Outcome of resolving one field."""

    schema: dict
    warnings: list[SchemaWarning] = dataclass_field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.warnings


class SchemaInferencer:
    """Resolves Schema Objects for fields of one scope (a field group)."""

    def __init__(self, fields: list[ApiField], context: TransformContext, operation_id: str = ""):
        self.index = FieldIndex(fields)
        self.context = context
        self.operation_id = operation_id

    def resolve(self, field: ApiField) -> SchemaResult:
        warnings: list[SchemaWarning] = []
        schema = self._walk(field, field.type, 0, warnings)
        return SchemaResult(schema, warnings)

    def infer(self, field: ApiField) -> dict:
        """Resolve *field* and hand any warnings to the context."""
        result = self.resolve(field)
        if not result.ok:
            self.context.report(result.warnings)
        return result.schema

    def _walk(self, field: ApiField, declared: str | None, depth: int, warnings: list) -> dict:
        if depth > self.context.max_depth:
            raise SchemaDepthError(field.field, self.context.max_depth)

        if declared == OBJECT_TYPE:
            schema = object_schema()
            for child in self.index.children(field.field):
                prop = self._walk(child, child.type, depth + 1, warnings)
                add_property(schema, child.name, prop, child.optional)
            return schema

        if declared and declared.endswith(ARRAY_MARKER):
            element = declared[: -len(ARRAY_MARKER)]
            return {"type": "array", "items": self._walk(field, element, depth + 1, warnings)}

        return self._scalar(field, declared, warnings)

    def _scalar(self, field: ApiField, declared: str | None, warnings: list) -> dict:
        type_name = (declared or "").lower()
        if type_name in SCALAR_TYPES:
            schema = {"type": type_name}
        else:
            warnings.append(SchemaWarning(self.operation_id, field.field, declared))
            schema = {}

        if type_name == "string":
            upper = max_length(field.size)
            if upper is not None:
                schema["maxLength"] = upper
        if field.allowed_values is not None:
            schema["enum"] = list(field.allowed_values)
        return schema
