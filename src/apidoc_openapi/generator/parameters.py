"""Split an endpoint's inputs into Parameter Objects and a request body.

* ``URI Parameter`` fields are always path parameters.
* Fields from the ``Header`` group are header parameters.
* Other ``Parameter`` fields are query parameters for GET and DELETE and
  request-body properties for every other method.

Only direct fields are classified; dotted fields are reached through the
schema of their ``Object`` ancestor.
"""

from dataclasses import dataclass

from apidoc_openapi.generator.context import TransformContext
from apidoc_openapi.generator.schema import (
    SchemaInferencer,
    add_property,
    object_schema,
)
from apidoc_openapi.parser.base import HEADER_GROUP, ApiEndpoint, ApiField
from apidoc_openapi.utils import without_none

QUERY_METHODS = frozenset({"get", "delete"})


@dataclass
class ClassifiedInputs:
    parameters: list[dict]
    body_schema: dict | None  # None when the endpoint has no body fields


def classify_location(field: ApiField, method: str) -> str:
    """Return ``header``, ``query`` or ``body`` for a non-path field."""
    if field.group == HEADER_GROUP:
        return "header"
    if method in QUERY_METHODS:
        return "query"
    return "body"


def build_parameter(field: ApiField, location: str, schema: dict, context: TransformContext) -> dict:
    return without_none({
        "name": field.field,
        "description": field.description,
        "in": location,
        "required": not field.optional,
        "content": context.media(schema),
    })


def classify_inputs(endpoint: ApiEndpoint, context: TransformContext) -> ClassifiedInputs:
    parameters: list[dict] = []
    body_schema: dict | None = None

    path_fields = endpoint.path_fields()
    path_schemas = SchemaInferencer(path_fields, context, endpoint.operation_id)
    for f in path_schemas.index.roots():
        parameters.append(build_parameter(f, "path", path_schemas.infer(f), context))

    fields = endpoint.header_fields() + endpoint.parameter_fields()
    schemas = SchemaInferencer(fields, context, endpoint.operation_id)
    for f in schemas.index.roots():
        location = classify_location(f, endpoint.method)
        if location == "body":
            if body_schema is None:
                body_schema = object_schema()
            add_property(body_schema, f.field, schemas.infer(f), f.optional)
        else:
            parameters.append(build_parameter(f, location, schemas.infer(f), context))

    context.logger.debug(
        "%s: %d parameter(s), request body %s",
        endpoint.operation_id,
        len(parameters),
        "present" if body_schema is not None else "absent",
    )
    return ClassifiedInputs(parameters, body_schema)
