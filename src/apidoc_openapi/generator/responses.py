"""Turn apiDoc success/error field groups into Response Objects."""

import re

from apidoc_openapi.generator.context import TransformContext
from apidoc_openapi.generator.schema import SchemaInferencer, add_property, object_schema
from apidoc_openapi.parser.base import ApiEndpoint

# apiDoc labels groups "Success 200" / "Error 4xx" by default.
STATUS_PREFIX = re.compile(r"^(Success|Error) ")


def status_code(label: str) -> str:
    """``"Success 200"`` -> ``"200"``, ``"Error 4xx"`` -> ``"4XX"``."""
    return STATUS_PREFIX.sub("", label, count=1).upper()


def group_responses(endpoint: ApiEndpoint, context: TransformContext) -> dict[str, dict]:
    """Build the ``responses`` map for *endpoint*.

    Groups without a direct field are skipped. Two groups mapping to the
    same status code overwrite each other, the later one winning.
    """
    responses: dict[str, dict] = {}
    for label, fields in endpoint.response_groups():
        schemas = SchemaInferencer(fields, context, endpoint.operation_id)
        direct = schemas.index.roots()
        if not direct:
            context.logger.debug("%s: skipping response group %r with no direct fields", endpoint.operation_id, label)
            continue

        schema = object_schema()
        for f in direct:
            add_property(schema, f.field, schemas.infer(f), f.optional)

        code = status_code(label)
        if code in responses:
            context.logger.debug("%s: response group %r replaces status %s", endpoint.operation_id, label, code)
        responses[code] = {"content": context.media(schema)}
    return responses
