"""Assemble the OpenAPI ``paths`` map from apiDoc endpoints."""

from apidoc_openapi.generator.context import TransformContext
from apidoc_openapi.generator.parameters import classify_inputs
from apidoc_openapi.generator.responses import group_responses
from apidoc_openapi.parser.base import ApiEndpoint
from apidoc_openapi.utils import without_none

PATH_PARAM_SIGIL = ":"


def to_patterned_fieldname(url: str) -> str:
    """Rewrite ``/users/:id`` as ``/users/{id}``."""
    segments = []
    for segment in url.split("/"):
        if segment.startswith(PATH_PARAM_SIGIL):
            segment = "{" + segment[len(PATH_PARAM_SIGIL):] + "}"
        segments.append(segment)
    return "/".join(segments)


def build_operation(endpoint: ApiEndpoint, context: TransformContext) -> dict:
    inputs = classify_inputs(endpoint, context)
    request_body = None
    if inputs.body_schema is not None:
        request_body = {"required": True, "content": context.media(inputs.body_schema)}

    # An empty parameters list is kept; an empty request body is not.
    operation = without_none({
        "summary": endpoint.title,
        "description": endpoint.description,
        "operationId": endpoint.operation_id,
        "parameters": inputs.parameters,
        "requestBody": request_body,
        "responses": group_responses(endpoint, context),
        "tags": [endpoint.group],
    })
    if endpoint.is_deprecated:
        operation["deprecated"] = True
    return operation


def build_paths(endpoints: list[ApiEndpoint], context: TransformContext | None = None) -> dict[str, dict]:
    """Build the Paths Object, one Path Item per normalized route.

    Endpoints sharing a route are merged into the same Path Item under their
    own method keys; a repeated route + method pair replaces the earlier
    operation.
    """
    context = context or TransformContext()
    paths: dict[str, dict] = {}
    for endpoint in endpoints:
        route = to_patterned_fieldname(endpoint.url)
        path_item = paths.setdefault(route, {})
        if endpoint.method in path_item:
            context.logger.debug("%s %s defined twice, keeping %s", endpoint.method.upper(), route, endpoint.operation_id)
        path_item[endpoint.method] = build_operation(endpoint, context)
        context.logger.debug("Added %s %s (%s)", endpoint.method.upper(), route, endpoint.operation_id)
    return paths
