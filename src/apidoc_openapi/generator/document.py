"""Top-level OpenAPI document assembly, template merging and serialisation."""

import copy
import json

import yaml

from apidoc_openapi.generator.context import TransformContext
from apidoc_openapi.generator.paths import build_paths
from apidoc_openapi.parser.base import ApiEndpoint, ApiProject
from apidoc_openapi.utils import stringify_keys, without_none

OUTPUT_FORMATS = ("json", "yaml")


def get_info(project: ApiProject) -> dict:
    return without_none({
        "title": project.title,
        "description": project.description,
        "version": project.version,
    })


def get_servers(project: ApiProject) -> list[dict]:
    return [without_none({"url": project.url})]


def transform_input(
    project: ApiProject,
    endpoints: list[ApiEndpoint],
    context: TransformContext | None = None,
) -> dict:
    """Build the generated document.

    ``components``, ``security``, ``tags`` and ``externalDocs`` are always
    empty here; a template supplies them.
    """
    context = context or TransformContext()
    return {
        "info": get_info(project),
        "servers": get_servers(project),
        "paths": build_paths(endpoints, context),
        "components": {},
        "security": [],
        "tags": [],
        "externalDocs": {},
    }


def merge_documents(template: dict, generated: dict) -> dict:
    """Deep-merge *generated* into a copy of *template*.

    Generated leaf values win. ``None`` never replaces an existing value, and
    lists are merged element by element, so an empty generated list leaves the
    template's list intact. Template keys are compared as strings.
    """
    return _merge(stringify_keys(copy.deepcopy(template)), generated)


def _merge(target, source):
    if isinstance(target, dict) and isinstance(source, dict):
        for key, value in source.items():
            if key in target:
                if value is not None:
                    target[key] = _merge(target[key], value)
            else:
                target[key] = copy.deepcopy(value)
        return target
    if isinstance(target, list) and isinstance(source, list):
        for i, value in enumerate(source):
            if i < len(target):
                target[i] = _merge(target[i], value)
            else:
                target.append(copy.deepcopy(value))
        return target
    if source is None:
        return target
    return copy.deepcopy(source)


def convert(
    project: ApiProject,
    endpoints: list[ApiEndpoint],
    template: dict | None = None,
    context: TransformContext | None = None,
) -> dict:
    """Generate the document for *endpoints* and merge it over *template*."""
    context = context or TransformContext()
    generated = transform_input(project, endpoints, context)
    return merge_documents(template or {}, generated)


def dump_document(document: dict, fmt: str = "json") -> str:
    if fmt == "yaml":
        return yaml.safe_dump(document, sort_keys=False, allow_unicode=True)
    if fmt == "json":
        return json.dumps(document, indent=2, ensure_ascii=False)
    raise ValueError(f"Unknown output format: {fmt}")
