"""apiDoc output loader.

Reads the ``api_data.json`` / ``api_project.json`` files written by the
apiDoc parser, and optional OpenAPI template documents (JSON or YAML).
"""

import json
import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from apidoc_openapi.exceptions import InputFileError, InvalidEndpointError
from apidoc_openapi.parser.base import ApiEndpoint, ApiProject
from apidoc_openapi.utils import stringify_keys

logger = logging.getLogger(__name__)


def load_endpoints(file_path: Path) -> list[ApiEndpoint]:
    """Load and validate an ``api_data.json`` file."""
    data = _read_json(file_path)
    if not isinstance(data, list):
        raise InputFileError(f"{file_path}: expected a JSON array of endpoints")
    return parse_endpoints(data)


def load_project(file_path: Path | None) -> ApiProject:
    """Load an ``api_project.json`` file. No path means empty metadata."""
    if file_path is None:
        return ApiProject()
    data = _read_json(file_path)
    try:
        return ApiProject.model_validate(data)
    except ValidationError as e:
        raise InputFileError(f"{file_path}: invalid project metadata\n{e}") from e


def load_template(file_path: Path | None) -> dict:
    """Load an OpenAPI template document.

    A missing file is not an error: the document is generated without a
    template, as when no template is given.
    """
    if file_path is None:
        return {}
    if not file_path.exists():
        logger.warning("Template %s not found, continuing without it", file_path)
        return {}
    try:
        data = yaml.safe_load(file_path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise InputFileError(f"{file_path}: cannot read template: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InputFileError(f"{file_path}: template must be a mapping")
    return stringify_keys(data)


def parse_endpoints(records: list) -> list[ApiEndpoint]:
    """Validate raw endpoint records, rejecting structurally invalid ones."""
    endpoints = []
    for index, record in enumerate(records):
        try:
            endpoints.append(ApiEndpoint.model_validate(record))
        except ValidationError as e:
            raise InvalidEndpointError(_describe_invalid(index, record, e)) from e
    return endpoints


def _describe_invalid(index: int, record, error: ValidationError) -> str:
    keys = sorted({".".join(str(part) for part in err["loc"]) or "<record>" for err in error.errors()})
    label = f"endpoint #{index}"
    if isinstance(record, dict) and record.get("group") and record.get("name"):
        label += f" ({record['group']}.{record['name']})"
    return f"Invalid {label}: bad or missing {', '.join(keys)}"


def _read_json(file_path: Path):
    try:
        return json.loads(file_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise InputFileError(f"{file_path}: cannot read file: {e}") from e
    except json.JSONDecodeError as e:
        raise InputFileError(f"{file_path}: invalid JSON: {e}") from e
