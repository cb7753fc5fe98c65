"""Per-run settings and diagnostics for the OpenAPI generator."""

import logging
from dataclasses import dataclass, field

DEFAULT_CONTENT_TYPE = "application/json"
DEFAULT_MAX_DEPTH = 32


@dataclass(frozen=True)
class SchemaWarning:
    """A field whose declared type is not a known scalar type."""

    operation_id: str
    field: str
    declared_type: str | None

    def __str__(self) -> str:
        return (
            f"{self.operation_id}: field '{self.field}' has unknown type "
            f"{self.declared_type!r}, emitted as an untyped schema"
        )


@dataclass
class TransformContext:
    """Settings and collected warnings for one conversion run.

    Passed explicitly through every generator function; nothing here is
    module-level state.
    """

    content_type: str = DEFAULT_CONTENT_TYPE
    max_depth: int = DEFAULT_MAX_DEPTH
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("apidoc_openapi"))
    warnings: list[SchemaWarning] = field(default_factory=list)

    def report(self, warnings: list[SchemaWarning]) -> None:
        for warning in warnings:
            self.logger.warning("%s", warning)
        self.warnings.extend(warnings)

    def media(self, schema: dict) -> dict:
        """Wrap a schema in a ``content`` map for the configured media type."""
        return {self.content_type: {"schema": schema}}
