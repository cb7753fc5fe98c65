"""Exception hierarchy for apidoc-openapi.

All errors raised on purpose derive from :class:`ApiDocError`; the CLI turns
them into a ``click.ClickException`` so users get a one-line message instead
of a traceback.

    ApiDocError
    +-- InvalidEndpointError
    +-- SchemaDepthError
    +-- InputFileError
"""


class ApiDocError(Exception):
    """Base exception for all apidoc-openapi errors."""


class InvalidEndpointError(ApiDocError):
    """An endpoint record lacks ``url``, ``type``, ``group`` or ``name``."""


class SchemaDepthError(ApiDocError):
    """Field nesting is deeper than the configured maximum."""

    def __init__(self, field: str, max_depth: int):
        super().__init__(f"Field '{field}' is nested deeper than {max_depth} levels")
        self.field = field
        self.max_depth = max_depth


class InputFileError(ApiDocError):
    """An input or template file could not be read or decoded."""
