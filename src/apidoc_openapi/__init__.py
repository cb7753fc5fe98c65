"""Build OpenAPI documents from apiDoc parser output."""

__version__ = "0.1.0"
