"""Data models for apiDoc parser output.

apiDoc writes ``api_project.json`` and ``api_data.json``; these models
validate those records before they reach the OpenAPI generator. Field names
follow apiDoc's JSON keys, with snake_case aliases where Python needs them.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

HEADER_GROUP = "Header"
PARAMETER_GROUP = "Parameter"
PATH_GROUP = "URI Parameter"


class ApiField(BaseModel):
    """A single documented field. Nesting is expressed by a dot path."""

    model_config = ConfigDict(populate_by_name=True)

    field: str  # user.address.city
    type: str | None = None  # String / Number / Object / String[] ...
    optional: bool = False
    description: str | None = None
    size: str | None = None  # "4..20"
    allowed_values: list | None = Field(default=None, alias="allowedValues")
    group: str = ""

    @property
    def is_direct(self) -> bool:
        return "." not in self.field

    @property
    def parent(self) -> str:
        return self.field.rpartition(".")[0]

    @property
    def name(self) -> str:
        return self.field.rpartition(".")[2]


class FieldSet(BaseModel):
    """Labelled field groups, e.g. ``{"Success 200": [...]}``."""

    fields: dict[str, list[ApiField]] = {}


class ApiProject(BaseModel):
    """Project metadata used for the ``info`` and ``servers`` blocks."""

    title: str | None = None
    description: str | None = None
    version: str | None = None
    url: str | None = None


class ApiEndpoint(BaseModel):
    """A single documented API operation."""

    model_config = ConfigDict(populate_by_name=True)

    url: str = Field(min_length=1)  # /users/:id
    method: str = Field(alias="type", min_length=1)
    group: str = Field(min_length=1)
    name: str = Field(min_length=1)
    title: str | None = None
    description: str | None = None
    deprecated: bool | dict | None = None  # apiDoc emits {"content": "..."}
    header: FieldSet | None = None
    parameter: FieldSet | None = None
    success: FieldSet | None = None
    error: FieldSet | None = None

    @field_validator("method")
    @classmethod
    def _lower_method(cls, value: str) -> str:
        return value.lower()

    @property
    def operation_id(self) -> str:
        return f"{self.group}.{self.name}"

    @property
    def is_deprecated(self) -> bool:
        return bool(self.deprecated)

    def header_fields(self) -> list[ApiField]:
        return self.header.fields.get(HEADER_GROUP, []) if self.header else []

    def parameter_fields(self, label: str = PARAMETER_GROUP) -> list[ApiField]:
        return self.parameter.fields.get(label, []) if self.parameter else []

    def path_fields(self) -> list[ApiField]:
        return self.parameter_fields(PATH_GROUP)

    def response_groups(self) -> list[tuple[str, list[ApiField]]]:
        """Success groups followed by error groups, in declaration order."""
        groups = []
        for field_set in (self.success, self.error):
            if field_set:
                groups.extend(field_set.fields.items())
        return groups
