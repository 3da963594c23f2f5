"""Data models for the API reference catalog.

The catalog loader turns the bundled YAML document into these models;
everything downstream (search, service, page) works on them.
"""

from pydantic import BaseModel, ConfigDict, Field


class ApiEndpoint(BaseModel):
    """A single documented endpoint with its example exchange."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    title: str
    method: str  # free text: GET / POST / PUT / DELETE / HL7 v2.x / SOAP
    endpoint: str  # /v2/org/{OrgId}/Patient
    category: str
    description: str
    request: str
    response: str
    search_params: list[str] | None = Field(default=None, alias="searchParams")


class ApiCategory(BaseModel):
    """A named group of endpoints shown as one section."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    color: str  # display hint, e.g. "#3b82f6"
    endpoints: list[ApiEndpoint]


class ServiceRoot(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    url: str


class SecurityItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    value: str


class SecurityNote(BaseModel):
    """One box of the security & authentication summary."""

    model_config = ConfigDict(frozen=True)

    heading: str
    items: list[SecurityItem] = []


class CatalogInfo(BaseModel):
    """Document-level metadata shown in the page header and footer."""

    model_config = ConfigDict(frozen=True)

    title: str
    subtitle: str = ""
    summary: str = ""
    version: str = ""
    last_updated: str = ""
    service_roots: list[ServiceRoot] = []
    security: list[SecurityNote] = []


class Catalog(BaseModel):
    model_config = ConfigDict(frozen=True)

    info: CatalogInfo
    categories: list[ApiCategory]
