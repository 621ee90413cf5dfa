"""Pydantic request/response models for the propdoc API.

These are the API contract — decoupled from the internal domain dataclasses.
Route handlers convert between the two.
"""

from pydantic import BaseModel, Field

from propdoc.core.types import ProjectData


class ProjectDataRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200, examples=["Sunny Villa"])
    address: str = Field("", max_length=300, examples=["123 Lake Rd"])
    website: str = Field("", max_length=200, examples=["sunnyvilla.example"])
    email: str = Field("", max_length=200, examples=["info@example.com"])
    phone: str = ""
    price: str = ""
    broker_name: str = ""
    property_type: str = ""
    offer_type: str = ""
    short_description: str = ""
    date_available: str = ""
    broker_firm: str = ""
    broker_firm_address: str = ""
    description_large: str = Field("", max_length=2000)
    description_extra_large: str = Field("", max_length=8000)

    def to_domain(self) -> ProjectData:
        return ProjectData(**self.model_dump())


class GenerateDocumentRequest(BaseModel):
    """Request body for POST /api/v1/documents."""

    template_id: str = Field(..., min_length=1, max_length=100, examples=["basic"])
    project: ProjectDataRequest
    paginate: bool | None = Field(
        None, description="Start new pages instead of running off the bottom. Defaults to server setting.",
    )


class TemplateResponse(BaseModel):
    id: str
    name: str
    description: str
    placeholders: list[str]


class ErrorResponse(BaseModel):
    detail: str
