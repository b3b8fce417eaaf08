"""Vehicle and insurance plan schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

DriveLiteral = Literal["FWD", "RWD", "AWD", "4WD"]
InsuranceTypeLiteral = Literal["Comprehensive", "Third-Party", "Zero-Dep", "Pay-As-You-Drive"]


class InsurancePlanSchema(BaseModel):
    id: str | None = None
    provider: str = Field(min_length=1, max_length=255)
    name: str = Field(min_length=1, max_length=255)
    premium: int = Field(ge=0)
    type: InsuranceTypeLiteral = "Comprehensive"
    addons: list[str] = Field(default_factory=list)
    coverage_details: str = Field(default="", max_length=2000)


class VehicleCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    trim: str = Field(default="", max_length=255)
    drive: DriveLiteral = "FWD"
    seats: int = Field(default=5, ge=1, le=20)
    price: int = Field(ge=0)
    use_cases: list[str] = Field(default_factory=list)
    f_and_i: list[str] = Field(default_factory=list)
    image_url: str | None = None
    visual_desc: str | None = Field(default=None, max_length=2000)
    contract_template: str | None = Field(default=None, max_length=50000)


class VehicleUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    trim: str | None = Field(default=None, max_length=255)
    drive: DriveLiteral | None = None
    seats: int | None = Field(default=None, ge=1, le=20)
    price: int | None = Field(default=None, ge=0)
    use_cases: list[str] | None = None
    f_and_i: list[str] | None = None
    image_url: str | None = None
    visual_desc: str | None = Field(default=None, max_length=2000)
    contract_template: str | None = Field(default=None, max_length=50000)


class VehicleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    seller_id: str | None = None
    name: str
    trim: str
    drive: str
    seats: int
    price_range: tuple[int, int]
    use_cases: list[str]
    f_and_i: list[str]
    image_url: str | None = None
    visual_desc: str | None = None
    contract_template: str | None = None
    insurance_options: list[InsurancePlanSchema]
    updated_at: datetime | None = None


class TemplateGenerateRequest(BaseModel):
    region: str = Field(default="General", max_length=80)


class TemplateTextResponse(BaseModel):
    template: str


class SellerPlaceholdersResponse(BaseModel):
    seller_fields: list[str]
    prefill: dict[str, str]


class TemplateRequest(BaseModel):
    template: str = Field(min_length=1, max_length=50000)


class TemplateFillRequest(TemplateRequest):
    seller_inputs: dict[str, str]


class TemplateRefineRequest(BaseModel):
    text: str = Field(min_length=1, max_length=50000)
    instruction: str = Field(min_length=1, max_length=2000)


class SeedResponse(BaseModel):
    created: int
