from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CompanySchema(BaseModel):
    id: str = Field(alias="ID")
    name: str = Field(alias="Name")
    logo_url: str = Field(default="", alias="LogoURL")
    created_at: datetime | None = Field(default=None, alias="CreatedAt")
    updated_at: datetime | None = Field(default=None, alias="UpdatedAt")

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)


class CompanyListResponse(BaseModel):
    data: list[CompanySchema] | None = None


class CompanyResponse(BaseModel):
    data: CompanySchema


class CompanyWriteRequest(BaseModel):
    name: str
    logo_url: str = ""
