from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class UserDistributionSchema(BaseModel):
    role: str = Field(alias="Role")
    count: int = Field(alias="Count")

    model_config = ConfigDict(populate_by_name=True)


class DepartmentDataSchema(BaseModel):
    department: str = Field(alias="Department")
    registered: int = Field(default=0, alias="Registered")
    verified: int = Field(default=0, alias="Verified")
    active: int = Field(default=0, alias="Active")

    model_config = ConfigDict(populate_by_name=True)


class YearlyMetricsSchema(BaseModel):
    batch: int = Field(alias="Batch")
    registered: int = Field(default=0, alias="Registered")
    verified: int = Field(default=0, alias="Verified")
    active: int = Field(default=0, alias="Active")

    model_config = ConfigDict(populate_by_name=True)


class SeriesResponse(BaseModel, Generic[T]):
    data: list[T] | None = None  # type: ignore[type-var]
