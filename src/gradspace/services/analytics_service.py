from __future__ import annotations

from gradspace.application.ports.api import ApiClient
from gradspace.infrastructure.http.schemas.analytics import (
    DepartmentDataSchema,
    SeriesResponse,
    UserDistributionSchema,
    YearlyMetricsSchema,
)


async def fetch_user_distribution(api: ApiClient) -> list[UserDistributionSchema]:
    body = await api.get("/admin/analytics/user-distribution")
    response = SeriesResponse[UserDistributionSchema].model_validate(body)
    return response.data or []


async def fetch_department_data(
    start_year: int,
    end_year: int,
    api: ApiClient,
) -> list[DepartmentDataSchema]:
    body = await api.get(
        "/admin/analytics/department-data",
        params={"startYear": start_year, "endYear": end_year},
    )
    response = SeriesResponse[DepartmentDataSchema].model_validate(body)
    return response.data or []


async def fetch_yearly_metrics(
    start_year: int,
    end_year: int,
    api: ApiClient,
) -> list[YearlyMetricsSchema]:
    body = await api.get(
        "/admin/analytics/yearly-metrics",
        params={"startYear": start_year, "endYear": end_year},
    )
    response = SeriesResponse[YearlyMetricsSchema].model_validate(body)
    return response.data or []
