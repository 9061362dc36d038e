from __future__ import annotations

from gradspace.application.ports.api import ApiClient
from gradspace.infrastructure.http.schemas.company import (
    CompanyListResponse,
    CompanyResponse,
    CompanySchema,
    CompanyWriteRequest,
)


async def list_companies(api: ApiClient) -> list[CompanySchema]:
    body = await api.get("/companies/")
    return CompanyListResponse.model_validate(body).data or []


async def create_company(request: CompanyWriteRequest, api: ApiClient) -> CompanySchema:
    body = await api.post("/companies/", json=request.model_dump())
    return CompanyResponse.model_validate(body).data


async def update_company(company_id: str, request: CompanyWriteRequest, api: ApiClient) -> CompanySchema:
    body = await api.put(f"/companies/{company_id}", json=request.model_dump())
    return CompanyResponse.model_validate(body).data


async def delete_company(company_id: str, api: ApiClient) -> None:
    await api.delete(f"/companies/{company_id}")
