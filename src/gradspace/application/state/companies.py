from __future__ import annotations

import logging
from dataclasses import dataclass

from gradspace.application.exceptions import AppError
from gradspace.application.ports.api import ApiClient
from gradspace.application.state.store import Store
from gradspace.infrastructure.http.schemas.company import CompanySchema, CompanyWriteRequest
from gradspace.services import company_service

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CompaniesState:
    companies: tuple[CompanySchema, ...] = ()
    is_loading: bool = False
    error: str | None = None


class CompaniesStore(Store[CompaniesState]):
    def __init__(self) -> None:
        super().__init__(CompaniesState())

    async def fetch_companies(self, api: ApiClient) -> None:
        self.patch(is_loading=True, error=None)
        try:
            companies = await company_service.list_companies(api)
        except AppError as exc:
            logger.warning("Fetching companies failed: %s", exc.detail)
            self.patch(is_loading=False, error="Failed to fetch companies")
            return
        self.patch(companies=tuple(companies), is_loading=False)

    async def create(self, name: str, logo_url: str, api: ApiClient) -> CompanySchema:
        company = await company_service.create_company(
            CompanyWriteRequest(name=name, logo_url=logo_url), api,
        )
        self.patch(companies=(*self.state.companies, company))
        logger.info("Created company %s", company.id)
        return company

    async def update(self, company_id: str, name: str, logo_url: str, api: ApiClient) -> CompanySchema:
        company = await company_service.update_company(
            company_id, CompanyWriteRequest(name=name, logo_url=logo_url), api,
        )
        self.patch(
            companies=tuple(company if c.id == company_id else c for c in self.state.companies),
        )
        return company

    async def delete(self, company_id: str, api: ApiClient) -> None:
        await company_service.delete_company(company_id, api)
        self.patch(companies=tuple(c for c in self.state.companies if c.id != company_id))
        logger.info("Deleted company %s", company_id)
