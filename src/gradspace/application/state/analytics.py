from __future__ import annotations

import logging
from dataclasses import dataclass

from gradspace.application.exceptions import AppError, ValidationError
from gradspace.application.ports.api import ApiClient
from gradspace.application.state.store import Store
from gradspace.infrastructure.http.schemas.analytics import (
    DepartmentDataSchema,
    UserDistributionSchema,
    YearlyMetricsSchema,
)
from gradspace.services import analytics_service

logger = logging.getLogger(__name__)

DEFAULT_START_YEAR = 2020
DEFAULT_END_YEAR = 2025


@dataclass(frozen=True, slots=True)
class AnalyticsState:
    user_distribution: tuple[UserDistributionSchema, ...] = ()
    department_data: tuple[DepartmentDataSchema, ...] = ()
    yearly_metrics: tuple[YearlyMetricsSchema, ...] = ()
    start_year: int = DEFAULT_START_YEAR
    end_year: int = DEFAULT_END_YEAR
    is_loading_distribution: bool = False
    is_loading_departments: bool = False
    is_loading_yearly: bool = False
    error: str | None = None


class AnalyticsStore(Store[AnalyticsState]):
    """Dashboard series. Each series loads independently; one error slot."""

    def __init__(self) -> None:
        super().__init__(AnalyticsState())

    def set_year_range(self, start_year: int, end_year: int) -> None:
        if start_year > end_year:
            raise ValidationError("Start year must not be after end year")
        self.patch(start_year=start_year, end_year=end_year)

    async def fetch_user_distribution(self, api: ApiClient) -> None:
        self.patch(is_loading_distribution=True, error=None)
        try:
            data = await analytics_service.fetch_user_distribution(api)
        except AppError as exc:
            logger.warning("Fetching user distribution failed: %s", exc.detail)
            self.patch(is_loading_distribution=False, error="Failed to fetch user distribution")
            return
        self.patch(user_distribution=tuple(data), is_loading_distribution=False)

    async def fetch_department_data(self, api: ApiClient) -> None:
        self.patch(is_loading_departments=True, error=None)
        try:
            data = await analytics_service.fetch_department_data(
                self.state.start_year, self.state.end_year, api,
            )
        except AppError as exc:
            logger.warning("Fetching department data failed: %s", exc.detail)
            self.patch(is_loading_departments=False, error="Failed to fetch department data")
            return
        self.patch(department_data=tuple(data), is_loading_departments=False)

    async def fetch_yearly_metrics(self, api: ApiClient) -> None:
        self.patch(is_loading_yearly=True, error=None)
        try:
            data = await analytics_service.fetch_yearly_metrics(
                self.state.start_year, self.state.end_year, api,
            )
        except AppError as exc:
            logger.warning("Fetching yearly metrics failed: %s", exc.detail)
            self.patch(is_loading_yearly=False, error="Failed to fetch yearly metrics")
            return
        self.patch(yearly_metrics=tuple(data), is_loading_yearly=False)

    async def refresh(self, api: ApiClient) -> None:
        await self.fetch_user_distribution(api)
        await self.fetch_department_data(api)
        await self.fetch_yearly_metrics(api)
