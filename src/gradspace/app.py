from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from gradspace.application.chat_session import ChatSession
from gradspace.application.dto.principal import Principal
from gradspace.application.state.admin_users import ManagedUsersStore
from gradspace.application.state.analytics import AnalyticsStore
from gradspace.application.state.auth import AuthStore
from gradspace.application.state.companies import CompaniesStore
from gradspace.application.state.registration_requests import RegistrationRequestsStore
from gradspace.application.state.reports import ReportsStore
from gradspace.application.state.search import UserSearchStore
from gradspace.config import Settings
from gradspace.domain.value_objects.enums import AdminSection, ReportKind
from gradspace.infrastructure.auth.token_decoder import TokenDecoder
from gradspace.infrastructure.db.repositories.preference import PreferenceRepo
from gradspace.infrastructure.db.session import create_engine, create_session_factory, init_schema
from gradspace.infrastructure.http.client import HttpApiClient
from gradspace.infrastructure.ws.channel import WebSocketChannel
from gradspace.services import preferences_service

logger = logging.getLogger(__name__)


@dataclass
class ClientApp:
    """Everything one signed-in client needs, wired from settings."""

    settings: Settings
    principal: Principal
    api: HttpApiClient
    auth_api: HttpApiClient
    channel: WebSocketChannel
    engine: AsyncEngine
    session_factory: async_sessionmaker[AsyncSession]
    chat: ChatSession
    auth: AuthStore
    search: UserSearchStore = field(default_factory=UserSearchStore)
    users: ManagedUsersStore = field(default_factory=ManagedUsersStore)
    registration_requests: RegistrationRequestsStore = field(default_factory=RegistrationRequestsStore)
    analytics: AnalyticsStore = field(default_factory=AnalyticsStore)
    companies: CompaniesStore = field(default_factory=CompaniesStore)
    reports: dict[ReportKind, ReportsStore] = field(
        default_factory=lambda: {kind: ReportsStore(kind) for kind in ReportKind},
    )

    async def get_admin_section(self) -> AdminSection:
        async with self.session_factory() as session:
            return await preferences_service.get_admin_section(PreferenceRepo(session))

    async def set_admin_section(self, section: AdminSection) -> None:
        async with self.session_factory() as session:
            await preferences_service.set_admin_section(section, PreferenceRepo(session))


def create_app(settings: Settings, *, principal: Principal | None = None) -> ClientApp:
    """Build the client. The local user comes from the access token unless given."""
    if principal is None:
        decoder = TokenDecoder(settings.JWT_SECRET, settings.JWT_ALGORITHM)
        principal = decoder.decode(settings.ACCESS_TOKEN)

    api = HttpApiClient(
        settings.API_BASE_URL,
        token=settings.ACCESS_TOKEN,
        timeout=settings.HTTP_TIMEOUT,
    )
    auth_api = HttpApiClient(
        settings.AUTH_BASE_URL,
        token=settings.ACCESS_TOKEN,
        timeout=settings.HTTP_TIMEOUT,
    )
    channel = WebSocketChannel(
        settings.WS_URL,
        principal.user_id,
        heartbeat=settings.WS_HEARTBEAT_SECONDS,
        base_delay=settings.WS_RECONNECT_BASE_DELAY,
        max_delay=settings.WS_RECONNECT_MAX_DELAY,
        max_attempts=settings.WS_RECONNECT_MAX_ATTEMPTS,
    )
    engine = create_engine(settings.state_database_url)
    return ClientApp(
        settings=settings,
        principal=principal,
        api=api,
        auth_api=auth_api,
        channel=channel,
        engine=engine,
        session_factory=create_session_factory(engine),
        chat=ChatSession(principal, api, channel),
        auth=AuthStore(auth_api),
    )


@asynccontextmanager
async def lifespan(app: ClientApp) -> AsyncIterator[ClientApp]:
    """Startup / shutdown lifecycle."""
    remove_listener = app.channel.add_listener(app.chat.handle_event)
    try:
        await init_schema(app.engine)
        await app.channel.start()
        logger.info("Client started for user=%s", app.principal.user_id)
        yield app
    finally:
        remove_listener()
        await app.chat.drain()
        await app.channel.stop()
        await app.api.aclose()
        await app.auth_api.aclose()
        await app.engine.dispose()
        logger.info("Client stopped")
