from __future__ import annotations

import logging

from gradspace.application.repositories.preferences import PreferenceReader, PreferenceWriter
from gradspace.domain.value_objects.enums import AdminSection

logger = logging.getLogger(__name__)

SELECTED_SECTION_KEY = "selectedFeature"
DEFAULT_SECTION = AdminSection.USERS


async def get_admin_section(reader: PreferenceReader) -> AdminSection:
    """Last admin dashboard section the user opened."""
    raw = await reader.get(SELECTED_SECTION_KEY)
    if raw is None:
        return DEFAULT_SECTION
    try:
        return AdminSection(raw)
    except ValueError:
        logger.warning("Ignoring unknown stored admin section %r", raw)
        return DEFAULT_SECTION


async def set_admin_section(section: AdminSection, writer: PreferenceWriter) -> None:
    await writer.set(SELECTED_SECTION_KEY, section.value)
