"""Bind a fresh page handle once a page kind has loaded."""

from loguru import logger

from staybot.models import WaitSpec
from staybot.resilience.conditions import PageReady
from staybot.services.service_context import InteractionContext
from staybot.services.session import PageHandle, SessionContext


async def bind_page(
    session: SessionContext, context: InteractionContext, name: str
) -> PageHandle:
    """
    Supersede the session's live handle with one for page kind ``name``.

    Waits for the document to finish loading within the navigation budget.
    """
    handle = session.bind(PageHandle(session, name, context.registry))
    settings = context.settings
    await context.engine.wait(
        session,
        PageReady(),
        WaitSpec(settings.navigation_timeout_seconds, settings.wait_poll_seconds),
    )
    logger.info(f"Loaded {name} page at {session.current_url}")
    return handle
