"""Process runtime: the HTTP server and the Discord client on one event loop."""

import asyncio
from typing import Any, Dict

import uvicorn

from belmont_recruitment.api.main import create_app
from belmont_recruitment.bot.client import RecruitmentBot
from belmont_recruitment.config import Settings
from belmont_recruitment.utils.logging import get_logger

logger = get_logger(__name__)


def log_unhandled_fault(loop: asyncio.AbstractEventLoop, context: Dict[str, Any]) -> None:
    """Event loop exception handler: log stray task failures instead of dying."""
    exception = context.get("exception")
    logger.error(
        "Unhandled fault",
        message=context.get("message"),
        error=str(exception) if exception else None,
        error_type=type(exception).__name__ if exception else None,
    )


async def run_service(settings: Settings) -> None:
    """Run until either the API server or the bot stops."""
    asyncio.get_running_loop().set_exception_handler(log_unhandled_fault)

    bot = RecruitmentBot(settings)
    app = create_app(settings, bot.gateway)
    server = uvicorn.Server(
        uvicorn.Config(app, host=settings.host, port=settings.port, log_config=None)
    )

    async with bot:
        bot_task = asyncio.create_task(bot.start(settings.discord_token.get_secret_value()), name="discord")
        api_task = asyncio.create_task(server.serve(), name="api")
        logger.info("Service starting", host=settings.host, port=settings.port)

        done, pending = await asyncio.wait({bot_task, api_task}, return_when=asyncio.FIRST_COMPLETED)

        server.should_exit = True
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)

        for task in done:
            # Surface startup failures such as a rejected token or a busy port
            task.result()

    logger.info("Service stopped")
