"""Discord client that feeds interactions into the review workflow."""

from typing import Optional

import discord

from belmont_recruitment.bot.gateway import DiscordGateway
from belmont_recruitment.bot.interaction import DiscordInteraction
from belmont_recruitment.config import Settings
from belmont_recruitment.core.notifications import NotificationSender
from belmont_recruitment.core.permissions import StaffGate
from belmont_recruitment.core.router import DecisionClaims, InteractionRouter
from belmont_recruitment.utils.logging import get_logger

logger = get_logger(__name__)


def default_intents() -> discord.Intents:
    intents = discord.Intents.none()
    intents.guilds = True
    intents.members = True
    intents.dm_messages = True
    return intents


class RecruitmentBot(discord.Client):
    """discord.Client owning the gateway, permission gate and router."""

    def __init__(self, settings: Settings, intents: Optional[discord.Intents] = None):
        super().__init__(intents=intents or default_intents())
        self.settings = settings

        self.gateway = DiscordGateway(
            client=self,
            guild_id=settings.guild_id,
            application_channel_id=settings.application_channel_id,
        )
        self.router = InteractionRouter(
            gate=StaffGate(self.gateway, settings.staff_role_id),
            notifier=NotificationSender(self.gateway),
            organization=settings.organization_name,
            tickets_channel_id=settings.tickets_channel_id,
            claims=DecisionClaims() if settings.single_decision_guard else None,
        )

    async def on_ready(self) -> None:
        logger.info("Bot online", user=str(self.user), guilds=len(self.guilds))

    async def on_interaction(self, interaction: discord.Interaction) -> None:
        await self.router.dispatch(DiscordInteraction(interaction))

    async def on_error(self, event_method: str, *args, **kwargs) -> None:
        logger.exception("Discord event handler failed", event=event_method)
