"""discord.py implementation of the chat gateway."""

from typing import Optional

import discord

from belmont_recruitment.bot.render import build_embed, build_view
from belmont_recruitment.core.errors import DeliveryError, NotificationError
from belmont_recruitment.core.models import MemberRecord, ReviewCard
from belmont_recruitment.utils.logging import get_logger

logger = get_logger(__name__)


class DiscordGateway:
    """Posts review cards, resolves guild members and sends direct messages."""

    def __init__(self, client: discord.Client, guild_id: int, application_channel_id: int):
        self.client = client
        self.guild_id = guild_id
        self.application_channel_id = application_channel_id

    async def _review_channel(self) -> Optional[discord.abc.Messageable]:
        channel = self.client.get_channel(self.application_channel_id)
        if channel is None:
            try:
                channel = await self.client.fetch_channel(self.application_channel_id)
            except discord.HTTPException as e:
                logger.error("Review channel lookup failed", channel_id=self.application_channel_id, error=str(e))
                return None
        if not isinstance(channel, discord.abc.Messageable):
            return None
        return channel

    async def post_card(self, card: ReviewCard) -> None:
        channel = await self._review_channel()
        if channel is None:
            raise DeliveryError("Canal de inscrições inválido.")

        view = build_view(card)
        try:
            await channel.send(embed=build_embed(card), view=view)
        except discord.HTTPException as e:
            logger.error("Posting review card failed", applicant_id=card.applicant_id, error=str(e))
            raise DeliveryError("Não foi possível publicar a inscrição.") from e
        finally:
            # Clicks are routed through on_interaction, not through the view
            view.stop()

    async def fetch_member(self, user_id: int) -> Optional[MemberRecord]:
        guild = self.client.get_guild(self.guild_id)
        if guild is None:
            guild = await self.client.fetch_guild(self.guild_id)

        member = guild.get_member(user_id)
        if member is None:
            try:
                member = await guild.fetch_member(user_id)
            except discord.NotFound:
                return None

        return MemberRecord(user_id=member.id, role_ids=frozenset(role.id for role in member.roles))

    async def send_direct_message(self, user_id: int, content: str) -> None:
        try:
            user = self.client.get_user(user_id) or await self.client.fetch_user(user_id)
            await user.send(content)
        except discord.HTTPException as e:
            raise NotificationError(f"Direct message to {user_id} failed: {e}") from e
