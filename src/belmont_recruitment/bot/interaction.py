"""discord.py implementation of the router's interaction protocol."""

from typing import Any, Dict, Iterator, Optional

import discord

from belmont_recruitment.bot.render import build_reason_modal, disabled_view_from_message
from belmont_recruitment.core.errors import DeliveryError
from belmont_recruitment.core.models import InteractionKind, ReasonPrompt
from belmont_recruitment.utils.logging import get_logger

logger = get_logger(__name__)

_ANSWERABLE_TYPES = {
    discord.InteractionType.application_command,
    discord.InteractionType.component,
    discord.InteractionType.modal_submit,
}


def classify_interaction(interaction: discord.Interaction) -> InteractionKind:
    data = interaction.data or {}
    if interaction.type is discord.InteractionType.component:
        if data.get("component_type") == discord.ComponentType.button.value:
            return InteractionKind.BUTTON
    elif interaction.type is discord.InteractionType.modal_submit:
        return InteractionKind.PROMPT_SUBMIT
    return InteractionKind.OTHER


def _iter_submitted_components(components) -> Iterator[Dict[str, Any]]:
    # Inputs arrive wrapped in action rows ("components") or labels ("component")
    for component in components or []:
        if "custom_id" in component and "value" in component:
            yield component
        if component.get("components"):
            yield from _iter_submitted_components(component["components"])
        if component.get("component"):
            yield from _iter_submitted_components([component["component"]])


def submitted_value(data: Optional[Dict[str, Any]], field_id: str) -> Optional[str]:
    """Value of a text input in a modal submission payload."""
    for component in _iter_submitted_components((data or {}).get("components")):
        if component.get("custom_id") == field_id:
            return component.get("value")
    return None


class DiscordInteraction:
    """Wraps a discord.Interaction for the interaction router.

    Reply and acknowledgement failures (usually an expired interaction) are
    logged and reported as False. Failing to update the card raises
    DeliveryError because the decision must not be recorded without it.
    """

    def __init__(self, interaction: discord.Interaction):
        self._interaction = interaction
        self.kind = classify_interaction(interaction)
        self.custom_id: Optional[str] = (interaction.data or {}).get("custom_id")
        self.user_id: int = interaction.user.id
        self.card_message_id: Optional[int] = interaction.message.id if interaction.message else None

    @property
    def is_answerable(self) -> bool:
        return self._interaction.type in _ANSWERABLE_TYPES

    def field_value(self, field_id: str) -> Optional[str]:
        return submitted_value(self._interaction.data, field_id)

    async def defer(self) -> bool:
        if self._interaction.response.is_done():
            return True
        try:
            await self._interaction.response.defer(ephemeral=True, thinking=True)
        except discord.HTTPException as e:
            logger.warning("Could not acknowledge interaction", error=str(e))
            return False
        return True

    async def send_ephemeral(self, content: str) -> bool:
        try:
            if self._interaction.response.is_done():
                await self._interaction.edit_original_response(content=content)
            else:
                await self._interaction.response.send_message(content, ephemeral=True)
        except discord.HTTPException as e:
            logger.warning("Could not reply to interaction", error=str(e))
            return False
        return True

    async def show_reason_prompt(self, prompt: ReasonPrompt) -> bool:
        try:
            await self._interaction.response.send_modal(build_reason_modal(prompt))
        except (discord.HTTPException, discord.InteractionResponded) as e:
            logger.warning("Could not open reason prompt", error=str(e))
            return False
        return True

    async def disable_card_controls(self) -> None:
        message = self._interaction.message
        if message is None:
            raise DeliveryError("Review card not attached to the interaction")

        view = disabled_view_from_message(message)
        try:
            await message.edit(view=view)
        except discord.HTTPException as e:
            raise DeliveryError(f"Could not update review card: {e}") from e
        finally:
            view.stop()
