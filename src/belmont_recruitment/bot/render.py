"""Conversion of neutral cards and prompts into discord.py objects."""

import discord

from belmont_recruitment.core.models import ControlStyle, ReasonPrompt, ReviewCard

# Seconds an unanswered reason prompt stays registered in the view store
REASON_PROMPT_TIMEOUT = 900

_BUTTON_STYLES = {
    ControlStyle.SUCCESS: discord.ButtonStyle.success,
    ControlStyle.DANGER: discord.ButtonStyle.danger,
}


def build_embed(card: ReviewCard) -> discord.Embed:
    embed = discord.Embed(
        title=card.title,
        description=card.description,
        timestamp=card.timestamp,
    )
    for field in card.fields:
        embed.add_field(name=field.name, value=field.value, inline=field.inline)
    embed.set_footer(text=card.footer)
    return embed


def build_view(card: ReviewCard) -> discord.ui.View:
    """Action row with the card's controls. Must be called inside the event loop."""
    view = discord.ui.View(timeout=None)
    for control in card.controls:
        view.add_item(
            discord.ui.Button(
                label=control.label,
                style=_BUTTON_STYLES[control.style],
                custom_id=control.custom_id,
                disabled=control.disabled,
            )
        )
    return view


def build_reason_modal(prompt: ReasonPrompt) -> discord.ui.Modal:
    modal = discord.ui.Modal(title=prompt.title, custom_id=prompt.custom_id, timeout=REASON_PROMPT_TIMEOUT)
    modal.add_item(
        discord.ui.TextInput(
            label=prompt.label,
            custom_id=prompt.field_id,
            style=discord.TextStyle.paragraph,
            required=prompt.required,
            max_length=prompt.max_length,
            placeholder=prompt.placeholder,
        )
    )
    return modal


def disabled_view_from_message(message: discord.Message) -> discord.ui.View:
    """Copy of the message's components with every button disabled.

    Disabling an already disabled button leaves it unchanged.
    """
    view = discord.ui.View.from_message(message, timeout=None)
    for item in view.children:
        if isinstance(item, discord.ui.Button):
            item.disabled = True
    return view
