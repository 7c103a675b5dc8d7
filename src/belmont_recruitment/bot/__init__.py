"""Discord binding for the review workflow."""

from .client import RecruitmentBot
from .gateway import DiscordGateway
from .interaction import DiscordInteraction

__all__ = ["RecruitmentBot", "DiscordGateway", "DiscordInteraction"]
