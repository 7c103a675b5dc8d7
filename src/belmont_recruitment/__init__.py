"""
Belmont Recruitment: website applications reviewed by staff on Discord.

Applications submitted over HTTP are validated and posted as review cards to a
staff channel. Staff approve or reject them with the card's buttons and the
applicant is notified by direct message.
"""

__version__ = "1.0.0"

from belmont_recruitment.core.intake import ApplicationIntake, validate_submission
from belmont_recruitment.core.models import Application, ControlId, DecisionState
from belmont_recruitment.core.router import InteractionRouter

__all__ = [
    "Application",
    "ApplicationIntake",
    "ControlId",
    "DecisionState",
    "InteractionRouter",
    "validate_submission",
]
