"""Error taxonomy for the recruitment workflow.

Every error carries the message shown to whoever triggered it: the website
(as the ``error`` field of the JSON response) or the staff member (as an
ephemeral reply).
"""

from typing import Optional


class RecruitmentError(Exception):
    """Base class for errors that are surfaced to a caller."""

    status_code: int = 500
    default_message: str = "Erro interno."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(RecruitmentError):
    """Malformed or missing submission fields."""

    status_code = 400
    default_message = "Campos obrigatórios faltando."


class PayloadTooLargeError(RecruitmentError):
    """Request body larger than the configured cap."""

    status_code = 413
    default_message = "Payload too large"


class AuthError(RecruitmentError):
    """Shared secret missing or mismatched."""

    status_code = 401
    default_message = "Unauthorized"


class PermissionDeniedError(RecruitmentError):
    """Decision attempted by someone without the staff role."""

    status_code = 403
    default_message = "❌ Você não tem permissão."


class DeliveryError(RecruitmentError):
    """Review channel unreachable, or posting/editing the card failed."""

    status_code = 500
    default_message = "Canal de inscrições inválido."


class NotificationError(RecruitmentError):
    """Applicant could not be reached. Never surfaced to anyone."""

    default_message = "Não foi possível notificar o candidato."


class MalformedControlError(RecruitmentError):
    """Control or prompt identifier that does not parse."""

    status_code = 400
    default_message = "❌ Ação inválida."


class UnknownActionError(RecruitmentError):
    """Interaction shape the router has no transition for."""

    status_code = 400
    default_message = "❌ Ação desconhecida."


class AlreadyDecidedError(RecruitmentError):
    """Second decision on a card already claimed in this process."""

    status_code = 409
    default_message = "⚠️ Esta inscrição já foi avaliada."
