"""Application intake: shared secret check, field validation and card posting."""

import hmac
from typing import Any, Dict, Mapping, Optional

from belmont_recruitment.core.cards import compose_review_card
from belmont_recruitment.core.errors import AuthError, ValidationError
from belmont_recruitment.core.gateway import ChatGateway
from belmont_recruitment.core.models import Application, Skill, is_applicant_id
from belmont_recruitment.utils.logging import get_logger

logger = get_logger(__name__)

# wire key -> maximum length after trimming, in card order
FIELD_LIMITS: Dict[str, int] = {
    "discord_id": 25,
    "rg": 20,
    "nome": 80,
    "tempo": 80,
    "amor": 900,
    "safes": 900,
    "joalheria": 120,
    "skill": 30,
    "pretende": 1400,
}

ACCEPTED_SKILLS = frozenset(skill.value for skill in Skill)


def safe_trim(value: Any, max_length: int) -> str:
    """Stringify, trim and cap a raw value. None becomes the empty string."""
    if value is None:
        return ""
    return str(value).strip()[:max_length]


def check_shared_secret(provided: Optional[str], configured: Optional[str]) -> None:
    """Raise AuthError unless provided equals configured byte-for-byte.

    A missing or blank configured secret disables the check.
    """
    if not configured:
        return
    got = (provided or "").encode("utf-8")
    if not hmac.compare_digest(got, configured.encode("utf-8")):
        raise AuthError()


def validate_submission(raw: Optional[Mapping[str, Any]]) -> Application:
    """Normalize a raw field mapping into an Application.

    Raises:
        ValidationError: invalid applicant id, a blank field, or an
            unaccepted skill, checked in that order.
    """
    raw = raw or {}
    data = {key: safe_trim(raw.get(key), limit) for key, limit in FIELD_LIMITS.items()}

    if not is_applicant_id(data["discord_id"]):
        raise ValidationError("ID do Discord inválido.")
    if not all(data.values()):
        raise ValidationError("Campos obrigatórios faltando.")
    if data["skill"] not in ACCEPTED_SKILLS:
        raise ValidationError("Skill inválida.")

    return Application(**data)


class ApplicationIntake:
    """Turns website submissions into posted review cards."""

    def __init__(self, gateway: ChatGateway, shared_secret: Optional[str], organization: str):
        self.gateway = gateway
        self.shared_secret = shared_secret
        self.organization = organization

    async def submit(self, raw: Optional[Mapping[str, Any]], provided_secret: Optional[str] = None) -> Application:
        """Validate a submission and post its review card.

        Raises AuthError, ValidationError or DeliveryError.
        """
        check_shared_secret(provided_secret, self.shared_secret)
        application = validate_submission(raw)

        card = compose_review_card(application, self.organization)
        await self.gateway.post_card(card)

        logger.info(
            "Application posted for review",
            applicant_id=application.applicant_id,
            skill=application.skill.value,
        )
        return application
