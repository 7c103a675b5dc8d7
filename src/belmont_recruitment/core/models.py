"""Core data models for the recruitment review workflow."""

import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from belmont_recruitment.core.errors import MalformedControlError

APPLICANT_ID_PATTERN = re.compile(r"^\d{17,20}$", re.ASCII)


def is_applicant_id(value) -> bool:
    """True when value (after trimming) is a 17-20 digit Discord user id."""
    if value is None:
        return False
    return bool(APPLICANT_ID_PATTERN.fullmatch(str(value).strip()))


class Skill(str, Enum):
    """The two accepted answers to "Você é bom em"."""
    P1 = "P1"
    TROCACAO = "Trocação"


class Application(BaseModel):
    """A validated recruitment application. Never persisted."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    applicant_id: str = Field(..., alias="discord_id", description="Applicant Discord user id")
    in_game_id: str = Field(..., alias="rg", description="In-game registration number")
    display_name: str = Field(..., alias="nome", description="In-game name")
    tenure: str = Field(..., alias="tempo", description="Time spent in Nova Capital")
    love_for_life: str = Field(..., alias="amor", description="Answer about valuing one's life")
    safe_zones: str = Field(..., alias="safes", description="Three safe areas")
    robbery_crew: str = Field(..., alias="joalheria", description="Min/max crew for the jewelry heist")
    skill: Skill = Field(..., description="Declared strength")
    intentions: str = Field(..., alias="pretende", description="What the applicant plans to do")


class DecisionState(str, Enum):
    """Review card states. APPROVED and REJECTED are terminal."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ControlAction(str, Enum):
    """Tags carried in the first segment of a control identifier."""
    APPROVE = "approve"
    REJECT = "reject"
    REJECT_REASON = "rejectModal"


class InteractionKind(str, Enum):
    """Interaction shapes the router distinguishes."""
    BUTTON = "button"
    PROMPT_SUBMIT = "prompt_submit"
    OTHER = "other"


@dataclass(frozen=True)
class ControlId:
    """Correlation between a UI control and an applicant.

    Serialized as ``<tag>:<applicant_id>``. This string is the only place the
    workflow keeps state between posting a card and deciding on it, so
    parsing rejects anything that does not round-trip exactly.
    """
    action: ControlAction
    applicant_id: str

    SEPARATOR = ":"

    def __post_init__(self):
        if not APPLICANT_ID_PATTERN.fullmatch(self.applicant_id):
            raise MalformedControlError()

    def serialize(self) -> str:
        return f"{self.action.value}{self.SEPARATOR}{self.applicant_id}"

    @classmethod
    def parse(cls, raw: Optional[str]) -> "ControlId":
        if not raw:
            raise MalformedControlError()
        segments = raw.split(cls.SEPARATOR)
        if len(segments) != 2:
            raise MalformedControlError()
        tag, applicant_id = segments
        try:
            action = ControlAction(tag)
        except ValueError:
            raise MalformedControlError() from None
        return cls(action=action, applicant_id=applicant_id)

    def __str__(self) -> str:
        return self.serialize()


@dataclass(frozen=True)
class MemberRecord:
    """A guild member as seen by the permission gate."""
    user_id: int
    role_ids: frozenset = field(default_factory=frozenset)


@dataclass(frozen=True)
class DeliveryResult:
    """Outcome of a best-effort send."""
    delivered: bool
    error: Optional[str] = None

    @classmethod
    def ok(cls) -> "DeliveryResult":
        return cls(delivered=True)

    @classmethod
    def failed(cls, error: str) -> "DeliveryResult":
        return cls(delivered=False, error=error)


@dataclass(frozen=True)
class TransitionOutcome:
    """What a terminal transition did. Logged, never stored."""
    state: DecisionState
    applicant_id: str
    notified: bool


class ControlStyle(str, Enum):
    SUCCESS = "success"
    DANGER = "danger"


@dataclass(frozen=True)
class CardField:
    name: str
    value: str
    inline: bool = False


@dataclass(frozen=True)
class CardControl:
    control_id: ControlId
    label: str
    style: ControlStyle
    disabled: bool = False

    @property
    def custom_id(self) -> str:
        return self.control_id.serialize()


@dataclass(frozen=True)
class ReviewCard:
    """Platform-neutral review card: a display document plus two controls."""
    title: str
    description: str
    fields: Tuple[CardField, ...]
    footer: str
    controls: Tuple[CardControl, ...]
    timestamp: datetime

    @property
    def applicant_id(self) -> str:
        return self.controls[0].control_id.applicant_id


@dataclass(frozen=True)
class ReasonPrompt:
    """Form asking the reviewer why an application is being rejected."""
    control_id: ControlId
    title: str
    field_id: str
    label: str
    placeholder: str
    max_length: int
    required: bool = True

    @property
    def custom_id(self) -> str:
        return self.control_id.serialize()
