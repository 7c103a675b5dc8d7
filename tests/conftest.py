"""Shared fixtures and fakes for the recruitment test suite."""

from typing import Dict, List, Optional, Tuple

import pytest

from belmont_recruitment.config import Settings
from belmont_recruitment.core.errors import DeliveryError
from belmont_recruitment.core.models import InteractionKind, MemberRecord, ReasonPrompt, ReviewCard
from belmont_recruitment.core.notifications import NotificationSender
from belmont_recruitment.core.permissions import StaffGate
from belmont_recruitment.core.router import InteractionRouter

APPLICANT_ID = "123456789012345678"
STAFF_USER_ID = 111
OUTSIDER_USER_ID = 222
STAFF_ROLE_ID = 999
TICKETS_CHANNEL_ID = 4242
CARD_MESSAGE_ID = 777


class FakeGateway:
    """In-memory chat gateway recording every outbound call."""

    def __init__(self, members: Optional[Dict[int, MemberRecord]] = None):
        self.members = members or {}
        self.posted: List[ReviewCard] = []
        self.direct_messages: List[Tuple[int, str]] = []
        self.post_error: Optional[Exception] = None
        self.member_error: Optional[Exception] = None
        self.dm_error: Optional[Exception] = None

    async def post_card(self, card: ReviewCard) -> None:
        if self.post_error:
            raise self.post_error
        self.posted.append(card)

    async def fetch_member(self, user_id: int) -> Optional[MemberRecord]:
        if self.member_error:
            raise self.member_error
        return self.members.get(user_id)

    async def send_direct_message(self, user_id: int, content: str) -> None:
        self.direct_messages.append((user_id, content))
        if self.dm_error:
            raise self.dm_error


class FakeInteraction:
    """Interaction double that records acknowledgements, replies and card edits."""

    def __init__(
        self,
        kind: InteractionKind,
        custom_id: Optional[str],
        user_id: int = STAFF_USER_ID,
        fields: Optional[Dict[str, str]] = None,
        card_message_id: Optional[int] = CARD_MESSAGE_ID,
        answerable: bool = True,
    ):
        self.kind = kind
        self.custom_id = custom_id
        self.user_id = user_id
        self.card_message_id = card_message_id
        self.fields = fields or {}
        self.answerable = answerable

        self.acknowledged = False
        self.deferred = False
        self.replies: List[str] = []
        self.prompts: List[ReasonPrompt] = []
        self.controls_disabled = False
        self.disable_calls = 0
        self.disable_error: Optional[Exception] = None
        self.reply_error: Optional[Exception] = None
        self.prompt_expired = False

    @property
    def is_answerable(self) -> bool:
        return self.answerable

    def field_value(self, field_id: str) -> Optional[str]:
        return self.fields.get(field_id)

    async def defer(self) -> bool:
        self.acknowledged = True
        self.deferred = True
        return True

    async def send_ephemeral(self, content: str) -> bool:
        if self.reply_error:
            raise self.reply_error
        self.acknowledged = True
        self.replies.append(content)
        return True

    async def show_reason_prompt(self, prompt: ReasonPrompt) -> bool:
        if self.prompt_expired:
            return False
        self.acknowledged = True
        self.prompts.append(prompt)
        return True

    async def disable_card_controls(self) -> None:
        self.disable_calls += 1
        if self.disable_error:
            raise self.disable_error
        self.controls_disabled = True


def make_settings(**overrides) -> Settings:
    values = dict(
        discord_token="test-token",
        guild_id=1,
        application_channel_id=2,
        staff_role_id=STAFF_ROLE_ID,
        tickets_channel_id=TICKETS_CHANNEL_ID,
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def gateway():
    return FakeGateway(
        members={
            STAFF_USER_ID: MemberRecord(STAFF_USER_ID, frozenset({STAFF_ROLE_ID, 5})),
            OUTSIDER_USER_ID: MemberRecord(OUTSIDER_USER_ID, frozenset({5})),
        }
    )


@pytest.fixture
def router(gateway):
    return InteractionRouter(
        gate=StaffGate(gateway, STAFF_ROLE_ID),
        notifier=NotificationSender(gateway),
        organization="Família Belmont",
        tickets_channel_id=TICKETS_CHANNEL_ID,
    )


@pytest.fixture
def valid_submission():
    return {
        "discord_id": APPLICANT_ID,
        "rg": "4521",
        "nome": "Tommy Belmont",
        "tempo": "2 anos",
        "amor": "Sim, sempre valorizo a vida do personagem.",
        "safes": "Hospital, Praça, Delegacia",
        "joalheria": "Min 3 / Máx 6",
        "skill": "P1",
        "pretende": "Crescer na família.\nAjudar nas ações.\nRespeitar a hierarquia.\nFazer RP sério.\nSer leal.",
    }


@pytest.fixture
def card_failure():
    return DeliveryError("Could not update review card")
