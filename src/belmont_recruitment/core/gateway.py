"""Protocols for the chat platform collaborators the workflow depends on."""

from typing import Optional, Protocol, runtime_checkable

from belmont_recruitment.core.models import InteractionKind, MemberRecord, ReasonPrompt, ReviewCard


@runtime_checkable
class ChatGateway(Protocol):
    """Outbound operations against the chat platform."""

    async def post_card(self, card: ReviewCard) -> None:
        """Post a review card to the review channel. Raises DeliveryError."""
        ...

    async def fetch_member(self, user_id: int) -> Optional[MemberRecord]:
        """Resolve a user in the governing guild. May raise on lookup failure."""
        ...

    async def send_direct_message(self, user_id: int, content: str) -> None:
        """Deliver a direct message. Raises NotificationError."""
        ...


@runtime_checkable
class InteractionContext(Protocol):
    """A single inbound interaction and the ways it can be answered."""

    kind: InteractionKind
    custom_id: Optional[str]
    user_id: int
    card_message_id: Optional[int]

    @property
    def is_answerable(self) -> bool:
        """Whether the interaction accepts a message reply at all."""
        ...

    def field_value(self, field_id: str) -> Optional[str]:
        """Value of a submitted prompt input, if any."""
        ...

    async def defer(self) -> bool:
        """Acknowledge with a deferred ephemeral reply."""
        ...

    async def send_ephemeral(self, content: str) -> bool:
        """Reply, or edit the deferred reply, with an ephemeral message."""
        ...

    async def show_reason_prompt(self, prompt: ReasonPrompt) -> bool:
        """Acknowledge by opening the rejection reason form."""
        ...

    async def disable_card_controls(self) -> None:
        """Disable every control on the originating card. Raises DeliveryError."""
        ...
