"""Interaction router: the approve/reject state machine.

A review card starts PENDING with both controls enabled. The two terminal
transitions are:

    (button, approve)              PENDING -> APPROVED
    (button, reject)               opens the reason prompt, no state change
    (prompt_submit, rejectModal)   PENDING -> REJECTED

Each terminal transition acknowledges the interaction, disables both
controls on the card, sends one best-effort direct message to the applicant
and confirms to the reviewer. The card itself is the only record of the
decision.
"""

from typing import Awaitable, Callable, Dict, Hashable, Optional, Set, Tuple

import structlog

from belmont_recruitment.core.cards import REASON_FIELD_ID, REASON_MAX_LENGTH, compose_reason_prompt
from belmont_recruitment.core.errors import (
    AlreadyDecidedError,
    MalformedControlError,
    PermissionDeniedError,
    UnknownActionError,
    ValidationError,
)
from belmont_recruitment.core.gateway import InteractionContext
from belmont_recruitment.core.intake import safe_trim
from belmont_recruitment.core.messages import (
    APPROVED_REPLY,
    EMPTY_REASON_REPLY,
    GENERIC_FAILURE_REPLY,
    INVALID_PROMPT_REPLY,
    REJECTED_REPLY,
    approval_notice,
    rejection_notice,
)
from belmont_recruitment.core.models import (
    ControlAction,
    ControlId,
    DecisionState,
    InteractionKind,
    TransitionOutcome,
)
from belmont_recruitment.core.notifications import NotificationSender
from belmont_recruitment.core.permissions import StaffGate
from belmont_recruitment.utils.logging import get_logger, log_interaction_context

logger = get_logger(__name__)

Handler = Callable[[InteractionContext, ControlId], Awaitable[Optional[TransitionOutcome]]]

# Refusals answered with their own message; anything else gets the generic reply.
_REFUSALS = (
    AlreadyDecidedError,
    MalformedControlError,
    PermissionDeniedError,
    UnknownActionError,
    ValidationError,
)


class DecisionClaims:
    """In-process record of cards that already received a decision.

    Claiming is synchronous, so two handlers on the same event loop cannot
    both succeed for the same card.
    """

    def __init__(self):
        self._claimed: Set[Hashable] = set()

    def is_claimed(self, key: Hashable) -> bool:
        return key in self._claimed

    def claim(self, key: Hashable) -> bool:
        if key in self._claimed:
            return False
        self._claimed.add(key)
        return True

    def release(self, key: Hashable) -> None:
        self._claimed.discard(key)


class InteractionRouter:
    """Classifies interactions and drives review card transitions."""

    def __init__(
        self,
        gate: StaffGate,
        notifier: NotificationSender,
        organization: str,
        tickets_channel_id: int,
        claims: Optional[DecisionClaims] = None,
    ):
        self.gate = gate
        self.notifier = notifier
        self.organization = organization
        self.tickets_channel_id = tickets_channel_id
        self.claims = claims

        self.transitions: Dict[Tuple[InteractionKind, ControlAction], Handler] = {
            (InteractionKind.BUTTON, ControlAction.APPROVE): self._approve,
            (InteractionKind.BUTTON, ControlAction.REJECT): self._open_reason_prompt,
            (InteractionKind.PROMPT_SUBMIT, ControlAction.REJECT_REASON): self._reject,
        }

    async def dispatch(self, ctx: InteractionContext) -> Optional[TransitionOutcome]:
        """Handle one interaction. Never raises."""
        if ctx.kind is InteractionKind.OTHER and not ctx.is_answerable:
            return None

        context = log_interaction_context(ctx.user_id, ctx.custom_id, ctx.kind)
        with structlog.contextvars.bound_contextvars(**context):
            try:
                handler, control = self._resolve(ctx)
                return await handler(ctx, control)
            except _REFUSALS as e:
                logger.info("Interaction refused", reason=type(e).__name__)
                await self._safe_reply(ctx, e.message)
            except Exception as e:
                logger.exception("Interaction handler failed", error=str(e))
                if ctx.is_answerable:
                    await self._safe_reply(ctx, GENERIC_FAILURE_REPLY)
        return None

    def _resolve(self, ctx: InteractionContext) -> Tuple[Handler, ControlId]:
        if ctx.kind is InteractionKind.OTHER:
            raise UnknownActionError()

        is_prompt = ctx.kind is InteractionKind.PROMPT_SUBMIT
        try:
            control = ControlId.parse(ctx.custom_id)
        except MalformedControlError:
            if is_prompt:
                raise MalformedControlError(INVALID_PROMPT_REPLY) from None
            raise

        handler = self.transitions.get((ctx.kind, control.action))
        if handler is None:
            if is_prompt:
                raise MalformedControlError(INVALID_PROMPT_REPLY)
            raise UnknownActionError()
        return handler, control

    async def _approve(self, ctx: InteractionContext, control: ControlId) -> TransitionOutcome:
        await self._require_staff(ctx)
        claim = self._claim(ctx, control)

        await ctx.defer()
        await self._disable_controls(ctx, claim)

        result = await self.notifier.send(
            control.applicant_id,
            approval_notice(self.organization, self.tickets_channel_id),
        )
        await ctx.send_ephemeral(APPROVED_REPLY)

        logger.info(
            "Application approved",
            applicant_id=control.applicant_id,
            reviewer=ctx.user_id,
            notified=result.delivered,
        )
        return TransitionOutcome(DecisionState.APPROVED, control.applicant_id, result.delivered)

    async def _open_reason_prompt(self, ctx: InteractionContext, control: ControlId) -> None:
        await self._require_staff(ctx)
        if self.claims is not None and self.claims.is_claimed(self._claim_key(ctx, control)):
            raise AlreadyDecidedError()

        if await ctx.show_reason_prompt(compose_reason_prompt(control.applicant_id)):
            logger.info("Rejection reason requested", applicant_id=control.applicant_id)
        else:
            logger.warning("Rejection reason prompt not shown", applicant_id=control.applicant_id)
        return None

    async def _reject(self, ctx: InteractionContext, control: ControlId) -> TransitionOutcome:
        # New interaction context: the check made when the prompt opened does not carry over
        await self._require_staff(ctx)

        reason = safe_trim(ctx.field_value(REASON_FIELD_ID), REASON_MAX_LENGTH)
        if not reason:
            raise ValidationError(EMPTY_REASON_REPLY)

        claim = self._claim(ctx, control)
        await ctx.defer()
        await self._disable_controls(ctx, claim)

        result = await self.notifier.send(
            control.applicant_id,
            rejection_notice(self.organization, reason),
        )
        await ctx.send_ephemeral(REJECTED_REPLY)

        logger.info(
            "Application rejected",
            applicant_id=control.applicant_id,
            reviewer=ctx.user_id,
            notified=result.delivered,
        )
        return TransitionOutcome(DecisionState.REJECTED, control.applicant_id, result.delivered)

    async def _require_staff(self, ctx: InteractionContext) -> None:
        if not await self.gate.authorize(ctx.user_id):
            raise PermissionDeniedError()

    @staticmethod
    def _claim_key(ctx: InteractionContext, control: ControlId) -> Hashable:
        if ctx.card_message_id is not None:
            return ctx.card_message_id
        return control.applicant_id

    def _claim(self, ctx: InteractionContext, control: ControlId) -> Optional[Hashable]:
        if self.claims is None:
            return None
        key = self._claim_key(ctx, control)
        if not self.claims.claim(key):
            raise AlreadyDecidedError()
        return key

    async def _disable_controls(self, ctx: InteractionContext, claim: Optional[Hashable]) -> None:
        try:
            await ctx.disable_card_controls()
        except Exception:
            # The card still shows enabled controls, so the decision can be retried
            if claim is not None:
                self.claims.release(claim)
            raise

    @staticmethod
    async def _safe_reply(ctx: InteractionContext, content: str) -> None:
        try:
            await ctx.send_ephemeral(content)
        except Exception as e:
            logger.warning("Could not answer interaction", error=str(e))
