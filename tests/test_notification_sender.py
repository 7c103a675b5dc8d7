"""Tests for best-effort applicant notifications."""

import pytest

from belmont_recruitment.core.errors import NotificationError
from belmont_recruitment.core.messages import approval_notice, rejection_notice
from belmont_recruitment.core.notifications import NotificationSender

from conftest import APPLICANT_ID, TICKETS_CHANNEL_ID


class TestNotificationSender:

    @pytest.fixture
    def sender(self, gateway):
        return NotificationSender(gateway)

    @pytest.mark.asyncio
    async def test_successful_delivery(self, gateway, sender):
        result = await sender.send(APPLICANT_ID, "olá")

        assert result.delivered is True
        assert result.error is None
        assert gateway.direct_messages == [(int(APPLICANT_ID), "olá")]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        NotificationError("DMs closed"),
        RuntimeError("connection reset"),
        LookupError(),
    ])
    async def test_failure_is_returned_not_raised(self, gateway, sender, error):
        gateway.dm_error = error

        result = await sender.send(APPLICANT_ID, "olá")

        assert result.delivered is False
        assert result.error
        assert len(gateway.direct_messages) == 1

    @pytest.mark.asyncio
    async def test_single_attempt_without_retry(self, gateway, sender):
        gateway.dm_error = RuntimeError("blocked")
        await sender.send(APPLICANT_ID, "olá")
        assert len(gateway.direct_messages) == 1


class TestNotificationTexts:

    def test_approval_points_to_ticket_channel(self):
        text = approval_notice("Família Belmont", TICKETS_CHANNEL_ID)
        assert f"<#{TICKETS_CHANNEL_ID}>" in text
        assert "aprovado" in text

    def test_rejection_includes_reason_verbatim(self):
        text = rejection_notice("Família Belmont", "Faltou detalhar a história.")
        assert "📝 Motivo: Faltou detalhar a história." in text
        assert "reprovada" in text
