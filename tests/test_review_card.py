"""Tests for review card and reason prompt composition."""

from datetime import datetime, timezone

import pytest

from belmont_recruitment.core.cards import (
    EMBED_FIELD_LIMIT,
    REASON_FIELD_ID,
    REASON_MAX_LENGTH,
    compose_reason_prompt,
    compose_review_card,
)
from belmont_recruitment.core.intake import validate_submission
from belmont_recruitment.core.models import ControlAction, ControlId, ControlStyle

from conftest import APPLICANT_ID


class TestReviewCard:
    """Test cases for compose_review_card."""

    @pytest.fixture
    def application(self, valid_submission):
        return validate_submission(valid_submission)

    @pytest.fixture
    def fixed_time(self):
        return datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)

    def test_nine_numbered_fields_in_order(self, application, fixed_time):
        card = compose_review_card(application, "Família Belmont", now=fixed_time)

        assert len(card.fields) == 9
        for index, field in enumerate(card.fields, start=1):
            assert field.name.startswith(f"{index})")
        assert card.fields[0].value == f"`{APPLICANT_ID}`"
        assert card.fields[7].value == "P1"

    def test_two_enabled_controls_for_the_same_applicant(self, application, fixed_time):
        card = compose_review_card(application, "Família Belmont", now=fixed_time)

        assert [c.custom_id for c in card.controls] == [f"approve:{APPLICANT_ID}", f"reject:{APPLICANT_ID}"]
        assert [c.style for c in card.controls] == [ControlStyle.SUCCESS, ControlStyle.DANGER]
        assert not any(c.disabled for c in card.controls)
        assert card.applicant_id == APPLICANT_ID

    def test_control_ids_round_trip(self, application, fixed_time):
        card = compose_review_card(application, "Família Belmont", now=fixed_time)

        for control in card.controls:
            assert ControlId.parse(control.custom_id) == control.control_id

    def test_deterministic_for_fixed_time(self, application, fixed_time):
        first = compose_review_card(application, "Família Belmont", now=fixed_time)
        second = compose_review_card(application, "Família Belmont", now=fixed_time)
        assert first == second

    def test_organization_in_title_and_footer(self, application, fixed_time):
        card = compose_review_card(application, "Família Teste", now=fixed_time)
        assert "Família Teste" in card.title
        assert "Família Teste" in card.footer

    def test_long_values_are_shortened_for_display(self, valid_submission, fixed_time):
        application = validate_submission({**valid_submission, "pretende": "x" * 1400})
        card = compose_review_card(application, "Família Belmont", now=fixed_time)

        intentions = card.fields[8].value
        assert len(intentions) == EMBED_FIELD_LIMIT
        assert intentions.endswith("…")
        # the application itself keeps the full text
        assert len(application.intentions) == 1400

    def test_default_timestamp_is_timezone_aware(self, application):
        card = compose_review_card(application, "Família Belmont")
        assert card.timestamp.tzinfo is not None


class TestReasonPrompt:

    def test_prompt_carries_correlation_id(self):
        prompt = compose_reason_prompt(APPLICANT_ID)

        assert prompt.custom_id == f"rejectModal:{APPLICANT_ID}"
        assert prompt.control_id.action is ControlAction.REJECT_REASON
        assert prompt.field_id == REASON_FIELD_ID
        assert prompt.max_length == REASON_MAX_LENGTH == 500
        assert prompt.required is True
