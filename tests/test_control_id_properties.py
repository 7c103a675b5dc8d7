"""Property-based tests for control identifier parsing."""

import pytest
from hypothesis import given, strategies as st, assume

from belmont_recruitment.core.errors import MalformedControlError
from belmont_recruitment.core.models import APPLICANT_ID_PATTERN, ControlAction, ControlId

applicant_ids = st.from_regex(r"[0-9]{17,20}", fullmatch=True)
actions = st.sampled_from(list(ControlAction))


class TestControlIdProperties:

    @given(action=actions, applicant_id=applicant_ids)
    def test_serialized_form_parses_back(self, action, applicant_id):
        control = ControlId(action, applicant_id)
        raw = control.serialize()

        assert raw == f"{action.value}:{applicant_id}"
        assert ControlId.parse(raw) == control

    @given(action=actions, applicant_id=st.text(max_size=25))
    def test_invalid_id_segment_is_rejected(self, action, applicant_id):
        assume(":" not in applicant_id)
        assume(not APPLICANT_ID_PATTERN.fullmatch(applicant_id))
        with pytest.raises(MalformedControlError):
            ControlId.parse(f"{action.value}:{applicant_id}")

    @given(tag=st.text(max_size=15), applicant_id=applicant_ids)
    def test_unknown_tag_is_rejected(self, tag, applicant_id):
        assume(":" not in tag)
        assume(tag not in {a.value for a in ControlAction})
        with pytest.raises(MalformedControlError):
            ControlId.parse(f"{tag}:{applicant_id}")

    @pytest.mark.parametrize("raw", [
        None,
        "",
        "approve",
        "approve:",
        ":123456789012345678",
        "approve:123456789012345678:extra",
        "approve-123456789012345678",
        "approve: 123456789012345678",
        "Approve:123456789012345678",
    ])
    def test_malformed_identifiers(self, raw):
        with pytest.raises(MalformedControlError):
            ControlId.parse(raw)

    def test_constructor_enforces_id_pattern(self):
        with pytest.raises(MalformedControlError):
            ControlId(ControlAction.APPROVE, "42")

    def test_str_is_wire_format(self):
        assert str(ControlId(ControlAction.REJECT, "123456789012345678")) == "reject:123456789012345678"
