"""Review card composition. Pure transforms, no I/O."""

from datetime import datetime, timezone
from typing import Optional

from belmont_recruitment.core.models import (
    Application,
    CardControl,
    CardField,
    ControlAction,
    ControlId,
    ControlStyle,
    ReasonPrompt,
    ReviewCard,
)

# Discord rejects embed field values longer than this
EMBED_FIELD_LIMIT = 1024
REASON_MAX_LENGTH = 500
REASON_FIELD_ID = "motivo"


def _shorten(value: str, limit: int = EMBED_FIELD_LIMIT) -> str:
    if len(value) <= limit:
        return value
    return value[: limit - 1] + "…"


def compose_review_card(
    application: Application,
    organization: str,
    now: Optional[datetime] = None,
) -> ReviewCard:
    """Render an application as nine numbered fields plus approve/reject controls."""
    app = application
    fields = (
        CardField("1) ID Discord", f"`{app.applicant_id}`", inline=True),
        CardField("2) RG (in-game)", f"`{app.in_game_id}`", inline=True),
        CardField("3) Nome (in-game)", app.display_name),
        CardField("4) Tempo de Nova Capital", app.tenure),
        CardField("5) Amor à vida", app.love_for_life),
        CardField("6) 3 áreas safes", app.safe_zones),
        CardField("7) Min/Máx bandidos (joalheria)", app.robbery_crew),
        CardField("8) Você é bom em:", app.skill.value, inline=True),
        CardField("9) O que pretende fazer (min 5 linhas)", app.intentions),
    )

    controls = (
        CardControl(
            control_id=ControlId(ControlAction.APPROVE, app.applicant_id),
            label="Aprovar",
            style=ControlStyle.SUCCESS,
        ),
        CardControl(
            control_id=ControlId(ControlAction.REJECT, app.applicant_id),
            label="Reprovar",
            style=ControlStyle.DANGER,
        ),
    )

    return ReviewCard(
        title=f"📨 Nova Inscrição | {organization}",
        description="Recebida pelo site. Use os botões abaixo para aprovar ou reprovar.",
        fields=tuple(CardField(f.name, _shorten(f.value), f.inline) for f in fields),
        footer=f"Sistema de Recrutamento | {organization}",
        controls=controls,
        timestamp=now or datetime.now(timezone.utc),
    )


def compose_reason_prompt(applicant_id: str) -> ReasonPrompt:
    """Build the rejection reason form, correlated to the same applicant."""
    return ReasonPrompt(
        control_id=ControlId(ControlAction.REJECT_REASON, applicant_id),
        title="Reprovar candidato",
        field_id=REASON_FIELD_ID,
        label="Motivo da reprovação",
        placeholder="Explique o motivo (respeitoso e direto).",
        max_length=REASON_MAX_LENGTH,
    )
