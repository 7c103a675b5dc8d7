"""User-facing texts for staff replies and applicant direct messages."""

APPROVED_REPLY = "✅ Aprovado com sucesso."
REJECTED_REPLY = "❌ Reprovado com sucesso."
INVALID_PROMPT_REPLY = "❌ Modal inválido."
EMPTY_REASON_REPLY = "❌ O motivo da reprovação é obrigatório."
GENERIC_FAILURE_REPLY = "❌ Ocorreu um erro."


def approval_notice(organization: str, tickets_channel_id: int) -> str:
    return "\n".join([
        f"✅ **Você foi aprovado(a) na {organization}!**",
        "",
        "📌 Próximo passo:",
        f"➡️ Abra um ticket no canal <#{tickets_channel_id}> na aba **Recrutamento**.",
        "",
        "Se suas DMs estavam fechadas, ative para receber avisos.",
    ])


def rejection_notice(organization: str, reason: str) -> str:
    return "\n".join([
        f"❌ **Sua inscrição na {organization} foi reprovada.**",
        "",
        f"📝 Motivo: {reason}",
        "",
        "✅ Você poderá tentar novamente mais tarde.",
    ])
