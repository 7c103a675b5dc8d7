"""Staff permission gate. Fails closed."""

from typing import Optional

from belmont_recruitment.core.gateway import ChatGateway
from belmont_recruitment.core.models import MemberRecord
from belmont_recruitment.utils.logging import get_logger

logger = get_logger(__name__)


class StaffGate:
    """Decides whether an acting user may approve or reject applications."""

    def __init__(self, gateway: ChatGateway, staff_role_id: int):
        self.gateway = gateway
        self.staff_role_id = staff_role_id

    def is_staff(self, member: Optional[MemberRecord]) -> bool:
        return member is not None and self.staff_role_id in member.role_ids

    async def authorize(self, user_id: int) -> bool:
        """Resolve the member and check the staff role; any lookup failure denies."""
        try:
            member = await self.gateway.fetch_member(user_id)
        except Exception as e:
            logger.warning("Member lookup failed", user_id=user_id, error=str(e))
            return False

        allowed = self.is_staff(member)
        if not allowed:
            logger.info("Decision denied", user_id=user_id, member_found=member is not None)
        return allowed
