"""Best-effort applicant notifications."""

from belmont_recruitment.core.gateway import ChatGateway
from belmont_recruitment.core.models import DeliveryResult
from belmont_recruitment.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationSender:
    """Sends one direct message per call and never lets a failure escape.

    A staff decision stands whether or not the applicant could be reached,
    so there is no retry and no queue.
    """

    def __init__(self, gateway: ChatGateway):
        self.gateway = gateway

    async def send(self, applicant_id: str, body: str) -> DeliveryResult:
        try:
            await self.gateway.send_direct_message(int(applicant_id), body)
        except Exception as e:
            logger.warning(
                "Applicant notification failed",
                applicant_id=applicant_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            return DeliveryResult.failed(str(e) or type(e).__name__)

        logger.info("Applicant notified", applicant_id=applicant_id)
        return DeliveryResult.ok()
