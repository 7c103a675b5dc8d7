"""API routes for the recruitment service."""

import json
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import PlainTextResponse

from belmont_recruitment.api.models import ApiResponse, ApplicationSubmission
from belmont_recruitment.core.errors import PayloadTooLargeError
from belmont_recruitment.core.intake import ApplicationIntake
from belmont_recruitment.utils.logging import get_logger

logger = get_logger(__name__)

health_router = APIRouter(tags=["health"])
intake_router = APIRouter(tags=["applications"])


def get_intake(request: Request) -> ApplicationIntake:
    return request.app.state.intake


async def read_body(request: Request) -> bytes:
    """Read the request body, counting bytes as they arrive.

    Chunked uploads carry no Content-Length, so the cap is enforced on the
    stream itself.

    Raises:
        PayloadTooLargeError: the declared or received size exceeds
            ``max_body_bytes``.
    """
    limit = request.app.state.settings.max_body_bytes

    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > limit:
        raise PayloadTooLargeError()

    received = 0
    chunks: List[bytes] = []
    async for chunk in request.stream():
        received += len(chunk)
        if received > limit:
            logger.warning("Request body too large", path=request.url.path, received=received)
            raise PayloadTooLargeError()
        chunks.append(chunk)
    return b"".join(chunks)


async def read_submission(request: Request) -> Dict[str, Any]:
    """Raw JSON object from the body; anything else counts as an empty submission."""
    raw = await read_body(request)
    if not raw:
        return {}
    try:
        payload = json.loads(raw)
    except (ValueError, UnicodeDecodeError):
        logger.info("Submission body is not JSON", length=len(raw))
        return {}
    return payload if isinstance(payload, dict) else {}


@health_router.get("/", response_class=PlainTextResponse)
async def root(request: Request) -> str:
    return request.app.state.settings.service_banner


@health_router.get("/health", response_model=ApiResponse)
async def health() -> ApiResponse:
    return ApiResponse(ok=True)


@intake_router.post(
    "/apply",
    response_model=ApiResponse,
    responses={
        400: {"model": ApiResponse},
        401: {"model": ApiResponse},
        413: {"model": ApiResponse},
        500: {"model": ApiResponse},
    },
    openapi_extra={
        "requestBody": {
            "content": {"application/json": {"schema": ApplicationSubmission.model_json_schema()}}
        }
    },
)
async def submit_application(
    submission: Dict[str, Any] = Depends(read_submission),
    x_api_secret: Optional[str] = Header(None),
    intake: ApplicationIntake = Depends(get_intake),
) -> ApiResponse:
    """Validate a website submission and post it to the review channel."""
    await intake.submit(submission, provided_secret=x_api_secret)
    return ApiResponse(ok=True)


all_routers = [health_router, intake_router]
