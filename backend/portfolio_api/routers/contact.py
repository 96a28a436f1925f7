from __future__ import annotations

from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends, Header, Response

from ..config import settings
from ..contact import ContactPipeline, RequestMetadata, SubmissionOutcome
from ..rate_limit import FixedWindowRateLimiter
from ..schemas import ContactRequest, ContactResponse
from ..services.email_service import get_email_sender

router = APIRouter(prefix="/api", tags=["contact"])

STATUS_BY_OUTCOME = {
    SubmissionOutcome.SENT: 200,
    SubmissionOutcome.BOT_DETECTED: 200,
    SubmissionOutcome.INVALID: 422,
    SubmissionOutcome.RATE_LIMITED: 429,
    SubmissionOutcome.SEND_FAILED: 502,
    SubmissionOutcome.ERROR: 500,
}


@lru_cache(maxsize=1)
def get_contact_pipeline() -> ContactPipeline:
    limiter = FixedWindowRateLimiter(
        max_requests=settings.contact_rate_limit_max,
        window_seconds=settings.contact_rate_limit_window_seconds,
    )
    return ContactPipeline(rate_limiter=limiter, sender=get_email_sender())


@router.post(
    "/contact",
    response_model=ContactResponse,
    response_model_exclude_none=True,
    summary="Submit the portfolio contact form",
)
async def submit_contact(
    payload: ContactRequest,
    response: Response,
    x_forwarded_for: Optional[str] = Header(default=None),
    x_real_ip: Optional[str] = Header(default=None),
    pipeline: ContactPipeline = Depends(get_contact_pipeline),
) -> ContactResponse:
    report = await pipeline.submit(
        payload.model_dump(),
        RequestMetadata(forwarded_for=x_forwarded_for, real_ip=x_real_ip),
    )
    response.status_code = STATUS_BY_OUTCOME[report.outcome]
    return ContactResponse(**report.result.to_dict())
