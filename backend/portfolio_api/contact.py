"""Contact form submission pipeline.

honeypot -> client identifier -> rate limit -> sanitize -> validate -> send
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
import math
import time
from typing import Callable, Optional

from .metrics import CONTACT_SUBMISSIONS_TOTAL
from .rate_limit import FixedWindowRateLimiter
from .services.email_service import ContactEmail, EmailSender
from .validations import ContactFormData, sanitize_input, trim, validate_contact_form

logger = logging.getLogger("portfolio.contact")

SUCCESS_MESSAGE = "Message sent successfully"
SEND_FAILED_MESSAGE = "Failed to send message. Please try again later."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."
UNKNOWN_CLIENT = "unknown"


class SubmissionOutcome(str, Enum):
    SENT = "sent"
    BOT_DETECTED = "bot_detected"
    RATE_LIMITED = "rate_limited"
    INVALID = "invalid"
    SEND_FAILED = "send_failed"
    ERROR = "error"


@dataclass(frozen=True)
class RequestMetadata:
    forwarded_for: Optional[str] = None
    real_ip: Optional[str] = None


@dataclass(frozen=True)
class SubmissionResult:
    success: bool
    message: Optional[str] = None
    errors: dict[str, str] = field(default_factory=dict)

    @classmethod
    def ok(cls, message: str = SUCCESS_MESSAGE) -> "SubmissionResult":
        return cls(success=True, message=message)

    @classmethod
    def failed(cls, errors: dict[str, str]) -> "SubmissionResult":
        return cls(success=False, errors=dict(errors))

    def to_dict(self) -> dict:
        if self.success:
            return {"success": True, "message": self.message}
        return {"success": False, "errors": dict(self.errors)}


@dataclass(frozen=True)
class SubmissionReport:
    """Internal view of a submission; ``result`` is what the caller sees."""

    outcome: SubmissionOutcome
    result: SubmissionResult
    client_id: Optional[str] = None


def client_identifier(forwarded_for: Optional[str], real_ip: Optional[str]) -> str:
    if forwarded_for:
        first = forwarded_for.split(",")[0].strip()
        if first:
            return first
    if real_ip and real_ip.strip():
        return real_ip.strip()
    return UNKNOWN_CLIENT


def rate_limit_message(reset_time: float, now: float) -> str:
    minutes = math.ceil((reset_time - now) / 60)
    unit = "minute" if minutes == 1 else "minutes"
    return f"Too many submissions. Please try again in {minutes} {unit}."


class ContactPipeline:
    def __init__(
        self,
        rate_limiter: FixedWindowRateLimiter,
        sender: EmailSender,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._rate_limiter = rate_limiter
        self._sender = sender
        self._clock = clock

    @property
    def rate_limiter(self) -> FixedWindowRateLimiter:
        return self._rate_limiter

    async def submit(self, form: ContactFormData, meta: RequestMetadata) -> SubmissionReport:
        report = await self._process(form, meta)
        CONTACT_SUBMISSIONS_TOTAL.labels(outcome=report.outcome.value).inc()
        logger.info(
            "Contact submission processed",
            extra={
                "event": "contact_submission",
                "outcome": report.outcome.value,
                "ip": report.client_id,
            },
        )
        return report

    async def _process(self, form: ContactFormData, meta: RequestMetadata) -> SubmissionReport:
        # Bots get the same answer as real senders and never touch the quota.
        honeypot = form.get("honeypot") or ""
        if trim(honeypot):
            return SubmissionReport(SubmissionOutcome.BOT_DETECTED, SubmissionResult.ok())

        client_id = client_identifier(meta.forwarded_for, meta.real_ip)

        limit = self._rate_limiter.check_rate_limit(client_id)
        if not limit.allowed:
            message = rate_limit_message(limit.reset_time, self._clock())
            return SubmissionReport(
                SubmissionOutcome.RATE_LIMITED,
                SubmissionResult.failed({"general": message}),
                client_id,
            )

        sanitized: ContactFormData = {
            "name": sanitize_input(trim(form["name"])),
            "email": sanitize_input(trim(form["email"])),
            "message": sanitize_input(trim(form["message"])),
            "honeypot": "",
        }

        errors = validate_contact_form(sanitized)
        if errors:
            return SubmissionReport(SubmissionOutcome.INVALID, SubmissionResult.failed(errors), client_id)

        email = ContactEmail(name=sanitized["name"], email=sanitized["email"], message=sanitized["message"])
        try:
            sent = await self._sender.send(email)
        except Exception:
            logger.exception(
                "Contact email dispatch raised",
                extra={"event": "contact_send_error", "ip": client_id},
            )
            return SubmissionReport(
                SubmissionOutcome.ERROR,
                SubmissionResult.failed({"general": UNEXPECTED_ERROR_MESSAGE}),
                client_id,
            )

        if not sent.success:
            logger.warning(
                "Contact email was not delivered",
                extra={"event": "contact_send_failed", "ip": client_id, "reason": sent.error},
            )
            return SubmissionReport(
                SubmissionOutcome.SEND_FAILED,
                SubmissionResult.failed({"general": SEND_FAILED_MESSAGE}),
                client_id,
            )

        return SubmissionReport(SubmissionOutcome.SENT, SubmissionResult.ok(), client_id)
