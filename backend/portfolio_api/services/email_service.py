from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone
from functools import lru_cache
import logging
from typing import Optional, Protocol

import aiohttp

from ..config import settings
from ..metrics import EMAIL_SEND_FAILURES_TOTAL, EMAIL_TIMEOUTS_TOTAL

logger = logging.getLogger("portfolio.email")

_EMAIL_ENTITIES = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#x27;",
    }
)


@dataclass(frozen=True)
class ContactEmail:
    name: str
    email: str
    message: str


@dataclass(frozen=True)
class SendResult:
    success: bool
    error: Optional[str] = None


class EmailSender(Protocol):
    async def send(self, email: ContactEmail) -> SendResult: ...


@dataclass(frozen=True)
class ResendRuntimeConfig:
    api_url: str
    api_key: str
    from_address: str
    to_address: str
    timeout_seconds: float


def _escape(text: str) -> str:
    return text.translate(_EMAIL_ENTITIES)


def render_contact_email(name: str, email: str, message: str, timestamp: Optional[datetime] = None) -> str:
    """HTML body for the notification sent to the site owner."""

    submitted_at = (timestamp or datetime.now(timezone.utc)).strftime("%A, %B %d, %Y at %H:%M %Z").strip()
    safe_name = _escape(name)
    safe_email = _escape(email)
    safe_message = _escape(message)

    return f"""
<!DOCTYPE html>
<html>
  <head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>New Contact Form Submission</title>
  </head>
  <body style="font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Arial, sans-serif; line-height: 1.6; color: #1a1a2e; max-width: 600px; margin: 0 auto;">
    <div style="background: linear-gradient(135deg, #3b82f6 0%, #8b5cf6 100%); padding: 40px 30px; border-radius: 12px 12px 0 0;">
      <h1 style="color: white; margin: 0 0 8px; font-size: 24px;">New Contact Form Submission</h1>
      <p style="color: rgba(255, 255, 255, 0.9); margin: 0; font-size: 14px;">Someone reached out through your portfolio</p>
    </div>
    <div style="background: white; padding: 30px; border: 1px solid #e5e7eb; border-top: none; border-radius: 0 0 12px 12px;">
      <p style="margin: 0 0 4px; color: #6b7280; font-size: 12px; text-transform: uppercase;">From</p>
      <p style="margin: 0 0 16px; font-size: 16px;">{safe_name}</p>
      <p style="margin: 0 0 4px; color: #6b7280; font-size: 12px; text-transform: uppercase;">Email</p>
      <p style="margin: 0 0 16px; font-size: 16px;"><a href="mailto:{safe_email}" style="color: #3b82f6;">{safe_email}</a></p>
      <p style="margin: 0 0 8px; color: #6b7280; font-size: 12px; text-transform: uppercase;">Message</p>
      <div style="padding: 16px; background: #f9fafb; border-radius: 8px; border: 1px solid #e5e7eb;">
        <p style="margin: 0; white-space: pre-wrap; color: #374151;">{safe_message}</p>
      </div>
      <p style="margin: 32px 0 8px; font-size: 12px; color: #9ca3af;">Submitted on {submitted_at}</p>
      <p style="margin: 0; font-size: 12px; color: #6b7280;">Reply directly to this email to respond to {safe_name}</p>
    </div>
  </body>
</html>
""".strip()


class ResendEmailSender:
    """Delivers contact messages through the Resend HTTP API."""

    def __init__(self, cfg: ResendRuntimeConfig) -> None:
        self._cfg = cfg

    def _build_payload(self, email: ContactEmail) -> dict[str, str]:
        return {
            "from": self._cfg.from_address,
            "to": self._cfg.to_address,
            "subject": f"New Contact Form Submission from {email.name}",
            "html": render_contact_email(email.name, email.email, email.message),
            "reply_to": email.email,
        }

    async def _post(self, payload: dict[str, str]) -> int:
        headers = {"Authorization": f"Bearer {self._cfg.api_key}"}
        timeout = aiohttp.ClientTimeout(total=self._cfg.timeout_seconds)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.post(self._cfg.api_url, json=payload, headers=headers) as response:
                if response.status >= 400:
                    body = await response.text(errors="replace")
                    logger.error(
                        "Resend API rejected message",
                        extra={"event": "email_rejected", "status": response.status, "reason": body[:200]},
                    )
                return response.status

    async def send(self, email: ContactEmail) -> SendResult:
        if not self._cfg.api_key:
            # Development mode: nothing is delivered, the form flow still completes.
            logger.warning(
                "RESEND_API_KEY not configured; contact email from %s not delivered: %s...",
                email.email,
                email.message[:100],
                extra={"event": "email_not_configured"},
            )
            return SendResult(success=True)

        try:
            status = await self._post(self._build_payload(email))
        except asyncio.TimeoutError:
            EMAIL_TIMEOUTS_TOTAL.inc()
            logger.warning("Email request timeout", extra={"event": "email_timeout", "reason": "deadline_exceeded"})
            return SendResult(success=False, error="Email request timed out")
        except aiohttp.ClientError as exc:
            EMAIL_SEND_FAILURES_TOTAL.inc()
            logger.exception(
                "Email request failed",
                extra={"event": "email_request_failed", "reason": exc.__class__.__name__},
            )
            return SendResult(success=False, error="Failed to send email")
        except Exception:
            EMAIL_SEND_FAILURES_TOTAL.inc()
            logger.exception("Email dispatch failed", extra={"event": "email_dispatch_failed"})
            return SendResult(success=False, error="Failed to send email")

        if status >= 400:
            EMAIL_SEND_FAILURES_TOTAL.inc()
            return SendResult(success=False, error="Failed to send email")
        return SendResult(success=True)


@lru_cache(maxsize=1)
def get_email_sender() -> ResendEmailSender:
    return ResendEmailSender(
        ResendRuntimeConfig(
            api_url=settings.resend_api_url,
            api_key=settings.resend_api_key,
            from_address=settings.email_from,
            to_address=settings.contact_email,
            timeout_seconds=settings.email_timeout,
        )
    )
