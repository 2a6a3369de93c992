"""Outbound mail transports.

``EMAIL_PROVIDER`` picks one of: ``dummy`` (log only), ``service`` (POST to
the internal email service) or ``smtp``. Every transport failure surfaces as
``EmailDeliveryError``; callers on the submit path catch it and log.
"""
from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage
from typing import Any, Callable, Sequence
import httpx

from outreach.core.config import settings


class EmailDeliveryError(Exception):
    pass


logger = logging.getLogger("outreach.email")

PROVIDER_ALIASES = {
    "": "dummy",
    "dummy": "dummy",
    "mock": "dummy",
    "console": "dummy",
    "service": "service",
    "email_service": "service",
    "smtp": "smtp",
}
SEND_TIMEOUT_SECONDS = 15.0
HEALTH_TIMEOUT_SECONDS = 5.0


def current_provider() -> str:
    raw = str(settings.EMAIL_PROVIDER or "").strip().lower()
    return PROVIDER_ALIASES.get(raw, raw)


def _dedupe_recipients(recipients: str | Sequence[str]) -> list[str]:
    items = [recipients] if isinstance(recipients, str) else list(recipients or [])
    seen: list[str] = []
    for item in items:
        address = str(item or "").strip().lower()
        if address and address not in seen:
            seen.append(address)
    return seen


def _deliver_dummy(recipients: list[str], subject: str, body: str, reply_to: str | None) -> dict[str, Any]:
    logger.warning("email not sent (dummy provider) to=%s subject=%s", ",".join(recipients), subject)
    return {"provider": "mock_email", "sent": False, "mocked": True}


def _deliver_service(recipients: list[str], subject: str, body: str, reply_to: str | None) -> dict[str, Any]:
    base_url = str(settings.EMAIL_SERVICE_URL or "").strip().rstrip("/")
    token = str(settings.INTERNAL_SERVICE_TOKEN or "").strip()
    if not base_url or not token:
        raise EmailDeliveryError("EMAIL_SERVICE_URL and INTERNAL_SERVICE_TOKEN must both be configured")

    message = {"from": settings.FROM_EMAIL, "to": recipients, "subject": subject, "body": body, "reply_to": reply_to}
    try:
        with httpx.Client(timeout=SEND_TIMEOUT_SECONDS) as client:
            response = client.post(
                f"{base_url}/internal/send",
                headers={"X-Internal-Token": token, "Content-Type": "application/json"},
                json=message,
            )
    except httpx.HTTPError as exc:
        raise EmailDeliveryError(f"email service unreachable: {exc}") from exc

    try:
        reply = response.json() if response.content else {}
    except ValueError:
        reply = {}
    if response.status_code >= 400:
        reason = reply.get("detail") or reply.get("error") or response.status_code
        raise EmailDeliveryError(f"email service rejected message: {reason}")
    return {"provider": "email-service", "sent": True, "response": reply}


def _deliver_smtp(recipients: list[str], subject: str, body: str, reply_to: str | None) -> dict[str, Any]:
    host = str(settings.SMTP_HOST or "").strip()
    sender = str(settings.FROM_EMAIL or "").strip()
    if not host or not settings.SMTP_PORT or not sender:
        raise EmailDeliveryError("SMTP_HOST, SMTP_PORT and FROM_EMAIL must be configured")
    if settings.SMTP_USE_TLS and settings.SMTP_USE_SSL:
        raise EmailDeliveryError("SMTP_USE_TLS and SMTP_USE_SSL are mutually exclusive")

    msg = EmailMessage()
    msg["From"] = sender
    msg["To"] = ", ".join(recipients)
    msg["Subject"] = subject
    if reply_to:
        msg["Reply-To"] = reply_to
    msg.set_content(body)

    smtp_class = smtplib.SMTP_SSL if settings.SMTP_USE_SSL else smtplib.SMTP
    try:
        with smtp_class(host=host, port=int(settings.SMTP_PORT), timeout=SEND_TIMEOUT_SECONDS) as smtp:
            if settings.SMTP_USE_TLS:
                smtp.starttls()
            if settings.SMTP_USER:
                smtp.login(settings.SMTP_USER, settings.SMTP_PASSWORD)
            smtp.send_message(msg)
    except (smtplib.SMTPException, OSError) as exc:
        raise EmailDeliveryError(f"SMTP delivery failed: {exc}") from exc
    return {"provider": "smtp", "sent": True}


TRANSPORTS: dict[str, Callable[[list[str], str, str, str | None], dict[str, Any]]] = {
    "dummy": _deliver_dummy,
    "service": _deliver_service,
    "smtp": _deliver_smtp,
}


def send_email_message(
    *, recipients: str | Sequence[str], subject: str, body: str, reply_to: str | None = None
) -> dict[str, Any]:
    addresses = _dedupe_recipients(recipients)
    if not addresses:
        raise EmailDeliveryError("No recipients")
    provider = current_provider()
    transport = TRANSPORTS.get(provider)
    if transport is None:
        raise EmailDeliveryError(f"Unknown EMAIL_PROVIDER: {provider}")
    return transport(addresses, subject, body, reply_to)


def _service_reachable(base_url: str) -> str | None:
    try:
        with httpx.Client(timeout=HEALTH_TIMEOUT_SECONDS) as client:
            response = client.get(f"{base_url}/health")
    except httpx.HTTPError as exc:
        return f"email service unavailable: {exc}"
    if response.status_code >= 400:
        return f"email service unavailable: HTTP {response.status_code}"
    return None


def email_provider_health() -> dict[str, Any]:
    """Configuration report for the admin system page; only ``service`` makes a network call."""
    provider = current_provider()
    checks: dict[str, bool] = {}
    issues: list[str] = []

    if provider == "dummy":
        checks["mock_mode"] = True
    elif provider == "service":
        base_url = str(settings.EMAIL_SERVICE_URL or "").strip().rstrip("/")
        checks["email_service_url_configured"] = bool(base_url)
        checks["internal_service_token_configured"] = bool(str(settings.INTERNAL_SERVICE_TOKEN or "").strip())
        if all(checks.values()):
            problem = _service_reachable(base_url)
            checks["email_service_reachable"] = problem is None
            if problem:
                issues.append(problem)
    elif provider == "smtp":
        checks["smtp_host_configured"] = bool(str(settings.SMTP_HOST or "").strip())
        checks["from_email_configured"] = bool(str(settings.FROM_EMAIL or "").strip())
    else:
        checks["provider_supported"] = False

    issues.extend(f"{name} check failed" for name, ok in checks.items() if not ok and name != "email_service_reachable")
    can_send = all(checks.values())
    return {
        "provider": provider,
        "status": "ok" if can_send else ("error" if provider not in TRANSPORTS else "degraded"),
        "can_send": can_send,
        "checks": checks,
        "issues": issues,
    }
