"""Email delivery transports."""

from __future__ import annotations

import logging

import httpx

from account.config import AccountConfig

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"


class ResendMailTransport:
    """Sends HTML mail through the Resend HTTP API."""

    def __init__(self, api_key: str | None = None, timeout: float = 10) -> None:
        self._api_key = api_key if api_key is not None else AccountConfig.RESEND_API_KEY
        self._timeout = timeout

    async def send(self, sender: str, to: str, subject: str, html: str) -> bool:
        if not self._api_key:
            logger.error("[Resend] RESEND_API_KEY is not configured")
            return False

        payload = {
            "from": sender,
            "to": [to],
            "subject": subject,
            "html": html,
        }
        headers = {"Authorization": f"Bearer {self._api_key}"}

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(RESEND_API_URL, headers=headers, json=payload)
        except httpx.HTTPError as exc:
            logger.error(f"[Resend] Error sending to {to}: {exc}")
            return False

        if response.status_code != 200:
            logger.error(f"[Resend] Rejected mail to {to}: {response.status_code} {response.text}")
            return False

        email_id = response.json().get("id", "unknown")
        logger.info(f"[Resend] Email sent to {to}, ID: {email_id}")
        return True


class ConsoleMailTransport:
    """Logs outbound mail instead of delivering it. For local development."""

    async def send(self, sender: str, to: str, subject: str, html: str) -> bool:
        logger.info(f"[Console] From: {sender} To: {to} Subject: {subject}")
        logger.debug(f"[Console] Body for {to}:\n{html}")
        return True


def default_sender() -> str:
    return f"{AccountConfig.EMAIL_FROM_NAME} <{AccountConfig.EMAIL_FROM_ADDRESS}>"
