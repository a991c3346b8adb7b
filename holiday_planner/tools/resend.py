from typing import Any, Dict, Optional
import os

import httpx

import logging

logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)
_level = os.getenv("HOLIDAY_PLANNER_LOG_LEVEL", "INFO").upper()
logger.setLevel(getattr(logging, _level, logging.INFO))
logger.propagate = False

class EmailDeliveryError(RuntimeError):
    """Resend refused the message or could not be reached."""

    def __init__(self, message: str, *, status_code: Optional[int] = None, payload: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload or {}

class ResendClient:
    ENDPOINT = "https://api.resend.com/emails"
    DEFAULT_SENDER = "Best Holiday Plan <noreply@best-travel-plan.cloud>"

    def __init__(self, *, api_key: Optional[str] = None, sender: Optional[str] = None, timeout: float = 10.0):
        self.api_key = api_key or os.getenv("RESEND_API_KEY")
        self.sender = sender or os.getenv("RESEND_SENDER") or self.DEFAULT_SENDER
        self.timeout = timeout

    async def send(self, to: str, subject: str, html: str) -> str:
        """Send one HTML email and return the provider message id."""
        if not self.api_key:
            raise RuntimeError("RESEND_API_KEY environment variable not configured")

        payload = {
            "from": self.sender,
            "to": [to],
            "subject": subject,
            "html": html,
        }
        logger.info("Sending email to: %s", to)
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.ENDPOINT,
                    json=payload,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
        except httpx.HTTPError as exc:
            logger.warning("Resend request failed for %s", to, exc_info=True)
            raise EmailDeliveryError(f"Failed to reach Resend: {exc}") from exc

        if response.status_code >= 400:
            try:
                detail = response.json()
            except ValueError:
                detail = {"message": response.text}
            logger.error("Resend API error (%s): %s", response.status_code, detail)
            raise EmailDeliveryError(
                "Failed to send email",
                status_code=response.status_code,
                payload=detail if isinstance(detail, dict) else {"message": str(detail)},
            )

        result = response.json()
        message_id = str(result.get("id") or "")
        logger.info("Email sent successfully to %s (id=%s)", to, message_id or "n/a")
        return message_id
