"""Mailgun client for submission notifications"""

import logging
from typing import Dict, Optional

from mailgun.client import Client
from starlette.concurrency import run_in_threadpool

logger = logging.getLogger(__name__)


class EmailClient:
    def __init__(self, config: dict):
        self.mailgun_api_key = config["mailgun_api_key"]
        self.domain = config["mailgun_domain"]
        self.sender_email = (
            config.get("sender_email") or f"Formulaire <no-reply@{self.domain}>"
        )

        self.client = Client(auth=("api", self.mailgun_api_key))

    def _post_message(self, data: Dict) -> Dict:
        """Blocking Mailgun call; run it off the event loop"""
        req = self.client.messages.create(data=data, domain=self.domain)
        response = req.json()
        if req.status_code != 200:
            logger.error(f"Mailgun API error: {req.status_code} - {response}")
            raise RuntimeError(f"Failed to send email: {response}")
        return response

    async def send_email(
        self,
        to: str,
        text: str,
        subject: Optional[str] = None,
        reply_to: Optional[str] = None,
    ) -> Dict:
        """
        Send a plain-text email through Mailgun

        Args:
            to: Recipient email address
            text: Email body text
            subject: Email subject (optional, uses default if not provided)
            reply_to: Address replies should go to, e.g. the respondent

        Returns:
            Dict containing Mailgun API response

        Raises:
            RuntimeError: If email sending fails
        """
        data = {
            "from": self.sender_email,
            "to": to,
            "subject": subject or "New form submission",
            "text": text,
            "o:tag": "form-submission",
        }
        if reply_to:
            data["h:Reply-To"] = reply_to

        try:
            response = await run_in_threadpool(self._post_message, data)
        except RuntimeError:
            raise
        except Exception as e:
            logger.error(f"Failed to send email to {to}: {str(e)}")
            raise RuntimeError(f"Email sending failed: {str(e)}") from e

        logger.info(f"Email sent to {to}: {response.get('id', 'unknown')}")
        return response
