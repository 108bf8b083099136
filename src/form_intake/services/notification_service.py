"""Best-effort email notification for new submissions"""

import logging
from typing import Any, Dict, Optional

from form_intake.backends.email_client import EmailClient
from form_intake.config import config
from form_intake.models.form_profile import FormProfile

logger = logging.getLogger(__name__)

# Labels that humanize() would get wrong
FIELD_LABELS = {
    "prenom": "Prénom",
    "telephone": "Téléphone",
    "formation_titre": "Formation",
    "formation_modalite": "Modalité",
    "formation_debut": "Début",
    "formation_fin": "Fin",
    "nps": "NPS",
    "remote_addr": "Adresse IP",
    "user_agent": "Navigateur",
}


def humanize(field_name: str) -> str:
    """points_forts -> Points forts"""
    if field_name in FIELD_LABELS:
        return FIELD_LABELS[field_name]
    return field_name.replace("_", " ").capitalize()


class NotificationService:
    """Renders a submission as text and emails it to a fixed recipient"""

    def __init__(self, email_config: dict):
        self.recipient = email_config.get("notification_email")
        self.enabled = bool(
            self.recipient
            and email_config.get("mailgun_api_key")
            and email_config.get("mailgun_domain")
        )
        self.email_client = EmailClient(email_config) if self.enabled else None

    def render(self, profile: FormProfile, row: Dict[str, Any]) -> Dict[str, str]:
        """Build subject and body listing every non-null stored field"""
        subject = (
            f"[{profile.table_name}] New submission from "
            f"{row.get('prenom', '')} {row.get('nom', '')}".strip()
        )
        lines = [
            f"{humanize(name)}: {row[name]}"
            for name in profile.columns
            if row.get(name) is not None
        ]
        return {"subject": subject, "body": "\n".join(lines)}

    async def notify_submission(
        self, profile: FormProfile, row: Dict[str, Any]
    ) -> bool:
        """
        Send the submission to the notification recipient.

        Never raises: a failed send is logged and reported as False.

        Returns:
            bool: True if the email was sent
        """
        if not self.enabled:
            logger.info("Notification email not configured, skipping")
            return False

        try:
            content = self.render(profile, row)
            await self.email_client.send_email(
                to=self.recipient,
                text=content["body"],
                subject=content["subject"],
                reply_to=row.get("email"),
            )
            return True
        except Exception as e:
            logger.warning(f"Submission notification failed: {e}")
            return False


_notification_service: Optional[NotificationService] = None


def get_notification_service() -> NotificationService:
    """Get the shared notification service, built from config on first use"""
    global _notification_service
    if _notification_service is None:
        _notification_service = NotificationService(config)
        logger.info("Initialized global notification service")
    return _notification_service
