"""Configuration loader for the form intake service"""

import os
from pathlib import Path

from dotenv import load_dotenv

project_dir = Path(__file__).parent.parent.parent
env_path = project_dir / ".env"

# Load .env file if it exists. For local development only.
if env_path.exists():
    load_dotenv(env_path)

# Configuration dictionary - set once at initialization
config = {
    # Hosted Postgres store: connection URL without password, plus the credential
    "supabase_db_url": os.getenv("SUPABASE_DB_URL"),
    "supabase_db_password": os.getenv("SUPABASE_DB_PASSWORD"),
    "allowed_origin": os.getenv("ALLOWED_ORIGIN") or "*",
    # Form variant: "evaluation", "reponses" or "attentes"
    "form_profile": os.getenv("FORM_PROFILE", "evaluation"),
    # "redirect" (302 to thank_you_url) or "json"
    "success_response": os.getenv("SUCCESS_RESPONSE", "redirect"),
    "thank_you_url": os.getenv("THANK_YOU_URL", "/thank-you.html"),
    "mailgun_api_key": os.getenv("MAILGUN_API_KEY"),
    "mailgun_domain": os.getenv("MAILGUN_DOMAIN"),
    "sender_email": os.getenv("SENDER_EMAIL"),
    "notification_email": os.getenv("NOTIFICATION_EMAIL"),
    "log_level": os.getenv("LOG_LEVEL", "INFO"),
    "port": int(os.getenv("PORT", "8080")),
    "environment": os.getenv("ENVIRONMENT"),
}
