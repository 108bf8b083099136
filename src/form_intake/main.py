#!/usr/bin/env python3
"""Training feedback form intake - web server"""

import uvicorn
from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException as StarletteHTTPException

from form_intake.config import config
from form_intake.logging_config import get_logger, setup_logging
from form_intake.models.database import store_settings
from form_intake.models.form_profile import get_profile
from form_intake.routers.errors import (
    SubmissionError,
    method_not_allowed_handler,
    submission_error_handler,
)
from form_intake.routers.health import health
from form_intake.routers.submit_form import router as submit_form_router

# Configure logging (INFO -> stdout, WARNING/ERROR -> stderr)
setup_logging()
logger = get_logger(__name__)

# Fail fast on a misspelled FORM_PROFILE
form_profile = get_profile(config["form_profile"])

settings = store_settings()
if not (settings["has_url"] and settings["has_credential"]):
    logger.warning(
        "[submit-form] SUPABASE_DB_URL / SUPABASE_DB_PASSWORD missing; "
        "submissions will be rejected"
    )

app = FastAPI(
    title="Form Intake",
    description="Receives training feedback form submissions and stores them",
    version="1.0.0",
    docs_url=None,
    redoc_url=None,
)

app.add_exception_handler(SubmissionError, submission_error_handler)
app.add_exception_handler(StarletteHTTPException, method_not_allowed_handler)


@app.middleware("http")
async def add_cors_headers(request: Request, call_next):
    """Set cross-origin headers on every response, whatever the request Origin"""
    response = await call_next(request)
    response.headers["Access-Control-Allow-Origin"] = (
        config.get("allowed_origin") or "*"
    )
    response.headers["Access-Control-Allow-Methods"] = "POST, OPTIONS, GET"
    response.headers["Access-Control-Allow-Headers"] = "Content-Type"
    return response


app.include_router(health)
app.include_router(submit_form_router)


def run():
    port = config.get("port")
    logger.info(f"Starting form intake on 0.0.0.0:{port}")
    logger.info(
        f"Form profile '{form_profile.name}' -> table {form_profile.table_name}"
    )

    try:
        uvicorn.run(
            app, host="0.0.0.0", port=port, log_level=config["log_level"].lower()
        )
    except Exception as e:
        logger.error(f"Failed to start server: {e}")
        raise


if __name__ == "__main__":
    run()
