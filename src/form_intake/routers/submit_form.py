"""Form submission endpoint"""

import json
import platform

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import RedirectResponse
from starlette.concurrency import run_in_threadpool

from form_intake.config import config
from form_intake.logging_config import get_logger
from form_intake.models.database import (
    StoreConfigError,
    StoreError,
    SubmissionStore,
    get_store,
    store_settings,
)
from form_intake.models.form_profile import BOT_FIELD, get_profile
from form_intake.routers.errors import SubmissionError
from form_intake.services.normalization import (
    client_ip,
    find_missing_fields,
    normalize_submission,
)
from form_intake.services.notification_service import (
    NotificationService,
    get_notification_service,
)

SUBMIT_FORM_PATH = "/api/submit-form"

router = APIRouter()

logger = get_logger(__name__, component="submit-form")


@router.options(SUBMIT_FORM_PATH)
async def preflight():
    """CORS pre-flight; headers are added by the app middleware"""
    return Response(status_code=204)


@router.get(SUBMIT_FORM_PATH)
async def submission_status():
    """Report runtime and whether store settings are present"""
    settings = store_settings()
    return {
        "ok": True,
        "runtime": f"python-{platform.python_version()}",
        "hasSupabaseUrl": settings["has_url"],
        "hasServiceRole": settings["has_credential"],
    }


@router.api_route(SUBMIT_FORM_PATH, methods=["PUT", "PATCH", "DELETE"])
async def method_not_allowed(request: Request):
    raise SubmissionError(405, f"Method {request.method} not allowed")


async def read_json_body(request: Request) -> dict:
    """Read the whole body and decode it as JSON.

    An empty body or a non-object payload is treated as an empty record.

    Raises:
        SubmissionError: 400 if the body is not valid JSON
    """
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        data = json.loads(raw.decode("utf-8"))
    except ValueError as e:
        # JSONDecodeError, UnicodeDecodeError and the int digit limit
        raise SubmissionError(400, "Invalid JSON body", details=str(e))

    if not isinstance(data, dict):
        logger.warning(f"Expected a JSON object, got {type(data).__name__}")
        return {}
    return data


def success_response():
    if config.get("success_response") == "json":
        return {"ok": True}
    return RedirectResponse(
        url=config.get("thank_you_url") or "/thank-you.html", status_code=302
    )


@router.post(SUBMIT_FORM_PATH)
async def submit_form(
    request: Request,
    store: SubmissionStore = Depends(get_store),
    notifier: NotificationService = Depends(get_notification_service),
):
    """Validate, normalize and store one form submission"""
    try:
        data = await read_json_body(request)

        if data.get(BOT_FIELD):
            # Accept silently so the sender gets no signal
            logger.info("Honeypot field filled, submission discarded")
            return {"ok": True, "bot": True}

        profile = get_profile(config["form_profile"])

        missing = find_missing_fields(data, list(profile.required_fields))
        if missing:
            raise SubmissionError(
                400,
                "Missing required fields",
                missingFields=missing,
                receivedKeys=list(data.keys()),
            )

        row = normalize_submission(
            data,
            profile,
            user_agent=request.headers.get("user-agent"),
            remote_addr=client_ip(request),
        )

        settings = store_settings()
        if not (settings["has_url"] and settings["has_credential"]):
            raise SubmissionError(
                500,
                "Server misconfigured",
                details="SUPABASE_DB_URL and SUPABASE_DB_PASSWORD must be set",
            )

        try:
            await run_in_threadpool(store.insert, profile.table, row)
        except StoreConfigError as e:
            raise SubmissionError(500, "Server misconfigured", details=str(e))
        except StoreError as e:
            raise SubmissionError(500, "Database insert failed", details=str(e))

        logger.info(f"Stored submission in {profile.table_name} for {row['email']}")

        await notifier.notify_submission(profile, row)

        return success_response()

    except SubmissionError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error handling submission: {e}")
        raise SubmissionError(500, "Server error", details=str(e))
