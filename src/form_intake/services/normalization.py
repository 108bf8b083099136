"""Coercion of raw form input into a storable submission record"""

import math
from typing import Any, Dict, List, Mapping, Optional

from starlette.requests import Request

from form_intake.models.form_profile import OTHER_ROLE_VALUES, FormProfile


def empty_to_null(value: Any) -> Any:
    """Map None and "" to None, leave anything else untouched"""
    if value is None or value == "":
        return None
    return value


def int_or_null(
    value: Any, min_value: Optional[int] = None, max_value: Optional[int] = None
) -> Optional[int]:
    """Coerce a rating to an integer within [min_value, max_value], else None.

    Non-numeric, non-finite, fractional and out-of-range input all give None.
    """
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        number = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError, OverflowError):
        # OverflowError: integers too large for a float
        return None
    if not math.isfinite(number) or not number.is_integer():
        return None
    if min_value is not None and number < min_value:
        return None
    if max_value is not None and number > max_value:
        return None
    return int(number)


def is_blank(value: Any) -> bool:
    return value is None or value is False or str(value).strip() == ""


def find_missing_fields(data: Mapping[str, Any], required: List[str]) -> List[str]:
    """Names of required fields that are absent or blank after trimming"""
    return [name for name in required if is_blank(data.get(name))]


def client_ip(request: Request) -> Optional[str]:
    """Best-effort originating address: X-Forwarded-For, X-Real-IP, then the peer.

    Spoofable; fit for audit only.
    """
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first

    real_ip = (request.headers.get("x-real-ip") or "").strip()
    if real_ip:
        return real_ip

    if request.client and request.client.host:
        return request.client.host
    return None


def normalize_submission(
    data: Mapping[str, Any],
    profile: FormProfile,
    user_agent: Optional[str] = None,
    remote_addr: Optional[str] = None,
) -> Dict[str, Any]:
    """Build the row to insert from validated form data.

    Required fields must already be checked with find_missing_fields.
    """
    row: Dict[str, Any] = {}

    for name, default in profile.defaults.items():
        row[name] = empty_to_null(data.get(name)) or default

    for name in profile.required_fields:
        row[name] = str(data[name]).strip()

    for name in profile.text_fields:
        row[name] = empty_to_null(data.get(name))

    for rating in profile.rating_fields:
        row[rating.name] = int_or_null(
            data.get(rating.name), rating.min_value, rating.max_value
        )

    if profile.fold_other_role:
        other_role = empty_to_null(data.get("autre_fonction"))
        if row.get("fonction") in OTHER_ROLE_VALUES and not is_blank(other_role):
            row["fonction"] = str(other_role).strip()
        row.pop("autre_fonction", None)

    row["user_agent"] = user_agent or None
    row["remote_addr"] = remote_addr
    return row
