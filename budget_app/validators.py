"""
Request validators.

Stateless checks shared by the create and update paths. Each check returns a
`Check` carrying pass/fail plus a machine-readable code, so the routers map
failures to responses without re-deriving the reason. `require()` turns a
failed check into a 400 `ApiError`.
"""
import math
import re
from datetime import datetime
from typing import Any, Mapping, NamedTuple, Optional

from .errors import ApiError
from .schemas import CategoryCreate, TransactionCreate, TransactionPatch

TRANSACTION_TYPES = ("income", "expense")
OWNER_FIELDS = ("userId", "user_id")

HEX_COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")
INTEGER_RE = re.compile(r"^[+-]?\d+$")

# Row ids and offsets are bound as SQLite INTEGER (signed 64-bit)
MAX_DB_INTEGER = 2 ** 63 - 1


class Check(NamedTuple):
    ok: bool
    code: Optional[str] = None
    message: Optional[str] = None


PASS = Check(True)


def fail(code: str, message: str) -> Check:
    return Check(False, code, message)


def require(check: Check) -> None:
    """Raise a 400 ApiError when the check failed"""
    if not check.ok:
        raise ApiError.bad_request(check.code, check.message)


# =============================================================================
# Field checks
# =============================================================================

def is_hex_color(value: Any) -> bool:
    return isinstance(value, str) and HEX_COLOR_RE.match(value) is not None


def check_color(value: Any) -> Check:
    """Optional color: None passes, anything else must be #RRGGBB"""
    if value is None or is_hex_color(value):
        return PASS
    return fail("INVALID_COLOR", "Color must be a valid hex color code (e.g., #FF5733)")


def check_type(value: Any) -> Check:
    if isinstance(value, str) and value in TRANSACTION_TYPES:
        return PASS
    return fail("INVALID_TYPE", 'Type is required and must be either "income" or "expense"')


def check_amount(value: Any) -> Check:
    # bool is an int subclass, but true is not an amount
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            amount = float(value)
        except OverflowError:
            amount = math.inf
        if math.isfinite(amount) and amount > 0:
            return PASS
    return fail("INVALID_AMOUNT", "Amount is required and must be a positive number")


def check_non_empty(value: Any, code: str, label: str) -> Check:
    if isinstance(value, str) and value.strip():
        return PASS
    return fail(code, f"{label} is required and must be a non-empty string")


def check_name(value: Any) -> Check:
    return check_non_empty(value, "INVALID_NAME", "Name")


def check_category(value: Any) -> Check:
    return check_non_empty(value, "INVALID_CATEGORY", "Category")


def check_optional_string(value: Any, code: str, label: str) -> Check:
    if value is None or isinstance(value, str):
        return PASS
    return fail(code, f"{label} must be a string")


def check_icon(value: Any) -> Check:
    return check_optional_string(value, "INVALID_ICON", "Icon")


def check_description(value: Any) -> Check:
    return check_optional_string(value, "INVALID_DESCRIPTION", "Description")


def parse_timestamp(value: str) -> Optional[datetime]:
    """Parse an ISO-8601 date or timestamp, returning None when it is not one.

    Accepts date-only values (`2024-01-15`) and a trailing `Z` for UTC.
    """
    text = value.strip()
    if not text:
        return None
    if text[-1] in ("Z", "z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def check_date(value: Any) -> Check:
    """A missing date and an unparseable one are reported differently"""
    if not isinstance(value, str) or not value:
        return fail("INVALID_DATE", "Date is required and must be a valid ISO timestamp")
    if parse_timestamp(value) is None:
        return fail("INVALID_DATE_FORMAT", "Date must be a valid ISO timestamp")
    return PASS


def check_date_filter(value: Optional[str], param: str) -> Check:
    """Optional dateFrom/dateTo query parameters"""
    if value is None or value == "":
        return PASS
    if parse_timestamp(value) is None:
        return fail("INVALID_DATE_FORMAT", f"Invalid {param} format. Use ISO date format.")
    return PASS


def check_no_owner_fields(body: Mapping[str, Any]) -> Check:
    """The owner always comes from the caller identity, never from the body"""
    if any(field in body for field in OWNER_FIELDS):
        return fail("USER_ID_NOT_ALLOWED", "User ID cannot be provided in request body")
    return PASS


# =============================================================================
# Query parameter parsing
# =============================================================================

def parse_db_integer(value: Optional[str]) -> Optional[int]:
    """Integer text that fits an SQLite INTEGER, or None"""
    if value is None:
        return None
    text = value.strip()
    # Longer text cannot be in range, and int() refuses very long digit strings
    if len(text) > 20 or not INTEGER_RE.match(text):
        return None
    number = int(text)
    if abs(number) > MAX_DB_INTEGER:
        return None
    return number


def parse_id(value: Optional[str]) -> int:
    """Parse a record id query parameter or raise INVALID_ID"""
    record_id = parse_db_integer(value)
    if record_id is None:
        raise ApiError.bad_request("INVALID_ID", "Valid ID is required")
    return record_id


def parse_limit(value: Optional[str], default: int, cap: int) -> int:
    """Parse `limit`, defaulting when omitted and clamping silently to `cap`"""
    if value is None or value == "":
        return default
    limit = parse_db_integer(value)
    if limit is None:
        # Out-of-range digit strings are still just "too large"
        if not INTEGER_RE.match(value.strip()) or value.strip().startswith("-"):
            raise ApiError.bad_request("INVALID_LIMIT", "Limit must be a positive integer")
        return cap
    if limit < 1:
        raise ApiError.bad_request("INVALID_LIMIT", "Limit must be a positive integer")
    return min(limit, cap)


def parse_offset(value: Optional[str]) -> int:
    if value is None or value == "":
        return 0
    offset = parse_db_integer(value)
    if offset is None or offset < 0:
        raise ApiError.bad_request("INVALID_OFFSET", "Offset must be a non-negative integer")
    return offset


def parse_type_filter(value: Optional[str]) -> Optional[str]:
    if value is None or value == "":
        return None
    if value not in TRANSACTION_TYPES:
        raise ApiError.bad_request("INVALID_TYPE", 'Type must be either "income" or "expense"')
    return value

# =============================================================================
# Payload parsing
# =============================================================================

def parse_category_create(body: Mapping[str, Any]) -> CategoryCreate:
    require(check_no_owner_fields(body))
    require(check_name(body.get("name")))
    require(check_type(body.get("type")))
    require(check_color(body.get("color")))
    require(check_icon(body.get("icon")))
    return CategoryCreate(
        name=body["name"].strip(),
        type=body["type"],
        color=body.get("color"),
        icon=body.get("icon"),
    )


def parse_transaction_create(body: Mapping[str, Any]) -> TransactionCreate:
    require(check_no_owner_fields(body))
    require(check_type(body.get("type")))
    require(check_amount(body.get("amount")))
    require(check_category(body.get("category")))
    require(check_date(body.get("date")))
    require(check_description(body.get("description")))
    description = body.get("description")
    return TransactionCreate(
        type=body["type"],
        amount=body["amount"],
        category=body["category"].strip(),
        description=description.strip() if description else None,
        date=body["date"],
    )


def parse_transaction_patch(body: Mapping[str, Any]) -> TransactionPatch:
    """Validate each field that is present with the creation rules.

    A key sent as null counts as present: for description that clears it,
    for the required fields it fails their check.
    """
    require(check_no_owner_fields(body))
    fields = {}
    if "type" in body:
        require(check_type(body["type"]))
        fields["type"] = body["type"]
    if "amount" in body:
        require(check_amount(body["amount"]))
        fields["amount"] = body["amount"]
    if "category" in body:
        require(check_category(body["category"]))
        fields["category"] = body["category"].strip()
    if "description" in body:
        require(check_description(body["description"]))
        description = body["description"]
        fields["description"] = description.strip() if description else None
    if "date" in body:
        require(check_date(body["date"]))
        fields["date"] = body["date"]
    return TransactionPatch(**fields)
