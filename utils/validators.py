"""
Input Validators
Validates ripeness request fields before any computation runs
"""

import re
from datetime import date, timedelta
from typing import Tuple, List, Optional

from ripeness import INTAKE_HEADROOM_DAYS


DATE_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')

# Latest intake date whose readiness window still fits before date.max
LATEST_INTAKE_DATE = date.max - timedelta(days=INTAKE_HEADROOM_DAYS)


def validate_required_fields(data: dict, required_fields: List[str]) -> Tuple[bool, List[str]]:
    """
    Validate that all required fields are present and not empty
    Returns (is_valid, list_of_missing_fields)
    """
    missing = []

    for field in required_fields:
        value = data.get(field)
        if value is None or (isinstance(value, str) and value.strip() == ""):
            missing.append(f"{field} is required")

    return len(missing) == 0, missing


def normalize_date_string(value: str) -> str:
    """
    Bring date separator variants to the canonical YYYY-MM-DD form
    Accepts 2024/01/05 and 2024.01.05 as well as 2024-01-05
    """
    return str(value).strip().replace('/', '-').replace('.', '-')


def validate_date(value) -> Tuple[Optional[date], str]:
    """
    Validate a calendar date string
    Returns (parsed_date, error_message)
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return None, "receivedAt is required"

    if not isinstance(value, str):
        return None, "receivedAt must be a date string (YYYY-MM-DD)"

    normalized = normalize_date_string(value)
    if not DATE_PATTERN.match(normalized):
        return None, "receivedAt must be in YYYY-MM-DD format"

    try:
        parsed = date.fromisoformat(normalized)
    except ValueError:
        return None, "receivedAt is not a valid calendar date"

    if parsed > LATEST_INTAKE_DATE:
        return None, f"receivedAt must be on or before {LATEST_INTAKE_DATE.isoformat()}"

    return parsed, ""


def validate_issues(value) -> Tuple[List[str], str]:
    """
    Validate the optional issues list
    Returns (cleaned_issues, error_message)
    """
    if value is None:
        return [], ""

    if isinstance(value, str):
        value = [value]

    if not isinstance(value, list):
        return [], "issues must be a list of strings"

    issues = []
    for item in value:
        if not isinstance(item, str):
            return [], "issues must be a list of strings"
        item = item.strip()
        if item:
            issues.append(item)

    return issues, ""
