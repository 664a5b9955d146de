"""
Shared pure-utility functions for weeek-cli.

These helpers have no business logic and no side effects.
They are used across client.py, commands.py and the formatters.
"""

import re

from weeek_cli.config import VALID_PRIORITIES
from weeek_cli.exceptions import CliError

_TAG_RE = re.compile(r"<[^>]*>?", re.MULTILINE)


def strip_html(html):
    """Drop tags and the common entities from a task description."""
    if not html:
        return ""
    text = _TAG_RE.sub("", html)
    return text.replace("&nbsp;", " ").replace("&quot;", '"').strip()


def unwrap_list(data, field):
    """Return ``data[field]`` as a list, or [] when the envelope lacks it."""
    if isinstance(data, dict):
        value = data.get(field)
        if isinstance(value, list):
            return value
    return []


def unwrap_item(data, field):
    """Return ``data[field]`` when present, else the whole response."""
    if isinstance(data, dict) and data.get(field) is not None:
        return data[field]
    return data


def drop_none(payload):
    """Copy of *payload* without keys whose value is None."""
    return {k: v for k, v in payload.items() if v is not None}


def parse_priority(value):
    """Parse a 0–3 priority from int or string. None means 0."""
    if value is None or value == "":
        return 0
    try:
        parsed = int(str(value).strip())
    except ValueError as e:
        raise CliError(
            f"[ERROR] Invalid priority '{value}'. Use a number from 0 (low) to 3 (hold)."
        ) from e
    if parsed not in VALID_PRIORITIES:
        raise CliError(
            f"[ERROR] Invalid priority '{value}'. Use a number from 0 (low) to 3 (hold)."
        )
    return parsed


def split_titles(raw):
    """Split a comma-separated subtask list, dropping empty entries."""
    if not raw:
        return []
    return [t.strip() for t in raw.split(",") if t.strip()]


def user_display_name(member):
    """First + last name, falling back to email."""
    parts = [member.get("firstName"), member.get("lastName")]
    name = " ".join(p for p in parts if p)
    return name or member.get("email") or ""
