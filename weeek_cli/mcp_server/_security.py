"""Security: injection detection, output tagging, input validation."""

from __future__ import annotations

import re

from weeek_cli import CliError

_INJECTION_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (
        re.compile(r"^(system|assistant|user)\s*:", re.IGNORECASE | re.MULTILINE),
        "role label",
    ),
    (
        re.compile(
            r"<\s*/?\s*(system|instruction|admin|prompt|tool_call|function_call)",
            re.IGNORECASE,
        ),
        "XML-like directive tag",
    ),
    (
        re.compile(
            r"ignore\s+(all\s+)?(previous|prior|above)\s+(instructions|prompts|rules)",
            re.IGNORECASE,
        ),
        "override directive",
    ),
]


def _check_injection(text: str) -> list[str]:
    """Check text for common prompt injection patterns.

    Returns list of matched pattern descriptions (empty if clean).
    Short strings (< 10 chars) are skipped.
    """
    if len(text) < 10:
        return []
    return [desc for pattern, desc in _INJECTION_PATTERNS if pattern.search(text)]


def _tag_user_text(text: str | None) -> str | None:
    """Wrap user-authored text in [USER_DATA] boundary markers."""
    if text is None:
        return None
    return f"[USER_DATA]{text}[/USER_DATA]"


_USER_TEXT_FIELDS = {"title", "description", "name"}


def _sanitize_task(task: dict) -> dict:
    """Tag user-editable fields and add _safety_warnings if injection detected."""
    out = dict(task)
    warnings: list[str] = []
    for field in _USER_TEXT_FIELDS:
        if field in out and isinstance(out[field], str):
            for desc in _check_injection(out[field]):
                warnings.append(f"{field}: {desc}")
            out[field] = _tag_user_text(out[field])
    if isinstance(out.get("subTasks"), list):
        subs = []
        for st in out["subTasks"]:
            if isinstance(st, dict) and isinstance(st.get("title"), str):
                st = dict(st)
                for desc in _check_injection(st["title"]):
                    warnings.append(f"subTasks.title: {desc}")
                st["title"] = _tag_user_text(st["title"])
            subs.append(st)
        out["subTasks"] = subs
    if warnings:
        out["_safety_warnings"] = warnings
    return out


_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")
_INPUT_LIMITS = {
    "title": 500,
    "description": 50_000,
    "query": 200,
}


def _validate_input(text: str, field: str) -> str:
    """Strip control characters and enforce length limits.

    Raises CliError if text is not a string or exceeds the field limit.
    """
    if not isinstance(text, str):
        raise CliError(f"[ERROR] {field} must be a string")
    cleaned = _CONTROL_RE.sub("", text)
    limit = _INPUT_LIMITS.get(field, 50_000)
    if len(cleaned) > limit:
        raise CliError(f"[ERROR] {field} exceeds maximum length of {limit} characters")
    return cleaned
