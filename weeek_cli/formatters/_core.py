"""Core output dispatchers."""

import json


def pretty_print(data):
    print(json.dumps(data, indent=2, ensure_ascii=False))


def output(data, formatter=None, fmt="json"):
    """Output data in requested format. Raw text responses print as-is."""
    if fmt == "table" and formatter:
        print(formatter(data))
    elif isinstance(data, str):
        print(data)
    else:
        pretty_print(data)


def mutation_response(action, task_id=None, details=None, data=None, fmt="json"):
    """Print a mutation confirmation."""
    parts = [action]
    if task_id is not None:
        parts.append(f"task #{task_id}")
    if details:
        parts.append(details)
    print(f"OK: {': '.join(parts)}")
    if fmt == "json" and data not in (None, {}, ""):
        if isinstance(data, dict) and set(data) <= {"success"}:
            return
        pretty_print(data)
