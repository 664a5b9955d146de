"""
Command implementations for weeek-cli.
Each cmd_*() function receives an argparse.Namespace and handles one CLI command.

Business logic lives in client.py (WeeekClient). These thin wrappers
handle argparse → keyword args, the event loop, and formatter dispatch.
"""

import asyncio
import json
import sys
import urllib.parse

from weeek_cli import apispec
from weeek_cli.client import WeeekClient, raise_for_partial
from weeek_cli.formatters import (
    format_board_view,
    format_boards_table,
    format_creation_report,
    format_endpoint_detail,
    format_endpoints,
    format_projects_table,
    format_tags,
    format_task_detail,
    format_users_table,
    mutation_response,
    output,
)
from weeek_cli.models import TaskSpec

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _progress(ns, message):
    """Status line on stderr, silenced by --quiet."""
    if not getattr(ns, "quiet", False):
        print(message, file=sys.stderr)


def _run(ns, action):
    """Run ``action(client)`` on a fresh client inside one event loop."""

    async def _main():
        async with WeeekClient(ns.config) as client:
            return await action(client)

    return asyncio.run(_main())


def _parse_body(raw):
    """JSON body for `run`; anything that is not JSON is sent as a string."""
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def _parse_params(raw):
    if not raw:
        return None
    return dict(urllib.parse.parse_qsl(raw, keep_blank_values=True))


# ---------------------------------------------------------------------------
# Read commands
# ---------------------------------------------------------------------------


def cmd_projects(ns):
    output(_run(ns, lambda c: c.list_projects()), format_projects_table, ns.format)


def cmd_boards(ns):
    if ns.project_id is not None:
        _progress(ns, f"Fetching boards for project {ns.project_id}...")
    else:
        _progress(ns, "Fetching all boards...")
    boards = _run(ns, lambda c: c.get_boards(ns.project_id))
    output(boards, format_boards_table, ns.format)


def cmd_board(ns):
    _progress(ns, f'Fetching board "{ns.name}"...')
    board = _run(ns, lambda c: c.get_board_with_context(ns.name))
    output(board, format_board_view, ns.format)


def cmd_show(ns):
    _progress(ns, f"Fetching task #{ns.task_id}...")
    output(_run(ns, lambda c: c.get_task(ns.task_id)), format_task_detail, ns.format)


def cmd_users(ns):
    output(_run(ns, lambda c: c.get_users()), format_users_table, ns.format)


def cmd_run(ns):
    body = _parse_body(ns.data)
    params = _parse_params(ns.params)
    _progress(ns, f"Executing {ns.method.upper()} {ns.path}...")
    output(_run(ns, lambda c: c.request(ns.method, ns.path, body, params)), fmt=ns.format)


# ---------------------------------------------------------------------------
# Mutation commands
# ---------------------------------------------------------------------------


def cmd_create(ns):
    spec = TaskSpec.from_namespace(ns)
    _progress(ns, "Creating task...")
    report = _run(ns, lambda c: c.create_task_with_subtasks(spec))
    output(report.to_dict(), format_creation_report, ns.format)
    raise_for_partial(report)


def cmd_move(ns):
    _progress(ns, f'Moving task #{ns.task_id} to "{ns.column}"...')
    result = _run(ns, lambda c: c.move_task_to_column(ns.task_id, ns.column))
    mutation_response(
        "Moved", ns.task_id, f"column {result['column_name']}", result["data"], ns.format
    )


def cmd_assign(ns):
    result = _run(ns, lambda c: c.assign_user(ns.task_id, ns.user))
    mutation_response("Assigned", ns.task_id, result["user_name"], result["data"], ns.format)


def cmd_timer(ns):
    if ns.action == "start":
        data = _run(ns, lambda c: c.start_timer(ns.task_id))
        mutation_response("Timer started", ns.task_id, data=data, fmt=ns.format)
    else:
        data = _run(ns, lambda c: c.stop_timer(ns.task_id))
        mutation_response("Timer stopped", ns.task_id, data=data, fmt=ns.format)


def cmd_complete(ns):
    data = _run(ns, lambda c: c.complete_task(ns.task_id))
    mutation_response("Completed", ns.task_id, data=data, fmt=ns.format)


def cmd_uncomplete(ns):
    data = _run(ns, lambda c: c.uncomplete_task(ns.task_id))
    mutation_response("Reopened", ns.task_id, data=data, fmt=ns.format)


def cmd_attach(ns):
    _progress(ns, f"Uploading {ns.file} to task #{ns.task_id}...")
    data = _run(ns, lambda c: c.upload_attachment(ns.task_id, ns.file))
    mutation_response("Attached", ns.task_id, ns.file, data, ns.format)


# ---------------------------------------------------------------------------
# API spec explorer (local file, no token needed)
# ---------------------------------------------------------------------------


def cmd_tags(ns):
    spec = apispec.load_spec(ns.config.spec_path)
    output(apispec.list_tags(spec), format_tags, ns.format)


def cmd_endpoints(ns):
    spec = apispec.load_spec(ns.config.spec_path)
    output(apispec.list_endpoints(spec, ns.tag), format_endpoints, ns.format)


def cmd_describe(ns):
    spec = apispec.load_spec(ns.config.spec_path)
    output(apispec.describe_endpoint(spec, ns.method, ns.path), format_endpoint_detail, ns.format)
