"""Write tools: task creation, moves, assignment, timers, raw requests (8 tools)."""

from __future__ import annotations

from typing import Literal

from weeek_cli import CliError
from weeek_cli.client import raise_for_partial
from weeek_cli.exceptions import PartialFailure
from weeek_cli.mcp_server._core import _call, _contract_error, _finalize_tool_result
from weeek_cli.mcp_server._security import _validate_input
from weeek_cli.models import TaskCreationReport, TaskSpec


async def create_task(
    title: str,
    board: str | None = None,
    column: str | None = None,
    assignee: str | None = None,
    priority: int = 0,
    description: str | None = None,
    subtasks: list[str] | None = None,
) -> dict:
    """Create a task using names instead of ids.

    Args:
        title: Task title (max 500 chars).
        board: Board name, exact or partial. Must match exactly one board.
        column: Column name within the board (partial, first match).
            Defaults to the board's first column.
        assignee: User name or email, exact or partial.
        priority: 0 (low), 1 (medium), 2 (high), 3 (hold).
        description: Task description.
        subtasks: Subtask titles, created in order under the new task.

    Returns:
        Dict with ok, task, task_id, and per-subtask outcomes. When some
        subtasks fail, ok is False with type 'partial_failure' and a report.
    """
    try:
        title = _validate_input(title, "title")
        board, column, assignee = (
            _validate_input(v, "query") if v is not None else None
            for v in (board, column, assignee)
        )
        if description is not None:
            description = _validate_input(description, "description")
        subtasks = [_validate_input(s, "title") for s in subtasks or []]
        spec = TaskSpec.from_kwargs(
            title,
            board=board,
            column=column,
            assignee=assignee,
            priority=priority,
            description=description,
            subtasks=subtasks,
        )
    except CliError as e:
        return _finalize_tool_result(_contract_error(str(e), e.error_type))
    result = await _call("create_task_with_subtasks", spec=spec)
    if not isinstance(result, TaskCreationReport):
        return _finalize_tool_result(result)
    try:
        raise_for_partial(result)
    except PartialFailure as e:
        return _finalize_tool_result(
            _contract_error(str(e), e.error_type, report=result.to_dict())
        )
    return _finalize_tool_result(result.to_dict())


async def move_task(task_id: int, column: str) -> dict:
    """Move a task to a column of its current board (column name, partial)."""
    try:
        column = _validate_input(column, "query")
    except CliError as e:
        return _finalize_tool_result(_contract_error(str(e), e.error_type))
    return _finalize_tool_result(
        await _call("move_task_to_column", task_id=task_id, column_name=column)
    )


async def assign_user(task_id: int, user: str) -> dict:
    """Add a user (name or email, exact or partial) to a task's assignees."""
    try:
        user = _validate_input(user, "query")
    except CliError as e:
        return _finalize_tool_result(_contract_error(str(e), e.error_type))
    return _finalize_tool_result(await _call("assign_user", task_id=task_id, user_query=user))


async def start_timer(task_id: int) -> dict:
    """Start the time tracker on a task."""
    return _finalize_tool_result(await _call("start_timer", task_id=task_id))


async def stop_timer(task_id: int) -> dict:
    """Stop the time tracker on a task."""
    return _finalize_tool_result(await _call("stop_timer", task_id=task_id))


async def complete_task(task_id: int) -> dict:
    """Mark a task as completed."""
    return _finalize_tool_result(await _call("complete_task", task_id=task_id))


async def uncomplete_task(task_id: int) -> dict:
    """Reopen a completed task."""
    return _finalize_tool_result(await _call("uncomplete_task", task_id=task_id))


async def raw_request(
    method: Literal["GET", "POST", "PUT", "DELETE"],
    path: str,
    body: dict | None = None,
    params: dict[str, str] | None = None,
) -> dict:
    """Raw API passthrough, e.g. method='GET', path='tm/tasks', params={'boardId': '1'}."""
    return _finalize_tool_result(
        await _call("request", method=method, path=path, body=body, params=params)
    )


def register(mcp):
    """Register all write tools with the FastMCP instance."""
    mcp.tool()(create_task)
    mcp.tool()(move_task)
    mcp.tool()(assign_user)
    mcp.tool()(start_timer)
    mcp.tool()(stop_timer)
    mcp.tool()(complete_task)
    mcp.tool()(uncomplete_task)
    mcp.tool()(raw_request)
