"""Read tools: projects, boards, tasks, users (5 tools)."""

from __future__ import annotations

from weeek_cli import CliError
from weeek_cli.mcp_server._core import _call, _contract_error, _finalize_tool_result
from weeek_cli.mcp_server._security import _sanitize_task, _validate_input


def _is_error(result) -> bool:
    return isinstance(result, dict) and result.get("ok") is False


async def list_projects() -> dict:
    """List all projects (id, name, isPrivate, description)."""
    result = await _call("list_projects")
    if _is_error(result):
        return _finalize_tool_result(result)
    return _finalize_tool_result({"projects": result})


async def list_boards(project_id: int | None = None) -> dict:
    """List boards of one project, or of all projects when project_id is omitted.

    Boards from the all-projects listing carry projectName. Projects whose
    board request fails are skipped.
    """
    result = await _call("get_boards", project_id=project_id)
    if _is_error(result):
        return _finalize_tool_result(result)
    return _finalize_tool_result({"boards": result})


async def get_board(name: str) -> dict:
    """Get a board by name (exact or partial) with its columns and tasks.

    Fails with type 'ambiguous' listing candidates when several boards match.
    """
    try:
        name = _validate_input(name, "query")
    except CliError as e:
        return _finalize_tool_result(_contract_error(str(e), e.error_type))
    result = await _call("get_board_with_context", board_name=name)
    if _is_error(result):
        return _finalize_tool_result(result)
    out = dict(result)
    out["tasks"] = [_sanitize_task(t) for t in out.get("tasks") or []]
    return _finalize_tool_result(out)


async def get_task(task_id: int) -> dict:
    """Get full task details including subtasks and attachments."""
    result = await _call("get_task", task_id=task_id)
    if _is_error(result) or not isinstance(result, dict):
        return _finalize_tool_result(result)
    return _finalize_tool_result(_sanitize_task(result))


async def list_users() -> dict:
    """List workspace members (id, name, email)."""
    result = await _call("get_users")
    if _is_error(result):
        return _finalize_tool_result(result)
    users = [{k: u.get(k) for k in ("id", "name", "email")} for u in result]
    return _finalize_tool_result({"users": users})


def register(mcp):
    """Register all read tools with the FastMCP instance."""
    mcp.tool()(list_projects)
    mcp.tool()(list_boards)
    mcp.tool()(get_board)
    mcp.tool()(get_task)
    mcp.tool()(list_users)
