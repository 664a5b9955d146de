"""
Entity accessors and one-call mutations for the WEEEK task manager API.

Each function performs exactly one remote call through the transport and
unwraps the response envelope:

* collection reads return ``data[<plural>]`` or [] when absent
* item reads/writes return ``data[<singular>]`` or the whole response
"""

from __future__ import annotations

import mimetypes
import os
from typing import Any

from weeek_cli._utils import drop_none, unwrap_item, unwrap_list, user_display_name
from weeek_cli.exceptions import CliError

# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------


async def list_projects(transport) -> list[dict[str, Any]]:
    return unwrap_list(await transport.request("GET", "tm/projects"), "projects")


async def get_project(transport, project_id):
    return unwrap_item(await transport.request("GET", f"tm/projects/{project_id}"), "project")


async def create_project(transport, data):
    return unwrap_item(await transport.request("POST", "tm/projects", data), "project")


async def update_project(transport, project_id, data):
    res = await transport.request("PUT", f"tm/projects/{project_id}", data)
    return unwrap_item(res, "project")


async def delete_project(transport, project_id):
    return await transport.request("DELETE", f"tm/projects/{project_id}")


async def archive_project(transport, project_id):
    return await transport.request("POST", f"tm/projects/{project_id}/archive")


async def unarchive_project(transport, project_id):
    return await transport.request("POST", f"tm/projects/{project_id}/un-archive")


# ---------------------------------------------------------------------------
# Boards
# ---------------------------------------------------------------------------


async def list_boards(transport, project_id) -> list[dict[str, Any]]:
    """Boards of one project."""
    res = await transport.request("GET", "tm/boards", None, {"projectId": project_id})
    return unwrap_list(res, "boards")


async def get_board(transport, board_id):
    return unwrap_item(await transport.request("GET", f"tm/boards/{board_id}"), "board")


async def create_board(transport, data):
    return unwrap_item(await transport.request("POST", "tm/boards", data), "board")


async def update_board(transport, board_id, data):
    return unwrap_item(await transport.request("PUT", f"tm/boards/{board_id}", data), "board")


async def delete_board(transport, board_id):
    return await transport.request("DELETE", f"tm/boards/{board_id}")


async def archive_board(transport, board_id):
    return await transport.request("POST", f"tm/boards/{board_id}/archive")


async def unarchive_board(transport, board_id):
    return await transport.request("POST", f"tm/boards/{board_id}/un-archive")


# ---------------------------------------------------------------------------
# Columns
# ---------------------------------------------------------------------------


async def list_columns(transport, board_id) -> list[dict[str, Any]]:
    res = await transport.request("GET", "tm/board-columns", None, {"boardId": board_id})
    return unwrap_list(res, "boardColumns")


async def get_column(transport, column_id):
    res = await transport.request("GET", f"tm/board-columns/{column_id}")
    return unwrap_item(res, "boardColumn")


async def create_column(transport, data):
    return unwrap_item(await transport.request("POST", "tm/board-columns", data), "boardColumn")


async def update_column(transport, column_id, data):
    res = await transport.request("PUT", f"tm/board-columns/{column_id}", data)
    return unwrap_item(res, "boardColumn")


async def delete_column(transport, column_id):
    return await transport.request("DELETE", f"tm/board-columns/{column_id}")


async def move_column(transport, column_id, position):
    """Move a column to a new position within its board."""
    return await transport.request(
        "POST", f"tm/board-columns/{column_id}/move", {"position": position}
    )


# ---------------------------------------------------------------------------
# Tasks
# ---------------------------------------------------------------------------


async def list_tasks(transport, **filters) -> list[dict[str, Any]]:
    """Tasks matching the given filters (boardId, projectId, completed, ...)."""
    res = await transport.request("GET", "tm/tasks", None, filters or None)
    return unwrap_list(res, "tasks")


async def get_task(transport, task_id):
    return unwrap_item(await transport.request("GET", f"tm/tasks/{task_id}"), "task")


def build_task_payload(data: dict[str, Any]) -> dict[str, Any]:
    """Task create payload: type defaults to 'action'; boards add a location."""
    payload = drop_none({"type": "action", **data})
    if payload.get("boardId"):
        payload["locations"] = [
            drop_none(
                {
                    "projectId": payload.get("projectId") or 0,
                    "boardId": payload["boardId"],
                    "boardColumnId": payload.get("boardColumnId"),
                }
            )
        ]
    return payload


async def create_task(transport, data):
    res = await transport.request("POST", "tm/tasks", build_task_payload(data))
    return unwrap_item(res, "task")


async def update_task(transport, task_id, data):
    return unwrap_item(await transport.request("PUT", f"tm/tasks/{task_id}", data), "task")


async def delete_task(transport, task_id):
    return await transport.request("DELETE", f"tm/tasks/{task_id}")


async def complete_task(transport, task_id):
    return await transport.request("POST", f"tm/tasks/{task_id}/complete")


async def uncomplete_task(transport, task_id):
    return await transport.request("POST", f"tm/tasks/{task_id}/un-complete")


async def move_task_to_board(transport, task_id, board_id):
    return await transport.request("POST", f"tm/tasks/{task_id}/board", {"boardId": board_id})


async def move_task(transport, task_id, board_column_id):
    """Move a task to a column by id."""
    return await transport.request(
        "POST", f"tm/tasks/{task_id}/board-column", {"boardColumnId": board_column_id}
    )


async def add_assignee(transport, task_id, user_id):
    return await transport.request("POST", f"tm/tasks/{task_id}/assignees", {"userId": user_id})


async def start_timer(transport, task_id):
    return await transport.request("POST", f"tm/tasks/{task_id}/start-timer")


async def stop_timer(transport, task_id):
    return await transport.request("POST", f"tm/tasks/{task_id}/stop-timer")


async def upload_attachment(transport, task_id, file_path):
    """Upload a local file to a task as multipart form data."""
    if not os.path.isfile(file_path):
        raise CliError(f"[ERROR] File not found: {file_path}")
    name = os.path.basename(file_path)
    mime = mimetypes.guess_type(name)[0] or "application/octet-stream"
    with open(file_path, "rb") as f:
        content = f.read()
    res = await transport.request(
        "POST", f"tm/tasks/{task_id}/attachments", files={"files": (name, content, mime)}
    )
    return unwrap_item(res, "attachments")


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


def normalize_member(member: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": member.get("id"),
        "name": user_display_name(member),
        "email": member.get("email") or "",
        "raw": member,
    }


async def list_users(transport) -> list[dict[str, Any]]:
    """Workspace members as {id, name, email, raw}."""
    members = unwrap_list(await transport.request("GET", "ws/members"), "members")
    return [normalize_member(m) for m in members]
