"""
WeeekClient: public Python API for the WEEEK task manager.

Resolves human-friendly names (boards, columns, users) to ids, aggregates
data across several API calls, and orchestrates multi-step task creation.
All methods are coroutines and return plain dicts suitable for JSON
serialization. Raises CliError subclasses on failure.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import Any

from weeek_cli import entities
from weeek_cli.api import WeeekTransport
from weeek_cli.config import ClientConfig
from weeek_cli.exceptions import CliError, NotFoundError, PartialFailure
from weeek_cli.models import SubtaskOutcome, TaskCreationReport, TaskSpec
from weeek_cli.resolver import first_substring_match, require_single, resolve

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _or_empty(branch: Awaitable[list[dict[str, Any]]]) -> list[dict[str, Any]]:
    """Await one fan-out branch; a failed branch contributes nothing."""
    try:
        return await branch
    except CliError:
        return []


async def _gather_tolerant(branches):
    """Run branches concurrently; results keep dispatch order."""
    results = await asyncio.gather(*(_or_empty(b) for b in branches))
    return list(results)


def _assignee_list(user_id):
    return [user_id] if user_id else []


def raise_for_partial(report: TaskCreationReport) -> None:
    """Raise PartialFailure when any subtask of *report* failed."""
    if report.ok:
        return
    task_id = report.task.get("id") if isinstance(report.task, dict) else None
    failed = ", ".join(f'"{s.title}" ({s.error})' for s in report.failed)
    created = ", ".join(f'"{t}"' for t in report.succeeded) or "none"
    raise PartialFailure(
        f"[ERROR] Task #{task_id} was created, but {len(report.failed)} of "
        f"{len(report.subtasks)} subtasks failed: {failed}. Created subtasks: {created}.",
        report,
    )


# ---------------------------------------------------------------------------
# WeeekClient
# ---------------------------------------------------------------------------


class WeeekClient:
    """Public API surface for the WEEEK task manager.

    Use as an async context manager so the underlying HTTP pool is closed.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        transport=None,
        http_client=None,
    ):
        """Initialize the client.

        Args:
            config: Explicit configuration. Defaults to ClientConfig.from_env().
            transport: Object with an async ``request(method, path, body,
                params)`` method. Defaults to a WeeekTransport; mainly
                injected by tests.
            http_client: Optional shared httpx.AsyncClient for the default
                transport.

        Raises:
            ConfigurationError: no API key and no transport given.
        """
        self.config = config or ClientConfig.from_env()
        if transport is None:
            transport = WeeekTransport(self.config, http_client=http_client)
        self.transport = transport

    async def aclose(self):
        close = getattr(self.transport, "aclose", None)
        if close is not None:
            await close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.aclose()

    # -------------------------------------------------------------------
    # Raw passthrough
    # -------------------------------------------------------------------

    async def request(self, method: str, path: str, body=None, params=None) -> Any:
        """Issue a raw request against the API and return the parsed result."""
        return await self.transport.request(method, path, body, params)

    # -------------------------------------------------------------------
    # Projects
    # -------------------------------------------------------------------

    async def list_projects(self) -> list[dict[str, Any]]:
        return await entities.list_projects(self.transport)

    async def get_project(self, project_id) -> dict[str, Any]:
        return await entities.get_project(self.transport, project_id)

    async def create_project(self, data: dict) -> dict[str, Any]:
        return await entities.create_project(self.transport, data)

    async def update_project(self, project_id, data: dict) -> dict[str, Any]:
        return await entities.update_project(self.transport, project_id, data)

    async def delete_project(self, project_id):
        return await entities.delete_project(self.transport, project_id)

    async def archive_project(self, project_id):
        return await entities.archive_project(self.transport, project_id)

    async def unarchive_project(self, project_id):
        return await entities.unarchive_project(self.transport, project_id)

    # -------------------------------------------------------------------
    # Boards
    # -------------------------------------------------------------------

    async def _project_boards(self, project: dict[str, Any]) -> list[dict[str, Any]]:
        boards = await entities.list_boards(self.transport, project.get("id"))
        return [{**b, "projectName": project.get("name")} for b in boards if isinstance(b, dict)]

    async def get_boards(self, project_id=None) -> list[dict[str, Any]]:
        """List boards of one project, or of every project when omitted.

        Without a project id, boards are fetched for all projects
        concurrently. A project whose request fails contributes no boards.
        Each board then carries its project's name as ``projectName``.
        """
        if project_id is not None:
            return await entities.list_boards(self.transport, project_id)
        projects = await entities.list_projects(self.transport)
        per_project = await _gather_tolerant(
            self._project_boards(p) for p in projects if isinstance(p, dict)
        )
        return [board for boards in per_project for board in boards]

    async def find_board(self, query: str) -> list[dict[str, Any]]:
        """Boards matching *query* across all projects (exact-then-substring)."""
        return resolve(query, await self.get_boards())

    async def get_board_with_context(self, board_name: str) -> dict[str, Any]:
        """Resolve a board by name and join its columns and tasks.

        Returns:
            dict with the board fields plus 'columns' and 'tasks'.

        Raises:
            NotFoundError / AmbiguousError before any column/task fetch.
        """
        board = require_single(await self.find_board(board_name), board_name, kind="board")
        columns, tasks = await asyncio.gather(
            entities.list_columns(self.transport, board["id"]),
            entities.list_tasks(self.transport, boardId=board["id"]),
        )
        return {**board, "columns": columns, "tasks": tasks}

    async def get_board(self, board_id) -> dict[str, Any]:
        return await entities.get_board(self.transport, board_id)

    async def create_board(self, data: dict) -> dict[str, Any]:
        return await entities.create_board(self.transport, data)

    async def update_board(self, board_id, data: dict) -> dict[str, Any]:
        return await entities.update_board(self.transport, board_id, data)

    async def delete_board(self, board_id):
        return await entities.delete_board(self.transport, board_id)

    async def archive_board(self, board_id):
        return await entities.archive_board(self.transport, board_id)

    async def unarchive_board(self, board_id):
        return await entities.unarchive_board(self.transport, board_id)

    # -------------------------------------------------------------------
    # Columns
    # -------------------------------------------------------------------

    async def get_columns(self, board_id) -> list[dict[str, Any]]:
        return await entities.list_columns(self.transport, board_id)

    async def find_column(self, board_id, query: str) -> dict[str, Any] | None:
        """First column of *board_id* whose name contains *query*."""
        return first_substring_match(query, await entities.list_columns(self.transport, board_id))

    async def get_column(self, column_id) -> dict[str, Any]:
        return await entities.get_column(self.transport, column_id)

    async def create_column(self, data: dict) -> dict[str, Any]:
        return await entities.create_column(self.transport, data)

    async def update_column(self, column_id, data: dict) -> dict[str, Any]:
        return await entities.update_column(self.transport, column_id, data)

    async def delete_column(self, column_id):
        return await entities.delete_column(self.transport, column_id)

    async def move_column(self, column_id, position: int):
        return await entities.move_column(self.transport, column_id, position)

    # -------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------

    async def get_users(self) -> list[dict[str, Any]]:
        return await entities.list_users(self.transport)

    async def find_user(self, query: str) -> list[dict[str, Any]]:
        """Users whose name or email matches *query* (exact-then-substring)."""
        return resolve(query, await self.get_users(), keys=("name", "email"))

    async def resolve_user(self, query: str) -> dict[str, Any]:
        return require_single(await self.find_user(query), query, kind="user")

    # -------------------------------------------------------------------
    # Tasks
    # -------------------------------------------------------------------

    async def get_tasks(self, **filters) -> list[dict[str, Any]]:
        return await entities.list_tasks(self.transport, **filters)

    async def get_task(self, task_id) -> dict[str, Any]:
        return await entities.get_task(self.transport, task_id)

    async def create_task(self, data: dict) -> dict[str, Any]:
        return await entities.create_task(self.transport, data)

    async def update_task(self, task_id, data: dict) -> dict[str, Any]:
        return await entities.update_task(self.transport, task_id, data)

    async def delete_task(self, task_id):
        return await entities.delete_task(self.transport, task_id)

    async def complete_task(self, task_id):
        return await entities.complete_task(self.transport, task_id)

    async def uncomplete_task(self, task_id):
        return await entities.uncomplete_task(self.transport, task_id)

    async def move_task_to_board(self, task_id, board_id):
        return await entities.move_task_to_board(self.transport, task_id, board_id)

    async def move_task(self, task_id, board_column_id):
        return await entities.move_task(self.transport, task_id, board_column_id)

    async def start_timer(self, task_id):
        return await entities.start_timer(self.transport, task_id)

    async def stop_timer(self, task_id):
        return await entities.stop_timer(self.transport, task_id)

    async def upload_attachment(self, task_id, file_path: str):
        return await entities.upload_attachment(self.transport, task_id, file_path)

    async def create_task_with_subtasks(self, spec: TaskSpec) -> TaskCreationReport:
        """Resolve names, create the task, then its subtasks one by one.

        Every lookup happens before the first write: a bad board, column
        or assignee aborts with no task created. Subtask failures are
        recorded in the report and do not stop the remaining subtasks.
        """
        board_id = column_id = project_id = user_id = None

        if spec.board:
            board = await self.get_board_with_context(spec.board)
            board_id = board["id"]
            project_id = board.get("projectId")
            columns = board.get("columns") or []
            if spec.column:
                column = first_substring_match(spec.column, columns)
                if column is None:
                    raise NotFoundError(
                        f'[ERROR] Column "{spec.column}" not found on board "{spec.board}".',
                        spec.column,
                    )
                column_id = column["id"]
            elif columns:
                column_id = columns[0]["id"]

        if spec.assignee:
            user_id = (await self.resolve_user(spec.assignee))["id"]

        task = await entities.create_task(
            self.transport,
            {
                "title": spec.title,
                "description": spec.description,
                "priority": spec.priority,
                "projectId": project_id,
                "boardId": board_id,
                "boardColumnId": column_id,
                "assignees": _assignee_list(user_id),
            },
        )

        outcomes: list[SubtaskOutcome] = []
        parent_id = task.get("id") if isinstance(task, dict) else None
        if parent_id is None:
            # Subtasks are only created under a known parentId.
            outcomes = [
                SubtaskOutcome(title=t, ok=False, error="primary task id missing from response")
                for t in spec.subtasks
            ]
            return TaskCreationReport(task=task, subtasks=outcomes)
        for title in spec.subtasks:
            try:
                sub = await entities.create_task(
                    self.transport,
                    {
                        "title": title,
                        "parentId": parent_id,
                        "projectId": project_id,
                        "boardId": board_id,
                        "boardColumnId": column_id,
                        "assignees": _assignee_list(user_id),
                    },
                )
            except CliError as e:
                outcomes.append(SubtaskOutcome(title=title, ok=False, error=str(e)))
                continue
            sub_id = sub.get("id") if isinstance(sub, dict) else None
            outcomes.append(SubtaskOutcome(title=title, ok=True, id=sub_id))

        return TaskCreationReport(task=task, subtasks=outcomes)

    async def create_task_detailed(
        self,
        title: str,
        *,
        board: str | None = None,
        column: str | None = None,
        assignee: str | None = None,
        priority: int | str | None = None,
        description: str | None = None,
        subtasks: list[str] | str | None = None,
    ) -> dict[str, Any]:
        """Create a task from names instead of ids.

        Args:
            title: Task title.
            board: Board name (exact or partial, across all projects).
            column: Column name within the board; defaults to the first column.
            assignee: User name or email (exact or partial).
            priority: 0 (low) to 3 (hold); default 0.
            description: Task description.
            subtasks: Subtask titles, list or comma-separated string.

        Returns:
            The created primary task.

        Raises:
            NotFoundError / AmbiguousError: a name did not resolve; nothing
                was created.
            PartialFailure: the task exists but some subtasks failed; the
                exception's ``report`` lists every outcome.
        """
        spec = TaskSpec.from_kwargs(
            title,
            board=board,
            column=column,
            assignee=assignee,
            priority=priority,
            description=description,
            subtasks=subtasks,
        )
        report = await self.create_task_with_subtasks(spec)
        raise_for_partial(report)
        return report.task

    async def move_task_to_column(self, task_id, column_name: str) -> dict[str, Any]:
        """Move a task to a column of its current board, by column name."""
        task = await entities.get_task(self.transport, task_id)
        if not isinstance(task, dict) or not task:
            raise NotFoundError(f"[ERROR] Task #{task_id} not found.", str(task_id))
        board_id = task.get("boardId")
        if not board_id:
            raise CliError(f"[ERROR] Task #{task_id} is not assigned to a board.")
        column = first_substring_match(
            column_name, await entities.list_columns(self.transport, board_id)
        )
        if column is None:
            raise NotFoundError(
                f'[ERROR] Column "{column_name}" not found on board {board_id}.', column_name
            )
        data = await entities.move_task(self.transport, task_id, column["id"])
        return {
            "ok": True,
            "task_id": task_id,
            "column_id": column["id"],
            "column_name": column.get("name"),
            "data": data,
        }

    async def assign_user(self, task_id, user_query: str) -> dict[str, Any]:
        """Add the user matching *user_query* to a task's assignees."""
        user = await self.resolve_user(user_query)
        data = await entities.add_assignee(self.transport, task_id, user["id"])
        return {
            "ok": True,
            "task_id": task_id,
            "user_id": user["id"],
            "user_name": user.get("name"),
            "data": data,
        }
