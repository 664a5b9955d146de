"""Typed response definitions for WeeekClient methods.

These TypedDicts document the shape of dicts returned by public API methods.
They are optional; runtime behavior is unchanged (plain dicts).
"""

from __future__ import annotations

from typing import Any, TypedDict

# ---------------------------------------------------------------------------
# Entity types
# ---------------------------------------------------------------------------


class Project(TypedDict, total=False):
    id: int
    name: str
    isPrivate: bool
    description: str | None


class Board(TypedDict, total=False):
    id: int
    name: str
    isPrivate: bool
    projectId: int
    projectName: str


class Column(TypedDict, total=False):
    id: int
    name: str
    boardId: int
    position: int


class Attachment(TypedDict, total=False):
    id: str
    creatorId: str
    service: str
    name: str
    url: str
    size: int
    createdAt: str


class Task(TypedDict, total=False):
    id: int
    title: str
    description: str | None
    priority: int | None
    isCompleted: bool
    boardId: int | None
    boardColumnId: int | None
    projectId: int | None
    assignees: list[str]
    parentId: int | None
    subTasks: list[Any]
    attachments: list[Attachment]


class User(TypedDict):
    id: str
    name: str
    email: str
    raw: dict


# ---------------------------------------------------------------------------
# Aggregates
# ---------------------------------------------------------------------------


class BoardContext(Board, total=False):
    """Return type of WeeekClient.get_board_with_context()."""

    columns: list[Column]
    tasks: list[Task]


class SubtaskResult(TypedDict, total=False):
    title: str
    ok: bool
    id: int
    error: str


class TaskCreationResult(TypedDict):
    ok: bool
    task: Task
    task_id: int | None
    subtasks: list[SubtaskResult]
