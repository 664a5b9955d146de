"""
Typed models for the task-creation workflow.
"""

from dataclasses import dataclass, field

from weeek_cli._utils import parse_priority, split_titles
from weeek_cli.exceptions import CliError
from weeek_cli.types import SubtaskResult, TaskCreationResult


@dataclass(frozen=True)
class TaskSpec:
    """Validated input contract for `create`."""

    title: str
    board: str | None = None
    column: str | None = None
    assignee: str | None = None
    priority: int = 0
    description: str = ""
    subtasks: tuple[str, ...] = ()

    @classmethod
    def from_kwargs(
        cls,
        title,
        *,
        board=None,
        column=None,
        assignee=None,
        priority=None,
        description=None,
        subtasks=None,
    ):
        """Create a TaskSpec from keyword arguments (programmatic API / MCP)."""
        title = (title or "").strip()
        if not title:
            raise CliError("[ERROR] Task title cannot be empty.")
        if isinstance(subtasks, str):
            subtask_titles = split_titles(subtasks)
        else:
            subtask_titles = [t.strip() for t in subtasks or [] if t and t.strip()]
        return cls(
            title=title,
            board=board or None,
            column=column or None,
            assignee=assignee or None,
            priority=parse_priority(priority),
            description=description or "",
            subtasks=tuple(subtask_titles),
        )

    @classmethod
    def from_namespace(cls, ns):
        return cls.from_kwargs(
            ns.title,
            board=ns.board,
            column=ns.column,
            assignee=ns.assignee,
            priority=ns.priority,
            description=ns.description,
            subtasks=ns.subtasks,
        )


@dataclass(frozen=True)
class SubtaskOutcome:
    """Result of one subtask creation attempt."""

    title: str
    ok: bool
    id: str | int | None = None
    error: str | None = None

    def to_dict(self) -> SubtaskResult:
        out = {"title": self.title, "ok": self.ok}
        if self.id is not None:
            out["id"] = self.id
        if self.error is not None:
            out["error"] = self.error
        return out


@dataclass(frozen=True)
class TaskCreationReport:
    """Primary task plus per-subtask outcomes of a detailed creation."""

    task: dict
    subtasks: list[SubtaskOutcome] = field(default_factory=list)

    @property
    def succeeded(self) -> list[str]:
        return [s.title for s in self.subtasks if s.ok]

    @property
    def failed(self) -> list[SubtaskOutcome]:
        return [s for s in self.subtasks if not s.ok]

    @property
    def ok(self) -> bool:
        return not self.failed

    def to_dict(self) -> TaskCreationResult:
        return {
            "ok": self.ok,
            "task": self.task,
            "task_id": self.task.get("id") if isinstance(self.task, dict) else None,
            "subtasks": [s.to_dict() for s in self.subtasks],
        }
