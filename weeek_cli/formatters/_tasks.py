"""Formatters for boards with context, task details, and task creation."""

from weeek_cli._utils import strip_html
from weeek_cli.config import PRIORITY_LABELS
from weeek_cli.formatters._table import _sanitize_str


def _task_line(task):
    priority = task.get("priority")
    pri = f" [P{priority}]" if priority else ""
    done = " (done)" if task.get("isCompleted") else ""
    return f"  • #{task.get('id')} {_sanitize_str(task.get('title', ''))}{pri}{done}"


def format_board_view(board):
    """Render a board from get_board_with_context() grouped by column."""
    lines = [
        f"Board: {_sanitize_str(board.get('name', ''))} (ID: {board.get('id')})",
        f"Project: {board.get('projectName') or 'N/A'}",
        "",
        "Columns & Tasks:",
    ]
    columns = board.get("columns") or []
    tasks = board.get("tasks") or []
    column_ids = {c.get("id") for c in columns}
    for col in columns:
        col_tasks = [t for t in tasks if t.get("boardColumnId") == col.get("id")]
        lines.append("")
        lines.append(
            f"[{str(col.get('name', '')).upper()}] (ID: {col.get('id')}) - {len(col_tasks)} tasks"
        )
        if not col_tasks:
            lines.append("  (empty)")
        for t in col_tasks:
            lines.append(_task_line(t))
    loose = [t for t in tasks if t.get("boardColumnId") not in column_ids]
    if loose:
        lines.append("")
        lines.append(f"[NO COLUMN] - {len(loose)} tasks")
        for t in loose:
            lines.append(_task_line(t))
    return "\n".join(lines)


def format_task_detail(task):
    """Render a single task from get_task()."""
    lines = [f"[#{task.get('id')}] {_sanitize_str(task.get('title', ''))}"]
    priority = task.get("priority")
    if priority is not None:
        lines.append(f"Priority: {PRIORITY_LABELS.get(priority, priority)}")
    lines.append(f"Status: {'Completed' if task.get('isCompleted') else 'Open'}")
    assignees = task.get("assignees") or []
    if assignees:
        lines.append(f"Assignees: {', '.join(str(a) for a in assignees)}")
    if task.get("boardId"):
        lines.append(
            f"Board ID: {task.get('boardId')} | Column ID: {task.get('boardColumnId') or 'None'}"
        )

    lines.append("")
    lines.append("Description:")
    lines.append(_sanitize_str(strip_html(task.get("description"))) or "(No description)")

    subtasks = task.get("subTasks") or []
    if subtasks:
        lines.append("")
        lines.append("Subtasks:")
        for st in subtasks:
            if isinstance(st, dict):
                mark = "[x]" if st.get("isCompleted") else "[ ]"
                lines.append(f"  {mark} {_sanitize_str(st.get('title', ''))}")
            else:
                lines.append(f"  [ ] ID: {st}")

    attachments = task.get("attachments") or []
    if attachments:
        lines.append("")
        lines.append("Attachments:")
        for a in attachments:
            size = a.get("size")
            size_str = f" ({size} bytes)" if size is not None else ""
            lines.append(f"  - {_sanitize_str(a.get('name', '?'))}{size_str} {a.get('url', '')}")
    return "\n".join(lines)


def format_creation_report(report):
    """Render a TaskCreationReport dict."""
    task = report.get("task") or {}
    lines = [f"Task created successfully! ID: {task.get('id')}"]
    if task.get("boardId"):
        lines.append(
            f"Board ID: {task.get('boardId')} | Column ID: {task.get('boardColumnId') or 'None'}"
        )
    subtasks = report.get("subtasks") or []
    if subtasks:
        lines.append("Subtasks:")
        for st in subtasks:
            if st.get("ok"):
                lines.append(f"  + #{st.get('id')} {st.get('title')}")
            else:
                lines.append(f"  ! {st.get('title')}: {st.get('error')}")
    return "\n".join(lines)
