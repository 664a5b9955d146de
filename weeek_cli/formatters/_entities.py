"""Formatters for projects, boards, and users."""

from weeek_cli.formatters._table import _table, _trunc


def format_projects_table(projects):
    """Format projects as a readable table.

    Accepts list of dicts from WeeekClient.list_projects().
    """
    if not projects:
        return "No projects found."
    cols = [("Name", 36), ("Private", 8), ("ID", 0)]
    rows = [
        (
            _trunc(p.get("name", ""), 36),
            "yes" if p.get("isPrivate") else "no",
            str(p.get("id", "")),
        )
        for p in projects
    ]
    return _table(cols, rows, f"Total: {len(projects)} projects")


def format_boards_table(boards):
    """Format boards; the Project column is filled for aggregated listings."""
    if not boards:
        return "No boards found."
    cols = [("Name", 30), ("Project", 24), ("ID", 0)]
    rows = [
        (
            _trunc(b.get("name", ""), 30),
            _trunc(b.get("projectName") or str(b.get("projectId") or "-"), 24),
            str(b.get("id", "")),
        )
        for b in boards
    ]
    return _table(cols, rows, f"Total: {len(boards)} boards")


def format_users_table(users):
    """Format workspace users from WeeekClient.get_users()."""
    if not users:
        return "No users found."
    cols = [("Name", 28), ("Email", 32), ("ID", 0)]
    rows = [
        (_trunc(u.get("name", ""), 28), _trunc(u.get("email", ""), 32), str(u.get("id", "")))
        for u in users
    ]
    return _table(cols, rows, f"Total: {len(users)} users")
