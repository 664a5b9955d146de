"""Output formatting package for weeek-cli.

Re-exports all public names so consumers can do:
    from weeek_cli.formatters import format_board_view
"""

from weeek_cli.formatters._apispec import (
    format_endpoint_detail,
    format_endpoints,
    format_tags,
)
from weeek_cli.formatters._core import (
    mutation_response,
    output,
    pretty_print,
)
from weeek_cli.formatters._entities import (
    format_boards_table,
    format_projects_table,
    format_users_table,
)
from weeek_cli.formatters._table import (
    _CONTROL_RE,
    _sanitize_str,
    _table,
    _trunc,
)
from weeek_cli.formatters._tasks import (
    format_board_view,
    format_creation_report,
    format_task_detail,
)

__all__ = [
    "_CONTROL_RE",
    "_sanitize_str",
    "_table",
    "_trunc",
    "format_board_view",
    "format_boards_table",
    "format_creation_report",
    "format_endpoint_detail",
    "format_endpoints",
    "format_projects_table",
    "format_tags",
    "format_task_detail",
    "format_users_table",
    "mutation_response",
    "output",
    "pretty_print",
]
