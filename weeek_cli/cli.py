"""
weeek-cli: CLI tool for the WEEEK task manager: boards, tasks, and users by name
"""

import argparse
import json
import sys

from weeek_cli import config
from weeek_cli.api import describe_transport_error
from weeek_cli.commands import (
    cmd_assign,
    cmd_attach,
    cmd_board,
    cmd_boards,
    cmd_complete,
    cmd_create,
    cmd_describe,
    cmd_endpoints,
    cmd_move,
    cmd_projects,
    cmd_run,
    cmd_show,
    cmd_tags,
    cmd_timer,
    cmd_uncomplete,
    cmd_users,
)
from weeek_cli.exceptions import CliError, ConfigurationError, PartialFailure, TransportError

HELP_TEXT = """\
Usage: weeek-cli <command> [args...]

Global flags:
  --format table          Output as readable text instead of JSON (default: json)
  --quiet, -q             Suppress progress messages
  --verbose, -v           Enable HTTP request logging
  --version               Show version number

Commands:
  projects                - List all projects
  boards [project_id]     - List boards (all projects when no id is given)
  board <name>            - View board columns and tasks (partial name allowed)
  show <task_id>          - Show task details
  create <title>          - Create a task
    -b, --board <name>      Board name (partial match allowed)
    -c, --col <name>        Column name (default: first column of the board)
    -u, --assignee <name>   Assignee name or email (partial match allowed)
    -p, --prio <n>          Priority 0-3 (default: 0)
    -d, --desc <text>       Description
    -s, --subtasks <list>   Comma-separated subtask titles
  move <task_id> <column> - Move a task to another column of its board
  users                   - List workspace users
  assign <task_id> <user> - Assign a user to a task (name or email, partial)
  timer start|stop <id>   - Start or stop the time tracker of a task
  complete <task_id>      - Mark a task as completed
  uncomplete <task_id>    - Reopen a completed task
  attach <task_id> <file> - Upload a file to a task
  run <method> <path>     - Execute a raw API request
    -d, --data <json>       JSON request body
    -p, --params <query>    Query parameters (e.g. "boardId=1&perPage=10")
  tags                    - List tags of the local API spec (weeek_spec.json)
  endpoints <tag>         - List endpoints for a tag
  describe <method> <path> - Show details of an endpoint
  version                 - Show version number
"""


# ---------------------------------------------------------------------------
# Global flag extraction (before argparse, so --format works after subcommand)
# ---------------------------------------------------------------------------


def _extract_global_flags(argv):
    """Extract global flags from argv regardless of position.

    Returns (format_str, quiet, verbose, remaining_argv).
    Handles --version directly.
    """
    fmt = "json"
    quiet = False
    verbose = False
    remaining = []
    i = 0
    while i < len(argv):
        if argv[i] == "--version":
            print(f"weeek-cli {config.VERSION}")
            sys.exit(0)
        elif argv[i] in ("--quiet", "-q"):
            quiet = True
        elif argv[i] in ("--verbose", "-v"):
            verbose = True
        elif argv[i] == "--format" and i + 1 < len(argv):
            fmt = argv[i + 1]
            if fmt not in config.VALID_FORMATS:
                raise CliError(
                    f"[ERROR] Invalid format '{fmt}'. Use: {', '.join(config.VALID_FORMATS)}"
                )
            i += 2
            continue
        else:
            remaining.append(argv[i])
        i += 1
    if quiet and verbose:
        raise CliError("[ERROR] --quiet and --verbose are mutually exclusive.")
    return fmt, quiet, verbose, remaining


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


class _SubcommandParser(argparse.ArgumentParser):
    """Subparser that raises CliError instead of printing full help text."""

    def error(self, message):
        raise CliError(f"[ERROR] {message}")


def build_parser():
    parser = _SubcommandParser(
        prog="weeek-cli",
        description="CLI tool for the WEEEK task manager",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    parser.add_argument("--help", "-h", action="store_true", dest="show_help")
    sub = parser.add_subparsers(dest="command", parser_class=_SubcommandParser)

    sub.add_parser("projects").set_defaults(func=cmd_projects)
    sub.add_parser("users").set_defaults(func=cmd_users)

    p = sub.add_parser("boards")
    p.add_argument("project_id", nargs="?")
    p.set_defaults(func=cmd_boards)

    p = sub.add_parser("board")
    p.add_argument("name")
    p.set_defaults(func=cmd_board)

    p = sub.add_parser("show")
    p.add_argument("task_id")
    p.set_defaults(func=cmd_show)

    # --- create ---
    p = sub.add_parser("create")
    p.add_argument("title")
    p.add_argument("--board", "-b")
    p.add_argument("--col", "-c", dest="column")
    p.add_argument("--assignee", "-u")
    p.add_argument("--prio", "-p", dest="priority", default="0")
    p.add_argument("--desc", "-d", dest="description")
    p.add_argument("--subtasks", "-s")
    p.set_defaults(func=cmd_create)

    p = sub.add_parser("move")
    p.add_argument("task_id")
    p.add_argument("column")
    p.set_defaults(func=cmd_move)

    p = sub.add_parser("assign")
    p.add_argument("task_id")
    p.add_argument("user")
    p.set_defaults(func=cmd_assign)

    p = sub.add_parser("timer")
    p.add_argument("action", choices=["start", "stop"])
    p.add_argument("task_id")
    p.set_defaults(func=cmd_timer)

    for name, func in (("complete", cmd_complete), ("uncomplete", cmd_uncomplete)):
        p = sub.add_parser(name)
        p.add_argument("task_id")
        p.set_defaults(func=func)

    p = sub.add_parser("attach")
    p.add_argument("task_id")
    p.add_argument("file")
    p.set_defaults(func=cmd_attach)

    # --- run (raw passthrough) ---
    p = sub.add_parser("run")
    p.add_argument("method", type=str.upper, choices=sorted(config.VALID_METHODS))
    p.add_argument("path")
    p.add_argument("--data", "-d")
    p.add_argument("--params", "-p")
    p.set_defaults(func=cmd_run)

    # --- API spec explorer ---
    sub.add_parser("tags").set_defaults(func=cmd_tags)
    p = sub.add_parser("endpoints")
    p.add_argument("tag")
    p.set_defaults(func=cmd_endpoints)
    p = sub.add_parser("describe")
    p.add_argument("method")
    p.add_argument("path")
    p.set_defaults(func=cmd_describe)

    sub.add_parser("version").set_defaults(func=None)

    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

NO_TOKEN_COMMANDS = {"tags", "endpoints", "describe", "version"}


def _error_message(err):
    if isinstance(err, TransportError):
        return describe_transport_error(err)
    return str(err)


def _emit_cli_error(err, fmt):
    msg = _error_message(err)
    if fmt == "json":
        payload = {
            "ok": False,
            "schema_version": config.CONTRACT_SCHEMA_VERSION,
            "error": {
                "type": getattr(err, "error_type", "error"),
                "message": msg,
                "exit_code": getattr(err, "exit_code", 1),
            },
        }
        if isinstance(err, TransportError):
            payload["error"]["status"] = err.status
        if isinstance(err, PartialFailure):
            payload["report"] = err.report.to_dict()
        print(json.dumps(payload, ensure_ascii=False), file=sys.stderr)
        return
    print(msg, file=sys.stderr)


def main(argv=None):
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8", errors="replace")

    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        print(HELP_TEXT)
        sys.exit(0)

    fmt = "json"
    try:
        fmt, quiet, verbose, remaining_argv = _extract_global_flags(argv)
        if not remaining_argv:
            print(HELP_TEXT)
            sys.exit(0)

        parser = build_parser()
        ns = parser.parse_args(remaining_argv)
        ns.format = fmt
        ns.quiet = quiet

        if ns.show_help or not ns.command:
            print(HELP_TEXT)
            sys.exit(0)

        if ns.command == "version":
            print(f"weeek-cli {config.VERSION}")
            sys.exit(0)

        cfg = config.ClientConfig.from_env()
        if verbose:
            cfg = cfg.with_overrides(http_log_enabled=True)
        ns.config = cfg

        if ns.command not in NO_TOKEN_COMMANDS and not cfg.api_key:
            raise ConfigurationError(
                "[SETUP_NEEDED] WEEEK_API_KEY is required. "
                "Set it in the environment or in a .env file."
            )

        handler = getattr(ns, "func", None)
        if handler is None:
            raise CliError(f"[ERROR] Unknown command: {ns.command}")
        handler(ns)

    except CliError as e:
        _emit_cli_error(e, fmt)
        sys.exit(e.exit_code)


if __name__ == "__main__":
    main()
