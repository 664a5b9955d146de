"""Core helpers: client caching, _call dispatcher, response contract."""

from __future__ import annotations

from weeek_cli import CliError, WeeekClient
from weeek_cli.api import describe_transport_error
from weeek_cli.config import CONTRACT_SCHEMA_VERSION
from weeek_cli.exceptions import PartialFailure, TransportError

_client: WeeekClient | None = None


def _get_client() -> WeeekClient:
    """Return a cached WeeekClient, creating one on first use."""
    global _client
    if _client is None:
        _client = WeeekClient()
    return _client


def _contract_error(message: str, error_type: str = "error", **extra) -> dict:
    """Return a stable MCP error envelope."""
    out = {
        "ok": False,
        "schema_version": CONTRACT_SCHEMA_VERSION,
        "type": error_type,
        "error": message,
    }
    out.update(extra)
    return out


def _finalize_tool_result(result):
    """Add contract metadata (ok/schema_version) to dict responses."""
    if isinstance(result, dict):
        out = dict(result)
        out.setdefault("schema_version", CONTRACT_SCHEMA_VERSION)
        out.setdefault("ok", True)
        return out
    return {"ok": True, "schema_version": CONTRACT_SCHEMA_VERSION, "data": result}


_ALLOWED_METHODS = {
    "list_projects",
    "get_boards",
    "get_board_with_context",
    "get_task",
    "get_users",
    "create_task_with_subtasks",
    "move_task_to_column",
    "assign_user",
    "start_timer",
    "stop_timer",
    "complete_task",
    "uncomplete_task",
    "request",
}


async def _call(method_name: str, **kwargs):
    """Call a WeeekClient method, converting exceptions to error dicts."""
    if method_name not in _ALLOWED_METHODS:
        return _contract_error(f"Unknown method: {method_name}", "error")
    try:
        client = _get_client()
        return await getattr(client, method_name)(**kwargs)
    except PartialFailure as e:
        return _contract_error(str(e), e.error_type, report=e.report.to_dict())
    except TransportError as e:
        return _contract_error(describe_transport_error(e), e.error_type, status=e.status)
    except CliError as e:
        return _contract_error(str(e), e.error_type)
    except Exception as e:
        return _contract_error(f"Unexpected error: {e}", "error")
