"""weeek-cli: CLI tool and async client for the WEEEK task manager."""

from weeek_cli.client import WeeekClient
from weeek_cli.config import VERSION, ClientConfig
from weeek_cli.exceptions import (
    AmbiguousError,
    CliError,
    ConfigurationError,
    NotFoundError,
    PartialFailure,
    TransportError,
)
from weeek_cli.models import TaskCreationReport, TaskSpec
from weeek_cli.types import (
    Board,
    BoardContext,
    Column,
    Project,
    SubtaskResult,
    Task,
    TaskCreationResult,
    User,
)

__all__ = [
    "VERSION",
    "AmbiguousError",
    "Board",
    "BoardContext",
    "CliError",
    "ClientConfig",
    "Column",
    "ConfigurationError",
    "NotFoundError",
    "PartialFailure",
    "Project",
    "SubtaskResult",
    "Task",
    "TaskCreationReport",
    "TaskCreationResult",
    "TaskSpec",
    "TransportError",
    "User",
    "WeeekClient",
]
