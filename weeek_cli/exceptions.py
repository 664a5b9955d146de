"""
weeek-cli exception hierarchy.

All custom exceptions live here to avoid circular imports.
"""


class CliError(Exception):
    """Exit code 1: validation, network, parse errors."""

    exit_code = 1
    error_type = "error"


class ConfigurationError(CliError):
    """Exit code 2: missing API key or unusable configuration."""

    exit_code = 2
    error_type = "configuration"


class TransportError(CliError):
    """Non-success response from the WEEEK API.

    Carries the status code and the raw response body unchanged.
    """

    error_type = "transport"

    def __init__(self, status, reason, body, headers=None):
        self.status = status
        self.reason = reason
        self.body = body
        self.headers = headers or {}
        super().__init__(f"{status} {reason}: {body}")


class NotFoundError(CliError):
    """A name resolution step produced zero matches."""

    error_type = "not_found"

    def __init__(self, message, query=None):
        self.query = query
        super().__init__(message)


class AmbiguousError(CliError):
    """A name resolution step produced more than one match."""

    error_type = "ambiguous"

    def __init__(self, message, query=None, matches=None):
        self.query = query
        self.matches = list(matches or [])
        super().__init__(message)


class PartialFailure(CliError):
    """Primary task was created but some subtasks failed.

    ``report`` is a TaskCreationReport describing what was created.
    """

    exit_code = 3
    error_type = "partial_failure"

    def __init__(self, message, report):
        self.report = report
        super().__init__(message)
