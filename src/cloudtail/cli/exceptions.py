"""Exceptions raised by cloudtail commands."""

from cloudtail.cli.core.constants import (
    PERMISSION_DENIED,
    PERMISSION_DENIED_LOCAL,
    UNAUTHENTICATED,
    UNAUTHENTICATED_LOCAL,
)


class CLIError(Exception):
    """Error that is reported to the user and ends the command with ``exit_code``."""

    def __init__(self, message: str, exit_code: int = 1):
        super().__init__(message)
        self.exit_code = exit_code


class FetchError(CLIError):
    """A log fetch failed. ``status`` is the transport status (0 if no response)."""

    def __init__(self, message: str, status: int):
        super().__init__(message)
        self.status = status


class UnauthenticatedError(FetchError):
    """The logging API rejected the credentials (401)."""


class PermissionDeniedError(FetchError):
    """The credentials may not read the project's logs (403)."""


class TransportError(FetchError):
    """Any other non-success response or connection failure."""


def fetch_error_for_status(
    status: int, status_text: str, local_creds: bool = False
) -> FetchError:
    """Map a non-success transport status to the fetch error taxonomy."""
    if status == 401:
        return UnauthenticatedError(
            UNAUTHENTICATED_LOCAL if local_creds else UNAUTHENTICATED, status
        )
    if status == 403:
        return PermissionDeniedError(
            PERMISSION_DENIED_LOCAL if local_creds else PERMISSION_DENIED, status
        )
    return TransportError(f"({status}) Error: {status_text}", status)
