"""Error taxonomy for the EventKit bridge.

Every failing operation raises exactly one of these, at the point closest to
where the failure happened. Upstream layers only render them.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Machine-readable kind of a classified failure."""

    CONFIGURATION = "configuration"
    TRANSPORT = "transport"
    CLI_USER = "cli_user"
    PERMISSION = "permission"
    VALIDATION = "validation"


class AppleEventsError(Exception):
    """Base class for classified failures."""

    kind: ErrorKind = ErrorKind.TRANSPORT

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def user_facing(self) -> bool:
        """Whether the message may be shown to the caller as-is."""
        return self.kind in (ErrorKind.CLI_USER, ErrorKind.PERMISSION, ErrorKind.VALIDATION)


class ConfigurationError(AppleEventsError):
    """Installation root or helper binary could not be resolved."""

    kind = ErrorKind.CONFIGURATION


class TransportError(AppleEventsError):
    """The helper could not run, or its output could not be understood."""

    kind = ErrorKind.TRANSPORT


class CliUserError(AppleEventsError):
    """The helper ran and reported a domain-level failure."""

    kind = ErrorKind.CLI_USER


class PermissionDeniedError(CliUserError):
    """The helper reported that OS access to a capability domain was denied."""

    kind = ErrorKind.PERMISSION

    def __init__(self, message: str, domain: str):
        super().__init__(message)
        self.domain = domain


class ValidationError(AppleEventsError):
    """Tool arguments failed schema checks."""

    kind = ErrorKind.VALIDATION
