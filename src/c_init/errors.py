"""Error taxonomy for c-init.

Every failure the CLI reports is a ``CInitError`` carrying the exit status
the process should terminate with.
"""


class CInitError(Exception):
    """Base class for all user-facing failures."""

    exit_code = 1


class UsageError(CInitError):
    """Unknown flag, missing flag value or unexpected extra argument."""


class ValidationError(CInitError):
    """A resolved value is not acceptable (bad enum, non-empty target, ...)."""


class CancellationError(CInitError):
    """The user backed out of the wizard."""


class HeaderUnavailableError(CInitError):
    """The vendored test header could not be obtained."""


class HelpRequested(CInitError):
    """The reserved ``help`` path token was given instead of a project path."""

    exit_code = 0
