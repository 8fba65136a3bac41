class ClassHubError(Exception):
    """Base class for every failure the `ch` tool reports to the user."""
    pass


class PreconditionMissing(ClassHubError):
    """A required external tool is absent or GitHub is not authenticated."""
    pass


class UsageError(ClassHubError):
    pass


class ConfigError(ClassHubError):
    pass


class RosterNotFound(ClassHubError, FileNotFoundError):
    pass


class RosterFormatError(ClassHubError, ValueError):
    pass


class RemoteLookupFailure(ClassHubError):
    """Transport or authentication failure while talking to GitHub.

    Distinct from a legitimate "not found" answer, which is never raised.
    """
    pass


class CannotAddUserToRepo(ClassHubError):
    pass


class GitCommandFailed(ClassHubError):
    pass


class UserCancelled(ClassHubError):
    pass


class FetchFailed(ClassHubError):
    pass
