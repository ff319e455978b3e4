"""
Exceptions raised by the backup and restore handlers.

Every check raises one of these on failure; ``run_command`` is the only place
that turns them into an error line and an exit status.
"""


class VolumeBackupError(Exception):
    """Base exception for all volume backup errors."""

    def __init__(self, message: str, detail: str = ''):
        self.message = message
        self.detail = detail
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class UsageError(VolumeBackupError):
    """Raised when the command line cannot be understood."""

    pass


class DockerUnavailableError(VolumeBackupError):
    """Raised when the container runtime is missing or not reachable."""

    pass


class ValidationError(VolumeBackupError, ValueError):
    """Raised when a volume name or archive path is malformed."""

    pass


class VolumeNotFoundError(VolumeBackupError):
    """Raised when the volume to back up does not exist."""

    def __init__(self, message: str, available=None):
        super().__init__(message)
        self.available = available or []


class ArchiveError(VolumeBackupError):
    """Raised when an input archive is missing, unreadable or malformed."""

    pass


class OperationError(VolumeBackupError):
    """Raised when a runtime call fails or produces no usable output."""

    pass
