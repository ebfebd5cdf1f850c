"""
Error types raised by the export orchestrator.
"""

from enum import Enum


class ExportError(Exception):
    """Base class for export orchestration failures."""


class EncodingError(ExportError):
    """An export request could not be serialized or encrypted."""


class DecodeFailure(Enum):
    MALFORMED_BASE64 = "malformed_base64"
    DECRYPTION = "decryption"
    MALFORMED_PAYLOAD = "malformed_payload"


class DecodingError(ExportError):
    """Job data could not be turned back into an export request."""

    def __init__(self, reason: DecodeFailure, message: str):
        super().__init__(message)
        self.reason = reason


class NotFoundError(ExportError):
    """A local repository (or its storage) does not exist."""


class RemoteCreateError(ExportError):
    """The remote repository could not be created."""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code


class RemoteRepositoryExistsError(RemoteCreateError):
    """The remote already has a repository with the requested identifier."""


class RemoteDeleteError(ExportError):
    """The remote repository could not be deleted."""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code


class PushError(ExportError):
    """Pushing the local repository to the remote failed."""


class EmptyRepositoryError(PushError):
    """The source repository has nothing to push."""


class JobCancelledError(ExportError):
    """The job engine cancelled the attempt or its deadline passed."""


class ReconcileWarning(UserWarning):
    """A compensating action failed after the job had already failed."""

    def __init__(self, step: str, cause: BaseException):
        super().__init__(f"compensation for '{step}' failed: {cause}")
        self.step = step
        self.cause = cause
