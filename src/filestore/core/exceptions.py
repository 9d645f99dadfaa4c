"""Custom exceptions for the Filestore connector."""


class FilestoreException(Exception):
    """Base exception for the Filestore connector."""
    pass


class ValidationError(FilestoreException):
    """Exception raised when a required config or input field is missing or malformed."""
    pass


class TransportError(FilestoreException):
    """Exception raised when a request to the Filestore API fails."""

    def __init__(self, message: str, url: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ChunkUploadError(TransportError):
    """Exception raised when a single content-range chunk cannot be delivered."""

    def __init__(
        self,
        message: str,
        chunk_index: int,
        total_chunks: int,
        url: str | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message, url=url, status_code=status_code)
        self.chunk_index = chunk_index
        self.total_chunks = total_chunks


class UploadSessionError(FilestoreException):
    """Exception raised when a resumable upload session fails."""
    pass


class AttachmentError(FilestoreException):
    """Exception raised when an attachment cannot be fetched into memory."""
    pass


class VerificationError(FilestoreException):
    """Exception raised when the Filestore API cannot verify credentials right now."""
    pass


class ComponentError(FilestoreException):
    """Exception raised by an action to surface a failure to the workflow."""
    pass
