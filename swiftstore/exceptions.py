"""Exceptions for the swiftstore SDK."""

from typing import Optional


class SwiftError(Exception):
    """Base exception for all swiftstore errors."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        """Initialize SwiftError.

        Args:
            message: Error message
            status_code: HTTP status code if applicable
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AuthError(SwiftError):
    """Raised when an authentication exchange fails."""

    def __init__(self, message: str = "Authentication failed", status_code: Optional[int] = None) -> None:
        super().__init__(message, status_code=status_code)


class ConfigurationError(SwiftError):
    """Raised for invalid connection options or filter combinations.

    Configuration errors are never retried.
    """

    pass


class ListError(SwiftError):
    """Raised when a container or object listing fails."""

    pass


class UpdateError(SwiftError):
    """Raised when a metadata update (POST) fails."""

    pass


class MetadataError(SwiftError):
    """Raised when reading metadata (HEAD) fails."""

    pass


class DeleteError(SwiftError):
    """Raised when deleting a container or object fails."""

    def __init__(self, name: str, reason: str, status_code: Optional[int] = None) -> None:
        """Initialize DeleteError.

        Args:
            name: Name of the container or object
            reason: HTTP status text
            status_code: HTTP status code
        """
        super().__init__(f"Error deleting {name}: {reason}", status_code=status_code)
        self.name = name


class UploadError(SwiftError):
    """Raised when an object upload fails."""

    def __init__(self, name: str, reason: str, status_code: Optional[int] = None) -> None:
        super().__init__(f"Error uploading {name}: {reason}", status_code=status_code)
        self.name = name


class DownloadError(SwiftError):
    """Raised when an object download fails."""

    def __init__(self, name: str, reason: str, status_code: Optional[int] = None) -> None:
        super().__init__(f"Error downloading {name}: {reason}", status_code=status_code)
        self.name = name


class CreateError(SwiftError):
    """Raised when creating a container fails."""

    def __init__(self, name: str, reason: str, status_code: Optional[int] = None) -> None:
        super().__init__(f"Error creating container {name}: {reason}", status_code=status_code)
        self.name = name


class ConnectionError(SwiftError):
    """Raised when connection to the server fails."""

    pass


class TimeoutError(SwiftError):
    """Raised when a request times out."""

    pass
