"""Library-specific exceptions for contract violations."""


class LibraryError(Exception):
    """Base exception for library operations."""

    pass


class ReferenceCountError(LibraryError):
    """Raised when a song's playlist reference would drop below zero."""

    def __init__(self, uri: str, message: str = None):
        self.uri = uri
        super().__init__(message or f"Reference count for {uri} is already zero")


class DirectoryNotInitializedError(LibraryError):
    """Raised when the process-wide directory is used before init_directory()."""

    pass
