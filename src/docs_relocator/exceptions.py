"""Custom exceptions for the document relocator."""


class DocRelocatorError(Exception):
    """Base exception for document relocator errors."""
    pass


class ConfigurationError(DocRelocatorError):
    """Raised when there's an error in configuration."""
    pass


class FilesystemError(DocRelocatorError):
    """Raised when a directory creation or file move fails."""
    pass


class InconsistentRelocationError(FilesystemError):
    """Raised when a file could not be moved after its location was updated.

    The database already points at the new directory while the file is
    still at its old path, so the record needs manual reconciliation.
    """

    def __init__(self, record_id, new_location, cause):
        self.record_id = record_id
        self.new_location = new_location
        self.cause = cause
        super().__init__(
            f"Location of {record_id} updated to {new_location} but the move failed: {cause}"
        )


class PersistenceError(DocRelocatorError):
    """Raised when a database call fails."""
    pass


class OutcomeLogError(DocRelocatorError):
    """Raised when an outcome could not be written to the issue log.

    Without a way to record outcomes no further processing is safe, so
    this error aborts the run.
    """
    pass
