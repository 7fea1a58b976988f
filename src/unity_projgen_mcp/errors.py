"""Project generation exceptions."""


class ProjectGenerationError(Exception):
    """Base exception for project generation errors."""

    pass


class SnapshotError(ProjectGenerationError):
    """Raised when the editor compilation snapshot cannot be parsed."""

    pass


class ResponseFileError(ProjectGenerationError):
    """Raised when a compiler response file cannot be read."""

    pass


class PreferenceStoreError(ProjectGenerationError):
    """Raised when the preference store contents are malformed."""

    pass


class StateFileError(ProjectGenerationError):
    """Raised when the persisted state file is malformed."""

    pass
