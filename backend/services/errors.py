"""Exception types shared by the screening engine and its collaborators."""


class BatchInputError(ValueError):
    """The batch as a whole is invalid and no pipeline was started."""


class DocumentExtractionError(Exception):
    """A single resume file could not be turned into text."""

    def __init__(self, filename: str, reason: str) -> None:
        super().__init__(f"{filename}: {reason}")
        self.filename = filename
        self.reason = reason


class CollaboratorError(RuntimeError):
    """An optional language-model call failed or returned unusable data.

    Never fatal: callers fall back to heuristic-only values.
    """

    def __init__(self, label: str, reason: str, transient: bool = False) -> None:
        super().__init__(f"{label}: {reason}")
        self.label = label
        self.reason = reason
        self.transient = transient
