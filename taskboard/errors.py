"""Failure taxonomy for board operations.

Expected conditions (missing entities, malformed references) are reported by
the operations as ``None``/``False``/empty results. The exceptions below cover
what the caller has to handle explicitly.
"""


class TaskBoardError(Exception):
    """Base class for all taskboard failures."""


class NotFoundError(TaskBoardError):
    """An operation targeted an identifier that does not exist."""

    def __init__(self, kind: str, identifier: str):
        super().__init__(f"{kind} {identifier!r} not found")
        self.kind = kind
        self.identifier = identifier


class InvalidReferenceError(TaskBoardError):
    """A parent identifier is malformed or points at nothing."""

    def __init__(self, kind: str, identifier):
        super().__init__(f"Invalid {kind} reference {identifier!r}")
        self.kind = kind
        self.identifier = identifier


class ValidationFailure(TaskBoardError):
    """A field value is missing, blank, or not allowed to change."""


class ConsistencyError(TaskBoardError):
    """A stored task no longer agrees with its column's board."""
