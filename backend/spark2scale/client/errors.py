class Spark2ScaleError(Exception):
    """Base class for failures surfaced by the client-side core."""


class InvalidInput(Spark2ScaleError, ValueError):
    """Malformed aggregation input, or an action the stage does not support."""


class UpstreamUnavailable(Spark2ScaleError):
    """A collaborator could not be reached, timed out, or answered non-2xx."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ConflictOrUpstreamError(Spark2ScaleError):
    """The read-modify-write of a workflow record failed on either leg."""


class PartialHistoryUnavailable(Spark2ScaleError):
    """One document's version history could not be loaded.

    Reported as a warning value next to the aggregation result; that
    document contributes an empty history and the rest are unaffected.
    """

    def __init__(self, document_id: str | None, owner_type: str | None, cause: Exception):
        super().__init__(f"History unavailable for document {document_id} ({owner_type}): {cause}")
        self.document_id = document_id
        self.owner_type = owner_type
        self.cause = cause
