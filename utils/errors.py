"""Exceptions raised by the content persistence layer."""


class ContentError(Exception):
    """Base class for content store failures surfaced to callers."""


class ContentReadError(ContentError):
    """A domain query failed; no partial content tree is returned."""


class ContentWriteError(ContentError):
    """A save failed and its transaction was rolled back."""


class ReconciliationError(ContentError):
    """A schema change could not be applied.

    Recorded in the reconciliation report and logged; never raised out of
    ``SchemaReconciler.run``.
    """

    def __init__(self, change: str, message: str):
        super().__init__(f"{change}: {message}")
        self.change = change
        self.message = message
