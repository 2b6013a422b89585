"""Exceptions raised at the pipeline's IO boundaries."""


class IngestError(Exception):
    """Base class for fatal ingestion failures."""


class SourceError(IngestError):
    """A source byte stream is missing or cannot be read."""


class SinkError(IngestError):
    """A downstream step failed; ``step`` names it."""

    def __init__(self, step: str, message: str):
        super().__init__(f"{step}: {message}")
        self.step = step
