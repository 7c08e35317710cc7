"""Error types raised by the embedding and index layers."""


class AIServerError(Exception):
    """Base class for service errors."""


class EmbeddingUnavailable(AIServerError):
    """The embedding model failed, timed out or returned unusable data."""


class IndexCorrupt(AIServerError):
    """The persisted embedding snapshot could not be parsed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Embedding index at {path} is corrupt: {reason}")
