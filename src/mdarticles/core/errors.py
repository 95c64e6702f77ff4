"""Exceptions raised while loading and querying articles"""


class ArticleError(Exception):
    """Base exception for article store errors."""

    pass


class ParseError(ArticleError, ValueError):
    """Raised when a document's front-matter is missing or malformed."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(f"{path}: {message}" if path else message)
        self.reason = message
        self.path = path


class NotFoundError(ArticleError, LookupError):
    """Raised when no document matches an identifier."""

    def __init__(self, identifier: str):
        super().__init__(f"Document with ID '{identifier}' not found")
        self.identifier = identifier
