"""
Custom exceptions for the wiki_path package.
"""

class WikiPathException(Exception):
    """Base exception for the application."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

class LinkSourceError(WikiPathException):
    """Raised when a link provider cannot return the links of one article."""
    pass

class SearchValidationError(WikiPathException):
    """Raised when a search is requested without a start or end article."""
    pass

class SearchTimeoutError(WikiPathException):
    """Raised when a search does not finish before its deadline."""
    pass
