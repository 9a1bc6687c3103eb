"""
Service-level exceptions
"""


class CompanySearchError(Exception):
    """Base error for the company search service"""


class QueryFailedError(CompanySearchError):
    """A store query failed; no partial result is available"""

    def __init__(self, operation: str, cause: Exception = None):
        self.operation = operation
        self.cause = cause
        message = f"{operation} failed"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
