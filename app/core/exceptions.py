"""
Custom exceptions for the application

Every exception carries the HTTP status it maps to; the handlers registered in
app.main turn them into ``{"error": message}`` responses.
"""

class BaseAppException(Exception):
    """Base application exception"""
    status_code = 500

    def __init__(self, message: str, details: str = None):
        self.message = message
        self.details = details
        super().__init__(self.message)


class ValidationError(BaseAppException):
    """Raised when validation fails"""
    status_code = 400

    def __init__(self, message: str, details: str = None, error_code: str = None):
        super().__init__(message, details)
        self.error_code = error_code


class NotFoundError(BaseAppException):
    """Raised when a resource is not found"""
    status_code = 404


class ConflictError(BaseAppException):
    """Raised when a uniqueness rule is violated (slug taken, duplicate subscription)"""
    status_code = 400


class AuthenticationError(BaseAppException):
    """Raised when authentication fails"""
    status_code = 401


class UnexpectedError(BaseAppException):
    """Raised when storage or runtime operations fail"""
    status_code = 500

    def __init__(self, message: str = "Erreur serveur", details: str = None):
        super().__init__(message, details)
