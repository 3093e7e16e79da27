from typing import Any, Dict, Optional


class ConnectorError(Exception):
    """
    Base class for errors that are reported to the client.

    Each subclass carries the HTTP status and a short machine-readable kind;
    the handler registered in main.py renders them as JSON.
    """
    status_code = 500
    kind = "internal_error"
    headers: Optional[Dict[str, str]] = None

    def __init__(self, message: str, errors: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.kind, "message": self.message}
        if self.errors:
            body["errors"] = self.errors
        return body


class ValidationError(ConnectorError):
    status_code = 400
    kind = "validation_error"

    def __init__(self, errors: Dict[str, str], message: str = "Invalid input"):
        super().__init__(message, errors)


class Unauthorized(ConnectorError):
    status_code = 401
    kind = "unauthorized"

    def __init__(self, message: str = "User not authorized"):
        super().__init__(message)


class InvalidToken(Unauthorized):
    """The bearer token is missing, malformed, tampered with or expired"""
    headers = {"WWW-Authenticate": "Bearer"}

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message)


class NotFound(ConnectorError):
    status_code = 404
    kind = "not_found"

    def __init__(self, resource: str, resource_id: Optional[str] = None):
        if resource_id:
            message = f"{resource.capitalize()} '{resource_id}' not found"
        else:
            message = f"{resource.capitalize()} not found"
        super().__init__(message)
        self.resource = resource
        self.resource_id = resource_id


class CommentNotFound(NotFound):
    kind = "comment_not_found"

    def __init__(self, comment_id: str):
        super().__init__("comment", comment_id)


class AlreadyLiked(ConnectorError):
    status_code = 400
    kind = "already_liked"

    def __init__(self, message: str = "User already liked this post"):
        super().__init__(message)


class NotLiked(ConnectorError):
    status_code = 400
    kind = "not_liked"

    def __init__(self, message: str = "You have not yet liked this post"):
        super().__init__(message)


class EmailTaken(ConnectorError):
    status_code = 400
    kind = "email_taken"

    def __init__(self):
        super().__init__("Email already exists", {"email": "Email already exists"})


class InvalidCredentials(ConnectorError):
    status_code = 400
    kind = "invalid_credentials"

    def __init__(self):
        super().__init__("Password incorrect", {"password": "Password incorrect"})


class StoreUnavailable(ConnectorError):
    """The document store could not be reached or rejected the call"""
    status_code = 503
    kind = "store_unavailable"

    def __init__(self, message: str = "The database is temporarily unavailable"):
        super().__init__(message)
