"""
Error kinds raised by the data-access layer and the auth dependency.

Each error carries an ErrorKind; the exception handlers registered in
main.py turn the kind into the HTTP status. Route handlers never catch these.
"""

import enum
from typing import List, Union

Message = Union[str, List[str]]


def error_body(message: Message, status_code: int) -> dict:
    """JSON body shared by every error response."""
    return {"error": {"message": message, "status": status_code}}


class ErrorKind(int, enum.Enum):
    """Error kind, valued by the HTTP status it maps to."""
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    NOT_FOUND = 404
    UNCLASSIFIED = 500


class ApiError(Exception):
    """Base error; message may be a single string or a list of messages."""

    kind: ErrorKind = ErrorKind.UNCLASSIFIED

    def __init__(self, message: Message = "Internal Server Error"):
        super().__init__(message)
        self.message = message

    @property
    def status_code(self) -> int:
        return int(self.kind)

    def to_dict(self) -> dict:
        return error_body(self.message, self.status_code)


class BadRequestError(ApiError):
    kind = ErrorKind.BAD_REQUEST

    def __init__(self, message: Message = "Bad Request"):
        super().__init__(message)


class UnauthorizedError(ApiError):
    kind = ErrorKind.UNAUTHORIZED

    def __init__(self, message: Message = "Unauthorized"):
        super().__init__(message)


class NotFoundError(ApiError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, message: Message = "Not Found"):
        super().__init__(message)
