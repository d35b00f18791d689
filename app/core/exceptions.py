"""Typed failures raised by the project, task and profile services.

Routers never catch these; ``app.main`` turns them into JSON responses with
the same ``{"detail": ...}`` shape that ``HTTPException`` produces.
"""
from fastapi import status


class AccessError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationError(AccessError):
    """Missing or malformed input (project name, task title, project id...)."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(AccessError):
    """The record does not exist, or exists but is hidden from the caller."""

    status_code = status.HTTP_404_NOT_FOUND


class UnauthorizedError(AccessError):
    """The record is visible but the caller lacks the permission asked for."""

    status_code = status.HTTP_403_FORBIDDEN


class NotAuthenticatedError(UnauthorizedError):
    status_code = status.HTTP_401_UNAUTHORIZED
