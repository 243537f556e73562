# src/common/exceptions.py
"""Application error taxonomy shared by the service layer and controllers."""

from fastapi import status


class AppError(Exception):
    """Base class for errors raised by service-layer functions."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AuthError(AppError):
    """Bad credentials, missing session or an invalid/revoked token."""

    status_code = status.HTTP_401_UNAUTHORIZED


class ProfileError(AppError):
    """A users / client_profiles / caregiver_profiles row is missing or failed to write."""

    status_code = status.HTTP_404_NOT_FOUND


class QueryError(AppError):
    """Any failed query, insert or update against the database."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class ValidationError(AppError):
    """Required-field gating in the wizards and message composer."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
