"""Domain errors raised by repositories and helpers.

Routes translate them into HTTP responses via `status_code`; anything that
is not a JoblyError is left to propagate as an internal error.
"""
from __future__ import annotations


class JoblyError(Exception):
    status_code = 500

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class BadRequestError(JoblyError):
    status_code = 400


class NotFoundError(JoblyError):
    status_code = 404


class ConflictError(JoblyError):
    status_code = 409
