"""
seedpass.errors

Exceptions raised by the generator, the breach oracle and the HTTP boundary.
Each API error knows the status code and the error code it is reported with.
"""

from typing import Dict, Optional


class SeedPassError(Exception):
    """Base class for all SeedPass errors."""


class OracleUnavailable(SeedPassError):
    """The breach lookup could not be completed (network, status or body)."""


class ApiError(SeedPassError):
    status_code = 400
    code = "bad_request"

    def to_dict(self) -> Dict[str, str]:
        return {"error": self.code}


class MethodNotAllowed(ApiError):
    status_code = 405
    code = "method_not_allowed"


class PasswordRequired(ApiError):
    code = "password_required"


class SeedRequired(ApiError):
    code = "seed_required"


class UnknownAction(ApiError):
    code = "unknown_action"


class InternalError(ApiError):
    status_code = 500
    code = "internal_error"

    def __init__(self, details: Optional[str] = None):
        super().__init__(details)
        self.details = details or ""

    def to_dict(self) -> Dict[str, str]:
        return {"error": self.code, "details": self.details}
