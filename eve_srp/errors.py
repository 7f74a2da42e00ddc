"""Domain error taxonomy.

Every error carries the HTTP status it maps to; ``main.py`` renders them as
``{"error": message, "details": [...]}`` without internal detail.
"""
from typing import List, Optional


class SrpError(Exception):
    """Base class for errors surfaced to API callers"""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Optional[List[str]] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class ValidationFailed(SrpError):
    status_code = 400
    default_message = "Invalid request"


class DuplicateClaim(SrpError):
    status_code = 400
    default_message = "An SRP request for this loss has already been submitted"


class Unauthenticated(SrpError):
    status_code = 401
    default_message = "Authentication required"


class InvalidOrExpiredToken(SrpError):
    status_code = 401
    default_message = "Invalid or expired token"


class Forbidden(SrpError):
    status_code = 403
    default_message = "Forbidden"


class WrongPrincipalKind(Forbidden):
    """Token is valid but issued for the other principal kind."""


class OwnershipViolation(Forbidden):
    """Player tried to read another character's data."""


class InsufficientRole(Forbidden):
    default_message = "Super admin privileges required"


class ForbiddenNotMember(Forbidden):
    default_message = "Character is not a member of the corporation"


class NotFound(SrpError):
    status_code = 404
    default_message = "Not found"


class UpstreamFailure(SrpError):
    status_code = 500
    default_message = "Upstream service failure"


class AuthExchangeFailed(UpstreamFailure):
    default_message = "SSO login failed"


class LossSourceFailed(UpstreamFailure):
    default_message = "Failed to fetch loss history"
