"""
Error taxonomy for comparison requests.

Every error is a clean rejection of a single call; nothing here is fatal.
The routing layer maps ``code`` to user-facing messages and status codes.
"""


class ComparisonError(Exception):
    """Base class for all comparison failures."""

    code = "comparison_error"

    def __init__(self, message: str, **context: object) -> None:
        super().__init__(message)
        self.message = message
        self.context = context


class ValidationError(ComparisonError):
    """Request rejected before any collaborator is called."""

    code = "validation_error"


class AuthorizationError(ComparisonError):
    """A requested pet is missing, inactive, or owned by someone else."""

    code = "authorization_error"


class ComputationError(ComparisonError):
    """A collaborator failed mid-request; no partial result is produced."""

    code = "computation_error"
