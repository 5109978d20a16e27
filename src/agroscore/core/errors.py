# agroscore/core/errors.py
"""
Engine error taxonomy.

Every error carries a stable, caller-safe ``message``. Diagnostic detail goes
to the log only; the HTTP layer returns ``{"error": message}``.
"""


class EngineError(Exception):
    status_code = 500
    message = "Internal Server Error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class AuthorizationError(EngineError):
    """No authenticated caller, or an owned resource is not the caller's."""

    status_code = 403
    message = "Access denied"


class UnauthenticatedError(AuthorizationError):
    status_code = 401
    message = "Unauthorized"


class NotFoundError(AuthorizationError):
    # reported as a denial so that existence of other users' rows does not leak
    message = "Not found or access denied"


class ValidationError(EngineError):
    status_code = 400
    message = "Invalid request"


class PersistenceError(EngineError):
    status_code = 500
    message = "Internal Server Error"
