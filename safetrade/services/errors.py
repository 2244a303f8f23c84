"""Domain exceptions raised by the service layer.

Each exception carries the HTTP status it maps to; the API layer installs a
single handler (see ``safetrade.api.errors``) instead of translating them
route by route.
"""


class SafeTradeError(Exception):
    """Base class for service-level failures surfaced to clients."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(SafeTradeError):
    status_code = 404


class ForbiddenError(SafeTradeError):
    status_code = 403


class InvalidAssignmentError(SafeTradeError):
    pass


class InvalidAppealError(SafeTradeError):
    pass


class InvalidResolutionError(SafeTradeError):
    pass


class InvalidStateError(SafeTradeError):
    pass


class DuplicateError(SafeTradeError):
    pass


class InternalFailureError(SafeTradeError):
    status_code = 500
