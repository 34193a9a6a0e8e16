"""
Typed failures raised by the order services and mapped to HTTP responses in app.main.
"""


class OrderServiceError(Exception):
    """Base class; `code` and `status_code` are what the boundary layer reports."""

    code = "ORDER_SERVICE_ERROR"
    status_code = 500
    retryable = False

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(OrderServiceError):
    """Malformed or inconsistent input: empty item list, bad quantity, subtotal mismatch."""

    code = "VALIDATION_ERROR"
    status_code = 400


class NotFoundError(OrderServiceError):
    """Referenced order, customer or menu item does not exist."""

    code = "NOT_FOUND"
    status_code = 404


class InvalidTransitionError(OrderServiceError):
    """Requested status is not a direct successor of the current one."""

    code = "INVALID_TRANSITION"
    status_code = 409

    def __init__(self, message: str, current_status=None, requested_status=None):
        super().__init__(message)
        self.current_status = current_status
        self.requested_status = requested_status


class ConflictError(OrderServiceError):
    """The order kept changing underneath a status update."""

    code = "CONFLICT"
    status_code = 409
    retryable = True


class StorageError(OrderServiceError):
    """Store unavailable or the write failed; nothing was applied."""

    code = "STORAGE_ERROR"
    status_code = 503
    retryable = True
