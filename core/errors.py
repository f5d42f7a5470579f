class StoreError(Exception):
    """Business-rule failure that maps onto a targeted 4xx response."""

    status_code = 400

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class NotFoundError(StoreError):
    status_code = 404


class InvalidStateError(StoreError):
    status_code = 400


class ConflictError(StoreError):
    status_code = 409
