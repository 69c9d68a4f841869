# backend/pickmypdf/core/errors.py


class ServiceError(Exception):
    """Base error raised by services; routes turn it into an HTTP response."""

    status_code = 500

    def __init__(self, message: str, cause: Exception = None):
        self.message = message
        self.cause = cause
        super().__init__(message)


class BadInputError(ServiceError):
    status_code = 400


class NotFoundError(ServiceError):
    status_code = 404


class InvalidDataError(ServiceError):
    """Extracted or submitted data is malformed or fails validation."""

    status_code = 422


class ProviderUnavailableError(ServiceError):
    status_code = 503
