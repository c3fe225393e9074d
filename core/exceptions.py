class AppError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidRequestError(AppError):
    status_code = 400


class NotFoundError(AppError):
    status_code = 404


class ConfigurationError(AppError):
    status_code = 500


class UpstreamError(AppError):
    status_code = 500


class SchemaError(Exception):
    """Raised at startup when the database cannot satisfy the required tables."""
