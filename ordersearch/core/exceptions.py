__all__ = [
    "BaseError",
    "BadRequestError",
    "InitializationError",
    "InternalError",
    "LoadError",
    "NotFoundError",
    "NotReadyError",
    "NotSupportedError",
]


class BaseError(Exception):
    status_code: int


class BadRequestError(BaseError):
    status_code = 400


class NotFoundError(BaseError):
    status_code = 404


class NotSupportedError(BaseError):
    status_code = 415


class NotReadyError(BaseError):
    status_code = 503


class InternalError(Exception):
    status_code = 500


class LoadError(Exception):
    status_code = 500


class InitializationError(Exception):
    status_code = 500
