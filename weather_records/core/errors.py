import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class WeatherAppError(Exception):
    """
    Base class for errors surfaced to the user at the action boundary.

    Every subclass carries a single user-facing message and the HTTP
    status code used when the error reaches the API layer.
    """

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(WeatherAppError):
    """Empty location, invalid or out-of-policy date range, unknown export format."""

    status_code = 400


class NotFoundError(WeatherAppError):
    """No geocoding match, or no stored record with the requested id."""

    status_code = 404


class UpstreamError(WeatherAppError):
    """Network failure or unexpected response shape from an Open-Meteo service."""

    status_code = 502


async def weather_app_error_handler(request: Request, exc: WeatherAppError) -> JSONResponse:
    """
    Convert a `WeatherAppError` into a JSON error response.

    The message also becomes the session's latest error, replacing any
    previous one.
    """
    logger.warning("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)

    session = getattr(request.app.state, "session", None)
    if session is not None:
        session.fail(exc.message)

    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def request_validation_message(exc: RequestValidationError) -> str:
    """
    Collapse FastAPI request validation errors into one user-facing message,
    e.g. "Invalid startDate: Input should be a valid date ...".
    """
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
    message = first.get("msg", "invalid value")
    return f"Invalid {field}: {message}" if field else f"Invalid request: {message}"


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Report malformed input (e.g. an impossible date) like any other
    `ValidationError`: HTTP 400 with a single message that becomes the
    session's latest error.
    """
    return await weather_app_error_handler(request, ValidationError(request_validation_message(exc)))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(WeatherAppError, weather_app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
