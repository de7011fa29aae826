"""
Request-level errors raised by the route handlers.

The app's handler renders each one by path: the form endpoints answer
with the bare message as text/plain, and /api/ routes answer with a JSON
``{"error": {"type", "message", "detail"}}`` body. Store errors never
reach the client directly; the routes translate them into these.
"""


class APIException(Exception):
    """
    Base class for errors answered with a non-2xx status.

    ``message`` is what a form client sees verbatim, so it is kept to one
    short sentence. ``detail`` carries the underlying store error and is
    only exposed in the JSON body and the server log.
    """

    status_code: int = 500
    error_type: str = "api_error"
    message: str = "An error occurred"
    detail: str | None = None

    def __init__(
        self,
        message: str | None = None,
        detail: str | None = None,
        status_code: int | None = None,
    ) -> None:
        self.message = message or self.message
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class RejectedInputError(APIException):
    """A form field is missing or malformed; nothing was changed."""

    status_code = 400
    error_type = "rejected_input"
    message = "Request rejected"


class NotFoundError(APIException):
    """No message code has the requested id."""

    status_code = 404
    error_type = "not_found"
    message = "Message code not found"


class InternalError(APIException):
    """The change was applied in memory but the snapshot could not be saved."""

    status_code = 500
    error_type = "internal_error"
    message = "Internal server error"
