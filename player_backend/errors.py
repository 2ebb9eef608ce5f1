"""
Error kinds raised by the player service.
The HTTP layer maps them to status codes; the service never swallows them.
"""


class PlayerServiceError(Exception):
    """Base class for errors reported back to the client."""

    status_code = 500
    default_detail = "Internal error"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class BadRequestError(PlayerServiceError):
    """Malformed id, malformed filter value or rejected request."""

    status_code = 400
    default_detail = "Bad request"


class ValidationError(BadRequestError):
    """A player record violates a field rule."""

    default_detail = "Invalid player data"


class NotFoundError(PlayerServiceError):
    """Well-formed id with no matching record."""

    status_code = 404
    default_detail = "Player not found"
