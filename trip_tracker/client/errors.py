"""Exception types raised by the trip API client."""


class TripApiError(Exception):
    """Remote trip API call failed.

    Attributes:
        status_code: HTTP status of the response, None for network failures
        detail: Error detail reported by the server, if any
    """

    def __init__(
        self, message: str, *, status_code: int | None = None, detail: str | None = None
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class FetchError(TripApiError):
    """Reading a trip or trip list failed."""

    pass


class CreateError(TripApiError):
    """Creating a trip was rejected or failed."""

    pass


class UpdateError(TripApiError):
    """Saving a trip or activity status failed."""

    pass


class DeleteError(TripApiError):
    """Deleting a trip failed."""

    pass
