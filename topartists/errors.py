class TopArtistsError(Exception):
    """Base class for every failure the CLI reports to the user."""


class ConfigValidationError(TopArtistsError):
    def __init__(self, field: str, message: str | None = None):
        self.field = field
        super().__init__(message or f"Missing required setting '{field}' (pass a flag or set the environment variable).")


class TransportError(TopArtistsError):
    """The request to Last.fm could not be completed."""


class LastFMAPIError(TransportError):
    """Last.fm answered with an error payload, e.g. unknown user or bad API key."""

    def __init__(self, code: int | str | None, message: str):
        self.code = code
        self.message = message
        super().__init__(f"Last.fm API error {code}: {message}")


class DecodingError(TopArtistsError):
    """The response body was not valid JSON."""


class FormatError(TopArtistsError):
    pass


class InvalidPeriodError(FormatError):
    def __init__(self, period: str):
        self.period = period
        super().__init__(
            f'Period "{period}" not allowed. Only "overall", "7day", "1month", '
            f'"3month", "6month", or "12month" are accepted.'
        )


class MalformedResponseError(FormatError):
    pass


class MissingFieldError(FormatError):
    def __init__(self, field: str, index: int | None = None):
        self.field = field
        self.index = index
        where = f" in artist #{index + 1}" if index is not None else ""
        super().__init__(f"Field '{field}' missing or invalid{where} of the Last.fm response.")
