"""Error taxonomy for upstream providers and request validation."""


class UpstreamError(Exception):
    """Base class for failures talking to a market-data provider."""

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(f"{provider} error: {message}")
        self.provider = provider


class UpstreamUnavailableError(UpstreamError):
    """Non-2xx HTTP status or network-level failure."""


class MalformedResponseError(UpstreamError):
    """Provider answered 2xx with a body of unexpected shape."""


class InvalidInputError(ValueError):
    """Chain/address combination rejected before any upstream call."""
