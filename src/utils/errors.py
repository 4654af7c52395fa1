"""Custom exception hierarchy for eventlens.

All application exceptions inherit from :class:`EventLensError`, which
carries an optional ``provider_name`` so error handlers can identify which
external collaborator (e.g. "elasticsearch", "sqlite", "yahoo_keyphrase")
caused the failure.

The hierarchy follows the two request flows:

    EventLensError  (base -- catch-all for any eventlens error)
    +-- ConfigurationError  (startup / missing or invalid config)
    +-- ResolutionError     (search backend unreachable or bad response)
    +-- HydrationError      (store unreachable or query failure)
    +-- ExtractionError     (phrase-extraction service failure)

Each class also declares the HTTP status the API reports for it, so the
error middleware never needs a lookup table.  A lookup that finds no row
is *not* an error: stores return ``None`` and callers produce an empty
result.
"""


class EventLensError(Exception):
    """Base exception for all eventlens errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name``.  ``__str__`` prefixes the provider name in brackets
    for log output, e.g. ``[elasticsearch] Search backend returned 503``.
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Startup
# ---------------------------------------------------------------------------

class ConfigurationError(EventLensError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Search flow
# ---------------------------------------------------------------------------

class ResolutionError(EventLensError):
    """Raised when the search backend cannot resolve a query to identifiers.

    Distinct from a query that simply matched nothing: that yields an
    empty identifier list, never this exception.
    """

    status_code = 502

    def __init__(
        self,
        message: str = "Identifier resolution failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class HydrationError(EventLensError):
    """Raised when the batched record lookup against the store fails."""

    status_code = 500

    def __init__(
        self,
        message: str = "Record hydration failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Keyword flow
# ---------------------------------------------------------------------------

class ExtractionError(EventLensError):
    """Raised when the phrase-extraction service is unreachable or its
    response cannot be decoded."""

    status_code = 502

    def __init__(
        self,
        message: str = "Keyphrase extraction failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
