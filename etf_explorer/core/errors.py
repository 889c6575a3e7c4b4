ANALYSIS_FAILED_MESSAGE = "Failed to fetch live data. Verify the ticker and try again."


class AnalysisError(Exception):
    """Base class for failures of the ETF analysis call."""

    kind = "analysis_error"


class MissingCredentialError(AnalysisError):
    kind = "missing_credential"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message
            or "No API key found. Set GEMINI_API_KEY (or API_KEY) in your environment or .env file."
        )


class EmptyUpstreamResponseError(AnalysisError):
    kind = "empty_response"

    def __init__(self, message: str = "The AI service returned an empty response.") -> None:
        super().__init__(message)


class UpstreamParseError(AnalysisError):
    """The model answered, but not with something we can read as ETF data."""

    kind = "parse_failure"

    def __init__(self, raw_text: str, message: str = "Failed to parse AI response into market data.") -> None:
        super().__init__(message)
        self.raw_text = raw_text


class UpstreamTransportError(AnalysisError):
    kind = "transport_failure"


class InvalidTickerError(AnalysisError):
    kind = "invalid_ticker"

    def __init__(self, message: str = "Ticker must not be empty.") -> None:
        super().__init__(message)
