class NutriLogError(Exception):
    """Base class for service-level failures surfaced to API clients."""

    code = "UNKNOWN_ERROR"
    status = 500

    def __init__(self, message: str, **extra):
        super().__init__(message)
        self.message = message
        self.extra = extra


class NotFoundError(NutriLogError):
    code = "NOT_FOUND"
    status = 404


class ExternalServiceError(NutriLogError):
    """A third-party API (food facts, AI provider, spreadsheet) failed."""

    code = "UPSTREAM_ERROR"
    status = 502


class AnalysisParseError(ExternalServiceError):
    code = "ANALYSIS_PARSE_ERROR"


class ServiceNotConfiguredError(NutriLogError):
    code = "SERVICE_NOT_CONFIGURED"
    status = 503
