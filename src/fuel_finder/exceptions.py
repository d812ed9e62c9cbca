class FuelFinderError(Exception):
    """Base exception for GPX fuel finder errors."""


class ExternalServiceError(FuelFinderError):
    """Raised when an upstream API call fails."""


class NoRouteDataError(FuelFinderError):
    """Raised when an uploaded document contains no usable route points."""

