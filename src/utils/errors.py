"""Exceptions raised by the track analytics functions."""


class AnalyticsError(Exception):
    """Base class for failures of an analytic computation."""


class MalformedRecordError(AnalyticsError, ValueError):
    """A track record holds a value outside its declared bounds."""


class ZeroVarianceError(AnalyticsError, ZeroDivisionError):
    """A standard deviation or correlation denominator is zero (or undefined)."""


class EmptyDatasetError(AnalyticsError, ValueError):
    """There are no records to compute a statistic over."""
