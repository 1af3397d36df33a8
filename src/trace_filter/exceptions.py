"""
Exception types raised by the trace filter
"""


class TraceFilterError(Exception):
    """Base class for trace filter errors"""


class ConfigurationError(TraceFilterError):
    """Run configuration is invalid and the run must not start"""


class FieldUnavailableError(TraceFilterError, IndexError):
    """A payload value exists by name but cannot be read"""
