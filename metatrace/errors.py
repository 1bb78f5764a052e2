"""Exceptions raised by metatrace."""


class MetaTraceError(Exception):
    """Base class for metatrace errors."""


class SerializationError(MetaTraceError):
    """Export of in-memory state to JSON failed."""
