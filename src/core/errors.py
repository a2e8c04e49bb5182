from __future__ import annotations


class CrptError(Exception):
    """Base error for the CRPT client and its throttler."""


class ValidationError(CrptError):
    """Raised when user input is invalid."""


class InvalidConfigError(CrptError):
    """Raised when throttle settings are out of range."""


class ClosedError(CrptError):
    """Raised when work is submitted to (or abandoned by) a throttler that is shutting down."""


class RejectedError(CrptError):
    """Raised when the submission queue is at its configured depth."""


class EncodingError(CrptError):
    """Raised when a payload cannot be serialized."""


class TransportError(CrptError):
    """Raised when the remote call fails at the network or protocol level."""


class ShutdownTimeoutError(CrptError):
    """Raised when shutdown could not drain outstanding work in time."""
