"""
hintlight/core/errors.py

Failure taxonomy shared by the relay, the message channels and the overlay.

Every failure is terminal for the user action that caused it: nothing in
hintlight retries. The overlay shows ``str(exc)`` inside the modal body, so
messages here are written for the end user.
"""


class HintError(Exception):
    """Base class for every failure surfaced to the overlay."""

    pass


class ConfigurationError(HintError):
    """The API key has not been configured."""

    pass


class TransportError(HintError):
    """The message channel, the settings store or the network failed."""

    pass


class UpstreamError(HintError):
    """The completion endpoint answered with an error or an unusable body."""

    pass
