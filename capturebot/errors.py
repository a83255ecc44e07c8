class CaptureBotError(Exception):
    """Base class for every error raised by the capture bot."""


class ConfigurationError(CaptureBotError):
    """Required startup configuration is missing or malformed."""


class ValidationError(CaptureBotError):
    """A mutating request is missing a required field."""


class NoActiveCaptureError(CaptureBotError):
    """A winner was declared before any capture was started."""


class NotificationError(CaptureBotError):
    """A capture announcement could not be delivered."""


class ChannelResolutionError(NotificationError):
    """The configured channel is not known to the bot."""


class NotificationSendError(NotificationError):
    """Discord rejected the announcement."""
