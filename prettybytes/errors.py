"""
PrettyBytes error types.

Both errors are plain ``ValueError`` subclasses, so callers that already catch
``ValueError`` keep working.
"""


# Classes --------------------------------------------------------------------------------------------------------------

class InvalidConfigurationError(ValueError):
    """Raised while building a PrettyConf or resolving a unit ladder.

    Never raised by a conversion call: a constructed configuration is always usable.
    """


class InvalidSerializedInputError(ValueError):
    """Raised when a serialized PrettyBytes record cannot be decoded exactly."""
