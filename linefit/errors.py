class WrapError(ValueError):
    """Base class for all errors raised while wrapping text."""


class ConfigurationError(WrapError):
    """The caller supplied an invalid target width or option value."""


class ContractViolation(WrapError):
    """A width oracle or word splitter returned data that breaks its contract.

    The offending text is kept on the exception so that a broken locale table or hyphenation dictionary can be traced
    back to the input that exposed it.
    """

    def __init__(self, message: str, text: str | None = None):
        super().__init__(message)
        self.text = text
