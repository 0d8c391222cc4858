#
# bigdec Exceptions
#

# Local ----------------------------------------------------------------------------------------------------------------
from .formatters import fmt_value


# Classes --------------------------------------------------------------------------------------------------------------

class FormatError(ValueError):
    """
    Raised when text is neither a special-value token nor a decimal literal.

    Attributes:
        text: The rejected input.
        reason: Short description of the first rule the input broke, or None.
    """

    def __init__(self, text: str, reason: str | None = None) -> None:
        self.text = text
        self.reason = reason
        message = f"invalid decimal literal {fmt_value(text)}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
