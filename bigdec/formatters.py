"""
Formatting helpers for exception messages, logging, and reprs.

Every formatter is safe to call on arbitrary objects: broken __repr__ methods
and very long representations are handled without raising.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any, Final

PRIMITIVE_TYPES = (
    type(None),
    bool,  # Comes before int (is subclass of int)
    int,
    float,
    str,
    bytes,
)

# Longest repr shown in a message before truncation
MAX_REPR: Final[int] = 80


# Methods --------------------------------------------------------------------------------------------------------------


def class_name(obj: Any) -> str:
    """Get the class name of an object or a class."""
    cls = obj if isinstance(obj, type) else obj.__class__
    return cls.__name__


def fmt_type(obj: Any) -> str:
    """Format type information of an object or a type for exception messages.

    Examples:
        >>> fmt_type(42)
        '<int>'
    """
    return f"<{class_name(obj)}>"


def fmt_value(obj: Any) -> str:
    """
    Format a single value as a type–value pair for exception messages.

    Primitives are shown as their bare repr, everything else is labelled
    with its type name. Reprs longer than MAX_REPR are truncated with an
    ellipsis, placed outside the quotes for strings.

    Examples:
        >>> fmt_value("1.5x")
        "'1.5x'"

        >>> fmt_value([1, 2])
        '<list: [1, 2]>'
    """
    repr_ = _fmt_truncate(_safe_repr(obj).replace(">", "\\>"), MAX_REPR)
    if type(obj) in PRIMITIVE_TYPES:
        return repr_
    return f"<{type(obj).__name__}: {repr_}>"


# Private Methods ------------------------------------------------------------------------------------------------------


def _fmt_truncate(repr_: str, max_len: int) -> str:
    """Truncate a repr to max_len characters, keeping quotes of string reprs balanced."""
    if len(repr_) <= max_len:
        return repr_

    quoted = len(repr_) >= 2 and repr_[0] == repr_[-1] and repr_[0] in "'\""
    if quoted:
        # Keep both quotes and at least one character between them
        inner = repr_[1:max(2, max_len - 1)]
        return f"{repr_[0]}{inner}{repr_[0]}..."

    return repr_[:max(1, max_len)] + "..."


def _safe_repr(obj) -> str:
    try:
        return repr(obj)
    except Exception as e:
        return f"<{type(obj).__name__} object (repr failed: {type(e).__name__})>"
