"""Leading-emoji extraction.

The emoji of a record is derived from its text alone. The rule works on
UTF-16 code units: a leading high surrogate takes its following unit with
it, anything else is a single unit. Python strings index code points, so
the text is encoded to UTF-16 before the rule is applied.
"""

_HIGH_SURROGATE_MIN = 0xD800
_HIGH_SURROGATE_MAX = 0xDBFF


def token_of(text: str) -> str:
    """Return the leading emoji (or character) of ``text``."""
    units = text.encode("utf-16-le", "surrogatepass")
    if len(units) >= 4:
        first = int.from_bytes(units[0:2], "little")
        if _HIGH_SURROGATE_MIN <= first <= _HIGH_SURROGATE_MAX:
            # Surrogate pair: one astral-plane character
            return units[0:4].decode("utf-16-le", "surrogatepass")
    return units[0:2].decode("utf-16-le", "surrogatepass")
