"""
Exceptions raised by the pixtone toolkit.
"""

from numbers import Real


class DomainError(ValueError):
    """
    Raised when a caller-supplied value lies outside its valid range.

    Always raised before any pixel is modified, so an image is never left
    half-processed by a rejected call.
    """

    def __init__(self, name: str, low=None, high=None, value=None, requirement: str | None = None):
        self.name = name
        self.low = low
        self.high = high
        self.value = value
        if requirement is None:
            requirement = f"Must be between {low} and {high} inclusive."
        message = f"Invalid parameter supplied for {name}. {requirement}"
        if value is not None:
            message += f" Got: {value!r}"
        super().__init__(message)


def check_range(name: str, value, low, high) -> None:
    """Raise DomainError unless value is a number with low <= value <= high."""
    if not isinstance(value, Real):
        raise DomainError(name, low, high, value)
    if value < low or value > high:
        raise DomainError(name, low, high, value)
