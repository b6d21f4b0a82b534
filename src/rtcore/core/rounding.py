"""Integer rounding used when partitioning image regions."""


def round_down_to_multiple_of(value: int, multiple: int) -> int:
    """Round a value down to a multiple of another value.

    The remainder follows C semantics (it takes the sign of ``value``). It is
    only subtracted when it is strictly greater than 1, so a remainder of 1
    leaves the value unchanged: ``(10, 3) -> 10`` but ``(11, 3) -> 9``.

    Args:
        value: The value to round.
        multiple: The step to round to.

    Returns:
        The rounded value.

    Raises:
        ValueError: If multiple is zero.
    """
    if multiple == 0:
        raise ValueError("Cannot round to a multiple of 0")

    rest = abs(value) % abs(multiple)
    if value < 0:
        rest = -rest

    return value - rest if rest > 1 else value
