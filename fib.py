import logging
from typing import Iterator

import click

logger = logging.getLogger(__name__)

DEFAULT_BITS = 32
INT32_MIN = -(1 << 31)
INT32_MAX = (1 << 31) - 1


class InvalidArgument(ValueError):
    """Raised when an argument lies outside the domain of the computation."""

    def __init__(self, parameter: str, value, message: str):
        super().__init__(f"{parameter}={value!r}: {message}")
        self.parameter = parameter
        self.value = value


def _check_bits(bits: int) -> None:
    if isinstance(bits, bool) or not isinstance(bits, int):
        raise TypeError("bits must be an int")
    if not 2 <= bits <= 64:
        raise InvalidArgument("bits", bits, "width must be between 2 and 64")


def _check_index(n: int) -> None:
    if isinstance(n, bool) or not isinstance(n, int):
        raise TypeError("n must be an int")
    if n < 0:
        raise InvalidArgument("n", n, "index must be non-negative")


def _wrap(value: int, bits: int) -> int:
    mask = (1 << bits) - 1
    value &= mask
    if value >> (bits - 1):
        value -= 1 << bits
    return value


def wrap(value: int, bits: int = DEFAULT_BITS) -> int:
    """Reduce value to the signed two's-complement range of the given width."""
    _check_bits(bits)
    return _wrap(value, bits)


def fib(n: int, bits: int = DEFAULT_BITS) -> int:
    """Return the n-th Fibonacci number, with fib(0) == 0 and fib(1) == 1.

    Additions wrap around like native fixed-width signed integers, so at the
    default 32 bits fib(47) comes back negative instead of raising.

    Raises:
        InvalidArgument: n is negative or bits is outside 2..64.
        TypeError: n or bits is not an int.
    """
    _check_index(n)
    _check_bits(bits)
    if n < 2:
        return n
    a, b = 0, 1
    for _ in range(2, n + 1):
        a, b = b, _wrap(a + b, bits)
    return b


def first_wrapped_index(bits: int = DEFAULT_BITS) -> int:
    """Return the smallest n whose true Fibonacci number does not fit in bits."""
    _check_bits(bits)
    limit = 1 << (bits - 1)
    n, a, b = 1, 0, 1
    while b < limit:
        n, a, b = n + 1, b, a + b
    return n


def fib_sequence(n: int, bits: int = DEFAULT_BITS) -> Iterator[int]:
    """Return an iterator over the first n terms, fib(0) through fib(n - 1).

    Arguments are checked on the call, before any term is produced.
    """
    _check_index(n)
    _check_bits(bits)

    def terms():
        a, b = 0, 1
        for _ in range(n):
            yield a
            a, b = b, _wrap(a + b, bits)

    return terms()


@click.command()
@click.option("-n", "--n", "n", type=click.IntRange(min=0), default=10,
              envvar="FIB_N", show_default=True, help="Index of the term to compute.")
@click.option("--bits", type=click.IntRange(2, 64), default=DEFAULT_BITS,
              envvar="FIB_BITS", show_default=True, help="Signed integer width.")
@click.option("--sequence", is_flag=True, help="Print every term from fib(0) up to fib(n).")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
def main(n, bits, sequence, verbose):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.debug("computing n=%d bits=%d sequence=%s", n, bits, sequence)
    if sequence:
        for value in fib_sequence(n + 1, bits):
            print(value)
        return
    value = fib(n, bits)
    if n >= first_wrapped_index(bits):
        logger.debug("fib(%d) wrapped around at %d bits", n, bits)
    print(value)


if __name__ == "__main__":
    main()
