"""Escape-time iteration for a single point of the complex plane."""

BOUNDED = -1
ESCAPE_RADIUS_SQUARED = 4.0


def escape_time(c_real: float, c_imag: float, max_iterations: int) -> int:
    """Return the step at which the orbit of ``c`` escapes, or ``BOUNDED``.

    The orbit starts at ``z = c``. At step ``n`` the squared magnitude of the
    current ``z`` is measured before ``z`` is advanced; if it exceeds 4 the
    point escaped at ``n``. The result is in ``[0, max_iterations)`` or
    ``BOUNDED`` when the cap is reached, including a cap of zero.
    """

    real = c_real
    imag = c_imag
    n = 0
    while n < max_iterations:
        real2 = real * real
        imag2 = imag * imag
        imag = 2 * real * imag + c_imag
        real = real2 - imag2 + c_real
        if real2 + imag2 > ESCAPE_RADIUS_SQUARED:
            return n
        n += 1
    return BOUNDED
