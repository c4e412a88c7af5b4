"""Verbose-gated console output."""

VERBOSE = False


def set_verbose(enabled: bool) -> None:
    global VERBOSE
    VERBOSE = bool(enabled)


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, **kwargs)
