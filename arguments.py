"""Command-line overrides for the RTSP relay configuration."""

import sys
from enum import Enum, auto

from config import parse_scale
from exceptions import ConfigurationError, MalformedOptionError
from logger import get_logger

logger = get_logger(__name__)

# getopt-style: a trailing ':' marks an option that takes a value
OPTSTRING = "r:u:l:p:b:f:s:i:ht"

# Options whose value replaces the field verbatim
TEXT_OPTIONS = {
    "u": "username",
    "p": "password",
    "i": "input",
    "l": "address",
    "b": "port",
    "f": "framerate",
}

USAGE = (
    "Usage: {program} [-l address] [-b port] [-r route] [-i input] "
    "[-u username] [-p password] [-f framerate] [-s 'width'x'height'] [-t] [-h]\n"
)


class Disposition(Enum):
    """Outcome of applying command-line arguments."""
    CONTINUE = auto()
    HELP_REQUESTED = auto()
    FAILED = auto()


def usage(program):
    return USAGE.format(program=program)


def scan_options(args, optstring=OPTSTRING):
    """Yield ``(option, value)`` pairs from short options, one at a time.

    Flags may be clustered (``-th``) and a value may be attached
    (``-s800x600``) or given as the next token, which is taken even when
    it starts with '-'. ``--`` stops scanning and operands are skipped.
    Errors are raised only when the offending option is reached, so
    nothing after an option the caller stops on is examined.
    """
    takes_value = {
        option for option, marker in zip(optstring, optstring[1:] + " ")
        if option != ":" and marker == ":"
    }
    known = set(optstring) - {":"}

    index = 0
    while index < len(args):
        token = args[index]
        index += 1
        if token == "--":
            return
        if not token.startswith("-") or token == "-":
            logger.debug(f"Skipping operand {token!r}")
            continue

        position = 1
        while position < len(token):
            option = token[position]
            position += 1
            if option not in known:
                raise MalformedOptionError(option)
            if option not in takes_value:
                yield option, None
                continue
            if position < len(token):
                value = token[position:]
            elif index < len(args):
                value = args[index]
                index += 1
            else:
                raise MalformedOptionError(option, missing_value=True)
            yield option, value
            break


def apply_arguments(config, argv=None, out=None):
    """Overwrite configuration fields named on the command line.

    The configuration is updated in place. Options applied before a
    failure stay applied.

    Args:
        config: Configuration produced by ``config.from_environment``.
        argv: Argument vector with the program name first. Defaults to sys.argv.
        out: Stream for the usage text. Defaults to sys.stdout.

    Returns:
        Disposition: CONTINUE, HELP_REQUESTED or FAILED.
    """
    if argv is None:
        argv = sys.argv
    if out is None:
        out = sys.stdout
    program = argv[0] if argv else "rtsp-relay"

    try:
        for option, value in scan_options(argv[1:]):
            if option == "h":
                out.write(usage(program))
                return Disposition.HELP_REQUESTED
            if option == "t":
                config.time = True
                continue

            # The value was the next flag, so this option never got one
            if value.startswith("-"):
                logger.debug(f"Ignoring -{option}: value {value!r} looks like an option")
                continue

            if option == "r":
                if not value.startswith("/"):
                    config.route = "/"
                config.route += value
            elif option == "s":
                config.scale = parse_scale(value)
            else:
                setattr(config, TEXT_OPTIONS[option], value)
            logger.debug(f"-{option} applied")
    except ConfigurationError as e:
        logger.error(str(e))
        return Disposition.FAILED

    return Disposition.CONTINUE
