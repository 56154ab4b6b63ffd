"""Text colorization for terminal output.

Provides lightweight formatting using \\-X- escape-like codes in strings.

Syntax:
    \\-r-  red        \\-g-  green      \\-y-  yellow     \\-c-  cyan
    \\-s-  strong (bold/bright)         \\-d-  dim
    \\-n-  normal (reset all)

Examples:
    "\\-s-users.oops:3:5\\-n- \\-r-DoesNotUnderstand\\-n-"
"""

import os
import re


# ANSI escape codes for colors and styles
CODES = {
    "r": "\033[31m",  # red
    "g": "\033[32m",  # green
    "y": "\033[33m",  # yellow
    "c": "\033[36m",  # cyan
    "s": "\033[1m",   # strong (bold/bright)
    "d": "\033[2m",   # dim
    "n": "\033[0m",   # normal (reset)
}

# Pattern to match color codes like \-r-, \-rs-, \-gd-, etc.
COLOR_CODE_PATTERN = re.compile(r"\\-([rgycsdn]+)-")


def apply_ansi(text):
    """Replace color codes with ANSI escape sequences.

    A reset code is appended when any color code was applied.
    """
    count = 0

    def replace_code(match):
        nonlocal count
        count += 1
        return "".join(CODES[c] for c in match.group(1))

    result = COLOR_CODE_PATTERN.sub(replace_code, text)
    if count:
        result += CODES["n"]
    return result


def strip_codes(text):
    """Remove all color codes from text."""
    return COLOR_CODE_PATTERN.sub("", text)


def should_use_color(stream):
    """Determine if color output should be used.

    Colors need a TTY stream and no NO_COLOR environment variable
    (https://no-color.org/).
    """
    if os.environ.get("NO_COLOR") is not None:
        return False
    try:
        return stream.isatty()
    except AttributeError:
        return False


def render(text, stream):
    """Apply or strip color codes to suit the stream."""
    if should_use_color(stream):
        return apply_ansi(text)
    return strip_codes(text)
