"""Human-readable durations for configuration files.

Durations are written as a sequence of decimal numbers with a unit suffix,
optionally signed: "300ms", "1.5h", "2h45m", "-10s". Valid units are
"ns", "us" (or "µs"), "ms", "s", "m" and "h". The bare literal "0" needs
no unit.
"""

import logging
import re
from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal
from typing import Any

from .errors import DurationParseError


logger = logging.getLogger(__name__)


_NANOSECOND = 1
_MICROSECOND_NS = 1_000 * _NANOSECOND
_MILLISECOND_NS = 1_000 * _MICROSECOND_NS
_SECOND_NS = 1_000 * _MILLISECOND_NS
_MINUTE_NS = 60 * _SECOND_NS
_HOUR_NS = 60 * _MINUTE_NS

# Largest span representable in a signed 64-bit nanosecond count
_MAX_DURATION_NS = (1 << 63) - 1

_UNITS: dict[str, int] = {
    "ns": _NANOSECOND,
    "us": _MICROSECOND_NS,
    "µs": _MICROSECOND_NS,  # U+00B5 micro sign
    "μs": _MICROSECOND_NS,  # U+03BC greek mu
    "ms": _MILLISECOND_NS,
    "s": _SECOND_NS,
    "m": _MINUTE_NS,
    "h": _HOUR_NS,
}

_TERM_RE = re.compile(r"(?P<number>\d+(?:\.\d*)?|\.\d+)(?P<unit>[^\d.]*)", re.ASCII)

_ONE_MICROSECOND = timedelta(microseconds=1)

# Longest duration parse_duration accepts, at microsecond precision
MAX_DURATION = timedelta(microseconds=_MAX_DURATION_NS // _MICROSECOND_NS)


def duration_in_range(value: timedelta) -> bool:
    """Whether value can be written by format_duration and read back."""
    return -MAX_DURATION <= value <= MAX_DURATION


def parse_duration(text: str) -> timedelta:
    """Parse a duration string such as "1h30m" into a timedelta.

    Precision below one microsecond is truncated toward zero.

    Raises:
        ValueError: if the string is empty, lacks a unit, uses an unknown
            unit or is otherwise malformed.
    """
    if not isinstance(text, str):
        raise ValueError(f"invalid duration {text!r}")

    original = text
    negative = False
    if text and text[0] in "+-":
        negative = text[0] == "-"
        text = text[1:]

    if text == "0":
        return timedelta(0)
    if not text:
        raise ValueError(f"invalid duration {original!r}")

    total = Decimal(0)
    pos = 0
    while pos < len(text):
        match = _TERM_RE.match(text, pos)
        if match is None:
            raise ValueError(f"invalid duration {original!r}")
        unit = match.group("unit")
        if not unit:
            raise ValueError(f"missing unit in duration {original!r}")
        if unit not in _UNITS:
            raise ValueError(f"unknown unit {unit!r} in duration {original!r}")
        total += Decimal(match.group("number")) * _UNITS[unit]
        if total > _MAX_DURATION_NS:
            raise ValueError(f"invalid duration {original!r}")
        pos = match.end()

    microseconds = int(total) // _MICROSECOND_NS
    value = timedelta(microseconds=microseconds)
    return -value if negative else value


def _fraction(value: int, scale: int) -> str:
    """Render value/scale as a decimal, dropping trailing zeros."""
    whole, rest = divmod(value, scale)
    if not rest:
        return str(whole)
    digits = str(rest).rjust(len(str(scale)) - 1, "0").rstrip("0")
    return f"{whole}.{digits}"


def format_duration(value: timedelta) -> str:
    """Format a timedelta the way parse_duration reads it back.

    Examples: "0s", "250us", "1.5ms", "5s", "1m0s", "2h30m0s".
    """
    microseconds = value // _ONE_MICROSECOND
    if microseconds == 0:
        return "0s"

    sign = "-" if microseconds < 0 else ""
    ns = abs(microseconds) * _MICROSECOND_NS

    if ns < _MILLISECOND_NS:
        return f"{sign}{_fraction(ns, _MICROSECOND_NS)}us"
    if ns < _SECOND_NS:
        return f"{sign}{_fraction(ns, _MILLISECOND_NS)}ms"

    text = f"{_fraction(ns % _MINUTE_NS, _SECOND_NS)}s"
    minutes = ns // _MINUTE_NS
    if minutes:
        text = f"{minutes % 60}m{text}"
        hours = minutes // 60
        if hours:
            text = f"{hours}h{text}"
    return sign + text


@dataclass
class DurationOpt:
    """A duration string waiting to be parsed into an attribute."""

    # Raw value as found in the serialized configuration
    duration: str

    # External field name, used in error messages
    name: str

    # Attribute on the destination object
    attr: str


def parse_durations(component: str, target: Any, *opts: DurationOpt) -> None:
    """Parse several durations and assign them onto target.

    Options are handled in order. Empty strings are skipped so the attribute
    keeps its current value. The first failure raises DurationParseError and
    the remaining options are not looked at.
    """
    for opt in opts:
        if not opt.duration:
            logger.debug(f"{component}.{opt.name} not set, keeping default")
            continue
        try:
            value = parse_duration(opt.duration)
        except ValueError as e:
            raise DurationParseError(
                f"error parsing {component}.{opt.name}: {e}",
                component=component,
                field=opt.name,
                cause=e,
            ) from e
        setattr(target, opt.attr, value)
