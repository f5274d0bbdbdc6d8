"""Duration and timestamp helpers for light-client expiration tracking.

Chains report trusting periods as Go duration strings (``336h0m0s``) and
consensus states carry RFC3339 timestamps with nanosecond precision.
"""
import datetime
import re
from decimal import Decimal
from typing import Optional, Union

DurationLike = Union[str, datetime.timedelta]
TimestampLike = Union[str, datetime.datetime]

# microseconds per unit
_UNIT_US = {
    'ns': Decimal('0.001'),
    'us': Decimal(1),
    'µs': Decimal(1),
    'μs': Decimal(1),
    'ms': Decimal(1000),
    's': Decimal(1_000_000),
    'm': Decimal(60_000_000),
    'h': Decimal(3_600_000_000),
}

_TOKEN = r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|h|m|s)"
DURATION_RE = re.compile(_TOKEN)
_DURATION_FULL_RE = re.compile(rf"([+-]?)((?:{_TOKEN})+)")

_RFC3339_RE = re.compile(
    r"(?P<date>\d{4}-\d{2}-\d{2})T(?P<time>\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<fraction>\d+))?"
    r"(?P<offset>Z|[+\-]\d{2}:\d{2})"
)


def parse_duration(dur: str) -> datetime.timedelta:
    """Parse a Go duration string such as ``336h0m0s``, ``1.5s`` or ``-2m``."""
    dur = (dur or "").strip()
    if dur in ("0", "+0", "-0"):
        return datetime.timedelta(0)
    m = _DURATION_FULL_RE.fullmatch(dur)
    if not m:
        raise ValueError(f"invalid duration {dur!r}")
    total = Decimal(0)
    for value, unit in DURATION_RE.findall(m.group(2)):
        total += Decimal(value) * _UNIT_US[unit]
    micros = int(total.to_integral_value())
    if m.group(1) == '-':
        micros = -micros
    return datetime.timedelta(microseconds=micros)


def _with_fraction(whole: int, frac: int, digits: int) -> str:
    if not frac:
        return str(whole)
    return f"{whole}.{str(frac).rjust(digits, '0').rstrip('0')}"


def format_duration(d: datetime.timedelta) -> str:
    """Render a timedelta the way Go's ``time.Duration.String`` does."""
    micros = (d.days * 86400 + d.seconds) * 1_000_000 + d.microseconds
    if micros == 0:
        return "0s"
    sign = "-" if micros < 0 else ""
    micros = abs(micros)

    if micros < 1000:
        return f"{sign}{micros}µs"
    if micros < 1_000_000:
        return f"{sign}{_with_fraction(micros // 1000, micros % 1000, 3)}ms"

    secs, frac = divmod(micros, 1_000_000)
    hours, rem = divmod(secs, 3600)
    minutes, seconds = divmod(rem, 60)
    out = _with_fraction(seconds, frac, 6) + "s"
    if hours:
        return f"{sign}{hours}h{minutes}m{out}"
    if minutes:
        return f"{sign}{minutes}m{out}"
    return sign + out


def parse_timestamp(ts: str) -> datetime.datetime:
    """Timezone-aware datetime for a consensus state timestamp.

    Digits past microseconds are dropped, so nanosecond timestamps reported
    by chains round down.
    """
    m = _RFC3339_RE.fullmatch((ts or "").upper())
    if not m:
        raise ValueError(f"invalid RFC3339 timestamp {ts!r}")
    offset = m.group("offset")
    tzinfo = datetime.timezone.utc
    if offset != "Z":
        hours, minutes = offset[1:].split(":")
        delta = datetime.timedelta(hours=int(hours), minutes=int(minutes))
        tzinfo = datetime.timezone(-delta if offset[0] == "-" else delta)
    micros = int((m.group("fraction") or "0")[:6].ljust(6, "0"))
    naive = datetime.datetime.strptime(f"{m.group('date')}T{m.group('time')}", "%Y-%m-%dT%H:%M:%S")
    return naive.replace(microsecond=micros, tzinfo=tzinfo)


def time_to_expiration(
    trusting_period: DurationLike,
    last_update: TimestampLike,
    now: Optional[datetime.datetime] = None,
) -> datetime.timedelta:
    """Time left before a client whose consensus state was last updated at
    ``last_update`` falls outside its trusting period. Negative once expired."""
    if isinstance(trusting_period, str):
        trusting_period = parse_duration(trusting_period)
    if isinstance(last_update, str):
        last_update = parse_timestamp(last_update)
    if now is None:
        now = datetime.datetime.now(datetime.timezone.utc)
    return last_update + trusting_period - now
