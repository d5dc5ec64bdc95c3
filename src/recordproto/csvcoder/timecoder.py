# recordproto:header:start
#
#   project      : RecordProto
#   file         : timecoder.py
#   file_relpath : src/recordproto/csvcoder/timecoder.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""Text coder for `datetime.datetime` cells.

The coder reads its format from the `Context`:

- ``TIME_LAYOUT_KEY``: a `datetime.strptime` format. Without it, ISO-8601 is used.
- ``TIME_ZONE_KEY``: an IANA zone name applied to naive timestamps.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Final
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from recordproto.textcoder import ParseError, must_register

if TYPE_CHECKING:
    from recordproto.textcoder import Context, Ref

TIME_LAYOUT_KEY: Final[str] = "time_layout"
TIME_ZONE_KEY: Final[str] = "time_zone"


def _layout(ctx: Context | None) -> str | None:
    return ctx.get(TIME_LAYOUT_KEY) if ctx is not None else None


def load_zone(name: str) -> ZoneInfo:
    """Return the time zone named ``name``.

    Raises:
        ValueError: If the zone is unknown.
    """
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"unknown time zone {name!r}") from exc


def encode_datetime(ctx: Context | None, value: datetime) -> str:
    layout = _layout(ctx)
    if layout is None:
        return value.isoformat()
    return value.strftime(layout)


def decode_datetime(ctx: Context | None, text: str, out: Ref[datetime]) -> None:
    layout = _layout(ctx)
    try:
        parsed = datetime.fromisoformat(text) if layout is None else datetime.strptime(text, layout)
    except ValueError as exc:
        raise ParseError(text, f"not a timestamp matching {layout or 'ISO-8601'!r}") from exc
    zone_name = ctx.get(TIME_ZONE_KEY) if ctx is not None else None
    if zone_name and parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=load_zone(zone_name))
    out.value = parsed


must_register(datetime, encode_datetime, decode_datetime)
