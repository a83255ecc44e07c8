# capturebot/log_parser.py

import logging
import re
from dataclasses import dataclass

# ---------- Events ----------
@dataclass(frozen=True)
class CaptureStarted:
    gang1: str
    gang2: str
    start: str
    weapon: str


@dataclass(frozen=True)
class HitRecorded:
    gang: str
    nick: str
    hits: int
    headshots: int
    damage: int


@dataclass(frozen=True)
class Unrecognized:
    line: str


# ---------- Line formats ----------
# [HIT] gang=Ballas nick=AV_ASSA hits=3 headshots=1 dmg=90
HIT_MARKER = "[HIT]"
HIT_LINE = re.compile(r'\[HIT\]\s+gang=(.*?)\s+nick=(.*?)\s+hits=(\d+)\s+headshots=(\d+)\s+dmg=(\d+)')

# [CAPTURE] gang1=Ballas gang2=Families start=20:00 weapon=Desert Eagle
CAPTURE_MARKER = "[CAPTURE]"
CAPTURE_LINE = re.compile(r'\[CAPTURE\]\s+gang1=(.*?)\s+gang2=(.*?)\s+start=(.*?)\s+weapon=(.*)$')


def _build_hit(m):
    return HitRecorded(
        gang=m.group(1).lower(),
        nick=m.group(2),
        hits=int(m.group(3), 10),
        headshots=int(m.group(4), 10),
        damage=int(m.group(5), 10),
    )


def _build_capture(m):
    return CaptureStarted(
        gang1=m.group(1).lower(),
        gang2=m.group(2).lower(),
        start=m.group(3),
        weapon=m.group(4),
    )


# Checked in order; the first marker found in a line decides which pattern applies.
LINE_MATCHERS = [
    ("HIT", HIT_MARKER, HIT_LINE, _build_hit),
    ("CAPTURE", CAPTURE_MARKER, CAPTURE_LINE, _build_capture),
]


def parse_line(line):
    """Classify one log line as CaptureStarted, HitRecorded or Unrecognized.

    Never raises for malformed input: a line carrying a known marker that does
    not fit its pattern is logged and reported as Unrecognized.
    """
    if not line:
        return Unrecognized(line or "")
    line = line.rstrip("\r\n")

    for name, marker, pattern, build in LINE_MATCHERS:
        if marker not in line:
            continue
        m = pattern.search(line)
        if not m:
            logging.info(f"{name} line didn't match expected format: {line}")
            return Unrecognized(line)
        return build(m)

    return Unrecognized(line)
