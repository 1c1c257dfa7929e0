import logging
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Tuple, Union

from exceptions import EmptyWheel, UnknownArea
from roulette_wheels import NUMBERS, WheelType, as_wheel_type, color_of, slots_for

logger = logging.getLogger(__name__)

Slot = Union[int, str]

INSIDE = "inside"
OUTSIDE = "outside"
SPECIAL = "special"

# Profit multiple paid for an area covering this many slots
PAYOUT_FOR_COVERAGE = {
    1: 35,
    2: 17,
    3: 11,
    4: 8,
    5: 6,
    6: 5,
    12: 2,
    18: 1,
}


@dataclass(frozen=True)
class BetArea:
    id: str
    label: str
    covered: Tuple[Slot, ...]
    payout: int
    kind: str

    def covers(self, slot):
        # Exact match: 17 and "17" are different slots
        return any(type(slot) is type(n) and slot == n for n in self.covered)


def _rows():
    # The 12 rows of the table layout: 1-2-3, 4-5-6, ..., 34-35-36
    return [NUMBERS[i:i + 3] for i in range(0, 36, 3)]


def _straights(wheel):
    return [
        BetArea(f"straight-{slot}", f"{slot}", (slot,), 35, INSIDE)
        for slot in slots_for(wheel)
    ]


def _inside_groups(rows):
    splits = []
    streets = []
    corners = []
    lines = []

    for r, row in enumerate(rows):
        streets.append(BetArea(f"street-{r}", f"{row[0]}-{row[2]} (row)", tuple(row), 11, INSIDE))

        # Horizontal splits within the row
        for a, b in zip(row, row[1:]):
            splits.append(BetArea(f"split-{a}-{b}", f"{a}-{b}", (a, b), 17, INSIDE))

        if r == len(rows) - 1:
            continue

        nxt = rows[r + 1]
        # Vertical splits with the next row
        for a, b in zip(row, nxt):
            splits.append(BetArea(f"split-{a}-{b}", f"{a}-{b}", (a, b), 17, INSIDE))

        for c in range(2):
            block = (row[c], row[c + 1], nxt[c], nxt[c + 1])
            name = "-".join(str(n) for n in block)
            corners.append(BetArea(f"corner-{name}", name, block, 8, INSIDE))

        lines.append(
            BetArea(f"line-{row[0]}-{nxt[2]}", f"{row[0]}-{nxt[2]} (line)", (*row, *nxt), 5, INSIDE)
        )

    return splits, streets, corners, lines


def _outside_groups():
    columns = [
        BetArea(f"col-{i + 1}", f"Column {i + 1}", tuple(NUMBERS[i::3]), 2, OUTSIDE)
        for i in range(3)
    ]
    dozens = [
        BetArea(f"dozen-{i + 1}", label, tuple(NUMBERS[i * 12:(i + 1) * 12]), 2, OUTSIDE)
        for i, label in enumerate(["1st 12", "2nd 12", "3rd 12"])
    ]

    # Zero and double zero are never part of an even-money group
    groups = [
        ("red", "Red", lambda n: color_of(n) == "red"),
        ("black", "Black", lambda n: color_of(n) == "black"),
        ("even", "Even", lambda n: n % 2 == 0),
        ("odd", "Odd", lambda n: n % 2 == 1),
        ("low", "1-18", lambda n: n <= 18),
        ("high", "19-36", lambda n: n >= 19),
    ]
    even_money = [
        BetArea(area_id, label, tuple(n for n in NUMBERS if test(n)), 1, OUTSIDE)
        for area_id, label, test in groups
    ]
    return columns, dozens, even_money


@lru_cache(maxsize=None)
def _build(wheel):
    splits, streets, corners, lines = _inside_groups(_rows())
    columns, dozens, even_money = _outside_groups()

    areas = [
        *_straights(wheel),
        *splits,
        *streets,
        *corners,
        *lines,
        *columns,
        *dozens,
        *even_money,
    ]
    if wheel is WheelType.AMERICAN:
        areas.append(BetArea("topline", "0-00-1-2-3 (Top Line)", ("0", "00", 1, 2, 3), 6, SPECIAL))

    areas = tuple(areas)
    validate_catalog(areas, wheel)
    logger.debug("Built %d bet areas for %s wheel", len(areas), wheel)
    return areas


def build_bet_areas(wheel):
    """
    Build every bettable area of a wheel.

    The result is a tuple of frozen BetArea records, built once per wheel type
    and shared between callers.
    """
    return _build(as_wheel_type(wheel))


@lru_cache(maxsize=None)
def _lookup(wheel):
    return MappingProxyType({area.id: area for area in _build(wheel)})


def area_lookup(wheel):
    """Read-only mapping of area id to BetArea for a wheel."""
    return _lookup(as_wheel_type(wheel))


def get_area(area_id, wheel):
    lookup = area_lookup(wheel)
    if area_id not in lookup:
        raise UnknownArea(area_id, as_wheel_type(wheel).value)
    return lookup[area_id]


def validate_catalog(areas, wheel):
    """
    Check a catalog against its wheel.

    Every area must cover a non-empty subset of the wheel's slots and pay the
    conventional multiple for its coverage. Ids must be unique.
    """
    slots = slots_for(wheel)
    if not slots:
        raise EmptyWheel(str(wheel))

    seen = set()
    for area in areas:
        if area.id in seen:
            raise ValueError(f"Duplicate bet area id: {area.id}")
        seen.add(area.id)

        if not area.covered:
            raise ValueError(f"Bet area {area.id} covers no slots")
        missing = [n for n in area.covered if not any(type(n) is type(s) and n == s for s in slots)]
        if missing:
            raise ValueError(f"Bet area {area.id} covers slots not on the wheel: {missing}")
        if area.payout <= 0:
            raise ValueError(f"Bet area {area.id} has non-positive payout {area.payout}")

        expected = PAYOUT_FOR_COVERAGE.get(len(area.covered))
        if expected != area.payout:
            raise ValueError(
                f"Bet area {area.id} covers {len(area.covered)} slots but pays {area.payout}:1"
            )
    return True
