from enum import Enum

# Canonical red/black assignment; it does not follow parity
COLORS = {
    "0": "green",
    "00": "green",
    1: "red", 2: "black", 3: "red", 4: "black", 5: "red", 6: "black",
    7: "red", 8: "black", 9: "red", 10: "black", 11: "black", 12: "red",
    13: "black", 14: "red", 15: "black", 16: "red", 17: "black", 18: "red",
    19: "red", 20: "black", 21: "red", 22: "black", 23: "red", 24: "black",
    25: "red", 26: "black", 27: "red", 28: "black", 29: "black", 30: "red",
    31: "black", 32: "red", 33: "black", 34: "red", 35: "black", 36: "red",
}

NUMBERS = list(range(1, 37))


class WheelType(Enum):
    EUROPEAN = "european"
    AMERICAN = "american"

    def __str__(self):
        return self.value


def as_wheel_type(wheel):
    # Accepts a WheelType member or its string value
    if isinstance(wheel, WheelType):
        return wheel
    try:
        return WheelType(wheel)
    except ValueError:
        raise ValueError(f"Unknown wheel type: {wheel!r}") from None


def slots_for(wheel):
    wheel = as_wheel_type(wheel)
    if wheel is WheelType.EUROPEAN:
        return ["0", *NUMBERS]
    return ["0", *NUMBERS, "00"]


def total_slots(wheel):
    return len(slots_for(wheel))


def color_of(slot):
    # bool is an int subclass, but True is not a slot
    if isinstance(slot, bool) or slot not in COLORS:
        raise ValueError(f"Not a roulette slot: {slot!r}")
    return COLORS[slot]


class EuropeanRoulette:
    # Class representing a European roulette
    # A single zero followed by 1-36, 37 slots in total

    wheel_type = WheelType.EUROPEAN

    def __init__(self):
        self.numbers = [(slot, color_of(slot)) for slot in slots_for(self.wheel_type)]

    @property
    def slots(self):
        return [slot for slot, _ in self.numbers]

    @property
    def total_slots(self):
        return len(self.numbers)

    def covers(self, slot):
        # Exact match: True and 17.0 are not slots
        return any(type(slot) is type(number) and slot == number for number, _ in self.numbers)


class AmericanRoulette(EuropeanRoulette):
    # Class representing an American roulette
    # Adds the double zero, 38 slots in total

    wheel_type = WheelType.AMERICAN


def create_wheel(wheel_name):
    """Create a fresh wheel instance from name."""
    if wheel_name in ("EuropeanRoulette", WheelType.EUROPEAN, WheelType.EUROPEAN.value):
        return EuropeanRoulette()
    elif wheel_name in ("AmericanRoulette", WheelType.AMERICAN, WheelType.AMERICAN.value):
        return AmericanRoulette()
    else:
        raise ValueError(f"Unknown wheel: {wheel_name}")
