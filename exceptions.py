class RouletteOddsError(Exception):
    # Base class for validation failures raised by the odds calculator
    def __init__(self, message, details=None):
        super().__init__(message)
        self.message = message
        self.details = details if details is not None else {}


class InvalidStake(RouletteOddsError, ValueError):
    def __init__(self, amount, message=None):
        super().__init__(
            message or f"Stake must be a positive finite number, got {amount!r}",
            details={"amount": amount}
        )
        self.amount = amount


class UnknownArea(RouletteOddsError, KeyError):
    def __init__(self, area_id, wheel=None):
        message = f"Unknown bet area: {area_id!r}"
        if wheel is not None:
            message += f" on {wheel} wheel"
        super().__init__(message, details={"area_id": area_id, "wheel": wheel})
        self.area_id = area_id
        self.wheel = wheel

    def __str__(self):
        # KeyError would otherwise repr() the message
        return self.message


class EmptyWheel(RouletteOddsError):
    def __init__(self, wheel=None):
        super().__init__(
            f"Wheel {wheel!r} has no slots" if wheel is not None else "Wheel has no slots",
            details={"wheel": wheel}
        )
        self.wheel = wheel
