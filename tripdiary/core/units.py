from decimal import Decimal, ROUND_HALF_UP

_ONE_DECIMAL = Decimal("0.1")


def meters_to_km(meters: float) -> float:
    return float(meters) / 1000


def round_km(value: float) -> float:
    """Round a kilometer value to one decimal place, half away from zero.

    The float is rounded through its shortest decimal representation, so
    25.25 becomes 25.3 and 8.100000000000001 becomes 8.1. Every displayed
    distance (segment, route total, daily total) goes through here.
    """
    return float(Decimal(str(value)).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))
