from decimal import Decimal, ROUND_DOWN
from typing import Union

IEC_UNITS = ["B", "KiB", "MiB", "GiB", "TiB"]
IEC_STEP = 1024

NS_TO_S = 1000000000
# user/system times in cpuacct.stat are reported in USER_HZ ticks
TICKS_TO_S = 100


def format_bytes(value: int) -> str:
    """
    Renders a byte count with binary IEC units, flooring at each
    step and never going past TiB.
    """
    value = int(value)
    unit = 0
    while value >= IEC_STEP and unit < len(IEC_UNITS) - 1:
        value //= IEC_STEP
        unit += 1
    return f"{value}{IEC_UNITS[unit]}"


def truncated_ratio(
    numerator: Union[int, Decimal], denominator: Union[int, Decimal], places: int
) -> Decimal:
    """
    Divides keeping only the given number of decimal places,
    truncating the remaining digits.
    """
    exponent = Decimal(1).scaleb(-places)
    return (Decimal(numerator) / Decimal(denominator)).quantize(
        exponent, rounding=ROUND_DOWN
    )
