import math

INCH = float
LB = float


def round_up(value: float) -> int:
    """Round a weight or dimension up to a non-negative integer."""
    return max(0, int(math.ceil(value)))


def format_inches(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def format_dims(*values: float) -> str:
    return "x".join(format_inches(v) for v in values)
