def round_div_ties_away_from_zero(a: int, b: int) -> int:
    """Nearest integer to a/b, with halves rounded away from zero. b must be positive."""
    if b <= 0:
        raise ValueError(f"Divisor must be positive, got {b}")

    q = (abs(a) + b // 2) // b
    return q if a >= 0 else -q
