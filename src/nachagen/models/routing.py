"""ABA routing number check digits."""

from __future__ import annotations

_WEIGHTS = (3, 7, 1)


def compute_check_digit(dfi_identifier: str) -> int:
    """Check digit for an 8-digit DFI identifier (3-7-1 weighting, mod 10)."""
    if len(dfi_identifier) != 8 or not dfi_identifier.isdigit():
        raise ValueError(f"DFI identifier must be 8 digits, got {dfi_identifier!r}")
    total = sum(int(digit) * _WEIGHTS[i % 3] for i, digit in enumerate(dfi_identifier))
    return (10 - total % 10) % 10


def with_check_digit(routing: str) -> str:
    """Append the check digit to an 8-digit identifier; return anything else unchanged."""
    if len(routing) == 8 and routing.isdigit():
        return f"{routing}{compute_check_digit(routing)}"
    return routing


def is_valid_routing_number(routing: str) -> bool:
    if len(routing) != 9 or not routing.isdigit():
        return False
    return compute_check_digit(routing[:8]) == int(routing[8])
