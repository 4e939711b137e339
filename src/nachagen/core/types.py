"""Type aliases used across nachagen."""

from __future__ import annotations

from typing import Any

JsonDict = dict[str, Any]
RoutingNumber = str  # 9 digits: 8-digit DFI identifier + check digit
DfiIdentifier = str  # 8 digits
Cents = int
BatchNumber = int
SequenceNumber = int
