"""
Leasable ridge pasture.
"""

from dataclasses import dataclass
from typing import List, Optional

from farming.config import RIDGES
from farming.exceptions import InvalidOperationError


@dataclass
class Ridge:
    """A ridge that one player may lease to run cows on."""

    name: str
    cost: int
    initial_cow_count: int
    cow_count: int = 0
    leased_by: Optional[int] = None

    def is_leased(self) -> bool:
        return self.leased_by is not None

    def can_add_cows(self, count: int) -> bool:
        return self.cow_count + count <= self.initial_cow_count

    def add_cows(self, count: int) -> None:
        if not self.can_add_cows(count):
            raise InvalidOperationError(
                f"{self.name} Ridge holds at most {self.initial_cow_count} cows"
            )
        self.cow_count += count

    def remove_cows(self, count: int) -> None:
        self.cow_count = max(0, self.cow_count - count)

    def lease(self, player_id: int, initial_cows: int) -> None:
        """Bind the ridge to a player and stock it to capacity."""
        if self.is_leased():
            raise InvalidOperationError(
                f"{self.name} Ridge is already leased by player {self.leased_by}"
            )
        if initial_cows != self.initial_cow_count:
            raise InvalidOperationError(
                f"{self.name} Ridge must be stocked with exactly {self.initial_cow_count} cows"
            )
        self.leased_by = player_id
        self.cow_count = initial_cows


def create_ridges() -> List[Ridge]:
    """Create the four ridges, all unleased and empty."""
    return [Ridge(data.name, data.cost, data.cow_capacity) for data in RIDGES]
