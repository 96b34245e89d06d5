"""
Simulation clock tracking the tick sequence.
"""

from collections import deque
from typing import Optional

from .config import InvalidConfiguration


class SimulationClock:
    """
    Monotonic tick sequence.

    times[0] is 0 and every tick appends times[-1] + dt. The current index is
    the index of the newest entry in every living agent's history. With a
    history limit only the newest times are retained, like agent histories.
    """

    def __init__(self, dt: float, end_time: float, history_limit: Optional[int] = None):
        """
        Initialize the clock.

        Args:
            dt: Time step per tick
            end_time: Time at which run() stops
            history_limit: Number of tick times to retain (None keeps all)

        Raises:
            InvalidConfiguration: If dt is not positive
        """
        if dt <= 0:
            raise InvalidConfiguration(f"dt must be positive, got {dt}")
        self.dt = dt
        self.end_time = end_time
        self.times = deque([0.0], maxlen=history_limit)
        self._index = 0

    @property
    def index(self) -> int:
        """Index of the current tick."""
        return self._index

    @property
    def first_tick(self) -> int:
        """Tick index of the oldest retained time."""
        return self._index + 1 - len(self.times)

    @property
    def current_time(self) -> float:
        return self.times[-1]

    @property
    def finished(self) -> bool:
        return self.current_time >= self.end_time

    def advance(self) -> float:
        """
        Move to the next tick.

        Returns:
            The new current time
        """
        new_time = self.times[-1] + self.dt
        self.times.append(new_time)
        self._index += 1
        return new_time
