# -------------------------------------------------------------------------------
# MIT License
#
# Copyright (c) 2026 Advanced Micro Devices, Inc. All Rights Reserved.
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.
# -------------------------------------------------------------------------------

"""Per-interval deltas from cumulative network byte counters.

Keeps the last cumulative value seen for each (device, direction) and turns
successive readings into megabit deltas suitable for histogram observation.
"""

import logging
from enum import Enum
from typing import Dict, Tuple

from netdevstat.netdev_parser import bytes_to_megabits


class Direction(Enum):
    RECEIVE = "receive"
    TRANSMIT = "transmit"

    @property
    def prefix(self) -> str:
        return self.value + "_"


class DeltaSampler:
    def __init__(self):
        # Last cumulative byte count, keyed by (device, direction). Entries for
        # devices that disappear are kept.
        self.__baselines: Dict[Tuple[str, Direction], float] = {}

    def observe(self, device: str, direction: Direction, cumulative: float) -> float:
        """Record a cumulative byte count and return the delta in megabits.

        The first reading for a key only establishes the baseline and yields
        0.0. A reading lower than the baseline (counter reset or wraparound)
        also yields 0.0 and becomes the new baseline.

        Args:
            device (str): Network device name.
            direction (Direction): Receive or transmit counter.
            cumulative (float): Cumulative byte count since device initialization.

        Returns:
            float: Megabits transferred since the previous reading.
        """
        key = (device, direction)
        cumulative = float(cumulative)
        previous = self.__baselines.get(key)

        if previous is None:
            delta = 0.0
        elif cumulative < previous:
            logging.debug(
                "Counter reset on %s (%s): %s -> %s" % (device, direction.value, previous, cumulative)
            )
            delta = 0.0
        else:
            delta = bytes_to_megabits(cumulative - previous)

        self.__baselines[key] = cumulative
        return delta

    def baseline(self, device: str, direction: Direction):
        return self.__baselines.get((device, direction))

    def reset(self):
        self.__baselines.clear()

    def __contains__(self, key) -> bool:
        return key in self.__baselines

    def __len__(self) -> int:
        return len(self.__baselines)
