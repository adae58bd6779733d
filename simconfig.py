"""
Simulation configuration shared by the CLI and the simulators.
"""

from dataclasses import dataclass
from typing import Optional

from refstring import InvalidParameter

DEFAULT_FRAMES = 7
DEFAULT_LENGTH = 1_000_000


@dataclass
class SimulationConfig:
    frame_count: int = DEFAULT_FRAMES      # physical frames per simulator
    length: int = DEFAULT_LENGTH           # references in the generated trace
    lookahead_factor: float = 1.0          # Optimal horizon = e * m * factor
    seed: Optional[int] = None

    def validate(self):
        if self.frame_count <= 0:
            raise InvalidParameter(f"frame count must be positive, got {self.frame_count}")
        if self.length <= 0:
            raise InvalidParameter(f"trace length must be positive, got {self.length}")
        if self.lookahead_factor < 0:
            raise InvalidParameter(f"lookahead factor must be >= 0, got {self.lookahead_factor}")
        return self

    def lookahead_limit(self, e: int, m: int) -> int:
        """Optimal's scan horizon: one full dwell of the locus window by default"""
        return max(0, int(e * m * self.lookahead_factor))
