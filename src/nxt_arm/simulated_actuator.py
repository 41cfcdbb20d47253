import logging
import time
from typing import Dict

from .actuator import MotorActuator
from .exceptions import ActuatorError
from .types import Joint

logger = logging.getLogger(__name__)

# Upper bound for a single simulated move, in ms
MAX_MOVE_DELAY_MS = 2000


class SimulatedActuator(MotorActuator):
    """Stands in for an NXT brick; motors move instantly apart from a proportional delay."""

    def __init__(self, connect_delay: float = 0.5, time_scale: float = 1.0):
        self.connect_delay = connect_delay
        self.time_scale = time_scale
        self._is_connected = False
        self._positions: Dict[Joint, int] = {joint: 0 for joint in Joint}

    @property
    def is_connected(self) -> bool:
        return self._is_connected

    def connect(self, connection_string: str) -> bool:
        # Simulate connection handshake
        time.sleep(self.connect_delay)
        self._is_connected = True
        logger.debug(f"Simulated brick connected ('{connection_string}')")
        return True

    def disconnect(self) -> None:
        self._is_connected = False

    def reset_position_counter(self, joint: Joint) -> None:
        self._positions[joint] = 0

    def move(self, joint: Joint, degrees: int, speed: int) -> None:
        if not self._is_connected:
            raise ActuatorError("Simulated brick not connected")

        delay_ms = min(abs(degrees) * 10 / max(1, abs(speed)), MAX_MOVE_DELAY_MS)
        time.sleep(delay_ms * self.time_scale / 1000.0)

        self._positions[joint] += degrees
        logger.debug(f"Motor {joint.port.value} ({joint.name.lower()}) moved {degrees} deg at speed {speed}")

    def stop(self, joint: Joint) -> None:
        # Simulated motors are always at rest between calls
        pass

    def get_position_counter(self, joint: Joint) -> int:
        return self._positions[joint]
