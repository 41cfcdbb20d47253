import logging
from typing import Optional

from .actuator import MotorActuator
from .exceptions import ConnectionNotSupportedError
from .types import ConnectionType, Joint

logger = logging.getLogger(__name__)


class _UnsupportedActuator(MotorActuator):
    """Placeholder for a real NXT link. connect() always raises ConnectionNotSupportedError."""

    connection_type: Optional[ConnectionType] = None

    def __init__(self, port: str):
        self.port = port

    @property
    def is_connected(self) -> bool:
        return False

    def connect(self, connection_string: str) -> bool:
        logger.debug(f"{self.connection_type.name} connection to '{self.port}' requested")
        raise ConnectionNotSupportedError(
            f"Real NXT connection ({connection_string}) is not implemented. "
            f"Use 'simulation' for testing.")

    def disconnect(self) -> None:
        pass

    def reset_position_counter(self, joint: Joint) -> None:
        raise ConnectionNotSupportedError(f"{self.connection_type.name} actuator is not implemented")

    def move(self, joint: Joint, degrees: int, speed: int) -> None:
        raise ConnectionNotSupportedError(f"{self.connection_type.name} actuator is not implemented")

    def stop(self, joint: Joint) -> None:
        raise ConnectionNotSupportedError(f"{self.connection_type.name} actuator is not implemented")

    def get_position_counter(self, joint: Joint) -> int:
        raise ConnectionNotSupportedError(f"{self.connection_type.name} actuator is not implemented")


class UsbActuator(_UnsupportedActuator):
    connection_type = ConnectionType.USB


class BluetoothActuator(_UnsupportedActuator):
    """NXT over a Bluetooth serial port (e.g. 'COM3' or '/dev/rfcomm0')."""
    connection_type = ConnectionType.BLUETOOTH
