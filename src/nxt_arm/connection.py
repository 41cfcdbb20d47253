import logging
from typing import List, Tuple

from serial.tools import list_ports

from .actuator import MotorActuator
from .nxt_actuator import BluetoothActuator, UsbActuator
from .simulated_actuator import SimulatedActuator
from .types import ConnectionType

logger = logging.getLogger(__name__)

SIMULATION_CONNECTION = "simulation"
USB_CONNECTION = "usb"


def parse_connection_string(connection_string: str) -> Tuple[ConnectionType, str]:
    """
    Splits a connection string into its connection type and port.
    'simulation' and 'usb' are keywords (case-insensitive), anything else names
    the serial port of a Bluetooth link.
    :return: (connection type, port)
    """
    port = connection_string.strip()
    if not port:
        raise ValueError("Empty connection string")

    if port.lower() == SIMULATION_CONNECTION:
        return ConnectionType.SIMULATION, SIMULATION_CONNECTION
    if port.lower() == USB_CONNECTION:
        return ConnectionType.USB, USB_CONNECTION
    return ConnectionType.BLUETOOTH, port


def create_actuator(connection_string: str) -> MotorActuator:
    connection_type, port = parse_connection_string(connection_string)
    logger.debug(f"Creating {connection_type.name} actuator for '{port}'")

    if connection_type == ConnectionType.SIMULATION:
        return SimulatedActuator()
    elif connection_type == ConnectionType.USB:
        return UsbActuator(port)
    return BluetoothActuator(port)


def available_ports() -> List[str]:
    """Device names of the serial ports present, candidates for a Bluetooth connection string."""
    return sorted(port.device for port in list_ports.comports())
