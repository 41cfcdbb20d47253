import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .exceptions import InvalidGeometryError


@dataclass(frozen=True)
class CartesianPosition:
    x: float
    y: float

    def distance(self) -> float:
        """Distance from the shoulder joint (origin) in mm."""
        return math.hypot(self.x, self.y)


@dataclass(frozen=True)
class JointAngles:
    shoulder: float
    elbow: float

    def __sub__(self, other: "JointAngles") -> "JointAngles":
        return JointAngles(self.shoulder - other.shoulder, self.elbow - other.elbow)


@dataclass(frozen=True)
class ArmGeometry:
    upper_arm_length: float
    forearm_length: float

    def __post_init__(self):
        if not all(math.isfinite(length) and length > 0
                   for length in (self.upper_arm_length, self.forearm_length)):
            raise InvalidGeometryError(
                f"Arm segment lengths must be positive and finite "
                f"(upper arm {self.upper_arm_length}, forearm {self.forearm_length})")

    @property
    def max_reach(self) -> float:
        return self.upper_arm_length + self.forearm_length

    @property
    def min_reach(self) -> float:
        return abs(self.upper_arm_length - self.forearm_length)


@dataclass(frozen=True)
class ArmState:
    current_position: CartesianPosition
    target_position: Optional[CartesianPosition]
    current_angles: JointAngles
    is_connected: bool
    is_homed: bool
    is_moving: bool


class MotorPort(Enum):
    A = 'A'
    B = 'B'
    C = 'C'


class Joint(Enum):
    SHOULDER = MotorPort.A
    ELBOW = MotorPort.B

    @property
    def port(self) -> MotorPort:
        return self.value


class ConnectionType(Enum):
    SIMULATION = 'simulation'
    USB = 'usb'
    BLUETOOTH = 'bluetooth'
