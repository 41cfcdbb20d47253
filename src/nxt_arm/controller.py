import logging
import threading
from typing import Callable, Dict, List, Optional

from .actuator import MotorActuator
from .connection import SIMULATION_CONNECTION, create_actuator
from .exceptions import NotConnectedError, NotHomedError
from .kinematics import ArmKinematics
from .types import ArmState, CartesianPosition, Joint, JointAngles

logger = logging.getLogger(__name__)

DEFAULT_UPPER_ARM_LENGTH = 150.0
DEFAULT_FOREARM_LENGTH = 120.0
DEFAULT_HOME_ANGLES = JointAngles(90.0, 90.0)
DEFAULT_MOTOR_SPEED = 50
# Motor degrees at or below which a joint is left where it is
DEFAULT_DEADBAND = 1.0

StateCallback = Callable[[ArmState], None]


class RobotArmController:
    """
    Drives the two-joint arm through a MotorActuator.

    State goes Disconnected -> Connected -> Homed. Every mutating call runs under one
    lock and ends by publishing an ArmState snapshot to the registered callbacks.
    Joint angles are tracked optimistically: after a move the commanded angles are
    taken as the current ones without reading the encoders back.
    """

    def __init__(self, upper_arm_length: float = DEFAULT_UPPER_ARM_LENGTH,
                 forearm_length: float = DEFAULT_FOREARM_LENGTH,
                 home_angles: JointAngles = DEFAULT_HOME_ANGLES,
                 motor_speed: int = DEFAULT_MOTOR_SPEED,
                 deadband: float = DEFAULT_DEADBAND,
                 gear_ratios: Optional[Dict[Joint, float]] = None,
                 actuator_factory: Callable[[str], MotorActuator] = create_actuator,
                 state_callback: Optional[StateCallback] = None):
        """
        :param upper_arm_length: Shoulder to elbow length in mm.
        :param forearm_length: Elbow to tip length in mm.
        :param home_angles: Joint angles of the arm when it is homed.
        :param motor_speed: Speed used for every move, -100..100.
        :param deadband: Moves of this many motor degrees or less are not sent to the motor.
        :param gear_ratios: Arm degrees per motor degree for each joint, 1.0 if omitted.
        :param actuator_factory: Builds the actuator for a connection string.
        :param state_callback: Optional function called with every published state.
        """
        self.kinematics = ArmKinematics(upper_arm_length, forearm_length)
        self.home_angles = home_angles
        self.motor_speed = motor_speed
        self.deadband = deadband
        self.gear_ratios = {joint: 1.0 for joint in Joint}
        if gear_ratios:
            self.gear_ratios.update(gear_ratios)
        for joint, ratio in self.gear_ratios.items():
            if not ratio > 0:
                raise ValueError(f"Gear ratio {ratio} for {joint.name.lower()} must be positive")
        self.actuator_factory = actuator_factory

        self._lock = threading.RLock()
        self._callbacks: List[StateCallback] = []
        if state_callback is not None:
            self._callbacks.append(state_callback)

        self._actuator: Optional[MotorActuator] = None
        self._is_connected = False
        self._is_homed = False
        self._current_angles = home_angles
        self._target_position: Optional[CartesianPosition] = None
        # Replaced whole on every transition, never mutated
        self._state = self._snapshot()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    @property
    def motor_speed(self) -> int:
        return self._motor_speed

    @motor_speed.setter
    def motor_speed(self, speed: int) -> None:
        if not -100 <= speed <= 100:
            raise ValueError(f"Motor speed {speed} out of range -100..100")
        self._motor_speed = speed

    @property
    def is_connected(self) -> bool:
        return self._state.is_connected

    @property
    def is_homed(self) -> bool:
        return self._state.is_homed

    @property
    def current_angles(self) -> JointAngles:
        return self._state.current_angles

    @property
    def state(self) -> ArmState:
        """Last committed snapshot. Readable without the lock, so is_moving shows during a move."""
        return self._state

    def subscribe(self, callback: StateCallback) -> None:
        with self._lock:
            self._callbacks.append(callback)

    def unsubscribe(self, callback: StateCallback) -> None:
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

    def get_current_position(self) -> CartesianPosition:
        return self._state.current_position

    def connect(self, connection_string: str = SIMULATION_CONNECTION) -> bool:
        """
        Connects to the brick and zeroes both motor counters.
        :param connection_string: 'simulation', 'usb' or a Bluetooth serial port.
        :return: True if connected, False if the brick did not answer.
        :raises ConnectionNotSupportedError: For connection types without an implementation.
        """
        with self._lock:
            if self._actuator is not None:
                self.disconnect()

            actuator = self.actuator_factory(connection_string)
            try:
                if not actuator.connect(connection_string):
                    logger.warning(f"Could not connect to '{connection_string}'")
                    self._release(actuator)
                    return False
                for joint in Joint:
                    actuator.reset_position_counter(joint)
            except Exception:
                self._release(actuator)
                raise

            self._actuator = actuator
            self._is_connected = True
            logger.info(f"Connected to '{connection_string}'")
            self._publish()
            return True

    def disconnect(self) -> None:
        """Stops the motors and releases the actuator. Never raises, safe to repeat."""
        with self._lock:
            if self._actuator is not None:
                self._stop_motors()
                self._release(self._actuator)
                self._actuator = None
                logger.info("Disconnected")
            self._is_connected = False
            self._is_homed = False
            self._publish()

    def close(self) -> None:
        self.disconnect()

    def home(self) -> None:
        """Declares the current pose to be the home pose."""
        with self._lock:
            self._require_connected()
            for joint in Joint:
                self._actuator.reset_position_counter(joint)
            self._current_angles = self.home_angles
            self._is_homed = True
            logger.info(f"Homed at shoulder {self.home_angles.shoulder:.1f} deg, "
                        f"elbow {self.home_angles.elbow:.1f} deg")
            self._publish()

    def move_to_position(self, target: CartesianPosition) -> bool:
        """
        Moves the tip to a Cartesian position using the elbow-up solution.
        :return: True if moved, False if the target is out of reach (nothing is moved).
        :raises NotConnectedError, NotHomedError: If the arm is not ready to move.
        """
        with self._lock:
            self._require_connected()
            if not self._is_homed:
                raise NotHomedError("Arm must be homed before moving")

            target_angles = self.kinematics.calculate_angles(target)
            if target_angles is None:
                logger.warning(f"Target ({target.x:.1f}, {target.y:.1f}) is out of reach")
                return False

            self._move(target_angles, target)
            return True

    def move_to_angles(self, target_angles: JointAngles) -> None:
        with self._lock:
            self._require_connected()
            self._move(target_angles, self.kinematics.calculate_position(target_angles))

    def stop(self) -> None:
        """Stops both motors. Actuator faults are logged, not raised."""
        with self._lock:
            if self._actuator is not None:
                self._stop_motors()
            self._publish()

    def read_motor_counters(self) -> Dict[Joint, int]:
        """Encoder degrees of each motor since the last reset."""
        with self._lock:
            self._require_connected()
            return {joint: self._actuator.get_position_counter(joint) for joint in Joint}

    def _move(self, target_angles: JointAngles, target_position: CartesianPosition) -> None:
        delta = target_angles - self._current_angles
        joint_deltas = {Joint.SHOULDER: delta.shoulder, Joint.ELBOW: delta.elbow}

        self._target_position = target_position
        self._state = self._snapshot(is_moving=True)
        try:
            for joint, joint_delta in joint_deltas.items():
                motor_degrees = joint_delta / self.gear_ratios[joint]
                if abs(motor_degrees) > self.deadband:
                    self._actuator.move(joint, int(round(motor_degrees)), self.motor_speed)
                else:
                    logger.debug(f"{joint.name.lower()} delta {motor_degrees:.2f} deg within deadband")
        except Exception:
            self._state = self._snapshot()
            raise

        self._current_angles = target_angles
        self._publish()

    def _stop_motors(self) -> None:
        for joint in Joint:
            try:
                self._actuator.stop(joint)
            except Exception as e:
                logger.warning(f"Failed to stop {joint.name.lower()} motor: {e}")

    @staticmethod
    def _release(actuator: MotorActuator) -> None:
        try:
            actuator.disconnect()
        except Exception as e:
            logger.warning(f"Failed to disconnect actuator: {e}")

    def _require_connected(self) -> None:
        if not self._is_connected or self._actuator is None:
            raise NotConnectedError("Not connected to NXT brick")

    def _snapshot(self, is_moving: bool = False) -> ArmState:
        return ArmState(
            current_position=self.kinematics.calculate_position(self._current_angles),
            target_position=self._target_position,
            current_angles=self._current_angles,
            is_connected=self._is_connected,
            is_homed=self._is_homed,
            is_moving=is_moving,
        )

    def _publish(self) -> None:
        state = self._state = self._snapshot()
        logger.debug(f"State: {state}")
        for callback in list(self._callbacks):
            callback(state)
