from .types import Joint


class MotorActuator:
    """
    Two-motor hardware link used by the controller.

    Implementations map each Joint to its motor port. All motion calls are blocking.
    """

    @property
    def is_connected(self) -> bool:
        raise NotImplementedError

    def connect(self, connection_string: str) -> bool:
        """
        Opens the link to the brick. May block for a while.
        :return: True on success, False if the brick did not answer.
        """
        raise NotImplementedError

    def disconnect(self) -> None:
        """Releases the link. Must not raise on an already disconnected actuator."""
        raise NotImplementedError

    def reset_position_counter(self, joint: Joint) -> None:
        """Zeroes the encoder reference of the joint's motor."""
        raise NotImplementedError

    def move(self, joint: Joint, degrees: int, speed: int) -> None:
        """
        Rotates the joint's motor relative to its current position.
        :param degrees: Signed motor degrees.
        :param speed: Signed speed, magnitude 0..100.
        """
        raise NotImplementedError

    def stop(self, joint: Joint) -> None:
        raise NotImplementedError

    def get_position_counter(self, joint: Joint) -> int:
        """Encoder degrees accumulated since the last reset."""
        raise NotImplementedError
