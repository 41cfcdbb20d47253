class NxtArmError(Exception):
    """Base exception for nxt_arm."""
    pass

class InvalidGeometryError(NxtArmError, ValueError):
    """Raised when an arm segment length is not strictly positive."""
    pass

class InvalidStateError(NxtArmError):
    """Raised when an operation is attempted in a state that does not allow it."""
    pass

class NotConnectedError(InvalidStateError):
    """Raised when an operation needs a connected actuator and there is none."""
    pass

class NotHomedError(InvalidStateError):
    """Raised when a move is attempted before the arm has been homed."""
    pass

class ConnectionNotSupportedError(NxtArmError, NotImplementedError):
    """Raised when the requested connection type has no working implementation."""
    pass

class ActuatorError(NxtArmError):
    """Raised when the actuator cannot execute a motor command."""
    pass
