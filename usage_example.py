import logging

from nxt_arm import CartesianPosition, RobotArmController
from nxt_arm.connection import available_ports
from nxt_arm.exceptions import ConnectionNotSupportedError

logging.basicConfig(level=logging.INFO)


def print_state(state):
    print(f"connected={state.is_connected} homed={state.is_homed} "
          f"tip=({state.current_position.x:.1f}, {state.current_position.y:.1f})")


# Bluetooth bricks show up as serial ports
print(f"Serial ports: {available_ports()}")

arm = RobotArmController(upper_arm_length=150.0, forearm_length=120.0, state_callback=print_state)

try:
    arm.connect('COM3')
except ConnectionNotSupportedError as e:
    print(e)

with arm:
    arm.connect('simulation')

    # define the current pose as home
    arm.home()

    # move the tip, out of reach targets are refused
    for target in [CartesianPosition(2, 150), CartesianPosition(300, 0), CartesianPosition(-100, 100)]:
        if not arm.move_to_position(target):
            print(f"({target.x}, {target.y}) is out of reach")

    print(arm.read_motor_counters())
