from .controller import RobotArmController
from .kinematics import ArmKinematics
from .types import ArmGeometry, ArmState, CartesianPosition, ConnectionType, Joint, JointAngles, MotorPort
