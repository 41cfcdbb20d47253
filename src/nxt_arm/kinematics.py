import logging
from typing import Optional

import numpy as np

from .types import ArmGeometry, CartesianPosition, JointAngles

logger = logging.getLogger(__name__)

# Targets closer to the shoulder than this have no unique shoulder angle
SINGULARITY_EPS = 0.001


class ArmKinematics:
    """
    Geometric solver for a two-link planar arm (shoulder and elbow).

    Positions are in mm with the origin at the shoulder joint, angles are in degrees.
    The elbow angle is reported in motor convention: 180 - internal elbow angle,
    so a fully extended arm reads 0 and a fully folded arm reads 180.
    """

    def __init__(self, upper_arm_length: float, forearm_length: float):
        """
        :param upper_arm_length: Shoulder to elbow length in mm, must be > 0.
        :param forearm_length: Elbow to tip length in mm, must be > 0.
        :raises InvalidGeometryError: If either length is not strictly positive.
        """
        self.geometry = ArmGeometry(upper_arm_length, forearm_length)

    @property
    def upper_arm_length(self) -> float:
        return self.geometry.upper_arm_length

    @property
    def forearm_length(self) -> float:
        return self.geometry.forearm_length

    @property
    def max_reach(self) -> float:
        return self.geometry.max_reach

    @property
    def min_reach(self) -> float:
        return self.geometry.min_reach

    def is_reachable(self, target: CartesianPosition) -> bool:
        distance = target.distance()
        return self.min_reach <= distance <= self.max_reach

    def calculate_angles(self, target: CartesianPosition, elbow_up: bool = True) -> Optional[JointAngles]:
        """
        Inverse kinematics: joint angles that put the tip at the target.
        :param target: Target tip position.
        :param elbow_up: Select the elbow-up solution (default) or its elbow-down mirror.
        :return: Joint angles in degrees, or None if the target is unreachable.
        """
        x, y = target.x, target.y
        l1, l2 = self.upper_arm_length, self.forearm_length
        distance = target.distance()

        if not self.is_reachable(target) or distance < SINGULARITY_EPS:
            logger.debug(f"Target ({x:.3f}, {y:.3f}) unreachable "
                         f"(distance {distance:.3f}, reach {self.min_reach:.3f}..{self.max_reach:.3f})")
            return None

        # Internal elbow angle, law of cosines
        cos_elbow = np.clip((l1**2 + l2**2 - distance**2) / (2 * l1 * l2), -1.0, 1.0)
        elbow_rad = np.arccos(cos_elbow)

        # Angle between the upper arm and the shoulder-to-target line
        cos_inner = np.clip((l1**2 + distance**2 - l2**2) / (2 * l1 * distance), -1.0, 1.0)
        inner_rad = np.arccos(cos_inner)

        if not elbow_up:
            elbow_rad = -elbow_rad
            inner_rad = -inner_rad

        shoulder_rad = np.arctan2(y, x) + inner_rad

        return JointAngles(shoulder=float(np.degrees(shoulder_rad)),
                           elbow=float(180.0 - np.degrees(elbow_rad)))

    def calculate_position(self, angles: JointAngles) -> CartesianPosition:
        """
        Forward kinematics for the elbow-up model.
        :param angles: Joint angles in degrees, elbow in motor convention.
        :return: Tip position in mm.
        """
        shoulder_rad = np.radians(angles.shoulder)
        elbow_rad = np.radians(180.0 - angles.elbow)

        elbow_x = self.upper_arm_length * np.cos(shoulder_rad)
        elbow_y = self.upper_arm_length * np.sin(shoulder_rad)

        forearm_rad = shoulder_rad - (np.pi - elbow_rad)
        tip_x = elbow_x + self.forearm_length * np.cos(forearm_rad)
        tip_y = elbow_y + self.forearm_length * np.sin(forearm_rad)

        return CartesianPosition(float(tip_x), float(tip_y))
