"""
Conversion of resolved affine matrices into joint transforms.

The converter changes the matrix basis from the source axis system to
the target one, applies the unit scale to translations and decomposes
the result into translation, rotation (quaternion XYZW) and scale.
"""

import numpy as np
from dataclasses import dataclass, field
from typing import Optional, Dict, Any
import logging

from .common import (
    DEFAULT_AXIS_SYSTEM,
    DEFAULT_UNIT_SCALE,
    DECOMPOSE_EPSILON,
    axis_change_matrix,
    compose_trs,
    matrix_to_quaternion,
)

logger = logging.getLogger(__name__)


@dataclass
class Transform:
    """
    Joint transform relative to its parent joint.
    """
    translation: np.ndarray = field(default_factory=lambda: np.zeros(3))
    rotation: np.ndarray = field(default_factory=lambda: np.array([0.0, 0.0, 0.0, 1.0]))  # XYZW
    scale: np.ndarray = field(default_factory=lambda: np.ones(3))

    def __post_init__(self):
        """Ensure arrays are numpy arrays."""
        self.translation = np.array(self.translation, dtype=float)
        self.rotation = np.array(self.rotation, dtype=float)
        self.scale = np.array(self.scale, dtype=float)

    @classmethod
    def identity(cls) -> 'Transform':
        return cls()

    def to_matrix(self) -> np.ndarray:
        """Get the 4x4 matrix of this transform."""
        return compose_trs(self.translation, self.rotation, self.scale)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'translation': self.translation.tolist(),
            'rotation': self.rotation.tolist(),
            'scale': self.scale.tolist(),
        }


def decompose_matrix(matrix: np.ndarray) -> Optional[Transform]:
    """
    Decompose an affine matrix into a Transform.

    Args:
        matrix: 4x4 affine matrix

    Returns:
        Transform, or None if the matrix is not finite, not affine,
        or has a null or flattened basis. Shear is dropped.
    """
    matrix = np.asarray(matrix, dtype=float)
    if matrix.shape != (4, 4) or not np.all(np.isfinite(matrix)):
        return None

    # Projective matrices can't be expressed as TRS
    if not np.allclose(matrix[3], [0.0, 0.0, 0.0, 1.0], atol=DECOMPOSE_EPSILON):
        return None

    basis = matrix[:3, :3]
    scale = np.linalg.norm(basis, axis=0)
    if np.any(scale < DECOMPOSE_EPSILON):
        return None

    rotation = basis / scale
    det = np.linalg.det(rotation)
    if abs(det) < DECOMPOSE_EPSILON:
        # Flattened basis
        return None
    if det < 0:
        # Mirroring is carried by the x axis
        scale[0] = -scale[0]
        rotation[:, 0] = -rotation[:, 0]

    # Polar decomposition: nearest rotation to the sheared basis
    u, _, vt = np.linalg.svd(rotation)
    rotation = u @ vt

    return Transform(
        translation=matrix[:3, 3].copy(),
        rotation=matrix_to_quaternion(rotation),
        scale=scale,
    )


class TransformConverter:
    """
    Converts scene matrices into the target skeleton convention.
    """

    def __init__(self, axis_system: str = DEFAULT_AXIS_SYSTEM,
                 target_axis_system: str = DEFAULT_AXIS_SYSTEM,
                 unit_scale: float = DEFAULT_UNIT_SCALE):
        """
        Initialize transform converter.

        Args:
            axis_system: Axis system of the source scene ('Y-up' or 'Z-up')
            target_axis_system: Axis system of the produced skeleton
            unit_scale: Factor applied to translations (e.g. 0.01 for cm to m)
        """
        if unit_scale <= 0:
            raise ValueError(f"Unit scale must be positive, got {unit_scale}")
        self.axis_system = axis_system
        self.target_axis_system = target_axis_system
        self.unit_scale = unit_scale
        self._basis = axis_change_matrix(axis_system, target_axis_system)
        self._basis_inv = self._basis.T

    def convert_matrix(self, matrix: np.ndarray) -> np.ndarray:
        """Express ``matrix`` in the target axis system and unit."""
        converted = self._basis @ np.asarray(matrix, dtype=float) @ self._basis_inv
        converted[:3, 3] *= self.unit_scale
        return converted

    def convert_transform(self, matrix: np.ndarray) -> Optional[Transform]:
        """
        Convert an affine matrix into a joint Transform.

        Args:
            matrix: 4x4 affine matrix in the source convention

        Returns:
            Transform, or None if the matrix can't be decomposed
        """
        transform = decompose_matrix(self.convert_matrix(matrix))
        if transform is None:
            logger.debug(f"Matrix is not decomposable:\n{matrix}")
        return transform
