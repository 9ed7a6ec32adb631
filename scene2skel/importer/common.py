"""
Common utilities and constants for the importer module.
"""

import numpy as np
import logging

# Set up module logger
logger = logging.getLogger(__name__)

# Constants
DEFAULT_AXIS_SYSTEM = 'Y-up'
DEFAULT_UNIT_SCALE = 1.0
DEFAULT_SELECTED_TYPES = ('skeleton',)

# Tolerance used when decomposing affine matrices
DECOMPOSE_EPSILON = 1e-6

AXIS_SYSTEMS = ('Y-up', 'Z-up')

# Coordinate system transformations
# GLB uses Y-up right-handed system
# Z-up target is right-handed as well
#
# Y-up to Z-up is +90 degrees around X: [x, y, z] → [x, -z, y]
Y_UP_TO_Z_UP = np.array([
    [1.0, 0.0, 0.0],
    [0.0, 0.0, -1.0],
    [0.0, 1.0, 0.0],
])


def axis_change_matrix(source: str, target: str) -> np.ndarray:
    """
    Get the 4x4 basis change matrix between two axis systems.

    Args:
        source: Axis system of the input ('Y-up' or 'Z-up')
        target: Axis system of the output ('Y-up' or 'Z-up')

    Returns:
        4x4 homogeneous rotation matrix
    """
    for system in (source, target):
        if system not in AXIS_SYSTEMS:
            raise ValueError(f"Unknown axis system: {system}")

    basis = np.eye(4)
    if source == target:
        return basis
    if source == 'Y-up':
        basis[:3, :3] = Y_UP_TO_Z_UP
    else:
        basis[:3, :3] = Y_UP_TO_Z_UP.T
    return basis


def matrix_to_quaternion(matrix: np.ndarray) -> np.ndarray:
    """
    Convert 3x3 rotation matrix to quaternion.

    Args:
        matrix: 3x3 rotation matrix

    Returns:
        Quaternion in XYZW format
    """
    m = matrix
    trace = m[0, 0] + m[1, 1] + m[2, 2]

    if trace > 0:
        s = 0.5 / np.sqrt(trace + 1.0)
        w = 0.25 / s
        x = (m[2, 1] - m[1, 2]) * s
        y = (m[0, 2] - m[2, 0]) * s
        z = (m[1, 0] - m[0, 1]) * s
    elif m[0, 0] > m[1, 1] and m[0, 0] > m[2, 2]:
        s = 2.0 * np.sqrt(1.0 + m[0, 0] - m[1, 1] - m[2, 2])
        w = (m[2, 1] - m[1, 2]) / s
        x = 0.25 * s
        y = (m[0, 1] + m[1, 0]) / s
        z = (m[0, 2] + m[2, 0]) / s
    elif m[1, 1] > m[2, 2]:
        s = 2.0 * np.sqrt(1.0 + m[1, 1] - m[0, 0] - m[2, 2])
        w = (m[0, 2] - m[2, 0]) / s
        x = (m[0, 1] + m[1, 0]) / s
        y = 0.25 * s
        z = (m[1, 2] + m[2, 1]) / s
    else:
        s = 2.0 * np.sqrt(1.0 + m[2, 2] - m[0, 0] - m[1, 1])
        w = (m[1, 0] - m[0, 1]) / s
        x = (m[0, 2] + m[2, 0]) / s
        y = (m[1, 2] + m[2, 1]) / s
        z = 0.25 * s

    quat = np.array([x, y, z, w])
    norm = np.linalg.norm(quat)
    if norm > 0:
        quat = quat / norm
    return quat


def quaternion_to_matrix(quat: np.ndarray) -> np.ndarray:
    """
    Convert quaternion to 3x3 rotation matrix.

    Args:
        quat: Quaternion in XYZW format

    Returns:
        3x3 rotation matrix
    """
    x, y, z, w = quat
    xx, yy, zz = x * x, y * y, z * z
    xy, xz, yz = x * y, x * z, y * z
    wx, wy, wz = w * x, w * y, w * z

    return np.array([
        [1 - 2 * (yy + zz), 2 * (xy - wz), 2 * (xz + wy)],
        [2 * (xy + wz), 1 - 2 * (xx + zz), 2 * (yz - wx)],
        [2 * (xz - wy), 2 * (yz + wx), 1 - 2 * (xx + yy)]
    ])


def compose_trs(translation, rotation, scale) -> np.ndarray:
    """
    Build a 4x4 matrix from translation, XYZW rotation and scale.

    Args:
        translation: 3D translation
        rotation: Quaternion in XYZW format
        scale: 3D scale

    Returns:
        4x4 transformation matrix
    """
    matrix = np.eye(4)
    matrix[:3, :3] = quaternion_to_matrix(np.asarray(rotation, dtype=float)) @ np.diag(scale)
    matrix[:3, 3] = translation
    return matrix


def translation_matrix(x: float, y: float, z: float) -> np.ndarray:
    """Get a 4x4 matrix translating by (x, y, z)."""
    matrix = np.eye(4)
    matrix[:3, 3] = [x, y, z]
    return matrix


def format_float_array(arr: np.ndarray, precision: int = 6) -> str:
    """
    Format numpy array as space-separated string.

    Args:
        arr: Numpy array
        precision: Decimal precision

    Returns:
        Space-separated string
    """
    return ' '.join(f'{x:.{precision}f}' for x in arr)
