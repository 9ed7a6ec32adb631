"""
Typed reads of glTF accessor data.
"""

import numpy as np
from pygltflib import GLTF2, Buffer
import logging

from ..exceptions import GLBParseError

logger = logging.getLogger(__name__)


class AccessorReader:
    """Reads accessor data as numpy arrays, honoring buffer view strides."""

    # Component type to numpy dtype mapping (little-endian)
    COMPONENT_TYPE_MAP = {
        5120: np.dtype('<i1'),  # BYTE
        5121: np.dtype('<u1'),  # UNSIGNED_BYTE
        5122: np.dtype('<i2'),  # SHORT
        5123: np.dtype('<u2'),  # UNSIGNED_SHORT
        5125: np.dtype('<u4'),  # UNSIGNED_INT
        5126: np.dtype('<f4'),  # FLOAT
    }

    # Type to component count mapping
    TYPE_SIZE_MAP = {
        'SCALAR': 1,
        'VEC2': 2,
        'VEC3': 3,
        'VEC4': 4,
        'MAT2': 4,
        'MAT3': 9,
        'MAT4': 16,
    }

    def __init__(self, gltf: GLTF2):
        self.gltf = gltf
        self._blobs = {}

    def read_accessor(self, accessor_idx: int) -> np.ndarray:
        """
        Read data from accessor.

        Args:
            accessor_idx: Index of accessor

        Returns:
            Array of shape (count,) or (count, components)

        Raises:
            GLBParseError: If accessor cannot be read
        """
        if accessor_idx is None or not 0 <= accessor_idx < len(self.gltf.accessors):
            raise GLBParseError(f"Invalid accessor index: {accessor_idx}")

        accessor = self.gltf.accessors[accessor_idx]
        dtype = self.COMPONENT_TYPE_MAP.get(accessor.componentType)
        if dtype is None:
            raise GLBParseError(f"Unknown component type: {accessor.componentType}")
        components = self.TYPE_SIZE_MAP.get(accessor.type)
        if components is None:
            raise GLBParseError(f"Unknown accessor type: {accessor.type}")

        shape = (accessor.count, components) if components > 1 else (accessor.count,)
        if accessor.bufferView is None:
            return np.zeros(shape, dtype=dtype)

        buffer_view = self.gltf.bufferViews[accessor.bufferView]
        blob = self._get_blob(self.gltf.buffers[buffer_view.buffer])

        offset = (buffer_view.byteOffset or 0) + (accessor.byteOffset or 0)
        item_size = components * dtype.itemsize
        stride = buffer_view.byteStride or item_size

        try:
            if stride == item_size:
                data = np.frombuffer(blob, dtype=dtype, count=accessor.count * components,
                                     offset=offset)
            else:
                # Interleaved buffer view: gather each element
                data = np.concatenate([
                    np.frombuffer(blob, dtype=dtype, count=components, offset=offset + i * stride)
                    for i in range(accessor.count)
                ]) if accessor.count else np.zeros(0, dtype=dtype)
        except ValueError as e:
            raise GLBParseError(f"Failed to read accessor {accessor_idx}: {e}") from e

        logger.debug(f"Read accessor {accessor_idx}: shape={shape}, dtype={dtype}")
        return data.reshape(shape)

    def _get_blob(self, buffer: Buffer) -> bytes:
        """Get the raw bytes of a buffer."""
        key = id(buffer)
        if key not in self._blobs:
            if buffer.uri is None:
                blob = self.gltf.binary_blob()
                if blob is None:
                    raise GLBParseError("Binary buffer expected but not found")
            else:
                blob = self.gltf.get_data_from_buffer_uri(buffer.uri)
            self._blobs[key] = blob
        return self._blobs[key]
