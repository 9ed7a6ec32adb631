"""
Selection of the scene node categories promoted to joints.
"""

from dataclasses import dataclass, fields
from typing import Iterable, Optional

from ..scene.graph import AttributeType

GEOMETRY_TYPES = frozenset({
    AttributeType.MESH,
    AttributeType.NURBS,
    AttributeType.PATCH,
    AttributeType.NURBS_CURVE,
    AttributeType.TRIM_NURBS_SURFACE,
    AttributeType.BOUNDARY,
    AttributeType.NURBS_SURFACE,
    AttributeType.SHAPE,
    AttributeType.SUBDIV,
    AttributeType.LINE,
})

CAMERA_TYPES = frozenset({AttributeType.CAMERA, AttributeType.CAMERA_STEREO})


@dataclass(frozen=True)
class NodeTypes:
    """
    Node categories considered skeleton-relevant.

    ``any`` accepts every node that carries an attribute.
    """
    skeleton: bool = True
    marker: bool = False
    camera: bool = False
    geometry: bool = False
    light: bool = False
    any: bool = False

    @classmethod
    def from_names(cls, names: Iterable[str]) -> 'NodeTypes':
        """
        Build a selection enabling only the given categories.

        Args:
            names: Category names, e.g. ['skeleton', 'marker']

        Raises:
            ValueError: If a name is not a known category
        """
        known = {f.name for f in fields(cls)}
        flags = {name: False for name in known}
        for name in names:
            key = name.strip().lower()
            if key not in known:
                raise ValueError(f"Unknown node type: {name}")
            flags[key] = True
        return cls(**flags)

    def selected_names(self):
        return [f.name for f in fields(self) if getattr(self, f.name)]


def is_type_selected(types: NodeTypes, attribute_type: Optional[AttributeType]) -> bool:
    """
    Check whether a node of ``attribute_type`` should become a joint.

    Args:
        types: Selected node categories
        attribute_type: Attribute category of the node

    Returns:
        True if the node is accepted
    """
    # Attribute-less nodes are only traversed
    if attribute_type is None:
        return False

    if types.any:
        return True

    if attribute_type is AttributeType.SKELETON:
        return types.skeleton
    if attribute_type is AttributeType.MARKER:
        return types.marker
    if attribute_type in GEOMETRY_TYPES:
        return types.geometry
    if attribute_type in CAMERA_TYPES:
        return types.camera
    if attribute_type is AttributeType.LIGHT:
        return types.light

    return False
