"""
In-memory scene graph consumed by the skeleton extractor.

Nodes carry an optional typed attribute, a local transform relative to
their parent and, for deformable surfaces, skin deformers whose binding
clusters link back to the influencing nodes.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional

import numpy as np


class AttributeType(Enum):
    """Semantic category of a node attribute."""
    UNKNOWN = 'unknown'
    NULL = 'null'
    MARKER = 'marker'
    SKELETON = 'skeleton'
    MESH = 'mesh'
    NURBS = 'nurbs'
    PATCH = 'patch'
    CAMERA = 'camera'
    CAMERA_STEREO = 'camera_stereo'
    CAMERA_SWITCHER = 'camera_switcher'
    LIGHT = 'light'
    OPTICAL_REFERENCE = 'optical_reference'
    OPTICAL_MARKER = 'optical_marker'
    NURBS_CURVE = 'nurbs_curve'
    TRIM_NURBS_SURFACE = 'trim_nurbs_surface'
    BOUNDARY = 'boundary'
    NURBS_SURFACE = 'nurbs_surface'
    SHAPE = 'shape'
    LOD_GROUP = 'lod_group'
    SUBDIV = 'subdiv'
    CACHED_EFFECT = 'cached_effect'
    LINE = 'line'


@dataclass
class NodeAttribute:
    """Typed payload attached to a scene node."""
    type: AttributeType
    name: Optional[str] = None


@dataclass(eq=False)
class BindingCluster:
    """
    Skin binding from a deformable surface to an influencing node.

    ``transform_link`` is the world-space matrix of ``link`` at bind time.
    """
    link: 'SceneNode'
    transform_link: np.ndarray = field(default_factory=lambda: np.eye(4))

    def __post_init__(self):
        self.transform_link = np.array(self.transform_link, dtype=float).reshape(4, 4)


@dataclass(eq=False)
class SkinDeformer:
    """Skin deformer holding the binding clusters of one surface."""
    clusters: List[BindingCluster] = field(default_factory=list)
    name: Optional[str] = None

    def add_cluster(self, link: 'SceneNode', transform_link=None) -> BindingCluster:
        """Append a cluster linking to ``link``."""
        if transform_link is None:
            transform_link = np.eye(4)
        cluster = BindingCluster(link=link, transform_link=transform_link)
        self.clusters.append(cluster)
        return cluster


class SceneNode:
    """
    A node of the source scene graph.

    Nodes are compared by identity: two nodes with the same name are
    still distinct nodes.
    """

    def __init__(self, name: str, attribute: Optional[NodeAttribute] = None,
                 local_transform: Optional[np.ndarray] = None):
        self.name = name
        if isinstance(attribute, AttributeType):
            attribute = NodeAttribute(attribute)
        self.attribute = attribute
        if local_transform is None:
            local_transform = np.eye(4)
        self.local_transform = np.array(local_transform, dtype=float).reshape(4, 4)
        self.parent: Optional['SceneNode'] = None
        self.children: List['SceneNode'] = []
        self.deformers: List[SkinDeformer] = []

    def __repr__(self):
        attr = self.attribute.type.value if self.attribute else None
        return f"SceneNode(name={self.name!r}, attribute={attr!r})"

    @property
    def attribute_type(self) -> Optional[AttributeType]:
        return self.attribute.type if self.attribute else None

    def add_child(self, child: 'SceneNode') -> 'SceneNode':
        """Append a child node, keeping insertion order."""
        if child.parent is not None:
            raise ValueError(f"Node {child.name!r} already has a parent")
        child.parent = self
        self.children.append(child)
        return child

    def add_skin(self, name: Optional[str] = None) -> SkinDeformer:
        """Attach a new, empty skin deformer to this node."""
        skin = SkinDeformer(name=name)
        self.deformers.append(skin)
        return skin

    @property
    def has_deformation(self) -> bool:
        """Whether this node bears mesh-like deformation data."""
        return bool(self.deformers)

    def world_transform(self) -> np.ndarray:
        """Evaluate the node's world-space matrix."""
        matrix = self.local_transform
        parent = self.parent
        while parent is not None:
            matrix = parent.local_transform @ matrix
            parent = parent.parent
        return matrix.copy()

    def iter_nodes(self) -> Iterator['SceneNode']:
        """Yield this node and its descendants in depth-first pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


@dataclass(eq=False)
class BindPose:
    """
    Scene-wide pose snapshot mapping nodes to world-space matrices.

    Only poses with ``is_bind_pose`` set describe the bind-time pose;
    others are rest or animation poses.
    """
    name: str = 'BindPose'
    is_bind_pose: bool = True
    entries: List[tuple] = field(default_factory=list)

    def add(self, node: SceneNode, matrix) -> None:
        self.entries.append((node, np.array(matrix, dtype=float).reshape(4, 4)))

    def find(self, node: SceneNode) -> Optional[np.ndarray]:
        """Get the matrix stored for ``node``, or None."""
        for entry_node, matrix in self.entries:
            if entry_node is node:
                return matrix
        return None


class Scene:
    """A scene graph with a single root and optional pose snapshots."""

    def __init__(self, root: Optional[SceneNode] = None,
                 poses: Optional[List[BindPose]] = None, name: str = 'Scene'):
        self.root = root if root is not None else SceneNode('RootNode')
        self.poses: List[BindPose] = list(poses or [])
        self.name = name

    @classmethod
    def empty(cls, name: str = 'Scene') -> 'Scene':
        """Create a scene holding only an attribute-less root."""
        return cls(name=name)

    def add_pose(self, pose: BindPose) -> BindPose:
        self.poses.append(pose)
        return pose

    def iter_nodes(self) -> Iterator[SceneNode]:
        return self.root.iter_nodes()

    def find_node(self, name: str) -> Optional[SceneNode]:
        """Get the first node named ``name`` in pre-order."""
        for node in self.iter_nodes():
            if node.name == name:
                return node
        return None
