"""
Joint and skeleton classes.
"""

import numpy as np
from typing import List, Optional, Dict, Any, Iterator
from dataclasses import dataclass, field

from ..common import format_float_array
from ..transform import Transform


@dataclass
class Joint:
    """
    Represents a single joint of the skeleton.

    Parent and children are indices into the owning skeleton's joint
    arena, never references to other joints.
    """
    index: int
    name: str
    transform: Transform = field(default_factory=Transform.identity)
    parent: Optional[int] = None
    children: List[int] = field(default_factory=list)

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'name': self.name,
            'transform': self.transform.to_dict(),
        }


class Skeleton:
    """
    A forest of joints.

    Joints live in a single arena in creation order; roots and children
    keep their insertion order, which is the source traversal order.
    """

    def __init__(self):
        """Initialize empty skeleton."""
        self.joints: List[Joint] = []
        self.root_indices: List[int] = []

    def add_joint(self, name: str, transform: Optional[Transform] = None,
                  parent: Optional[int] = None) -> Joint:
        """
        Add a joint to the skeleton.

        Args:
            name: Joint name
            transform: Transform relative to the parent joint
            parent: Arena index of the parent joint, None for a root

        Returns:
            The new joint
        """
        if parent is not None and not 0 <= parent < len(self.joints):
            raise IndexError(f"Parent joint index {parent} out of range")

        joint = Joint(
            index=len(self.joints),
            name=name,
            transform=transform if transform is not None else Transform.identity(),
            parent=parent,
        )
        self.joints.append(joint)
        if parent is None:
            self.root_indices.append(joint.index)
        else:
            self.joints[parent].children.append(joint.index)
        return joint

    @property
    def roots(self) -> List[Joint]:
        return [self.joints[i] for i in self.root_indices]

    @property
    def num_joints(self) -> int:
        return len(self.joints)

    def __len__(self) -> int:
        return len(self.joints)

    def children_of(self, joint: Joint) -> List[Joint]:
        return [self.joints[i] for i in joint.children]

    def parent_of(self, joint: Joint) -> Optional[Joint]:
        return self.joints[joint.parent] if joint.parent is not None else None

    def get_joint_by_name(self, name: str) -> Optional[Joint]:
        """Get joint by name."""
        for joint in self.joints:
            if joint.name == name:
                return joint
        return None

    def iter_depth_first(self) -> Iterator[Joint]:
        """Yield joints depth-first, parents before children."""
        stack = list(reversed(self.root_indices))
        while stack:
            joint = self.joints[stack.pop()]
            yield joint
            stack.extend(reversed(joint.children))

    def joint_names(self) -> List[str]:
        """Get joint names in depth-first order."""
        return [joint.name for joint in self.iter_depth_first()]

    def parents(self) -> List[int]:
        """
        Get the parent of each joint in depth-first order.

        Returns:
            Per-joint index of the parent in the same ordering, -1 for roots
        """
        order = {}
        parents = []
        for joint in self.iter_depth_first():
            order[joint.index] = len(parents)
            parents.append(-1 if joint.parent is None else order[joint.parent])
        return parents

    def global_matrices(self) -> Dict[str, np.ndarray]:
        """
        Compose joint transforms from the roots down.

        Returns:
            Mapping from joint name to world matrix
        """
        world = {}
        result = {}
        for joint in self.iter_depth_first():
            local = joint.transform.to_matrix()
            if joint.parent is None:
                world[joint.index] = local
            else:
                world[joint.index] = world[joint.parent] @ local
            result[joint.name] = world[joint.index]
        return result

    def validate(self) -> bool:
        """Check that the arena forms a forest reachable from the roots."""
        seen = set()
        for joint in self.iter_depth_first():
            if joint.index in seen:
                return False
            seen.add(joint.index)
            for child in joint.children:
                if self.joints[child].parent != joint.index:
                    return False
        return len(seen) == len(self.joints)

    def print_hierarchy(self, joint: Optional[Joint] = None, indent: int = 0):
        """Print hierarchy structure."""
        if joint is None:
            for root in self.roots:
                self.print_hierarchy(root, indent)
            return

        t = joint.transform
        print('  ' * indent + f'- {joint.name} (t=[{format_float_array(t.translation, 3)}])')
        for child in self.children_of(joint):
            self.print_hierarchy(child, indent + 1)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a nested dictionary representation."""
        def visit(joint: Joint) -> Dict[str, Any]:
            data = joint.to_dict()
            data['children'] = [visit(child) for child in self.children_of(joint)]
            return data

        return {
            'num_joints': self.num_joints,
            'roots': [visit(root) for root in self.roots],
        }
