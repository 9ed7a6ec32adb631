"""
Skeleton extractor for scene graphs.
"""

import logging
import numpy as np
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional

from .bindings import BindPoseResolver, collect_clusters
from .joint import Skeleton
from .selection import NodeTypes, is_type_selected
from ..exceptions import NoSkeletonFoundError, TransformConversionError
from ..scene.graph import Scene, SceneNode
from ..transform import TransformConverter

logger = logging.getLogger(__name__)


class RecurseResult(Enum):
    """Outcome of walking a scene subtree."""
    ERROR = 0
    SKELETON_FOUND = 1
    NO_SKELETON = 2

    def combine(self, other: 'RecurseResult') -> 'RecurseResult':
        """Merge two subtree results; errors take precedence over joints."""
        if RecurseResult.ERROR in (self, other):
            return RecurseResult.ERROR
        if RecurseResult.SKELETON_FOUND in (self, other):
            return RecurseResult.SKELETON_FOUND
        return RecurseResult.NO_SKELETON


class _Frame(NamedTuple):
    node: SceneNode
    parent: Optional[int]
    parent_world_inv: np.ndarray


class SkeletonExtractor:
    """
    Builds a skeleton from the nodes of a scene.

    Selected nodes become joints attached to their nearest selected
    ancestor; every other node is only traversed.
    """

    def __init__(self, scene: Scene, converter: Optional[TransformConverter] = None):
        """
        Initialize skeleton extractor.

        Args:
            scene: Source scene
            converter: Transform converter (default: no axis or unit change)
        """
        self.scene = scene
        self.converter = converter or TransformConverter()
        self.failed_joint: Optional[str] = None

    def extract(self, types: Optional[NodeTypes] = None) -> Skeleton:
        """
        Extract the skeleton of the scene.

        Args:
            types: Node categories promoted to joints (default: skeleton nodes)

        Returns:
            Skeleton with at least one root joint

        Raises:
            NoSkeletonFoundError: If no node was selected
            TransformConversionError: If a joint transform can't be converted
        """
        types = types or NodeTypes()
        logger.info(f"Extracting skeleton (types: {', '.join(types.selected_names())})")

        clusters = collect_clusters(self.scene.root)
        resolver = BindPoseResolver(self.scene, clusters)

        skeleton = Skeleton()
        result = self._walk(skeleton, resolver, types)

        if result is RecurseResult.ERROR:
            raise TransformConversionError(self.failed_joint)
        if result is RecurseResult.NO_SKELETON:
            raise NoSkeletonFoundError("No skeleton found in scene.")

        logger.info(f"Extracted skeleton with {skeleton.num_joints} joints "
                    f"and {len(skeleton.root_indices)} roots")
        return skeleton

    def _walk(self, skeleton: Skeleton, resolver: BindPoseResolver,
              types: NodeTypes) -> RecurseResult:
        """
        Depth-first pre-order walk creating joints for selected nodes.

        Stops at the first joint whose transform can't be converted.
        """
        self.failed_joint = None
        result = RecurseResult.NO_SKELETON
        stack = [_Frame(self.scene.root, None, np.eye(4))]

        while stack:
            node, parent, parent_world_inv = stack.pop()

            if node.attribute is not None and is_type_selected(types, node.attribute.type):
                node_world, _ = resolver.resolve(node)
                node_local = parent_world_inv @ node_world

                transform = self.converter.convert_transform(node_local)
                if transform is None:
                    self.failed_joint = node.name
                    return RecurseResult.ERROR

                joint = skeleton.add_joint(node.name, transform, parent)
                logger.debug(f"Joint '{joint.name}' attached to "
                             f"{'root' if parent is None else skeleton.joints[parent].name}")

                # This joint is the new parent for the subtree
                parent = joint.index
                try:
                    parent_world_inv = np.linalg.inv(node_world)
                except np.linalg.LinAlgError:
                    self.failed_joint = node.name
                    return RecurseResult.ERROR
                result = result.combine(RecurseResult.SKELETON_FOUND)

            for child in reversed(node.children):
                stack.append(_Frame(child, parent, parent_world_inv))

        return result


class ExtractionStatus(Enum):
    SUCCESS = 'success'
    NOTHING_FOUND = 'nothing_found'
    CONVERSION_FAILURE = 'conversion_failure'


@dataclass
class ExtractionResult:
    """
    Outcome of a skeleton extraction.

    Evaluates to True only when a skeleton was extracted.
    """
    status: ExtractionStatus
    skeleton: Optional[Skeleton] = None
    message: str = ''
    joint_name: Optional[str] = None

    def __bool__(self) -> bool:
        return self.status is ExtractionStatus.SUCCESS


def extract_skeleton(scene: Scene, types: Optional[NodeTypes] = None,
                     converter: Optional[TransformConverter] = None) -> ExtractionResult:
    """
    Extract a skeleton without raising on extraction failures.

    Args:
        scene: Source scene
        types: Node categories promoted to joints
        converter: Transform converter

    Returns:
        ExtractionResult holding the skeleton or the failure reason
    """
    extractor = SkeletonExtractor(scene, converter)
    try:
        skeleton = extractor.extract(types)
    except NoSkeletonFoundError as e:
        logger.error(str(e))
        return ExtractionResult(ExtractionStatus.NOTHING_FOUND, message=str(e))
    except TransformConversionError as e:
        logger.error(str(e))
        logger.error("Failed to extract skeleton.")
        return ExtractionResult(ExtractionStatus.CONVERSION_FAILURE, message=str(e),
                                joint_name=e.joint_name)

    return ExtractionResult(ExtractionStatus.SUCCESS, skeleton=skeleton)
