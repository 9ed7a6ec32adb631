"""
Skin-binding collection and bind pose resolution.
"""

import logging
from enum import Enum
from typing import Dict, List, Optional, Tuple

import numpy as np

from .selection import GEOMETRY_TYPES
from ..scene.graph import BindingCluster, Scene, SceneNode

logger = logging.getLogger(__name__)


class BindSource(Enum):
    """Where a resolved bind transform came from."""
    CLUSTER = 'cluster'
    BIND_POSE = 'bind_pose'
    EVALUATED = 'evaluated'


def collect_clusters(root: SceneNode) -> List[BindingCluster]:
    """
    Gather every binding cluster found in the scene.

    The whole graph is walked regardless of node selection: a skinned
    surface may itself be excluded from the skeleton. Only geometry
    nodes carry skins; clusters without a link are skipped.

    Args:
        root: Scene root node

    Returns:
        Flat list of binding clusters
    """
    clusters = []
    for node in root.iter_nodes():
        if node.attribute_type not in GEOMETRY_TYPES or not node.has_deformation:
            continue
        for skin in node.deformers:
            for cluster in skin.clusters:
                if cluster is not None and cluster.link is not None:
                    clusters.append(cluster)
    logger.debug(f"Collected {len(clusters)} binding clusters")
    return clusters


class BindPoseResolver:
    """
    Resolves the world-space bind transform of scene nodes.

    Sources are tried in order: binding cluster link transform, bind
    pose snapshot entry, then the node's evaluated world transform.
    """

    def __init__(self, scene: Scene, clusters: List[BindingCluster]):
        """
        Initialize resolver.

        Args:
            scene: Scene providing bind pose snapshots
            clusters: Binding clusters collected from the scene
        """
        self.scene = scene
        self._links: Dict[int, BindingCluster] = {}
        for cluster in clusters:
            if cluster.link is None:
                continue
            key = id(cluster.link)
            if key in self._links:
                # First cluster in collection order wins
                logger.warning(f"Node '{cluster.link.name}' is linked by several binding clusters")
                continue
            self._links[key] = cluster

    def find_cluster(self, node: SceneNode) -> Optional[BindingCluster]:
        return self._links.get(id(node))

    def find_bind_pose(self, node: SceneNode) -> Optional[np.ndarray]:
        """Get the first bind pose matrix recorded for ``node``."""
        for pose in self.scene.poses:
            if pose is None or not pose.is_bind_pose:
                continue
            matrix = pose.find(node)
            if matrix is not None:
                return matrix
        return None

    def resolve(self, node: SceneNode) -> Tuple[np.ndarray, BindSource]:
        """
        Resolve the world bind transform of ``node``.

        Args:
            node: Scene node

        Returns:
            Tuple of (4x4 world matrix, source of the matrix)
        """
        cluster = self.find_cluster(node)
        if cluster is not None:
            matrix, source = cluster.transform_link, BindSource.CLUSTER
        else:
            matrix = self.find_bind_pose(node)
            if matrix is not None:
                source = BindSource.BIND_POSE
            else:
                matrix, source = node.world_transform(), BindSource.EVALUATED

        logger.debug(f"Bind transform of '{node.name}' taken from {source.value}")
        return np.array(matrix, dtype=float), source
