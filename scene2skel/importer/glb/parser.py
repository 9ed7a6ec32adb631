"""
GLB/GLTF scene provider.

Turns a glTF document into a scene graph: skin joints become skeleton
nodes, skinned meshes carry one skin deformer whose clusters hold each
joint's bind-time world matrix.
"""

import logging
from pathlib import Path
from typing import Optional, Dict, Any
from pygltflib import GLTF2
import numpy as np

from .accessor import AccessorReader
from ..common import compose_trs
from ..exceptions import GLBParseError
from ..scene.graph import AttributeType, NodeAttribute, Scene, SceneNode

logger = logging.getLogger(__name__)

LIGHTS_EXTENSION = 'KHR_lights_punctual'


class GLBParser:
    """
    Parser for GLB/GLTF files.

    This class handles loading GLB files and building the scene graph
    consumed by the skeleton extractor.
    """

    def __init__(self, file_path: str):
        """
        Initialize GLB parser.

        Args:
            file_path: Path to GLB/GLTF file

        Raises:
            GLBParseError: If file cannot be loaded
        """
        self.file_path = Path(file_path)
        if not self.file_path.exists():
            raise GLBParseError(f"File not found: {file_path}")

        logger.info(f"Loading GLB file: {self.file_path}")

        try:
            self.gltf = GLTF2.load(str(self.file_path))
        except Exception as e:
            raise GLBParseError(f"Failed to load GLB file: {e}") from e

        if self.gltf is None:
            raise GLBParseError(f"Failed to load GLB file: {file_path}")

        self.accessor_reader = AccessorReader(self.gltf)

        # Log basic info
        logger.info(f"GLB loaded successfully:")
        logger.info(f"  Scenes: {len(self.gltf.scenes)}")
        logger.info(f"  Nodes: {len(self.gltf.nodes)}")
        logger.info(f"  Meshes: {len(self.gltf.meshes)}")
        logger.info(f"  Skins: {len(self.gltf.skins)}")

    def get_scene_info(self, scene_idx: Optional[int] = None) -> Dict[str, Any]:
        """
        Get information about a scene.

        Args:
            scene_idx: Scene index (default: active scene)

        Returns:
            Dictionary with scene information
        """
        if not self.gltf.scenes:
            # No scene: every parentless node is a root
            children = {c for node in self.gltf.nodes for c in (node.children or [])}
            return {
                'name': 'Scene',
                'nodes': [i for i in range(len(self.gltf.nodes)) if i not in children],
            }

        if scene_idx is None:
            scene_idx = self.gltf.scene or 0

        if not 0 <= scene_idx < len(self.gltf.scenes):
            raise GLBParseError(f"Scene index {scene_idx} out of range")

        scene = self.gltf.scenes[scene_idx]

        return {
            'name': scene.name or f'Scene_{scene_idx}',
            'nodes': scene.nodes or [],
        }

    def get_node_matrix(self, node_idx: int) -> np.ndarray:
        """
        Get the local matrix of a node.

        Args:
            node_idx: Node index

        Returns:
            4x4 matrix relative to the parent node
        """
        node = self.gltf.nodes[node_idx]
        if node.matrix is not None:
            # glTF stores matrices column-major
            return np.array(node.matrix, dtype=float).reshape(4, 4).T

        return compose_trs(
            node.translation or [0, 0, 0],
            node.rotation or [0, 0, 0, 1],
            node.scale or [1, 1, 1],
        )

    def get_skin_data(self, skin_idx: int) -> Dict[str, Any]:
        """
        Get skin data.

        Args:
            skin_idx: Skin index

        Returns:
            Dictionary with skin joints and per-joint inverse bind matrices
        """
        if skin_idx >= len(self.gltf.skins):
            raise GLBParseError(f"Skin index {skin_idx} out of range")

        skin = self.gltf.skins[skin_idx]
        joints = skin.joints or []

        if skin.inverseBindMatrices is not None:
            matrices = self.accessor_reader.read_accessor(skin.inverseBindMatrices)
            # Column-major 4x4 matrices
            matrices = np.array(matrices, dtype=float).reshape(-1, 4, 4).transpose(0, 2, 1)
            if len(matrices) < len(joints):
                raise GLBParseError(
                    f"Skin {skin_idx} has {len(joints)} joints but {len(matrices)} inverse bind matrices"
                )
        else:
            matrices = np.tile(np.eye(4), (len(joints), 1, 1))

        return {
            'name': skin.name or f'Skin_{skin_idx}',
            'joints': joints,
            'skeleton': skin.skeleton,
            'inverseBindMatrices': matrices,
        }

    def _get_attribute(self, node_idx: int, joint_indices) -> Optional[NodeAttribute]:
        """Map a glTF node to its scene attribute."""
        node = self.gltf.nodes[node_idx]
        if node_idx in joint_indices:
            return NodeAttribute(AttributeType.SKELETON)
        if node.mesh is not None:
            return NodeAttribute(AttributeType.MESH)
        if node.camera is not None:
            return NodeAttribute(AttributeType.CAMERA)
        extensions = node.extensions or {}
        if LIGHTS_EXTENSION in extensions:
            return NodeAttribute(AttributeType.LIGHT)
        return None

    def build_scene(self, scene_idx: Optional[int] = None) -> Scene:
        """
        Build the scene graph of a glTF scene.

        Args:
            scene_idx: Scene index (default: active scene)

        Returns:
            Scene whose attribute-less root parents the glTF scene roots
        """
        scene_info = self.get_scene_info(scene_idx)
        joint_indices = {j for skin in self.gltf.skins for j in (skin.joints or [])}

        nodes: Dict[int, SceneNode] = {}
        root = SceneNode(scene_info['name'])

        stack = [(node_idx, root) for node_idx in reversed(scene_info['nodes'])]
        while stack:
            node_idx, parent = stack.pop()
            if node_idx >= len(self.gltf.nodes):
                raise GLBParseError(f"Node index {node_idx} out of range")
            if node_idx in nodes:
                raise GLBParseError(f"Node {node_idx} is referenced more than once")

            gltf_node = self.gltf.nodes[node_idx]
            node = SceneNode(
                gltf_node.name or f'Node_{node_idx}',
                attribute=self._get_attribute(node_idx, joint_indices),
                local_transform=self.get_node_matrix(node_idx),
            )
            parent.add_child(node)
            nodes[node_idx] = node

            for child_idx in reversed(gltf_node.children or []):
                stack.append((child_idx, node))

        self._attach_skins(nodes)

        logger.info(f"Built scene '{scene_info['name']}' with {len(nodes)} nodes")
        return Scene(root=root, name=scene_info['name'])

    def _attach_skins(self, nodes: Dict[int, SceneNode]):
        """Attach a skin deformer to every skinned mesh node of the scene."""
        skins = {}
        for node_idx, node in nodes.items():
            skin_idx = self.gltf.nodes[node_idx].skin
            if skin_idx is None:
                continue
            if skin_idx not in skins:
                skins[skin_idx] = self.get_skin_data(skin_idx)
            skin_data = skins[skin_idx]

            deformer = node.add_skin(skin_data['name'])
            for joint_idx, inverse_bind in zip(skin_data['joints'], skin_data['inverseBindMatrices']):
                link = nodes.get(joint_idx)
                if link is None:
                    logger.warning(f"Skin '{skin_data['name']}' joint {joint_idx} is not in the scene")
                    continue
                try:
                    transform_link = np.linalg.inv(inverse_bind)
                except np.linalg.LinAlgError:
                    logger.warning(f"Singular inverse bind matrix for joint '{link.name}'")
                    continue
                deformer.add_cluster(link, transform_link)

            logger.debug(f"Skin '{skin_data['name']}' on '{node.name}': "
                         f"{len(deformer.clusters)} clusters")


def load_scene(file_path: str, scene_idx: Optional[int] = None) -> Scene:
    """
    Load a GLB/GLTF file as a scene graph.

    Args:
        file_path: Path to GLB/GLTF file
        scene_idx: Scene index (default: active scene)

    Returns:
        Scene
    """
    return GLBParser(file_path).build_scene(scene_idx)
