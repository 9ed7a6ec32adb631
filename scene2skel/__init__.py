"""
SCENE2SKEL
==========

Skeleton extraction from 3D scene graphs: selected nodes become joints,
bind poses are resolved from skin clusters, bind pose snapshots or the
evaluated node transforms.
"""

__version__ = "0.1.0"

from .importer.scene import AttributeType, NodeAttribute, SceneNode, BindPose, Scene
from .importer.skeleton import (
    NodeTypes,
    Skeleton,
    Joint,
    SkeletonExtractor,
    ExtractionResult,
    ExtractionStatus,
    extract_skeleton,
)
from .importer.transform import Transform, TransformConverter


def extract_skeleton_from_file(file_path: str, types: NodeTypes | None = None,
                               converter: TransformConverter | None = None) -> ExtractionResult:
    """Load a GLB/GLTF file and extract its skeleton."""
    from .importer.glb import load_scene
    return extract_skeleton(load_scene(file_path), types, converter)


__all__ = ["AttributeType", "NodeAttribute", "SceneNode", "BindPose", "Scene",
           "NodeTypes", "Skeleton", "Joint", "SkeletonExtractor", "ExtractionResult",
           "ExtractionStatus", "extract_skeleton", "extract_skeleton_from_file",
           "Transform", "TransformConverter"]
