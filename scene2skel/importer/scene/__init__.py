"""
Scene graph module.
"""

from .graph import (
    AttributeType,
    NodeAttribute,
    SceneNode,
    SkinDeformer,
    BindingCluster,
    BindPose,
    Scene,
)

__all__ = ['AttributeType', 'NodeAttribute', 'SceneNode', 'SkinDeformer',
           'BindingCluster', 'BindPose', 'Scene']
