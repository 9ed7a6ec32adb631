"""
Skeleton extraction module.
"""

from .extractor import (
    SkeletonExtractor,
    ExtractionResult,
    ExtractionStatus,
    RecurseResult,
    extract_skeleton,
)
from .joint import Joint, Skeleton
from .selection import NodeTypes, is_type_selected
from .bindings import BindPoseResolver, BindSource, collect_clusters

__all__ = ['SkeletonExtractor', 'ExtractionResult', 'ExtractionStatus', 'RecurseResult',
           'extract_skeleton', 'Joint', 'Skeleton', 'NodeTypes', 'is_type_selected',
           'BindPoseResolver', 'BindSource', 'collect_clusters']
