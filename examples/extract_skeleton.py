#!/usr/bin/env python3
"""
Example: Extract the skeleton of a GLB file.
"""

import scene2skel

# Promote skeleton joints and markers, convert to a Z-up skeleton in meters
result = scene2skel.extract_skeleton_from_file(
    "assets/character.glb",
    types=scene2skel.NodeTypes(skeleton=True, marker=True),
    converter=scene2skel.TransformConverter('Y-up', 'Z-up', unit_scale=0.01),
)

if result:
    result.skeleton.print_hierarchy()
    print(f"\n✅ Extracted {result.skeleton.num_joints} joints!")
else:
    print(f"\n❌ Skeleton extraction failed: {result.message}")
