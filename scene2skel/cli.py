"""
Command-line interface for skeleton extraction.
"""

import argparse
import json
import logging
from pathlib import Path

from scene2skel.importer.common import AXIS_SYSTEMS, DEFAULT_AXIS_SYSTEM, DEFAULT_SELECTED_TYPES
from scene2skel.importer.exceptions import ImporterError
from scene2skel.importer.glb import load_scene
from scene2skel.importer.skeleton import NodeTypes, extract_skeleton
from scene2skel.importer.transform import TransformConverter

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Extract a skeleton from a GLB/GLTF scene"
    )
    parser.add_argument('input', help='Input GLB/GLTF file')
    parser.add_argument('--types', nargs='+', default=list(DEFAULT_SELECTED_TYPES),
                        choices=['skeleton', 'marker', 'camera', 'geometry', 'light'],
                        help='Node categories promoted to joints')
    parser.add_argument('--any', action='store_true', help='Promote every node with an attribute')
    parser.add_argument('--axis-system', default=DEFAULT_AXIS_SYSTEM, choices=AXIS_SYSTEMS,
                        help='Axis system of the input scene')
    parser.add_argument('--target-axis-system', default=DEFAULT_AXIS_SYSTEM, choices=AXIS_SYSTEMS,
                        help='Axis system of the extracted skeleton')
    parser.add_argument('--unit-scale', type=float, default=1.0,
                        help='Scale applied to translations')
    parser.add_argument('--scene', type=int, default=None, help='glTF scene index')
    parser.add_argument('-o', '--output', help='Write the skeleton as JSON')
    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose output')
    return parser


def main(argv=None):
    """Command-line entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Setup logging
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(levelname)s: %(message)s'
    )

    types = NodeTypes.from_names(args.types)
    if args.any:
        types = NodeTypes(any=True)

    try:
        scene = load_scene(args.input, args.scene)
        converter = TransformConverter(args.axis_system, args.target_axis_system, args.unit_scale)
    except (ImporterError, ValueError) as e:
        logger.error(str(e))
        return 1

    result = extract_skeleton(scene, types, converter)
    if not result:
        return 1

    skeleton = result.skeleton
    if args.output:
        output = Path(args.output)
        output.parent.mkdir(parents=True, exist_ok=True)
        with open(output, 'w') as f:
            json.dump(skeleton.to_dict(), f, indent=2)
        logger.info(f"Skeleton written to {output}")
    else:
        skeleton.print_hierarchy()

    logger.info(f"✅ Extraction complete:")
    logger.info(f"   Joints: {skeleton.num_joints}")
    logger.info(f"   Root joints: {len(skeleton.root_indices)}")
    return 0


if __name__ == '__main__':
    exit(main())
