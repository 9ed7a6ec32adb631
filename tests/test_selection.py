"""
Unit tests for node category selection.
"""

import unittest

from scene2skel.importer.scene import AttributeType
from scene2skel.importer.skeleton.selection import NodeTypes, is_type_selected, GEOMETRY_TYPES


class TestIsTypeSelected(unittest.TestCase):
    """Test the node classifier table."""

    def test_default_selects_skeleton_only(self):
        types = NodeTypes()
        self.assertTrue(is_type_selected(types, AttributeType.SKELETON))
        for attribute_type in AttributeType:
            if attribute_type is not AttributeType.SKELETON:
                with self.subTest(attribute_type=attribute_type):
                    self.assertFalse(is_type_selected(types, attribute_type))

    def test_geometry_flag_covers_all_geometry_types(self):
        types = NodeTypes(skeleton=False, geometry=True)
        for attribute_type in (AttributeType.MESH, AttributeType.NURBS, AttributeType.PATCH,
                               AttributeType.NURBS_CURVE, AttributeType.TRIM_NURBS_SURFACE,
                               AttributeType.BOUNDARY, AttributeType.NURBS_SURFACE,
                               AttributeType.SHAPE, AttributeType.SUBDIV, AttributeType.LINE):
            with self.subTest(attribute_type=attribute_type):
                self.assertTrue(is_type_selected(types, attribute_type))
        self.assertFalse(is_type_selected(types, AttributeType.SKELETON))
        self.assertEqual(len(GEOMETRY_TYPES), 10)

    def test_camera_marker_and_light_flags(self):
        self.assertTrue(is_type_selected(NodeTypes(camera=True), AttributeType.CAMERA))
        self.assertTrue(is_type_selected(NodeTypes(camera=True), AttributeType.CAMERA_STEREO))
        self.assertFalse(is_type_selected(NodeTypes(camera=True), AttributeType.CAMERA_SWITCHER))
        self.assertTrue(is_type_selected(NodeTypes(marker=True), AttributeType.MARKER))
        self.assertFalse(is_type_selected(NodeTypes(marker=True), AttributeType.OPTICAL_MARKER))
        self.assertTrue(is_type_selected(NodeTypes(light=True), AttributeType.LIGHT))

    def test_other_types_are_always_rejected(self):
        types = NodeTypes(skeleton=True, marker=True, camera=True, geometry=True, light=True)
        for attribute_type in (AttributeType.UNKNOWN, AttributeType.NULL,
                               AttributeType.CAMERA_SWITCHER, AttributeType.OPTICAL_REFERENCE,
                               AttributeType.OPTICAL_MARKER, AttributeType.CACHED_EFFECT,
                               AttributeType.LOD_GROUP):
            with self.subTest(attribute_type=attribute_type):
                self.assertFalse(is_type_selected(types, attribute_type))

    def test_any_accepts_every_attribute(self):
        types = NodeTypes(skeleton=False, any=True)
        for attribute_type in AttributeType:
            self.assertTrue(is_type_selected(types, attribute_type))

    def test_missing_attribute_is_rejected(self):
        self.assertFalse(is_type_selected(NodeTypes(any=True), None))


class TestNodeTypes(unittest.TestCase):
    """Test building selections from names."""

    def test_from_names(self):
        types = NodeTypes.from_names(['marker', 'Light'])
        self.assertEqual(types, NodeTypes(skeleton=False, marker=True, light=True))
        self.assertEqual(types.selected_names(), ['marker', 'light'])

    def test_unknown_name(self):
        with self.assertRaises(ValueError):
            NodeTypes.from_names(['bones'])


if __name__ == '__main__':
    unittest.main()
