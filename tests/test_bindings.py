"""
Unit tests for binding collection and bind pose resolution.
"""

import unittest
import numpy as np

from scene2skel.importer.common import translation_matrix
from scene2skel.importer.scene import AttributeType, BindPose, Scene, SceneNode
from scene2skel.importer.skeleton.bindings import BindPoseResolver, BindSource, collect_clusters

from tests.scenes import joint


class TestCollectClusters(unittest.TestCase):
    """Test the whole-scene cluster collection."""

    def test_collects_from_every_skin(self):
        scene = Scene.empty()
        hips = scene.root.add_child(joint('Hips'))
        spine = hips.add_child(joint('Spine'))
        body = scene.root.add_child(joint('Body', attribute=AttributeType.MESH))
        # Skinned surface nested under a joint
        cloth = spine.add_child(joint('Cloth', attribute=AttributeType.MESH))

        skin = body.add_skin()
        skin.add_cluster(hips)
        skin.add_cluster(spine)
        body.add_skin().add_cluster(spine)
        cloth.add_skin().add_cluster(hips)

        clusters = collect_clusters(scene.root)

        self.assertEqual(len(clusters), 4)
        # Pre-order: Cloth (under Spine) is visited before Body
        self.assertEqual([c.link.name for c in clusters], ['Hips', 'Hips', 'Spine', 'Spine'])
        self.assertIs(clusters[0].link, hips)

    def test_only_geometry_nodes_contribute(self):
        scene = Scene.empty()
        hips = scene.root.add_child(joint('Hips'))
        group = scene.root.add_child(SceneNode('Group'))
        body = scene.root.add_child(joint('Body', attribute=AttributeType.SUBDIV))
        group.add_skin().add_cluster(hips)
        hips.add_skin().add_cluster(hips)
        body_skin = body.add_skin()
        body_skin.add_cluster(None)
        body_skin.add_cluster(hips, translation_matrix(1, 0, 0))

        clusters = collect_clusters(scene.root)

        self.assertEqual(len(clusters), 1)
        self.assertIs(clusters[0].link, hips)
        np.testing.assert_allclose(clusters[0].transform_link, translation_matrix(1, 0, 0))

    def test_resolver_ignores_unlinked_clusters(self):
        scene = Scene.empty()
        hips = scene.root.add_child(joint('Hips', translation_matrix(0, 1, 0)))
        skin = scene.root.add_child(joint('Body', attribute=AttributeType.MESH)).add_skin()
        skin.add_cluster(None)
        skin.add_cluster(None)

        matrix, source = BindPoseResolver(scene, skin.clusters).resolve(hips)

        self.assertEqual(source, BindSource.EVALUATED)
        np.testing.assert_allclose(matrix, translation_matrix(0, 1, 0))

    def test_scene_without_skins(self):
        scene = Scene.empty()
        scene.root.add_child(joint('Hips'))
        self.assertEqual(collect_clusters(scene.root), [])


class TestBindPoseResolver(unittest.TestCase):
    """Test the bind transform fallback chain."""

    def setUp(self):
        self.scene = Scene.empty()
        self.node = self.scene.root.add_child(joint('Hand', translation_matrix(5, 0, 0)))
        self.body = self.scene.root.add_child(joint('Body', attribute=AttributeType.MESH))

    def test_cluster_wins_over_bind_pose(self):
        self.body.add_skin().add_cluster(self.node, np.eye(4))
        pose = self.scene.add_pose(BindPose())
        pose.add(self.node, translation_matrix(2, 0, 0))

        resolver = BindPoseResolver(self.scene, collect_clusters(self.scene.root))
        matrix, source = resolver.resolve(self.node)

        self.assertEqual(source, BindSource.CLUSTER)
        np.testing.assert_allclose(matrix, np.eye(4))

    def test_bind_pose_used_without_cluster(self):
        pose = self.scene.add_pose(BindPose())
        pose.add(self.node, translation_matrix(2, 0, 0))

        resolver = BindPoseResolver(self.scene, [])
        matrix, source = resolver.resolve(self.node)

        self.assertEqual(source, BindSource.BIND_POSE)
        np.testing.assert_allclose(matrix, translation_matrix(2, 0, 0))

    def test_first_bind_pose_wins(self):
        self.scene.add_pose(BindPose(name='empty'))
        first = self.scene.add_pose(BindPose(name='first'))
        first.add(self.node, translation_matrix(2, 0, 0))
        second = self.scene.add_pose(BindPose(name='second'))
        second.add(self.node, translation_matrix(3, 0, 0))

        matrix, _ = BindPoseResolver(self.scene, []).resolve(self.node)
        np.testing.assert_allclose(matrix, translation_matrix(2, 0, 0))

    def test_rest_pose_is_ignored(self):
        pose = self.scene.add_pose(BindPose(name='rest', is_bind_pose=False))
        pose.add(self.node, translation_matrix(2, 0, 0))

        matrix, source = BindPoseResolver(self.scene, []).resolve(self.node)

        self.assertEqual(source, BindSource.EVALUATED)
        np.testing.assert_allclose(matrix, translation_matrix(5, 0, 0))

    def test_evaluated_world_transform_fallback(self):
        child = self.node.add_child(joint('Finger', translation_matrix(0, 1, 0)))

        matrix, source = BindPoseResolver(self.scene, []).resolve(child)

        self.assertEqual(source, BindSource.EVALUATED)
        np.testing.assert_allclose(matrix, translation_matrix(5, 1, 0))

    def test_duplicate_cluster_links_keep_first(self):
        self.body.add_skin().add_cluster(self.node, translation_matrix(1, 0, 0))
        self.body.add_skin().add_cluster(self.node, translation_matrix(9, 0, 0))

        with self.assertLogs('scene2skel.importer.skeleton.bindings', level='WARNING'):
            resolver = BindPoseResolver(self.scene, collect_clusters(self.scene.root))

        matrix, _ = resolver.resolve(self.node)
        np.testing.assert_allclose(matrix, translation_matrix(1, 0, 0))


if __name__ == '__main__':
    unittest.main()
