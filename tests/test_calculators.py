import unittest

import networkx as nx

from nodegraph.algorithms import (
    CalculationContext,
    ClusteringCoefficientCalculator,
    ConnectedComponentCalculator,
    DuplicateEdgeDetector,
    OverallMetricCalculator,
    VertexDegreeCalculator,
    VertexDegrees,
    merge_duplicate_edges,
    weakly_connected_components,
)
from nodegraph.algorithms.base import VERTICES_PER_PROGRESS_REPORT
from nodegraph.core import Graph, GraphDirectedness, ReservedMetadataKeys


class TestVertexDegrees(unittest.TestCase):

    def test_mixed_graph(self):
        G = Graph(GraphDirectedness.MIXED)
        a, b, c = G.vertices.add(), G.vertices.add(), G.vertices.add()
        G.edges.add(a, b, True)
        G.edges.add(b, c, False)
        G.edges.add(c, c, True)
        degrees = VertexDegreeCalculator().calculate_graph_metrics(G)
        self.assertEqual(degrees[a.id], VertexDegrees(in_degree=0, out_degree=1, degree=1))
        self.assertEqual(degrees[b.id], VertexDegrees(in_degree=2, out_degree=1, degree=2))
        self.assertEqual(degrees[c.id], VertexDegrees(in_degree=2, out_degree=2, degree=2))

    def test_cancellation_is_polled(self):
        G = Graph(GraphDirectedness.UNDIRECTED)
        previous = None
        for _ in range(VERTICES_PER_PROGRESS_REPORT * 2 + 1):
            vertex = G.vertices.add()
            if previous is not None:
                G.edges.add(previous, vertex)
            previous = vertex
        checks = []

        def cancel_on_third_check():
            checks.append(1)
            return len(checks) >= 3

        completed, degrees = VertexDegreeCalculator().try_calculate_graph_metrics(
            G, CalculationContext(cancel_on_third_check)
        )
        self.assertFalse(completed)
        self.assertIsNone(degrees)
        self.assertEqual(len(checks), 3)


class TestClusteringCoefficient(unittest.TestCase):

    def test_triangle_with_tail(self):
        G = Graph(GraphDirectedness.UNDIRECTED)
        a, b, c, d = (G.vertices.add() for _ in range(4))
        for u, v in ((a, b), (b, c), (c, a), (c, d)):
            G.edges.add(u, v)
        coefficients = ClusteringCoefficientCalculator().calculate_graph_metrics(G)
        self.assertAlmostEqual(coefficients[a.id], 1.0)
        self.assertAlmostEqual(coefficients[b.id], 1.0)
        self.assertAlmostEqual(coefficients[c.id], 1.0 / 3.0)
        self.assertEqual(coefficients[d.id], 0.0)

    def test_matches_networkx_on_undirected_graph(self):
        nxG = nx.les_miserables_graph()
        G = Graph(GraphDirectedness.UNDIRECTED)
        vertices = {node: G.vertices.add(node) for node in nxG.nodes}
        for u, w in nxG.edges:
            G.edges.add(vertices[u], vertices[w])
        coefficients = ClusteringCoefficientCalculator().calculate_graph_metrics(G)
        expected = nx.clustering(nxG)
        for node, vertex in vertices.items():
            self.assertAlmostEqual(coefficients[vertex.id], expected[node], places=9)

    def test_directed_denominator(self):
        G = Graph(GraphDirectedness.DIRECTED)
        a, b, c = G.vertices.add(), G.vertices.add(), G.vertices.add()
        G.edges.add(a, b)
        G.edges.add(a, c)
        G.edges.add(b, c)
        coefficients = ClusteringCoefficientCalculator().calculate_graph_metrics(G)
        # one of the two possible edges between b and c
        self.assertAlmostEqual(coefficients[a.id], 0.5)

    def test_mixed_graph_reaches_one_after_merging(self):
        for directedness in (GraphDirectedness.DIRECTED, GraphDirectedness.MIXED):
            with self.subTest(directedness=directedness):
                G = Graph(directedness)
                a, b, c = G.vertices.add(), G.vertices.add(), G.vertices.add()
                for u, v in ((a, b), (b, c), (c, a)):
                    G.edges.add(u, v, True)
                    G.edges.add(v, u, True)
                merged = merge_duplicate_edges(G)
                coefficients = ClusteringCoefficientCalculator().calculate_graph_metrics(merged)
                for vertex in merged.vertices:
                    self.assertAlmostEqual(coefficients[vertex.id], 1.0)

    def test_self_loops_are_ignored(self):
        G = Graph(GraphDirectedness.UNDIRECTED)
        a, b, c = G.vertices.add(), G.vertices.add(), G.vertices.add()
        G.edges.add(a, b)
        G.edges.add(a, c)
        G.edges.add(a, a)
        G.edges.add(b, b)
        coefficients = ClusteringCoefficientCalculator().calculate_graph_metrics(G)
        self.assertEqual(coefficients[a.id], 0.0)
        self.assertEqual(coefficients[b.id], 0.0)


class TestConnectedComponents(unittest.TestCase):

    def test_components_ignore_direction_and_sort_by_size(self):
        G = Graph(GraphDirectedness.MIXED)
        v = [G.vertices.add() for _ in range(6)]
        G.edges.add(v[0], v[1], False)
        G.edges.add(v[3], v[4], True)
        G.edges.add(v[5], v[4], True)
        components = weakly_connected_components(G)
        self.assertEqual(components, [[v[3].id, v[4].id, v[5].id], [v[0].id, v[1].id], [v[2].id]])

    def test_equal_sizes_keep_vertex_order(self):
        G = Graph(GraphDirectedness.UNDIRECTED)
        v = [G.vertices.add() for _ in range(4)]
        G.edges.add(v[2], v[3])
        G.edges.add(v[0], v[1])
        self.assertEqual(
            ConnectedComponentCalculator().calculate_graph_metrics(G),
            [[v[0].id, v[1].id], [v[2].id, v[3].id]],
        )

    def test_empty_graph(self):
        self.assertEqual(weakly_connected_components(Graph()), [])


class TestDuplicateEdges(unittest.TestCase):

    def setUp(self):
        G = Graph(GraphDirectedness.MIXED)
        self.a, self.b, self.c = G.vertices.add(), G.vertices.add(), G.vertices.add()
        self.ab = G.edges.add(self.a, self.b, True)
        self.ba = G.edges.add(self.b, self.a, False)
        self.bc = G.edges.add(self.b, self.c, False)
        self.cc = G.edges.add(self.c, self.c, False)
        self.G = G

    def test_detector(self):
        detector = DuplicateEdgeDetector(self.G)
        self.assertTrue(detector.graph_contains_duplicate_edges)
        summary = detector.count_edges()
        self.assertEqual(summary.unique_edges, 2)
        self.assertEqual(summary.edges_with_duplicates, 2)
        self.assertEqual(summary.total_edges_after_merging_duplicates_no_self_loops, 2)

    def test_directed_graph_keeps_direction(self):
        G = Graph(GraphDirectedness.DIRECTED)
        a, b = G.vertices.add(), G.vertices.add()
        G.edges.add(a, b)
        G.edges.add(b, a)
        self.assertFalse(DuplicateEdgeDetector(G).graph_contains_duplicate_edges)

    def test_merge(self):
        merged = merge_duplicate_edges(self.G)
        self.assertEqual(merged.edges.ids, [self.ab.id, self.bc.id, self.cc.id])
        self.assertEqual(merged.vertices.ids, self.G.vertices.ids)
        weight = ReservedMetadataKeys.EDGE_WEIGHT
        self.assertEqual(merged.edges.find(self.ab.id).get_required_value(weight), 2.0)
        self.assertEqual(merged.edges.find(self.bc.id).get_required_value(weight), 1.0)
        # the source graph is untouched
        self.assertEqual(len(self.G.edges), 4)
        self.assertFalse(self.ab.contains_key(weight))


class TestOverallMetrics(unittest.TestCase):

    def test_overall_metrics(self):
        G = Graph(GraphDirectedness.UNDIRECTED)
        a, b, c, d, e = (G.vertices.add(n) for n in "abcde")
        G.edges.add(a, b)
        G.edges.add(a, b)
        G.edges.add(b, c)
        G.edges.add(c, c)
        m = OverallMetricCalculator().calculate_graph_metrics(G)
        self.assertIs(m.directedness, GraphDirectedness.UNDIRECTED)
        self.assertEqual(m.vertices, 5)
        self.assertEqual(m.unique_edges, 2)
        self.assertEqual(m.edges_with_duplicates, 2)
        self.assertEqual(m.total_edges, 4)
        self.assertEqual(m.self_loops, 1)
        self.assertAlmostEqual(m.graph_density, 0.2)
        self.assertEqual(m.connected_components, 3)
        self.assertEqual(m.single_vertex_connected_components, 2)
        self.assertEqual(m.maximum_connected_component_vertices, 3)
        self.assertEqual(m.maximum_connected_component_edges, 4)
        self.assertEqual(m.maximum_geodesic_distance, 2)
        self.assertAlmostEqual(m.average_geodesic_distance, 8.0 / 6.0)

    def test_directed_density_is_halved(self):
        G = Graph(GraphDirectedness.DIRECTED)
        a, b = G.vertices.add(), G.vertices.add()
        G.edges.add(a, b)
        self.assertAlmostEqual(OverallMetricCalculator().calculate_graph_metrics(G).graph_density, 0.5)

    def test_tiny_graphs(self):
        m = OverallMetricCalculator().calculate_graph_metrics(Graph())
        self.assertEqual(m.vertices, 0)
        self.assertIsNone(m.graph_density)
        self.assertEqual(m.connected_components, 0)
        self.assertIsNone(m.maximum_geodesic_distance)

    def test_cancellation(self):
        G = Graph()
        G.vertices.add()
        checks = []

        def cancel_after_first_check():
            checks.append(1)
            return len(checks) > 1

        completed, metrics = OverallMetricCalculator().try_calculate_graph_metrics(
            G, CalculationContext(cancel_after_first_check)
        )
        self.assertFalse(completed)
        self.assertIsNone(metrics)


if __name__ == "__main__":
    unittest.main()
