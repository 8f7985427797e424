import unittest

from nodegraph.algorithms import GraphFilter, to_directed, to_undirected
from nodegraph.core import Graph, GraphDirectedness, GraphRestrictions, ReservedMetadataKeys


class TestToUndirected(unittest.TestCase):

    def setUp(self):
        G = Graph(GraphDirectedness.DIRECTED, GraphRestrictions.NO_PARALLEL_EDGES, name="net")
        self.a, self.b, self.c = G.vertices.add("a"), G.vertices.add("b"), G.vertices.add("c")
        self.a.location = (1.0, 2.0)
        self.a.set_value("Role", "hub")
        self.ab = G.edges.add(self.a, self.b)
        self.ab.set_value("Label", "first")
        self.ba = G.edges.add(self.b, self.a)
        self.ba.set_value("Label", "second")
        self.bc = G.edges.add(self.b, self.c)
        G.set_value("Title", "demo")
        self.G = G

    def test_reciprocal_edges_are_merged(self):
        U = to_undirected(self.G)
        self.assertIs(U.directedness, GraphDirectedness.UNDIRECTED)
        self.assertEqual(U.edges.ids, [self.ab.id, self.bc.id])
        merged = U.edges.find(self.ab.id)
        self.assertFalse(merged.is_directed)
        self.assertEqual(merged.get_required_value("Label", str), "first")
        self.assertEqual(merged.get_required_value(ReservedMetadataKeys.EDGE_WEIGHT), 2.0)
        self.assertEqual(U.edges.find(self.bc.id).get_required_value(ReservedMetadataKeys.EDGE_WEIGHT), 1.0)

    def test_vertices_and_graph_metadata_are_kept(self):
        U = to_undirected(self.G)
        self.assertEqual(U.vertices.ids, self.G.vertices.ids)
        a = U.vertices.find(self.a.id)
        self.assertEqual(a.name, "a")
        self.assertEqual(a.location, (1.0, 2.0))
        self.assertEqual(a.get_required_value("Role", str), "hub")
        self.assertEqual(U.get_required_value("Title", str), "demo")
        self.assertEqual(U.name, "net")

    def test_without_merging_every_edge_is_kept(self):
        U = to_undirected(self.G, merge_reciprocal=False)
        self.assertEqual(U.edges.ids, self.G.edges.ids)
        self.assertFalse(U.restrictions & GraphRestrictions.NO_PARALLEL_EDGES)
        self.assertTrue(all(not e.is_directed for e in U.edges))

    def test_input_is_untouched(self):
        to_undirected(self.G)
        self.assertEqual(len(self.G.edges), 3)
        self.assertTrue(all(e.is_directed for e in self.G.edges))
        self.assertFalse(self.ab.contains_key(ReservedMetadataKeys.EDGE_WEIGHT))


class TestToDirected(unittest.TestCase):

    def test_undirected_edges_become_two_directed_edges(self):
        G = Graph(GraphDirectedness.MIXED)
        a, b, c = G.vertices.add(), G.vertices.add(), G.vertices.add()
        G.edges.add(a, b, False).set_value("Label", "ab")
        G.edges.add(b, c, True)
        G.edges.add(c, c, False)

        D = to_directed(G)
        self.assertIs(D.directedness, GraphDirectedness.DIRECTED)
        pairs = [(e.vertex1.id, e.vertex2.id) for e in D.edges]
        self.assertEqual(pairs, [(a.id, b.id), (b.id, a.id), (b.id, c.id), (c.id, c.id)])
        self.assertTrue(all(e.is_directed for e in D.edges))
        self.assertEqual([e.try_get_value("Label") for e in D.edges][:2], ["ab", "ab"])
        self.assertEqual(D.edges.ids, [1, 2, 3, 4])


class TestGraphFilter(unittest.TestCase):

    def setUp(self):
        G = Graph(GraphDirectedness.UNDIRECTED)
        self.v = [G.vertices.add(str(i)) for i in range(4)]
        self.e01 = G.edges.add(self.v[0], self.v[1])
        self.e12 = G.edges.add(self.v[1], self.v[2])
        self.e23 = G.edges.add(self.v[2], self.v[3])
        self.e12.set_value("Weight", 5.0)
        self.G = G

    def test_vertex_predicate_drops_incident_edges(self):
        F = GraphFilter(vertex_predicate=lambda vertex: vertex.name != "1").transform(self.G)
        self.assertEqual(F.vertices.ids, [self.v[0].id, self.v[2].id, self.v[3].id])
        self.assertEqual(F.edges.ids, [self.e23.id])

    def test_edge_predicate(self):
        heavy = GraphFilter(edge_predicate=lambda e: (e.try_get_value("Weight", float) or 0) > 1)
        F = heavy.transform(self.G)
        self.assertEqual(len(F.vertices), 4)
        self.assertEqual(F.edges.ids, [self.e12.id])
        self.assertEqual(F.edges.find(self.e12.id).get_required_value("Weight", float), 5.0)

    def test_no_predicates_copies_everything(self):
        F = GraphFilter().transform(self.G)
        self.assertEqual(F.vertices.ids, self.G.vertices.ids)
        self.assertEqual(F.edges.ids, self.G.edges.ids)
        self.assertIsNot(F, self.G)


if __name__ == "__main__":
    unittest.main()
