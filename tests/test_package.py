# tests/test_package.py
# Run: python -m unittest tests/test_package.py -v

import unittest

import nodegraph


class TestLazyExports(unittest.TestCase):

    def test_symbols_resolve(self):
        for name in nodegraph._lazy_symbols:
            with self.subTest(name=name):
                self.assertIsNotNone(getattr(nodegraph, name))

    def test_submodules_resolve(self):
        self.assertIs(nodegraph.networkx, nodegraph.adapters.networkx)
        self.assertTrue(hasattr(nodegraph.centrality_table, "read_centrality_table"))

    def test_unknown_attribute(self):
        with self.assertRaises(AttributeError):
            nodegraph.does_not_exist

    def test_dir_and_version(self):
        self.assertIn("Graph", dir(nodegraph))
        self.assertIsInstance(nodegraph.__version__, str)

    def test_quick_tour(self):
        G = nodegraph.Graph(nodegraph.GraphDirectedness.UNDIRECTED)
        a, b, c = G.vertices.add("a"), G.vertices.add("b"), G.vertices.add("c")
        G.edges.add(a, b)
        G.edges.add(b, c)
        results = nodegraph.GraphMetricCalculationManager().calculate_graph_metrics(G)
        self.assertTrue(results.succeeded)
        layout = nodegraph.FruchtermanReingoldLayout()
        self.assertTrue(layout.lay_out_graph(G, nodegraph.LayoutContext(nodegraph.Rectangle(0, 0, 300, 300))))


if __name__ == "__main__":
    unittest.main()
