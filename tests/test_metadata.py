import unittest

from nodegraph.core import (
    Graph,
    MetadataContractViolation,
    MetadataKey,
    MetadataStore,
    ReservedMetadataKeys,
    SinglePolarCoordinates,
)
from nodegraph.core.metadata import RESERVED_PREFIX, value_matches_type


class TestMetadataStore(unittest.TestCase):

    def setUp(self):
        self.store = MetadataStore()

    def test_set_and_get(self):
        self.store.set_value("Color", "red")
        self.assertTrue(self.store.contains_key("Color"))
        self.assertEqual(self.store.try_get_value("Color"), "red")
        self.assertEqual(self.store.get_required_value("Color", str), "red")
        self.assertEqual(len(self.store), 1)

    def test_missing_key(self):
        self.assertIsNone(self.store.try_get_value("Nope"))
        self.assertFalse(self.store.contains_key("Nope"))

    def test_required_value_on_unset_key_names_the_key(self):
        with self.assertRaises(MetadataContractViolation) as cm:
            self.store.get_required_value("Weight", float)
        self.assertEqual(cm.exception.key, "Weight")
        self.assertIn("Weight", str(cm.exception))

    def test_contract_violation_is_a_key_error(self):
        with self.assertRaises(KeyError):
            self.store.get_required_value("Weight")

    def test_wrong_type_on_read(self):
        self.store.set_value("Weight", "heavy")
        self.assertEqual(self.store.try_get_value("Weight"), "heavy")
        with self.assertRaises(MetadataContractViolation):
            self.store.try_get_value("Weight", float)
        with self.assertRaises(MetadataContractViolation):
            self.store.get_required_value("Weight", float)

    def test_setting_none_removes_the_key(self):
        self.store.set_value("Color", "red")
        self.store.set_value("Color", None)
        self.assertFalse(self.store.contains_key("Color"))
        self.assertEqual(self.store.keys(), [])

    def test_remove_key(self):
        self.store.set_value("Color", "red")
        self.assertTrue(self.store.remove_key("Color"))
        self.assertFalse(self.store.remove_key("Color"))

    def test_key_must_be_a_non_empty_string(self):
        with self.assertRaises(TypeError):
            self.store.set_value("", 1)
        with self.assertRaises(TypeError):
            self.store.try_get_value(42)

    def test_copy_to(self):
        self.store.set_value("A", 1)
        self.store.set_value(ReservedMetadataKeys.LOCK_VERTEX_LOCATION, True)
        target = MetadataStore()
        self.store.copy_to(target)
        self.assertEqual(sorted(target.keys()), sorted(self.store.keys()))
        public = MetadataStore()
        self.store.copy_to(public, include_reserved=False)
        self.assertEqual(public.keys(), ["A"])
        self.assertEqual(self.store.public_items(), [("A", 1)])


class TestTypedKeys(unittest.TestCase):

    def test_typed_key_checks_writes(self):
        weight = MetadataKey("Weight", float)
        store = MetadataStore()
        store.set_value(weight, 3)
        self.assertEqual(store.get_required_value(weight), 3)
        with self.assertRaises(MetadataContractViolation):
            store.set_value(weight, "3")

    def test_typed_key_shares_the_string_slot(self):
        weight = MetadataKey("Weight", float)
        store = MetadataStore()
        store.set_value("Weight", 1.5)
        self.assertEqual(store.try_get_value(weight), 1.5)

    def test_bool_is_not_a_number(self):
        self.assertFalse(value_matches_type(True, int))
        self.assertFalse(value_matches_type(False, float))
        self.assertTrue(value_matches_type(2, float))
        self.assertFalse(value_matches_type(2.0, int))
        self.assertTrue(value_matches_type(object(), None))

    def test_key_equality(self):
        self.assertEqual(MetadataKey("A", int), MetadataKey("A", int))
        self.assertNotEqual(MetadataKey("A", int), MetadataKey("A", str))
        self.assertEqual(len({MetadataKey("A", int), MetadataKey("A", int)}), 1)

    def test_invalid_names(self):
        with self.assertRaises(ValueError):
            MetadataKey("")
        with self.assertRaises(MetadataContractViolation):
            MetadataKey(RESERVED_PREFIX + "Mine", int)


class TestReservedKeys(unittest.TestCase):

    def test_reserved_names_carry_the_prefix(self):
        for key in (
            ReservedMetadataKeys.LOCK_VERTEX_LOCATION,
            ReservedMetadataKeys.POLAR_LAYOUT_COORDINATES,
            ReservedMetadataKeys.LAY_OUT_THESE_VERTICES_ONLY,
            ReservedMetadataKeys.LAY_OUT_THESE_VERTICES_WITHIN_BOUNDS,
            ReservedMetadataKeys.LAYOUT_BASE_LAYOUT_COMPLETE,
            ReservedMetadataKeys.EDGE_WEIGHT,
            ReservedMetadataKeys.EDGE_CURVE_POINTS,
        ):
            self.assertTrue(key.name.startswith(RESERVED_PREFIX))
            self.assertTrue(key.is_reserved)

    def test_reserved_string_keys_are_read_only(self):
        v = Graph().vertices.add()
        name = ReservedMetadataKeys.LOCK_VERTEX_LOCATION.name
        with self.assertRaises(MetadataContractViolation):
            v.set_value(name, True)
        v.set_value(ReservedMetadataKeys.LOCK_VERTEX_LOCATION, True)
        # readable by name
        self.assertIs(v.try_get_value(name), True)
        with self.assertRaises(MetadataContractViolation):
            v.remove_key(name)
        self.assertTrue(v.remove_key(ReservedMetadataKeys.LOCK_VERTEX_LOCATION))

    def test_reserved_key_types(self):
        v = Graph().vertices.add()
        with self.assertRaises(MetadataContractViolation):
            v.set_value(ReservedMetadataKeys.LOCK_VERTEX_LOCATION, 1)
        with self.assertRaises(MetadataContractViolation):
            v.set_value(ReservedMetadataKeys.POLAR_LAYOUT_COORDINATES, (0.5, 90.0))
        v.set_value(ReservedMetadataKeys.POLAR_LAYOUT_COORDINATES, SinglePolarCoordinates(0.5, 90.0))
        self.assertEqual(v.try_get_value(ReservedMetadataKeys.POLAR_LAYOUT_COORDINATES).angle, 90.0)

    def test_polar_coordinates_must_be_finite(self):
        with self.assertRaises(ValueError):
            SinglePolarCoordinates(float("nan"), 0.0)
        with self.assertRaises(ValueError):
            SinglePolarCoordinates(1.0, float("inf"))


class TestHolders(unittest.TestCase):

    def test_graph_vertex_and_edge_hold_metadata(self):
        G = Graph()
        a, b = G.vertices.add(), G.vertices.add()
        e = G.edges.add(a, b)
        for holder in (G, a, e):
            holder.set_value("Label", "x")
            self.assertEqual(holder.get_required_value("Label", str), "x")
        self.assertIsNot(a.metadata, b.metadata)
        self.assertFalse(b.contains_key("Label"))


if __name__ == "__main__":
    unittest.main()
