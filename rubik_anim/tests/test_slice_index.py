import unittest

from rubik_anim.core.errors import InvariantViolation, SliceLookupError
from rubik_anim.core.grid_model import BLANK_MATERIALS, FACE_MATERIALS, GridModel
from rubik_anim.core.slice_index import SLICE_NAMES, SliceIndexer


def assert_partition(test, indexer):
    for axis in "xyz":
        seen = []
        for i in range(3):
            members = indexer.get_slice(f"{axis}{i}")
            test.assertEqual(len(members), 9)
            test.assertEqual(len({p.index for p in members}), 9)
            for p in members:
                test.assertEqual(round(p.position["xyz".index(axis)]), i - 1)
            seen.extend(p.index for p in members)
        test.assertEqual(sorted(seen), list(range(27)))


class TestGridModel(unittest.TestCase):
    def test_creates_27_cubelets(self):
        created = []
        grid = GridModel(on_create=created.append)
        self.assertEqual(len(grid), 27)
        self.assertEqual([p.index for p in created], list(range(27)))
        self.assertEqual(grid[0].position, (-1.0, -1.0, -1.0))
        # Orden de creación: y -> x -> z
        self.assertEqual(grid[1].home, (0, 0, 1))
        self.assertEqual(grid[3].home, (1, 0, 0))
        self.assertEqual(grid[9].home, (0, 1, 0))

    def test_all_colored_without_whitelist(self):
        grid = GridModel()
        self.assertTrue(all(p.display == FACE_MATERIALS for p in grid.cubelets))

    def test_whitelist_center_only(self):
        grid = GridModel(whitelist=[(1, 1, 1)])
        colored = [p for p in grid.cubelets if not p.is_blank]
        self.assertEqual(len(colored), 1)
        self.assertEqual(colored[0].position, (0.0, 0.0, 0.0))
        self.assertEqual(sum(1 for p in grid.cubelets if p.display == BLANK_MATERIALS), 26)

    def test_correct_positions(self):
        grid = GridModel()
        grid[0].position = (-0.9999997, -1.0000002, 0.0000004)
        self.assertFalse(grid.is_snapped(d=1e-9))
        grid.correct_positions()
        self.assertEqual(grid[0].position, (-1.0, -1.0, 0.0))
        self.assertTrue(grid.is_snapped(d=1e-12))


class TestSliceIndexer(unittest.TestCase):
    def setUp(self):
        self.grid = GridModel()
        self.indexer = SliceIndexer(self.grid)
        self.indexer.reindex()

    def test_partition_after_init(self):
        self.assertEqual(sorted(self.indexer.slices), sorted(SLICE_NAMES))
        assert_partition(self, self.indexer)

    def test_bad_slice_names(self):
        for name in ("y5", "q1", "x", "x10", "", "X1"):
            with self.assertRaises(LookupError):
                self.indexer.get_slice(name)
            with self.assertRaises(SliceLookupError):
                self.indexer.get_non_rotating(name)

    def test_non_rotating(self):
        others = self.indexer.get_non_rotating("x2")
        self.assertEqual(len(others), 18)
        self.assertTrue(all(p.position[0] != 1.0 for p in others))
        inside = {p.index for p in self.indexer.get_slice("x2")}
        self.assertFalse(inside & {p.index for p in others})

    def test_describe_slice(self):
        text = self.indexer.describe_slice("x2")
        parts = text.split("|")
        self.assertEqual(len(parts), 9)
        self.assertEqual(parts[0], "1,-1,-1")
        self.assertTrue(all(p.startswith("1,") for p in parts))

    def test_reindex_detects_collision(self):
        # Dos piezas en la misma celda rompen la partición
        self.grid[0].position = self.grid[1].position
        with self.assertRaises(InvariantViolation):
            self.indexer.reindex()

    def test_reindex_detects_out_of_grid(self):
        self.grid[0].position = (5.0, 0.0, 0.0)
        with self.assertRaises(InvariantViolation):
            self.indexer.reindex()


if __name__ == "__main__":
    unittest.main()
