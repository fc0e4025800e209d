import math
import unittest

from rubik_anim.core.config import RubikConfig, parse_grid_coord
from rubik_anim.core.transform import (
    IDENTITY,
    mat_mul,
    nearly_equal,
    rotate_point,
    rotation_matrix,
    snap_mat,
)


class TestConfig(unittest.TestCase):
    def test_defaults(self):
        c = RubikConfig()
        self.assertEqual(c.specific_cubes, [])
        self.assertTrue(c.emphasize)
        self.assertEqual(c.updates_per_rotation, 30)
        self.assertEqual(c.pause_duration, 40)
        self.assertEqual(c.pause_ticks, 3)

    def test_pause_ticks(self):
        self.assertEqual(RubikConfig(pause_duration=40, tick_interval=1).pause_ticks, 40)
        self.assertEqual(RubikConfig(pause_duration=0).pause_ticks, 0)

    def test_whitelist(self):
        c = RubikConfig(specific_cubes=["0,1,2", " 1, 1, 0"])
        self.assertEqual(c.whitelist(), [(0, 1, 2), (1, 1, 0)])

    def test_invalid_values(self):
        for kwargs in (
            {"updates_per_rotation": 0},
            {"pause_duration": -1},
            {"tick_interval": 0},
            {"specific_cubes": ["3,0,0"]},
            {"specific_cubes": ["1,1"]},
            {"specific_cubes": ["a,b,c"]},
        ):
            with self.assertRaises(ValueError):
                RubikConfig(**kwargs)

    def test_rejects_bool_counts(self):
        with self.assertRaises(ValueError):
            RubikConfig(updates_per_rotation=True)
        with self.assertRaises(ValueError):
            RubikConfig(tick_interval=True)
        with self.assertRaises(ValueError):
            RubikConfig(pause_duration=False)

    def test_tick_interval_must_be_integer(self):
        # Es también el período (ms) del QTimer de la vista
        with self.assertRaises(ValueError):
            RubikConfig(tick_interval=0.5)
        self.assertEqual(RubikConfig(pause_duration=40, tick_interval=1).pause_ticks, 40)

    def test_error_messages_in_spanish(self):
        with self.assertRaisesRegex(ValueError, "debe ser un entero positivo"):
            RubikConfig(updates_per_rotation=0)
        with self.assertRaisesRegex(ValueError, "debe ser un número no negativo"):
            RubikConfig(pause_duration=-1)
        with self.assertRaisesRegex(ValueError, "debe ser un entero positivo"):
            RubikConfig(tick_interval=0)

    def test_parse_grid_coord(self):
        self.assertEqual(parse_grid_coord("2,2,2"), (2, 2, 2))


class TestTransform(unittest.TestCase):
    def test_rotate_point_quarter_turns(self):
        x, y, z = rotate_point((0.0, 1.0, 0.0), "x", math.pi / 2)
        self.assertTrue(nearly_equal(x, 0.0) and nearly_equal(y, 0.0) and nearly_equal(z, 1.0))
        x, y, z = rotate_point((0.0, 0.0, 1.0), "y", math.pi / 2)
        self.assertTrue(nearly_equal(x, 1.0) and nearly_equal(y, 0.0) and nearly_equal(z, 0.0))
        x, y, z = rotate_point((1.0, 0.0, 0.0), "z", math.pi / 2)
        self.assertTrue(nearly_equal(x, 0.0) and nearly_equal(y, 1.0) and nearly_equal(z, 0.0))

    def test_matrix_matches_rotate_point(self):
        p = (0.3, -0.7, 1.1)
        for axis in ("x", "y", "z"):
            m = rotation_matrix(axis, 0.4)
            q = rotate_point(p, axis, 0.4)
            for i in range(3):
                self.assertAlmostEqual(sum(m[i][k] * p[k] for k in range(3)), q[i])

    def test_four_quarter_turns_is_identity(self):
        m = IDENTITY
        for _ in range(4):
            m = mat_mul(rotation_matrix("y", math.pi / 2), m)
        self.assertEqual(snap_mat(m), IDENTITY)

    def test_bad_axis(self):
        with self.assertRaises(ValueError):
            rotate_point((0.0, 0.0, 0.0), "w", 1.0)


if __name__ == "__main__":
    unittest.main()
