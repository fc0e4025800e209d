from __future__ import annotations

import math
from typing import Literal, Tuple

Axis = Literal["x", "y", "z"]
Vec3f = Tuple[float, float, float]
Mat3 = Tuple[Vec3f, Vec3f, Vec3f]

IDENTITY: Mat3 = (
    (1.0, 0.0, 0.0),
    (0.0, 1.0, 0.0),
    (0.0, 0.0, 1.0),
)


def nearly_equal(a: float, b: float, d: float = 0.001) -> bool:
    """Compara dos reales con tolerancia absoluta `d`."""
    return abs(a - b) <= d


def rotation_matrix(axis: Axis, angle: float) -> Mat3:
    """Matriz de rotación alrededor de un eje (regla de la mano derecha).

    Args:
        axis: Eje de rotación ('x', 'y' o 'z').
        angle: Ángulo en radianes.

    Returns:
        Matriz 3x3 como tupla de filas.
    """
    c = math.cos(angle)
    s = math.sin(angle)

    if axis == "x":
        return ((1.0, 0.0, 0.0), (0.0, c, -s), (0.0, s, c))
    if axis == "y":
        return ((c, 0.0, s), (0.0, 1.0, 0.0), (-s, 0.0, c))
    if axis == "z":
        return ((c, -s, 0.0), (s, c, 0.0), (0.0, 0.0, 1.0))
    raise ValueError(f"Eje inválido: {axis}")


def rotate_point(p: Vec3f, axis: Axis, angle: float) -> Vec3f:
    """Rota un punto alrededor de un eje por un ángulo en radianes."""
    x, y, z = p
    c = math.cos(angle)
    s = math.sin(angle)

    if axis == "x":
        return (x, y * c - z * s, y * s + z * c)
    if axis == "y":
        return (x * c + z * s, y, -x * s + z * c)
    if axis == "z":
        return (x * c - y * s, x * s + y * c, z)
    raise ValueError(f"Eje inválido: {axis}")


def mat_mul(a: Mat3, b: Mat3) -> Mat3:
    """Producto de matrices 3x3 (a @ b)."""
    rows = []
    for i in range(3):
        rows.append(
            tuple(sum(a[i][k] * b[k][j] for k in range(3)) for j in range(3))
        )
    return (rows[0], rows[1], rows[2])  # type: ignore[return-value]


def snap_vec(v: Vec3f) -> Vec3f:
    """Redondea cada componente al entero más cercano (como float)."""
    return (float(round(v[0])), float(round(v[1])), float(round(v[2])))


def snap_mat(m: Mat3) -> Mat3:
    """Redondea cada entrada de la matriz al entero más cercano."""
    return (snap_vec(m[0]), snap_vec(m[1]), snap_vec(m[2]))
