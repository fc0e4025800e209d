from __future__ import annotations


class RubikError(Exception):
    """Error base del motor del cubo."""


class InvalidMoveError(RubikError, ValueError):
    """Token de movimiento con cara no reconocida (o longitud inválida)."""


class SliceLookupError(RubikError, LookupError):
    """Nombre de slice mal formado o fuera de rango (ej: "y5", "q1")."""


class InvariantViolation(RubikError, RuntimeError):
    """La tabla de slices no forma una partición válida después de reindexar.

    Indica un estado interno corrupto (normalmente un error en la corrección de
    posiciones). No hay recuperación posible.
    """
