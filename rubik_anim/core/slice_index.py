from __future__ import annotations

import logging
from typing import Dict, List, Tuple

from rubik_anim.core.errors import InvariantViolation, SliceLookupError
from rubik_anim.core.grid_model import Cubelet, GridModel
from rubik_anim.core.transform import Axis

logger = logging.getLogger(__name__)

AXES: Tuple[Axis, ...] = ("x", "y", "z")
SLICE_NAMES: Tuple[str, ...] = tuple(f"{a}{i}" for a in AXES for i in range(3))


def parse_slice_name(name: str) -> Tuple[Axis, int]:
    """Separa un nombre de slice en (eje, índice).

    Args:
        name: Nombre como "x2" o "y0".

    Returns:
        Tupla (axis, index) con index en 0..2.

    Raises:
        SliceLookupError: Si el nombre no es una letra de eje + dígito 0..2.
    """
    if not isinstance(name, str) or name not in SLICE_NAMES:
        raise SliceLookupError(f"Slice inválido: {name!r}")
    return name[0], int(name[1])  # type: ignore[return-value]


class SliceIndexer:
    """Tabla de pertenencia slice -> cubelets, derivada de las posiciones.

    Es un caché: sólo se recalcula con `reindex()` (al inicio y al terminar cada
    rotación); en cualquier otro momento es de solo lectura.
    """

    def __init__(self, grid: GridModel) -> None:
        self.grid = grid
        self.slices: Dict[str, List[Cubelet]] = {}

    def reindex(self) -> None:
        """Reconstruye la tabla a partir de las posiciones (ya corregidas).

        Raises:
            InvariantViolation: Si el resultado no es una partición 9x9 por eje.
        """
        slices: Dict[str, List[Cubelet]] = {name: [] for name in SLICE_NAMES}

        for piece in self.grid.cubelets:
            for axis, value in zip(AXES, piece.position):
                key = f"{axis}{int(round(value)) + 1}"
                bucket = slices.get(key)
                if bucket is None:
                    raise InvariantViolation(
                        f"Cubelet {piece.index} fuera de la grilla: {piece.position}"
                    )
                if piece not in bucket:
                    bucket.append(piece)

        self.slices = slices
        self._check_partition()

    def _check_partition(self) -> None:
        """Verifica que cada slice tenga 9 piezas y cada pieza un slice por eje."""
        total = len(self.grid)
        for axis in AXES:
            seen = set()
            for i in range(3):
                members = self.slices[f"{axis}{i}"]
                if len(members) != 9:
                    raise InvariantViolation(
                        f"Slice {axis}{i} tiene {len(members)} piezas (se esperaban 9)"
                    )
                for piece in members:
                    if piece.index in seen:
                        raise InvariantViolation(
                            f"Cubelet {piece.index} aparece en más de un slice del eje {axis}"
                        )
                    seen.add(piece.index)
            if len(seen) != total:
                raise InvariantViolation(f"Eje {axis}: {len(seen)} de {total} piezas indexadas")

    def get_slice(self, name: str) -> List[Cubelet]:
        """Devuelve las 9 piezas de un slice.

        Raises:
            SliceLookupError: Si el nombre es inválido.
        """
        parse_slice_name(name)
        return list(self.slices[name])

    def get_non_rotating(self, name: str) -> List[Cubelet]:
        """Devuelve las 18 piezas de las otras dos capas del mismo eje."""
        axis, index = parse_slice_name(name)
        out: List[Cubelet] = []
        for i in range(3):
            if i == index:
                continue
            out.extend(self.slices[f"{axis}{i}"])
        return out

    def describe_slice(self, name: str) -> str:
        """Posiciones del slice como "x,y,z|x,y,z|..." (también se loguea en debug)."""
        pieces = self.get_slice(name)
        text = "|".join(
            ",".join(f"{v:g}" for v in piece.position) for piece in pieces
        )
        logger.debug("pos string %s: %s", name, text)
        return text
