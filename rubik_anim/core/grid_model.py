from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from rubik_anim.core.config import GridCoord
from rubik_anim.core.transform import IDENTITY, Mat3, Vec3f, nearly_equal, snap_mat, snap_vec

logger = logging.getLogger(__name__)

Materials = Tuple[str, str, str, str, str, str]

# Orden de caras locales: +X, -X, +Y, -Y, +Z, -Z
FACE_MATERIALS: Materials = ("front", "back", "top", "bottom", "right", "left")
BLANK_MATERIALS: Materials = ("blank",) * 6  # type: ignore[assignment]


@dataclass(eq=False)
class Cubelet:
    """Una pieza del cubo.

    Attributes:
        index: Identidad estable (0..26), según el orden de creación.
        home: Coordenada de grilla (0..2) donde se creó.
        position: Posición actual (x, y, z) centrada en el origen; en reposo cada
            componente vale -1, 0 o 1.
        orientation: Rotación acumulada de la pieza (matriz 3x3).
        display: Estado visual actual (materiales de las 6 caras).
        saved_display: Estado visual guardado mientras la pieza está atenuada.
    """

    index: int
    home: GridCoord
    position: Vec3f
    orientation: Mat3 = IDENTITY
    display: Materials = FACE_MATERIALS
    saved_display: Optional[Materials] = field(default=None, repr=False)

    @property
    def is_blank(self) -> bool:
        return self.display == BLANK_MATERIALS


class GridModel:
    """Colección fija de 27 cubelets sobre una grilla 3x3x3.

    Los cubelets se crean una sola vez (orden y -> x -> z) y nunca se destruyen.
    """

    SIZE: int = 3

    def __init__(
        self,
        whitelist: Sequence[GridCoord] = (),
        on_create: Optional[Callable[[Cubelet], None]] = None,
    ) -> None:
        """Crea las 27 piezas.

        Args:
            whitelist: Coordenadas de grilla que se inicializan con color. Si está
                vacía, todas las piezas tienen color.
            on_create: Callback opcional invocado una vez por pieza creada (por
                ejemplo, para construir su representación visual).
        """
        self.cubelets: List[Cubelet] = []
        allowed = set(whitelist)

        for y in range(self.SIZE):
            for x in range(self.SIZE):
                for z in range(self.SIZE):
                    blank = bool(allowed) and (x, y, z) not in allowed
                    piece = Cubelet(
                        index=len(self.cubelets),
                        home=(x, y, z),
                        position=(float(x - 1), float(y - 1), float(z - 1)),
                        display=BLANK_MATERIALS if blank else FACE_MATERIALS,
                    )
                    self.cubelets.append(piece)
                    if on_create is not None:
                        on_create(piece)

        logger.debug("Grid creada: %d cubelets (whitelist=%d)", len(self.cubelets), len(allowed))

    def __len__(self) -> int:
        return len(self.cubelets)

    def __getitem__(self, index: int) -> Cubelet:
        return self.cubelets[index]

    def correct_positions(self) -> None:
        """Redondea cada coordenada de cada pieza al entero más cercano.

        La rotación incremental deja error de punto flotante acumulado; debe
        llamarse antes de recalcular los slices.
        """
        for piece in self.cubelets:
            piece.position = snap_vec(piece.position)
            piece.orientation = snap_mat(piece.orientation)

    def is_snapped(self, d: float = 0.001) -> bool:
        """Indica si todas las coordenadas están (casi) en valores enteros."""
        for piece in self.cubelets:
            for v in piece.position:
                if not nearly_equal(v, round(v), d):
                    return False
        return True

    def positions(self) -> Dict[int, Vec3f]:
        """Snapshot de posiciones por índice de pieza."""
        return {p.index: p.position for p in self.cubelets}

    def is_home(self) -> bool:
        """True si cada pieza está en su posición inicial con orientación identidad."""
        for piece in self.cubelets:
            hx, hy, hz = piece.home
            if snap_vec(piece.position) != (float(hx - 1), float(hy - 1), float(hz - 1)):
                return False
            if snap_mat(piece.orientation) != IDENTITY:
                return False
        return True
