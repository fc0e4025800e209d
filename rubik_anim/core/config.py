from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Tuple

GridCoord = Tuple[int, int, int]


def parse_grid_coord(text: str) -> GridCoord:
    """Convierte una coordenada de whitelist ("x,y,z", cada valor en 0..2) a tupla.

    Args:
        text: Coordenada en texto, por ejemplo "1,1,1".

    Returns:
        Tupla (x, y, z) con índices de grilla.

    Raises:
        ValueError: Si el formato no es "x,y,z" o algún índice está fuera de 0..2.
    """
    parts = [p.strip() for p in text.split(",")]
    if len(parts) != 3:
        raise ValueError(f"Coordenada inválida (se espera 'x,y,z'): {text!r}")
    try:
        x, y, z = (int(p) for p in parts)
    except ValueError:
        raise ValueError(f"Coordenada no numérica: {text!r}") from None
    for v in (x, y, z):
        if v not in (0, 1, 2):
            raise ValueError(f"Índice fuera de rango 0..2 en: {text!r}")
    return (x, y, z)


def _is_int(value: object) -> bool:
    """True para enteros de verdad (`bool` no cuenta)."""
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class RubikConfig:
    """Configuración del cubo animado.

    Attributes:
        specific_cubes: Whitelist de cubelets ("x,y,z") que se inicializan con
            colores; todos los demás quedan en blanco. Vacía => todos con color.
        emphasize: Si True, los cubelets que no rotan se ponen en blanco durante
            cada rotación.
        updates_per_rotation: Ticks necesarios para barrer 90°.
        pause_duration: Pausa entre movimientos encolados (unidades de tiempo).
        tick_interval: Duración de un tick (entero, ms) en las mismas unidades que
            la pausa; también es el período del timer de la vista.
    """

    specific_cubes: List[str] = field(default_factory=list)
    emphasize: bool = True
    updates_per_rotation: int = 30
    pause_duration: int = 40
    tick_interval: int = 16

    def __post_init__(self):
        if not _is_int(self.updates_per_rotation) or self.updates_per_rotation <= 0:
            raise ValueError(
                f"updates_per_rotation debe ser un entero positivo: {self.updates_per_rotation!r}"
            )
        if (
            isinstance(self.pause_duration, bool)
            or not isinstance(self.pause_duration, (int, float))
            or self.pause_duration < 0
        ):
            raise ValueError(f"pause_duration debe ser un número no negativo: {self.pause_duration!r}")
        # Entero porque también es el período del QTimer de la vista
        if not _is_int(self.tick_interval) or self.tick_interval <= 0:
            raise ValueError(f"tick_interval debe ser un entero positivo: {self.tick_interval!r}")
        # Valida el formato de cada entrada de la whitelist
        for entry in self.specific_cubes:
            parse_grid_coord(entry)

    @property
    def pause_ticks(self) -> int:
        """Cantidad de ticks sin movimiento después de sacar una rotación de la cola."""
        return math.ceil(self.pause_duration / self.tick_interval)

    def whitelist(self) -> List[GridCoord]:
        """Whitelist parseada como coordenadas de grilla."""
        return [parse_grid_coord(entry) for entry in self.specific_cubes]
