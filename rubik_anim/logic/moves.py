from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List

from rubik_anim.core.errors import InvalidMoveError
from rubik_anim.core.slice_index import parse_slice_name


class Face(Enum):
    U = "U"
    D = "D"
    L = "L"
    R = "R"
    F = "F"
    B = "B"


class Direction(Enum):
    """Sentido de giro del pivote: UP suma ángulo, DOWN lo resta."""

    UP = "up"
    DOWN = "down"


# Cara -> slice que gira
FACE_SLICE: Dict[Face, str] = {
    Face.R: "x2",
    Face.L: "x0",
    Face.U: "y2",
    Face.D: "y0",
    Face.F: "z2",
    Face.B: "z0",
}


@dataclass(frozen=True)
class RotationRequest:
    """Pedido de rotación inmutable: slice + dirección."""

    slice_name: str
    direction: Direction

    def __post_init__(self) -> None:
        parse_slice_name(self.slice_name)

    @property
    def axis(self) -> str:
        return self.slice_name[0]

    def __str__(self) -> str:
        return f"{self.slice_name}:{self.direction.value}"


def translate_move(token: str) -> RotationRequest:
    """Traduce un token de cara a un pedido de rotación.

    Reglas:
    - Primer carácter: cara U D L R F B (mayúscula).
    - Segundo carácter opcional (cualquiera, ej: "Ri" o "R'"): giro inverso.
    - Sin segundo carácter => DOWN; con segundo carácter => UP.

    Args:
        token: Movimiento de 1 o 2 caracteres (ej: "R", "Li").

    Returns:
        El `RotationRequest` correspondiente.

    Raises:
        InvalidMoveError: Si la cara no es válida o el token no tiene 1-2 caracteres.
    """
    if not isinstance(token, str) or not 1 <= len(token) <= 2:
        raise InvalidMoveError(f"Movimiento inválido: {token!r}")

    try:
        face = Face(token[0])
    except ValueError:
        raise InvalidMoveError(f"Cara inválida en movimiento: {token!r}") from None

    inverse = len(token) > 1
    direction = Direction.UP if inverse else Direction.DOWN
    return RotationRequest(FACE_SLICE[face], direction)


def inverse_request(request: RotationRequest) -> RotationRequest:
    """Devuelve el pedido que deshace `request` (mismo slice, dirección opuesta)."""
    flipped = Direction.DOWN if request.direction is Direction.UP else Direction.UP
    return RotationRequest(request.slice_name, flipped)


def parse_sequence(text: str) -> List[RotationRequest]:
    """Convierte una secuencia separada por espacios en pedidos de rotación.

    Todos los tokens se validan antes de devolver nada, por ejemplo:
        "R U Ri" -> [x2:down, y2:down, x2:up]

    Args:
        text: Secuencia de movimientos.

    Returns:
        Lista de pedidos en el mismo orden.

    Raises:
        InvalidMoveError: Si algún token es inválido.
    """
    return [translate_move(t) for t in text.split()]
