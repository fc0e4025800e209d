from __future__ import annotations

from typing import Iterable

from rubik_anim.core.grid_model import BLANK_MATERIALS, Cubelet, Materials


class EmphasisToggle:
    """Atenúa (pone en blanco) las piezas que no rotan y luego las restaura.

    El estado visual guardado vive en cada pieza (`saved_display`), así que
    restaurar reproduce exactamente lo que había antes de atenuar.
    """

    def __init__(self, enabled: bool = True, blank: Materials = BLANK_MATERIALS) -> None:
        self.enabled: bool = enabled
        self.blank: Materials = blank

    def dim(self, pieces: Iterable[Cubelet]) -> None:
        for piece in pieces:
            piece.saved_display = piece.display
            piece.display = self.blank

    def restore(self, pieces: Iterable[Cubelet]) -> None:
        for piece in pieces:
            if piece.saved_display is not None:
                piece.display = piece.saved_display
                piece.saved_display = None
