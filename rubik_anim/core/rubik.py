from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

from rubik_anim.core.config import RubikConfig
from rubik_anim.core.emphasis import EmphasisToggle
from rubik_anim.core.grid_model import Cubelet, GridModel
from rubik_anim.core.rotation_engine import EngineState, RotationEngine
from rubik_anim.core.slice_index import SliceIndexer
from rubik_anim.core.transform import Vec3f
from rubik_anim.logic.moves import RotationRequest, parse_sequence, translate_move
from rubik_anim.logic.rotation_queue import RotationQueue

logger = logging.getLogger(__name__)


class Rubik:
    """Cubo 3x3x3 animado: modelo de piezas + cola de rotaciones + motor.

    Uso típico (desde un loop de render):
        cube = Rubik()
        cube.rotate_face("R")
        cube.rotate_face("Ui")
        while ...:
            cube.tick()

    Movimientos:
        - Caras: U D L R F B
        - Un segundo carácter cualquiera ("Ri", "R'") indica el giro inverso.
    """

    def __init__(
        self,
        config: Optional[RubikConfig] = None,
        on_create: Optional[Callable[[Cubelet], None]] = None,
        on_rotation_complete: Optional[Callable[[RotationRequest], None]] = None,
        on_rotation_dequeued: Optional[Callable[[RotationRequest], None]] = None,
    ) -> None:
        """Construye las piezas, indexa los slices y deja el cubo en reposo.

        Args:
            config: Configuración; si es None se usan los valores por defecto.
            on_create: Callback por cada pieza creada (representación visual).
            on_rotation_complete: Callback al terminar cada rotación.
            on_rotation_dequeued: Callback cuando un pedido sale de la cola y pasa a
                ser la rotación activa.
        """
        self.config: RubikConfig = config or RubikConfig()
        self.on_rotation_complete = on_rotation_complete
        self.on_rotation_dequeued = on_rotation_dequeued

        self.grid = GridModel(self.config.whitelist(), on_create=on_create)
        self.indexer = SliceIndexer(self.grid)
        self.emphasis = EmphasisToggle(enabled=self.config.emphasize)
        self.queue = RotationQueue(pause_ticks=self.config.pause_ticks)
        self.engine = RotationEngine(
            self.grid,
            self.indexer,
            self.emphasis,
            updates_per_rotation=self.config.updates_per_rotation,
        )

        self.grid.correct_positions()
        self.indexer.reindex()

    # --------------------------
    # Public API
    # --------------------------
    def rotate(self, request: RotationRequest) -> None:
        """Activa o encola un pedido de rotación."""
        self.queue.enqueue(request)

    def rotate_face(self, move: str) -> RotationRequest:
        """Valida un movimiento de cara y lo encola.

        Args:
            move: Token de 1-2 caracteres (ej: "R", "Li").

        Returns:
            El pedido encolado.

        Raises:
            InvalidMoveError: Si la cara no es válida (no se encola nada).
        """
        request = translate_move(move)
        logger.info("Movimiento %s aceptado (pendientes=%d)", move, len(self.queue))
        self.rotate(request)
        return request

    def rotate_sequence(self, seq: str) -> List[RotationRequest]:
        """Encola una secuencia separada por espacios (todo o nada).

        Args:
            seq: Secuencia tipo "R U Ri Ui".

        Returns:
            Pedidos encolados en orden.

        Raises:
            InvalidMoveError: Si algún token es inválido; en ese caso no se encola ninguno.
        """
        requests = parse_sequence(seq)
        for request in requests:
            self.rotate(request)
        return requests

    def tick(self) -> None:
        """Avanza la animación exactamente un tick.

        - Sin rotación activa: saca el siguiente pedido de la cola (e inicia la pausa).
        - Con rotación activa y en pausa: no hace nada.
        - Con rotación activa: un paso de rotación; al completar libera el slot.
        """
        request = self.queue.active
        if request is None:
            dequeued = self.queue.advance()
            if dequeued is not None and self.on_rotation_dequeued is not None:
                self.on_rotation_dequeued(dequeued)
            return

        if self.queue.consume_pause():
            return

        if self.engine.step(request):
            self.queue.finish()
            if self.on_rotation_complete is not None:
                self.on_rotation_complete(request)

    def clear_pending(self) -> int:
        """Descarta los movimientos encolados que todavía no empezaron."""
        return self.queue.clear_pending()

    def get_slice(self, name: str) -> List[Cubelet]:
        """Piezas de un slice ("x0".."z2"). Lanza `SliceLookupError` si es inválido."""
        return self.indexer.get_slice(name)

    def get_non_rotating(self, name: str) -> List[Cubelet]:
        return self.indexer.get_non_rotating(name)

    # --------------------------
    # Estado
    # --------------------------
    @property
    def cubelets(self) -> List[Cubelet]:
        return self.grid.cubelets

    @property
    def active(self) -> Optional[RotationRequest]:
        return self.queue.active

    @property
    def pending_count(self) -> int:
        return len(self.queue)

    @property
    def state(self) -> EngineState:
        return self.engine.state

    @property
    def emphasize(self) -> bool:
        return self.emphasis.enabled

    @emphasize.setter
    def emphasize(self, value: bool) -> None:
        # Aplica desde la próxima rotación; la actual restaura lo que atenuó.
        self.emphasis.enabled = value

    def is_idle(self) -> bool:
        """True si no hay rotación activa ni pendiente."""
        return self.queue.active is None and len(self.queue) == 0

    def is_home(self) -> bool:
        return self.is_idle() and self.grid.is_home()

    def positions(self) -> Dict[int, Vec3f]:
        return self.grid.positions()
