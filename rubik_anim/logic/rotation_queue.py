from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Deque, List, Optional

from rubik_anim.logic.moves import RotationRequest

logger = logging.getLogger(__name__)


class RotationQueue:
    """Cola FIFO de rotaciones con una sola rotación activa y pausa entre movimientos.

    La pausa es una cuenta regresiva en ticks: al sacar un pedido de la cola se
    carga `pause_ticks` y cada tick consume uno sin mover nada.
    """

    def __init__(self, pause_ticks: int = 3) -> None:
        self.pause_ticks: int = pause_ticks
        self.active: Optional[RotationRequest] = None
        self._pending: Deque[RotationRequest] = deque()
        self._pause_remaining: int = 0
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._pending)

    @property
    def paused(self) -> bool:
        return self._pause_remaining > 0

    def pending(self) -> List[RotationRequest]:
        """Copia de los pedidos pendientes, en orden."""
        with self._lock:
            return list(self._pending)

    def enqueue(self, request: RotationRequest) -> None:
        """Activa el pedido si no hay rotación en curso; si no, lo encola."""
        with self._lock:
            if self.active is None:
                self.active = request
                logger.debug("Rotación activada de inmediato: %s", request)
            else:
                self._pending.append(request)
                logger.debug("Rotación encolada: %s (pendientes=%d)", request, len(self._pending))

    def advance(self) -> Optional[RotationRequest]:
        """Saca el siguiente pedido si no hay rotación activa e inicia la pausa.

        Returns:
            El pedido activado, o None si no había nada que hacer.
        """
        with self._lock:
            if self.active is not None or not self._pending:
                return None
            self.active = self._pending.popleft()
            self._pause_remaining = self.pause_ticks
            logger.debug("Rotación sacada de la cola: %s (pausa=%d ticks)", self.active, self.pause_ticks)
            return self.active

    def consume_pause(self) -> bool:
        """Consume un tick de pausa.

        Returns:
            True si el tick quedó absorbido por la pausa (no se debe rotar).
        """
        if self._pause_remaining <= 0:
            return False
        self._pause_remaining -= 1
        return True

    def finish(self) -> None:
        """Libera el slot de rotación activa."""
        with self._lock:
            self.active = None
            self._pause_remaining = 0

    def clear_pending(self) -> int:
        """Descarta los pedidos que todavía no empezaron.

        Returns:
            Cantidad de pedidos descartados.
        """
        with self._lock:
            n = len(self._pending)
            self._pending.clear()
        if n:
            logger.debug("Cola vaciada: %d pedidos descartados", n)
        return n
