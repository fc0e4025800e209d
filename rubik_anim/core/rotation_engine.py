from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from rubik_anim.core.emphasis import EmphasisToggle
from rubik_anim.core.grid_model import Cubelet, GridModel
from rubik_anim.core.slice_index import SliceIndexer
from rubik_anim.core.transform import Mat3, Vec3f, mat_mul, rotate_point, rotation_matrix
from rubik_anim.logic.moves import Direction, RotationRequest

logger = logging.getLogger(__name__)


class EngineState(Enum):
    IDLE = "idle"
    STARTING = "starting"
    STEPPING = "stepping"
    COMPLETING = "completing"


@dataclass
class RotationFrame:
    """Marco de rotación transitorio de un solo movimiento.

    Guarda, por índice de pieza, la posición y orientación relativas al pivote
    (el pivote está en el origen) al comenzar la rotación. Las posiciones
    efectivas se recalculan desde acá en cada paso, así que el error no se
    acumula pieza a pieza.
    """

    request: RotationRequest
    members: List[Cubelet]
    non_rotating: List[Cubelet]
    origins: Dict[int, Tuple[Vec3f, Mat3]] = field(default_factory=dict)
    steps: int = 0
    angle: float = 0.0
    distance: float = 0.0
    dimmed: bool = False


class RotationEngine:
    """Máquina de estados que anima una rotación de slice paso a paso.

    IDLE -> STARTING (se arma el marco, se atenúa) -> STEPPING (un paso por tick)
    -> COMPLETING (se restaura, se corrigen posiciones, se reindexa) -> IDLE.
    """

    def __init__(
        self,
        grid: GridModel,
        indexer: SliceIndexer,
        emphasis: EmphasisToggle,
        updates_per_rotation: int = 30,
    ) -> None:
        self.grid = grid
        self.indexer = indexer
        self.emphasis = emphasis
        self.updates_per_rotation: int = updates_per_rotation
        self.state: EngineState = EngineState.IDLE
        self.frame: Optional[RotationFrame] = None

    @property
    def increment(self) -> float:
        """Ángulo por tick (radianes)."""
        return math.pi / 2 / self.updates_per_rotation

    @property
    def steps_done(self) -> int:
        return self.frame.steps if self.frame is not None else 0

    def step(self, request: RotationRequest) -> bool:
        """Avanza la rotación de `request` un paso (la inicia si hace falta).

        Args:
            request: Pedido activo.

        Returns:
            True si este paso completó la rotación.
        """
        if self.frame is None:
            self._start(request)

        frame = self.frame
        assert frame is not None

        delta = self.increment
        if frame.request.direction is Direction.UP:
            frame.angle += delta
        else:
            frame.angle -= delta
        frame.distance += delta
        frame.steps += 1
        self.state = EngineState.STEPPING

        self._apply_frame(frame)

        if frame.steps == self.updates_per_rotation:
            self._complete(frame)
            return True
        return False

    def _start(self, request: RotationRequest) -> None:
        self.state = EngineState.STARTING
        members = self.indexer.get_slice(request.slice_name)
        non_rotating = self.indexer.get_non_rotating(request.slice_name)

        frame = RotationFrame(request=request, members=members, non_rotating=non_rotating)
        if self.emphasis.enabled:
            self.emphasis.dim(non_rotating)
            frame.dimmed = True

        for piece in members:
            frame.origins[piece.index] = (piece.position, piece.orientation)
        self.frame = frame

        logger.debug("rotate: %s direction: %s", request.slice_name, request.direction.value)

    def _apply_frame(self, frame: RotationFrame) -> None:
        axis = frame.request.axis
        rot = rotation_matrix(axis, frame.angle)  # type: ignore[arg-type]
        for piece in frame.members:
            pos, ori = frame.origins[piece.index]
            piece.position = rotate_point(pos, axis, frame.angle)  # type: ignore[arg-type]
            piece.orientation = mat_mul(rot, ori)

    def _complete(self, frame: RotationFrame) -> None:
        self.state = EngineState.COMPLETING

        if frame.dimmed:
            self.emphasis.restore(frame.non_rotating)

        # Las posiciones absolutas ya quedaron escritas por el último paso.
        self.frame = None
        self.grid.correct_positions()
        self.indexer.reindex()

        self.state = EngineState.IDLE
        logger.debug(
            "Rotación completa: %s (%d pasos, %.4f rad)",
            frame.request,
            frame.steps,
            frame.distance,
        )
