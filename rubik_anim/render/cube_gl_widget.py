from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from PySide6.QtCore import QPoint, QTimer, Qt, Signal
from PySide6.QtGui import QKeyEvent, QMouseEvent, QWheelEvent
from PySide6.QtOpenGLWidgets import QOpenGLWidget

from OpenGL.GL import (
    glBegin,
    glClear,
    glClearColor,
    glColor3f,
    glEnable,
    glEnd,
    glLoadIdentity,
    glMatrixMode,
    glMultMatrixf,
    glPopMatrix,
    glPushMatrix,
    glRotatef,
    glTranslatef,
    glVertex3f,
    glViewport,
    GL_COLOR_BUFFER_BIT,
    GL_DEPTH_BUFFER_BIT,
    GL_DEPTH_TEST,
    GL_MODELVIEW,
    GL_PROJECTION,
    GL_QUADS,
)
from OpenGL.GLU import gluPerspective

from rubik_anim.core.errors import RubikError
from rubik_anim.core.grid_model import Cubelet
from rubik_anim.core.rubik import Rubik
from rubik_anim.core.transform import Mat3, Vec3f
from rubik_anim.logic.moves import RotationRequest

# Normales locales de cada cara, en el orden de `Materials`
FACE_NORMALS: List[Vec3f] = [
    (1.0, 0.0, 0.0),
    (-1.0, 0.0, 0.0),
    (0.0, 1.0, 0.0),
    (0.0, -1.0, 0.0),
    (0.0, 0.0, 1.0),
    (0.0, 0.0, -1.0),
]

KEY_FACES: Dict[int, str] = {
    int(Qt.Key_U): "U",
    int(Qt.Key_D): "D",
    int(Qt.Key_L): "L",
    int(Qt.Key_R): "R",
    int(Qt.Key_F): "F",
    int(Qt.Key_B): "B",
}


class CubeGLWidget(QOpenGLWidget):
    """Widget OpenGL que dibuja las 27 piezas y maneja el tick de animación.

    Características:
    - Render OpenGL clásico (sin shaders): cada pieza es un cubo con 6 stickers.
    - Orbit con botón derecho y zoom con la rueda.
    - Teclas U D L R F B (Shift = inverso) para girar caras.
    - `QTimer` a ~60fps que llama a `Rubik.tick()` una vez por frame.
    """

    move_queued = Signal(str)
    move_started = Signal(object)  # RotationRequest
    move_applied = Signal(object)  # RotationRequest
    move_rejected = Signal(str)

    def __init__(self, cube: Rubik, parent=None, interval_ms: Optional[int] = None) -> None:
        """Crea el widget y arranca el timer de animación.

        Args:
            cube: Cubo animado a dibujar.
            parent: Widget padre (Qt), opcional.
            interval_ms: Período del timer; por defecto `tick_interval` de la config.
        """
        super().__init__(parent)
        self.cube: Rubik = cube
        self.cube.on_rotation_complete = self._on_rotation_complete
        self.cube.on_rotation_dequeued = self._on_rotation_dequeued

        # Cámara / orbit
        self.yaw: float = 35.0
        self.pitch: float = -25.0
        self.distance: float = 9.0

        self._last_mouse_pos: QPoint = QPoint()
        self._orbiting: bool = False

        # Piezas
        self.piece_size: float = 0.96
        self.sticker_margin: float = 0.08
        self.sticker_offset: float = 0.005

        self._tick_timer: QTimer = QTimer(self)
        self._tick_timer.setInterval(interval_ms or cube.config.tick_interval)
        self._tick_timer.timeout.connect(self._on_tick)
        self._tick_timer.start()

        self.setFocusPolicy(Qt.StrongFocus)

    # --------------------------
    # OpenGL lifecycle
    # --------------------------
    def initializeGL(self) -> None:
        """Inicializa parámetros OpenGL (clear color y depth test)."""
        glClearColor(0.10, 0.10, 0.12, 1.0)
        glEnable(GL_DEPTH_TEST)

    def resizeGL(self, w: int, h: int) -> None:
        """Ajusta viewport y proyección cuando cambia el tamaño del widget."""
        if h == 0:
            h = 1

        dpr = self.devicePixelRatioF()
        fb_w = int(w * dpr)
        fb_h = int(h * dpr)

        glViewport(0, 0, fb_w, fb_h)

        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        gluPerspective(50.0, fb_w / float(fb_h), 0.1, 1000.0)

        glMatrixMode(GL_MODELVIEW)
        glLoadIdentity()

    def paintGL(self) -> None:
        """Dibuja el frame actual: cada pieza en su posición/orientación efectiva."""
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)
        self._apply_camera()

        for piece in self.cube.cubelets:
            self._draw_cubelet(piece)

    def _apply_camera(self) -> None:
        glMatrixMode(GL_MODELVIEW)
        glLoadIdentity()
        glTranslatef(0.0, 0.0, -self.distance)
        glRotatef(-self.pitch, 1.0, 0.0, 0.0)
        glRotatef(-self.yaw, 0.0, 1.0, 0.0)

    # --------------------------
    # Tick / movimientos
    # --------------------------
    def _on_tick(self) -> None:
        """Tick del timer: un paso de animación y repintado."""
        was_busy = not self.cube.is_idle()
        self.cube.tick()
        if was_busy:
            self.update()

    def _on_rotation_dequeued(self, request: RotationRequest) -> None:
        self.move_started.emit(request)

    def _on_rotation_complete(self, request: RotationRequest) -> None:
        self.move_applied.emit(request)

    def queue_face(self, move: str) -> bool:
        """Encola un movimiento de cara.

        Args:
            move: Token (ej: "R", "Ri").

        Returns:
            True si se encoló; False si el token era inválido (se emite `move_rejected`).
        """
        try:
            self.cube.rotate_face(move)
        except RubikError as exc:
            self.move_rejected.emit(str(exc))
            return False
        self.move_queued.emit(move)
        return True

    def play_sequence(self, seq: str) -> None:
        """Encola una secuencia completa (ej: "R U Ri Ui").

        Raises:
            InvalidMoveError: Si algún token es inválido (no se encola ninguno).
        """
        for request in self.cube.rotate_sequence(seq):
            self.move_queued.emit(str(request))

    def stop(self) -> None:
        """Detiene el timer de animación."""
        self._tick_timer.stop()

    # --------------------------
    # Interacción
    # --------------------------
    def keyPressEvent(self, event: QKeyEvent) -> None:
        """Teclas U D L R F B giran caras; con Shift, el giro inverso."""
        face = KEY_FACES.get(int(event.key()))
        if face is None:
            super().keyPressEvent(event)
            return

        inverse = bool(event.modifiers() & Qt.ShiftModifier)
        self.queue_face(face + "i" if inverse else face)
        event.accept()

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.RightButton:
            self._orbiting = True
            self._last_mouse_pos = event.pos()
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        if self._orbiting:
            dx = event.position().x() - self._last_mouse_pos.x()
            dy = event.position().y() - self._last_mouse_pos.y()
            self._last_mouse_pos = event.pos()

            sens = 0.4
            self.yaw -= dx * sens
            self.pitch -= dy * sens
            self.pitch = max(-89.0, min(89.0, self.pitch))

            self.update()
            event.accept()
            return
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.RightButton and self._orbiting:
            self._orbiting = False
            event.accept()
            return
        super().mouseReleaseEvent(event)

    def wheelEvent(self, event: QWheelEvent) -> None:
        """Zoom in/out con la rueda del mouse."""
        delta = event.angleDelta().y() / 120.0
        self.distance -= delta * 0.4
        self.distance = max(4.0, min(25.0, self.distance))
        self.update()
        event.accept()

    # --------------------------
    # Render helpers
    # --------------------------
    def _draw_cubelet(self, piece: Cubelet) -> None:
        """Dibuja una pieza: cuerpo de plástico + un sticker por cara."""
        glPushMatrix()
        glTranslatef(*piece.position)
        glMultMatrixf(self._gl_matrix(piece.orientation))

        half = self.piece_size / 2.0
        glBegin(GL_QUADS)
        for i, normal in enumerate(FACE_NORMALS):
            glColor3f(0.05, 0.05, 0.06)
            for v in self._face_quad(normal, half, 0.0):
                glVertex3f(*v)

            glColor3f(*self._material_rgb(piece.display[i]))
            for v in self._face_quad(normal, half - self.sticker_margin, half + self.sticker_offset):
                glVertex3f(*v)
        glEnd()

        glPopMatrix()

    @staticmethod
    def _gl_matrix(m: Mat3) -> List[float]:
        """Matriz 3x3 (filas) a matriz 4x4 column-major para OpenGL."""
        return [
            m[0][0], m[1][0], m[2][0], 0.0,
            m[0][1], m[1][1], m[2][1], 0.0,
            m[0][2], m[1][2], m[2][2], 0.0,
            0.0, 0.0, 0.0, 1.0,
        ]

    @staticmethod
    def _face_quad(normal: Vec3f, half: float, depth: float) -> List[Vec3f]:
        """Vértices de un cuadrado perpendicular a `normal`.

        Args:
            normal: Normal unitaria de la cara (eje local).
            half: Mitad del lado del cuadrado.
            depth: Distancia al centro de la pieza; 0 usa `half` (cara del cuerpo).
        """
        d = depth or half
        nx, ny, nz = normal
        if nx:
            c = (nx * d, 0.0, 0.0)
            u, v = (0.0, half, 0.0), (0.0, 0.0, half)
        elif ny:
            c = (0.0, ny * d, 0.0)
            u, v = (half, 0.0, 0.0), (0.0, 0.0, half)
        else:
            c = (0.0, 0.0, nz * d)
            u, v = (half, 0.0, 0.0), (0.0, half, 0.0)

        corners: List[Tuple[int, int]] = [(-1, -1), (1, -1), (1, 1), (-1, 1)]
        return [
            (c[0] + a * u[0] + b * v[0], c[1] + a * u[1] + b * v[1], c[2] + a * u[2] + b * v[2])
            for a, b in corners
        ]

    @staticmethod
    def _material_rgb(name: str) -> Vec3f:
        """Convierte el nombre de material de una cara a RGB (gris si no existe)."""
        palette: Dict[str, Vec3f] = {
            "front": (0.0, 0.85, 0.0),
            "back": (0.0, 0.35, 1.0),
            "top": (1.0, 1.0, 1.0),
            "bottom": (1.0, 1.0, 0.0),
            "right": (1.0, 0.0, 0.0),
            "left": (1.0, 0.5, 0.0),
            "blank": (0.55, 0.55, 0.58),
        }
        return palette.get(name, (0.8, 0.8, 0.8))
