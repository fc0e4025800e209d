from __future__ import annotations

from typing import List, Optional

from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import (
    QCheckBox,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from rubik_anim.core.config import RubikConfig
from rubik_anim.core.errors import RubikError
from rubik_anim.core.rubik import Rubik
from rubik_anim.logic.moves import RotationRequest, inverse_request
from rubik_anim.render.cube_gl_widget import CubeGLWidget

FACE_ORDER: List[str] = ["U", "D", "L", "R", "F", "B"]


class MainWindow(QMainWindow):
    """Ventana principal: vista 3D del cubo + panel de movimientos.

    Esta clase coordina:
    - El cubo animado (`Rubik`)
    - La vista OpenGL que lo dibuja y le da ticks (`CubeGLWidget`)
    - El historial de movimientos completados (con undo)
    """

    def __init__(self, config: Optional[RubikConfig] = None) -> None:
        """Inicializa la ventana principal, crea la UI y conecta señales.

        Args:
            config: Configuración del cubo; por defecto `RubikConfig()`.
        """
        super().__init__()
        self.setWindowTitle("Rubik 3D - animación por slices")

        # --- Modelo + render ---
        self.cube: Rubik = Rubik(config)
        self.gl_widget: CubeGLWidget = CubeGLWidget(self.cube, self)

        # --- Historial ---
        self.history: List[RotationRequest] = []
        self._undoing: int = 0

        # --- UI ---
        root = QWidget()
        root_layout = QHBoxLayout(root)
        root_layout.addWidget(self.gl_widget, 1)

        panel = QWidget()
        panel_layout = QVBoxLayout(panel)
        panel.setFixedWidth(280)

        # Botones de cara (normal + inverso)
        panel_layout.addWidget(QLabel("Girar cara"))
        grid = QGridLayout()
        self.face_buttons: List[QPushButton] = []
        for row, face in enumerate(FACE_ORDER):
            for col, token in enumerate((face, face + "i")):
                btn = QPushButton(token)
                btn.clicked.connect(lambda _checked=False, t=token: self.on_face(t))
                grid.addWidget(btn, row, col)
                self.face_buttons.append(btn)
        panel_layout.addLayout(grid)

        # Secuencia
        panel_layout.addWidget(QLabel("Aplicar secuencia (ej: R U Ri Ui)"))
        self.txt_seq = QLineEdit()
        self.txt_seq.setPlaceholderText("Ej: R U Ri Ui")
        panel_layout.addWidget(self.txt_seq)
        self.btn_apply = QPushButton("Aplicar")
        panel_layout.addWidget(self.btn_apply)

        # Opciones
        self.chk_emphasize = QCheckBox("Resaltar capa en movimiento")
        self.chk_emphasize.setChecked(self.cube.emphasize)
        panel_layout.addWidget(self.chk_emphasize)

        row_queue = QHBoxLayout()
        self.btn_undo = QPushButton("Undo")
        self.btn_clear = QPushButton("Vaciar cola")
        row_queue.addWidget(self.btn_undo)
        row_queue.addWidget(self.btn_clear)
        panel_layout.addLayout(row_queue)

        self.lbl_queue = QLabel("")
        panel_layout.addWidget(self.lbl_queue)

        panel_layout.addWidget(QLabel("Historial de movimientos"))
        self.list_history = QListWidget()
        panel_layout.addWidget(self.list_history, 1)

        root_layout.addWidget(panel)
        self.setCentralWidget(root)

        # --- Conexiones ---
        self.btn_apply.clicked.connect(self.on_apply_sequence)
        self.txt_seq.returnPressed.connect(self.on_apply_sequence)
        self.btn_undo.clicked.connect(self.on_undo)
        self.btn_clear.clicked.connect(self.on_clear_queue)
        self.chk_emphasize.toggled.connect(self.on_emphasize_toggled)

        self.gl_widget.move_queued.connect(self._refresh_queue_label)
        self.gl_widget.move_started.connect(self._refresh_queue_label)
        self.gl_widget.move_applied.connect(self.on_move_applied)
        self.gl_widget.move_rejected.connect(self.on_move_rejected)

        self.btn_undo.setShortcut("Ctrl+Z")

        self._refresh_queue_label()

    # -------------------
    # Helpers UI
    # -------------------
    def _refresh_queue_label(self, *_args) -> None:
        """Actualiza el label con la rotación activa y la cantidad pendiente."""
        active = self.cube.active
        text = f"Activa: {active}" if active is not None else "Activa: -"
        self.lbl_queue.setText(f"{text} | Pendientes: {self.cube.pending_count}")

    # -------------------
    # Movimientos
    # -------------------
    def on_face(self, token: str) -> None:
        self.gl_widget.queue_face(token)

    def on_apply_sequence(self) -> None:
        """Encola la secuencia ingresada por el usuario."""
        seq = self.txt_seq.text().strip()
        if not seq:
            return

        try:
            self.gl_widget.play_sequence(seq)
        except RubikError as exc:
            QMessageBox.warning(self, "Secuencia inválida", str(exc))
            return

        self.txt_seq.clear()

    def on_move_applied(self, request: RotationRequest) -> None:
        """Callback cuando el cubo termina una rotación.

        Los movimientos de undo no se registran en el historial.

        Args:
            request: Pedido completado.
        """
        if self._undoing:
            self._undoing -= 1
        else:
            self.history.append(request)
            self.list_history.addItem(str(request))
            self.list_history.scrollToBottom()

        self._refresh_queue_label()
        self.statusBar().showMessage(f"Move: {request}", 1200)

    def on_move_rejected(self, msg: str) -> None:
        self.statusBar().showMessage(msg, 2000)

    def on_undo(self) -> None:
        """Encola el inverso del último movimiento completado."""
        if not self.history or not self.cube.is_idle():
            return

        last = self.history.pop()
        self.list_history.takeItem(self.list_history.count() - 1)
        self._undoing += 1
        self.cube.rotate(inverse_request(last))
        self._refresh_queue_label()

    def on_clear_queue(self) -> None:
        n = self.cube.clear_pending()
        self._refresh_queue_label()
        self.statusBar().showMessage(f"{n} movimientos descartados", 1500)

    def on_emphasize_toggled(self, checked: bool) -> None:
        self.cube.emphasize = checked

    def closeEvent(self, event: QCloseEvent) -> None:
        """Evento de cierre de ventana: detiene el timer de animación."""
        self.gl_widget.stop()
        event.accept()
