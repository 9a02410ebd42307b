import sys
from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QFont
from PySide6.QtWidgets import (
    QApplication,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)
from babysleep.common.logger import log
from babysleep.core.app_context import AppContext
from babysleep.core.session import ButtonClicked, ButtonId, Quit
from babysleep.ui.content import Blank, Text, frame_contents, visible_buttons
from babysleep.ui.theme import COLORS, build_stylesheet


# ---------------------------------------------------------------------------
# Main window
# ---------------------------------------------------------------------------

# The single screen of the app. Buttons only queue events on the context; every tick drains them and redraws from
# the returned DisplayRecord.
class MainWindow(QMainWindow):

    def __init__(self, ctx: AppContext):
        super().__init__()
        self.ctx = ctx
        s = ctx.settings
        self.setWindowTitle(s.get("window_title", "babyalarm"))
        if s.get("always_on_top", False):
            self.setWindowFlags(self.windowFlags() | Qt.WindowStaysOnTopHint)
        self.font_family = s.get("font", "Unifont")

        # -- Build UI skeleton --
        central = QWidget()
        central.setObjectName("central")
        self.setCentralWidget(central)
        lay = QVBoxLayout(central)

        self._clock_lbl = self._make_label(14, Qt.AlignRight | Qt.AlignVCenter)
        lay.addWidget(self._clock_lbl, 0, Qt.AlignRight)

        self._started_lbl = self._make_label(16, Qt.AlignCenter)
        lay.addWidget(self._started_lbl)

        self._elapsed_lbl = self._make_label(64, Qt.AlignCenter, bold=True)
        lay.addWidget(self._elapsed_lbl, 1)

        self._last_lbl = self._make_label(11, Qt.AlignCenter)
        self._last_lbl.setObjectName("last")
        lay.addWidget(self._last_lbl)

        btn_row = QHBoxLayout()
        self._buttons = {}
        for button_id, text in ((ButtonId.START, "Start"), (ButtonId.RESUME, "Resume"), (ButtonId.STOP, "Stop")):
            btn = QPushButton(text)
            btn.setObjectName(button_id.value)
            btn.setFont(QFont(self.font_family, 24, QFont.Weight.Bold))
            btn.clicked.connect(lambda _=False, b=button_id: self.ctx.post(ButtonClicked(b)))
            btn_row.addWidget(btn)
            self._buttons[button_id.value] = btn
        lay.addLayout(btn_row)

        self.setStyleSheet(build_stylesheet())
        self.resize(800, 600)
        self._refresh_last_logged()

        # -- Tick timer --
        self._timer = QTimer(self)
        self._timer.timeout.connect(self._tick)
        self._timer.start(ctx.tick_ms)
        self._tick()

    def _make_label(self, point_size, align, bold=False):
        lbl = QLabel("")
        f = QFont(self.font_family, point_size)
        f.setBold(bold)
        lbl.setFont(f)
        lbl.setAlignment(align)
        return lbl

    # ------------------------------------------------------------------ #
    #  Tick / render                                                       #
    # ------------------------------------------------------------------ #

    def _tick(self):
        was_resumable = self.ctx.controller.is_resumable()
        record = self.ctx.tick()
        if record is None:
            self._timer.stop()
            self.close()
            return

        contents = frame_contents(record, COLORS)
        self._render(self._clock_lbl, contents["clock"])
        self._render(self._started_lbl, contents["started"])
        self._render(self._elapsed_lbl, contents["elapsed"])

        shown = visible_buttons(record)
        for name, btn in self._buttons.items():
            btn.setVisible(name in shown)

        # A fresh stop means a new line may have gone into the sleep log
        if record.is_resumable and not was_resumable:
            self._refresh_last_logged()

        notice = self.ctx.controller.take_notice()
        if notice:
            QMessageBox.warning(self, "Sleep Log", notice)

    @staticmethod
    def _render(label, content):
        if isinstance(content, Blank):
            label.setText("")
            label.setVisible(False)
        elif isinstance(content, Text):
            label.setText(content.value)
            label.setStyleSheet(f"color: {content.color};")
            label.setVisible(True)

    def _refresh_last_logged(self):
        last = self.ctx.last_logged()
        if last is None:
            self._last_lbl.setText("No sleep logged yet")
        else:
            self._last_lbl.setText(f"Last sleep: {last.get('start') or 'unknown start'} for {last.get('duration')}")

    # ------------------------------------------------------------------ #
    #  Window close                                                        #
    # ------------------------------------------------------------------ #

    def keyPressEvent(self, event):
        if event.key() == Qt.Key_Escape:
            self.ctx.post(Quit())
            return
        super().keyPressEvent(event)

    def closeEvent(self, event):
        self._timer.stop()
        if self.ctx.controller.running:
            log.info("Window closed with a session still running, stopping it")
            self.ctx.controller.stop()
            notice = self.ctx.controller.take_notice()
            if notice:
                QMessageBox.warning(self, "Sleep Log", notice)
        event.accept()


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main():
    app = QApplication(sys.argv)
    window = MainWindow(AppContext.build())
    window.show()
    sys.exit(app.exec())
