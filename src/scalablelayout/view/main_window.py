"""
Main Application Window
=======================
A demo menu whose widgets are placed entirely by layout formulas.

Why is this file needed?
------------------------
It shows the resolver end to end: free-form placement with the extended
variables, a `?` continuation, and a nested weighted grid with a frame and a
reserved blank row. Resize the window to watch everything scale.
"""
from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QLabel, QMainWindow, QPushButton

from scalablelayout.config import APP_NAME, DEFAULT_WINDOW_SIZE
from scalablelayout.model.geometry import Axis, Cell
from scalablelayout.view.canvas import ScalableCanvas


class MainWindow(QMainWindow):
    def __init__(self) -> None:
        super().__init__()
        self.setWindowTitle(APP_NAME)
        self.resize(*DEFAULT_WINDOW_SIZE)

        self.canvas = ScalableCanvas(self)
        self.setCentralWidget(self.canvas)

        # --- TITLE: centered horizontally by its own width ---
        title = QLabel(APP_NAME)
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.canvas.add_widget(title, x="CENTERX", y="height/20", width="width/2", height="height/10")

        # --- MENU: a framed grid of buttons ---
        menu = self.canvas.add_panel(x="CENTERX", y="CENTERY", width="width/3", height="height/2", name="menu")
        menu.grid.set_frame("width/20", "height/20")
        menu.grid.set_weight(Axis.Y, 2, 0.5)

        self.play_button = QPushButton(self.tr("Play"))
        self.options_button = QPushButton(self.tr("Options"))
        self.quit_button = QPushButton(self.tr("Quit"))
        self.canvas.add_widget(self.play_button, menu, cell=Cell(0, 0))
        self.canvas.add_widget(self.options_button, menu, cell=Cell(0, 1))
        # Row 2 stays blank, half height, to separate Quit from the rest
        menu.grid.reserve(Cell(0, 2))
        self.canvas.add_widget(self.quit_button, menu, cell=Cell(0, 3))
        self.quit_button.clicked.connect(self.close)

        # --- FOOTER: runs from width/8 to the right edge ---
        footer = QLabel(self.tr("Resize the window to rescale the menu."))
        self.canvas.add_widget(footer, x="width/8", y="height - height/10", width="?width - width/8", height="?height")
