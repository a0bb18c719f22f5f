"""
Scalable Canvas
===============
A QWidget whose children are positioned by layout formulas instead of a
QLayout.

Why is this file needed?
------------------------
1. Bridge: It connects the Qt world (resize events, child widgets) to the
   Qt-free layout model (Panel, GridFormatter, RectangleResolver).
2. Re-layout: Every resize rebuilds the pixel rectangles from the cached
   formulas and pushes them to the hosted widgets with setGeometry.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from PySide6.QtCore import QRect, Signal
from PySide6.QtGui import QResizeEvent
from PySide6.QtWidgets import QWidget

from scalablelayout.layout.panel import DEFAULT_HEIGHT, DEFAULT_WIDTH, Component, LayoutPass, Panel
from scalablelayout.model.geometry import Cell, PixelRect

logger = logging.getLogger(__name__)


def to_qrect(rect: PixelRect) -> QRect:
    return QRect(rect.x, rect.y, rect.width, rect.height)


class WidgetComponent(Component):
    """A Component standing in for a hosted QWidget."""

    def __init__(self, widget: QWidget, parent: Optional[Panel] = None, **placement) -> None:
        self.widget = widget
        placement.setdefault("name", widget.objectName() or type(widget).__name__)
        super().__init__(parent, **placement)


class ScalableCanvas(QWidget):
    """Hosts widgets placed in a grid or by x/y/width/height formulas."""

    layout_applied = Signal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.root: Panel = Panel.root()
        self.last_pass: Optional[LayoutPass] = None
        self._hosted: List[WidgetComponent] = []

    # ---- declaring children ----

    def add_widget(
        self,
        widget: QWidget,
        panel: Optional[Panel] = None,
        *,
        cell: Optional[Cell] = None,
        x: str = "0",
        y: str = "0",
        width: str = DEFAULT_WIDTH,
        height: str = DEFAULT_HEIGHT,
    ) -> WidgetComponent:
        """
        Host a widget on this canvas.

        Args:
            widget: The Qt widget to position. It is reparented to the canvas.
            panel: The panel to place it in. Defaults to the root panel.
            cell: Grid cell in the panel. When given, the formulas are ignored.
            x, y, width, height: Free-form formulas, see RectangleResolver.

        Returns:
            The component that represents the widget in the layout tree.
        """
        widget.setParent(self)
        component = WidgetComponent(
            widget, panel or self.root, cell=cell, x=x, y=y, width=width, height=height
        )
        self._hosted.append(component)
        self.relayout()
        return component

    def add_panel(self, parent: Optional[Panel] = None, **placement) -> Panel:
        """Create a nested panel (gridded with `cell=` or free-form)."""
        panel = Panel(parent or self.root, **placement)
        self.relayout()
        return panel

    def remove_widget(self, widget: QWidget) -> bool:
        component = self.component_for(widget)
        if component is None:
            return False
        component.set_parent(None)
        self._hosted.remove(component)
        widget.hide()
        widget.setParent(None)
        self.relayout()
        return True

    def component_for(self, widget: QWidget) -> Optional[WidgetComponent]:
        return next((c for c in self._hosted if c.widget is widget), None)

    def set_component_visible(self, component: Component, visible: bool) -> None:
        component.visible = visible
        self.relayout()

    # ---- layout ----

    def relayout(self) -> LayoutPass:
        """Resolve every hosted widget against the canvas' current size."""
        result = self.root.layout(PixelRect(0, 0, self.width(), self.height()))
        for component in self._hosted:
            rect = result.rect_of(component)
            if rect is None:
                # Invisible, detached or failed to resolve
                component.widget.hide()
                continue
            component.widget.setGeometry(to_qrect(rect))
            component.widget.show()
        if result.failures:
            logger.warning(f"{len(result.failures)} component(s) could not be laid out.")
        self.last_pass = result
        self.layout_applied.emit()
        return result

    def resizeEvent(self, event: QResizeEvent) -> None:
        super().resizeEvent(event)
        self.relayout()
