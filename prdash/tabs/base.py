"""Base class for all dashboard tab widgets."""

from __future__ import annotations

from textual.widget import Widget

from ..panel import Panel


class TabBase(Widget):
    DEFAULT_CSS = """
    TabBase { height: 100%; }
    """

    def __init__(self, panel: Panel, **kwargs: object) -> None:
        super().__init__(**kwargs)
        self._panel = panel
        self._rendered_version: int | None = None

    @property
    def panel(self) -> Panel:
        return self._panel

    def sync(self) -> None:
        """Redraw if the panel's layout changed since the last draw.

        A no-op until compose has added the child widgets.
        """
        if not self.children or self._rendered_version == self._panel.version:
            return
        self._rendered_version = self._panel.version
        self._refresh()

    def _refresh(self) -> None:
        """Override in subclasses to update UI from self._panel."""
        pass
