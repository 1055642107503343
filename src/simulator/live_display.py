"""
Pantalla en vivo y lectura de teclas para la terminal.

La pantalla se refresca con rich (Live + Panel) a partir de la vista de
solo lectura del simulador. Las teclas se leen sin bloquear desde el
descriptor crudo de la terminal en modo cbreak.
"""

import os
import select
import sys
import termios
import time
import tty
from typing import Dict

from rich.console import Group
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from .intersection_view import render_panel, render_intersection
from .traffic_light import LightState
from src.utils.config import VisualizationConfig

QUIT_KEYS = (b'q', b'\x03')  # 'q' o ctrl+c
READ_CHUNK = 1024


def build_frame(snapshot: Dict) -> Group:
    """
    Compone la pantalla completa: título, panel de avenidas y cruce.

    Args:
        snapshot: Vista de solo lectura del simulador

    Returns:
        Group: Renderizable de rich
    """
    title = Text.from_markup(
        f"[{VisualizationConfig.TITLE_STYLE}]{VisualizationConfig.TITLE}[/]"
    )

    body = Text(render_panel(snapshot))
    body.append("== Cruce Central ==")
    body.append(render_intersection(snapshot))
    for state in LightState:
        body.highlight_words([state.label], style=VisualizationConfig.STATE_STYLES[state.value])

    return Group(
        title,
        Panel(body, expand=False),
        Text(VisualizationConfig.QUIT_HINT, style="dim")
    )


class LiveDisplay:
    """Refresca la pantalla con cada vista que entrega el reloj."""

    def __init__(self, console=None):
        self.live = Live(console=console,
                         refresh_per_second=VisualizationConfig.REFRESH_PER_SECOND)

    def __enter__(self):
        self.live.__enter__()
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.live.__exit__(exc_type, exc_value, traceback)

    def render(self, snapshot: Dict):
        self.live.update(build_frame(snapshot), refresh=True)


class KeyPoller:
    """
    Lectura no bloqueante de teclas en modo cbreak.

    Lee del descriptor crudo con os.read y revisa todos los bytes
    pendientes, de modo que una 'q' que llega junto a otra tecla no
    queda retenida en un buffer intermedio.
    """

    def __init__(self, fd: int = None):
        """
        Args:
            fd: Descriptor de la terminal. Por defecto stdin
        """
        self.fd = fd

    def __enter__(self):
        if self.fd is None:
            self.fd = sys.stdin.fileno()
        self.old_settings = termios.tcgetattr(self.fd)
        tty.setcbreak(self.fd)
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        termios.tcsetattr(self.fd, termios.TCSADRAIN, self.old_settings)

    def _read_pending(self, timeout: float) -> bytes:
        ready, _, _ = select.select([self.fd], [], [], timeout)
        if not ready:
            return b''
        return os.read(self.fd, READ_CHUNK)

    def quit_pressed(self) -> bool:
        """True si entre las teclas pendientes hay una de salida."""
        found = False
        data = self._read_pending(0)
        while data:
            found = found or any(key in data for key in QUIT_KEYS)
            data = self._read_pending(0)
        return found

    def wait_for_quit(self, interval: float) -> bool:
        """
        Espera hasta `interval` segundos; corta antes si llega una tecla de salida.

        Returns:
            bool: True si se pidió salir
        """
        deadline = time.monotonic() + interval
        remaining = interval
        while remaining > 0:
            data = self._read_pending(remaining)
            if any(key in data for key in QUIT_KEYS):
                return True
            remaining = deadline - time.monotonic()
        return False
