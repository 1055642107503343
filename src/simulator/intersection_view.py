"""
Vistas de texto del estado de la simulación.

Componen el panel de avenidas y el cruce central a partir de la vista
de solo lectura que entrega el simulador. Nunca modifican el estado.
"""

from typing import Dict

from .traffic_light import LightState
from src.utils.config import VisualizationConfig


def _glyph(state: LightState) -> str:
    return VisualizationConfig.LIGHT_GLYPHS.get(state.value, VisualizationConfig.UNKNOWN_GLYPH)


def render_track(snapshot: Dict, avenue: str) -> str:
    """
    Dibuja la pista de una avenida con un glifo por vehículo.

    Args:
        snapshot: Vista de solo lectura del simulador
        avenue: Avenida a dibujar

    Returns:
        str: Línea de largo track_width
    """
    width = snapshot['track_width']
    line = [' '] * width
    for vehicle in snapshot['vehicles']:
        if vehicle['avenue'] == avenue and 0 <= vehicle['position'] < width:
            line[vehicle['position']] = VisualizationConfig.CAR_GLYPH
    return ''.join(line)


def status_line(light: Dict) -> str:
    """Ej. "Av. Brasil (Grupo 1): 🟢 Verde (3s restantes)"."""
    return (f"{light['avenue']} (Grupo {light['group']}): "
            f"{light['state'].label} ({light['countdown']}s restantes)")


def render_panel(snapshot: Dict) -> str:
    """
    Panel con el estado de cada avenida y su pista.

    Args:
        snapshot: Vista de solo lectura del simulador

    Returns:
        str: Panel de avenidas
    """
    output = "== Panel de Avenidas ==\n"
    for light in snapshot['lights']:
        output += status_line(light) + "\n"
        output += f"{render_track(snapshot, light['avenue'])}\n\n"
    return output


def render_intersection(snapshot: Dict) -> str:
    """
    Vista simplificada del cruce en dos ejes.

    El grupo 1 se muestra en el eje horizontal y el grupo 2 en el
    vertical; si un grupo tiene varias avenidas se usa la última.

    Args:
        snapshot: Vista de solo lectura del simulador

    Returns:
        str: Dibujo del cruce
    """
    horizontal = vertical = VisualizationConfig.UNKNOWN_GLYPH
    for light in snapshot['lights']:
        if light['group'] == 1:
            horizontal = _glyph(light['state'])
        elif light['group'] == 2:
            vertical = _glyph(light['state'])

    lines = [
        "",
        f"     {vertical}     ",
        "     │     ",
        f"{horizontal}───┼───{horizontal}",
        "     │     ",
        f"     {vertical}     ",
    ]
    return "\n".join(lines)

