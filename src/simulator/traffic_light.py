"""
Modelo de semáforo de una avenida.

Este módulo define los estados posibles de un semáforo y el registro
de cada semáforo: avenida, grupo de sincronización, estado y cuenta
regresiva. Las transiciones las decide el coordinador de ciclo.
"""

from enum import Enum

from src.utils.config import VisualizationConfig


class LightState(Enum):
    """Estados posibles de un semáforo."""
    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"

    @property
    def label(self) -> str:
        """Etiqueta legible del estado."""
        return _LABELS[self]


_LABELS = {
    LightState.RED: "🔴 Rojo",
    LightState.GREEN: "🟢 Verde",
    LightState.YELLOW: "🟡 Amarillo",
}


class TrafficLight:
    """
    Representa el semáforo de una avenida.

    Cada semáforo pertenece a un grupo de sincronización; todos los
    semáforos de un mismo grupo cambian de fase juntos.
    """

    def __init__(self, avenue: str, group: int):
        """
        Inicializa un semáforo en rojo.

        Args:
            avenue: Nombre de la avenida (único por semáforo)
            group: ID del grupo de sincronización
        """
        self.avenue = avenue
        self.group = group
        self.state = LightState.RED
        self.countdown = 0  # ticks restantes en verde/amarillo

    @property
    def is_green(self) -> bool:
        return self.state == LightState.GREEN

    @property
    def is_red(self) -> bool:
        return self.state == LightState.RED

    def get_status_string(self) -> str:
        """
        Retorna una representación legible del estado actual.

        Returns:
            str: Ej. "Av. Brasil (Grupo 1): 🟢 Verde (3s restantes)"
        """
        return (f"{self.avenue} (Grupo {self.group}): "
                f"{self.state.label} ({self.countdown}s restantes)")

    def get_glyph(self) -> str:
        """Glifo de color para la vista del cruce."""
        return VisualizationConfig.LIGHT_GLYPHS.get(
            self.state.value, VisualizationConfig.UNKNOWN_GLYPH
        )

    def to_dict(self) -> dict:
        return {
            'avenue': self.avenue,
            'group': self.group,
            'state': self.state,
            'countdown': self.countdown
        }

    def __str__(self) -> str:
        return f"TrafficLight({self.avenue}, grupo={self.group}, {self.state.value})"

    def __repr__(self) -> str:
        return (f"TrafficLight(avenue='{self.avenue}', group={self.group}, "
                f"state={self.state.name}, countdown={self.countdown})")
