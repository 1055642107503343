"""
Configuración global del simulador de intersección coordinada.

Este módulo contiene todas las constantes y parámetros de configuración
utilizados en el proyecto.
"""

import logging
from pathlib import Path

# Rutas del proyecto
PROJECT_ROOT = Path(__file__).parent.parent.parent


# Parámetros del simulador
class SimulatorConfig:
    """Configuración del simulador de tráfico."""

    # Tiempo
    TICK_INTERVAL = 1.0  # segundos reales entre ticks

    # Pista
    TRACK_WIDTH = 50  # posiciones visibles por avenida

    # Generación de vehículos: randrange(10) > 6 -> 3/10
    SPAWN_DRAW_RANGE = 10
    SPAWN_THRESHOLD = 6

    # Vehículos
    MIN_SPEED = 1
    MAX_SPEED = 2
    VEHICLE_ID_RANGE = 999


# Parámetros de semáforos
class TrafficLightConfig:
    """Configuración de semáforos y grupos sincronizados."""

    # Duraciones en ticks
    GREEN_DURATION = 5
    YELLOW_DURATION = 2
    TRANSITION_DELAY = 2  # tiempo muerto entre grupos (todo rojo)

    # Grupos
    GROUPS = (1, 2)
    INITIAL_GROUP = 1

    # Topología fija: (avenida, grupo)
    AVENUES = [
        ("Av. Brasil", 1),
        ("Av. Paulista", 2),
        ("Av. Rebouças", 1),
    ]


# Visualización
class VisualizationConfig:
    """Configuración de visualización."""

    TITLE = "🚦 Simulador de Tránsito con Flujo Coordinado y Timer"
    QUIT_HINT = "Presione 'q' para salir."

    FIGURE_SIZE = (12, 4)
    DPI = 100

    # Glifos de semáforo para el cruce
    LIGHT_GLYPHS = {
        "red": "🟥",
        "green": "🟩",
        "yellow": "🟨",
    }
    UNKNOWN_GLYPH = "⬛"
    CAR_GLYPH = "🚗"

    # Estilos de rich para la pantalla en vivo
    TITLE_STYLE = "bold color(212)"
    STATE_STYLES = {
        "red": "bold red",
        "green": "bold green",
        "yellow": "bold yellow",
    }
    REFRESH_PER_SECOND = 4

    # Colores de semáforos
    LIGHT_COLORS = {
        "green": "#00FF00",
        "yellow": "#FFFF00",
        "red": "#FF0000",
    }


# Logging
class LoggingConfig:
    """Configuración de logging."""

    LOG_LEVEL = "INFO"
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = None):
    """
    Configura el logging raíz según LoggingConfig.

    Args:
        level: Nivel de log (ej: "DEBUG"). Por defecto LoggingConfig.LOG_LEVEL
    """
    logging.basicConfig(
        level=getattr(logging, (level or LoggingConfig.LOG_LEVEL).upper()),
        format=LoggingConfig.LOG_FORMAT
    )


if __name__ == "__main__":
    print(f"Directorio del proyecto: {PROJECT_ROOT}")
    print(f"Avenidas configuradas: {TrafficLightConfig.AVENUES}")
    print(f"Verde: {TrafficLightConfig.GREEN_DURATION} ticks | "
          f"Amarillo: {TrafficLightConfig.YELLOW_DURATION} ticks | "
          f"Transición: {TrafficLightConfig.TRANSITION_DELAY} ticks")
