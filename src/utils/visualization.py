"""
Gráficos del historial de la simulación.
"""

from typing import Dict, List, Sequence

import matplotlib.pyplot as plt

from src.utils.config import VisualizationConfig


def plot_light_timeline(history: List[Dict], avenues: Sequence[str] = None) -> plt.Figure:
    """
    Dibuja la línea de tiempo de estados de cada semáforo.

    Una fila por avenida; cada tick es un segmento coloreado según el
    estado (rojo, verde, amarillo).

    Args:
        history: Historial de ticks del simulador
        avenues: Avenidas a graficar. Por defecto todas las del historial

    Returns:
        plt.Figure: Figura de matplotlib
    """
    if avenues is None:
        avenues = list(history[0]['lights']) if history else []

    fig, ax = plt.subplots(figsize=VisualizationConfig.FIGURE_SIZE,
                           dpi=VisualizationConfig.DPI)

    for row, avenue in enumerate(avenues):
        for record in history:
            state = record['lights'].get(avenue, 'red')
            ax.barh(row, 1, left=record['frame'] - 1, height=0.6,
                    color=VisualizationConfig.LIGHT_COLORS[state],
                    edgecolor='none')

    ax.set_yticks(range(len(avenues)))
    ax.set_yticklabels(list(avenues))
    ax.set_xlabel("Tick")
    ax.set_title("Estados de semáforos", fontsize=12, fontweight='bold')
    ax.grid(axis='x', alpha=0.3)

    plt.tight_layout()
    return fig
