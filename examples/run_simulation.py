"""
Script de ejemplo: Simulación en vivo de la intersección coordinada.

Muestra en la terminal el panel de avenidas y el cruce central,
avanzando un tick por segundo. Presione 'q' para salir.

Uso:
    python examples/run_simulation.py                        # modo en vivo
    python examples/run_simulation.py --batch                # 300 ticks sin pantalla
    python examples/run_simulation.py --batch --plot luces.png
"""

import argparse
import sys
import termios
from pathlib import Path

import matplotlib.pyplot as plt

# Agregar src al path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.simulator import TrafficSimulator, SimulationClock
from src.simulator.live_display import KeyPoller, LiveDisplay
from src.utils.config import SimulatorConfig, setup_logging
from src.utils.visualization import plot_light_timeline


def run_live_simulation():
    """
    Ejecuta la simulación en la terminal hasta que se presiona 'q'.

    Returns:
        int: Ticks ejecutados
    """
    if not sys.stdin.isatty() or not sys.stdout.isatty():
        raise RuntimeError("Se requiere una terminal interactiva")

    simulator = TrafficSimulator()

    with KeyPoller() as keys, LiveDisplay() as display:
        clock = SimulationClock(
            simulator,
            interval=SimulatorConfig.TICK_INTERVAL,
            on_render=display.render,
            should_quit=keys.quit_pressed,
            # La espera se corta si llega una tecla de salida
            sleep=lambda interval: clock.stop() if keys.wait_for_quit(interval) else None
        )
        return clock.run()


def run_batch_simulation(duration: int = 300, plot_path: str = None):
    """
    Ejecuta la simulación sin pantalla y muestra métricas.

    Args:
        duration: Cantidad de ticks
        plot_path: Si se indica, guarda ahí la línea de tiempo de semáforos

    Returns:
        dict: Métricas de la simulación
    """
    simulator = TrafficSimulator(seed=42)
    metrics = simulator.run(duration=duration, verbose=True)

    if plot_path:
        fig = plot_light_timeline(simulator.history)
        fig.savefig(plot_path, bbox_inches='tight')
        plt.close(fig)
        print(f"✓ Gráfico guardado en: {plot_path}")

    return metrics


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Simulador de intersección coordinada")
    parser.add_argument("--batch", action="store_true",
                        help="Ejecutar sin pantalla y mostrar métricas")
    parser.add_argument("--duration", type=int, default=300,
                        help="Ticks del modo batch")
    parser.add_argument("--plot", metavar="PATH",
                        help="Guardar la línea de tiempo de semáforos (modo batch)")
    return parser.parse_args(argv)


def main(argv=None):
    setup_logging()
    args = parse_args(argv)

    if args.batch:
        run_batch_simulation(args.duration, args.plot)
        return 0

    try:
        ticks = run_live_simulation()
    except (RuntimeError, termios.error) as e:
        print(f"Error al iniciar el programa: {e}")
        return 1
    except KeyboardInterrupt:
        return 0

    print(f"\n✓ Simulación terminada tras {ticks} ticks")
    return 0


if __name__ == "__main__":
    sys.exit(main())
