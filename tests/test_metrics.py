"""
Tests para métricas y gráficos del historial.
"""

import importlib.util
import pytest
import sys
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

# Agregar src al path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.simulator import TrafficSimulator
from src.utils.metrics import MetricsCalculator
from src.utils.visualization import plot_light_timeline


def _record(frame, lights, vehicles=0, retired=0, waiting=0, cycles=0):
    return {
        'frame': frame,
        'active_group': 1,
        'transitioning': False,
        'cycles_completed': cycles,
        'lights': lights,
        'countdowns': {avenue: 0 for avenue in lights},
        'vehicles': vehicles,
        'retired': retired,
        'waiting': waiting
    }


@pytest.fixture
def history():
    return [
        _record(1, {'A': 'red', 'B': 'red'}, vehicles=1, waiting=1),
        _record(2, {'A': 'green', 'B': 'red'}, vehicles=2, waiting=1),
        _record(3, {'A': 'green', 'B': 'red'}, vehicles=1, retired=1, waiting=0),
        _record(4, {'A': 'yellow', 'B': 'red'}, vehicles=2, waiting=2, cycles=1),
    ]


class TestMetricsCalculator:
    """Tests para la clase MetricsCalculator."""

    def test_green_ratio(self, history):
        assert MetricsCalculator.green_ratio(history, 'A') == pytest.approx(0.5)
        assert MetricsCalculator.green_ratio(history, 'B') == 0.0

    def test_vehicles_in_flight(self, history):
        assert MetricsCalculator.average_vehicles_in_flight(history) == pytest.approx(1.5)
        assert MetricsCalculator.max_vehicles_in_flight(history) == 2

    def test_throughput_and_cycles(self, history):
        assert MetricsCalculator.throughput(history) == 1
        assert MetricsCalculator.cycles_completed(history) == 1

    def test_waiting_ratio(self, history):
        # 4 detenidos sobre 7 vehículo-ticks
        assert MetricsCalculator.waiting_ratio(history) == pytest.approx(4 / 7)

    def test_empty_history(self):
        """Sin historial todas las métricas valen cero."""
        summary = MetricsCalculator.summary([], ['A'])

        assert summary['throughput'] == 0
        assert summary['avg_vehicles_in_flight'] == 0.0
        assert summary['waiting_ratio'] == 0.0
        assert summary['green_ratio'] == {'A': 0.0}
        assert MetricsCalculator.history_to_dataframe([]).empty

    def test_dataframe(self, history):
        df = MetricsCalculator.history_to_dataframe(history)

        assert len(df) == 4
        assert list(df.index) == [1, 2, 3, 4]
        assert 'light:A' in df.columns
        assert (df['light:A'] == 'green').sum() == 2

    def test_simulator_history(self):
        simulator = TrafficSimulator(seed=4)
        for _ in range(45):
            simulator.step()

        df = MetricsCalculator.history_to_dataframe(simulator.history)

        assert len(df) == 45
        # Ciclos de 9 ticks alternados: el grupo 1 tiene 3 ciclos con 5 ticks en verde
        assert MetricsCalculator.green_ratio(simulator.history, "Av. Brasil") == pytest.approx(15 / 45)
        assert MetricsCalculator.green_ratio(simulator.history, "Av. Paulista") == pytest.approx(10 / 45)


class TestVisualization:
    """Tests para los gráficos."""

    def test_timeline_figure(self, history):
        fig = plot_light_timeline(history)

        ax = fig.axes[0]
        assert [label.get_text() for label in ax.get_yticklabels()] == ['A', 'B']
        assert len(ax.patches) == 8
        plt.close(fig)

    def test_batch_run_saves_timeline(self, tmp_path):
        """El modo batch con --plot guarda la línea de tiempo en disco."""
        script = Path(__file__).parent.parent / "examples" / "run_simulation.py"
        spec = importlib.util.spec_from_file_location("run_simulation", script)
        run_simulation = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(run_simulation)
        output = tmp_path / "luces.png"

        assert run_simulation.main(["--batch", "--duration", "20", "--plot", str(output)]) == 0
        assert output.exists()
        assert output.stat().st_size > 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
