"""
Motor principal de simulación de la intersección.

Este módulo define el agregado de estado de la simulación, la función
pura `advance` que produce el estado del tick siguiente, y el simulador
que la ejecuta paso a paso y recolecta métricas.

Orden de cada tick:
    1. Coordinador de ciclo (transición / verde / amarillo / rojo)
    2. Generación de vehículos
    3. Avance y retiro de vehículos según el semáforo de su avenida
"""

import random
import time as timer
from copy import deepcopy
from typing import Dict, List, Sequence, Tuple

from .cycle_coordinator import CycleCoordinator
from .light_controller import LightGroupController
from .traffic_generator import TrafficGenerator
from .vehicle_registry import VehicleRegistry
from src.utils.config import SimulatorConfig, TrafficLightConfig
from src.utils.metrics import MetricsCalculator


class SimulationState:
    """
    Agregado mutable con todo el estado de la simulación.

    Semáforos, vehículos y ciclo viven juntos; cada componente escribe
    solo su propia parte.
    """

    def __init__(self, controller: LightGroupController,
                 coordinator: CycleCoordinator,
                 registry: VehicleRegistry,
                 frame: int = 0):
        self.controller = controller
        self.coordinator = coordinator
        self.registry = registry
        self.frame = frame

    @classmethod
    def initial(cls, avenues: Sequence[Tuple[str, int]] = None,
                track_width: int = SimulatorConfig.TRACK_WIDTH,
                groups: Sequence[int] = None) -> 'SimulationState':
        """
        Construye el estado inicial: todo en rojo, en transición hacia el grupo 1.

        Args:
            avenues: Pares (avenida, grupo)
            track_width: Largo de la pista
            groups: Grupos en orden de rotación
        """
        if groups is None:
            groups = TrafficLightConfig.GROUPS
        controller = LightGroupController(avenues, groups)
        coordinator = CycleCoordinator(groups)
        registry = VehicleRegistry(TrafficGenerator(controller.avenues), track_width)
        return cls(controller, coordinator, registry)

    def snapshot(self) -> Dict:
        """
        Vista de solo lectura para la capa de presentación.

        Returns:
            dict: frame, semáforos en orden, vehículos, estado de ciclo
        """
        return {
            'frame': self.frame,
            'lights': self.controller.snapshot(),
            'vehicles': self.registry.snapshot(),
            'cycle': self.coordinator.snapshot(),
            'track_width': self.registry.track_width
        }


def advance(state: SimulationState, rng=None) -> SimulationState:
    """
    Produce el estado del tick siguiente sin modificar el recibido.

    Args:
        state: Estado actual
        rng: Fuente aleatoria con randrange(n). Por defecto el módulo random

    Returns:
        SimulationState: Nuevo estado
    """
    next_state = deepcopy(state)
    next_state.coordinator.advance(next_state.controller)
    next_state.registry.step(next_state.controller, rng)
    next_state.frame += 1
    return next_state


class TrafficSimulator:
    """
    Motor de simulación de la intersección coordinada.

    Mantiene el estado actual, lo avanza tick a tick con `advance` y
    registra un historial por tick para el cálculo de métricas.
    """

    def __init__(self, avenues: Sequence[Tuple[str, int]] = None,
                 track_width: int = SimulatorConfig.TRACK_WIDTH,
                 seed: int = None):
        """
        Inicializa el simulador.

        Args:
            avenues: Pares (avenida, grupo). Por defecto TrafficLightConfig.AVENUES
            track_width: Largo de la pista de cada avenida
            seed: Semilla para reproducibilidad (opcional)
        """
        self.avenues = list(avenues if avenues is not None else TrafficLightConfig.AVENUES)
        self.track_width = track_width
        self.dt = SimulatorConfig.TICK_INTERVAL

        self.rng = random.Random(seed)
        self.random_seed = seed

        self.state = SimulationState.initial(self.avenues, track_width)
        self.history: List[Dict] = []

        self.is_running = False
        self.real_time_start = None

    @property
    def controller(self) -> LightGroupController:
        return self.state.controller

    @property
    def coordinator(self) -> CycleCoordinator:
        return self.state.coordinator

    @property
    def registry(self) -> VehicleRegistry:
        return self.state.registry

    @property
    def frame(self) -> int:
        return self.state.frame

    @property
    def current_time(self) -> float:
        """Tiempo simulado en segundos."""
        return self.state.frame * self.dt

    def set_random_seed(self, seed: int):
        """
        Establece semilla para reproducibilidad.

        Args:
            seed: Semilla para el generador aleatorio
        """
        self.random_seed = seed
        self.rng.seed(seed)

    def step(self) -> SimulationState:
        """
        Ejecuta un tick de simulación.

        Returns:
            SimulationState: Estado resultante
        """
        self.state = advance(self.state, self.rng)
        self._record_history()
        return self.state

    def run(self, duration: int, verbose: bool = False) -> Dict:
        """
        Ejecuta la simulación por una cantidad de ticks.

        Args:
            duration: Cantidad de ticks
            verbose: Si True, imprime progreso

        Returns:
            dict: Métricas finales de la simulación
        """
        print(f"\n{'='*70}")
        print(f"INICIANDO SIMULACIÓN")
        print(f"{'='*70}")
        print(f"Duración: {duration} ticks")

        self.reset()
        self.is_running = True
        self.real_time_start = timer.time()

        report_interval = max(1, duration // 10)
        for tick in range(duration):
            self.step()
            if verbose and tick % report_interval == 0:
                self._print_progress()

        self.is_running = False

        metrics = self.calculate_final_metrics()

        print(f"\n{'='*70}")
        print(f"SIMULACIÓN COMPLETADA")
        print(f"{'='*70}")
        self._print_summary(metrics)

        return metrics

    def _record_history(self):
        """Registra el estado del tick para métricas."""
        cycle = self.coordinator
        registry = self.registry
        self.history.append({
            'frame': self.state.frame,
            'active_group': cycle.active_group,
            'transitioning': cycle.transitioning,
            'cycles_completed': cycle.cycles_completed,
            'lights': {light.avenue: light.state.value for light in self.controller.lights},
            'countdowns': {light.avenue: light.countdown for light in self.controller.lights},
            'vehicles': len(registry),
            'retired': registry.last_retired,
            'waiting': registry.total_waiting
        })

    def calculate_final_metrics(self) -> Dict:
        """
        Calcula métricas finales de la simulación.

        Returns:
            dict: Diccionario con todas las métricas
        """
        computation_time = 0.0
        if self.real_time_start:
            computation_time = timer.time() - self.real_time_start

        metrics = MetricsCalculator.summary(self.history, self.controller.avenues)
        metrics.update({
            'vehicles_generated': self.registry.generator.total_vehicles_generated,
            'vehicles_active': len(self.registry),
            'simulation_time': self.current_time,
            'computation_time': computation_time
        })
        return metrics

    def _print_progress(self):
        """Imprime progreso de la simulación."""
        cycle = self.coordinator
        phase = "transición" if cycle.transitioning else f"grupo {cycle.active_group}"
        print(f"\n[T={self.current_time:6.0f}s] "
              f"Fase: {phase:12s} | "
              f"Activos: {len(self.registry):3d} | "
              f"Retirados: {self.registry.total_retired:3d}")

    def _print_summary(self, metrics: Dict):
        """
        Imprime resumen de métricas finales.

        Args:
            metrics: Diccionario de métricas
        """
        print(f"\nVehículos:")
        print(f"  Generados:   {metrics['vehicles_generated']}")
        print(f"  Retirados:   {metrics['throughput']}")
        print(f"  Activos:     {metrics['vehicles_active']}")
        print(f"  En vuelo:    {metrics['avg_vehicles_in_flight']:.2f} promedio, "
              f"{metrics['max_vehicles_in_flight']} máximo")

        print(f"\nSemáforos:")
        print(f"  Ciclos completos: {metrics['cycles_completed']}")
        for avenue, ratio in metrics['green_ratio'].items():
            print(f"  {avenue:20s} verde {ratio:.1%} del tiempo")

        print(f"\nRendimiento:")
        print(f"  Tiempo de simulación: {metrics['simulation_time']:.0f} s")
        print(f"  Tiempo de cómputo:    {metrics['computation_time']:.2f} s")

    def reset(self):
        """Reinicia el simulador al estado inicial."""
        self.state = SimulationState.initial(self.avenues, self.track_width)
        self.history.clear()
        if self.random_seed is not None:
            self.rng.seed(self.random_seed)

    def get_current_state(self) -> Dict:
        """
        Retorna una copia de solo lectura del estado actual.

        Returns:
            dict: Estado actual
        """
        return self.state.snapshot()


if __name__ == "__main__":
    print("="*70)
    print("EJEMPLO: Simulador de Intersección")
    print("="*70)

    simulator = TrafficSimulator(seed=42)
    metrics = simulator.run(duration=120, verbose=True)

    print("\n" + "="*70)
    print("MÉTRICAS DETALLADAS")
    print("="*70)
    for key, value in metrics.items():
        if isinstance(value, float):
            print(f"  {key:25s}: {value:.2f}")
        else:
            print(f"  {key:25s}: {value}")
