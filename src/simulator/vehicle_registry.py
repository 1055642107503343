"""
Registro de vehículos en circulación.

Es el único dueño de la lista de vehículos: en cada tick genera, avanza
y retira vehículos. El estado de los semáforos se consulta por nombre
de avenida a través del controlador, sin guardar referencias.
"""

import logging
from collections import Counter
from typing import Dict, List, Optional

from .light_controller import LightGroupController
from .traffic_generator import TrafficGenerator
from .vehicle import Vehicle
from src.utils.config import SimulatorConfig

logger = logging.getLogger(__name__)


class VehicleRegistry:
    """
    Conjunto de vehículos en vuelo.

    No hay cota superior de vehículos simultáneos: la única forma de
    salir del registro es superar el ancho de la pista.
    """

    def __init__(self, generator: TrafficGenerator,
                 track_width: int = SimulatorConfig.TRACK_WIDTH):
        """
        Inicializa el registro vacío.

        Args:
            generator: Generador de vehículos
            track_width: Largo de la pista; se retira al llegar a este valor

        Raises:
            ValueError: Si el ancho de pista no es válido
        """
        if track_width < 1:
            raise ValueError(f"Ancho de pista inválido: {track_width}")

        self.generator = generator
        self.track_width = track_width
        self.vehicles: List[Vehicle] = []

        # Estadísticas por avenida
        self.retired_by_avenue: Counter = Counter()
        self.waiting_by_avenue: Dict[str, int] = {}
        self.last_retired = 0

    def spawn(self, rng=None) -> Optional[Vehicle]:
        """
        Genera, con la probabilidad del generador, un vehículo nuevo.

        Args:
            rng: Fuente aleatoria con randrange(n)

        Returns:
            Vehicle agregado o None
        """
        vehicle = self.generator.maybe_generate(rng)
        if vehicle is not None:
            self.vehicles.append(vehicle)
            logger.debug("Nuevo vehículo %d en %s (velocidad %d)",
                         vehicle.id, vehicle.avenue, vehicle.speed)
        return vehicle

    def advance(self, controller: LightGroupController):
        """
        Avanza los vehículos con verde y retira los que salen de la pista.

        Un vehículo cuya avenida no tiene semáforo se trata como detenido.

        Args:
            controller: Controlador para consultar el estado por avenida
        """
        waiting = Counter()
        active = []

        for vehicle in self.vehicles:
            light = controller.get_light_by_avenue(vehicle.avenue)
            if light is not None and light.is_green:
                vehicle.advance()
            else:
                waiting[vehicle.avenue] += 1

            if vehicle.has_exited(self.track_width):
                self.retired_by_avenue[vehicle.avenue] += 1
            else:
                active.append(vehicle)

        self.last_retired = len(self.vehicles) - len(active)
        if self.last_retired:
            logger.debug("%d vehículo(s) retirado(s)", self.last_retired)

        self.vehicles = active
        self.waiting_by_avenue = dict(waiting)

    def step(self, controller: LightGroupController, rng=None):
        """Genera y luego avanza/retira, en ese orden."""
        self.spawn(rng)
        self.advance(controller)

    def vehicles_on(self, avenue: str) -> List[Vehicle]:
        return [v for v in self.vehicles if v.avenue == avenue]

    @property
    def total_retired(self) -> int:
        return sum(self.retired_by_avenue.values())

    @property
    def total_waiting(self) -> int:
        return sum(self.waiting_by_avenue.values())

    def snapshot(self) -> List[dict]:
        """Copia de solo lectura de los vehículos en vuelo."""
        return [vehicle.to_dict() for vehicle in self.vehicles]

    def reset(self):
        self.vehicles = []
        self.retired_by_avenue.clear()
        self.waiting_by_avenue = {}
        self.last_retired = 0
        self.generator.reset()

    def __len__(self) -> int:
        return len(self.vehicles)
