"""
Generador de tráfico vehicular.

Decide en cada tick si aparece un vehículo nuevo y con qué avenida,
velocidad e identificador. Todos los sorteos pasan por una fuente
aleatoria inyectable (cualquier objeto con randrange(n)), de modo que
las pruebas puedan fijar la secuencia exacta.
"""

import random
from typing import Optional, Sequence

from .vehicle import Vehicle
from src.utils.config import SimulatorConfig


class TrafficGenerator:
    """
    Genera vehículos con probabilidad fija por tick.

    Con los valores por defecto se sortea un entero en [0, 10) y se
    genera un vehículo si es mayor que 6, es decir con probabilidad 3/10.
    """

    def __init__(self, avenues: Sequence[str],
                 draw_range: int = SimulatorConfig.SPAWN_DRAW_RANGE,
                 threshold: int = SimulatorConfig.SPAWN_THRESHOLD,
                 min_speed: int = SimulatorConfig.MIN_SPEED,
                 max_speed: int = SimulatorConfig.MAX_SPEED,
                 id_range: int = SimulatorConfig.VEHICLE_ID_RANGE):
        """
        Inicializa el generador.

        Args:
            avenues: Avenidas candidatas (se elige una uniformemente)
            draw_range: Rango del sorteo de aparición
            threshold: Se genera si el sorteo es mayor que este valor
            min_speed: Velocidad mínima
            max_speed: Velocidad máxima (inclusive)
            id_range: Rango del identificador cosmético

        Raises:
            ValueError: Si los parámetros no son válidos
        """
        if not avenues:
            raise ValueError("El generador necesita al menos una avenida")
        if min_speed < 1 or max_speed < min_speed:
            raise ValueError(f"Rango de velocidades inválido: [{min_speed}, {max_speed}]")

        self.avenues = list(avenues)
        self.draw_range = draw_range
        self.threshold = threshold
        self.min_speed = min_speed
        self.max_speed = max_speed
        self.id_range = id_range

        self.total_vehicles_generated = 0

    @property
    def spawn_probability(self) -> float:
        """Probabilidad de aparición por tick."""
        hits = max(0, self.draw_range - 1 - self.threshold)
        return hits / self.draw_range

    def should_spawn_vehicle(self, rng) -> bool:
        """
        Determina si debe generarse un vehículo en este tick.

        Args:
            rng: Fuente aleatoria con randrange(n)
        """
        return rng.randrange(self.draw_range) > self.threshold

    def generate_vehicle(self, rng) -> Vehicle:
        """
        Crea un vehículo en el inicio de la pista.

        El orden de los sorteos es fijo: avenida, velocidad, identificador.

        Args:
            rng: Fuente aleatoria con randrange(n)

        Returns:
            Vehicle: Nuevo vehículo en posición 0
        """
        avenue = self.avenues[rng.randrange(len(self.avenues))]
        speed = rng.randrange(self.max_speed - self.min_speed + 1) + self.min_speed
        vehicle_id = rng.randrange(self.id_range)

        self.total_vehicles_generated += 1
        return Vehicle(avenue, speed=speed, position=0, vehicle_id=vehicle_id)

    def maybe_generate(self, rng=None) -> Optional[Vehicle]:
        """
        Sortea la aparición y, si corresponde, genera el vehículo.

        Args:
            rng: Fuente aleatoria. Por defecto el módulo random

        Returns:
            Vehicle o None si en este tick no aparece ninguno
        """
        if rng is None:
            rng = random
        if not self.should_spawn_vehicle(rng):
            return None
        return self.generate_vehicle(rng)

    def reset(self):
        self.total_vehicles_generated = 0
