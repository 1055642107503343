"""
Controlador de grupos de semáforos.

Mantiene un semáforo por avenida, cada uno asignado a un grupo de
sincronización, y es el único que escribe estado y cuenta regresiva
de los semáforos. No tiene temporizador propio: cada cambio lo ordena
el coordinador de ciclo.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from .traffic_light import TrafficLight, LightState
from src.utils.config import TrafficLightConfig

logger = logging.getLogger(__name__)


class LightGroupController:
    """
    Conjunto ordenado de semáforos agrupados por sincronización.

    La topología se construye a partir de pares (avenida, grupo).
    """

    def __init__(self, avenues: Sequence[Tuple[str, int]] = None,
                 groups: Sequence[int] = None):
        """
        Inicializa el controlador con todos los semáforos en rojo.

        Args:
            avenues: Pares (avenida, grupo). Por defecto TrafficLightConfig.AVENUES
            groups: Grupos válidos. Por defecto TrafficLightConfig.GROUPS

        Raises:
            ValueError: Si la configuración no es válida
        """
        if avenues is None:
            avenues = TrafficLightConfig.AVENUES
        if groups is None:
            groups = TrafficLightConfig.GROUPS

        if not avenues:
            raise ValueError("Debe configurarse al menos una avenida")

        self.lights: List[TrafficLight] = []
        seen = set()
        for avenue, group in avenues:
            if avenue in seen:
                raise ValueError(f"Avenida duplicada: {avenue}")
            if group not in groups:
                raise ValueError(f"Grupo inválido para {avenue}: {group} (válidos: {list(groups)})")
            seen.add(avenue)
            self.lights.append(TrafficLight(avenue, group))

    @property
    def avenues(self) -> List[str]:
        """Nombres de avenida en orden de configuración."""
        return [light.avenue for light in self.lights]

    @property
    def groups(self) -> List[int]:
        """IDs de grupo presentes, ordenados."""
        return sorted({light.group for light in self.lights})

    def get_light_by_avenue(self, avenue: str) -> Optional[TrafficLight]:
        """
        Busca el semáforo de una avenida.

        Args:
            avenue: Nombre de la avenida

        Returns:
            TrafficLight o None si la avenida no tiene semáforo
        """
        for light in self.lights:
            if light.avenue == avenue:
                return light
        return None

    def is_green(self, avenue: str) -> bool:
        """True si la avenida tiene semáforo y está en verde."""
        light = self.get_light_by_avenue(avenue)
        return light is not None and light.is_green

    def lights_in_group(self, group: int) -> List[TrafficLight]:
        return [light for light in self.lights if light.group == group]

    def set_state(self, light: TrafficLight, state: LightState, countdown: int = 0):
        """
        Cambia el estado de un semáforo.

        Args:
            light: Semáforo a modificar
            state: Nuevo estado
            countdown: Ticks hasta la próxima transición forzada
        """
        if light.state != state:
            logger.debug("%s: %s -> %s (%d)", light.avenue,
                         light.state.value, state.value, countdown)
        light.state = state
        light.countdown = countdown

    def decrement_countdown(self, light: TrafficLight) -> int:
        """Descuenta un tick y retorna la cuenta restante."""
        light.countdown -= 1
        return light.countdown

    def turn_group_green(self, group: int, duration: int):
        """
        Pone en verde todos los semáforos de un grupo.

        Args:
            group: ID del grupo
            duration: Ticks de verde
        """
        for light in self.lights_in_group(group):
            self.set_state(light, LightState.GREEN, duration)

    def non_red_groups(self) -> List[int]:
        """Grupos con al menos un semáforo que no está en rojo."""
        return sorted({light.group for light in self.lights if not light.is_red})

    def snapshot(self) -> List[dict]:
        """Copia de solo lectura del estado de los semáforos, en orden."""
        return [light.to_dict() for light in self.lights]

    def __len__(self) -> int:
        return len(self.lights)

    def __repr__(self) -> str:
        return f"LightGroupController(lights={len(self.lights)}, groups={self.groups})"
