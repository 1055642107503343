"""
Coordinador de ciclo entre grupos de semáforos.

Alterna qué grupo puede avanzar, con un tiempo muerto explícito (todo
rojo) entre grupos para que nunca haya dos grupos fuera de rojo a la vez.

Máquina de estados:
    TRANSICIÓN -> (sync_countdown <= 0) -> grupo activo en verde -> EN CURSO
    EN CURSO   -> verde -> amarillo -> rojo en todo el grupo -> siguiente
                  grupo, sync_countdown reiniciado -> TRANSICIÓN
"""

import logging
from typing import Sequence

from .light_controller import LightGroupController
from .traffic_light import LightState
from src.utils.config import TrafficLightConfig

logger = logging.getLogger(__name__)


class CycleCoordinator:
    """
    Dueño exclusivo del estado de ciclo.

    Es el único que escribe active_group, transitioning y sync_countdown,
    y quien ordena al LightGroupController cada cambio de semáforo.
    """

    def __init__(self, groups: Sequence[int] = None,
                 initial_group: int = None,
                 green_duration: int = None,
                 yellow_duration: int = None,
                 transition_delay: int = None):
        """
        Inicializa el coordinador en estado de transición.

        Args:
            groups: Orden de rotación de grupos. Por defecto (1, 2)
            initial_group: Primer grupo en ponerse verde
            green_duration: Ticks de verde
            yellow_duration: Ticks de amarillo
            transition_delay: Ticks de tiempo muerto entre grupos

        Raises:
            ValueError: Si las duraciones o grupos no son válidos
        """
        self.groups = list(groups if groups is not None else TrafficLightConfig.GROUPS)
        self.green_duration = green_duration if green_duration is not None \
            else TrafficLightConfig.GREEN_DURATION
        self.yellow_duration = yellow_duration if yellow_duration is not None \
            else TrafficLightConfig.YELLOW_DURATION
        self.transition_delay = transition_delay if transition_delay is not None \
            else TrafficLightConfig.TRANSITION_DELAY

        if initial_group is None:
            initial_group = TrafficLightConfig.INITIAL_GROUP

        if len(self.groups) < 2:
            raise ValueError(f"Se necesitan al menos 2 grupos: {self.groups}")
        if initial_group not in self.groups:
            raise ValueError(f"Grupo inicial inválido: {initial_group}")
        if self.green_duration < 1 or self.yellow_duration < 1:
            raise ValueError("Las duraciones de verde y amarillo deben ser >= 1")
        if self.transition_delay < 0:
            raise ValueError(f"Tiempo de transición negativo: {self.transition_delay}")

        self.active_group = initial_group
        self.transitioning = True
        self.sync_countdown = self.transition_delay

        # Estadísticas
        self.cycles_completed = 0

    def next_group(self, group: int) -> int:
        """
        Grupo siguiente en la rotación.

        Con dos grupos {1, 2} equivale a 3 - group.
        """
        index = self.groups.index(group)
        return self.groups[(index + 1) % len(self.groups)]

    def advance(self, controller: LightGroupController):
        """
        Avanza un tick de la máquina de estados.

        Args:
            controller: Controlador cuyos semáforos se modifican
        """
        if self.transitioning:
            self._advance_transition(controller)
        else:
            self._advance_running(controller)

    def _advance_transition(self, controller: LightGroupController):
        self.sync_countdown -= 1
        if self.sync_countdown <= 0:
            self.transitioning = False
            controller.turn_group_green(self.active_group, self.green_duration)
            logger.debug("Grupo %d en verde", self.active_group)

    def _advance_running(self, controller: LightGroupController):
        all_expired = True

        for light in controller.lights:
            if light.group == self.active_group:
                if light.state == LightState.GREEN:
                    if controller.decrement_countdown(light) <= 0:
                        controller.set_state(light, LightState.YELLOW, self.yellow_duration)
                    # Recién pasado a amarillo: aún debe cumplir su ventana
                    all_expired = False
                elif light.state == LightState.YELLOW:
                    if controller.decrement_countdown(light) <= 0:
                        controller.set_state(light, LightState.RED, 0)
                    else:
                        all_expired = False
            elif light.state != LightState.RED:
                # Drena semáforos de otros grupos que quedaron en amarillo
                if controller.decrement_countdown(light) <= 0:
                    controller.set_state(light, LightState.RED, 0)

        if all_expired:
            finished = self.active_group
            self.active_group = self.next_group(finished)
            self.transitioning = True
            self.sync_countdown = self.transition_delay
            self.cycles_completed += 1
            logger.debug("Grupo %d expirado, transición hacia grupo %d",
                         finished, self.active_group)

    def snapshot(self) -> dict:
        return {
            'active_group': self.active_group,
            'transitioning': self.transitioning,
            'sync_countdown': self.sync_countdown,
            'cycles_completed': self.cycles_completed
        }

    def __repr__(self) -> str:
        return (f"CycleCoordinator(active_group={self.active_group}, "
                f"transitioning={self.transitioning}, "
                f"sync_countdown={self.sync_countdown})")
