"""
Reloj de simulación.

Único impulsor del simulador: emite ticks estrictamente en serie a un
intervalo fijo de tiempo real y entrega cada estado a la capa de
presentación. No hay hilos: el único punto de espera es el sleep entre
ticks.
"""

import logging
import time
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)


class SimulationClock:
    """
    Bucle cooperativo tick -> render -> espera.

    La salida se pide con should_quit() (consultado antes de cada tick)
    o con stop(); en ambos casos el bucle termina sin limpieza.
    """

    def __init__(self, simulator, interval: float = 1.0,
                 on_render: Optional[Callable[[Dict], None]] = None,
                 should_quit: Optional[Callable[[], bool]] = None,
                 max_ticks: Optional[int] = None,
                 sleep: Callable[[float], None] = time.sleep):
        """
        Inicializa el reloj.

        Args:
            simulator: Objeto con step() y get_current_state()
            interval: Segundos reales entre ticks
            on_render: Recibe la vista de solo lectura de cada tick
            should_quit: Devuelve True cuando llegó la señal de salida
            max_ticks: Límite de ticks (None = sin límite)
            sleep: Función de espera (inyectable para pruebas)
        """
        if interval < 0:
            raise ValueError(f"Intervalo negativo: {interval}")

        self.simulator = simulator
        self.interval = interval
        self.on_render = on_render
        self.should_quit = should_quit
        self.max_ticks = max_ticks
        self.sleep = sleep

        self.ticks = 0
        self.is_running = False

    def stop(self):
        """Pide terminar el bucle antes del próximo tick."""
        self.is_running = False

    def _quit_requested(self) -> bool:
        if not self.is_running:
            return True
        if self.should_quit is not None and self.should_quit():
            return True
        return self.max_ticks is not None and self.ticks >= self.max_ticks

    def run(self) -> int:
        """
        Ejecuta el bucle hasta recibir la señal de salida.

        Returns:
            int: Ticks ejecutados
        """
        self.is_running = True
        self.ticks = 0

        if self.on_render is not None:
            self.on_render(self.simulator.get_current_state())

        while not self._quit_requested():
            self.simulator.step()
            self.ticks += 1

            if self.on_render is not None:
                self.on_render(self.simulator.get_current_state())

            if self._quit_requested():
                break
            self.sleep(self.interval)

        self.is_running = False
        logger.info("Reloj detenido tras %d ticks", self.ticks)
        return self.ticks
