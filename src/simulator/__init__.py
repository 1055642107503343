"""
Simulador de intersección con semáforos coordinados.

Este módulo contiene el motor de simulación que modela:
- Semáforos agrupados en grupos sincronizados
- Alternancia de grupos con tiempo muerto entre ellos
- Generación, avance y retiro de vehículos
- Reloj de ticks y vistas de texto de solo lectura
"""

from .traffic_light import TrafficLight, LightState
from .light_controller import LightGroupController
from .cycle_coordinator import CycleCoordinator
from .vehicle import Vehicle
from .traffic_generator import TrafficGenerator
from .vehicle_registry import VehicleRegistry
from .traffic_simulator import SimulationState, TrafficSimulator, advance
from .clock import SimulationClock

__all__ = [
    'TrafficLight',
    'LightState',
    'LightGroupController',
    'CycleCoordinator',
    'Vehicle',
    'TrafficGenerator',
    'VehicleRegistry',
    'SimulationState',
    'TrafficSimulator',
    'advance',
    'SimulationClock'
]
