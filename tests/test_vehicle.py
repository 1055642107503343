"""
Tests para vehículos, generador de tráfico y registro de vehículos.
"""

import pytest
import random
import sys
from pathlib import Path

# Agregar src al path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.simulator.vehicle import Vehicle
from src.simulator.traffic_generator import TrafficGenerator
from src.simulator.vehicle_registry import VehicleRegistry
from src.simulator.light_controller import LightGroupController
from src.simulator.traffic_light import LightState

AVENUES = ["Av. Brasil", "Av. Paulista", "Av. Rebouças"]


def _registry(track_width=50):
    return VehicleRegistry(TrafficGenerator(AVENUES), track_width=track_width)


class TestVehicle:
    """Tests para la clase Vehicle."""

    def test_vehicle_creation(self):
        vehicle = Vehicle("Av. Brasil", speed=2, vehicle_id=17)

        assert vehicle.avenue == "Av. Brasil"
        assert vehicle.speed == 2
        assert vehicle.position == 0
        assert vehicle.id == 17

    def test_ids_may_repeat(self):
        """El identificador es cosmético y puede repetirse."""
        v1 = Vehicle("Av. Brasil", vehicle_id=5)
        v2 = Vehicle("Av. Paulista", vehicle_id=5)

        assert v1.id == v2.id

    def test_advance(self):
        vehicle = Vehicle("Av. Brasil", speed=2)
        vehicle.advance()
        vehicle.advance()

        assert vehicle.position == 4

    def test_has_exited(self):
        vehicle = Vehicle("Av. Brasil", position=49)
        assert not vehicle.has_exited(50)

        vehicle.advance()
        assert vehicle.has_exited(50)

    def test_validation(self):
        with pytest.raises(ValueError):
            Vehicle("Av. Brasil", speed=0)

        with pytest.raises(ValueError):
            Vehicle("Av. Brasil", position=-1)


class TestTrafficGenerator:
    """Tests para la clase TrafficGenerator."""

    def test_spawn_probability(self):
        """randrange(10) > 6 equivale a 3/10."""
        generator = TrafficGenerator(AVENUES)
        assert generator.spawn_probability == pytest.approx(0.3)

    def test_spawn_threshold(self, scripted_rng):
        generator = TrafficGenerator(AVENUES)

        for draw in range(7):
            assert generator.maybe_generate(scripted_rng([draw])) is None
        assert generator.total_vehicles_generated == 0

    def test_exact_vehicle(self, scripted_rng):
        """Orden fijo de sorteos: aparición, avenida, velocidad, id."""
        generator = TrafficGenerator(AVENUES)
        rng = scripted_rng([7, 1, 1, 123])

        vehicle = generator.maybe_generate(rng)

        assert vehicle.avenue == "Av. Paulista"
        assert vehicle.speed == 2
        assert vehicle.id == 123
        assert vehicle.position == 0
        assert rng.calls == [10, 3, 2, 999]
        assert generator.total_vehicles_generated == 1

    def test_slowest_vehicle(self, scripted_rng):
        generator = TrafficGenerator(AVENUES)
        vehicle = generator.maybe_generate(scripted_rng([9, 2, 0, 0]))

        assert vehicle.avenue == "Av. Rebouças"
        assert vehicle.speed == 1

    def test_rate_with_seed(self):
        """Con semilla la tasa observada ronda el 30%."""
        generator = TrafficGenerator(AVENUES)
        rng = random.Random(42)

        spawned = sum(1 for _ in range(2000) if generator.maybe_generate(rng) is not None)

        assert 0.25 < spawned / 2000 < 0.35

    def test_validation(self):
        with pytest.raises(ValueError):
            TrafficGenerator([])

        with pytest.raises(ValueError):
            TrafficGenerator(AVENUES, min_speed=0)


class TestVehicleRegistry:
    """Tests para la clase VehicleRegistry."""

    def test_spawn_appends(self, scripted_rng):
        registry = _registry()

        registry.spawn(scripted_rng([8, 0, 0, 1]))
        registry.spawn(scripted_rng([3]))

        assert len(registry) == 1
        assert registry.vehicles[0].avenue == "Av. Brasil"

    def test_motion_gated_by_green(self):
        """Solo se mueven los vehículos cuya avenida está en verde."""
        controller = LightGroupController()
        registry = _registry()
        registry.vehicles = [Vehicle("Av. Brasil", speed=2), Vehicle("Av. Paulista", speed=1)]

        controller.turn_group_green(1, 5)
        registry.advance(controller)

        assert registry.vehicles[0].position == 2
        assert registry.vehicles[1].position == 0
        assert registry.waiting_by_avenue == {"Av. Paulista": 1}

    def test_yellow_does_not_move(self):
        controller = LightGroupController()
        registry = _registry()
        registry.vehicles = [Vehicle("Av. Brasil", speed=1)]

        controller.set_state(controller.lights[0], LightState.YELLOW, 2)
        registry.advance(controller)

        assert registry.vehicles[0].position == 0

    def test_three_green_ticks(self):
        """Velocidad 2 con tres ticks en verde termina en posición 6."""
        controller = LightGroupController()
        registry = _registry()
        registry.vehicles = [Vehicle("Av. Brasil", speed=2)]
        controller.turn_group_green(1, 5)

        for _ in range(3):
            registry.advance(controller)

        assert registry.vehicles[0].position == 6

    def test_red_on_third_tick(self):
        """Si el semáforo pasa a rojo antes del tercer avance, queda en 4."""
        controller = LightGroupController()
        registry = _registry()
        registry.vehicles = [Vehicle("Av. Brasil", speed=2)]
        controller.turn_group_green(1, 5)

        registry.advance(controller)
        registry.advance(controller)
        controller.set_state(controller.get_light_by_avenue("Av. Brasil"), LightState.RED)
        registry.advance(controller)

        assert registry.vehicles[0].position == 4

    def test_missing_light_does_not_move(self):
        """Sin semáforo para la avenida, el vehículo espera sin error."""
        controller = LightGroupController()
        registry = _registry()
        registry.vehicles = [Vehicle("Av. Inexistente", speed=2)]

        registry.advance(controller)

        assert registry.vehicles[0].position == 0
        assert registry.total_waiting == 1

    def test_retirement(self):
        """Al alcanzar el ancho de pista el vehículo se descarta."""
        controller = LightGroupController()
        registry = _registry(track_width=10)
        registry.vehicles = [
            Vehicle("Av. Brasil", speed=2, position=8),
            Vehicle("Av. Brasil", speed=1, position=3),
        ]
        controller.turn_group_green(1, 5)

        registry.advance(controller)

        assert len(registry) == 1
        assert registry.vehicles[0].position == 4
        assert registry.last_retired == 1
        assert registry.retired_by_avenue["Av. Brasil"] == 1

        for _ in range(5):
            registry.advance(controller)
            assert all(v.position < 10 for v in registry.vehicles)

    def test_waiting_vehicles_are_kept(self):
        """Un vehículo detenido nunca se retira por esperar."""
        controller = LightGroupController()
        registry = _registry()
        registry.vehicles = [Vehicle("Av. Paulista", speed=2)]

        for _ in range(100):
            registry.advance(controller)

        assert len(registry) == 1

    def test_step_spawns_then_advances(self, scripted_rng):
        """Un vehículo generado en un tick con verde avanza en ese mismo tick."""
        controller = LightGroupController()
        controller.turn_group_green(1, 5)
        registry = _registry()

        registry.step(controller, scripted_rng([9, 0, 1, 42]))

        assert registry.vehicles[0].position == 2

    def test_reset(self, scripted_rng):
        registry = _registry()
        registry.spawn(scripted_rng([9, 0, 0, 0]))
        registry.reset()

        assert len(registry) == 0
        assert registry.total_retired == 0
        assert registry.generator.total_vehicles_generated == 0

    def test_invalid_track_width(self):
        with pytest.raises(ValueError):
            _registry(track_width=0)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
