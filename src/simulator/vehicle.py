"""
Modelo de vehículo sobre la pista de una avenida.

Cada vehículo recorre una pista unidimensional de largo fijo y avanza
solamente cuando el semáforo de su avenida está en verde.
"""


class Vehicle:
    """
    Representa un vehículo individual en la simulación.

    El identificador es cosmético: se sortea en un rango acotado y
    puede repetirse entre vehículos.
    """

    def __init__(self, avenue: str, speed: int = 1, position: int = 0,
                 vehicle_id: int = 0):
        """
        Inicializa un vehículo.

        Args:
            avenue: Avenida por la que circula
            speed: Posiciones que avanza por tick en verde (>= 1)
            position: Posición inicial sobre la pista (>= 0)
            vehicle_id: Identificador no necesariamente único

        Raises:
            ValueError: Si la velocidad o la posición no son válidas
        """
        if speed < 1:
            raise ValueError(f"Velocidad inválida: {speed} (mín: 1)")
        if position < 0:
            raise ValueError(f"Posición inválida: {position}")

        self.avenue = avenue
        self.speed = speed
        self.position = position
        self.id = vehicle_id

    def advance(self):
        """Avanza el vehículo según su velocidad."""
        self.position += self.speed

    def has_exited(self, track_width: int) -> bool:
        """True si el vehículo salió de la pista visible."""
        return self.position >= track_width

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'avenue': self.avenue,
            'position': self.position,
            'speed': self.speed
        }

    def __str__(self) -> str:
        return f"Vehicle({self.id} @ {self.avenue}: pos={self.position})"

    def __repr__(self) -> str:
        return (f"Vehicle(avenue='{self.avenue}', speed={self.speed}, "
                f"position={self.position}, vehicle_id={self.id})")
