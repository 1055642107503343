"""
Sistema de métricas y análisis de resultados.

Este módulo calcula métricas a partir del historial por tick que
registra el simulador (estado de semáforos, vehículos en vuelo,
retirados y en espera).
"""

from typing import List, Dict, Sequence
import numpy as np
import pandas as pd


class MetricsCalculator:
    """
    Calculadora de métricas de evaluación para la intersección.

    Proporciona métodos estáticos sobre el historial del simulador.
    """

    @staticmethod
    def history_to_dataframe(history: List[Dict]) -> pd.DataFrame:
        """
        Convierte el historial a un DataFrame con una fila por tick.

        Los estados de semáforo quedan en columnas "light:<avenida>".

        Args:
            history: Historial de ticks

        Returns:
            pd.DataFrame: Una fila por tick, indexado por frame
        """
        rows = []
        for record in history:
            row = {
                'frame': record['frame'],
                'active_group': record['active_group'],
                'transitioning': record['transitioning'],
                'cycles_completed': record['cycles_completed'],
                'vehicles': record['vehicles'],
                'retired': record['retired'],
                'waiting': record['waiting']
            }
            for avenue, state in record['lights'].items():
                row[f"light:{avenue}"] = state
            rows.append(row)

        df = pd.DataFrame(rows)
        if not df.empty:
            df = df.set_index('frame')
        return df

    @staticmethod
    def green_ratio(history: List[Dict], avenue: str) -> float:
        """
        Fracción de ticks en que una avenida estuvo en verde.

        Args:
            history: Historial de ticks
            avenue: Nombre de la avenida

        Returns:
            float: Ratio entre 0.0 y 1.0
        """
        if not history:
            return 0.0

        greens = [record['lights'].get(avenue) == 'green' for record in history]
        return float(np.mean(greens))

    @staticmethod
    def average_vehicles_in_flight(history: List[Dict]) -> float:
        if not history:
            return 0.0
        return float(np.mean([record['vehicles'] for record in history]))

    @staticmethod
    def max_vehicles_in_flight(history: List[Dict]) -> int:
        if not history:
            return 0
        return int(max(record['vehicles'] for record in history))

    @staticmethod
    def throughput(history: List[Dict]) -> int:
        """
        Cantidad total de vehículos retirados (salieron de la pista).

        Args:
            history: Historial de ticks

        Returns:
            int: Vehículos retirados
        """
        return int(sum(record['retired'] for record in history))

    @staticmethod
    def cycles_completed(history: List[Dict]) -> int:
        if not history:
            return 0
        return history[-1]['cycles_completed']

    @staticmethod
    def waiting_ratio(history: List[Dict]) -> float:
        """
        Fracción de vehículo-ticks en que el vehículo estuvo detenido.

        Args:
            history: Historial de ticks

        Returns:
            float: Ratio entre 0.0 y 1.0
        """
        vehicle_ticks = sum(record['vehicles'] + record['retired'] for record in history)
        if vehicle_ticks == 0:
            return 0.0
        return sum(record['waiting'] for record in history) / vehicle_ticks

    @staticmethod
    def summary(history: List[Dict], avenues: Sequence[str]) -> Dict:
        """
        Resume todas las métricas en un diccionario.

        Args:
            history: Historial de ticks
            avenues: Avenidas a reportar

        Returns:
            dict: Métricas agregadas
        """
        return {
            'ticks': len(history),
            'throughput': MetricsCalculator.throughput(history),
            'avg_vehicles_in_flight': MetricsCalculator.average_vehicles_in_flight(history),
            'max_vehicles_in_flight': MetricsCalculator.max_vehicles_in_flight(history),
            'waiting_ratio': MetricsCalculator.waiting_ratio(history),
            'cycles_completed': MetricsCalculator.cycles_completed(history),
            'green_ratio': {
                avenue: MetricsCalculator.green_ratio(history, avenue)
                for avenue in avenues
            }
        }
