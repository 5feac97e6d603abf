import math
from dataclasses import dataclass


def _round_half_up(value):
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class FitnessSummary:
    total_steps: int = 0
    total_calories: int = 0
    total_distance: float = 0.0
    avg_water: int = 0
    avg_heart_rate: int = 0
    min_heart_rate: int = 0
    max_heart_rate: int = 0
    heart_rate_entries: int = 0

    @property
    def heart_rate_status(self):
        if not self.heart_rate_entries:
            return "No data"
        if self.avg_heart_rate > 100:
            return "Elevated (Tachycardia)"
        if self.avg_heart_rate < 60:
            return "Low (Bradycardia)"
        return "Normal"


def summarize_fitness(logs):
    """Aggregate a period of fitness logs.

    Entries without a heart rate are left out of the heart rate figures
    entirely rather than counted as zero.
    """
    logs = list(logs)
    if not logs:
        return FitnessSummary()

    heart_rates = [log['heart_rate'] for log in logs if log.get('heart_rate') is not None]
    total_water = sum(log.get('water_ml') or 0 for log in logs)

    return FitnessSummary(
        total_steps=sum(log.get('steps') or 0 for log in logs),
        total_calories=sum(log.get('calories') or 0 for log in logs),
        total_distance=round(sum(log.get('distance_km') or 0 for log in logs), 2),
        avg_water=_round_half_up(total_water / len(logs)),
        avg_heart_rate=_round_half_up(sum(heart_rates) / len(heart_rates)) if heart_rates else 0,
        min_heart_rate=min(heart_rates) if heart_rates else 0,
        max_heart_rate=max(heart_rates) if heart_rates else 0,
        heart_rate_entries=len(heart_rates),
    )
