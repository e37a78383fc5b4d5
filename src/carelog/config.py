"""Constantes de negocio del motor de calendario y analítica."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EngineConfig:
    """Deployment-wide settings for calendar and contact calculations.

    Attributes:
        overdue_days: Days without contact after which a client is overdue.
        warning_days: Days without contact after which a client is flagged.
        no_record_days: Sentinel elapsed value for clients never visited.
        grid_cells: Number of cells in a month grid (6 weeks x 7 days).
        week_start: Weekday index the grid starts on (0 = Sunday).
        default_type_color: Colour used when an activity type has none.
    """

    overdue_days: int = 90
    warning_days: int = 60
    no_record_days: int = 999
    grid_cells: int = 42
    week_start: int = 0
    default_type_color: str = "#cccccc"

    def __post_init__(self) -> None:
        if not 0 <= self.week_start < 7:
            raise ValueError(f"week_start must be in 0..6, got {self.week_start}")
        if self.grid_cells % 7 or self.grid_cells < 42:
            raise ValueError(
                f"grid_cells must be a multiple of 7 >= 42, got {self.grid_cells}"
            )


DEFAULT_CONFIG = EngineConfig()
