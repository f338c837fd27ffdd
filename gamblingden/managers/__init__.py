"""Manager modules for GamblingDen.

Managers own state and coordinate between engines.
They are stateful, event-aware, and handle persistence.
"""

from .base_manager import BaseManager
from .daily_bonus_manager import DailyBonusManager
from .economy_manager import EconomyManager
from .gamification_manager import GamificationManager
from .progression_manager import ProgressionManager
from .statistics_manager import StatisticsManager
from .system_manager import SystemManager

__all__ = [
    "BaseManager",
    "DailyBonusManager",
    "EconomyManager",
    "GamificationManager",
    "ProgressionManager",
    "StatisticsManager",
    "SystemManager",
]
