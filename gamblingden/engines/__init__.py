"""Engine modules for GamblingDen.

Contains stateless computation engines:
- economy_engine: Balance arithmetic, bet validation, XP-per-wager
- progression_engine: Level lookup and level progress
- gamification_engine: Achievement condition evaluation
- statistics_engine: Statistics record defaults, repair and updates
"""

from .economy_engine import EconomyEngine
from .gamification_engine import GamificationEngine
from .progression_engine import ProgressionEngine
from .statistics_engine import StatisticsEngine

__all__ = [
    "EconomyEngine",
    "GamificationEngine",
    "ProgressionEngine",
    "StatisticsEngine",
]
