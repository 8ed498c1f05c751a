"""Configuration management for the training analytics engine."""

import os
from typing import List, Tuple
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Application configuration."""

    # Volume heuristics
    SECONDARY_VOLUME_WEIGHT: float = float(os.getenv("SECONDARY_VOLUME_WEIGHT", "0.5"))
    RECOVERY_DAYS_TABLE: str = os.getenv("RECOVERY_DAYS_TABLE", "8:4,6:3,4:2,1:1")  # sets:days
    FREQUENCY_WINDOW_DAYS: int = int(os.getenv("FREQUENCY_WINDOW_DAYS", "28"))
    TRAINED_GROUP_MIN_SETS: float = float(os.getenv("TRAINED_GROUP_MIN_SETS", "1.5"))  # per cycle

    # Suggestion thresholds (weekly sets unless noted)
    SESSION_OVERLOAD_SETS: int = int(os.getenv("SESSION_OVERLOAD_SETS", "10"))
    LOW_FREQUENCY_PER_WEEK: float = float(os.getenv("LOW_FREQUENCY_PER_WEEK", "1.5"))
    LOW_WEEKLY_SETS: int = int(os.getenv("LOW_WEEKLY_SETS", "8"))
    HIGH_WEEKLY_SETS: int = int(os.getenv("HIGH_WEEKLY_SETS", "20"))
    CONCENTRATED_SESSION_SETS: int = int(os.getenv("CONCENTRATED_SESSION_SETS", "6"))
    INEFFICIENT_SESSION_SETS: int = int(os.getenv("INEFFICIENT_SESSION_SETS", "8"))

    # Progression
    SEED_WEIGHT_KG: float = float(os.getenv("SEED_WEIGHT_KG", "60"))
    SEED_WEIGHT_LBS: float = float(os.getenv("SEED_WEIGHT_LBS", "135"))
    DEFAULT_SET_COUNT: int = int(os.getenv("DEFAULT_SET_COUNT", "3"))
    DEFAULT_REP_RANGE_MIN: int = int(os.getenv("DEFAULT_REP_RANGE_MIN", "5"))
    DEFAULT_REP_RANGE_MAX: int = int(os.getenv("DEFAULT_REP_RANGE_MAX", "8"))
    DEFAULT_TARGET_RIR: int = int(os.getenv("DEFAULT_TARGET_RIR", "2"))
    DEFAULT_WEIGHT_UNIT: str = os.getenv("DEFAULT_WEIGHT_UNIT", "kg")
    DEFAULT_EQUIPMENT: str = os.getenv("DEFAULT_EQUIPMENT", "barbell")

    # Application
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def get_recovery_days_table(cls) -> List[Tuple[int, int]]:
        """Parse the recovery table into (min_sets, required_days) pairs, largest first.

        Returns:
            List of (min_sets, required_days) sorted by min_sets descending
        """
        table = []
        for entry in cls.RECOVERY_DAYS_TABLE.split(','):
            if not entry.strip():
                continue
            try:
                sets_str, days_str = entry.split(':')
                table.append((int(sets_str.strip()), int(days_str.strip())))
            except ValueError:
                raise ValueError(
                    f"Invalid RECOVERY_DAYS_TABLE entry '{entry}'. Expected 'sets:days'"
                )

        return sorted(table, reverse=True)

    @classmethod
    def validate(cls) -> bool:
        """Validate configuration values."""
        if not 0 <= cls.SECONDARY_VOLUME_WEIGHT <= 1:
            raise ValueError("SECONDARY_VOLUME_WEIGHT must be between 0 and 1")
        if cls.FREQUENCY_WINDOW_DAYS < 7:
            raise ValueError("FREQUENCY_WINDOW_DAYS must cover at least one week")
        if cls.DEFAULT_REP_RANGE_MIN >= cls.DEFAULT_REP_RANGE_MAX:
            raise ValueError("DEFAULT_REP_RANGE_MIN must be below DEFAULT_REP_RANGE_MAX")
        if cls.DEFAULT_WEIGHT_UNIT not in ("kg", "lbs"):
            raise ValueError("DEFAULT_WEIGHT_UNIT must be 'kg' or 'lbs'")
        cls.get_recovery_days_table()
        return True


config = Config()
