"""
Daily challenge parameters derived deterministically from the calendar date.
"""

import math
from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

PROVINCE_COUNT = 33
DAILY_DIFFICULTY = 2
GAME_SEED_RANGE = 1000000


class DailyChallenge(BaseModel):
    """Parameters shared by every player of one day's challenge."""
    date: str = Field(description="Challenge date as YYYYMMDD")
    province_id: int = Field(ge=1, le=PROVINCE_COUNT, description="One-based province for the challenge")
    difficulty: int = Field(default=DAILY_DIFFICULTY, description="Fixed difficulty level")
    seed: int = Field(ge=0, lt=GAME_SEED_RANGE, description="Seed for the in-game random source")
    display_date: str = Field(description="Human readable date")


def _date_hash(value: int) -> float:
    x = math.sin(value) * 10000
    return x - math.floor(x)


def get_daily_challenge_params(today: Optional[date] = None) -> DailyChallenge:
    """
    Build the challenge parameters for a given day.

    Args:
        today: Day to compute for (defaults to the local current date)

    Returns:
        DailyChallenge for that day
    """
    today = today or date.today()
    date_str = f"{today.year}{today.month:02d}{today.day:02d}"
    seed = int(date_str)

    province_id = math.floor(_date_hash(seed) * PROVINCE_COUNT) + 1
    game_seed = math.floor(_date_hash(seed + 1) * GAME_SEED_RANGE)

    return DailyChallenge(
        date=date_str,
        province_id=province_id,
        difficulty=DAILY_DIFFICULTY,
        seed=game_seed,
        display_date=f"{today.year}年{today.month}月{today.day}日",
    )
