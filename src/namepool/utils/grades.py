"""
Letter grades for numeric ratings.

Grades run E, E+, D, D+ ... SS+, SSS up to 100. Above 100 the scale is
uncapped: U1e, U1e+, ... U1sss, U2e, ...
"""

import math

GRADE_THRESHOLDS = [
    (8, "E"), (16, "E+"), (30, "D"), (40, "D+"), (50, "C"), (60, "C+"),
    (68, "B"), (76, "B+"), (82, "A"), (88, "A+"), (92, "S"), (96, "S+"),
    (99, "SS"), (100, "SS+"),
]

U_SUBGRADES = ["e", "e+", "d", "d+", "c", "c+", "b", "b+", "a", "a+", "s", "s+", "ss", "ss+", "sss"]


def _stepped_u_grade(n: int) -> str:
    offset = n - 101
    tier = offset // len(U_SUBGRADES) + 1
    return f"U{tier}{U_SUBGRADES[offset % len(U_SUBGRADES)]}"


def get_letter_grade(value: float) -> str:
    for limit, grade in GRADE_THRESHOLDS:
        if value < limit:
            return grade

    # NaN passes every threshold above; infinity has no tier
    if not math.isfinite(value):
        return "SSS"

    n = math.floor(value)
    if n <= 100:
        return "SSS"

    # 101-109 keep the older one-step-per-point mapping
    if value < 110:
        return _stepped_u_grade(n)

    # from 110 on, each span of 100 is one tier split evenly over the subgrades
    tier = math.floor((value - 110) / 100) + 1
    range_start = 110 + (tier - 1) * 100
    rel = (value - range_start) / 100.0
    idx = min(max(math.floor(rel * len(U_SUBGRADES)), 0), len(U_SUBGRADES) - 1)
    return f"U{tier}{U_SUBGRADES[idx]}"


def get_letter_grade_ability(value: float) -> str:
    """Abilities run on a doubled scale."""
    return get_letter_grade(value / 2)
