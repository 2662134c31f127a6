"""
Canonical, ordered region table. Region ids in participation records are
zero-based indices into this list.
"""

from typing import List, Optional, Sequence

REGION_NAMES: List[str] = [
    "安徽", "北京", "福建", "甘肃", "广东", "广西", "贵州", "海南", "河北", "河南",
    "黑龙江", "湖北", "湖南", "吉林", "江苏", "江西", "辽宁", "内蒙古", "山东", "山西",
    "陕西", "上海", "四川", "天津", "新疆", "浙江", "重庆", "宁夏", "云南", "澳门",
    "香港", "青海", "西藏", "台湾",
]


def region_index(name: str, region_names: Sequence[str] = REGION_NAMES) -> Optional[int]:
    """Zero-based index of a region display name, or None if unknown."""
    try:
        return list(region_names).index(name)
    except ValueError:
        return None


def is_valid_region_id(region_id: Optional[int], region_count: int = len(REGION_NAMES)) -> bool:
    return region_id is not None and 0 <= region_id < region_count
