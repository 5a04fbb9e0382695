from __future__ import annotations

import math
from typing import Optional

from .config import PostureConfig
from .types import PostureMetrics


def clamp_score(raw: float) -> float:
    """把原始分限制在 [0,100]；NaN（如 inf-inf）按 0 处理。"""
    if math.isnan(raw):
        return 0.0
    return max(0.0, min(100.0, raw))


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def penalized_score(metrics: PostureMetrics, config: Optional[PostureConfig] = None) -> float:
    """三项特征线性扣分，返回截断到 [0,100] 的浮点分（未取整）。

    输入: metrics 几何特征；config 可选权重配置。
    输出: float。
    作用: 满分 100，肩/髋倾斜各按 2 倍扣分，脊柱角按 0.5 倍扣分。
    分档判断使用该未取整的值。
    """
    cfg = config or PostureConfig()
    raw = 100.0
    raw -= metrics.shoulder_tilt * cfg.shoulder_tilt_weight
    raw -= metrics.hip_tilt * cfg.hip_tilt_weight
    raw -= metrics.spine_angle * cfg.spine_angle_weight
    return clamp_score(raw)


def aggregate_score(metrics: PostureMetrics, config: Optional[PostureConfig] = None) -> int:
    """对外展示的 0~100 整数分（四舍五入）。"""
    return round_half_up(penalized_score(metrics, config))
