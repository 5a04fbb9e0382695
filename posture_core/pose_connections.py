from __future__ import annotations

"""躯干骨架连接（仅用于画面叠加显示）。

按关键点名称定义，不依赖具体姿态模型的索引。
"""
from .types import LandmarkName

# 连接对 (a, b)
TORSO_CONNECTIONS: tuple[tuple[LandmarkName, LandmarkName], ...] = (
    (LandmarkName.LEFT_SHOULDER, LandmarkName.RIGHT_SHOULDER),
    (LandmarkName.LEFT_HIP, LandmarkName.RIGHT_HIP),
    (LandmarkName.LEFT_SHOULDER, LandmarkName.LEFT_HIP),
    (LandmarkName.RIGHT_SHOULDER, LandmarkName.RIGHT_HIP),
)
