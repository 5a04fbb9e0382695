from __future__ import annotations

import logging
import math
from typing import Optional

from .config import PostureConfig
from .errors import DegenerateGeometryError
from .geometry import midpoint, polar_deg, tilt_percent
from .keypoints import RequiredLandmarks
from .types import Keypoint, PostureMetrics

logger = logging.getLogger(__name__)


def _pair_tilt(a: Keypoint, b: Keypoint, fallback: float) -> float:
    try:
        return tilt_percent(a.point, b.point)
    except DegenerateGeometryError as e:
        logger.debug("倾斜度退化，使用哨兵值 %.1f: %s", fallback, e)
        return fallback


def compute_metrics(landmarks: RequiredLandmarks, config: Optional[PostureConfig] = None) -> PostureMetrics:
    """由四个已校验关键点计算三项几何特征。

    输入: landmarks 为 find_required 的结果；config 可选配置（提供退化哨兵值）。
    输出: PostureMetrics(shoulder_tilt, hip_tilt, spine_angle)。
    作用:
    - 肩/髋倾斜度 = 垂直落差 / 水平间距 × 100，间距为 0 时取 config.degenerate_tilt；
    - 脊柱角 = 肩中点->髋中点连线与竖直方向的夹角（度，无符号）。
    此处不做任何阈值判断。
    """
    cfg = config or PostureConfig()

    shoulder_tilt = _pair_tilt(landmarks.left_shoulder, landmarks.right_shoulder, cfg.degenerate_tilt)
    hip_tilt = _pair_tilt(landmarks.left_hip, landmarks.right_hip, cfg.degenerate_tilt)

    shoulder_center = midpoint(landmarks.left_shoulder.point, landmarks.right_shoulder.point)
    hip_center = midpoint(landmarks.left_hip.point, landmarks.right_hip.point)
    # 两中点重合时 atan2(0,0)=0，得到 90°（最大偏离）
    spine_angle = abs(90.0 - abs(polar_deg(shoulder_center, hip_center)))
    if not math.isfinite(spine_angle):
        # 坐标极大导致中点溢出
        spine_angle = 90.0

    return PostureMetrics(
        shoulder_tilt=float(shoulder_tilt),
        hip_tilt=float(hip_tilt),
        spine_angle=float(spine_angle),
    )
