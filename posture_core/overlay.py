from __future__ import annotations

import math
from typing import Optional

import cv2
import numpy as np

from .config import FAIR_SCORE, GOOD_SCORE, MIN_CONFIDENCE
from .keypoints import index_landmarks
from .pose_connections import TORSO_CONNECTIONS
from .types import Keypoint, KeypointSet, Severity

POINT_COLOR_BGR = (246, 130, 59)
LINE_COLOR_BGR = (246, 92, 139)

SEVERITY_COLORS_BGR: dict[Severity, tuple[int, int, int]] = {
    Severity.OK: (94, 197, 34),
    Severity.WARNING: (11, 158, 245),
    Severity.CRITICAL: (68, 68, 239),
}


def score_band(score: float) -> Severity:
    """分数 -> 展示用档位（>=80 绿，>=60 黄，其余红）。"""
    if score >= GOOD_SCORE:
        return Severity.OK
    if score >= FAIR_SCORE:
        return Severity.WARNING
    return Severity.CRITICAL


def _visible(kp: Optional[Keypoint], th: float) -> bool:
    if kp is None or kp.confidence is None or not kp.confidence > th:
        return False
    return math.isfinite(kp.x) and math.isfinite(kp.y)


def draw_pose(
    frame_bgr: np.ndarray,
    keypoints: Optional[KeypointSet],
    min_confidence: float = MIN_CONFIDENCE,
) -> np.ndarray:
    """在 BGR 帧上叠加关键点与躯干连线。

    输入: frame_bgr 原始图像；keypoints 为像素坐标关键点或 None；min_confidence 显示阈值。
    输出: 带可视化叠加的图像副本（keypoints 为 None 时原样返回）。
    作用: 仅绘制置信度高于阈值的关键点，以及两端都高于阈值的躯干连线。
    """
    if keypoints is None:
        return frame_bgr
    out = frame_bgr.copy()

    for kp in keypoints:
        if not _visible(kp, min_confidence):
            continue
        cv2.circle(out, (int(round(kp.x)), int(round(kp.y))), 5, POINT_COLOR_BGR, -1)

    index = index_landmarks(keypoints)
    for a, b in TORSO_CONNECTIONS:
        ka, kb = index[a], index[b]
        if not (_visible(ka, min_confidence) and _visible(kb, min_confidence)):
            continue
        cv2.line(
            out,
            (int(round(ka.x)), int(round(ka.y))),
            (int(round(kb.x)), int(round(kb.y))),
            LINE_COLOR_BGR,
            3,
        )
    return out
