from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .config import PostureConfig
from .types import PostureMetrics, PostureResult, Severity

logger = logging.getLogger(__name__)

MSG_MISSING = "Position yourself in frame"
MSG_LOW_CONFIDENCE = "Move closer or improve lighting"
MSG_SHOULDERS = "Straighten your shoulders"
MSG_HIPS = "Adjust your sitting posture"
MSG_GOOD = "Good posture detected!"
MSG_MINOR = "Minor adjustments needed"
MSG_POOR = "Poor posture - sit up straight"


@dataclass(frozen=True)
class StatusRule:
    name: str
    applies: Callable[[PostureMetrics, float, PostureConfig], bool]
    message: str
    severity: Severity


# 按顺序匹配，第一条命中即返回；倾斜规则优先于总分
STATUS_RULES: tuple[StatusRule, ...] = (
    StatusRule(
        "shoulder_tilt",
        lambda m, s, cfg: m.shoulder_tilt > cfg.tilt_limit,
        MSG_SHOULDERS,
        Severity.CRITICAL,
    ),
    StatusRule(
        "hip_tilt",
        lambda m, s, cfg: m.hip_tilt > cfg.tilt_limit,
        MSG_HIPS,
        Severity.WARNING,
    ),
    StatusRule("good", lambda m, s, cfg: s > cfg.good_score, MSG_GOOD, Severity.OK),
    StatusRule("minor", lambda m, s, cfg: s > cfg.fair_score, MSG_MINOR, Severity.WARNING),
)

FALLBACK_STATUS = (MSG_POOR, Severity.CRITICAL)


def classify(metrics: PostureMetrics, score: float, config: Optional[PostureConfig] = None) -> tuple[str, Severity]:
    """根据几何特征与总分给出提示文本和严重程度。

    输入: metrics 几何特征；score 截断后未取整的 0~100 分；config 可选阈值配置。
    输出: (message, severity)。
    作用: 依次评估 STATUS_RULES，全部未命中时返回 “Poor posture”。
    """
    cfg = config or PostureConfig()
    for rule in STATUS_RULES:
        if rule.applies(metrics, score, cfg):
            logger.debug("命中规则 %s (score=%.1f, %s)", rule.name, score, metrics)
            return rule.message, rule.severity
    return FALLBACK_STATUS


def missing_landmarks_result() -> PostureResult:
    return PostureResult(score=0, message=MSG_MISSING, severity=Severity.WARNING)


def low_confidence_result() -> PostureResult:
    return PostureResult(score=0, message=MSG_LOW_CONFIDENCE, severity=Severity.WARNING)
