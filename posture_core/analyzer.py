from __future__ import annotations

import logging
from typing import Optional

from .classifier import classify, low_confidence_result, missing_landmarks_result
from .config import PostureConfig
from .errors import LowConfidenceError, MissingLandmarksError
from .keypoints import find_required
from .metrics import compute_metrics
from .scoring import penalized_score, round_half_up
from .types import KeypointSet, PostureResult

logger = logging.getLogger(__name__)


class PostureAnalyzer:
    """姿态分析门面：关键点进，PostureResult 出。

    不保存任何跨帧状态，同一实例可被多个线程并发调用。
    """

    def __init__(self, config: Optional[PostureConfig] = None):
        self._config = config or PostureConfig()

    @property
    def config(self) -> PostureConfig:
        return self._config

    def analyze(self, keypoints: KeypointSet) -> PostureResult:
        """分析单帧关键点。

        输入: keypoints 为单个人体的关键点序列。
        输出: PostureResult；任何输入都会得到结果，不向调用方抛出异常。
        作用: 依次执行 关键点校验 -> 几何特征 -> 评分 -> 分类。
        关键点缺失或置信度不足时直接返回 0 分的 WARNING 结果。
        """
        cfg = self._config
        try:
            landmarks = find_required(keypoints, cfg.min_confidence)
        except MissingLandmarksError as e:
            logger.debug("%s", e)
            return missing_landmarks_result()
        except LowConfidenceError as e:
            logger.debug("%s", e)
            return low_confidence_result()

        metrics = compute_metrics(landmarks, cfg)
        clamped = penalized_score(metrics, cfg)
        message, severity = classify(metrics, clamped, cfg)
        return PostureResult(score=round_half_up(clamped), message=message, severity=severity, metrics=metrics)


def analyze_posture(keypoints: KeypointSet, config: Optional[PostureConfig] = None) -> PostureResult:
    return PostureAnalyzer(config).analyze(keypoints)
