from __future__ import annotations

import logging
import threading
from typing import Any, Iterable, Iterator, Optional, Protocol

from .analyzer import PostureAnalyzer
from .types import KeypointSet, PostureResult, Severity

logger = logging.getLogger(__name__)

IDLE_RESULT = PostureResult(score=0, message="Start camera to begin", severity=Severity.OK)
STOPPED_RESULT = PostureResult(score=0, message="Camera stopped", severity=Severity.OK)
CAMERA_DENIED_RESULT = PostureResult(score=0, message="Camera access denied", severity=Severity.CRITICAL)


class KeypointProvider(Protocol):
    """姿态模型接口：输入一帧图像，输出单人关键点序列；未检测到人体返回 None。"""

    def detect_keypoints(self, frame: Any) -> Optional[KeypointSet]:
        ...


class AnalysisDriver:
    """逐帧驱动：推理 -> 分析 -> 发布最新结果。

    - latest: 单槽位的最新结果，只保留最后一次发布的值；
    - cancel(): 协作式取消，可在任意线程调用，之后不再发起新的分析；
    - 每个实例同一时刻只应有一个 step() 在执行（由调用方保证）。
    """

    def __init__(self, provider: KeypointProvider, analyzer: Optional[PostureAnalyzer] = None):
        self._provider = provider
        self._analyzer = analyzer or PostureAnalyzer()
        self._cancel = threading.Event()
        self._latest: PostureResult = IDLE_RESULT
        self.last_keypoints: Optional[KeypointSet] = None
        self.frames_seen = 0
        self.frames_analyzed = 0

    @property
    def latest(self) -> PostureResult:
        return self._latest

    @property
    def cancelled(self) -> bool:
        return self._cancel.is_set()

    def cancel(self) -> None:
        self._cancel.set()

    def reset(self) -> None:
        """清除取消标志并把最新结果恢复为初始提示。"""
        self._cancel.clear()
        self._latest = IDLE_RESULT
        self.last_keypoints = None
        self.frames_seen = 0
        self.frames_analyzed = 0

    def publish(self, result: PostureResult) -> None:
        self._latest = result

    def step(self, frame: Any) -> Optional[PostureResult]:
        """处理单帧。

        输入: frame 为交给姿态模型的原始帧。
        输出: 本帧发布的结果；已取消、推理失败或未检测到人体时返回 None。
        作用:
        - 推理异常只记录日志并跳过本帧，latest 保持不变；
        - 推理期间被取消则丢弃本帧结果；
        - 未检测到人体时保留上一帧的结果。
        """
        if self.cancelled:
            return None
        self.frames_seen += 1
        try:
            keypoints = self._provider.detect_keypoints(frame)
        except Exception:
            logger.exception("Pose detection error")
            self.last_keypoints = None
            return None
        if self.cancelled:
            return None
        self.last_keypoints = keypoints
        if keypoints is None:
            return None

        result = self._analyzer.analyze(keypoints)
        self.frames_analyzed += 1
        self.publish(result)
        return result

    def run(self, frames: Iterable[Any]) -> Iterator[PostureResult]:
        """按采集顺序逐帧处理，并依次产出每个发布的结果；取消后立即结束。"""
        for frame in frames:
            if self.cancelled:
                break
            result = self.step(frame)
            if result is not None:
                yield result
        logger.debug("驱动结束: seen=%d analyzed=%d", self.frames_seen, self.frames_analyzed)
