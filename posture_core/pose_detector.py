from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import cv2
import numpy as np

from .types import Keypoint, LandmarkName


@dataclass(frozen=True)
class PoseDetectorConfig:
    model_complexity: int = 1
    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5


# MediaPipe Pose 33 点索引 -> COCO-17 名称
MEDIAPIPE_INDEX: dict[LandmarkName, int] = {
    LandmarkName.NOSE: 0,
    LandmarkName.LEFT_EYE: 2,
    LandmarkName.RIGHT_EYE: 5,
    LandmarkName.LEFT_EAR: 7,
    LandmarkName.RIGHT_EAR: 8,
    LandmarkName.LEFT_SHOULDER: 11,
    LandmarkName.RIGHT_SHOULDER: 12,
    LandmarkName.LEFT_ELBOW: 13,
    LandmarkName.RIGHT_ELBOW: 14,
    LandmarkName.LEFT_WRIST: 15,
    LandmarkName.RIGHT_WRIST: 16,
    LandmarkName.LEFT_HIP: 23,
    LandmarkName.RIGHT_HIP: 24,
    LandmarkName.LEFT_KNEE: 25,
    LandmarkName.RIGHT_KNEE: 26,
    LandmarkName.LEFT_ANKLE: 27,
    LandmarkName.RIGHT_ANKLE: 28,
}


class PoseDetector:
    """MediaPipe Pose 的薄封装。业务层只拿到命名的像素坐标关键点，不暴露 MediaPipe 对象。"""

    def __init__(self, config: Optional[PoseDetectorConfig] = None):
        """初始化 PoseDetector。

        输入:
        - config: 可选的 PoseDetectorConfig，用于控制模型复杂度与置信度阈值。

        输出: 无（构造器）。

        作用: 延迟导入 mediapipe 并创建内部的 Pose 推理对象，用于后续帧的姿态检测。
        """
        self._config = config or PoseDetectorConfig()
        # 延迟导入，避免没有安装 mediapipe 时 import 直接炸
        import mediapipe as mp

        self._pose = mp.solutions.pose.Pose(
            static_image_mode=False,
            model_complexity=self._config.model_complexity,
            enable_segmentation=False,
            smooth_landmarks=True,
            min_detection_confidence=self._config.min_detection_confidence,
            min_tracking_confidence=self._config.min_tracking_confidence,
        )

    def detect_keypoints(self, frame_bgr: np.ndarray) -> Optional[list[Keypoint]]:
        """对单帧做姿态检测。

        输入:
        - frame_bgr: BGR 格式的图像帧，numpy 数组，形状 (h,w,3)。

        输出:
        - 检测到人体时返回 17 个 Keypoint（像素坐标，confidence 取 MediaPipe 的 visibility）；
        - 未检测到人体或输入无效时返回 None。
        """
        if frame_bgr is None or frame_bgr.size == 0:
            return None

        h, w = frame_bgr.shape[:2]
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        result = self._pose.process(frame_rgb)
        if result.pose_landmarks is None:
            return None

        lm = result.pose_landmarks.landmark
        return [
            Keypoint(
                name=name.value,
                x=float(lm[idx].x) * w,
                y=float(lm[idx].y) * h,
                confidence=float(lm[idx].visibility),
            )
            for name, idx in MEDIAPIPE_INDEX.items()
        ]

    def close(self) -> None:
        """释放内部 MediaPipe 资源，调用后不应再使用该实例进行推理。"""
        self._pose.close()
