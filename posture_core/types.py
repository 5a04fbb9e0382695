from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence


class LandmarkName(str, enum.Enum):
    """COCO-17 关键点名称（与 MoveNet / MediaPipe 适配层输出一致）。"""

    NOSE = "nose"
    LEFT_EYE = "left_eye"
    RIGHT_EYE = "right_eye"
    LEFT_EAR = "left_ear"
    RIGHT_EAR = "right_ear"
    LEFT_SHOULDER = "left_shoulder"
    RIGHT_SHOULDER = "right_shoulder"
    LEFT_ELBOW = "left_elbow"
    RIGHT_ELBOW = "right_elbow"
    LEFT_WRIST = "left_wrist"
    RIGHT_WRIST = "right_wrist"
    LEFT_HIP = "left_hip"
    RIGHT_HIP = "right_hip"
    LEFT_KNEE = "left_knee"
    RIGHT_KNEE = "right_knee"
    LEFT_ANKLE = "left_ankle"
    RIGHT_ANKLE = "right_ankle"

    @classmethod
    def parse(cls, name: str) -> Optional["LandmarkName"]:
        """名称字符串 -> 枚举；不在词表内返回 None。"""
        try:
            return cls(name)
        except ValueError:
            return None


# 姿态分析必需的四个关键点（顺序即 RequiredLandmarks 的字段顺序）
REQUIRED_LANDMARKS: tuple[LandmarkName, ...] = (
    LandmarkName.LEFT_SHOULDER,
    LandmarkName.RIGHT_SHOULDER,
    LandmarkName.LEFT_HIP,
    LandmarkName.RIGHT_HIP,
)


@dataclass(frozen=True)
class Point2D:
    x: float
    y: float


@dataclass(frozen=True)
class Keypoint:
    """单个二维关键点（像素坐标）。

    属性:
    - name: 关键点名称，如 "left_shoulder"。
    - x, y: 源图像坐标系中的像素坐标，可为小数。
    - confidence: 置信度 [0,1]；姿态模型未给出时为 None。
    """

    name: str
    x: float
    y: float
    confidence: Optional[float] = None

    @property
    def point(self) -> Point2D:
        return Point2D(self.x, self.y)

    @staticmethod
    def from_mapping(data: Mapping[str, Any]) -> "Keypoint":
        """从字典构造关键点。

        输入: data 至少包含 name/x/y；置信度字段可为 "confidence" 或 "score"。
        输出: Keypoint。
        作用: 兼容姿态模型 JSON 输出（其置信度字段名为 score）。
        """
        conf = data.get("confidence", data.get("score"))
        return Keypoint(
            name=str(data["name"]),
            x=float(data["x"]),
            y=float(data["y"]),
            confidence=None if conf is None else float(conf),
        )


# 一帧中单个人体的关键点序列；名称可能重复，查找时取第一个
KeypointSet = Sequence[Keypoint]


class Severity(str, enum.Enum):
    OK = "ok"
    WARNING = "warning"
    CRITICAL = "critical"


@dataclass(frozen=True)
class PostureMetrics:
    shoulder_tilt: float
    hip_tilt: float
    spine_angle: float


@dataclass(frozen=True)
class PostureResult:
    """单帧姿态评估结果。

    属性:
    - score: 0~100 的整数分。
    - message: 给用户的提示文本。
    - severity: OK / WARNING / CRITICAL，供展示层选择配色。
    - metrics: 几何特征；关键点缺失或置信度不足时为 None。
    """

    score: int
    message: str
    severity: Severity
    metrics: Optional[PostureMetrics] = None
