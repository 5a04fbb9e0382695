from __future__ import annotations

import math
from typing import NamedTuple, Optional

from .config import MIN_CONFIDENCE
from .errors import LowConfidenceError, MissingLandmarksError
from .types import REQUIRED_LANDMARKS, Keypoint, KeypointSet, LandmarkName


class RequiredLandmarks(NamedTuple):
    left_shoulder: Keypoint
    right_shoulder: Keypoint
    left_hip: Keypoint
    right_hip: Keypoint


def index_landmarks(keypoints: KeypointSet) -> dict[LandmarkName, Optional[Keypoint]]:
    """单次遍历建立 名称 -> 关键点 的索引。

    输入: keypoints 为一帧中单个人体的关键点序列。
    输出: 覆盖全部 LandmarkName 的字典，未出现的名称对应 None。
    作用: 名称重复时保留第一个出现的关键点；词表外的名称直接忽略。
    """
    index: dict[LandmarkName, Optional[Keypoint]] = {name: None for name in LandmarkName}
    for kp in keypoints:
        name = LandmarkName.parse(kp.name)
        if name is None or index[name] is not None:
            continue
        index[name] = kp
    return index


def _trusted(kp: Keypoint, min_confidence: float) -> bool:
    # 置信度缺失按 0 处理；NaN 与非有限坐标同样视为不可信
    conf = 0.0 if kp.confidence is None else float(kp.confidence)
    if not conf >= min_confidence:
        return False
    return math.isfinite(kp.x) and math.isfinite(kp.y)


def find_required(keypoints: KeypointSet, min_confidence: float = MIN_CONFIDENCE) -> RequiredLandmarks:
    """取出左右肩、左右髋四个关键点并做置信度校验。

    输入:
    - keypoints: 关键点序列。
    - min_confidence: 置信度下限。

    输出: RequiredLandmarks（四个点齐全且可信）。

    作用:
    - 任一点缺失 -> MissingLandmarksError（不返回部分结果）；
    - 四点齐全但任一点置信度低于下限 -> LowConfidenceError。
    """
    index = index_landmarks(keypoints)

    missing = [name.value for name in REQUIRED_LANDMARKS if index[name] is None]
    if missing:
        raise MissingLandmarksError(missing)

    found = [index[name] for name in REQUIRED_LANDMARKS]
    weak = [kp.name for kp in found if not _trusted(kp, min_confidence)]
    if weak:
        raise LowConfidenceError(weak, min_confidence)

    return RequiredLandmarks(*found)
