from __future__ import annotations

from dataclasses import dataclass


# 关键点最低置信度，低于该值视为不可信
MIN_CONFIDENCE = 0.3
# 肩/髋倾斜超过该值直接给出纠正提示（优先于总分）
TILT_LIMIT = 15.0
# 分数档位：> GOOD_SCORE 为良好，> FAIR_SCORE 为需微调
GOOD_SCORE = 80
FAIR_SCORE = 60
# 线性扣分权重
SHOULDER_TILT_WEIGHT = 2.0
HIP_TILT_WEIGHT = 2.0
SPINE_ANGLE_WEIGHT = 0.5
# 肩宽/髋宽为 0 时的倾斜哨兵值（超过 TILT_LIMIT，且足以把总分压到 0）
DEGENERATE_TILT = 100.0


@dataclass(frozen=True)
class PostureConfig:
    min_confidence: float = MIN_CONFIDENCE
    tilt_limit: float = TILT_LIMIT
    good_score: int = GOOD_SCORE
    fair_score: int = FAIR_SCORE
    shoulder_tilt_weight: float = SHOULDER_TILT_WEIGHT
    hip_tilt_weight: float = HIP_TILT_WEIGHT
    spine_angle_weight: float = SPINE_ANGLE_WEIGHT
    degenerate_tilt: float = DEGENERATE_TILT
