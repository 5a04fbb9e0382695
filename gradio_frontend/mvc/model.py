from __future__ import annotations

import os
from typing import Optional

import cv2
import numpy as np

from posture_core.overlay import SEVERITY_COLORS_BGR, draw_pose
from posture_core.types import KeypointSet, PostureResult

# 将临时目录设置为项目根目录下的 .temp
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
TEMP_DIR = os.path.join(PROJECT_ROOT, ".temp")


def save_uploaded(video: Optional[str], name: str) -> Optional[str]:
    """将上传的文件复制到 项目根目录/.temp 下并返回新路径；复制失败返回 None。"""
    if not video:
        return None
    os.makedirs(TEMP_DIR, exist_ok=True)
    basename = os.path.basename(video)
    target = os.path.join(TEMP_DIR, f"{name}_{basename}")
    try:
        if os.path.abspath(video) != os.path.abspath(target):
            with open(video, "rb") as fsrc, open(target, "wb") as fdst:
                fdst.write(fsrc.read())
    except OSError:
        return None
    return target


def format_result(result: PostureResult, proc_fps: Optional[float] = None) -> str:
    """结果 -> 文本框显示内容。"""
    lines = [
        f"Posture Score: {result.score} / 100",
        f"{result.message}  [{result.severity.value}]",
    ]
    m = result.metrics
    if m is not None:
        lines.append(f"肩部倾斜: {m.shoulder_tilt:.1f} | 髋部倾斜: {m.hip_tilt:.1f} | 脊柱偏角: {m.spine_angle:.1f}°")
    if proc_fps is not None:
        lines.append(f"处理FPS: {proc_fps:.1f}")
    return "\n".join(lines)


def annotate_frame(frame_bgr: np.ndarray, keypoints: Optional[KeypointSet], result: PostureResult) -> np.ndarray:
    """叠加关键点/躯干骨架与分数文字，返回 RGB 图像（供 gr.Image 显示）。"""
    vis = draw_pose(frame_bgr, keypoints)
    if vis is frame_bgr:
        vis = frame_bgr.copy()
    color = SEVERITY_COLORS_BGR[result.severity]
    cv2.putText(vis, f"{result.score}", (20, 50), cv2.FONT_HERSHEY_SIMPLEX, 1.5, color, 3, cv2.LINE_AA)
    cv2.putText(vis, result.message, (20, 90), cv2.FONT_HERSHEY_SIMPLEX, 0.8, color, 2, cv2.LINE_AA)
    return cv2.cvtColor(vis, cv2.COLOR_BGR2RGB)
