from __future__ import annotations

import math

from .errors import DegenerateGeometryError
from .types import Point2D


def polar_deg(origin: Point2D, target: Point2D) -> float:
    """射线 origin->target 的极角（度，atan2 语义，范围 (-180,180]）。"""
    return math.degrees(math.atan2(target.y - origin.y, target.x - origin.x))


def angle_deg(p1: Point2D, vertex: Point2D, p3: Point2D) -> float:
    """计算以 vertex 为顶点的夹角（度）。

    输入: p1, vertex, p3 为像素坐标点。
    输出: [0,180] 的角度值；任一射线长度为 0 时返回 0.0。
    作用: 用两条射线极角之差求夹角，超过 180 的部分按 360-角度 折回。
    """
    if p1 == vertex or p3 == vertex:
        return 0.0
    angle = abs(polar_deg(vertex, p3) - polar_deg(vertex, p1))
    if angle > 180.0:
        angle = 360.0 - angle
    return angle


def midpoint(a: Point2D, b: Point2D) -> Point2D:
    return Point2D((a.x + b.x) / 2.0, (a.y + b.y) / 2.0)


def tilt_percent(a: Point2D, b: Point2D) -> float:
    """成对关键点的倾斜度：垂直落差 / 水平间距 × 100。

    输入: a, b 为左右成对的关键点坐标（如左右肩）。
    输出: 非负浮点数，0 表示完全水平。
    作用: 以水平间距归一化，使结果与人到摄像头的距离无关；
    水平间距为 0、或坐标极大导致差值/结果溢出时抛出 DegenerateGeometryError。
    """
    width = abs(a.x - b.x)
    if width == 0 or not math.isfinite(width):
        raise DegenerateGeometryError(f"水平间距无效: {a} / {b}")
    tilt = abs(a.y - b.y) / width * 100.0
    if not math.isfinite(tilt):
        raise DegenerateGeometryError(f"倾斜度溢出: {a} / {b}")
    return tilt
