from __future__ import annotations

from typing import Protocol

from PySide6.QtGui import QPixmap

from posture_core.types import PostureResult


class PostureView(Protocol):
    """姿态视图接口：控制器通过该协议调用视图更新。"""
    def set_result(self, result: PostureResult) -> None:
        """显示分数与提示。输入: PostureResult。输出: 无。"""
        ...

    def set_status(self, message: str, timeout_ms: int = 3000) -> None:
        """更新状态栏。输入: 文本与超时毫秒。输出: 无。作用: 提示进度/状态。"""
        ...

    def show_error(self, title: str, message: str) -> None:
        """显示错误弹窗。输入: 标题与内容。输出: 无。"""
        ...

    def set_camera_pixmap(self, pixmap: QPixmap) -> None:
        """更新摄像头预览图。输入: QPixmap。输出: 无。"""
        ...
