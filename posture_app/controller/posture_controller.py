from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import cv2
import numpy as np
from PySide6.QtCore import QObject, QTimer, Qt
from PySide6.QtGui import QImage, QPixmap

from posture_core.driver import CAMERA_DENIED_RESULT, STOPPED_RESULT, AnalysisDriver
from posture_core.overlay import draw_pose
from posture_core.pose_detector import PoseDetector

from .view_protocol import PostureView

logger = logging.getLogger(__name__)

TICK_INTERVAL_MS = 33  # ~30fps
CAPTURE_WIDTH = 640
CAPTURE_HEIGHT = 480
PREVIEW_MAX_W = 800
PREVIEW_MAX_H = 600


def _bgr_to_qpixmap(frame_bgr: np.ndarray, max_w: int, max_h: int) -> QPixmap:
    """BGR 帧转 QPixmap 并按最大尺寸等比缩放。

    输入: frame_bgr (h,w,3) BGR 图像；max_w/max_h 最大显示尺寸。
    输出: QPixmap。
    作用: 将 OpenCV 图像转换为可在 Qt 标签显示的位图。
    """
    h, w = frame_bgr.shape[:2]
    rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
    qimg = QImage(rgb.data, w, h, rgb.strides[0], QImage.Format.Format_RGB888)
    pm = QPixmap.fromImage(qimg.copy())
    return pm.scaled(
        max_w,
        max_h,
        Qt.AspectRatioMode.KeepAspectRatio,
        Qt.TransformationMode.SmoothTransformation,
    )


@dataclass
class RuntimeState:
    video_path: Optional[str] = None
    running: bool = False
    mirror: bool = True


class PostureController(QObject):
    """控制器：承接UI事件，驱动 采集 -> 推理 -> 分析 -> 显示 的逐帧循环。"""

    def __init__(self, view: PostureView):
        """初始化控制器。

        输入: view 为实现 PostureView 协议的视图对象。
        输出: 无。
        作用: 准备计时器；姿态检测器在首次开始时再创建。
        """
        super().__init__()
        self._view = view
        self._state = RuntimeState()

        # QTimer 必须归属 UI 线程；parent 设为 controller 可保证线程归属一致
        self._timer = QTimer(self)
        self._timer.setInterval(TICK_INTERVAL_MS)
        self._timer.timeout.connect(self._on_tick)

        self._cap: Optional[cv2.VideoCapture] = None
        self._detector: Optional[PoseDetector] = None
        self._driver: Optional[AnalysisDriver] = None

    @property
    def running(self) -> bool:
        return self._state.running

    def set_video(self, video_path: Optional[str]) -> None:
        """设置视频文件作为输入；None 表示使用摄像头。"""
        self._state.video_path = video_path
        self._state.mirror = video_path is None

    def _ensure_driver(self) -> AnalysisDriver:
        if self._driver is None:
            self._detector = PoseDetector()
            self._driver = AnalysisDriver(self._detector)
        return self._driver

    def start(self) -> None:
        """开始分析：打开输入源、重置驱动并启动计时器。

        输入/输出: 无。
        作用: 优先使用视频文件，否则打开摄像头；失败时在视图上给出提示。
        """
        self.stop(notify=False)

        try:
            driver = self._ensure_driver()
        except Exception as e:
            logger.exception("姿态检测器初始化失败")
            self._view.show_error("姿态检测器初始化失败", str(e))
            return

        if self._state.video_path:
            self._cap = cv2.VideoCapture(self._state.video_path)
        else:
            self._cap = cv2.VideoCapture(0)
            self._cap.set(cv2.CAP_PROP_FRAME_WIDTH, CAPTURE_WIDTH)
            self._cap.set(cv2.CAP_PROP_FRAME_HEIGHT, CAPTURE_HEIGHT)

        if self._cap is None or not self._cap.isOpened():
            logger.error("无法打开输入源: %s", self._state.video_path or "camera 0")
            self._cap = None
            self._view.set_result(CAMERA_DENIED_RESULT)
            self._view.show_error("打开失败", "无法打开摄像头/视频")
            return

        driver.reset()
        self._view.set_result(driver.latest)
        self._state.running = True
        self._timer.start()
        logger.info("开始分析: %s", self._state.video_path or "camera 0")
        self._view.set_status("正在分析姿态…", 2000)

    def stop(self, notify: bool = True) -> None:
        """停止分析：取消驱动、停计时器、释放输入源。

        输入: notify 是否把 “Camera stopped” 推送给视图。
        输出: 无。
        """
        was_running = self._state.running
        self._state.running = False
        if self._driver is not None:
            self._driver.cancel()
        if self._timer.isActive():
            self._timer.stop()

        if self._cap is not None:
            self._cap.release()
            self._cap = None

        if was_running:
            logger.info("分析已停止")
        if notify:
            self._view.set_result(STOPPED_RESULT)

    def _on_tick(self) -> None:
        """主循环处理：读帧、推理+分析、叠加骨架、更新视图。"""
        if not self._state.running or self._cap is None or self._driver is None:
            return

        ok, frame = self._cap.read()
        if not ok:
            self.stop()
            self._view.set_status("输入结束/读取失败，已停止", 5000)
            return

        result = self._driver.step(frame)
        if result is not None:
            self._view.set_result(result)

        shown = draw_pose(frame, self._driver.last_keypoints)
        if self._state.mirror:
            shown = cv2.flip(shown, 1)
        self._view.set_camera_pixmap(_bgr_to_qpixmap(shown, PREVIEW_MAX_W, PREVIEW_MAX_H))

    def close(self) -> None:
        """关闭控制器：停止流程、释放检测器。应在窗口关闭时调用。"""
        self.stop(notify=False)
        if self._detector is not None:
            self._detector.close()
            self._detector = None
        self._driver = None
