from __future__ import annotations

import logging
import time
from typing import Generator, Iterator, Optional

import cv2
import numpy as np

from .model import annotate_frame, format_result, save_uploaded

from posture_core.analyzer import PostureAnalyzer
from posture_core.config import PostureConfig
from posture_core.driver import CAMERA_DENIED_RESULT, STOPPED_RESULT, AnalysisDriver
from posture_core.pose_detector import PoseDetector, PoseDetectorConfig

logger = logging.getLogger(__name__)

# 摄像头暂时不可读时的重试间隔（秒）
WEBCAM_RETRY_S = 0.02
# 单帧最长节流睡眠，保持交互流畅
MAX_FRAME_SLEEP_S = 0.05
# 文件模式下上传文件复制/打开失败的提示
MSG_FILE_OPEN_FAILED = "无法打开视频文件，请重新上传"


class PostureWebController:
    """业务控制器，负责输入源组织与逐帧分析调度。"""

    def __init__(self, config: Optional[PostureConfig] = None) -> None:
        self.analyzer = PostureAnalyzer(config)
        # 当前会话的驱动（stop() 通过它取消）
        self._driver: Optional[AnalysisDriver] = None
        self.last_proc_fps: Optional[float] = None

    def stop(self) -> None:
        """请求停止当前分析（摄像头模式将在下一帧停止）。"""
        if self._driver is not None:
            self._driver.cancel()

    @staticmethod
    def _open_failed_text(use_webcam: bool) -> str:
        if use_webcam:
            return format_result(CAMERA_DENIED_RESULT)
        return MSG_FILE_OPEN_FAILED

    def _iter_frames(self, cap: cv2.VideoCapture, use_webcam: bool) -> Iterator[np.ndarray]:
        while True:
            if self._driver is not None and self._driver.cancelled:
                return
            ok, frame = cap.read()
            if not ok:
                # 摄像头模式下继续尝试读取
                if use_webcam:
                    time.sleep(WEBCAM_RETRY_S)
                    continue
                return
            yield frame

    def start_analysis(self, eval_file: Optional[str], use_webcam: bool = False) -> Generator[tuple, None, None]:
        """逐帧分析视频文件或摄像头画面。

        输入: eval_file 上传的视频路径；use_webcam 为 True 时忽略文件，使用摄像头 0。
        输出: 生成器，每帧产出 (状态文本, RGB 标注图像)。
        作用: 摄像头模式持续运行直至 stop() 被调用；文件模式读完后输出最终结果。
        """
        source = 0 if use_webcam else save_uploaded(eval_file, "eval")
        if source is None:
            yield (self._open_failed_text(use_webcam), None)
            return

        try:
            pd = PoseDetector(PoseDetectorConfig())
        except Exception as e:
            logger.exception("姿态检测器初始化失败")
            yield (f"姿态检测器初始化失败: {e}", None)
            return

        driver = AnalysisDriver(pd, self.analyzer)
        self._driver = driver
        cap = cv2.VideoCapture(source)
        if not cap.isOpened():
            cap.release()
            pd.close()
            yield (self._open_failed_text(use_webcam), None)
            return

        src_fps = float(cap.get(cv2.CAP_PROP_FPS) or 0.0)
        t0 = time.time()
        frames_done = 0
        last_ann = None
        logger.info("开始分析: %s", "camera 0" if use_webcam else source)
        try:
            for frame in self._iter_frames(cap, use_webcam):
                driver.step(frame)
                if driver.cancelled:
                    break
                last_ann = annotate_frame(frame, driver.last_keypoints, driver.latest)
                frames_done += 1
                elapsed = time.time() - t0
                proc_fps = frames_done / elapsed if elapsed > 0 else 0.0
                self.last_proc_fps = proc_fps
                yield (format_result(driver.latest, proc_fps), last_ann)
                # 节流：尽量与源播放速度一致
                target_fps = src_fps if src_fps > 0 else proc_fps
                if target_fps > 0:
                    time.sleep(min(1.0 / target_fps, MAX_FRAME_SLEEP_S))
        finally:
            cap.release()
            pd.close()
            logger.info("分析结束: 共 %d 帧", frames_done)

        if driver.cancelled:
            yield (format_result(STOPPED_RESULT), last_ann)
        elif not use_webcam:
            yield (f"处理结束，共 {frames_done} 帧\n" + format_result(driver.latest), last_ann)
