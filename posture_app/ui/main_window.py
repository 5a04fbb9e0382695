from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QPixmap
from PySide6.QtWidgets import (
    QFileDialog,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from posture_app.controller.posture_controller import PostureController
from posture_core.driver import IDLE_RESULT
from posture_core.overlay import score_band
from posture_core.types import PostureResult, Severity

SEVERITY_COLORS: dict[Severity, str] = {
    Severity.OK: "#22C55E",
    Severity.WARNING: "#F59E0B",
    Severity.CRITICAL: "#EF4444",
}


@dataclass
class UiState:
    video_path: Optional[str] = None


class MainWindow(QMainWindow):
    def __init__(self):
        """初始化主窗口并构造控制器。

        输入/输出: 无。
        作用: 设置窗口属性，创建控制器并搭建 UI 与事件绑定。
        """
        super().__init__()
        self.setWindowTitle("AI Posture Corrector（MediaPipe + PySide6）")
        self.resize(960, 760)

        self._state = UiState()
        self._controller = PostureController(self)

        self._build_ui()
        self._wire_events()
        self.set_result(IDLE_RESULT)

    def _build_ui(self) -> None:
        """构建界面控件与布局。"""
        root = QWidget(self)
        self.setCentralWidget(root)

        self.btn_start_cam = QPushButton("Start Camera")
        self.btn_load_video = QPushButton("加载视频（可选）")
        self.btn_stop = QPushButton("Stop Camera")

        self.lbl_camera = QLabel("摄像头画面预览")
        self.lbl_camera.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.lbl_camera.setMinimumSize(640, 480)

        self.lbl_score = QLabel("--")
        self.lbl_score.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.lbl_score.setStyleSheet("font-size: 48px; font-weight: bold;")

        self.lbl_message = QLabel("")
        self.lbl_message.setAlignment(Qt.AlignmentFlag.AlignCenter)

        grp_controls = QGroupBox("操作")
        controls_layout = QHBoxLayout(grp_controls)
        controls_layout.addWidget(self.btn_start_cam)
        controls_layout.addWidget(self.btn_load_video)
        controls_layout.addWidget(self.btn_stop)
        controls_layout.addStretch(1)

        grp_result = QGroupBox("Posture Score")
        result_layout = QVBoxLayout(grp_result)
        result_layout.addWidget(self.lbl_score)
        result_layout.addWidget(self.lbl_message)

        layout = QVBoxLayout(root)
        layout.addWidget(grp_controls)
        layout.addWidget(self.lbl_camera, 1)
        layout.addWidget(grp_result)

        self._status = QStatusBar(self)
        self.setStatusBar(self._status)

    def _wire_events(self) -> None:
        self.btn_start_cam.clicked.connect(self._on_start_cam)
        self.btn_load_video.clicked.connect(self._on_load_video)
        self.btn_stop.clicked.connect(self._on_stop)

    def _on_start_cam(self) -> None:
        """使用摄像头开始分析。"""
        self._state.video_path = None
        self._controller.set_video(None)
        self._controller.start()

    def _on_load_video(self) -> None:
        """选择视频文件并以其为输入开始分析。

        输入/输出: 无（通过文件对话框）。
        """
        path, _ = QFileDialog.getOpenFileName(
            self,
            "选择视频",
            "",
            "Video Files (*.mp4 *.avi *.mov *.mkv);;All Files (*)",
        )
        if not path:
            return
        self._state.video_path = path
        self._status.showMessage(f"已选择视频：{path}", 5000)
        self._controller.set_video(path)
        self._controller.start()

    def _on_stop(self) -> None:
        self._controller.stop()

    # ====== 供控制器调用（视图接口） ======

    def set_result(self, result: PostureResult) -> None:
        """显示分数与提示文本。

        输入: PostureResult。
        输出: 无。
        作用: 分数按档位着色，提示按严重程度着色。
        """
        self.lbl_score.setText(str(result.score))
        score_color = SEVERITY_COLORS[score_band(result.score)]
        self.lbl_score.setStyleSheet(f"font-size: 48px; font-weight: bold; color: {score_color};")
        self.lbl_message.setText(result.message)
        msg_color = SEVERITY_COLORS[result.severity]
        self.lbl_message.setStyleSheet(f"font-size: 20px; color: {msg_color};")

    def set_camera_pixmap(self, pixmap: QPixmap) -> None:
        """更新摄像头/视频预览图片。输入: QPixmap。输出: 无。"""
        self.lbl_camera.setPixmap(pixmap)

    def show_error(self, title: str, message: str) -> None:
        """弹出错误消息框。输入: 标题与内容。输出: 无。"""
        QMessageBox.critical(self, title, message)

    def set_status(self, message: str, timeout_ms: int = 3000) -> None:
        """更新状态栏消息。输入: 文本与超时毫秒。输出: 无。"""
        self.statusBar().showMessage(message, timeout_ms)

    def closeEvent(self, event) -> None:
        """窗口关闭钩子：释放控制器资源后再关闭。"""
        try:
            self._controller.close()
        finally:
            super().closeEvent(event)
