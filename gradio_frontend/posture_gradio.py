from __future__ import annotations

import logging
import os
from typing import Optional

import gradio as gr
from gradio import themes

from gradio_frontend.mvc.controller import PostureWebController
from gradio_frontend.mvc.model import TEMP_DIR, format_result
from posture_core.driver import IDLE_RESULT

os.makedirs(TEMP_DIR, exist_ok=True)
os.environ.setdefault("GRADIO_TEMP_DIR", TEMP_DIR)

PAGE_CSS = """
:root { --color-background-secondary: #ffffff; }
.gradio-container { background: #ffffff; }
"""


def build_ui() -> gr.Blocks:
    controller = PostureWebController()
    with gr.Blocks(title="AI Posture Corrector") as demo:
        gr.Markdown(
            """
            ## AI Posture Corrector
            实时姿态分析：上传坐姿视频，或启用摄像头，点击『开始分析』。
            """
        )

        with gr.Row():
            with gr.Column(scale=1):
                eval_video = gr.Video(label="待分析视频", interactive=True, height=280)
                webcam_toggle = gr.Checkbox(label="启用摄像头", value=False)
                with gr.Row():
                    start_btn = gr.Button("开始分析", variant="primary")
                    stop_btn = gr.Button("停止", variant="secondary")
                    clear_btn = gr.Button("清空")
                status_text = gr.Textbox(
                    label="姿态评分（实时）",
                    value=format_result(IDLE_RESULT),
                    interactive=False,
                    lines=5,
                )
            with gr.Column(scale=1):
                preview = gr.Image(label="实时画面预览", interactive=False)

        def on_toggle_webcam(enabled: bool):
            # 启用摄像头时禁用并清空视频输入
            if enabled:
                return gr.update(interactive=False, value=None)
            return gr.update(interactive=True)

        webcam_toggle.change(fn=on_toggle_webcam, inputs=[webcam_toggle], outputs=[eval_video])

        def on_start(eval_file: Optional[str], use_webcam: bool):
            if not use_webcam and not eval_file:
                yield "请上传视频或启用摄像头后再开始。", None
                return
            for txt, frame in controller.start_analysis(eval_file, use_webcam):
                yield txt, frame

        start_btn.click(fn=on_start, inputs=[eval_video, webcam_toggle], outputs=[status_text, preview])

        def on_stop():
            controller.stop()
            return "已请求停止（摄像头模式将在下一帧停止）"

        stop_btn.click(fn=on_stop, inputs=[], outputs=[status_text])

        def on_clear():
            controller.stop()
            return None, False, format_result(IDLE_RESULT), None

        clear_btn.click(fn=on_clear, inputs=[], outputs=[eval_video, webcam_toggle, status_text, preview])

    return demo


def launch(server_name: str | None = None, server_port: int | None = None):
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    demo = build_ui()
    demo.launch(
        server_name=server_name,
        server_port=server_port,
        theme=themes.Soft(primary_hue="blue", neutral_hue="slate"),
        css=PAGE_CSS,
    )


if __name__ == "__main__":
    launch("localhost", 10621)
