from __future__ import annotations

from typing import Iterable


class PostureAnalysisError(RuntimeError):
    pass


class MissingLandmarksError(PostureAnalysisError):
    """必需关键点不在关键点集合中。"""

    def __init__(self, names: Iterable[str]):
        self.names = tuple(names)
        super().__init__(f"缺少关键点: {', '.join(self.names)}")


class LowConfidenceError(PostureAnalysisError):
    """必需关键点存在，但置信度低于阈值（或坐标无效）。"""

    def __init__(self, names: Iterable[str], threshold: float):
        self.names = tuple(names)
        self.threshold = threshold
        super().__init__(f"关键点置信度低于 {threshold}: {', '.join(self.names)}")


class DegenerateGeometryError(PostureAnalysisError):
    pass
