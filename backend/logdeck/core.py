
from typing import List, Optional, Tuple
from dataclasses import dataclass, field
from .ui import Component

# ============================================================
# 数据模型
# ============================================================

@dataclass
class LogSource:
    """一个已导入的日志 (或合成的 Query 结果)"""
    name: str
    color: str
    lines: Tuple[str, ...] = ()
    is_synthetic: bool = False

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "color": self.color,
            "lineCount": len(self.lines),
            "isSynthetic": self.is_synthetic
        }

@dataclass(frozen=True)
class ViewLine:
    """过滤后的可见行，保留它在源日志中的原始位置"""
    text: str
    original_index: int
    source_name: str
    source_color: str

@dataclass(frozen=True)
class DisplayRow:
    """视口中实际物化的一行"""
    index: int          # 在 visible_lines 中的位置
    top: int            # 绝对定位: index * row_height
    height: int
    line_number: int    # original_index + 1
    text: str
    color: str

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "top": self.top,
            "height": self.height,
            "lineNumber": self.line_number,
            "text": self.text,
            "color": self.color
        }

@dataclass
class Frame:
    """一次渲染的结果"""
    state: str
    scroll_offset: int = 0
    content_height: int = 0   # 撑开滚动条的占位高度
    total: int = 0
    rows: List[DisplayRow] = field(default_factory=list)
    placeholder: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "state": self.state,
            "scrollOffset": self.scroll_offset,
            "contentHeight": self.content_height,
            "total": self.total,
            "rows": [r.to_dict() for r in self.rows],
            "placeholder": self.placeholder
        }

@dataclass(frozen=True)
class ExportPayload:
    file_name: str
    data: bytes

# ============================================================
# 图层 (Layer)
# ============================================================

class LayerCategory:
    """图层分类"""
    FILTERING = "filtering"      # 过滤层: 决定可见性 (只读内容)
    TRANSFORM = "transform"      # 转换层: 修改内容 (如替换)

class FilterLayer(Component):
    """
    过滤图层基类。
    职责：决定一行日志是否应该被保留。
    """
    category = LayerCategory.FILTERING
    icon = "filter"

    def is_active(self) -> bool:
        """未激活的图层等于 "全部匹配"，过滤引擎会跳过它"""
        return True

    def filter_line(self, content: str, index: int = -1) -> bool:
        """返回 True: 保留; 返回 False: 丢弃"""
        return True

class TransformLayer(Component):
    """
    转换图层基类。
    职责：修改日志内容，不改变行数。
    """
    category = LayerCategory.TRANSFORM
    icon = "replace"

    def process_line(self, content: str) -> str:
        return content
