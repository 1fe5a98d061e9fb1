import math
from typing import Optional, Sequence, Tuple

from logdeck.core import ViewLine, DisplayRow, Frame

class ViewportState:
    """视口状态"""
    IDLE = "idle"            # 没有活动日志
    FILTERED = "filtered"    # 可见行刚刚重新计算，滚动位置为 0
    SCROLLED = "scrolled"    # 同一组可见行，滚动位置 > 0

class ViewportRenderer:
    """
    虚拟滚动渲染器。
    只物化视口内的那一小段可见行，滚动的开销与日志总行数无关。

    行高固定为 ``row_height``；第 i 行绝对定位在 ``i * row_height``，
    ``content_height`` (总行数 * 行高) 用来撑开滚动条。
    """
    def __init__(self, row_height: int = 20, viewport_height: int = 600,
                 text_color: str = "#dddddd"):
        if row_height <= 0:
            raise ValueError(f"row_height must be positive, got {row_height}")
        if viewport_height < 0:
            raise ValueError(f"viewport_height must be >= 0, got {viewport_height}")
        self.row_height = row_height
        self.viewport_height = viewport_height
        self.text_color = text_color

        self.state = ViewportState.IDLE
        self.scroll_offset = 0
        self.materialized = 0      # 上一次渲染物化的行数
        self._lines: Sequence[ViewLine] = ()
        self._synthetic = False
        self._placeholder = None

    @property
    def visible_lines(self) -> Sequence[ViewLine]:
        return self._lines

    @property
    def content_height(self) -> int:
        return len(self._lines) * self.row_height

    @property
    def max_scroll_offset(self):
        return max(0, self.content_height - self.viewport_height)

    def visible_range(self) -> Tuple[int, int]:
        """返回需要物化的闭区间 [start, end]；没有可见行时 end < start"""
        start = math.floor(self.scroll_offset / self.row_height)
        end = min(len(self._lines) - 1,
                  math.ceil((self.scroll_offset + self.viewport_height) / self.row_height))
        return start, end

    # --- 状态转换 ---

    def load(self, lines: Sequence[ViewLine], synthetic: bool = False,
             placeholder: Optional[str] = None) -> Frame:
        """新的过滤/搜索/替换结果：滚动归零并完整重算可见区间"""
        self._lines = lines
        self._synthetic = synthetic
        self._placeholder = placeholder if not lines else None
        self.scroll_offset = 0
        self.state = ViewportState.FILTERED
        return self.render()

    def clear(self) -> Frame:
        self._lines = ()
        self._synthetic = False
        self._placeholder = None
        self.scroll_offset = 0
        self.state = ViewportState.IDLE
        return self.render()

    def scroll(self, offset, viewport_height: Optional[int] = None) -> Frame:
        """滚动事件：只重新计算窗口，不触碰可见行列表"""
        if viewport_height is not None:
            self.viewport_height = max(0, viewport_height)
        if self.state == ViewportState.IDLE:
            return self.render()

        self.scroll_offset = max(0, min(offset, self.max_scroll_offset))
        self.state = ViewportState.SCROLLED if self.scroll_offset > 0 else ViewportState.FILTERED
        return self.render()

    def resize(self, viewport_height: int) -> Frame:
        self.viewport_height = max(0, viewport_height)
        if self.state != ViewportState.IDLE:
            self.scroll_offset = max(0, min(self.scroll_offset, self.max_scroll_offset))
            self.state = ViewportState.SCROLLED if self.scroll_offset > 0 else ViewportState.FILTERED
        return self.render()

    # --- 渲染 ---

    def render(self) -> Frame:
        if self.state == ViewportState.IDLE:
            self.materialized = 0
            return Frame(state=self.state)

        frame = Frame(
            state=self.state,
            scroll_offset=self.scroll_offset,
            content_height=self.content_height,
            total=len(self._lines),
            placeholder=self._placeholder
        )
        start, end = self.visible_range()
        for i in range(start, end + 1):
            frame.rows.append(self._make_row(i, self._lines[i]))
        self.materialized = len(frame.rows)
        return frame

    def _make_row(self, index: int, line: ViewLine) -> DisplayRow:
        if self._synthetic:
            text = f"[{line.source_name}] {line.text}"
            color = line.source_color
        else:
            text = line.text
            color = self.text_color
        return DisplayRow(
            index=index,
            top=index * self.row_height,
            height=self.row_height,
            line_number=line.original_index + 1,
            text=text,
            color=color
        )
