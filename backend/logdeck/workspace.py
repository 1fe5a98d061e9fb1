import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple

from logdeck.core import LogSource, ViewLine, Frame, ExportPayload
from logdeck.errors import FileTypeUnsupported, NoActiveSource, NoVisibleContent
from logdeck.settings import ViewerSettings
from logdeck.store import LogStore
from logdeck.filtering import filter_lines
from logdeck.aggregate import mass_search, collect_matches
from logdeck.replacing import replace_all, ReplaceResult
from logdeck.viewport import ViewportRenderer

logger = logging.getLogger(__name__)

@dataclass
class ViewState:
    """当前视图状态。滚动位置由 ViewportRenderer 持有。"""
    active_source_name: Optional[str] = None
    visible_lines: List[ViewLine] = field(default_factory=list)
    error_only: bool = False
    search_term: str = ""
    checked: List[str] = field(default_factory=list)        # UI 中勾选的真实日志
    last_query_term: Optional[str] = None
    last_query_sources: List[str] = field(default_factory=list)

class Workspace:
    """
    工作区：一次运行期间的全部状态 (日志存储 + 视图状态 + 渲染器)。
    每个用户操作同步执行完毕后才处理下一个；校验失败时不修改任何状态。
    重新计算可见行的操作会通知订阅者；滚动只把新窗口返回给调用方。
    """
    def __init__(self, settings: Optional[ViewerSettings] = None):
        self.settings = settings or ViewerSettings()
        self.store = LogStore(self.settings)
        self.view = ViewState()
        self.renderer = ViewportRenderer(
            row_height=self.settings.row_height,
            viewport_height=self.settings.viewport_height,
            text_color=self.settings.text_color
        )
        self._listeners: List[Callable[[Frame], None]] = []

    def subscribe(self, callback: Callable[[Frame], None]):
        self._listeners.append(callback)

    def teardown(self):
        self._listeners.clear()
        self.store.clear()
        self.view = ViewState()
        self.renderer.clear()

    @property
    def active_source(self) -> Optional[LogSource]:
        return self.store.get(self.view.active_source_name)

    @property
    def frame(self) -> Frame:
        return self.renderer.render()

    # --- 日志管理 ---

    def import_file(self, file_name: str, raw_text: str) -> LogSource:
        if not self.settings.accepts(file_name):
            raise FileTypeUnsupported()
        source = self.store.import_source(file_name, raw_text)
        if self.view.active_source_name is None:
            self.activate(source.name)
        return source

    def close(self, name: str) -> Frame:
        source = self.store.close(name)
        if source is None:
            return self.renderer.render()
        if name in self.view.checked:
            self.view.checked.remove(name)

        active = self.view.active_source_name
        if name == active:
            fallback = self.store.first_real_name()
            if fallback is not None:
                return self.activate(fallback)
            self.view.active_source_name = None
            self.view.visible_lines = []
            self.view.search_term = ""
            return self._publish(self.renderer.clear())

        if active == self.store.synthetic_name and name in self.view.last_query_sources:
            self.view.last_query_sources.remove(name)
            return self._refresh()
        return self.renderer.render()

    def activate(self, name: str) -> Frame:
        if self.store.get(name) is None:
            raise NoActiveSource(f"{name} is not loaded")
        self.view.active_source_name = name
        self.view.search_term = ""
        return self._refresh()

    def set_checked(self, names: Sequence[str]) -> List[str]:
        self.view.checked = [s.name for s in self.store.resolve_real(names)]
        return list(self.view.checked)

    # --- 过滤 / 搜索 ---

    def search(self, term: Optional[str]) -> Frame:
        source = self.active_source
        if source is None or source.is_synthetic:
            raise NoActiveSource()
        self.view.search_term = term or ""
        return self._refresh()

    def set_error_only(self, enabled: bool) -> Frame:
        self.view.error_only = bool(enabled)
        if self.active_source is None:
            return self.renderer.render()
        return self._refresh()

    def mass_search(self, term: str, selected: Optional[Sequence[str]] = None) -> Frame:
        selected = list(self.view.checked if selected is None else selected)
        lines = mass_search(self.store, term, selected, self.view.error_only)

        self.view.last_query_term = term
        self.view.last_query_sources = [s.name for s in self.store.resolve_real(selected)]
        self.view.active_source_name = self.store.synthetic_name
        self.view.search_term = ""
        return self._show(lines, synthetic=True)

    def replace_all(self, find_text: str, replace_text: str,
                    targets: Optional[Sequence[str]] = None) -> Tuple[ReplaceResult, Frame]:
        source = self.active_source
        if source is None:
            raise NoActiveSource()
        if targets is None:
            targets = self.view.checked if source.is_synthetic else [source.name]
        result = replace_all(self.store, find_text, replace_text, targets)
        return result, self._refresh()

    def replace_prefill(self) -> str:
        """替换对话框的默认查找内容"""
        source = self.active_source
        if source is not None and source.is_synthetic:
            return self.view.last_query_term or ""
        return self.view.search_term

    # --- 视口 ---

    def scroll(self, offset, viewport_height: Optional[int] = None) -> Frame:
        return self.renderer.scroll(offset, viewport_height)

    def resize(self, viewport_height: int) -> Frame:
        return self.renderer.resize(viewport_height)

    # --- 导出 ---

    def export(self) -> ExportPayload:
        lines = self.view.visible_lines
        if not lines:
            raise NoVisibleContent()
        name = self.view.active_source_name
        file_name = f"{name}_export.log" if name else "export.log"
        data = "\n".join(line.text for line in lines).encode("utf-8")
        return ExportPayload(file_name=file_name, data=data)

    def snapshot(self) -> dict:
        return {
            "sources": [s.to_dict() for s in self.store.sources()],
            "active": self.view.active_source_name,
            "errorOnly": self.view.error_only,
            "searchTerm": self.view.search_term,
            "checked": list(self.view.checked),
            "queryTerm": self.view.last_query_term,
            "visibleCount": len(self.view.visible_lines),
            "scrollOffset": self.renderer.scroll_offset,
            "state": self.renderer.state
        }

    # --- 内部 ---

    def _refresh(self) -> Frame:
        """按当前条件重新计算活动日志的可见行"""
        source = self.active_source
        if source is None:
            self.view.visible_lines = []
            return self._publish(self.renderer.clear())

        if source.is_synthetic:
            lines = []
            if self.view.last_query_term:
                lines = collect_matches(self.store, self.view.last_query_term,
                                        self.view.last_query_sources, self.view.error_only)
            self.store.set_synthetic([line.text for line in lines])
            return self._show(lines, synthetic=True)

        lines = filter_lines(source, self.view.search_term, self.view.error_only,
                             self.settings.error_keyword)
        return self._show(lines)

    def _show(self, lines: List[ViewLine], synthetic: bool = False) -> Frame:
        self.view.visible_lines = lines
        placeholder = self.settings.empty_query_message if synthetic else None
        logger.debug("[View] %s: %d visible lines", self.view.active_source_name, len(lines))
        return self._publish(self.renderer.load(lines, synthetic=synthetic, placeholder=placeholder))

    def _publish(self, frame: Frame) -> Frame:
        for callback in list(self._listeners):
            callback(frame)
        return frame
