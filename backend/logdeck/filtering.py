from typing import List, Optional

from logdeck.core import LogSource, ViewLine, FilterLayer
from logdeck.builtin.substring import SubstringFilter
from logdeck.builtin.error_only import ErrorOnlyFilter

def build_filters(term: Optional[str] = None, error_only: bool = False,
                  keyword: str = "error") -> List[FilterLayer]:
    """按当前条件构建过滤层，未激活的层直接丢弃"""
    layers = [
        SubstringFilter({"query": term or ""}),
        ErrorOnlyFilter({"enabled": error_only, "keyword": keyword}),
    ]
    return [layer for layer in layers if layer.is_active()]

def apply_filters(source: LogSource, layers: List[FilterLayer]) -> List[ViewLine]:
    """
    对 ``source.lines`` 做一次顺序遍历。
    所有过滤层都放行的行才保留 (AND)，输出保持原日志顺序。
    """
    name, color = source.name, source.color
    if not layers:
        return [ViewLine(text, i, name, color) for i, text in enumerate(source.lines)]

    visible = []
    for i, text in enumerate(source.lines):
        if all(layer.filter_line(text, index=i) for layer in layers):
            visible.append(ViewLine(text, i, name, color))
    return visible

def filter_lines(source: LogSource, term: Optional[str] = None, error_only: bool = False,
                 keyword: str = "error") -> List[ViewLine]:
    return apply_filters(source, build_filters(term, error_only, keyword))
