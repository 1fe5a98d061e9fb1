import logging
from collections import OrderedDict
from typing import Sequence

from logdeck.builtin.replace import LiteralReplaceLayer
from logdeck.errors import EmptySearchTerm, NoSourceSelected
from logdeck.store import LogStore

logger = logging.getLogger(__name__)

class ReplaceResult:
    """每个日志的替换次数，按处理顺序排列"""

    def __init__(self):
        self.counts = OrderedDict()  # 日志名 -> 替换次数

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    @property
    def sources(self):
        return list(self.counts.keys())

    def to_dict(self) -> dict:
        return {"total": self.total, "sources": dict(self.counts)}

def replace_all(store: LogStore, find_text: str, replace_text: str,
                targets: Sequence[str]) -> ReplaceResult:
    """
    改写每个目标日志的所有行，把 ``find_text`` 的字面匹配全部替换。
    合成源与未知名称会被跳过。
    行数保持不变，已有的 ``original_index`` 依然有效。
    """
    if not find_text:
        raise EmptySearchTerm("Please enter the word will be searched!")
    sources = store.resolve_real(targets)
    if not sources:
        raise NoSourceSelected()

    layer = LiteralReplaceLayer({"find": find_text, "replace": replace_text or ""})
    result = ReplaceResult()
    # 按选择顺序逐个日志处理，不做跨日志事务
    for source in sources:
        count = 0
        rewritten = []
        for line in source.lines:
            count += layer.count(line)
            rewritten.append(layer.process_line(line))
        store.rewrite(source.name, rewritten)
        result.counts[source.name] = count

    logger.info("[Replace] '%s' -> '%s': %d occurrences in %s",
                find_text, replace_text, result.total, ", ".join(result.sources))
    return result
