import re
import logging
from collections import OrderedDict
from typing import List, Optional, Sequence

from logdeck.core import LogSource
from logdeck.errors import DuplicateSource
from logdeck.settings import ViewerSettings

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r?\n")

def split_lines(raw_text: str) -> tuple:
    """按 \\n 或 \\r\\n 切分；空字符串得到零行"""
    if not raw_text:
        return ()
    return tuple(_LINE_BREAK.split(raw_text))

class LogStore:
    """
    日志源存储。
    独占所有 LogSource 的行数组，按导入顺序保存，并负责分配颜色。
    """
    def __init__(self, settings: Optional[ViewerSettings] = None):
        self.settings = settings or ViewerSettings()
        self._sources = OrderedDict()  # name -> LogSource
        self._insertions = 0           # 已导入的真实日志数 (关闭不回退)

    def __contains__(self, name):
        return name in self._sources

    def __len__(self):
        return len(self._sources)

    @property
    def synthetic_name(self) -> str:
        return self.settings.synthetic_name

    def import_source(self, name: str, raw_text: str) -> LogSource:
        # Query 是保留名称，不允许真实日志占用
        if name == self.synthetic_name or name in self._sources:
            raise DuplicateSource(f"{name} file is already imported!")

        palette = self.settings.palette
        color = palette[self._insertions % len(palette)]
        source = LogSource(name=name, color=color, lines=split_lines(raw_text))
        self._sources[name] = source
        self._insertions += 1
        logger.info("[Store] Imported %s: %d lines", name, source.line_count)
        return source

    def close(self, name: str) -> Optional[LogSource]:
        source = self._sources.pop(name, None)
        if source is not None:
            logger.info("[Store] Closed %s", name)
        return source

    def get(self, name: Optional[str]) -> Optional[LogSource]:
        if name is None:
            return None
        return self._sources.get(name)

    def sources(self) -> List[LogSource]:
        return list(self._sources.values())

    def names(self) -> List[str]:
        return list(self._sources.keys())

    def real_sources(self) -> List[LogSource]:
        return [s for s in self._sources.values() if not s.is_synthetic]

    def first_real_name(self) -> Optional[str]:
        for source in self._sources.values():
            if not source.is_synthetic:
                return source.name
        return None

    def resolve_real(self, names: Sequence[str]) -> List[LogSource]:
        """按给定顺序解析出真实日志，跳过未知名称、合成源和重复项"""
        seen = set()
        result = []
        for name in names:
            source = self._sources.get(name)
            if source is None or source.is_synthetic or name in seen:
                continue
            seen.add(name)
            result.append(source)
        return result

    def set_synthetic(self, lines: Sequence[str]) -> LogSource:
        """创建或覆盖唯一的合成源 (Query)"""
        source = self._sources.get(self.synthetic_name)
        if source is None:
            source = LogSource(
                name=self.synthetic_name,
                color=self.settings.query_color,
                is_synthetic=True
            )
            self._sources[self.synthetic_name] = source
        source.lines = tuple(lines)
        return source

    def rewrite(self, name: str, lines: Sequence[str]) -> LogSource:
        """替换一个真实日志的全部行。只有替换引擎会调用，行数必须保持不变。"""
        source = self._sources[name]
        lines = tuple(lines)
        if len(lines) != len(source.lines):
            raise ValueError(f"rewrite of {name} changed line count "
                             f"({len(source.lines)} -> {len(lines)})")
        source.lines = lines
        return source

    def clear(self):
        self._sources.clear()
        self._insertions = 0
