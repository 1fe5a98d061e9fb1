from logdeck.ui import SearchInput
from logdeck.core import FilterLayer

class SubstringFilter(FilterLayer):
    """过滤图层：大小写不敏感的字面子串匹配"""
    display_name = "Search"
    description = "Keep lines containing the text (case-insensitive)"
    icon = "filter"

    inputs = [
        SearchInput("query", "Search", info="Literal text, not a regular expression")
    ]

    def __init__(self, config=None):
        super().__init__(config)
        self._needle = (self.query or "").lower()

    def is_active(self) -> bool:
        return bool(self._needle)

    def filter_line(self, content: str, index: int = -1) -> bool:
        if not self._needle:
            return True
        return self._needle in content.lower()
