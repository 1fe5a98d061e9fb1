from logdeck.ui import BoolInput, StrInput
from logdeck.core import FilterLayer

class ErrorOnlyFilter(FilterLayer):
    """等级图层：只保留包含错误关键字的行"""
    display_name = "Errors only"
    description = "Keep lines mentioning the error keyword"
    icon = "level"

    inputs = [
        BoolInput("enabled", "Errors only", value=False),
        StrInput("keyword", "Keyword", value="error"),
    ]

    def __init__(self, config=None):
        super().__init__(config)
        self._keyword = (self.keyword or "error").lower()

    def is_active(self) -> bool:
        return bool(self.enabled)

    def filter_line(self, content: str, index: int = -1) -> bool:
        if not self.enabled:
            return True
        return self._keyword in content.lower()
