from logdeck.ui import Component, IntInput, ListInput, ColorInput, StrInput

DEFAULT_PALETTE = (
    "#4caf50", "#2196f3", "#ff9800", "#e91e63",
    "#9c27b0", "#00bcd4", "#ffc107", "#8bc34a",
)

class ViewerSettings(Component):
    """
    查看器设置。
    与图层一样通过 inputs 声明，未提供的项使用默认值。
    """
    display_name = "Viewer Settings"
    description = "Layout, palette and import rules"

    inputs = [
        IntInput("row_height", "Row height (px)", value=20, min=1),
        IntInput("viewport_height", "Viewport height (px)", value=600, min=0),
        ListInput("palette", "Source colors", value=DEFAULT_PALETTE),
        ColorInput("query_color", "Query tab color", value="#ffffff"),
        ColorInput("text_color", "Plain text color", value="#dddddd"),
        StrInput("error_keyword", "Errors-only keyword", value="error"),
        ListInput("extensions", "Accepted extensions", value=(".log", ".txt")),
        StrInput("synthetic_name", "Query tab name", value="Query"),
        StrInput("empty_query_message", "Empty query message", value="No result found."),
    ]

    def __init__(self, config=None):
        super().__init__(config)
        if not self.error_keyword:
            raise ValueError("error_keyword must not be empty")
        if not self.synthetic_name:
            raise ValueError("synthetic_name must not be empty")
        self.extensions = tuple(ext.lower() if ext.startswith(".") else f".{ext.lower()}"
                                for ext in self.extensions)

    def accepts(self, file_name: str) -> bool:
        return file_name.lower().endswith(self.extensions)

    def to_dict(self) -> dict:
        result = {}
        for inp in self.inputs:
            value = getattr(self, inp.name)
            result[inp.name] = list(value) if isinstance(value, tuple) else value
        return result
