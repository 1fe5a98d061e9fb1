from logdeck.ui import SearchInput, StrInput
from logdeck.core import TransformLayer

class LiteralReplaceLayer(TransformLayer):
    display_name = "Replace"
    description = "Replace every occurrence of a literal text"
    icon = "transform"

    inputs = [
        SearchInput("find", "Find", info="Literal text, case-sensitive"),
        StrInput("replace", "Replace with", value="", info="Empty deletes the match"),
    ]

    def count(self, content: str) -> int:
        if not self.find:
            return 0
        return content.count(self.find)

    def process_line(self, content: str) -> str:
        if not self.find:
            return content
        # str.replace 本身就是从左到右、不重叠的字面替换
        return content.replace(self.find, self.replace or "")
