
class Input:
    """
    配置输入项基类。
    描述一个可配置选项：前端据此渲染表单控件，后端据此绑定默认值。
    """
    def __init__(self, name, display_name, value=None, info=None, **kwargs):
        self.name = name                 # 在 config 中的 key
        self.display_name = display_name # 前端显示的标签文本
        self.value = value               # 默认值
        self.info = info                 # 提示信息 (Tooltip)
        self.kwargs = kwargs             # 其他扩展参数 (如 min, options)

    def coerce(self, raw):
        """把 config 中的原始值转换为选项的类型"""
        return raw

    def to_dict(self):
        """序列化为字典，供前端动态渲染 UI"""
        value = self.value
        if isinstance(value, tuple):
            value = list(value)
        return {
            "name": self.name,
            "type": self.__class__.__name__.replace("Input", "").lower(),
            "display_name": self.display_name,
            "value": value,
            "info": self.info,
            **self.kwargs
        }

class StrInput(Input): pass

class IntInput(Input):
    def __init__(self, name, display_name, value=0, min=None, info=None):
        super().__init__(name, display_name, value, info, min=min)

    def coerce(self, raw):
        value = int(raw)
        minimum = self.kwargs.get("min")
        if minimum is not None and value < minimum:
            raise ValueError(f"{self.name} must be >= {minimum}, got {value}")
        return value

class BoolInput(Input):
    def coerce(self, raw):
        if isinstance(raw, str):
            return raw.strip().lower() in ("1", "true", "yes", "on")
        return bool(raw)

class ColorInput(Input): pass

class ListInput(Input):
    """有序字符串列表 (如调色板、扩展名)"""
    def __init__(self, name, display_name, value=(), allow_empty=False, info=None):
        super().__init__(name, display_name, tuple(value), info, allowEmpty=allow_empty)

    def coerce(self, raw):
        if isinstance(raw, str):
            raw = [part.strip() for part in raw.split(",") if part.strip()]
        value = tuple(str(v) for v in raw)
        if not value and not self.kwargs.get("allowEmpty"):
            raise ValueError(f"{self.name} must not be empty")
        return value

class SearchInput(Input):
    """搜索查询输入项。只支持字面子串匹配，大小写不敏感。"""
    def __init__(self, name, display_name, value="", info=None):
        super().__init__(name, display_name, value, info, caseSensitive=False)

class Component:
    """
    组件基类。
    图层与设置都继承自此类，实现了配置项与前端 UI 的自动映射。
    """
    display_name = "Base Component"
    description = ""
    inputs = []

    def __init__(self, config=None):
        self.config = config or {}
        # 自动将 config 中的值绑定到实例属性上，方便通过 self.xxx 访问
        for inp in self.inputs:
            if inp.name in self.config:
                setattr(self, inp.name, inp.coerce(self.config[inp.name]))
            else:
                setattr(self, inp.name, inp.value)

    @classmethod
    def get_ui_schema(cls):
        """返回该组件的 UI 描述架构"""
        return [inp.to_dict() for inp in cls.inputs]
