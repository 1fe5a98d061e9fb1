import os
from abc import ABC, abstractmethod

class BaseStorageProvider(ABC):
    """
    存储提供者基类。
    定义了如何读取日志文本和获取显示名称的标准接口。
    """
    scheme = "file" # 默认协议

    @abstractmethod
    def read_text(self, uri: str) -> str:
        """返回完整的日志文本"""
        pass

    @abstractmethod
    def get_name(self, uri: str) -> str:
        """从 URI 中提取显示名称"""
        pass

class LocalStorageProvider(BaseStorageProvider):
    """本地文件存储提供者 (Default)"""
    scheme = "file"

    def __init__(self, encoding="utf-8"):
        self.encoding = encoding

    def read_text(self, uri: str) -> str:
        # newline="" 保留原始的 \r\n，由 LogStore 统一切分
        with open(self._to_path(uri), "r", encoding=self.encoding, errors="replace", newline="") as f:
            return f.read()

    def get_name(self, uri: str) -> str:
        return os.path.basename(self._to_path(uri))

    def _to_path(self, uri: str) -> str:
        if uri.startswith("file://"):
            return uri[7:]
        return uri

class MemoryStorageProvider(BaseStorageProvider):
    """内存存储提供者 (用于测试和拖放的内容)"""
    scheme = "mem"

    def __init__(self):
        self._buffers = {}

    def put(self, name: str, text: str) -> str:
        self._buffers[name] = text
        return f"mem://{name}"

    def read_text(self, uri: str) -> str:
        name = self.get_name(uri)
        if name not in self._buffers:
            raise FileNotFoundError(uri)
        return self._buffers[name]

    def get_name(self, uri: str) -> str:
        return uri.split("://", 1)[-1]

class StorageRegistry:
    """存储提供者注册表"""
    def __init__(self):
        self._providers = {}
        # 默认注册
        self.register(LocalStorageProvider())
        self.register(MemoryStorageProvider())

    def register(self, provider: BaseStorageProvider):
        self._providers[provider.scheme] = provider

    def get_provider(self, uri: str) -> BaseStorageProvider:
        if "://" in uri:
            scheme = uri.split("://", 1)[0]
            return self._providers.get(scheme, self._providers["file"])
        return self._providers["file"]

    def load(self, uri: str):
        """返回 (显示名称, 文本)"""
        provider = self.get_provider(uri)
        return provider.get_name(uri), provider.read_text(uri)
