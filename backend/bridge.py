import json
import base64
import logging
from pathlib import Path

from PyQt6.QtCore import QObject, pyqtSlot, pyqtSignal

from logdeck.errors import LogDeckError
from logdeck.settings import ViewerSettings
from logdeck.storage import StorageRegistry
from logdeck.workspace import Workspace

logger = logging.getLogger(__name__)

class LogBridge(QObject):
    """
    前端桥接层：把界面上的离散操作映射到工作区的核心操作。
    可通过 QWebChannel 暴露给前端；所有返回值都是 JSON 字符串或 bool。
    校验失败不会抛到前端，而是通过 operationError 信号报告。
    """

    sourceImported = pyqtSignal(str, str)          # (name, JSON_payload)
    sourceClosed = pyqtSignal(str)                 # name
    viewChanged = pyqtSignal(str)                  # JSON frame
    replaceFinished = pyqtSignal(str)              # JSON {total, sources}
    operationError = pyqtSignal(str, str, str)     # (opName, code, message)

    def __init__(self, settings=None):
        super().__init__()
        if isinstance(settings, dict):
            settings = ViewerSettings(settings)
        self._workspace = Workspace(settings)
        self._storage = StorageRegistry()
        self._workspace.subscribe(lambda frame: self.viewChanged.emit(json.dumps(frame.to_dict())))

    @property
    def workspace(self) -> Workspace:
        return self._workspace

    @property
    def storage(self) -> StorageRegistry:
        return self._storage

    def _report(self, op: str, error: LogDeckError):
        logger.warning("[Bridge] %s rejected: %s", op, error.message)
        self.operationError.emit(op, error.code, error.message)

    # --- 导入 / 关闭 ---

    @pyqtSlot(str, str, result=bool)
    def import_text(self, file_name: str, raw_text: str) -> bool:
        """前端读取 (或拖放) 文件后把文件名与全文交给后端"""
        try:
            source = self._workspace.import_file(file_name, raw_text)
        except LogDeckError as e:
            self._report("import", e)
            return False
        self.sourceImported.emit(source.name, json.dumps(source.to_dict()))
        return True

    @pyqtSlot(str, result=bool)
    def open_file(self, uri: str) -> bool:
        """从磁盘 (或 mem://) 读取日志后导入"""
        try:
            name, text = self._storage.load(uri)
        except OSError as e:
            logger.error("[Bridge] Error opening %s: %s", uri, e)
            self.operationError.emit("import", "io_error", str(e))
            return False
        return self.import_text(name, text)

    @pyqtSlot(str)
    def close_source(self, name: str):
        if name not in self._workspace.store:
            return
        self._workspace.close(name)
        self.sourceClosed.emit(name)

    @pyqtSlot(str, result=bool)
    def activate(self, name: str) -> bool:
        try:
            self._workspace.activate(name)
            return True
        except LogDeckError as e:
            self._report("activate", e)
            return False

    @pyqtSlot(str, result=str)
    def set_checked(self, names_json: str) -> str:
        """前端报告当前勾选的日志 (JSON 数组)，返回实际生效的列表"""
        try:
            names = json.loads(names_json) if names_json else []
        except ValueError as e:
            logger.warning("[Bridge] Invalid selection payload: %s", e)
            self.operationError.emit("set_checked", "invalid_selection", str(e))
            return ""
        if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
            logger.warning("[Bridge] Invalid selection payload: %r", names)
            self.operationError.emit("set_checked", "invalid_selection", "Selection must be a JSON array of names")
            return ""
        return json.dumps(self._workspace.set_checked(names))

    # --- 搜索 / 过滤 / 替换 ---

    @pyqtSlot(str, result=bool)
    def search(self, term: str) -> bool:
        try:
            self._workspace.search(term)
            return True
        except LogDeckError as e:
            self._report("search", e)
            return False

    @pyqtSlot(bool)
    def set_error_only(self, enabled: bool):
        self._workspace.set_error_only(enabled)

    @pyqtSlot(str, result=bool)
    def mass_search(self, term: str) -> bool:
        try:
            self._workspace.mass_search(term)
            return True
        except LogDeckError as e:
            self._report("mass_search", e)
            return False

    @pyqtSlot(result=str)
    def replace_prefill(self) -> str:
        return self._workspace.replace_prefill()

    @pyqtSlot(str, str, result=bool)
    def replace_all(self, find_text: str, replace_text: str) -> bool:
        try:
            result, _ = self._workspace.replace_all(find_text, replace_text)
        except LogDeckError as e:
            self._report("replace", e)
            return False
        self.replaceFinished.emit(json.dumps(result.to_dict()))
        return True

    # --- 视口 ---

    @pyqtSlot(float, int, result=str)
    def scroll(self, offset: float, viewport_height: int) -> str:
        """
        滚动事件 (高频调用)。
        只返回视口内需要物化的行，不重新过滤。
        """
        frame = self._workspace.scroll(offset, viewport_height)
        return json.dumps(frame.to_dict())

    @pyqtSlot(int, result=str)
    def resize(self, viewport_height: int) -> str:
        return json.dumps(self._workspace.resize(viewport_height).to_dict())

    # --- 导出 ---

    @pyqtSlot(result=str)
    def export_lines(self) -> str:
        """返回 {fileName, data(base64)}；没有可见内容时返回空字符串"""
        try:
            payload = self._workspace.export()
        except LogDeckError as e:
            self._report("export", e)
            return ""
        return json.dumps({
            "fileName": payload.file_name,
            "data": base64.b64encode(payload.data).decode("ascii")
        })

    @pyqtSlot(str, result=bool)
    def save_export(self, folder_path: str) -> bool:
        """把当前可见行写入 <folder>/<active>_export.log"""
        try:
            payload = self._workspace.export()
        except LogDeckError as e:
            self._report("export", e)
            return False
        target = Path(folder_path) / payload.file_name
        try:
            target.write_bytes(payload.data)
        except OSError as e:
            logger.error("[Bridge] Error writing %s: %s", target, e)
            self.operationError.emit("export", "io_error", str(e))
            return False
        logger.info("[Bridge] Exported %d bytes to %s", len(payload.data), target)
        return True

    # --- 状态 ---

    @pyqtSlot(result=str)
    def get_state(self) -> str:
        return json.dumps(self._workspace.snapshot())

    @pyqtSlot(result=str)
    def get_frame(self) -> str:
        return json.dumps(self._workspace.frame.to_dict())

    @pyqtSlot(result=str)
    def get_settings_schema(self) -> str:
        return json.dumps({
            "schema": ViewerSettings.get_ui_schema(),
            "values": self._workspace.settings.to_dict()
        })

    @pyqtSlot()
    def shutdown(self):
        self._workspace.teardown()
