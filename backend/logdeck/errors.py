"""
反馈给前端的校验失败。

这些都不是程序故障，只表示用户需要调整输入后重试。
所有操作都在修改任何状态之前抛出。
"""


class LogDeckError(Exception):
    """校验错误基类：``code`` 供前端区分类型，``message`` 直接展示给用户"""
    code = "error"
    default_message = "Operation failed"

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class FileTypeUnsupported(LogDeckError):
    code = "file_type_unsupported"
    default_message = "Only .log and .txt files are supported!"


class DuplicateSource(LogDeckError):
    code = "duplicate_source"
    default_message = "File is already imported!"


class NoActiveSource(LogDeckError):
    code = "no_active_source"
    default_message = "Please first select a log file!"


class EmptySearchTerm(LogDeckError):
    code = "empty_search_term"
    default_message = "Please enter a word!"


class NoSourceSelected(LogDeckError):
    code = "no_source_selected"
    default_message = "The log file which will be replaced is not selected!"


class NoSourceChecked(LogDeckError):
    code = "no_source_checked"
    default_message = "Please check at least one log file!"


class NoVisibleContent(LogDeckError):
    code = "no_visible_content"
    default_message = "No content to export!"
