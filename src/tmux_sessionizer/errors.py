"""异常定义

所有可预期的失败都继承 SessionizerError，由入口统一转换为退出码 1。
"""

from typing import Optional, Sequence


class SessionizerError(Exception):
    """可报告给用户的失败"""
    exit_code = 1


class EnvironmentCheckError(SessionizerError):
    """启动检查失败：缺少外部命令或项目目录"""


class DecodeError(SessionizerError):
    """选择器返回的行无法解析"""


class StaleSessionError(SessionizerError):
    """选中的会话在列出之后已被关闭"""

    def __init__(self, session_name: str):
        super().__init__(f"会话 '{session_name}' 已不存在，且它不是一个项目")
        self.session_name = session_name


class InvalidProjectPathError(SessionizerError):
    """选中项目的目录已不存在或不是目录"""

    def __init__(self, session_name: str, path: Optional[str]):
        super().__init__(f"项目 '{session_name}' 的路径 '{path}' 无效或不存在")
        self.session_name = session_name
        self.path = path


class TmuxCommandError(SessionizerError):
    """tmux 命令执行失败"""

    def __init__(self, args: Sequence[str], returncode: int, stderr: str = ""):
        detail = stderr.strip() or f"退出码 {returncode}"
        super().__init__(f"tmux {' '.join(args)} 失败: {detail}")
        self.args_list = list(args)
        self.returncode = returncode
        self.stderr = stderr


class PickerError(SessionizerError):
    """选择器异常退出"""
