"""会话后端抽象接口

定义核心流程需要的终端复用器能力，真实实现见 tmux_control.TmuxController，
测试中使用内存里的假实现。
"""

from abc import ABC, abstractmethod
from typing import List, Sequence

from .models import WindowSpec


class SessionBackend(ABC):
    """终端复用器能力接口"""

    @abstractmethod
    def is_available(self) -> bool:
        """检查终端复用器是否可用"""
        pass

    @abstractmethod
    def list_sessions(self) -> List[str]:
        """列出当前存活的会话名

        Returns:
            会话名列表；服务未运行时返回空列表
        """
        pass

    @abstractmethod
    def session_exists(self, name: str) -> bool:
        """检查会话是否存在（精确匹配）"""
        pass

    @abstractmethod
    def create_session(self, name: str, cwd: str, windows: Sequence[WindowSpec]) -> None:
        """按顺序创建带多个 window 的后台会话

        Args:
            name: 会话名
            cwd: 所有 window 的工作目录
            windows: window 列表，第一个随会话一起创建

        Raises:
            TmuxCommandError: 任一步骤失败（已创建的部分不回滚）
        """
        pass

    @abstractmethod
    def select_window(self, session: str, label: str) -> None:
        """选中会话中的 window"""
        pass

    @abstractmethod
    def attach(self, name: str) -> None:
        """在当前终端 attach 到会话"""
        pass

    @abstractmethod
    def switch_to(self, name: str) -> None:
        """在已有 tmux 客户端内切换到会话"""
        pass
