"""Tmux 会话管理 - 列出、创建、切换会话"""

import subprocess
import logging
from typing import List, Sequence

from .backend import SessionBackend
from .errors import TmuxCommandError
from .models import WindowSpec

logger = logging.getLogger(__name__)


def exact(session: str) -> str:
    """精确匹配会话名的 target（避免 tmux 前缀匹配）"""
    return f"={session}"


class TmuxController(SessionBackend):
    """Tmux 控制器

    查询类命令失败时返回空结果；修改类命令失败时抛出 TmuxCommandError。
    """

    def _run(self, *args, timeout: float = 2.0) -> subprocess.CompletedProcess:
        """执行 tmux 命令"""
        cmd = ['tmux'] + list(args)
        try:
            return subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)
        except subprocess.TimeoutExpired:
            return subprocess.CompletedProcess(cmd, 1, '', 'timeout')
        except FileNotFoundError:
            return subprocess.CompletedProcess(cmd, 127, '', 'tmux not found')

    def _check(self, *args, timeout: float = 5.0) -> subprocess.CompletedProcess:
        """执行 tmux 命令，失败时抛出异常"""
        result = self._run(*args, timeout=timeout)
        if result.returncode != 0:
            logger.error(f"[tmux] {' '.join(args)} 失败: {result.stderr.strip()}")
            raise TmuxCommandError(args, result.returncode, result.stderr or '')
        return result

    def is_available(self) -> bool:
        """检查 tmux 是否可用"""
        return self._run('-V').returncode == 0

    # ========== 查询 ==========

    def list_sessions(self) -> List[str]:
        """列出所有会话名（服务未运行时为空）"""
        result = self._run('list-sessions', '-F', '#{session_name}')
        if result.returncode != 0:
            logger.debug(f"[tmux] list-sessions 无结果: {result.stderr.strip()}")
            return []
        return [line for line in result.stdout.splitlines() if line]

    def session_exists(self, name: str) -> bool:
        """检查指定会话是否存在"""
        return self._run('has-session', '-t', exact(name)).returncode == 0

    def list_windows(self, session: str) -> List[str]:
        """列出会话的 window（index: name (active)）"""
        result = self._run(
            'list-windows', '-t', exact(session),
            '-F', '#{window_index}: #{window_name} #{?window_active,(active),}'
        )
        if result.returncode != 0:
            return []
        return [line.rstrip() for line in result.stdout.splitlines() if line]

    def capture_pane(self, session: str, lines: int = 10) -> str:
        """获取会话当前 pane 最后几行内容"""
        result = self._run('capture-pane', '-p', '-t', exact(session), '-S', f'-{lines}')
        if result.returncode != 0:
            return ''
        return result.stdout

    # ========== 会话操作 ==========

    def create_session(self, name: str, cwd: str, windows: Sequence[WindowSpec]) -> None:
        """创建会话并依次打开 window

        第一个 window 随 new-session 创建，其余用 new-window 追加到末尾。
        有命令的 window 通过 send-keys 启动，保证命令退出后 shell 仍在。
        """
        if not windows:
            raise ValueError("至少需要一个 window")

        first, rest = windows[0], windows[1:]
        logger.info(f"[tmux] 创建会话 {name} @ {cwd}，window: {[w.label for w in windows]}")

        self._check('new-session', '-d', '-s', name, '-c', cwd, '-n', first.label)
        self._send_command(name, first)

        for window in rest:
            self._check('new-window', '-t', f"{exact(name)}:", '-c', cwd, '-n', window.label)
            self._send_command(name, window)

    def _send_command(self, session: str, window: WindowSpec) -> None:
        if not window.command:
            return
        self._check('send-keys', '-t', f"{exact(session)}:{window.label}", window.command, 'Enter')

    def select_window(self, session: str, label: str) -> None:
        """选中 window"""
        self._check('select-window', '-t', f"{exact(session)}:{label}")

    def attach(self, name: str) -> None:
        """attach 到会话（继承当前终端，阻塞直到 detach）"""
        cmd = ['tmux', 'attach-session', '-t', exact(name)]
        logger.info(f"[tmux] attach: {name}")
        try:
            result = subprocess.run(cmd)
        except FileNotFoundError:
            raise TmuxCommandError(cmd[1:], 127, 'tmux not found')
        if result.returncode != 0:
            raise TmuxCommandError(cmd[1:], result.returncode)

    def switch_to(self, name: str) -> None:
        """切换当前客户端到会话"""
        logger.info(f"[tmux] switch-client: {name}")
        self._check('switch-client', '-t', exact(name))


def check_tmux() -> tuple[bool, str]:
    """检查 tmux 是否可用"""
    try:
        result = subprocess.run(['tmux', '-V'], capture_output=True, text=True)
        if result.returncode == 0:
            return True, result.stdout.strip()
        return False, "tmux 命令执行失败"
    except FileNotFoundError:
        return False, "未找到 tmux，请安装: sudo apt install tmux"
