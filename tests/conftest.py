"""测试用的假 tmux 后端与选择器"""

from typing import Optional, Sequence

import pytest

from tmux_sessionizer.backend import SessionBackend
from tmux_sessionizer.config import SessionizerConfig
from tmux_sessionizer.errors import TmuxCommandError
from tmux_sessionizer.picker import Picker


class FakeBackend(SessionBackend):
    """内存中的 tmux，记录所有调用"""

    def __init__(self, sessions: Sequence[str] = (), available: bool = True):
        self.sessions: dict[str, list[str]] = {name: [] for name in sessions}
        self.available = available
        self.calls: list[tuple] = []
        self.selected: dict[str, str] = {}
        self.fail_on_window: Optional[str] = None

    def is_available(self) -> bool:
        return self.available

    def list_sessions(self) -> list[str]:
        return list(self.sessions)

    def session_exists(self, name: str) -> bool:
        return name in self.sessions

    def create_session(self, name, cwd, windows) -> None:
        if name in self.sessions:
            raise TmuxCommandError(['new-session', '-s', name], 1, 'duplicate session')
        self.sessions[name] = []
        for window in windows:
            if window.label == self.fail_on_window:
                raise TmuxCommandError(['new-window', '-n', window.label], 1, 'boom')
            self.sessions[name].append(window.label)
            self.calls.append(('window', name, cwd, window.label, window.command))
        self.calls.append(('create', name, cwd))

    def select_window(self, session, label) -> None:
        self.selected[session] = label
        self.calls.append(('select', session, label))

    def attach(self, name) -> None:
        self.calls.append(('attach', name))

    def switch_to(self, name) -> None:
        self.calls.append(('switch', name))

    def kill(self, name) -> None:
        del self.sessions[name]


class FakePicker(Picker):
    """按脚本返回结果的选择器"""

    def __init__(self, choose=None):
        # choose: None 表示取消；str 表示直接返回；callable(lines, query) 自定义
        self.choose = choose
        self.seen_lines: Optional[list[str]] = None
        self.seen_query: Optional[str] = None

    @property
    def name(self) -> str:
        return "fake"

    def pick_one(self, lines, initial_query=""):
        self.seen_lines = list(lines)
        self.seen_query = initial_query
        if callable(self.choose):
            return self.choose(self.seen_lines, initial_query)
        return self.choose


def make_repo(base, *parts):
    """在 base 下创建 <parts>/.git，返回项目目录"""
    project = base.joinpath(*parts)
    (project / '.git').mkdir(parents=True)
    return project


@pytest.fixture
def projects_dir(tmp_path):
    path = tmp_path / 'Projects'
    path.mkdir()
    return path


@pytest.fixture
def config(projects_dir):
    return SessionizerConfig(projects_dir=projects_dir)
