"""tmux-sessionizer - tmux 会话 + 项目目录统一选择器

列表来源：
- 正在运行的 tmux 会话
- 项目目录下的 git 仓库（每个仓库是一个可新建的会话）

选中会话 = attach/切换；选中项目 = 新建会话（nvim / lazygit / shell1 / shell2）后进入。
"""

__version__ = "0.1.0"

# 数据模型
from .models import WorkspaceRecord, RawCandidate, SelectionDecision, WindowSpec

# 流水线
from .naming import sanitize
from .discovery import discover_projects, walk_for_vcs_roots
from .inventory import list_active_sessions
from .merger import merge
from .selection import encode_record, decode
from .materializer import materialize, detect_attach_mode

# tmux 会话管理
from .tmux_control import TmuxController

# 异常
from .errors import (
    SessionizerError,
    EnvironmentCheckError,
    DecodeError,
    StaleSessionError,
    InvalidProjectPathError,
    TmuxCommandError,
    PickerError,
)

__all__ = [
    # 数据模型
    "WorkspaceRecord",
    "RawCandidate",
    "SelectionDecision",
    "WindowSpec",
    # 流水线
    "sanitize",
    "discover_projects",
    "walk_for_vcs_roots",
    "list_active_sessions",
    "merge",
    "encode_record",
    "decode",
    "materialize",
    "detect_attach_mode",
    # tmux
    "TmuxController",
    # 异常
    "SessionizerError",
    "EnvironmentCheckError",
    "DecodeError",
    "StaleSessionError",
    "InvalidProjectPathError",
    "TmuxCommandError",
    "PickerError",
]
