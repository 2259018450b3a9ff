"""会话名规范化"""

import re

# tmux 会话名中不允许出现的字符
_FORBIDDEN = re.compile(r'[.:]')


def sanitize(raw: str) -> str:
    """把目录名转换成合法的 tmux 会话名（'.' 和 ':' 替换为 '_'）"""
    return _FORBIDDEN.sub('_', raw)
