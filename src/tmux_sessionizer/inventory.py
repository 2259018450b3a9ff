"""会话清单 - 当前存活的 tmux 会话"""

import logging
from typing import List

from .backend import SessionBackend
from .models import RawCandidate

logger = logging.getLogger(__name__)


def list_active_sessions(backend: SessionBackend) -> List[RawCandidate]:
    """把存活会话转换为 active 候选记录

    会话名由 tmux 在创建时校验，这里不再规范化。
    """
    names = backend.list_sessions()
    logger.info(f"[会话] 存活会话 {len(names)} 个")
    return [RawCandidate(logical_name=name, kind='active') for name in names]
