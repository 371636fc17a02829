"""
logging_setup.py
======================

loguru のシンク設定。

Streamlit はスクリプトを何度も再実行するため、
同じレベルで呼ばれた場合はシンクを張り直さない。
"""

from __future__ import annotations

import sys
from typing import Optional

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)

_configured_level: Optional[str] = None


def configure_logging(level: str = "INFO") -> None:
    """デフォルトのシンクを外し、stderr に指定レベルで出力する。"""
    global _configured_level

    level = level.upper()
    if _configured_level == level:
        return

    logger.remove()
    logger.add(sys.stderr, level=level, format=LOG_FORMAT)
    _configured_level = level
