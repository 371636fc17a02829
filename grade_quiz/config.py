"""
config.py
=========

アプリ全体で利用する設定値を一元管理する。

ルートの config.toml を読み込み、環境変数で一部を上書きする。
config.toml が無い・壊れている場合はデフォルト値で動く。

config.toml の例:

    [app]
    name = "学年別クイズ"
    log_level = "INFO"

    [data]
    question_file = "data/quiz_data.csv"

    [game]
    default_player_count = 2
    default_grade_level = "low"
    grade_levels = ["low", "high"]
    topics = ["environment", "literacy", "digital"]
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import toml
from loguru import logger


# ------------------------------------------------------------
# 基本パス定義
# ------------------------------------------------------------

ROOT_DIR = Path(__file__).resolve().parent.parent
DATA_DIR = ROOT_DIR / "data"
CONFIG_PATH = ROOT_DIR / "config.toml"

MIN_PLAYERS = 2
MAX_PLAYERS = 4


# ------------------------------------------------------------
# AppConfig
# ------------------------------------------------------------

@dataclass
class AppConfig:
    """
    アプリ設定クラス。

    - アプリ名・ログレベル
    - 問題ファイルのパス
    - プレイヤー数・学年・トピックの初期値と候補
    """

    # ---------- アプリ ----------
    app_name: str = "学年別クイズ"
    log_level: str = "INFO"

    # ---------- ファイルパス ----------
    question_file: Path = DATA_DIR / "quiz_data.csv"

    # ---------- ゲーム ----------
    default_player_count: int = 2
    default_grade_level: str = "low"
    grade_levels: List[str] = field(default_factory=lambda: ["low", "high"])
    topics: List[str] = field(
        default_factory=lambda: ["environment", "literacy", "digital"]
    )

    def __post_init__(self):
        self.question_file = Path(self.question_file)
        if not self.question_file.is_absolute():
            self.question_file = ROOT_DIR / self.question_file

        if not MIN_PLAYERS <= self.default_player_count <= MAX_PLAYERS:
            logger.warning(
                "default_player_count={} out of range, using {}",
                self.default_player_count, MIN_PLAYERS,
            )
            self.default_player_count = MIN_PLAYERS

    # ============================================================
    # 読み込み
    # ============================================================

    @classmethod
    def load(cls, path: Optional[Union[str, Path]] = None) -> "AppConfig":
        """
        config.toml と環境変数から AppConfig を作る。

        優先順位: 環境変数 > config.toml > デフォルト値
        """
        raw = read_toml(Path(path) if path is not None else CONFIG_PATH)

        app = _section(raw, "app")
        data = _section(raw, "data")
        game = _section(raw, "game")

        kwargs: Dict[str, Any] = {}
        if isinstance(app.get("name"), str):
            kwargs["app_name"] = app["name"]
        if isinstance(app.get("log_level"), str):
            kwargs["log_level"] = app["log_level"].upper()
        if isinstance(data.get("question_file"), str):
            kwargs["question_file"] = Path(data["question_file"])
        if isinstance(game.get("default_player_count"), int):
            kwargs["default_player_count"] = game["default_player_count"]
        if isinstance(game.get("default_grade_level"), str):
            kwargs["default_grade_level"] = game["default_grade_level"]
        if isinstance(game.get("grade_levels"), list) and game["grade_levels"]:
            kwargs["grade_levels"] = [str(g) for g in game["grade_levels"]]
        if isinstance(game.get("topics"), list) and game["topics"]:
            kwargs["topics"] = [str(t) for t in game["topics"]]

        # 環境変数での上書き
        env_data = os.environ.get("GRADE_QUIZ_DATA")
        if env_data:
            kwargs["question_file"] = Path(env_data)
        env_level = os.environ.get("GRADE_QUIZ_LOG_LEVEL")
        if env_level:
            kwargs["log_level"] = env_level.upper()

        return cls(**kwargs)


# ============================================================
# TOML 読み取りユーティリティ
# ============================================================

def read_toml(path: Path) -> Dict[str, Any]:
    """
    TOML ファイルを読み込む。
    存在しない・壊れている場合は空 dict を返す。
    """
    if not path.exists():
        return {}
    try:
        return toml.load(str(path))
    except (ValueError, OSError) as e:
        logger.warning("ignoring unreadable config {}: {}", path, e)
        return {}


def _section(raw: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = raw.get(name)
    return value if isinstance(value, dict) else {}
