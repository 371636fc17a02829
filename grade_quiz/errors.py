"""
errors.py
======================

クイズゲームで発生する例外をまとめたモジュール。

どの例外も「致命的」ではなく、UI 側は捕捉したうえで
現在の画面に留まり、ユーザーへ通知するだけでよい。

- DataLoadError         : 問題ファイルを読み込めなかった
- NoMatchError          : 指定トピック・学年に該当する問題が無い
- NoSelectionError      : 選択肢を選ばずに解答しようとした
- InvalidTransitionError: 現在の画面では受け付けない操作
"""

from __future__ import annotations


class QuizError(Exception):
    """クイズゲーム共通の基底例外。"""


class DataLoadError(QuizError):
    """問題データの取得・読み込みに失敗した。"""


class NoMatchError(QuizError):
    """トピックと学年の組み合わせに該当する問題が 0 件。"""

    def __init__(self, topic: str, grade_level: str):
        self.topic = topic
        self.grade_level = grade_level
        super().__init__(
            f"no questions for topic={topic!r} grade_level={grade_level!r}"
        )


class NoSelectionError(QuizError):
    """選択肢が選ばれていない状態での解答送信。"""

    def __init__(self) -> None:
        super().__init__("no answer option selected")


class InvalidTransitionError(QuizError):
    """現在のシーンでは実行できない遷移が要求された。"""

    def __init__(self, scene: str, trigger: str):
        self.scene = scene
        self.trigger = trigger
        super().__init__(f"cannot {trigger} from scene {scene!r}")
