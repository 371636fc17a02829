"""
models.py
======================

クイズゲームで扱うデータ構造を定義するモジュール。

- AnswerOption  : 選択肢 1 つ（本文 + 正解フラグ）
- QuestionRecord: CSV 1 行から生成される四択問題（生成後は不変）
- Scene         : 画面（setup / topic-selection / question / result）
- TurnRecord    : 1 ターン分の解答結果
- GameState     : ゲーム全体の状態

GameState は Streamlit の session_state に 1 つだけ保持されるが、
遷移は controller.py の関数が「新しい GameState を返す」形で行う。
そのため、このモジュールのクラスは UI に依存しない。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

# 出題済み判定に使う問題文の先頭文字数
KEY_PROMPT_PREFIX = 20


@dataclass(frozen=True)
class AnswerOption:
    text: str
    is_correct: bool = False


@dataclass(frozen=True)
class QuestionRecord:
    """
    四択（最大 4 択）問題 1 件。

    options は A, B, C, D の順に、値が入っていたスロットだけを保持する。
    """

    topic: str
    grade_level: str
    prompt_text: str
    options: Tuple[AnswerOption, ...] = ()

    @property
    def key(self) -> str:
        """
        出題済み管理用のキー。

        topic + grade_level + 問題文の先頭 20 文字。
        同じトピック・学年で先頭 20 文字が同じ問題は同一扱いになる。
        """
        return f"{self.topic}{self.grade_level}{self.prompt_text[:KEY_PROMPT_PREFIX]}"

    @property
    def correct_option(self) -> Optional[AnswerOption]:
        for opt in self.options:
            if opt.is_correct:
                return opt
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "topic": self.topic,
            "grade_level": self.grade_level,
            "prompt_text": self.prompt_text,
            "options": [
                {"text": o.text, "is_correct": o.is_correct} for o in self.options
            ],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "QuestionRecord":
        options = tuple(
            AnswerOption(text=str(o["text"]), is_correct=bool(o.get("is_correct", False)))
            for o in data.get("options", [])
        )
        return cls(
            topic=str(data.get("topic", "")),
            grade_level=str(data.get("grade_level", "")),
            prompt_text=str(data.get("prompt_text", "")),
            options=options,
        )


class Scene(str, Enum):
    SETUP = "setup"
    TOPIC_SELECTION = "topic-selection"
    QUESTION = "question"
    RESULT = "result"


@dataclass(frozen=True)
class TurnRecord:
    """解答 1 回分の記録（結果画面・スコアボード表示用）。"""

    player: int
    question_key: str
    topic: str
    correct: bool


@dataclass(frozen=True)
class GameState:
    """
    ゲーム全体の状態。

    current_player は 1 始まりで、常に 1〜player_count の範囲。
    all_questions が None の間はデータ未ロードで、setup 画面から先へは進めない。
    notice は直近の遷移で UI に伝えたい通知コード（"recycled" など）。
    """

    player_count: int = 2
    grade_level: str = "low"
    current_player: int = 1
    scores: Dict[str, int] = field(default_factory=dict)
    scene: Scene = Scene.SETUP
    all_questions: Optional[Tuple[QuestionRecord, ...]] = None
    current_question: Optional[QuestionRecord] = None
    used_keys: FrozenSet[str] = frozenset()
    current_topic: Optional[str] = None
    last_outcome: Optional[bool] = None
    notice: Optional[str] = None
    history: Tuple[TurnRecord, ...] = ()

    @property
    def is_loaded(self) -> bool:
        return self.all_questions is not None

    @property
    def current_player_key(self) -> str:
        return f"player{self.current_player}"

    def recent_turns(self, limit: int = 5) -> List[TurnRecord]:
        """新しい順に直近 limit 件のターン記録を返す。"""
        return list(reversed(self.history[-limit:])) if limit > 0 else []
