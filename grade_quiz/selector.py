"""
selector.py
======================

トピック・学年を指定して、まだ出題していない問題をランダムに 1 問選ぶ。

ポリシー:
- トピック・学年で絞り込み（大文字小文字は区別しない）
- 0 件なら NoMatchError
- 出題済みキー（used_keys）に含まれるものを除外
- 全部出題済みなら used_keys を空にして最初から（リサイクル）
- 残りから一様ランダムに選び、そのキーを used_keys に追加
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, Optional, Set

from loguru import logger

from .errors import NoMatchError
from .models import QuestionRecord
from .question_bank import filter_questions


@dataclass(frozen=True)
class Selection:
    question: QuestionRecord
    recycled: bool = False


def question_key(question: QuestionRecord) -> str:
    """出題済み管理用のキー（topic + grade_level + 問題文先頭 20 文字）"""
    return question.key


def select_question(
    topic: str,
    grade_level: str,
    all_questions: Iterable[QuestionRecord],
    used_keys: Set[str],
    rng: Optional[random.Random] = None,
) -> Selection:
    """
    未出題の問題を 1 問選んで返す。

    used_keys はその場で更新される（選ばれた問題のキーを追加、
    リサイクル時は先に全消去）。
    """
    candidates = filter_questions(all_questions, topic, grade_level)
    if not candidates:
        logger.warning("no questions for topic={} grade={}", topic, grade_level)
        raise NoMatchError(topic, grade_level)

    unused = [q for q in candidates if question_key(q) not in used_keys]

    recycled = False
    if not unused:
        # 全問出題済み → 履歴を消して最初から
        used_keys.clear()
        unused = candidates
        recycled = True
        logger.info(
            "all {} questions used for topic={} grade={}, recycling",
            len(candidates), topic, grade_level,
        )

    chooser = rng if rng is not None else random
    picked = chooser.choice(unused)
    used_keys.add(question_key(picked))
    return Selection(question=picked, recycled=recycled)
