"""
question_bank.py
===========================

CSV 形式の問題ファイルを読み込み、QuestionRecord のリストに変換するモジュール。

CSV の想定フォーマット（1 行目はヘッダー）:

    topic,gradeLevel,question,optionA,optionB,optionC,optionD,correctAnswer
    environment,low,分別して捨てるのは？,ペットボトル,石,,,A

方針:
- ヘッダー名は大文字小文字を区別しない
- "option" で始まるヘッダーは末尾 1 文字を選択肢スロット（A〜D）とみなす
- 列数がヘッダーと一致しない行は黙ってスキップ（壊れた行に寛容）
- カンマのエスケープ（クォート）には対応しない
- 読み込み結果はプロセス内でキャッシュする（ウォームキャッシュ）
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from loguru import logger

from .errors import DataLoadError
from .models import AnswerOption, QuestionRecord

OPTION_SLOTS = ("A", "B", "C", "D")

# ----------------------------------------------------------------------
#  グローバルキャッシュ（Pythonプロセス中は維持される）
# ----------------------------------------------------------------------
_QUESTION_CACHE: Dict[Path, List[QuestionRecord]] = {}


# ----------------------------------------------------------------------
#  CSV パース
# ----------------------------------------------------------------------
def parse_csv(csv_text: str) -> List[QuestionRecord]:
    """
    CSV 文字列を QuestionRecord のリストに変換する。

    - 空入力 / ヘッダーのみ → 空リスト
    - 列数不一致の行はスキップ
    - 値が空の選択肢スロットは options に含めない
    - correctAnswer の値とスロット文字が一致する選択肢が正解
    例外は送出しない。
    """
    lines = csv_text.strip().split("\n")
    if len(lines) < 2:
        return []

    headers = [h.strip() for h in lines[0].split(",")]
    questions: List[QuestionRecord] = []

    for line_no, line in enumerate(lines[1:], start=2):
        values = [v.strip() for v in line.split(",")]
        if len(values) != len(headers):
            logger.debug(
                "skip csv line {}: {} fields, expected {}",
                line_no, len(values), len(headers),
            )
            continue

        topic = grade_level = prompt = correct = ""
        slots: Dict[str, str] = {}

        for header, value in zip(headers, values):
            lower = header.lower()
            if lower == "topic":
                topic = value
            elif lower == "gradelevel":
                grade_level = value
            elif lower == "question":
                prompt = value
            elif lower.startswith("option"):
                slots[header[-1:]] = value
            elif lower == "correctanswer":
                correct = value

        options = tuple(
            AnswerOption(text=slots[slot], is_correct=(slot == correct))
            for slot in OPTION_SLOTS
            if slots.get(slot)
        )
        questions.append(
            QuestionRecord(
                topic=topic,
                grade_level=grade_level,
                prompt_text=prompt,
                options=options,
            )
        )

    return questions


# ----------------------------------------------------------------------
#  ファイル読み込み
# ----------------------------------------------------------------------
def load_questions(
    path: Union[str, Path],
    force_reload: bool = False,
) -> List[QuestionRecord]:
    """
    問題ファイルを読み込み、QuestionRecord のリストを返す。

    - 一度読み込んだパスはキャッシュを返す（force_reload=True で再読込）
    - 読み込みに失敗した場合は DataLoadError（キャッシュは更新しない）
    """
    resolved = Path(path).resolve()

    if not force_reload and resolved in _QUESTION_CACHE:
        return _QUESTION_CACHE[resolved]

    try:
        text = resolved.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        logger.error("failed to load question file {}: {}", resolved, e)
        raise DataLoadError(f"問題ファイルを読み込めません: {resolved}") from e

    questions = parse_csv(text)
    _QUESTION_CACHE[resolved] = questions
    logger.info("loaded {} questions from {}", len(questions), resolved)
    return questions


def clear_cache() -> None:
    """キャッシュを破棄する（テスト・再読込用）。"""
    _QUESTION_CACHE.clear()


# ----------------------------------------------------------------------
#  絞り込みヘルパー
# ----------------------------------------------------------------------
def filter_questions(
    questions: Iterable[QuestionRecord],
    topic: str,
    grade_level: str,
) -> List[QuestionRecord]:
    """トピックと学年で絞り込む（大文字小文字は区別しない）"""
    topic_l = topic.lower()
    grade_l = grade_level.lower()
    return [
        q for q in questions
        if q.topic.lower() == topic_l and q.grade_level.lower() == grade_l
    ]


def available_topics(
    questions: Iterable[QuestionRecord],
    grade_level: Optional[str] = None,
) -> List[str]:
    """出題可能なトピック一覧（小文字化して重複排除、ソート済み）"""
    grade_l = grade_level.lower() if grade_level is not None else None
    return sorted({
        q.topic.lower() for q in questions
        if q.topic and (grade_l is None or q.grade_level.lower() == grade_l)
    })


def available_grade_levels(questions: Iterable[QuestionRecord]) -> List[str]:
    return sorted({q.grade_level.lower() for q in questions if q.grade_level})
