"""
controller.py
======================

画面（シーン）遷移を担当するモジュール。

    setup ──確定──▶ topic-selection ──トピック選択──▶ question
      ▲                 │    ▲                            │
      └──── 戻る ───────┘    └──── 続ける ◀── result ◀── 解答

どの関数も GameState を受け取り、新しい GameState を返す。
引数の state は書き換えないので、例外が出た場合は呼び出し側が
元の state をそのまま使い続ければ「画面に留まる」ことになる。
"""

from __future__ import annotations

import random
from dataclasses import replace
from typing import Iterable, Optional

from loguru import logger

from .config import MAX_PLAYERS, MIN_PLAYERS, AppConfig
from .errors import DataLoadError, InvalidTransitionError, NoSelectionError
from .models import GameState, QuestionRecord, Scene, TurnRecord
from .scores import award_point, reset_scores
from .selector import select_question

NOTICE_RECYCLED = "recycled"


def _require(state: GameState, scene: Scene, trigger: str) -> None:
    if state.scene != scene:
        raise InvalidTransitionError(state.scene.value, trigger)


def _move(state: GameState, scene: Scene, **changes) -> GameState:
    changes.setdefault("notice", None)
    new_state = replace(state, scene=scene, **changes)
    if state.scene != scene:
        logger.info("scene {} -> {}", state.scene.value, scene.value)
    return new_state


# ----------------------------------------------------------------------
#  初期化 / データ
# ----------------------------------------------------------------------
def new_game(config: Optional[AppConfig] = None) -> GameState:
    """設定値を初期値にした setup 画面の GameState を返す。"""
    cfg = config or AppConfig()
    return GameState(
        player_count=cfg.default_player_count,
        grade_level=cfg.default_grade_level,
    )


def with_questions(
    state: GameState,
    questions: Iterable[QuestionRecord],
) -> GameState:
    """読み込んだ問題セットを state に載せる。"""
    loaded = tuple(questions)
    keys = {q.key for q in loaded}
    return replace(
        state,
        all_questions=loaded,
        used_keys=frozenset(k for k in state.used_keys if k in keys),
    )


# ----------------------------------------------------------------------
#  setup
# ----------------------------------------------------------------------
def configure(
    state: GameState,
    player_count: Optional[int] = None,
    grade_level: Optional[str] = None,
) -> GameState:
    """setup 画面でのプレイヤー数・学年の変更。"""
    _require(state, Scene.SETUP, "configure")

    changes = {}
    if player_count is not None:
        if not MIN_PLAYERS <= player_count <= MAX_PLAYERS:
            raise ValueError(
                f"player_count must be {MIN_PLAYERS}-{MAX_PLAYERS}, got {player_count}"
            )
        changes["player_count"] = player_count
    if grade_level is not None:
        changes["grade_level"] = grade_level

    return replace(state, **changes) if changes else state


def confirm_setup(state: GameState) -> GameState:
    """
    setup → topic-selection。

    スコア・現在プレイヤー・出題済みキー・トピック・履歴をリセットする。
    問題データ未ロードの場合は DataLoadError。
    """
    _require(state, Scene.SETUP, "confirm setup")
    if not state.is_loaded:
        raise DataLoadError("問題データがまだ読み込まれていません。")

    return _move(
        state,
        Scene.TOPIC_SELECTION,
        scores=reset_scores(state.player_count),
        current_player=1,
        used_keys=frozenset(),
        current_topic=None,
        current_question=None,
        last_outcome=None,
        history=(),
    )


# ----------------------------------------------------------------------
#  topic-selection
# ----------------------------------------------------------------------
def pick_topic(
    state: GameState,
    topic: str,
    rng: Optional[random.Random] = None,
) -> GameState:
    """
    topic-selection → question。

    該当問題が無い場合は NoMatchError がそのまま送出される。
    全問出題済みでリサイクルした場合は notice="recycled"。
    """
    _require(state, Scene.TOPIC_SELECTION, "pick topic")

    used = set(state.used_keys)
    selection = select_question(
        topic,
        state.grade_level,
        state.all_questions or (),
        used,
        rng=rng,
    )

    return _move(
        state,
        Scene.QUESTION,
        current_topic=topic,
        current_question=selection.question,
        used_keys=frozenset(used),
        notice=NOTICE_RECYCLED if selection.recycled else None,
    )


def back_to_setup(state: GameState) -> GameState:
    """topic-selection → setup（副作用なし）"""
    _require(state, Scene.TOPIC_SELECTION, "go back")
    return _move(state, Scene.SETUP)


# ----------------------------------------------------------------------
#  question
# ----------------------------------------------------------------------
def submit_answer(state: GameState, option_index: Optional[int]) -> GameState:
    """
    question → result。

    option_index は current_question.options の添字。
    None の場合は NoSelectionError（画面はそのまま）。
    正解なら現在のプレイヤーに 1 点加算する。
    """
    _require(state, Scene.QUESTION, "submit answer")
    if option_index is None:
        raise NoSelectionError()

    question = state.current_question
    if question is None:
        raise InvalidTransitionError(state.scene.value, "submit answer")
    if not 0 <= option_index < len(question.options):
        raise ValueError(f"option index out of range: {option_index}")

    correct = question.options[option_index].is_correct
    scores = award_point(state.scores, state.current_player) if correct else state.scores

    turn = TurnRecord(
        player=state.current_player,
        question_key=question.key,
        topic=question.topic,
        correct=correct,
    )
    logger.info(
        "player{} answered {} ({})",
        state.current_player, question.key, "correct" if correct else "wrong",
    )

    return _move(
        state,
        Scene.RESULT,
        scores=scores,
        last_outcome=correct,
        history=state.history + (turn,),
    )


# ----------------------------------------------------------------------
#  result
# ----------------------------------------------------------------------
def next_player(current: int, player_count: int) -> int:
    return (current % player_count) + 1


def continue_turn(state: GameState) -> GameState:
    """result → topic-selection。次のプレイヤーへ手番を回す。"""
    _require(state, Scene.RESULT, "continue")
    return _move(
        state,
        Scene.TOPIC_SELECTION,
        current_player=next_player(state.current_player, state.player_count),
        current_question=None,
        last_outcome=None,
    )
