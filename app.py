"""
app.py
======================

学年別マルチプレイヤークイズ（Streamlit）エントリーポイント。

特徴:
- 4 つのシーン: setup → topic-selection → question → result
- 2〜4 人で手番を回しながら、プレイヤーごとに得点を集計
- トピック・学年ごとに未出題の問題を優先し、全問出題後は最初から

前提:
- data/quiz_data.csv に問題が格納されている（config.toml で変更可）
- 起動: streamlit run app.py
"""

from __future__ import annotations

from typing import Optional

import streamlit as st
from loguru import logger

from grade_quiz import controller
from grade_quiz.config import AppConfig
from grade_quiz.errors import (
    DataLoadError,
    InvalidTransitionError,
    NoMatchError,
    NoSelectionError,
)
from grade_quiz.logging_setup import configure_logging
from grade_quiz.models import GameState, Scene
from grade_quiz.question_bank import load_questions
from grade_quiz.ui import (
    render_notice,
    render_question_scene,
    render_result_scene,
    render_setup_scene,
    render_topic_scene,
    topic_label,
)


# ----------------------------------------------------------------------
#  設定 / GameState のラッパー
# ----------------------------------------------------------------------
def load_app_config() -> AppConfig:
    """AppConfig をセッションに保持して返す。"""
    if "app_config" not in st.session_state:
        st.session_state["app_config"] = AppConfig.load()
    return st.session_state["app_config"]


def get_game() -> GameState:
    """GameState をセッションに保持して返す（初回は問題データも読み込む）。"""
    if "game" not in st.session_state:
        cfg = load_app_config()
        state = controller.new_game(cfg)
        try:
            state = controller.with_questions(state, load_questions(cfg.question_file))
        except DataLoadError as e:
            # setup 画面に留まる。再読込はページの再読み込みで行う。
            st.session_state["load_error"] = str(e)
        st.session_state["game"] = state
    return st.session_state["game"]


def set_game(state: GameState) -> None:
    st.session_state["game"] = state


# ----------------------------------------------------------------------
#  シーンごとのハンドラ
# ----------------------------------------------------------------------
def handle_setup(state: GameState, cfg: AppConfig) -> Optional[GameState]:
    load_error = st.session_state.get("load_error")
    if load_error:
        st.error(load_error)

    ui_result = render_setup_scene(state, cfg)
    state = controller.configure(
        state,
        player_count=ui_result["player_count"],
        grade_level=ui_result["grade_level"],
    )
    set_game(state)

    if ui_result["confirmed"]:
        try:
            return controller.confirm_setup(state)
        except DataLoadError as e:
            st.error(str(e))
    return None


def handle_topic(state: GameState, cfg: AppConfig) -> Optional[GameState]:
    ui_result = render_topic_scene(state, cfg)

    if ui_result["back"]:
        return controller.back_to_setup(state)

    topic = ui_result["topic"]
    if topic is not None:
        try:
            return controller.pick_topic(state, topic)
        except NoMatchError:
            st.warning(f"「{topic_label(topic)}」にはこの学年の問題がありません。")
    return None


def handle_question(state: GameState) -> Optional[GameState]:
    render_notice(state.notice)
    ui_result = render_question_scene(state)

    if ui_result["submitted"]:
        try:
            return controller.submit_answer(state, ui_result["selected_index"])
        except NoSelectionError:
            st.warning("答えを選んでください！")
    return None


def handle_result(state: GameState) -> Optional[GameState]:
    ui_result = render_result_scene(state)
    if ui_result["continue"]:
        return controller.continue_turn(state)
    return None


# ----------------------------------------------------------------------
#  メイン
# ----------------------------------------------------------------------
def main() -> None:
    cfg = load_app_config()
    configure_logging(cfg.log_level)

    st.set_page_config(
        page_title=cfg.app_name,
        page_icon="🎲",
        layout="centered",
    )

    state = get_game()

    try:
        if state.scene == Scene.TOPIC_SELECTION:
            new_state = handle_topic(state, cfg)
        elif state.scene == Scene.QUESTION:
            new_state = handle_question(state)
        elif state.scene == Scene.RESULT:
            new_state = handle_result(state)
        else:
            new_state = handle_setup(state, cfg)
    except InvalidTransitionError as e:
        # 古い画面のボタンが押された場合など。状態はそのまま。
        logger.warning("ignored trigger: {}", e)
        new_state = None

    if new_state is not None:
        set_game(new_state)
        st.rerun()


if __name__ == "__main__":
    main()
