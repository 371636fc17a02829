"""
ui.py
======================

Streamlit ベースの UI コンポーネントをまとめたモジュール。

責務:
- 4 つのシーン（setup / topic-selection / question / result）の描画
- プレイヤーアイコン・スコアボード・選択中の学年の表示
- ユーザー操作の入力を「何が押されたか」の dict として返す

ゲームの状態遷移は controller.py、その呼び出しは app.py に任せ、
ここでは GameState を読むだけで書き換えない。
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import streamlit as st

from .config import MAX_PLAYERS, MIN_PLAYERS, AppConfig
from .models import GameState, TurnRecord
from .scores import leaders, player_number, scores_frame

# ----------------------------------------------------------------------
#  表示ラベル
# ----------------------------------------------------------------------
GRADE_LABELS: Dict[str, str] = {"low": "低学年", "high": "高学年"}
TOPIC_LABELS: Dict[str, str] = {
    "environment": "🌱 環境",
    "literacy": "📚 リテラシー",
    "digital": "💻 デジタル",
}

# プレイヤーごとの色（p1〜p4）
PLAYER_COLORS: Dict[str, str] = {
    "p1": "#6366f1",
    "p2": "#f59e0b",
    "p3": "#10b981",
    "p4": "#ef4444",
}

THEME: Dict[str, str] = {
    "bg": "#ffffff",
    "text": "#1c1c1e",
    "surface": "#f2f2f7",
    "border": "#d1d1d6",
    "primary": "#6366f1",
    "correct": "#34c759",
    "incorrect": "#ff3b30",
}


def grade_label(grade_level: str) -> str:
    return GRADE_LABELS.get(grade_level.lower(), grade_level)


def topic_label(topic: str) -> str:
    return TOPIC_LABELS.get(topic.lower(), topic)


# ----------------------------------------------------------------------
#  CSS 生成
# ----------------------------------------------------------------------
def _generate_css(theme: Dict[str, str]) -> str:
    """プレイヤー色を含むグローバル CSS を生成する。"""

    player_css = "\n".join(
        f"""
    .gq-player.{cls} {{
        background: {color}22;
        border-color: {color};
        color: {color};
    }}"""
        for cls, color in PLAYER_COLORS.items()
    )

    return f"""
    <style>
    .gq-players {{
        display: flex;
        flex-wrap: wrap;
        gap: 0.4rem;
        margin: 0.4rem 0 0.8rem 0;
    }}

    .gq-player {{
        padding: 0.2rem 0.7rem;
        border-radius: 999px;
        border: 2px solid {theme['border']};
        font-size: 0.9rem;
        font-weight: 600;
    }}

    .gq-player.gq-active {{
        box-shadow: 0 0 0 3px {theme['primary']}55;
    }}
    {player_css}

    .gq-tag {{
        display: inline-block;
        padding: 0.1rem 0.5rem;
        border-radius: 999px;
        background: {theme['surface']};
        border: 1px solid {theme['border']};
        font-size: 0.8rem;
    }}

    .gq-question-box {{
        background: {theme['bg']};
        padding: 1rem;
        border-radius: 12px;
        border: 1px solid {theme['border']};
        font-size: 1.1rem;
        line-height: 1.6;
        margin: 0.5rem 0 0.75rem 0;
    }}

    .gq-turn {{
        color: {theme['primary']};
        font-weight: 700;
    }}

    .gq-result-correct {{
        color: {theme['correct']};
        font-size: 1.3rem;
        font-weight: 700;
    }}

    .gq-result-incorrect {{
        color: {theme['incorrect']};
        font-size: 1.3rem;
        font-weight: 700;
    }}
    </style>
    """


def inject_css() -> None:
    st.markdown(_generate_css(THEME), unsafe_allow_html=True)


# ----------------------------------------------------------------------
#  共通パーツ
# ----------------------------------------------------------------------
def _player_badge(player: int, active: bool = False) -> str:
    classes = ["gq-player", f"p{player}"]
    if active:
        classes.append("gq-active")
    return f"<span class='{' '.join(classes)}'>プレイヤー{player}</span>"


def render_player_icons(state: GameState) -> None:
    badges = [
        _player_badge(i, active=(i == state.current_player))
        for i in range(1, state.player_count + 1)
    ]
    st.markdown(
        "<div class='gq-players'>" + "".join(badges) + "</div>",
        unsafe_allow_html=True,
    )


def render_scoreboard(state: GameState) -> None:
    """スコアボード（得点順）を描画する。"""
    if not state.scores:
        return
    st.markdown("#### 🏆 スコアボード")
    st.dataframe(scores_frame(state.scores), hide_index=True, width="stretch")

    top = leaders(state.scores)
    if top:
        names = "・".join(f"プレイヤー{player_number(k)}" for k in top)
        st.caption(f"現在トップ: {names}")


def render_recent_turns(turns: List[TurnRecord]) -> None:
    if not turns:
        return
    with st.expander("直近の解答"):
        for t in turns:
            mark = "⭕" if t.correct else "❌"
            st.write(f"{mark} プレイヤー{t.player} - {topic_label(t.topic)}")


# ----------------------------------------------------------------------
#  シーン: setup
# ----------------------------------------------------------------------
def render_setup_scene(state: GameState, config: AppConfig) -> Dict[str, Any]:
    """
    学年とプレイヤー数を選ぶ画面。

    戻り値:
        {
          "grade_level": str,    # 現在選ばれている学年
          "player_count": int,   # 現在選ばれているプレイヤー数
          "confirmed": bool,     # 「はじめる」が押されたか
        }
    """
    st.markdown(f"## 🎲 {config.app_name}")

    grades = list(config.grade_levels)
    if state.grade_level not in grades:
        grades.append(state.grade_level)
    grade_level = st.radio(
        "学年",
        grades,
        index=grades.index(state.grade_level),
        horizontal=True,
        format_func=grade_label,
        key="gq_grade_level",
    )

    counts = list(range(MIN_PLAYERS, MAX_PLAYERS + 1))
    player_count = st.radio(
        "プレイヤー数",
        counts,
        index=counts.index(state.player_count),
        horizontal=True,
        format_func=lambda n: f"{n}人",
        key="gq_player_count",
    )

    if not state.is_loaded:
        st.info("問題データを読み込み中、または読み込みに失敗しました。")

    confirmed = st.button(
        "はじめる ▶",
        key="gq_confirm_setup",
        width="stretch",
        disabled=not state.is_loaded,
    )

    with st.expander("❓ 遊び方"):
        st.markdown(
            """
1. 学年とプレイヤー数を選んで「はじめる」を押します。
2. 手番のプレイヤーがトピックを選ぶと、問題が出題されます。
3. 答えを選んで「解答する」を押すと、正解なら 1 点獲得です。
4. 「次のプレイヤーへ」で手番が時計回りに移ります。
5. 同じトピックの問題をすべて解くと、最初から出題し直します。
            """
        )

    return {
        "grade_level": grade_level,
        "player_count": int(player_count),
        "confirmed": confirmed,
    }


# ----------------------------------------------------------------------
#  シーン: topic-selection
# ----------------------------------------------------------------------
def render_topic_scene(state: GameState, config: AppConfig) -> Dict[str, Any]:
    """
    トピック選択画面。

    戻り値:
        {
          "topic": Optional[str],  # 押されたトピック（なければ None）
          "back": bool,            # 「最初に戻る」が押されたか
        }
    """
    inject_css()

    st.markdown("## トピックを選んでください")
    st.markdown(
        f"<span class='gq-tag'>学年: {grade_label(state.grade_level)}</span>",
        unsafe_allow_html=True,
    )
    render_player_icons(state)
    st.markdown(
        f"<span class='gq-turn'>プレイヤー{state.current_player}</span> さんの番です。",
        unsafe_allow_html=True,
    )

    picked: Optional[str] = None
    cols = st.columns(len(config.topics))
    for col, topic in zip(cols, config.topics):
        with col:
            if st.button(topic_label(topic), key=f"gq_topic_{topic}", width="stretch"):
                picked = topic

    render_scoreboard(state)
    render_recent_turns(state.recent_turns())

    back = st.button("◀ 最初に戻る", key="gq_back_to_setup", width="stretch")

    return {"topic": picked, "back": back}


# ----------------------------------------------------------------------
#  シーン: question
# ----------------------------------------------------------------------
def render_question_scene(state: GameState) -> Dict[str, Any]:
    """
    出題画面。

    戻り値:
        {
          "selected_index": Optional[int],  # 選ばれている選択肢（未選択なら None）
          "submitted": bool,                # 「解答する」が押されたか
        }
    """
    inject_css()
    q = state.current_question
    if q is None:
        st.error("問題がまだ選択されていません。")
        return {"selected_index": None, "submitted": False}

    st.markdown(
        f"<span class='gq-tag'>{topic_label(q.topic)}</span> "
        f"<span class='gq-tag'>{grade_label(q.grade_level)}</span>",
        unsafe_allow_html=True,
    )
    st.markdown(
        "<div class='gq-question-box'>"
        f"<span class='gq-turn'>プレイヤー{state.current_player}</span> さんの番です。<br><br>"
        f"{q.prompt_text}"
        "</div>",
        unsafe_allow_html=True,
    )

    indices = list(range(len(q.options)))
    selected = st.radio(
        "答えを選んでください",
        indices,
        index=None,
        format_func=lambda i: q.options[i].text,
        key=f"gq_answer_{q.key}",
    )

    submitted = st.button("解答する", key="gq_submit_answer", width="stretch")

    return {"selected_index": selected, "submitted": submitted}


# ----------------------------------------------------------------------
#  シーン: result
# ----------------------------------------------------------------------
def render_result_scene(state: GameState) -> Dict[str, Any]:
    """
    結果画面。

    戻り値:
        {"continue": bool}  # 「次のプレイヤーへ」が押されたか
    """
    inject_css()
    q = state.current_question

    if state.last_outcome:
        st.markdown(
            "<div class='gq-result-correct'>"
            f"正解です！ プレイヤー{state.current_player} さん 1 点獲得！"
            "</div>",
            unsafe_allow_html=True,
        )
    else:
        correct = q.correct_option if q is not None else None
        answer = f"正解は「{correct.text}」です。" if correct is not None else ""
        st.markdown(
            f"<div class='gq-result-incorrect'>不正解です。{answer}</div>",
            unsafe_allow_html=True,
        )

    render_player_icons(state)
    render_scoreboard(state)

    cont = st.button("次のプレイヤーへ ▶", key="gq_continue", width="stretch")
    return {"continue": cont}


# ----------------------------------------------------------------------
#  通知
# ----------------------------------------------------------------------
NOTICE_MESSAGES: Dict[str, str] = {
    "recycled": "このトピックの問題をすべて解きました！ 最初から出題します。",
}


def render_notice(notice: Optional[str]) -> None:
    if notice:
        st.info(NOTICE_MESSAGES.get(notice, notice))
