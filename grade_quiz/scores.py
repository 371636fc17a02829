"""
scores.py
=====================================

プレイヤーごとのスコアを管理するモジュール。

スコアは {"player1": 0, "player2": 0, ...} 形式の dict。
setup → topic-selection の遷移で全員 0 に初期化され、
正解したときだけ現在のプレイヤーに +1 される。

関数はどれも新しい dict を返し、引数の dict は書き換えない。
"""

from __future__ import annotations

from typing import Dict, List, Tuple

import pandas as pd


def player_key(player: int) -> str:
    return f"player{player}"


def player_number(key: str) -> int:
    """キーからプレイヤー番号を取り出す（例: player3 → 3）"""
    return int(key[len("player"):])


def reset_scores(player_count: int) -> Dict[str, int]:
    """player1〜playerN を 0 点で初期化した dict を返す。"""
    return {player_key(i): 0 for i in range(1, player_count + 1)}


def award_point(scores: Dict[str, int], player: int) -> Dict[str, int]:
    """指定プレイヤーに 1 点加算した新しい dict を返す。"""
    key = player_key(player)
    updated = dict(scores)
    updated[key] = updated.get(key, 0) + 1
    return updated


def standings(scores: Dict[str, int]) -> List[Tuple[str, int]]:
    """
    順位順（得点の高い順、同点ならプレイヤー番号順）の (key, score) リスト。
    """
    return sorted(scores.items(), key=lambda kv: (-kv[1], player_number(kv[0])))


def leaders(scores: Dict[str, int]) -> List[str]:
    """最高得点のプレイヤー（同点なら複数）。全員 0 点なら空。"""
    if not scores:
        return []
    top = max(scores.values())
    if top == 0:
        return []
    return [k for k, v in standings(scores) if v == top]


# ----------------------------------------------------------------------
#  スコアボード表示用
# ----------------------------------------------------------------------
def scores_frame(scores: Dict[str, int]) -> pd.DataFrame:
    """
    スコアボード用の DataFrame を返す（st.dataframe にそのまま渡せる形）。
    """
    rows = [
        {"プレイヤー": f"プレイヤー{player_number(k)}", "得点": v}
        for k, v in standings(scores)
    ]
    return pd.DataFrame(rows, columns=["プレイヤー", "得点"])
