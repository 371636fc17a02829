"""
grade_quiz パッケージ
======================

このパッケージは、学年別マルチプレイヤークイズの内部ロジックを提供する。

主な役割:
- 設定管理（config）
- CSV 問題ファイルの読み込み（question_bank）
- 未出題優先の問題選択（selector）
- シーン遷移（controller）
- スコア集計（scores）
- UI コンポーネント（ui）

app.py は Streamlit UI のみを担当し、内部ロジックはすべて本パッケージから呼ぶ。
"""

from .config import AppConfig
from .errors import (
    DataLoadError,
    InvalidTransitionError,
    NoMatchError,
    NoSelectionError,
    QuizError,
)
from .models import AnswerOption, GameState, QuestionRecord, Scene, TurnRecord
from .question_bank import load_questions, parse_csv
from .selector import Selection, question_key, select_question

__all__ = [
    "AppConfig",
    "QuizError",
    "DataLoadError",
    "NoMatchError",
    "NoSelectionError",
    "InvalidTransitionError",
    "AnswerOption",
    "QuestionRecord",
    "Scene",
    "TurnRecord",
    "GameState",
    "parse_csv",
    "load_questions",
    "Selection",
    "question_key",
    "select_question",
]
