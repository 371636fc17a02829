import os

import pytest
from streamlit.testing.v1 import AppTest

APP_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'app.py'))


@pytest.fixture()
def data_file(tmp_path, monkeypatch):
    path = tmp_path / 'quiz.csv'
    path.write_text(
        "topic,gradeLevel,question,optionA,optionB,correctAnswer\n"
        "digital,low,Share your password?,No,Yes,A\n",
        encoding='utf-8',
    )
    monkeypatch.setenv('GRADE_QUIZ_DATA', str(path))
    return path


def test_failed_load_stays_on_setup(tmp_path, monkeypatch):
    monkeypatch.setenv('GRADE_QUIZ_DATA', str(tmp_path / 'missing.csv'))
    at = AppTest.from_file(APP_PATH).run()

    assert not at.exception
    assert any('問題ファイルを読み込めません' in e.value for e in at.error)
    assert at.button(key='gq_confirm_setup').disabled
    assert at.session_state['game'].scene.value == 'setup'
    assert not at.session_state['game'].is_loaded


def test_topic_without_questions_shows_warning(data_file):
    at = AppTest.from_file(APP_PATH).run()
    at.button(key='gq_confirm_setup').click().run()
    assert at.session_state['game'].scene.value == 'topic-selection'

    at.button(key='gq_topic_environment').click().run()
    assert not at.exception
    assert any('問題がありません' in w.value for w in at.warning)
    assert at.session_state['game'].scene.value == 'topic-selection'


def test_topic_with_questions_moves_to_question(data_file):
    at = AppTest.from_file(APP_PATH).run()
    at.button(key='gq_confirm_setup').click().run()
    at.button(key='gq_topic_digital').click().run()

    assert not at.exception
    state = at.session_state['game']
    assert state.scene.value == 'question'
    assert state.current_question.prompt_text == 'Share your password?'
