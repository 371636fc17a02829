import os
import random
import sys

import pytest

# Ensure the repo root (containing the `grade_quiz` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
REPO_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from grade_quiz import controller, question_bank
from grade_quiz.question_bank import parse_csv


SAMPLE_CSV = """topic,gradeLevel,question,optionA,optionB,optionC,optionD,correctAnswer
math,low,2+2?,4,5,,,A
math,low,3+3?,5,6,7,,B
math,low,1+1?,2,3,,,A
math,high,12*12?,124,144,,,B
science,low,Water boils at?,50,100,,,B
"""


@pytest.fixture()
def questions():
    return parse_csv(SAMPLE_CSV)


@pytest.fixture()
def rng():
    return random.Random(1234)


@pytest.fixture()
def setup_state(questions):
    state = controller.new_game()
    return controller.with_questions(state, questions)


@pytest.fixture()
def topic_state(setup_state):
    return controller.confirm_setup(setup_state)


@pytest.fixture(autouse=True)
def _clear_question_cache():
    question_bank.clear_cache()
    yield
    question_bank.clear_cache()
