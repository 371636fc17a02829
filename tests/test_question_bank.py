import pytest

from grade_quiz.errors import DataLoadError
from grade_quiz.models import AnswerOption, QuestionRecord
from grade_quiz.question_bank import (
    available_grade_levels,
    available_topics,
    filter_questions,
    load_questions,
    parse_csv,
)


def test_parse_single_row_scenario():
    text = "topic,gradeLevel,question,optionA,optionB,correctAnswer\nmath,low,2+2?,4,5,A"
    records = parse_csv(text)
    assert len(records) == 1
    q = records[0]
    assert q.topic == 'math'
    assert q.grade_level == 'low'
    assert q.prompt_text == '2+2?'
    assert q.options == (AnswerOption('4', True), AnswerOption('5', False))


def test_empty_and_header_only_inputs():
    assert parse_csv('') == []
    assert parse_csv('topic,gradeLevel,question,optionA,correctAnswer\n') == []


def test_headers_are_case_insensitive():
    text = "TOPIC,GradeLevel,QUESTION,optionA,optionB,CorrectAnswer\nart,high,Red+Blue?,Purple,Green,A"
    q = parse_csv(text)[0]
    assert (q.topic, q.grade_level, q.prompt_text) == ('art', 'high', 'Red+Blue?')
    assert q.correct_option == AnswerOption('Purple', True)


def test_rows_with_wrong_field_count_are_skipped():
    text = (
        "topic,gradeLevel,question,optionA,optionB,correctAnswer\n"
        "math,low,2+2?,4,5,A\n"
        "math,low,too,few\n"
        "math,low,a,b,c,d,e,f\n"
        "math,low,3+3?,6,7,A\n"
    )
    records = parse_csv(text)
    assert [r.prompt_text for r in records] == ['2+2?', '3+3?']


def test_empty_option_slots_are_omitted():
    text = "topic,gradeLevel,question,optionA,optionB,optionC,optionD,correctAnswer\nmath,low,q,,x,,y,D"
    q = parse_csv(text)[0]
    assert [o.text for o in q.options] == ['x', 'y']
    assert q.options[1].is_correct


def test_option_order_ignores_column_order():
    text = "optionD,optionB,topic,gradeLevel,question,optionA,correctAnswer\nd,b,math,low,q,a,B"
    q = parse_csv(text)[0]
    assert [o.text for o in q.options] == ['a', 'b', 'd']
    assert [o.is_correct for o in q.options] == [False, True, False]


def test_unmatched_correct_answer_marks_nothing():
    text = "topic,gradeLevel,question,optionA,optionB,correctAnswer\nmath,low,q,1,2,Z"
    q = parse_csv(text)[0]
    assert q.correct_option is None
    assert len(q.options) == 2


def test_row_with_any_option_has_options():
    text = (
        "topic,gradeLevel,question,optionA,optionB,optionC,correctAnswer\n"
        "math,low,q1,,,only,C\n"
        "math,low,q2,,,,A\n"
    )
    first, second = parse_csv(text)
    assert len(first.options) == 1
    assert second.options == ()


def test_crlf_line_endings_are_tolerated():
    text = "topic,gradeLevel,question,optionA,optionB,correctAnswer\r\nmath,low,2+2?,4,5,A\r\n"
    q = parse_csv(text)[0]
    assert q.options[0] == AnswerOption('4', True)


def test_parsing_is_idempotent():
    text = "topic,gradeLevel,question,optionA,optionB,correctAnswer\nmath,low,2+2?,4,5,A\nbad,row\nsci,high,H2O?,water,fire,A"
    assert parse_csv(text) == parse_csv(text)
    assert len(parse_csv(text)) == 2


def test_load_questions_reads_and_caches(tmp_path):
    path = tmp_path / 'quiz.csv'
    path.write_text("topic,gradeLevel,question,optionA,correctAnswer\nmath,low,q,1,A\n", encoding='utf-8')

    first = load_questions(path)
    assert len(first) == 1

    # cached: file changes are not visible until force_reload
    path.write_text("topic,gradeLevel,question,optionA,correctAnswer\nmath,low,q,1,A\nmath,low,r,2,A\n", encoding='utf-8')
    assert load_questions(path) is first
    assert len(load_questions(path, force_reload=True)) == 2


def test_load_questions_handles_bom(tmp_path):
    path = tmp_path / 'bom.csv'
    path.write_text("topic,gradeLevel,question,optionA,correctAnswer\nmath,low,q,1,A\n", encoding='utf-8-sig')
    assert load_questions(path)[0].topic == 'math'


def test_load_questions_missing_file_raises(tmp_path):
    with pytest.raises(DataLoadError):
        load_questions(tmp_path / 'missing.csv')


def test_bundled_question_file_parses():
    from grade_quiz.config import DATA_DIR
    records = load_questions(DATA_DIR / 'quiz_data.csv')
    assert records
    assert all(r.options for r in records)
    assert all(r.correct_option is not None for r in records)


def test_filter_and_listing_helpers(questions):
    assert len(filter_questions(questions, 'MATH', 'Low')) == 3
    assert filter_questions(questions, 'history', 'low') == []
    assert available_topics(questions) == ['math', 'science']
    assert available_topics(questions, 'high') == ['math']
    assert available_grade_levels(questions) == ['high', 'low']


def test_record_dict_conversion():
    q = QuestionRecord('math', 'low', '2+2?', (AnswerOption('4', True), AnswerOption('5')))
    assert QuestionRecord.from_dict(q.to_dict()) == q
