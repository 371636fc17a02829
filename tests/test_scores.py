from grade_quiz.scores import (
    award_point,
    leaders,
    player_key,
    player_number,
    reset_scores,
    scores_frame,
    standings,
)


def test_reset_scores_creates_all_players():
    assert reset_scores(3) == {'player1': 0, 'player2': 0, 'player3': 0}


def test_award_point_only_touches_one_player():
    scores = reset_scores(4)
    updated = award_point(scores, 2)
    assert updated == {'player1': 0, 'player2': 1, 'player3': 0, 'player4': 0}
    # original untouched
    assert scores['player2'] == 0


def test_player_key_round_trip():
    assert player_key(4) == 'player4'
    assert player_number('player4') == 4


def test_standings_and_leaders():
    scores = {'player1': 2, 'player2': 3, 'player3': 3}
    assert standings(scores) == [('player2', 3), ('player3', 3), ('player1', 2)]
    assert leaders(scores) == ['player2', 'player3']
    assert leaders(reset_scores(2)) == []
    assert leaders({}) == []


def test_scores_frame_is_ordered():
    df = scores_frame({'player1': 1, 'player2': 5})
    assert list(df.columns) == ['プレイヤー', '得点']
    assert df['得点'].tolist() == [5, 1]
    assert df['プレイヤー'].tolist() == ['プレイヤー2', 'プレイヤー1']
