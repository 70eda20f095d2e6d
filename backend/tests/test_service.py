import pytest

from wordwiz.game import errors, service
from wordwiz.game.models import Challenge


def make_room(directory, players=('Alice', 'Bob')):
    room = directory.create_room('host')
    for i, name in enumerate(players):
        service.add_player(room, f'p{i}', name)
    return room


def activate(room, first='C', last='T', start_ms=100_000, timer=20):
    room.game_started = True
    room.current_round = 1
    room.timer_duration = timer
    room.challenge = Challenge(first, last)
    room.round_start_ms = start_ms
    room.bump('active')


def test_create_room_codes_are_unique_uppercase(directory):
    codes = {directory.create_room(f'h{i}').code for i in range(200)}
    assert len(codes) == 200
    for code in codes:
        assert len(code) == 4 and code.isalpha() and code.isupper()


def test_get_room_is_case_insensitive_and_delete_idempotent(directory):
    room = directory.create_room('host')
    assert directory.get_room(room.code.lower()) is room
    assert directory.get_room('') is None
    gen = room.generation
    assert directory.delete_room(room.code) is True
    assert directory.delete_room(room.code) is False
    assert directory.get_room(room.code) is None
    assert room.closed and room.generation > gen


def test_delete_room_accepts_any_case(directory):
    room = directory.create_room('host')
    assert directory.delete_room(f' {room.code.lower()} ') is True
    assert directory.get_room(room.code) is None
    assert len(directory) == 0
    assert directory.delete_room('') is False


def test_rooms_with_finds_host_and_players(directory):
    room = make_room(directory)
    other = directory.create_room('other-host')
    assert directory.rooms_with('host') == [room]
    assert directory.rooms_with('p1') == [room]
    assert directory.rooms_with('other-host') == [other]
    assert directory.rooms_with('nobody') == []


def test_join_preserves_order(directory):
    room = make_room(directory, ('Cara', 'alice', 'Bob'))
    assert [p['name'] for p in service.roster(room)] == ['Cara', 'alice', 'Bob']


def test_join_name_taken_is_case_sensitive(directory):
    room = make_room(directory)
    before = service.roster(room)
    with pytest.raises(errors.NameTaken):
        service.add_player(room, 'p9', 'Alice')
    assert service.roster(room) == before
    service.add_player(room, 'p9', 'alice')
    assert len(room.players) == 3


def test_join_rejections(directory):
    room = make_room(directory)
    with pytest.raises(errors.InvalidName):
        service.add_player(room, 'x', '   ')
    with pytest.raises(errors.InvalidName):
        service.add_player(room, 'x', '<script>')
    with pytest.raises(errors.AlreadyInRoom):
        service.add_player(room, 'host', 'Host')
    room.game_started = True
    with pytest.raises(errors.GameAlreadyStarted):
        service.add_player(room, 'x', 'Late')
    directory.delete_room(room.code)
    with pytest.raises(errors.RoomNotFound):
        service.add_player(room, 'x', 'Ghost')


def test_remove_player_reports_host_and_empty(directory):
    room = make_room(directory, ('Alice',))
    result = service.remove_player(room, 'p0')
    assert result.player.name == 'Alice'
    assert result.now_empty and not result.was_host
    assert result.should_close

    room = make_room(directory)
    result = service.remove_player(room, 'host')
    assert result.player is None and result.was_host
    assert not result.now_empty
    assert result.should_close

    result = service.remove_player(room, 'nobody')
    assert result.player is None and not result.should_close


def test_start_game_rules(directory):
    room = make_room(directory, ('Alice',))
    with pytest.raises(errors.NotAuthorized):
        service.start_game(room, 'p0', 20)
    with pytest.raises(errors.NotEnoughPlayers):
        service.start_game(room, 'host', 20)
    service.add_player(room, 'p1', 'Bob')
    with pytest.raises(errors.InvalidTimer):
        service.start_game(room, 'host', 15)
    with pytest.raises(errors.InvalidTimer):
        service.start_game(room, 'host', 'soon')

    service.start_game(room, 'host', '20')
    assert room.game_started and room.current_round == 1
    assert room.timer_duration == 20 and room.phase == 'countdown'
    with pytest.raises(errors.GameAlreadyStarted):
        service.start_game(room, 'host', 20)


def test_start_game_defaults_timer(directory):
    room = make_room(directory)
    service.start_game(room, 'host')
    assert room.timer_duration == 30


def test_check_answer_format(directory):
    room = make_room(directory)
    with pytest.raises(errors.RoundNotActive):
        service.check_answer(room, 'p0', 'cat')

    activate(room)
    assert service.check_answer(room, 'p0', '  CAT ') == ('cat', room.generation)
    for bad in ('ct', 'dog', 'cab', '', None):
        with pytest.raises(errors.InvalidFormat):
            service.check_answer(room, 'p0', bad)
    with pytest.raises(errors.NotInRoom):
        service.check_answer(room, 'stranger', 'cat')


def test_record_submission_scores_reference_case(directory):
    room = make_room(directory)
    activate(room, first='C', last='T', start_ms=100_000, timer=20)

    result = service.record_submission(room, 'p0', 'copyright', 105_000, True)
    assert result.submission.multiplier == 3
    assert result.submission.base_points == 750
    assert result.submission.points == 2250
    assert result.player.score == 2250
    assert result.completed == [{'name': 'Alice', 'multiplier': 3}]
    assert result.all_completed is False
    assert result.to_payload() == {
        'word': 'copyright', 'points': 2250, 'basePoints': 750, 'multiplier': 3, 'remainingTime': 15000,
    }


def test_record_submission_only_once_per_round(directory):
    room = make_room(directory)
    activate(room)
    service.record_submission(room, 'p0', 'cat', 101_000, True)
    score = room.players[0].score

    for _ in range(3):
        with pytest.raises(errors.AlreadyAnswered):
            service.record_submission(room, 'p0', 'carrot', 102_000, True)
        with pytest.raises(errors.AlreadyAnswered):
            service.check_answer(room, 'p0', 'carrot')
    assert room.players[0].score == score
    assert list(room.submissions) == ['p0']


def test_second_answer_in_flight_is_rejected_at_commit(directory):
    room = make_room(directory)
    activate(room)
    word1, g1 = service.check_answer(room, 'p0', 'cat')
    word2, g2 = service.check_answer(room, 'p0', 'coat')
    assert g1 == g2

    first = service.record_submission(room, 'p0', word1, 101_000, True, generation=g1)
    score = room.players[0].score
    assert score == first.submission.points

    with pytest.raises(errors.AlreadyAnswered):
        service.record_submission(room, 'p0', word2, 101_500, True, generation=g2)
    assert room.players[0].score == score
    assert room.submissions['p0'].word == 'cat'


def test_invalid_word_is_not_stored_and_can_retry(directory):
    room = make_room(directory)
    activate(room)
    with pytest.raises(errors.WordNotRecognized):
        service.record_submission(room, 'p0', 'cxt', 101_000, False)
    assert room.submissions == {}
    assert room.players[0].score == 0

    result = service.record_submission(room, 'p0', 'cat', 102_000, True)
    assert result.player.score > 0


def test_late_submission_still_scores_minimum(directory):
    room = make_room(directory)
    activate(room, start_ms=100_000, timer=10)
    result = service.record_submission(room, 'p0', 'comet', 500_000, True)
    assert result.submission.remaining_ms == 0
    assert result.submission.base_points == 1
    assert result.submission.points == 2


def test_missing_timestamp_uses_server_clock(directory):
    room = make_room(directory)
    activate(room, start_ms=100_000, timer=10)
    result = service.record_submission(room, 'p0', 'cat', None, True, now=105_000)
    assert result.submission.remaining_ms == 5000
    assert result.submission.base_points == 500


def test_stale_generation_is_rejected(directory):
    room = make_room(directory)
    activate(room)
    _, generation = service.check_answer(room, 'p0', 'cat')
    room.bump('active')  # next round opened while the oracle was busy
    with pytest.raises(errors.RoundNotActive):
        service.record_submission(room, 'p0', 'cat', 101_000, True, generation=generation)


def test_all_completed_after_everyone_answers(directory):
    room = make_room(directory)
    activate(room)
    assert not service.record_submission(room, 'p0', 'cat', 101_000, True).all_completed
    result = service.record_submission(room, 'p1', 'coat', 101_500, True)
    assert result.all_completed
    assert [c['name'] for c in result.completed] == ['Alice', 'Bob']


def test_standings_are_stable_on_ties(directory):
    room = make_room(directory, ('Alice', 'Bob', 'Cara'))
    room.players[0].score = 100
    room.players[1].score = 300
    room.players[2].score = 100
    assert service.standings(room) == [
        {'name': 'Bob', 'score': 300, 'rank': 1},
        {'name': 'Alice', 'score': 100, 'rank': 2},
        {'name': 'Cara', 'score': 100, 'rank': 3},
    ]
    # join order untouched
    assert [s['name'] for s in service.scores(room)] == ['Alice', 'Bob', 'Cara']


def test_public_state_hides_letters_before_round(directory):
    room = make_room(directory)
    state = service.room_public_state(room)
    assert state['phase'] == 'lobby' and state['firstLetter'] is None
    activate(room)
    state = service.room_public_state(room)
    assert (state['firstLetter'], state['lastLetter']) == ('C', 'T')
