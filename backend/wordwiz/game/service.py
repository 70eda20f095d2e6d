from __future__ import annotations

import random
import string
import time
from dataclasses import dataclass
from threading import RLock
from typing import Any, Iterable

from . import errors
from .models import Player, Room, Submission
from .scoring import remaining_time_ms, score_answer


MAX_NAME_LENGTH = 16
MIN_WORD_LENGTH = 3


def now_ms() -> int:
    return int(time.time() * 1000)


class RoomDirectory:
    """Owns every live Room, keyed by its short code.

    The directory lock only guards the mapping. Room state is guarded by
    each room's own lock so busy rooms never stall unrelated ones.
    """

    def __init__(
        self,
        code_length: int = 4,
        total_rounds: int = 10,
        default_timer: int = 30,
        rng: random.Random | None = None,
    ) -> None:
        self.code_length = code_length
        self.total_rounds = total_rounds
        self.default_timer = default_timer
        self._rng = rng or random.SystemRandom()
        self._lock = RLock()
        self._rooms: dict[str, Room] = {}

    @classmethod
    def from_config(cls, config) -> "RoomDirectory":
        return cls(
            code_length=int(config.get("ROOM_CODE_LENGTH", 4)),
            total_rounds=int(config.get("TOTAL_ROUNDS", 10)),
            default_timer=int(config.get("DEFAULT_TIMER_SEC", 30)),
        )

    def _new_code(self) -> str:
        return "".join(self._rng.choice(string.ascii_uppercase) for _ in range(self.code_length))

    def create_room(self, host_id: str) -> Room:
        with self._lock:
            code = self._new_code()
            while code in self._rooms:
                code = self._new_code()

            room = Room(
                code=code,
                host_id=host_id,
                total_rounds=self.total_rounds,
                timer_duration=self.default_timer,
                created_at_ms=now_ms(),
            )
            self._rooms[code] = room
            return room

    def get_room(self, code: str) -> Room | None:
        if not code:
            return None
        with self._lock:
            return self._rooms.get(code.strip().upper())

    def delete_room(self, code: str) -> bool:
        with self._lock:
            room = self._rooms.pop(code.strip().upper(), None) if code else None
        if room is None:
            return False
        with room.lock:
            room.closed = True
            # Invalidate any timer still sleeping for this room.
            room.bump()
        return True

    def list_rooms(self) -> list[Room]:
        with self._lock:
            return list(self._rooms.values())

    def rooms_with(self, connection_id: str) -> list[Room]:
        return [
            r for r in self.list_rooms()
            if r.host_id == connection_id or r.find_player(connection_id) is not None
        ]

    def __len__(self) -> int:
        with self._lock:
            return len(self._rooms)


@dataclass(frozen=True)
class LeaveResult:
    player: Player | None
    was_host: bool
    now_empty: bool

    @property
    def should_close(self) -> bool:
        return self.was_host or self.now_empty


@dataclass(frozen=True)
class ScoreResult:
    player: Player
    submission: Submission
    completed: list[dict]
    all_completed: bool

    def to_payload(self) -> dict:
        s = self.submission
        return {
            "word": s.word,
            "points": s.points,
            "basePoints": s.base_points,
            "multiplier": s.multiplier,
            "remainingTime": s.remaining_ms,
        }


def validate_name(name: str) -> bool:
    n = (name or "").strip()
    if not n:
        return False
    if len(n) > MAX_NAME_LENGTH:
        return False
    if "<" in n or ">" in n:
        return False
    for ch in n:
        if ord(ch) < 32:
            return False
    return True


def add_player(room: Room, player_id: str, name: str) -> Player:
    name = (name or "").strip()
    with room.lock:
        if room.closed:
            raise errors.RoomNotFound()
        if room.game_started:
            raise errors.GameAlreadyStarted()
        if not validate_name(name):
            raise errors.InvalidName()
        if any(p.name == name for p in room.players):
            raise errors.NameTaken()
        if player_id == room.host_id or room.find_player(player_id) is not None:
            raise errors.AlreadyInRoom()

        player = Player(id=player_id, name=name)
        room.players.append(player)
        return player


def remove_player(room: Room, player_id: str) -> LeaveResult:
    with room.lock:
        player = room.find_player(player_id)
        if player is not None:
            room.players.remove(player)
            room.submissions.pop(player_id, None)
        return LeaveResult(
            player=player,
            was_host=player_id == room.host_id,
            now_empty=player is not None and not room.players,
        )


def start_game(
    room: Room,
    requester_id: str,
    timer_duration: Any = None,
    min_players: int = 2,
    timer_choices: Iterable[int] = (10, 20, 30),
) -> int:
    """Move the room out of the lobby. Returns the new timer generation."""
    with room.lock:
        if room.closed:
            raise errors.RoomNotFound()
        if requester_id != room.host_id:
            raise errors.NotAuthorized()
        if room.game_started:
            raise errors.GameAlreadyStarted()
        if len(room.players) < min_players:
            raise errors.NotEnoughPlayers(f"Need at least {min_players} players")

        if timer_duration in (None, ""):
            duration = room.timer_duration
        else:
            try:
                duration = int(timer_duration)
            except (TypeError, ValueError):
                raise errors.InvalidTimer()
        if duration not in tuple(timer_choices):
            raise errors.InvalidTimer()

        room.game_started = True
        room.current_round = 1
        room.timer_duration = duration
        return room.bump("countdown")


def normalize_word(word: Any) -> str:
    return str(word or "").strip().lower()


def _check_format(room: Room, word: str) -> None:
    ch = room.challenge
    if ch is None:
        raise errors.RoundNotActive()
    if len(word) < MIN_WORD_LENGTH:
        raise errors.InvalidFormat()
    if word[0].upper() != ch.first_letter or word[-1].upper() != ch.last_letter:
        raise errors.InvalidFormat()


def _check_can_answer(room: Room, player_id: str) -> Player:
    if room.closed:
        raise errors.RoomNotFound()
    if room.phase != "active":
        raise errors.RoundNotActive()
    player = room.find_player(player_id)
    if player is None:
        raise errors.NotInRoom()
    if player_id in room.submissions:
        raise errors.AlreadyAnswered()
    return player


def check_answer(room: Room, player_id: str, word: Any) -> tuple[str, int]:
    """Cheap pre-check run before asking the oracle.

    Returns the normalized word and the round generation it was checked
    against, which the later commit must still match.
    """
    w = normalize_word(word)
    with room.lock:
        _check_can_answer(room, player_id)
        _check_format(room, w)
        return w, room.generation


def completed_players(room: Room) -> list[dict]:
    with room.lock:
        return [
            {"name": s.player_name, "multiplier": s.multiplier}
            for s in room.submissions.values()
            if s.correct
        ]


def everyone_answered(room: Room) -> bool:
    with room.lock:
        if not room.players:
            return False
        return all(p.id in room.submissions for p in room.players)


def record_submission(
    room: Room,
    player_id: str,
    word: Any,
    client_timestamp: Any,
    is_valid: bool,
    generation: int | None = None,
    max_score: int = 1000,
    now: int | None = None,
) -> ScoreResult:
    """Commit a checked answer: score it and store it, all under the room lock.

    State may have moved on while the oracle was thinking, so everything
    check_answer() verified is verified again here.
    """
    w = normalize_word(word)
    with room.lock:
        player = _check_can_answer(room, player_id)
        if generation is not None and generation != room.generation:
            raise errors.RoundNotActive()
        _check_format(room, w)
        if not is_valid:
            raise errors.WordNotRecognized()

        server_now = now if now is not None else now_ms()
        try:
            answer_ms = int(client_timestamp) if client_timestamp else server_now
        except (TypeError, ValueError):
            answer_ms = server_now
        round_start = room.round_start_ms if room.round_start_ms is not None else server_now

        remaining = remaining_time_ms(room.timer_duration, round_start, answer_ms)
        breakdown = score_answer(len(w), remaining, room.timer_duration, max_score=max_score)

        submission = Submission(
            player_id=player.id,
            player_name=player.name,
            word=w,
            timestamp_ms=answer_ms,
            remaining_ms=breakdown.remaining_ms,
            multiplier=breakdown.multiplier,
            word_length=len(w),
            base_points=breakdown.base_points,
            points=breakdown.points,
        )
        room.submissions[player.id] = submission
        player.score += breakdown.points

        return ScoreResult(
            player=player,
            submission=submission,
            completed=completed_players(room),
            all_completed=everyone_answered(room),
        )


def scores(room: Room) -> list[dict]:
    with room.lock:
        return [{"name": p.name, "score": p.score} for p in room.players]


def standings(room: Room) -> list[dict]:
    # sorted() is stable: equal scores keep join order.
    with room.lock:
        ranked = sorted(room.players, key=lambda p: p.score, reverse=True)
        return [{"name": p.name, "score": p.score, "rank": i + 1} for i, p in enumerate(ranked)]


def roster(room: Room) -> list[dict]:
    with room.lock:
        return [{"id": p.id, "name": p.name, "score": p.score} for p in room.players]


def correct_answers(room: Room) -> list[dict]:
    with room.lock:
        return [
            {
                "player": s.player_name,
                "word": s.word,
                "points": s.points,
                "basePoints": s.base_points,
                "multiplier": s.multiplier,
            }
            for s in room.submissions.values()
            if s.correct
        ]


def room_public_state(room: Room) -> dict:
    with room.lock:
        ch = room.challenge
        show_letters = ch is not None and room.phase in ("active", "settling")
        return {
            "code": room.code,
            "phase": room.phase,
            "gameStarted": room.game_started,
            "round": room.current_round,
            "totalRounds": room.total_rounds,
            "timerDuration": room.timer_duration,
            "roundStartMs": room.round_start_ms,
            "firstLetter": ch.first_letter if show_letters else None,
            "lastLetter": ch.last_letter if show_letters else None,
            "players": [{"name": p.name, "score": p.score} for p in room.players],
            "completedPlayers": completed_players(room),
        }
