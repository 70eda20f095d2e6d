from __future__ import annotations

from dataclasses import dataclass, field
from threading import RLock
from typing import Literal


RoomPhase = Literal["lobby", "countdown", "active", "settling", "mid_summary", "game_over"]


@dataclass
class Player:
    id: str
    name: str
    score: int = 0


@dataclass(frozen=True)
class Challenge:
    first_letter: str
    last_letter: str
    difficulty_bonus: int = 0


@dataclass(frozen=True)
class Submission:
    player_id: str
    player_name: str
    word: str
    timestamp_ms: int
    remaining_ms: int
    multiplier: int
    word_length: int
    base_points: int
    points: int
    correct: bool = True


@dataclass
class Room:
    code: str
    host_id: str
    phase: RoomPhase = "lobby"
    game_started: bool = False
    current_round: int = 0
    total_rounds: int = 10
    timer_duration: int = 30
    challenge: Challenge | None = None
    round_start_ms: int | None = None
    players: list[Player] = field(default_factory=list)
    submissions: dict[str, Submission] = field(default_factory=dict)
    # Bumped on every phase change; pending timers compare against it.
    generation: int = 0
    closed: bool = False
    created_at_ms: int = 0
    lock: RLock = field(default_factory=RLock, repr=False, compare=False)

    def find_player(self, player_id: str) -> Player | None:
        for p in self.players:
            if p.id == player_id:
                return p
        return None

    def bump(self, phase: RoomPhase | None = None) -> int:
        if phase is not None:
            self.phase = phase
        self.generation += 1
        return self.generation
