from __future__ import annotations

import logging
from typing import Any, Callable

from . import challenge, errors, service
from .models import Room, RoomPhase


logger = logging.getLogger(__name__)

Emit = Callable[..., Any]


class RoundScheduler:
    """Drives each room through its rounds.

    Phases run lobby -> countdown -> active -> settling, then either the
    next countdown, the mid-game summary, or game_over. Every delayed
    callback remembers the room code, the phase it expects and the room's
    generation at scheduling time; when any of those changed by the time it
    wakes up (new round, teardown) the callback does nothing.

    ``emit`` has the signature of ``SocketIO.emit``; ``start_task`` and
    ``sleep`` those of ``SocketIO.start_background_task`` and
    ``SocketIO.sleep``.
    """

    def __init__(
        self,
        directory: service.RoomDirectory,
        emit: Emit,
        start_task: Callable[..., Any],
        sleep: Callable[[float], Any],
        settings: dict | None = None,
        clock: Callable[[], int] = service.now_ms,
        rng=None,
    ) -> None:
        settings = settings or {}
        self.directory = directory
        self.emit = emit
        self.start_task = start_task
        self.sleep = sleep
        self.clock = clock
        self.rng = rng
        self.start_lead_in_sec = float(settings.get("START_LEAD_IN_SEC", 3))
        self.round_reveal_sec = float(settings.get("ROUND_REVEAL_SEC", 3))
        self.mid_summary_sec = float(settings.get("MID_SUMMARY_SEC", 8))
        self.mid_game_round = int(settings.get("MID_GAME_ROUND", 5))

    # ---- timers ----

    def _schedule(self, room: Room, phase: RoomPhase, delay: float, callback: Callable[[Room], None]) -> None:
        code, generation = room.code, room.generation
        logger.info("[timer-set] room=%s phase=%s round=%s delay=%ss", code, phase, room.current_round, delay)

        def _worker() -> None:
            if delay > 0:
                self.sleep(delay)
            self._fire(code, phase, generation, callback)

        self.start_task(_worker)

    def _fire(self, code: str, phase: RoomPhase, generation: int, callback: Callable[[Room], None]) -> None:
        room = self.directory.get_room(code)
        if room is None:
            logger.info("[timer-stale] room=%s gone", code)
            return
        with room.lock:
            if room.closed or room.generation != generation or room.phase != phase:
                logger.info(
                    "[timer-stale] room=%s expected=%s/%s actual=%s/%s",
                    code, phase, generation, room.phase, room.generation,
                )
                return
            logger.info("[timer-fire] room=%s phase=%s round=%s", code, phase, room.current_round)
            try:
                callback(room)
            except Exception:
                logger.exception("[timer-error] room=%s phase=%s", code, phase)

    # ---- transitions ----

    def begin_game(self, room: Room) -> None:
        """Announce the start and open round 1 after the lead-in."""
        with room.lock:
            self.emit("game-starting", {"timerDuration": room.timer_duration}, to=room.code)
            self._schedule(room, "countdown", self.start_lead_in_sec, self.open_round)

    def open_round(self, room: Room) -> None:
        with room.lock:
            if room.closed:
                return
            room.challenge = challenge.generate(rng=self.rng)
            room.submissions = {}
            # Letters are revealed client side after the reveal countdown;
            # the answer window (and the timeout) start after it.
            room.round_start_ms = self.clock() + int(self.round_reveal_sec * 1000)
            room.bump("active")

            ch = room.challenge
            self.emit(
                "new-round",
                {
                    "round": room.current_round,
                    "totalRounds": room.total_rounds,
                    "firstLetter": ch.first_letter,
                    "lastLetter": ch.last_letter,
                    "timerDuration": room.timer_duration,
                },
                to=room.code,
            )
            logger.info(
                "[round-open] room=%s round=%s/%s letters=%s..%s",
                room.code, room.current_round, room.total_rounds, ch.first_letter, ch.last_letter,
            )
            self._schedule(room, "active", self.round_reveal_sec + room.timer_duration, self._on_timeout)

    def _on_timeout(self, room: Room) -> None:
        self.settle_round(room, early=False)

    def settle_round(self, room: Room, early: bool = False) -> bool:
        """Close the answer window and publish the round summary.

        Returns False when the round was already settled.
        """
        with room.lock:
            if room.closed or room.phase != "active":
                return False
            room.bump("settling")

            answers = service.correct_answers(room)
            ch = room.challenge
            if not answers:
                example = challenge.find_example(ch.first_letter, ch.last_letter, rng=self.rng) if ch else None
                self.emit("round-timeout", {"exampleWord": example}, to=room.code)
            elif early:
                self.emit("round-ended-early", {"correctAnswers": answers}, to=room.code)
            else:
                self.emit("round-complete", {"correctAnswers": answers}, to=room.code)

            self.emit(
                "waiting-for-host",
                {"message": "Waiting for host to start next round..."},
                to=room.code,
                skip_sid=room.host_id,
            )
            self.emit(
                "show-continue-button",
                {"currentRound": room.current_round, "totalRounds": room.total_rounds},
                to=room.host_id,
            )
            logger.info(
                "[round-settled] room=%s round=%s correct=%s early=%s",
                room.code, room.current_round, len(answers), early,
            )
            return True

    def end_early_if_complete(self, room: Room) -> bool:
        with room.lock:
            if room.phase != "active" or not service.everyone_answered(room):
                return False
            return self.settle_round(room, early=True)

    def advance(self, room: Room, requester_id: str) -> None:
        """Host pressed continue."""
        with room.lock:
            if room.closed:
                raise errors.RoomNotFound()
            if requester_id != room.host_id:
                raise errors.NotAuthorized()
            if room.phase == "game_over":
                raise errors.GameOver()
            if room.phase != "settling":
                raise errors.RoundInProgress()

            if room.current_round >= room.total_rounds:
                self.end_game(room)
            elif room.current_round == self.mid_game_round:
                self.show_mid_summary(room)
            else:
                self._next_round(room)

    def _next_round(self, room: Room) -> None:
        with room.lock:
            room.current_round += 1
            room.bump("countdown")
            self.open_round(room)

    def show_mid_summary(self, room: Room) -> None:
        with room.lock:
            room.bump("mid_summary")
            self.emit(
                "mid-game-summary",
                {
                    "scores": service.standings(room),
                    "currentRound": room.current_round,
                    "totalRounds": room.total_rounds,
                },
                to=room.code,
            )
            logger.info("[mid-summary] room=%s round=%s", room.code, room.current_round)
            self._schedule(room, "mid_summary", self.mid_summary_sec, self._next_round)

    def end_game(self, room: Room) -> None:
        with room.lock:
            room.bump("game_over")
            final_scores = [{"name": s["name"], "score": s["score"]} for s in service.standings(room)]
            winner = final_scores[0] if final_scores else None
            self.emit("game-over", {"scores": final_scores, "winner": winner}, to=room.code)
            logger.info("[game-over] room=%s winner=%s", room.code, winner["name"] if winner else None)
