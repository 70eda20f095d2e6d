from __future__ import annotations

import logging
from typing import Any

from flask import request
from flask_socketio import SocketIO, emit, join_room, leave_room

from ..game import errors, service
from ..game.models import Room
from ..game.oracle import WordOracle
from ..game.scheduler import RoundScheduler
from ..utils.ip import get_client_ip, get_server_url
from .registry import ConnectionRegistry


logger = logging.getLogger(__name__)


def _room_code(payload: dict) -> str:
    return str(payload.get("roomCode", "")).strip().upper()


def _answer_timestamp(payload: dict) -> Any:
    ts = payload.get("clientTimestamp")
    if ts is None:
        ts = payload.get("timestamp")
    return ts


def register_socketio_handlers(
    socketio: SocketIO,
    directory: service.RoomDirectory,
    registry: ConnectionRegistry,
    oracle: WordOracle,
    scheduler: RoundScheduler,
    settings: dict,
) -> None:
    min_players = int(settings.get("MIN_PLAYERS", 2))
    timer_choices = tuple(settings.get("TIMER_CHOICES", (10, 20, 30)))
    max_score = int(settings.get("MAX_SCORE", 1000))
    server_checks_words = settings.get("WORD_CHECK_MODE", "client") == "server"

    def _reply_error(exc: errors.GameError, event: str = "game-error") -> dict:
        emit(event, exc.to_payload())
        return {"ok": False, "error": exc.code}

    def _reply_rejection(exc: errors.GameError) -> dict:
        if isinstance(exc, errors.AlreadyAnswered):
            return _reply_error(exc, "already-answered")
        if isinstance(exc, errors.InvalidFormat):
            return _reply_error(exc, "invalid-answer")
        if isinstance(exc, errors.WordNotRecognized):
            return _reply_error(exc, "invalid-word")
        return _reply_error(exc)

    def _close_room(room: Room, reason: str) -> None:
        directory.delete_room(room.code)
        socketio.emit("room-closed", {"roomCode": room.code, "reason": reason}, to=room.code)
        registry.drop_room(room.code)
        socketio.close_room(room.code)
        logger.info("[room-closed] room=%s reason=%s", room.code, reason)

    def _depart(sid: str, room: Room) -> None:
        result = service.remove_player(room, sid)
        registry.unbind(sid)

        if result.player is not None:
            logger.info("[player-left] room=%s name=%s", room.code, result.player.name)
            socketio.emit(
                "player-left",
                {"playerName": result.player.name, "players": service.roster(room)},
                to=room.code,
            )

        if result.should_close:
            _close_room(room, "host_left" if result.was_host else "empty")
        elif result.player is not None:
            # The leaver may have been the last one still thinking.
            scheduler.end_early_if_complete(room)

    def _commit_answer(room: Room, sid: str, word: Any, ts: Any, is_valid: bool, generation: int | None) -> dict:
        try:
            result = service.record_submission(
                room, sid, word, ts, is_valid, generation=generation, max_score=max_score
            )
        except errors.GameError as exc:
            return _reply_rejection(exc)

        emit("correct-answer", result.to_payload())
        socketio.emit("score-update", {"scores": service.scores(room)}, to=room.code)
        socketio.emit(
            "player-completed",
            {
                "playerName": result.player.name,
                "word": result.submission.word,
                "multiplier": result.submission.multiplier,
                "allCompletedPlayers": result.completed,
            },
            to=room.host_id,
        )
        if result.all_completed:
            scheduler.end_early_if_complete(room)
        return {"ok": True, "points": result.submission.points}

    @socketio.on("connect")
    def on_connect(auth=None):
        logger.info("[connect] sid=%s ip=%s", request.sid, get_client_ip(request))

    @socketio.on("create-room")
    def create_room(data=None):
        sid = request.sid
        if registry.room_of(sid):
            return _reply_error(errors.AlreadyInRoom())

        room = directory.create_room(host_id=sid)
        join_room(room.code)
        registry.bind(sid, room.code)
        logger.info("[room-created] room=%s host=%s", room.code, sid)

        emit("room-created", {"roomCode": room.code, "serverURL": get_server_url(request)})
        return {"ok": True, "roomCode": room.code}

    @socketio.on("join-room")
    def join(data):
        payload = data or {}
        sid = request.sid
        room_code = _room_code(payload)
        name = str(payload.get("playerName", "")).strip()

        room = directory.get_room(room_code)
        if not room:
            return _reply_error(errors.RoomNotFound(), "join-error")

        current = registry.room_of(sid)
        if current and current != room.code:
            return _reply_error(errors.AlreadyInRoom(), "join-error")

        try:
            service.add_player(room, sid, name)
        except errors.GameError as exc:
            return _reply_error(exc, "join-error")

        join_room(room.code)
        registry.bind(sid, room.code)
        logger.info("[player-joined] room=%s name=%s", room.code, name)

        players = service.roster(room)
        emit("joined-room", {"roomCode": room.code, "playerName": name, "players": players})
        socketio.emit("player-joined", {"players": players}, to=room.code)
        return {"ok": True}

    @socketio.on("leave-room")
    def leave(data=None):
        payload = data or {}
        sid = request.sid
        room = directory.get_room(_room_code(payload) or registry.room_of(sid) or "")
        if not room or registry.room_of(sid) != room.code:
            return {"ok": False, "error": errors.NotInRoom.code}

        leave_room(room.code)
        _depart(sid, room)
        return {"ok": True}

    @socketio.on("start-game")
    def start_game(data):
        payload = data or {}
        room = directory.get_room(_room_code(payload))
        if not room:
            return _reply_error(errors.RoomNotFound())

        try:
            service.start_game(
                room,
                request.sid,
                payload.get("timerDuration"),
                min_players=min_players,
                timer_choices=timer_choices,
            )
        except errors.GameError as exc:
            return _reply_error(exc)

        logger.info("[game-start] room=%s players=%s timer=%ss", room.code, len(room.players), room.timer_duration)
        scheduler.begin_game(room)
        return {"ok": True}

    @socketio.on("submit-answer")
    def submit_answer(data):
        payload = data or {}
        sid = request.sid
        room = directory.get_room(_room_code(payload))
        if not room:
            return _reply_error(errors.RoomNotFound())

        try:
            word, generation = service.check_answer(room, sid, payload.get("answer"))
        except errors.GameError as exc:
            return _reply_rejection(exc)

        ts = _answer_timestamp(payload) or service.now_ms()

        if server_checks_words:
            # No room lock held here: the lookup may hit the network.
            is_valid = oracle.is_valid(word)
            return _commit_answer(room, sid, word, ts, is_valid, generation)

        emit("check-word", {"answer": word, "timestamp": ts})
        return {"ok": True, "pending": True}

    @socketio.on("word-validated")
    def word_validated(data):
        if server_checks_words:
            logger.debug("[word-validated] ignored from sid=%s, server checks words", request.sid)
            return {"ok": False, "error": "server_validation"}

        payload = data or {}
        room = directory.get_room(_room_code(payload))
        if not room:
            return _reply_error(errors.RoomNotFound())

        return _commit_answer(
            room,
            request.sid,
            payload.get("answer"),
            _answer_timestamp(payload),
            bool(payload.get("isValid")),
            None,
        )

    @socketio.on("continue-to-next-round")
    def continue_to_next_round(data):
        payload = data or {}
        room = directory.get_room(_room_code(payload))
        if not room:
            return _reply_error(errors.RoomNotFound())

        try:
            scheduler.advance(room, request.sid)
        except errors.GameError as exc:
            return _reply_error(exc)
        return {"ok": True}

    @socketio.on("disconnect")
    def on_disconnect(reason=None):
        sid = request.sid
        code = registry.room_of(sid)
        if code:
            rooms = [r for r in [directory.get_room(code)] if r is not None]
        else:
            rooms = directory.rooms_with(sid)

        for room in rooms:
            _depart(sid, room)
        registry.unbind(sid)
        logger.info("[disconnect] sid=%s rooms=%s", sid, [r.code for r in rooms])
