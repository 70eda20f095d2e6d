from __future__ import annotations


class GameError(Exception):
    """Base for every request error reported back to a single connection."""

    code = "game_error"
    message = "Request failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        if message:
            self.message = message

    def to_payload(self) -> dict:
        return {"error": self.code, "message": self.message}


# Client request errors


class RoomNotFound(GameError):
    code = "room_not_found"
    message = "Room not found"


class NameTaken(GameError):
    code = "name_taken"
    message = "Name already taken"


class InvalidName(GameError):
    code = "invalid_name"
    message = "Invalid player name"


class GameAlreadyStarted(GameError):
    code = "game_already_started"
    message = "Game already in progress"


class NotAuthorized(GameError):
    code = "not_authorized"
    message = "Only the host can do that"


class NotEnoughPlayers(GameError):
    code = "not_enough_players"
    message = "Need at least 2 players"


class InvalidTimer(GameError):
    code = "invalid_timer"
    message = "Unsupported timer duration"


class NotInRoom(GameError):
    code = "not_in_room"
    message = "You are not in this room"


class AlreadyInRoom(GameError):
    code = "already_in_room"
    message = "Connection already belongs to a room"


class RoundNotActive(GameError):
    code = "round_not_active"
    message = "No round is accepting answers"


class RoundInProgress(GameError):
    code = "round_in_progress"
    message = "The current round has not finished yet"


class GameOver(GameError):
    code = "game_over"
    message = "The game has finished"


# Validation rejections: the participant may retry within the round


class InvalidFormat(GameError):
    code = "invalid_answer"
    message = "Word must start and end with the correct letters"


class WordNotRecognized(GameError):
    code = "invalid_word"
    message = "Word not in dictionary"


class AlreadyAnswered(GameError):
    code = "already_answered"
    message = "You already answered this round!"
