import os


def _int_list(raw: str) -> tuple[int, ...]:
    return tuple(int(p) for p in raw.split(",") if p.strip())


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev")

    # CORS
    CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "*")

    # Reverse proxy / IP headers
    TRUST_PROXY_HEADERS = os.environ.get("TRUST_PROXY_HEADERS", "1") == "1"

    # Empty means: pick per platform in create_app()
    SOCKETIO_ASYNC_MODE = os.environ.get("SOCKETIO_ASYNC_MODE", "").strip()

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Game
    TOTAL_ROUNDS = int(os.environ.get("TOTAL_ROUNDS", "10"))
    MID_GAME_ROUND = int(os.environ.get("MID_GAME_ROUND", "5"))
    MIN_PLAYERS = int(os.environ.get("MIN_PLAYERS", "2"))
    TIMER_CHOICES = _int_list(os.environ.get("TIMER_CHOICES", "10,20,30"))
    DEFAULT_TIMER_SEC = int(os.environ.get("DEFAULT_TIMER_SEC", "30"))
    MAX_SCORE = int(os.environ.get("MAX_SCORE", "1000"))
    ROOM_CODE_LENGTH = int(os.environ.get("ROOM_CODE_LENGTH", "4"))

    # Timers (seconds)
    START_LEAD_IN_SEC = float(os.environ.get("START_LEAD_IN_SEC", "3"))
    # Client shows a letter reveal countdown before the answer window opens.
    ROUND_REVEAL_SEC = float(os.environ.get("ROUND_REVEAL_SEC", "3"))
    MID_SUMMARY_SEC = float(os.environ.get("MID_SUMMARY_SEC", "8"))

    # Word checking: "client" round-trips check-word, "server" asks the oracle.
    WORD_CHECK_MODE = os.environ.get("WORD_CHECK_MODE", "client")
    DICTIONARY_API_URL = os.environ.get(
        "DICTIONARY_API_URL", "https://api.dictionaryapi.dev/api/v2/entries/en/{word}"
    )
    DICTIONARY_API_TIMEOUT_SEC = float(os.environ.get("DICTIONARY_API_TIMEOUT_SEC", "5"))
