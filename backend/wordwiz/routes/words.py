from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

from ..game import challenge

bp = Blueprint("words", __name__)


def _letter(name: str) -> str:
    value = request.args.get(name, "").strip().upper()
    return value if len(value) == 1 and value.isalpha() else ""


@bp.get("/words/check")
def check_word():
    word = request.args.get("word", "").strip().lower()
    if not word:
        return jsonify({"error": "invalid_word"}), 400

    oracle = current_app.extensions["wordwiz"]["oracle"]
    return jsonify({"word": word, "valid": oracle.is_valid(word)})


@bp.get("/words/example")
def example_word():
    first, last = _letter("first"), _letter("last")
    if not first or not last:
        return jsonify({"error": "invalid_letters"}), 400
    return jsonify({"first": first, "last": last, "example": challenge.find_example(first, last)})


@bp.get("/challenge")
def sample_challenge():
    ch = challenge.generate()
    return jsonify(
        {
            "firstLetter": ch.first_letter,
            "lastLetter": ch.last_letter,
            "difficultyBonus": ch.difficulty_bonus,
        }
    )
