"""Chirp body validation and profanity masking."""
from chirpy.errors import InvalidInputError

MAX_CHIRP_LENGTH = 140
PROFANE_WORDS = frozenset({"kerfuffle", "sharbert", "fornax"})
MASK = "****"


def validate_chirp_body(body: str) -> None:
    if len(body) > MAX_CHIRP_LENGTH:
        raise InvalidInputError("Chirp is too long")


def clean_chirp_body(body: str) -> str:
    """Mask profane words.

    Words are split on single spaces, so "Fornax!" is left as is.
    """
    words = body.split(" ")
    return " ".join(MASK if word.lower() in PROFANE_WORDS else word for word in words)


def prepare_chirp_body(body: str) -> str:
    validate_chirp_body(body)
    return clean_chirp_body(body)
