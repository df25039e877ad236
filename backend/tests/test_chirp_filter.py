import pytest

from chirpy.errors import InvalidInputError
from chirpy.services.chirp_filter import MAX_CHIRP_LENGTH, clean_chirp_body, prepare_chirp_body


def test_profane_words_are_masked_case_insensitively():
    body = "This is a kerfuffle opinion I need to share with the world Sharbert FORNAX"

    assert clean_chirp_body(body) == "This is a **** opinion I need to share with the world **** ****"


def test_words_with_punctuation_are_left_alone():
    assert clean_chirp_body("What a kerfuffle! Sharbert.") == "What a kerfuffle! Sharbert."


def test_clean_body_is_unchanged():
    assert clean_chirp_body("I had something interesting for breakfast") == "I had something interesting for breakfast"


def test_length_limit():
    assert prepare_chirp_body("a" * MAX_CHIRP_LENGTH) == "a" * MAX_CHIRP_LENGTH

    with pytest.raises(InvalidInputError, match="Chirp is too long"):
        prepare_chirp_body("a" * (MAX_CHIRP_LENGTH + 1))
