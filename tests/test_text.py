from __future__ import annotations

from lyrics_logic.text import extract_words, song_lines, unique_words, word_frequency


def test_extract_words_strips_punctuation_and_case() -> None:
    assert extract_words("Hello, World! hello...") == ["hello", "world", "hello"]


def test_extract_words_drops_stop_words_and_short_tokens() -> None:
    assert extract_words("I love you and a b cd") == ["love", "cd"]


def test_extract_words_keeps_non_latin_scripts() -> None:
    words = extract_words("사랑해요! love 愛してる, amor-mío")

    assert words == ["사랑해요", "love", "愛してる", "amormío"]


def test_extract_words_is_idempotent() -> None:
    lyrics = "Mi corazón, mi VIDA!\nSiempre contigo... (siempre)"
    words = extract_words(lyrics)

    assert extract_words(" ".join(words)) == words
    assert all(word == word.lower() for word in words)


def test_extract_words_handles_empty_and_punctuation_only_input() -> None:
    assert extract_words("") == []
    assert extract_words("?!... ,, --") == []


def test_unique_words_keeps_first_occurrence_order() -> None:
    assert unique_words("love heart love hope heart") == ["love", "heart", "hope"]


def test_word_frequency_counts_occurrences() -> None:
    counts = word_frequency(extract_words("love love love heart heart hope"))

    assert counts == {"love": 3, "heart": 2, "hope": 1}
    assert list(counts) == ["love", "heart", "hope"]


def test_song_lines_skip_blank_lines() -> None:
    assert song_lines("first\n\n  \nsecond\nthird\n") == ["first", "second", "third"]
