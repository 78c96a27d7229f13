from srtlingo.subtitles import (
    SubtitleBlock,
    blocks_to_srt,
    parse_srt,
    translated_filename,
    write_srt,
)
from srtlingo.translate.direction import TranslationDirection


def test_serializes_blocks_with_single_blank_line_between():
    blocks = [
        SubtitleBlock("1", "00:00:01,000 --> 00:00:02,000", "Hello"),
        SubtitleBlock("2", "00:00:03,000 --> 00:00:04,000", "Two\nlines"),
    ]

    assert blocks_to_srt(blocks) == (
        "1\n00:00:01,000 --> 00:00:02,000\nHello\n"
        "\n"
        "2\n00:00:03,000 --> 00:00:04,000\nTwo\nlines\n"
    )


def test_empty_sequence_serializes_to_empty_string():
    assert blocks_to_srt([]) == ""


def test_round_trip_preserves_blocks(srt_factory):
    blocks = parse_srt(srt_factory(12) + "\n13\n00:01:00,000 --> 00:01:01,000\nMulti\nline\n")

    again = parse_srt(blocks_to_srt(blocks))

    assert again == blocks
    assert len(again) == 13


def test_round_trip_canonicalizes_messy_input():
    messy = "\r\n\r\n1\r\n 00:00:01,000 --> 00:00:02,000 \r\nHi  \r\n\r\n\r\n\r\n2\r\n00:00:03,000 --> 00:00:04,000\r\nYo\r\n\r\n"

    assert blocks_to_srt(parse_srt(messy)) == (
        "1\n00:00:01,000 --> 00:00:02,000\nHi\n\n2\n00:00:03,000 --> 00:00:04,000\nYo\n"
    )


def test_write_srt_creates_parent_directories(tmp_path):
    target = tmp_path / "out" / "nested" / "movie.srt"

    written = write_srt([SubtitleBlock("1", "T", "Text")], target)

    assert written == target.resolve()
    assert target.read_text(encoding="utf-8") == "1\nT\nText\n"


def test_translated_filename():
    assert translated_filename("movie.srt", TranslationDirection.EN_TO_FA) == "movie_translated_en-fa.srt"
    assert translated_filename("show.en.txt", TranslationDirection.FA_TO_EN) == "show.en_translated_fa-en.srt"
    assert translated_filename("noext", TranslationDirection.EN_TO_FA) == "noext_translated_en-fa.srt"
