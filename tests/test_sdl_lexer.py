import pytest

from raytracer.SDL_Scene.core.errors import SDLSyntaxError
from raytracer.SDL_Scene.parsers.sdl_lexer import tokenize


def kinds(tokens):
    return [(t.type, t.value) for t in tokens]


def test_basic_tokens():
    tokens = tokenize("sphere { radius 2.0 }")
    assert kinds(tokens) == [
        ("WORD", "sphere"),
        ("{", "{"),
        ("WORD", "radius"),
        ("FLOAT", "2.0"),
        ("}", "}"),
    ]


def test_vector_punctuation_and_negative_numbers():
    tokens = tokenize("<-1, 2.5e3,3>")
    assert kinds(tokens) == [
        ("<", "<"),
        ("FLOAT", "-1"),
        (",", ","),
        ("FLOAT", "2.5e3"),
        (",", ","),
        ("FLOAT", "3"),
        (">", ">"),
    ]


def test_exponent_requires_fraction():
    # 1e3 is not a FLOAT literal: the exponent only follows a fractional part
    assert kinds(tokenize("1e3")) == [("FLOAT", "1"), ("WORD", "e3")]


def test_string_value_and_span():
    text = 'file "meshes/bunny.obj" '
    tokens = tokenize(text)
    string = tokens[1]
    assert string.type == "STRING"
    assert string.value == "meshes/bunny.obj"
    assert text[string.start_pos:string.end_pos] == '"meshes/bunny.obj"'


def test_hidden_units_are_dropped():
    text = "a // line comment\n /* block\n comment */\tb\r\n"
    tokens = tokenize(text)
    assert kinds(tokens) == [("WORD", "a"), ("WORD", "b")]
    assert tokens[1].line == 3


def test_block_comment_closes_at_first_terminator():
    tokens = tokenize("/* a */ b /* c */")
    assert kinds(tokens) == [("WORD", "b")]


def test_line_and_column():
    tokens = tokenize("camera\n   {")
    assert (tokens[1].line, tokens[1].column) == (2, 4)


def test_unterminated_block_comment_fails_at_end_of_input():
    text = "sphere { } /* never closed"
    with pytest.raises(SDLSyntaxError) as info:
        tokenize(text)
    assert info.value.position == len(text)
    assert info.value.expected == frozenset(['"*/"'])


def test_unknown_characters_become_error_tokens():
    tokens = tokenize("sphere @")
    assert tokens[-1].type == "ERROR"
    assert tokens[-1].value == "@"


def test_legacy_lexer_has_no_block_comments():
    tokens = tokenize("/* x */", legacy=True)
    assert [t.type for t in tokens] == ["ERROR", "ERROR", "WORD", "ERROR", "ERROR"]


def test_legacy_lexer_keeps_line_comments():
    assert kinds(tokenize("a // b", legacy=True)) == [("WORD", "a")]
