import sys
import threading

import pytest
from lark import Token, Tree

from raytracer.SDL_Scene.core.errors import (
    GrammarDefinitionError,
    ResourceExhaustionError,
    SDLSyntaxError,
)
from raytracer.SDL_Scene.parsers.peg.engine import END_OF_INPUT, recursion_headroom
from raytracer.SDL_Scene.parsers.peg.metagrammar import compile_grammar
from raytracer.SDL_Scene.parsers.sdl_lexer import tokenize


def run(grammar_text, text, start="start", **kwargs):
    grammar = compile_grammar(grammar_text)
    return grammar.parse(tokenize(text), start, text=text, **kwargs)


def syntax_error(grammar_text, text, start="start"):
    with pytest.raises(SDLSyntaxError) as info:
        run(grammar_text, text, start)
    return info.value


# -----------------------------
# Matching
# -----------------------------

def test_ordered_choice_backtracks_to_later_alternative():
    grammar = """
        start: pair / single ;
        pair: "<" FLOAT "," FLOAT ">" ;
        single: "<" FLOAT ">" ;
    """
    tree = run(grammar, "<1>")
    assert tree == Tree("start", [Tree("single", [Token("FLOAT", "1")])])


def test_ordered_choice_commits_to_first_success():
    grammar = """
        start: short / long ;
        !short: "a" ;
        !long: "a" "b" ;
    """
    err = syntax_error(grammar, "a b")
    assert err.expected == frozenset([END_OF_INPUT])
    assert err.found == "b"


def test_repetition():
    grammar = 'start: "<" FLOAT* ">" ;'
    assert run(grammar, "<>").children == []
    assert [str(t) for t in run(grammar, "< 1 2 3 >").children] == ["1", "2", "3"]


def test_one_or_more_needs_a_match():
    err = syntax_error('start: "<" FLOAT+ ">" ;', "<>")
    assert err.expected == frozenset(["FLOAT"])
    assert err.found == ">"


def test_optional_never_fails():
    grammar = 'start: "a" FLOAT? "b" ;'
    assert run(grammar, "a b").children == []
    assert run(grammar, "a 2 b").children == [Token("FLOAT", "2")]


def test_inline_rule_returns_single_child():
    grammar = """
        start: wrapped ;
        ?wrapped: inner ;
        inner: FLOAT ;
    """
    tree = run(grammar, "3")
    assert tree.children == [Tree("inner", [Token("FLOAT", "3")])]


def test_splice_rule_hands_children_to_parent():
    grammar = """
        start: _pair ;
        _pair: FLOAT FLOAT ;
    """
    assert run(grammar, "1 2").children == [Token("FLOAT", "1"), Token("FLOAT", "2")]


def test_keep_rule_keeps_keywords():
    grammar = """
        start: kw ;
        !kw: "alpha" / "beta" ;
    """
    tree = run(grammar, "beta")
    assert tree.children[0].data == "kw"
    assert str(tree.children[0].children[0]) == "beta"


def test_keywords_do_not_match_string_tokens():
    err = syntax_error('start: "sphere" ;', '"sphere"')
    assert err.expected == frozenset(['"sphere"'])


def test_any_production_can_be_the_start():
    grammar = """
        start: "x" inner ;
        inner: FLOAT ;
    """
    assert run(grammar, "4", start="inner") == Tree("inner", [Token("FLOAT", "4")])


# -----------------------------
# Diagnostics
# -----------------------------

def test_rightmost_failure_wins():
    grammar = """
        start: first / second ;
        first: "x" "y" "z" ;
        second: "x" "w" ;
    """
    err = syntax_error(grammar, "x y q")
    assert err.expected == frozenset(['"z"'])
    assert err.found == "q"
    assert (err.line, err.column) == (1, 5)
    assert err.position == 4


def test_expected_labels_accumulate_at_same_position():
    grammar = 'start: "a" ("b" / "c" / FLOAT) ;'
    err = syntax_error(grammar, "a d")
    assert err.expected == frozenset(['"b"', '"c"', "FLOAT"])


def test_end_of_input_failure():
    text = "a\n"
    err = syntax_error('start: "a" "b" ;', text)
    assert err.found is None
    assert err.position == len(text)
    assert (err.line, err.column) == (2, 1)
    assert "end of input" in str(err)


def test_empty_input():
    err = syntax_error('start: "a" ;', "")
    assert err.position == 0
    assert (err.line, err.column) == (1, 1)


def test_quiet_rule_reports_its_label():
    loud = """
        start: "v" number ;
        number: FLOAT ;
    """
    quiet = loud + '%quiet number "a number" ;'
    assert syntax_error(loud, "v x").expected == frozenset(["FLOAT"])
    assert syntax_error(quiet, "v x").expected == frozenset(["a number"])


def test_quiet_rule_hides_inner_failures():
    grammar = """
        start: "<" vec ;
        vec: FLOAT "," FLOAT ;
        %quiet vec "vector" ;
    """
    err = syntax_error(grammar, "< 1 , x")
    assert err.expected == frozenset(["vector"])
    assert err.found == "1"


def test_comments_in_grammar_text():
    grammar = """
        // the start rule
        start: FLOAT ; // trailing
    """
    assert run(grammar, "1").children == [Token("FLOAT", "1")]


# -----------------------------
# Grammar definition errors
# -----------------------------

def test_undefined_rule():
    with pytest.raises(GrammarDefinitionError, match="missing"):
        compile_grammar("start: missing ;")


def test_duplicate_rule():
    with pytest.raises(GrammarDefinitionError, match="twice"):
        compile_grammar('start: "a" ; start: "b" ;')


def test_quiet_on_undefined_rule():
    with pytest.raises(GrammarDefinitionError):
        compile_grammar('start: "a" ; %quiet other "x" ;')


def test_malformed_grammar_text():
    with pytest.raises(GrammarDefinitionError):
        compile_grammar("start: ( ;")


# -----------------------------
# Nesting budget
# -----------------------------

NESTED = 'nest: "{" nest "}" / FLOAT ;'


def test_nesting_within_budget():
    text = "{ " * 30 + "1" + " }" * 30
    tree = run(NESTED, text, start="nest", max_depth=100)
    depth = 0
    while isinstance(tree, Tree):
        depth += 1
        tree = tree.children[0]
    assert depth == 31


def test_nesting_beyond_budget():
    text = "{ " * 30 + "1" + " }" * 30
    with pytest.raises(ResourceExhaustionError) as info:
        run(NESTED, text, start="nest", max_depth=10)
    assert info.value.limit == 10


def test_recursion_limit_is_restored():
    before = sys.getrecursionlimit()
    text = "{ " * 30 + "1" + " }" * 30
    run(NESTED, text, start="nest", max_depth=5000)
    assert sys.getrecursionlimit() == before


def test_overlapping_headroom_keeps_the_raised_limit():
    before = sys.getrecursionlimit()
    first = recursion_headroom(before + 5000)
    second = recursion_headroom(before + 3000)
    first.__enter__()
    second.__enter__()
    first.__exit__(None, None, None)
    assert sys.getrecursionlimit() == before + 5000
    second.__exit__(None, None, None)
    assert sys.getrecursionlimit() == before


def test_concurrent_parses_do_not_trip_each_other():
    text = "{ " * 300 + "1" + " }" * 300
    grammar = compile_grammar(NESTED)
    tokens = tokenize(text)
    start = threading.Barrier(4)
    errors = []

    def worker():
        start.wait()
        try:
            for _ in range(5):
                grammar.parse(tokens, "nest", text=text, max_depth=400)
        except Exception as e:
            errors.append(e)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert errors == []
