# -*- coding: utf-8 -*-
"""
Ordered-choice (PEG) evaluator over a token list

Expressions return ``(next_index, children)`` on success and ``None`` on
failure. Nothing is mutated on failure except the diagnostic record, so a
rejected alternative leaves no trace and the next one starts from the same
cursor.

Diagnostics follow the rightmost-failure rule: only the furthest token index
at which a terminal failed is kept, together with every label expected
there.
"""

import sys
import threading
from contextlib import contextmanager

from lark import Tree

from raytracer.SDL_Scene.core.errors import ResourceExhaustionError, SDLSyntaxError
from raytracer.SDL_Scene.core.preferences import DEFAULT_MAX_DEPTH
from raytracer.SDL_Scene.parsers.sdl_lexer import VALUE_TOKENS, line_and_column

END_OF_INPUT = "end of input"

# Python frames used per nested rule invocation (rule, choice, sequence, ref)
FRAMES_PER_RULE = 6


# -----------------------------
# Parse state
# -----------------------------

class ParseState:
    def __init__(self, tokens, max_depth):
        self.tokens = tokens
        self.max_depth = max_depth
        self.depth = 0
        self.quiet = 0
        self.furthest = -1
        self.expected = set()

    def token_at(self, index):
        if index < len(self.tokens):
            return self.tokens[index]
        return None

    def fail(self, index, label):
        if self.quiet:
            return
        if index > self.furthest:
            self.furthest = index
            self.expected = {label}
        elif index == self.furthest:
            self.expected.add(label)


# -----------------------------
# Expressions
# -----------------------------

class Expr:
    def match(self, state, index):
        raise NotImplementedError


class Literal(Expr):
    """Keyword or punctuation, compared against the token value."""

    def __init__(self, text):
        self.text = text
        self.keep = False

    def match(self, state, index):
        tok = state.token_at(index)
        if tok is not None and tok.type not in VALUE_TOKENS and tok.value == self.text:
            return index + 1, [tok] if self.keep else []
        state.fail(index, f'"{self.text}"')
        return None

    def __repr__(self):
        return f"Literal({self.text!r})"


class Terminal(Expr):
    """A token type such as FLOAT or STRING, always kept."""

    def __init__(self, name):
        self.name = name

    def match(self, state, index):
        tok = state.token_at(index)
        if tok is not None and tok.type == self.name:
            return index + 1, [tok]
        state.fail(index, self.name)
        return None

    def __repr__(self):
        return f"Terminal({self.name})"


class Sequence(Expr):
    def __init__(self, items):
        self.items = items

    def match(self, state, index):
        children = []
        for item in self.items:
            r = item.match(state, index)
            if r is None:
                return None
            index, got = r
            children.extend(got)
        return index, children


class Choice(Expr):
    def __init__(self, alternatives):
        self.alternatives = alternatives

    def match(self, state, index):
        for alt in self.alternatives:
            r = alt.match(state, index)
            if r is not None:
                return r
        return None


class Optional(Expr):
    def __init__(self, expr):
        self.expr = expr

    def match(self, state, index):
        r = self.expr.match(state, index)
        if r is None:
            return index, []
        return r


class Repeat(Expr):
    """Greedy ``*`` (minimum 0) or ``+`` (minimum 1)."""

    def __init__(self, expr, minimum):
        self.expr = expr
        self.minimum = minimum

    def match(self, state, index):
        children = []
        count = 0
        while True:
            r = self.expr.match(state, index)
            if r is None or r[0] == index:
                break
            index, got = r
            children.extend(got)
            count += 1
        if count < self.minimum:
            return None
        return index, children


class RuleRef(Expr):
    def __init__(self, name):
        self.name = name
        self.rule = None

    def match(self, state, index):
        return self.rule.match(state, index)

    def __repr__(self):
        return f"RuleRef({self.name})"


class Rule(Expr):
    """
    A named production.

    inline : return the single child instead of a tree (lark ``?rule``)
    splice : hand children to the parent unwrapped (lark ``_rule``)
    keep   : keep matched literal tokens (lark ``!rule``)
    label  : set by %quiet; internal failures are replaced by this label
    """

    def __init__(self, name, expr, inline=False, splice=False, keep=False):
        self.name = name
        self.expr = expr
        self.inline = inline
        self.splice = splice
        self.keep = keep
        self.label = None
        if keep:
            _keep_literals(expr)

    def match(self, state, index):
        state.depth += 1
        if state.depth > state.max_depth:
            raise ResourceExhaustionError(state.max_depth)
        try:
            if self.label is None:
                r = self.expr.match(state, index)
            else:
                state.quiet += 1
                try:
                    r = self.expr.match(state, index)
                finally:
                    state.quiet -= 1
                if r is None:
                    state.fail(index, self.label)
        finally:
            state.depth -= 1

        if r is None:
            return None
        index, children = r
        if self.splice:
            return index, children
        if self.inline and len(children) == 1:
            return index, children
        return index, [Tree(self.name, children)]

    def __repr__(self):
        return f"Rule({self.name})"


def _keep_literals(expr):
    if isinstance(expr, Literal):
        expr.keep = True
    elif isinstance(expr, Sequence):
        for item in expr.items:
            _keep_literals(item)
    elif isinstance(expr, Choice):
        for alt in expr.alternatives:
            _keep_literals(alt)
    elif isinstance(expr, (Optional, Repeat)):
        _keep_literals(expr.expr)


# -----------------------------
# Grammar
# -----------------------------

_headroom_lock = threading.Lock()
_headroom_users = 0
_saved_limit = None


@contextmanager
def recursion_headroom(frames):
    """
    Raise the interpreter recursion limit to at least `frames` while inside.

    The limit is process wide, so overlapping parses share it: it only goes
    back to the saved value when the last of them leaves.
    """
    global _headroom_users, _saved_limit
    with _headroom_lock:
        if _headroom_users == 0:
            _saved_limit = sys.getrecursionlimit()
        _headroom_users += 1
        if frames > sys.getrecursionlimit():
            sys.setrecursionlimit(frames)
    try:
        yield
    finally:
        with _headroom_lock:
            _headroom_users -= 1
            if _headroom_users == 0:
                sys.setrecursionlimit(_saved_limit)
                _saved_limit = None


class PegGrammar:
    def __init__(self, rules):
        self.rules = rules

    def parse(self, tokens, start, text="", max_depth=DEFAULT_MAX_DEPTH):
        """
        Match the whole token list against rule `start`.

        Returns the single tree (or token) produced by the start rule.
        Raises SDLSyntaxError at the rightmost failure, or
        ResourceExhaustionError when nesting exceeds `max_depth`.
        """
        rule = self.rules[start]
        state = ParseState(tokens, max_depth)

        with recursion_headroom(max_depth * FRAMES_PER_RULE + 500):
            try:
                r = rule.match(state, 0)
            except RecursionError:
                raise ResourceExhaustionError(max_depth) from None

        if r is not None and r[0] == len(tokens):
            return r[1][0]
        if r is not None:
            state.fail(r[0], END_OF_INPUT)
        raise self._syntax_error(state, text)

    def _syntax_error(self, state, text):
        tok = state.token_at(state.furthest)
        if tok is None:
            position = len(text)
            line, column = line_and_column(text, position)
            found = None
        else:
            position, line, column = tok.start_pos, tok.line, tok.column
            found = str(tok)
        return SDLSyntaxError(position, line, column, state.expected, found)
