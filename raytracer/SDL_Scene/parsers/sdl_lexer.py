# sdl_lexer.py
# PLY-based lexical layer for the SDL grammars.
#
# Whitespace and comments are hidden units: they are dropped here so every
# production sees them as transparent, however deeply nested.
# The token list handed to the PEG engine is made of lark Tokens.

import ply.lex as lex
from lark import Token

from raytracer.SDL_Scene.core.errors import SDLSyntaxError

# ----------------------------------------------------
# Token types shared with the grammar text
# ----------------------------------------------------

WORD = "WORD"
FLOAT = "FLOAT"
STRING = "STRING"
ERROR = "ERROR"

# Tokens whose value is data rather than a keyword or punctuation
VALUE_TOKENS = frozenset([FLOAT, STRING, ERROR])


def line_and_column(text, pos):
    line = text.count("\n", 0, pos) + 1
    column = pos - (text.rfind("\n", 0, pos) + 1) + 1
    return line, column


class LegacySDLLexer:
    """
    Lexer for the legacy grammar: whitespace and // line comments only.
    """

    tokens = (WORD, FLOAT, STRING, ERROR)
    literals = "{}<>,"

    t_ignore = " \t\r"

    def t_newline(self, t):
        r"\n+"
        t.lexer.lineno += len(t.value)

    def t_line_comment(self, t):
        r"//[^\n]*"
        pass

    def t_FLOAT(self, t):
        r"-?\d+(?:\.\d+(?:[eE]\d+)?)?"
        return t

    def t_WORD(self, t):
        r"[A-Za-z_][A-Za-z0-9_]*"
        return t

    def t_STRING(self, t):
        r'"[^"]*"'
        t.lexer.lineno += t.value.count("\n")
        t.value = t.value[1:-1]
        return t

    def t_error(self, t):
        # Unknown characters become ERROR tokens. No production accepts
        # them, so they surface as an ordinary syntax error.
        t.type = ERROR
        t.value = t.value[0]
        t.lexer.skip(1)
        return t

    # ------------------------------------------------

    def build(self, **kwargs):
        self.lexer = lex.lex(module=self, errorlog=lex.NullLogger(), **kwargs)
        return self

    def tokenize(self, text):
        """Return the meaningful tokens of `text` as lark Tokens."""
        if not hasattr(self, "lexer"):
            self.build()
        lexer = self.lexer.clone()
        lexer.lineno = 1
        lexer.input(text)

        result = []
        while True:
            tok = lexer.token()
            if not tok:
                break
            result.append(self._to_lark(text, tok))
        return result

    def _to_lark(self, text, tok):
        start = tok.lexpos
        if tok.type == STRING:
            end = start + len(tok.value) + 2
        else:
            end = start + len(tok.value)
        line, column = line_and_column(text, start)
        end_line, end_column = line_and_column(text, end)
        return Token(
            tok.type,
            tok.value,
            start_pos=start,
            line=line,
            column=column,
            end_line=end_line,
            end_column=end_column,
            end_pos=end,
        )


class SDLLexer(LegacySDLLexer):
    """
    Lexer for the extended grammar, adds non-nested /* ... */ comments.
    """

    def t_block_comment(self, t):
        r"/\*(?:.|\n)*?\*/"
        t.lexer.lineno += t.value.count("\n")

    def t_unterminated_comment(self, t):
        r"/\*"
        text = t.lexer.lexdata
        line, column = line_and_column(text, len(text))
        raise SDLSyntaxError(len(text), line, column, ['"*/"'])


_lexers = {}


def tokenize(text, legacy=False):
    key = "legacy" if legacy else "extended"
    if key not in _lexers:
        _lexers[key] = (LegacySDLLexer() if legacy else SDLLexer()).build()
    return _lexers[key].tokenize(text)
