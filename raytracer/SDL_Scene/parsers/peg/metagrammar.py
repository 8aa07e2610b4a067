# metagrammar.py
# Notation for PEG grammar texts, read with lark.
#
#   rule:   name ":" alternatives ";"     alternatives separated by "/"
#   prefix: ?name inline, _name splice, !name keep literals
#   %quiet name "label" ;                 report only the label on failure

from lark import Lark, Transformer
from lark.exceptions import LarkError

from raytracer.SDL_Scene.core.errors import GrammarDefinitionError
from raytracer.SDL_Scene.logger.SDL_logger import write_log
from raytracer.SDL_Scene.parsers.peg.engine import (
    Choice, Literal, Optional, PegGrammar, Repeat, Rule, RuleRef, Sequence, Terminal,
)

PEG_GRAMMAR = r"""
    start: definition*

    ?definition: rule
               | quiet

    rule: DEF_NAME ":" choice ";"

    quiet: "%quiet" REF_NAME ESCAPED_STRING ";"

    // -------------------------
    // Expressions
    // -------------------------

    choice: sequence ("/" sequence)*

    sequence: item+

    item: atom QUANTIFIER?

    ?atom: REF_NAME            -> ref
         | TERMINAL_NAME       -> terminal
         | ESCAPED_STRING      -> literal
         | "(" choice ")"

    DEF_NAME: /[?!]?_?[a-z][a-z0-9_]*/
    REF_NAME: /_?[a-z][a-z0-9_]*/
    TERMINAL_NAME: /[A-Z][A-Z0-9_]*/
    QUANTIFIER: /[?*+]/

    %import common.ESCAPED_STRING
    %import common.WS
    %import common.CPP_COMMENT
    %ignore WS
    %ignore CPP_COMMENT
"""

_meta_parser = Lark(PEG_GRAMMAR, parser="lalr")


class PegTransformer(Transformer):
    """Turns a parsed grammar text into engine expressions."""

    def __init__(self):
        super().__init__()
        self.refs = []

    def start(self, items):
        rules = {}
        quiet = []
        for item in items:
            if isinstance(item, Rule):
                if item.name in rules:
                    raise GrammarDefinitionError(f"rule {item.name!r} defined twice")
                rules[item.name] = item
            else:
                quiet.append(item)

        for ref in self.refs:
            if ref.name not in rules:
                raise GrammarDefinitionError(f"undefined rule {ref.name!r}")
            ref.rule = rules[ref.name]

        for name, label in quiet:
            if name not in rules:
                raise GrammarDefinitionError(f"%quiet names undefined rule {name!r}")
            rules[name].label = label

        return rules

    def rule(self, items):
        name, expr = items
        name = str(name)
        flags = ""
        while name[0] in "?!":
            flags += name[0]
            name = name[1:]
        return Rule(
            name,
            expr,
            inline="?" in flags,
            splice=name.startswith("_"),
            keep="!" in flags,
        )

    def quiet(self, items):
        name, label = items
        return (str(name), label[1:-1])

    # -------------------------
    # Expressions
    # -------------------------

    def choice(self, items):
        if len(items) == 1:
            return items[0]
        return Choice(items)

    def sequence(self, items):
        if len(items) == 1:
            return items[0]
        return Sequence(items)

    def item(self, items):
        expr = items[0]
        if len(items) == 1:
            return expr
        quantifier = str(items[1])
        if quantifier == "?":
            return Optional(expr)
        if quantifier == "*":
            return Repeat(expr, 0)
        return Repeat(expr, 1)

    def ref(self, items):
        ref = RuleRef(str(items[0]))
        self.refs.append(ref)
        return ref

    def terminal(self, items):
        return Terminal(str(items[0]))

    def literal(self, items):
        return Literal(str(items[0])[1:-1])


def compile_grammar(text):
    """Compile PEG grammar text into a PegGrammar, see metagrammar notation."""
    try:
        tree = _meta_parser.parse(text)
    except LarkError as e:
        raise GrammarDefinitionError(f"malformed grammar text: {e}") from e
    try:
        rules = PegTransformer().transform(tree)
    except LarkError as e:
        orig = getattr(e, "orig_exc", None)
        if isinstance(orig, GrammarDefinitionError):
            raise orig from None
        raise GrammarDefinitionError(str(e)) from e
    write_log("Debug", f"Compiled PEG grammar with {len(rules)} rules")
    return PegGrammar(rules)
