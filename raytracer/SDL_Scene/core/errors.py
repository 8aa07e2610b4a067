# -*- coding: utf-8 -*-
#****************************************************************************
#*   SDL error taxonomy                                                     *
#*                                                                          *
#*   Every error aborts the whole parse. There is no partial scene.         *
#****************************************************************************


class SDLError(Exception):
    """Base class for everything the scene compiler raises."""


class SDLSyntaxError(SDLError):
    """
    No production matched at the rightmost position the parser reached.

    position : character offset into the source text
    line, column : 1-based location of that offset
    expected : frozenset of labels that would have been accepted there
    found : offending token text, or None at end of input
    """

    def __init__(self, position, line, column, expected, found=None):
        self.position = position
        self.line = line
        self.column = column
        self.expected = frozenset(expected)
        self.found = found
        super().__init__(self._format())

    def _format(self):
        labels = ", ".join(sorted(self.expected)) or "nothing"
        if len(self.expected) > 1:
            labels = "one of " + labels
        where = f"line {self.line}, column {self.column}"
        if self.found is None:
            return f"expected {labels} at {where} (end of input)"
        return f"expected {labels} at {where}, found {self.found!r}"


class CollaboratorError(SDLError):
    """A mesh or image loader could not deliver the file at `path`."""

    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"could not load {path!r}: {reason}")


class ResourceExhaustionError(SDLError):
    """Input nesting exceeded the configured recursion budget."""

    def __init__(self, limit):
        self.limit = limit
        super().__init__(f"nesting too deep: more than {limit} nested productions")


class GrammarDefinitionError(SDLError):
    """Grammar text handed to the PEG engine is malformed."""
