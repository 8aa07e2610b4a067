from lark import Token, Tree
from lark.exceptions import VisitError

from raytracer.SDL_Scene.core.errors import ResourceExhaustionError, SDLError, SDLSyntaxError
from raytracer.SDL_Scene.core.preferences import get_preferences
from raytracer.SDL_Scene.logger.SDL_logger import write_log
from raytracer.SDL_Scene.parsers.peg.engine import FRAMES_PER_RULE, recursion_headroom
from raytracer.SDL_Scene.parsers.peg.metagrammar import compile_grammar
from raytracer.SDL_Scene.parsers.sdl_grammar.grammar import LEGACY_SDL_GRAMMAR, SDL_GRAMMAR
from raytracer.SDL_Scene.parsers.sdl_grammar.transformer import (
    LegacySceneTransformer, SceneTransformer,
)
from raytracer.SDL_Scene.parsers.sdl_lexer import tokenize

_grammars = {}


def get_grammar(legacy=False):
    key = "legacy" if legacy else "extended"
    if key not in _grammars:
        _grammars[key] = compile_grammar(LEGACY_SDL_GRAMMAR if legacy else SDL_GRAMMAR)
    return _grammars[key]


def parse_tree(text, legacy=False, start="scene", preferences=None):
    """Lex and match `text`, returning the raw lark parse tree."""
    prefs = preferences or get_preferences()
    tokens = tokenize(text, legacy=legacy)
    write_log("Debug", f"Lexed {len(tokens)} tokens")
    return get_grammar(legacy).parse(tokens, start, text=text, max_depth=prefs.max_depth)


def _build(text, transformer, legacy, start, preferences):
    prefs = preferences or get_preferences()
    variant = "legacy" if legacy else "extended"
    write_log("Info", f"Parsing {variant} SDL document ({len(text)} chars)")

    try:
        tree = parse_tree(text, legacy=legacy, start=start, preferences=prefs)
    except SDLSyntaxError as e:
        write_log("Error", f"SDL syntax error: {e}")
        raise
    except ResourceExhaustionError as e:
        write_log("Error", str(e))
        raise

    if isinstance(tree, Token):
        tree = Tree("fragment", [tree])

    with recursion_headroom(prefs.max_depth * FRAMES_PER_RULE + 500):
        try:
            result = transformer.transform(tree)
        except VisitError as e:
            orig = e.orig_exc
            if isinstance(orig, SDLError):
                raise orig from None
            if isinstance(orig, RecursionError):
                raise ResourceExhaustionError(prefs.max_depth) from None
            raise
        except RecursionError:
            raise ResourceExhaustionError(prefs.max_depth) from None

    objects = getattr(result, "objects", ())
    write_log("Info", f"Parsed {variant} {start} ({len(objects)} objects)")
    return result


def parse_scene(text, render_options=None, mesh_loader=None, image_loader=None,
                preferences=None):
    """
    Parse an extended-grammar SDL document into a Scene.

    render_options supplies camera width/height. mesh_loader and
    image_loader are called with the quoted path of every mesh / image
    texture, after the whole document has matched.
    """
    transformer = SceneTransformer(render_options, mesh_loader, image_loader)
    return _build(text, transformer, False, "scene", preferences)


def parse_legacy_scene(text, render_options=None, mesh_loader=None, image_loader=None,
                       preferences=None):
    """Parse a legacy-grammar document (camera, lights, objects) into a LegacyScene."""
    transformer = LegacySceneTransformer(render_options, mesh_loader, image_loader)
    return _build(text, transformer, True, "scene", preferences)


def parse_fragment(text, start, legacy=False, render_options=None, mesh_loader=None,
                   image_loader=None, preferences=None):
    """Parse `text` against any single production, e.g. "color" or "sphere"."""
    cls = LegacySceneTransformer if legacy else SceneTransformer
    transformer = cls(render_options, mesh_loader, image_loader)
    return _build(text, transformer, legacy, start, preferences)


def _read(filename):
    with open(filename, "r", encoding="utf-8") as f:
        return f.read()


def parse_scene_file(filename, **kwargs):
    write_log("Info", f"Reading SDL file: {filename}")
    return parse_scene(_read(filename), **kwargs)


def parse_legacy_scene_file(filename, **kwargs):
    write_log("Info", f"Reading legacy SDL file: {filename}")
    return parse_legacy_scene(_read(filename), **kwargs)
