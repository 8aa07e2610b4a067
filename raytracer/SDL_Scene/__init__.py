# raytracer/SDL_Scene/__init__.py
#
# Scene Description Language front end: text -> immutable scene graph.

from raytracer.SDL_Scene.core.errors import (
    CollaboratorError,
    GrammarDefinitionError,
    ResourceExhaustionError,
    SDLError,
    SDLSyntaxError,
)
from raytracer.SDL_Scene.core.preferences import (
    RenderOptions,
    SDLPreferences,
    get_preferences,
    set_preferences,
)
from raytracer.SDL_Scene.parsers.sdl_grammar.parser import (
    parse_fragment,
    parse_legacy_scene,
    parse_legacy_scene_file,
    parse_scene,
    parse_scene_file,
)

__all__ = [
    "CollaboratorError",
    "GrammarDefinitionError",
    "ResourceExhaustionError",
    "SDLError",
    "SDLSyntaxError",
    "RenderOptions",
    "SDLPreferences",
    "get_preferences",
    "set_preferences",
    "parse_fragment",
    "parse_legacy_scene",
    "parse_legacy_scene_file",
    "parse_scene",
    "parse_scene_file",
]
