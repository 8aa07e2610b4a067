# -*- coding: utf-8 -*-
#***************************************************************************
#*                                                                         *
#*   SDL scene importer                                                    *
#*                                                                         *
#*   Responsibilities:                                                     *
#*   - Read a .sdl file                                                    *
#*   - Pick the extended or legacy grammar                                 *
#*   - Wire the default file loaders, relative to the scene file           *
#*                                                                         *
#***************************************************************************

import os

from raytracer.SDL_Scene.core.preferences import RenderOptions
from raytracer.SDL_Scene.importers.loaders import FileLoaders
from raytracer.SDL_Scene.logger.SDL_logger import init, write_log
from raytracer.SDL_Scene.parsers.sdl_grammar.parser import (
    parse_legacy_scene_file,
    parse_scene_file,
)


# -------------------------------------------------------------------------
# Public entry point
# -------------------------------------------------------------------------

def open(filename, width=None, height=None, legacy=False, loaders=None, preferences=None):
    """
    Import a scene file and return the Scene (or LegacyScene).

    width / height come from the render driver and default to RenderOptions.
    Mesh and image paths inside the file resolve relative to the file.
    """
    init()
    defaults = RenderOptions()
    render_options = RenderOptions(
        width=width if width is not None else defaults.width,
        height=height if height is not None else defaults.height,
    )
    if loaders is None:
        loaders = FileLoaders(os.path.dirname(os.path.abspath(filename)))

    write_log("Info", f"Using SDL importer ({'legacy' if legacy else 'extended'} grammar)")
    parse = parse_legacy_scene_file if legacy else parse_scene_file
    return parse(
        filename,
        render_options=render_options,
        mesh_loader=loaders.mesh,
        image_loader=loaders.image,
        preferences=preferences,
    )
