# -*- coding: utf-8 -*-
#****************************************************************************
#*   SDL_Scene preferences                                                  *
#*                                                                          *
#*   Replaces the workbench parameter group with a dataclass that can be    *
#*   overridden from the environment:                                       *
#*                                                                          *
#*      SDL_SCENE_ENABLE_LOGGING    true / false                            *
#*      SDL_SCENE_VERBOSE_LOGGING   true / false                            *
#*      SDL_SCENE_LOG_DIR           directory for sdl_scene.log             *
#*      SDL_SCENE_MAX_DEPTH         nested production budget                *
#****************************************************************************

import os
import threading
from dataclasses import dataclass, replace

ENV_PREFIX = "SDL_SCENE_"

DEFAULT_LOG_DIR = os.path.join(os.path.expanduser("~"), ".sdl_scene")
# Three productions per CSG level. Trees accepted under this budget stay
# comparable and hashable within the default interpreter recursion limit.
DEFAULT_MAX_DEPTH = 600


@dataclass(frozen=True)
class SDLPreferences:
    enable_logging: bool = True
    verbose_logging: bool = False
    log_dir: str = DEFAULT_LOG_DIR
    max_depth: int = DEFAULT_MAX_DEPTH


@dataclass(frozen=True)
class RenderOptions:
    """Values owned by the render driver and passed through to the camera."""
    width: int = 1024
    height: int = 768


# -----------------------------
# Environment helpers
# -----------------------------

def _env_bool(name, default):
    value = os.environ.get(ENV_PREFIX + name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name, default):
    value = os.environ.get(ENV_PREFIX + name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def load_preferences():
    return SDLPreferences(
        enable_logging=_env_bool("ENABLE_LOGGING", True),
        verbose_logging=_env_bool("VERBOSE_LOGGING", False),
        log_dir=os.environ.get(ENV_PREFIX + "LOG_DIR", DEFAULT_LOG_DIR),
        max_depth=_env_int("MAX_DEPTH", DEFAULT_MAX_DEPTH),
    )


# -----------------------------
# Active preferences
# -----------------------------

_lock = threading.Lock()
_active = None


def get_preferences():
    global _active
    with _lock:
        if _active is None:
            _active = load_preferences()
        return _active


def set_preferences(**changes):
    """Replace fields of the active preferences, returns the new instance."""
    global _active
    current = get_preferences()
    updated = replace(current, **changes)
    with _lock:
        _active = updated
    return updated


def reset_preferences():
    global _active
    with _lock:
        _active = None
