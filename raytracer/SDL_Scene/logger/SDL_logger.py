import os, datetime, threading

from raytracer.SDL_Scene.core.preferences import get_preferences

LOG_NAME = "sdl_scene.log"

_lock = threading.Lock()

def _timestamp():
    return datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")

def log_file(prefs=None):
    prefs = prefs or get_preferences()
    return os.path.join(prefs.log_dir, LOG_NAME)

def write_log(level, msg):
    prefs = get_preferences()
    if not prefs.enable_logging:
        return
    if level == "Debug" and not prefs.verbose_logging:
        return
    with _lock:
        os.makedirs(prefs.log_dir, exist_ok=True)
        with open(log_file(prefs), "a", encoding="utf-8") as f:
            f.write(f"{_timestamp()} [{level}] {msg}\n")

_started = set()

def init():
    path = log_file()
    if path in _started:
        return
    _started.add(path)
    write_log("INIT", "Logging started")
