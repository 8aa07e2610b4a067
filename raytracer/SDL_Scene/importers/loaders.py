# -*- coding: utf-8 -*-
#****************************************************************************
#*   Default collaborators for mesh and image files                        *
#*                                                                          *
#*   The parser only hands over the quoted path. Decoding is delegated      *
#*   to trimesh (meshes) and imageio (bitmaps). Any failure is reported     *
#*   as a CollaboratorError carrying the offending path.                    *
#****************************************************************************

import os

import imageio.v3 as iio
import numpy as np
import trimesh

from raytracer.SDL_Scene.core.errors import CollaboratorError
from raytracer.SDL_Scene.logger.SDL_logger import write_log


def _resolve(path, base_dir):
    if base_dir and not os.path.isabs(path):
        return os.path.join(base_dir, path)
    return path


def load_mesh(path, base_dir=None):
    """
    Load a triangle mesh file (.obj, .stl, .ply, ...).

    Returns a trimesh.Trimesh with every sub-object concatenated.
    """
    full_path = _resolve(path, base_dir)
    if not os.path.isfile(full_path):
        raise CollaboratorError(path, "file not found")
    try:
        mesh = trimesh.load(full_path, force="mesh", process=False)
    except Exception as e:
        raise CollaboratorError(path, f"could not decode mesh: {e}") from e
    if not isinstance(mesh, trimesh.Trimesh) or len(mesh.faces) == 0:
        raise CollaboratorError(path, "file contains no triangles")
    write_log("Info", f"Mesh {path}: {len(mesh.vertices)} vertices, {len(mesh.faces)} faces")
    return mesh


def load_image(path, base_dir=None):
    """
    Load a texture bitmap as an (height, width, 3) uint8 array.
    """
    full_path = _resolve(path, base_dir)
    if not os.path.isfile(full_path):
        raise CollaboratorError(path, "file not found")
    try:
        image = iio.imread(full_path)
    except Exception as e:
        raise CollaboratorError(path, f"could not decode image: {e}") from e

    image = np.asarray(image)
    if image.ndim == 2:
        image = np.stack([image] * 3, axis=-1)
    elif image.ndim != 3:
        raise CollaboratorError(path, f"unsupported image shape {image.shape}")
    image = image[..., :3]
    write_log("Info", f"Image {path}: {image.shape[1]}x{image.shape[0]}")
    return image


class FileLoaders:
    """Mesh / image loaders resolving relative paths against one directory."""

    def __init__(self, base_dir=None):
        self.base_dir = base_dir

    def mesh(self, path):
        return load_mesh(path, self.base_dir)

    def image(self, path):
        return load_image(path, self.base_dir)
