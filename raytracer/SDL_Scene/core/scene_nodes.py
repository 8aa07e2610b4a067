# -*- coding: utf-8 -*-
#****************************************************************************
#*   Scene graph nodes produced by the SDL parser                           *
#*                                                                          *
#*   All nodes are frozen dataclasses. Ownership is a plain tree:           *
#*   Scene -> Camera / SceneOptions / SceneObject -> Shape, Material        *
#*   CSG and media own their child shapes, materials own their textures.    *
#****************************************************************************

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Tuple

import numpy as np

from raytracer.SDL_Scene.core.transforms import IDENTITY, Transform

# ------------------------------------------------------------
# Tuples
# ------------------------------------------------------------

@dataclass(frozen=True)
class Point:
    x: float
    y: float
    z: float

    @classmethod
    def zero(cls):
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def from_tuple(cls, v):
        return cls(*v)

    def as_array(self):
        return np.array([self.x, self.y, self.z])


@dataclass(frozen=True)
class Direction:
    x: float
    y: float
    z: float

    @classmethod
    def from_tuple(cls, v):
        return cls(*v)

    def as_array(self):
        return np.array([self.x, self.y, self.z])


@dataclass(frozen=True)
class Color:
    r: float
    g: float
    b: float

    @classmethod
    def from_tuple(cls, v):
        return cls(*v)


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
RED = Color(1.0, 0.0, 0.0)
GREEN = Color(0.0, 1.0, 0.0)
BLUE = Color(0.0, 0.0, 1.0)
YELLOW = Color(1.0, 1.0, 0.0)
CYAN = Color(0.0, 1.0, 1.0)
MAGENTA = Color(1.0, 0.0, 1.0)

NAMED_COLORS = {
    "white": WHITE,
    "black": BLACK,
    "red": RED,
    "green": GREEN,
    "blue": BLUE,
    "yellow": YELLOW,
    "cyan": CYAN,
    "magenta": MAGENTA,
}

AXIS_DIRECTIONS = {
    "down": Direction(0.0, -1.0, 0.0),
    "up": Direction(0.0, 1.0, 0.0),
    "left": Direction(-1.0, 0.0, 0.0),
    "right": Direction(1.0, 0.0, 0.0),
    "back": Direction(0.0, 0.0, -1.0),
    "front": Direction(0.0, 0.0, 1.0),
}

# ------------------------------------------------------------
# Shapes
# ------------------------------------------------------------

class Shape:
    """Marker base for every shape node."""


@dataclass(frozen=True)
class Sphere(Shape):
    origin: Point = Point(0.0, 0.0, 0.0)
    radius: float = 1.0
    transform: Transform = IDENTITY


@dataclass(frozen=True)
class Plane(Shape):
    normal: Direction
    origin: Point = Point(0.0, 0.0, 0.0)
    transform: Transform = IDENTITY


@dataclass(frozen=True)
class Cylinder(Shape):
    radius: float = 1.0
    height: float = 1.0
    transform: Transform = IDENTITY


@dataclass(frozen=True)
class Torus(Shape):
    major_radius: float
    minor_radius: float
    transform: Transform = IDENTITY


@dataclass(frozen=True)
class Cube(Shape):
    corner1: Point
    corner2: Point
    transform: Transform = IDENTITY


class Orientation(Enum):
    XY = "xy"
    XZ = "xz"
    ZY = "zy"


@dataclass(frozen=True)
class AxisRectangle(Shape):
    orientation: Orientation
    width: float
    height: float
    origin: Point = Point(0.0, 0.0, 0.0)
    reversed: bool = False
    transform: Transform = IDENTITY


@dataclass(frozen=True)
class Mesh(Shape):
    # geometry is whatever the mesh loader returned, the path identifies it
    path: str
    geometry: Any = field(default=None, compare=False, repr=False)
    transform: Transform = IDENTITY


class CSGOperator(Enum):
    UNION = "union"
    INTERSECTION = "intersection"
    DIFFERENCE = "difference"


@dataclass(frozen=True)
class CSG(Shape):
    operator: CSGOperator
    left: Shape
    right: Shape
    transform: Transform = IDENTITY

    def depth(self):
        """Number of CSG levels from this node down to its deepest leaf."""
        deepest = 0
        pending = [(self, 1)]
        while pending:
            node, level = pending.pop()
            deepest = max(deepest, level)
            for child in (node.left, node.right):
                if isinstance(child, CSG):
                    pending.append((child, level + 1))
        return deepest


@dataclass(frozen=True)
class ParticipatingMedium(Shape):
    density: float
    boundary: Shape
    transform: Transform = IDENTITY

# ------------------------------------------------------------
# Textures
# ------------------------------------------------------------

class Texture:
    pass


@dataclass(frozen=True)
class SolidTexture(Texture):
    color: Color


@dataclass(frozen=True)
class CheckerboardPattern:
    color_a: Color
    color_b: Color
    scale: float


@dataclass(frozen=True)
class PatternTexture(Texture):
    pattern: CheckerboardPattern


@dataclass(frozen=True)
class ImageTexture(Texture):
    path: str
    scale: float
    image: Any = field(default=None, compare=False, repr=False)

# ------------------------------------------------------------
# Materials
# ------------------------------------------------------------

IOR_GLASS = 1.5


class Material:
    pass


@dataclass(frozen=True)
class Lambertian(Material):
    texture: Texture


@dataclass(frozen=True)
class Metal(Material):
    fuzz: float
    texture: Texture


@dataclass(frozen=True)
class Dielectric(Material):
    ior: float
    fuzz: float = 0.0


@dataclass(frozen=True)
class DiffuseLight(Material):
    intensity: float
    texture: Texture


@dataclass(frozen=True)
class Isotropic(Material):
    texture: Texture


# Legacy grammar materials

@dataclass(frozen=True)
class Matte(Material):
    texture: Texture


@dataclass(frozen=True)
class Plastic(Material):
    texture: Texture


@dataclass(frozen=True)
class Glass(Material):
    ior: float = IOR_GLASS

# ------------------------------------------------------------
# Lights (legacy grammar only)
# ------------------------------------------------------------

class Light:
    pass


@dataclass(frozen=True)
class OmniLight(Light):
    origin: Point
    color: Color
    intensity: float


@dataclass(frozen=True)
class DistantLight(Light):
    direction: Direction
    color: Color
    intensity: float

# ------------------------------------------------------------
# Scene
# ------------------------------------------------------------

@dataclass(frozen=True)
class SceneObject:
    shape: Shape
    material: Material
    name: Optional[str] = None


@dataclass(frozen=True)
class Camera:
    origin: Point
    look_at: Point
    fov: float = 60.0
    width: int = 1024
    height: int = 768

    def camera_to_world(self):
        """
        Look-at camera to world matrix, world up is +Y.

        Columns are the camera x, y, z axes and the origin; the camera
        looks down its own -Z axis.
        """
        origin = self.origin.as_array()
        zaxis = origin - self.look_at.as_array()
        zaxis = zaxis / np.linalg.norm(zaxis)
        xaxis = np.cross(np.array([0.0, 1.0, 0.0]), zaxis)
        xaxis = xaxis / np.linalg.norm(xaxis)
        yaxis = np.cross(zaxis, xaxis)
        c2w = np.eye(4)
        c2w[:3, 0] = xaxis
        c2w[:3, 1] = yaxis
        c2w[:3, 2] = zaxis
        c2w[:3, 3] = origin
        return c2w


@dataclass(frozen=True)
class SceneOptions:
    background_color: Color = BLACK


@dataclass(frozen=True)
class Scene:
    camera: Camera
    objects: Tuple[SceneObject, ...]
    options: SceneOptions = SceneOptions()


@dataclass(frozen=True)
class LegacyScene:
    camera: Camera
    lights: Tuple[Light, ...]
    objects: Tuple[SceneObject, ...]
