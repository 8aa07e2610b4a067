# -*- coding: utf-8 -*-
"""
Transform primitives and their composition into a 4x4 affine matrix.

Matrices use the column-vector convention (p' = M @ p). A transform block is
composed left to right with each new primitive pre-multiplied, so for

    transform { scale <2> translate <0,1,0> }

points are scaled first and translated second: M = T @ S.
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np
import trimesh.transformations as tf


# ------------------------------------------------------------
# Primitive operations
# ------------------------------------------------------------

@dataclass(frozen=True)
class Translate:
    offset: "Direction"

    def matrix(self):
        return tf.translation_matrix([self.offset.x, self.offset.y, self.offset.z])


@dataclass(frozen=True)
class Scale:
    factors: "Direction"

    def matrix(self):
        return np.diag([self.factors.x, self.factors.y, self.factors.z, 1.0])


@dataclass(frozen=True)
class RotateX:
    degrees: float

    def matrix(self):
        return tf.rotation_matrix(np.deg2rad(self.degrees), [1.0, 0.0, 0.0])


@dataclass(frozen=True)
class RotateY:
    degrees: float

    def matrix(self):
        return tf.rotation_matrix(np.deg2rad(self.degrees), [0.0, 1.0, 0.0])


@dataclass(frozen=True)
class RotateZ:
    degrees: float

    def matrix(self):
        return tf.rotation_matrix(np.deg2rad(self.degrees), [0.0, 0.0, 1.0])


# ------------------------------------------------------------
# Composed transform
# ------------------------------------------------------------

def _freeze(matrix):
    return tuple(tuple(float(v) for v in row) for row in matrix)


def compose(operations):
    """Fold primitives into one matrix, first written op applied first."""
    result = np.eye(4)
    for op in operations:
        result = op.matrix() @ result
    return result


@dataclass(frozen=True)
class Transform:
    operations: Tuple = ()
    matrix: Tuple[Tuple[float, ...], ...] = _freeze(np.eye(4))

    @classmethod
    def identity(cls):
        return cls()

    @classmethod
    def from_operations(cls, operations):
        operations = tuple(operations)
        return cls(operations=operations, matrix=_freeze(compose(operations)))

    @property
    def is_identity(self):
        return np.allclose(self.as_array(), np.eye(4))

    def as_array(self):
        return np.array(self.matrix, dtype=float)

    def apply_to_point(self, point):
        x, y, z, w = self.as_array() @ np.append(point.as_array(), 1.0)
        if w not in (0.0, 1.0):
            x, y, z = x / w, y / w, z / w
        return type(point)(float(x), float(y), float(z))

    def apply_to_direction(self, direction):
        x, y, z = self.as_array()[:3, :3] @ direction.as_array()
        return type(direction)(float(x), float(y), float(z))


IDENTITY = Transform.identity()
