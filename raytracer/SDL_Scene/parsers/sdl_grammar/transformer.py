from lark import Transformer

from raytracer.SDL_Scene.core import scene_nodes as nodes
from raytracer.SDL_Scene.core.errors import CollaboratorError
from raytracer.SDL_Scene.core.preferences import RenderOptions
from raytracer.SDL_Scene.core.transforms import (
    IDENTITY, RotateX, RotateY, RotateZ, Scale, Transform, Translate,
)
from raytracer.SDL_Scene.logger.SDL_logger import write_log


class SceneTransformer(Transformer):
    """
    Semantic actions for the extended grammar.

    Runs bottom-up over the finished parse tree. Field productions return
    (name, value) pairs which the shape and material actions collect into
    a dict, substituting defaults for anything left out.
    """

    def __init__(self, render_options=None, mesh_loader=None, image_loader=None):
        super().__init__()
        self.render_options = render_options or RenderOptions()
        self.mesh_loader = mesh_loader
        self.image_loader = image_loader

    # -------------------------
    # Scene
    # -------------------------

    def scene(self, items):
        options = nodes.SceneOptions()
        if isinstance(items[0], nodes.SceneOptions):
            options = items[0]
            items = items[1:]
        camera, objects = items[0], items[1:]
        return nodes.Scene(camera=camera, objects=tuple(objects), options=options)

    def options(self, items):
        params = self._extract(items)
        return nodes.SceneOptions(background_color=params["background"])

    def background(self, items):
        return ("background", items[0])

    def camera(self, items):
        params = self._extract(items)
        return nodes.Camera(
            origin=params["origin"],
            look_at=params["look_at"],
            fov=params.get("fov", 60.0),
            width=self.render_options.width,
            height=self.render_options.height,
        )

    def look_at(self, items):
        return ("look_at", items[0])

    def fov(self, items):
        return ("fov", items[0])

    def object(self, items):
        name = None
        if isinstance(items[0], str):
            name = items[0]
            items = items[1:]
        shape, material = items
        return nodes.SceneObject(shape=shape, material=material, name=name)

    def name(self, items):
        return items[0]

    # -------------------------
    # Shapes
    # -------------------------

    def sphere(self, items):
        params = self._extract(items)
        return nodes.Sphere(
            origin=params.get("origin", nodes.Point.zero()),
            radius=params.get("radius", 1.0),
            transform=params.get("transform", IDENTITY),
        )

    def cylinder(self, items):
        params = self._extract(items)
        return nodes.Cylinder(
            radius=params.get("radius", 1.0),
            height=params.get("height", 1.0),
            transform=params.get("transform", IDENTITY),
        )

    def torus(self, items):
        radii = [value for key, value in items if key == "radius"]
        params = self._extract(items)
        return nodes.Torus(
            major_radius=radii[0],
            minor_radius=radii[1],
            transform=params.get("transform", IDENTITY),
        )

    def cube(self, items):
        corners = [item for item in items if isinstance(item, nodes.Point)]
        params = self._extract(items)
        return nodes.Cube(
            corner1=corners[0],
            corner2=corners[1],
            transform=params.get("transform", IDENTITY),
        )

    def plane(self, items):
        params = self._extract(items)
        return nodes.Plane(
            origin=params.get("origin", nodes.Point.zero()),
            normal=params["normal"],
            transform=params.get("transform", IDENTITY),
        )

    def mesh(self, items):
        path = items[0]
        params = self._extract(items[1:])
        write_log("Info", f"Loading mesh file: {path}")
        geometry = self._call_loader(self.mesh_loader, path, "mesh")
        return nodes.Mesh(
            path=path,
            geometry=geometry,
            transform=params.get("transform", IDENTITY),
        )

    def xyrect(self, items):
        return self._rectangle(nodes.Orientation.XY, items)

    def xzrect(self, items):
        return self._rectangle(nodes.Orientation.XZ, items)

    def zyrect(self, items):
        return self._rectangle(nodes.Orientation.ZY, items)

    def union(self, items):
        return self._csg(nodes.CSGOperator.UNION, items)

    def intersection(self, items):
        return self._csg(nodes.CSGOperator.INTERSECTION, items)

    def difference(self, items):
        return self._csg(nodes.CSGOperator.DIFFERENCE, items)

    def homogenous_medium(self, items):
        boundary = [item for item in items if isinstance(item, nodes.Shape)][0]
        params = self._extract(items)
        return nodes.ParticipatingMedium(
            density=params["density"],
            boundary=boundary,
            transform=params.get("transform", IDENTITY),
        )

    # Shape fields

    def origin(self, items):
        return ("origin", items[0])

    def radius(self, items):
        return ("radius", items[0])

    def width(self, items):
        return ("width", items[0])

    def height(self, items):
        return ("height", items[0])

    def density(self, items):
        return ("density", items[0])

    def normal(self, items):
        return ("normal", items[0])

    def reverse(self, items):
        return ("reversed", True)

    # -------------------------
    # Transforms
    # -------------------------

    def transforms(self, items):
        return ("transform", Transform.from_operations(items))

    def translate(self, items):
        return Translate(items[0])

    def rotate_x(self, items):
        return RotateX(items[0])

    def rotate_y(self, items):
        return RotateY(items[0])

    def rotate_z(self, items):
        return RotateZ(items[0])

    def scale(self, items):
        return Scale(items[0])

    # -------------------------
    # Materials
    # -------------------------

    def lambertian(self, items):
        return nodes.Lambertian(texture=items[0])

    def metal(self, items):
        params = self._extract(items)
        return nodes.Metal(fuzz=params["fuzz"], texture=items[-1])

    def dielectric(self, items):
        params = self._extract(items)
        return nodes.Dielectric(ior=params["ior"], fuzz=params.get("fuzz", 0.0))

    def diffuse_light(self, items):
        params = self._extract(items)
        return nodes.DiffuseLight(intensity=params["intensity"], texture=items[-1])

    def isotropic(self, items):
        return nodes.Isotropic(texture=items[0])

    def fuzz(self, items):
        return ("fuzz", items[0])

    def ior(self, items):
        return ("ior", items[0])

    def intensity(self, items):
        return ("intensity", items[0])

    # -------------------------
    # Textures
    # -------------------------

    def solid(self, items):
        return nodes.SolidTexture(color=items[0])

    def pattern(self, items):
        return nodes.PatternTexture(pattern=items[0])

    def checkerboard(self, items):
        color_a, color_b, scale = items
        return nodes.CheckerboardPattern(color_a=color_a, color_b=color_b, scale=scale)

    def image(self, items):
        path, scale = items
        write_log("Info", f"Loading image file: {path}")
        image = self._call_loader(self.image_loader, path, "image")
        return nodes.ImageTexture(path=path, scale=scale, image=image)

    # -------------------------
    # Values
    # -------------------------

    def point(self, items):
        return nodes.Point.from_tuple(items[0])

    def direction(self, items):
        value = items[0]
        if isinstance(value, nodes.Direction):
            return value
        return nodes.Direction.from_tuple(value)

    def axis(self, items):
        return nodes.AXIS_DIRECTIONS[str(items[0])]

    def color(self, items):
        value = items[0]
        if isinstance(value, nodes.Color):
            return value
        return nodes.Color.from_tuple(value)

    def named_color(self, items):
        return nodes.NAMED_COLORS[str(items[0])]

    def rgb(self, items):
        return items[0]

    def full_vec3(self, items):
        return tuple(items)

    def short_vec3(self, items):
        n = items[0]
        return (n, n, n)

    def fragment(self, items):
        return items[0]

    def FLOAT(self, token):
        return float(token)

    def STRING(self, token):
        return str(token)

    # -------------------------
    # Internal utilities
    # -------------------------

    def _extract(self, items):
        params = {}
        for item in items:
            if isinstance(item, tuple) and len(item) == 2 and isinstance(item[0], str):
                params[item[0]] = item[1]
        return params

    def _rectangle(self, orientation, items):
        params = self._extract(items)
        return nodes.AxisRectangle(
            orientation=orientation,
            width=params["width"],
            height=params["height"],
            origin=params.get("origin", nodes.Point.zero()),
            reversed=params.get("reversed", False),
            transform=params.get("transform", IDENTITY),
        )

    def _csg(self, operator, items):
        left, right = [item for item in items if isinstance(item, nodes.Shape)]
        params = self._extract(items)
        return nodes.CSG(
            operator=operator,
            left=left,
            right=right,
            transform=params.get("transform", IDENTITY),
        )

    def _call_loader(self, loader, path, kind):
        if loader is None:
            raise CollaboratorError(path, f"no {kind} loader configured")
        try:
            return loader(path)
        except CollaboratorError:
            write_log("Error", f"{kind} loader failed for {path}")
            raise
        except Exception as e:
            write_log("Error", f"{kind} loader failed for {path}: {e}")
            raise CollaboratorError(path, str(e)) from e


class LegacySceneTransformer(SceneTransformer):
    """Semantic actions for the legacy grammar: light list, no options."""

    def scene(self, items):
        camera, lights, objects = items[0], items[1], items[2:]
        return nodes.LegacyScene(camera=camera, lights=lights, objects=tuple(objects))

    def object(self, items):
        shape, material = items
        return nodes.SceneObject(shape=shape, material=material)

    def lights(self, items):
        return tuple(items)

    def omni(self, items):
        origin, color, intensity = items
        return nodes.OmniLight(origin=origin[1], color=color, intensity=intensity[1])

    def distant(self, items):
        direction, color, intensity = items
        return nodes.DistantLight(direction=direction, color=color, intensity=intensity[1])

    def matte(self, items):
        return nodes.Matte(texture=items[0])

    def plastic(self, items):
        return nodes.Plastic(texture=items[0])

    def glass(self, items):
        return nodes.Glass()
