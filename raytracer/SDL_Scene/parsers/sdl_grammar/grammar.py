COMMON_GRAMMAR = r"""
    // -------------------------
    // Camera
    // -------------------------

    camera: "camera" "{" origin look_at fov? "}" ;
    look_at: "look_at" point ;
    fov: "fov" float ;

    // -------------------------
    // Shape fields
    // -------------------------

    origin: "origin" point ;
    radius: "radius" float ;
    width: "width" float ;
    height: "height" float ;
    density: "density" float ;
    normal: "normal" direction ;
    reverse: "reverse" ;

    sphere: "sphere" "{" origin? radius? transforms? "}" ;
    cube: "cube" "{" point point transforms? "}" ;
    plane: "plane" "{" origin? normal transforms? "}" ;
    mesh: "mesh" "{" "file" string transforms? "}" ;

    // -------------------------
    // Transforms
    // -------------------------

    transforms: "transform" "{" (translate / rotate_x / rotate_y / rotate_z / scale)* "}" ;

    translate: "translate" direction ;
    rotate_x: "rotate_x" float ;
    rotate_y: "rotate_y" float ;
    rotate_z: "rotate_z" float ;
    scale: "scale" direction ;

    // -------------------------
    // Material fields and textures
    // -------------------------

    fuzz: "fuzz" float ;
    ior: "ior" float ;
    intensity: "intensity" float ;

    lambertian: "lambertian" texture ;
    metal: "metal" fuzz texture ;
    dielectric: "dielectric" ior fuzz? ;

    ?texture: "texture" "{" (solid / pattern / image) "}" ;
    solid: "solid" color ;
    pattern: "pattern" "{" checkerboard "}" ;
    checkerboard: "checkerboard" color color float ;
    image: "image" string float ;

    // -------------------------
    // Values
    // -------------------------

    point: vec3 ;

    color: ("color" / "colour") (named_color / rgb) ;
    !named_color: "white" / "black" / "red" / "green" / "blue" / "yellow" / "cyan" / "magenta" ;
    rgb: "rgb" vec3 ;

    ?vec3: full_vec3 / short_vec3 ;
    full_vec3: "<" float "," float "," float ">" ;
    short_vec3: "<" float ">" ;

    ?float: FLOAT ;
    ?string: STRING ;

    %quiet float "FLOAT" ;
    %quiet string "STRING" ;
    %quiet named_color "color name" ;
"""

SDL_GRAMMAR = r"""
    scene: options? camera object+ ;

    options: "options" "{" background "}" ;
    background: "background" color ;

    object: "object" name? "{" shape material "}" ;
    name: string ;

    // -------------------------
    // Shapes
    // -------------------------

    ?shape: planar_shape / solid_shape / mesh ;

    ?solid_shape: sphere / cylinder / torus / cube / csg / homogenous_medium ;

    cylinder: "cylinder" "{" radius? height? transforms? "}" ;
    torus: "torus" "{" radius radius transforms? "}" ;

    ?csg: union / intersection / difference ;
    union: "union" "{" solid_shape solid_shape transforms? "}" ;
    intersection: "intersection" "{" solid_shape solid_shape transforms? "}" ;
    difference: "difference" "{" solid_shape solid_shape transforms? "}" ;

    homogenous_medium: "homogenous_medium" "{" density solid_shape transforms? "}" ;

    ?planar_shape: plane / xyrect / xzrect / zyrect ;
    xyrect: "xyrect" "{" origin? width height reverse? transforms? "}" ;
    xzrect: "xzrect" "{" origin? width height reverse? transforms? "}" ;
    zyrect: "zyrect" "{" origin? width height reverse? transforms? "}" ;

    // -------------------------
    // Materials
    // -------------------------

    ?material: "material" "{" (lambertian / metal / dielectric / diffuse_light / isotropic) "}" ;
    diffuse_light: "diffuse_light" intensity texture ;
    isotropic: "isotropic" texture ;

    direction: vec3 / axis ;
    !axis: "down" / "up" / "left" / "right" / "back" / "front" ;

    %quiet axis "direction name" ;
""" + COMMON_GRAMMAR

LEGACY_SDL_GRAMMAR = r"""
    scene: camera lights object+ ;

    lights: "lights" "{" (omni / distant)+ "}" ;
    omni: "omni" "{" origin color intensity "}" ;
    distant: "distant" "{" "direction" direction color intensity "}" ;

    object: "object" "{" shape material "}" ;

    ?shape: sphere / plane / cube / mesh ;

    ?material: "material" "{" (matte / plastic / glass / lambertian / metal / dielectric) "}" ;
    matte: "matte" texture ;
    plastic: "plastic" texture ;
    glass: "glass" ;

    direction: vec3 ;
""" + COMMON_GRAMMAR
