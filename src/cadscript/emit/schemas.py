"""
Built-in command schemas targeting the AutoCAD .NET API.

Each entry lists the command's parameters (name, kind, default) in
documentation order and the C# body emitted for it. Bodies run inside the
transaction opened by the document header, where `db`, `tr` and `btr` (the
model space block table record) are in scope.
"""

from typing import List, Optional

from .registry import CommandSchema, ParamSpec
from .template import template, radians, displacement
from ..values import (
    ValueKind, number_val, text_val, point_val, vector_val, color_val,
)


# --- Parameter spec helpers ---

def _num(name: str, default: float, doc: str = "", integer: bool = False) -> ParamSpec:
    return ParamSpec(name, ValueKind.NUMBER, number_val(default), integer=integer, doc=doc)


def _count(name: str, default: int, doc: str = "") -> ParamSpec:
    return _num(name, default, doc, integer=True)


def _angle(name: str, default: float) -> ParamSpec:
    return _num(name, default, "degrees")


def _text(name: str, default: str, doc: str = "") -> ParamSpec:
    return ParamSpec(name, ValueKind.TEXT, text_val(default), doc=doc)


def _point(name: str, x: float = 0, y: float = 0, z: float = 0, doc: str = "") -> ParamSpec:
    return ParamSpec(name, ValueKind.POINT, point_val(x, y, z), doc=doc)


def _vector(name: str, x: float, y: float, z: float, doc: str = "") -> ParamSpec:
    return ParamSpec(name, ValueKind.VECTOR, vector_val(x, y, z), doc=doc)


def _color(name: str, r: int, g: int, b: int, doc: str = "") -> ParamSpec:
    return ParamSpec(name, ValueKind.COLOR, color_val(r, g, b), doc=doc)


def _position(x: float = 0, y: float = 0, z: float = 0) -> ParamSpec:
    return _point("position", x, y, z)


def _normal() -> ParamSpec:
    return _vector("normal", 0, 0, 1)


SCHEMAS: List[CommandSchema] = []


def _schema(command_type: str, category: str, doc: str, params: List[ParamSpec],
            body: str, derived: Optional[dict] = None) -> None:
    SCHEMAS.append(CommandSchema(
        command_type=command_type,
        params=tuple(params),
        render=template(body.strip("\n"), derived),
        category=category,
        doc=doc,
    ))


def _append(var: str) -> str:
    return (f"btr.AppendEntity({var});\n"
            f"tr.AddNewlyCreatedDBObject({var}, true);")


def _solid(var: str, create: str) -> str:
    return (f"Solid3d {var} = new Solid3d();\n"
            f"{var}.{create};\n"
            f"{var}.TransformBy(Matrix3d.Displacement(new Vector3d({{position}})));\n"
            + _append(var))


# =============================================================================
# 3D solids
# =============================================================================

SOLIDS = "3D solids"

_schema("BOX", SOLIDS, "Rectangular box", [
    _num("width", 1.0), _num("height", 1.0), _num("depth", 1.0), _position(),
], _solid("box", "CreateBox({width}, {height}, {depth})"))

_schema("SPHERE", SOLIDS, "Sphere", [
    _num("radius", 1.0), _position(),
], _solid("sphere", "CreateSphere({radius})"))

_schema("CYLINDER", SOLIDS, "Cylinder along Z", [
    _num("radius", 1.0), _num("height", 1.0), _position(),
], _solid("cylinder", "CreateFrustum({height}, {radius}, {radius}, {radius})"))

_schema("CONE", SOLIDS, "Cone along Z", [
    _num("radius", 1.0), _num("height", 1.0), _position(),
], _solid("cone", "CreateFrustum({height}, {radius}, {radius}, 0)"))

_schema("TORUS", SOLIDS, "Torus", [
    _num("majorRadius", 2.0), _num("minorRadius", 0.5), _position(),
], _solid("torus", "CreateTorus({majorRadius}, {minorRadius})"))

_schema("WEDGE", SOLIDS, "Wedge", [
    _num("length", 2.0), _num("width", 1.0), _num("height", 1.0), _position(),
], _solid("wedge", "CreateWedge({length}, {width}, {height})"))

_schema("PYRAMID", SOLIDS, "Regular pyramid", [
    _num("radius", 1.0), _num("height", 2.0), _count("sides", 4), _position(),
], _solid("pyramid", "CreatePyramid({height}, {sides}, {radius}, 0)"))


# =============================================================================
# Curves and lines
# =============================================================================

CURVES = "Curves and lines"

_schema("LINE", CURVES, "Line segment", [
    _point("start"), _point("end", 1, 0, 0),
], """
Line line = new Line();
line.StartPoint = new Point3d({start});
line.EndPoint = new Point3d({end});
""" + _append("line"))

_schema("CIRCLE", CURVES, "Circle", [
    _num("radius", 1.0), _point("center"), _normal(),
], """
Circle circle = new Circle();
circle.Center = new Point3d({center});
circle.Radius = {radius};
circle.Normal = new Vector3d({normal});
""" + _append("circle"))

_schema("ARC", CURVES, "Circular arc", [
    _num("radius", 1.0), _point("center"),
    _angle("startAngle", 0.0), _angle("endAngle", 90.0), _normal(),
], """
Arc arc = new Arc();
arc.Center = new Point3d({center});
arc.Radius = {radius};
arc.StartAngle = {startRadians};
arc.EndAngle = {endRadians};
arc.Normal = new Vector3d({normal});
""" + _append("arc"), {
    "startRadians": radians("startAngle"),
    "endRadians": radians("endAngle"),
})

_schema("ELLIPSE", CURVES, "Ellipse", [
    _point("center"), _vector("majorAxis", 2, 0, 0), _num("radiusRatio", 0.5), _normal(),
], """
Ellipse ellipse = new Ellipse();
ellipse.Center = new Point3d({center});
ellipse.MajorAxis = new Vector3d({majorAxis});
ellipse.RadiusRatio = {radiusRatio};
ellipse.Normal = new Vector3d({normal});
""" + _append("ellipse"))

_schema("SPLINE", CURVES, "Fit-point spline through four points", [
    _point("start"), _point("end", 5, 5, 0), _point("control1", 1, 2, 0), _point("control2", 4, 3, 0),
], """
Point3dCollection fitPoints = new Point3dCollection();
fitPoints.Add(new Point3d({start}));
fitPoints.Add(new Point3d({control1}));
fitPoints.Add(new Point3d({control2}));
fitPoints.Add(new Point3d({end}));
Spline spline = new Spline(fitPoints, 3, 0.0);
""" + _append("spline"))

_schema("POLYLINE", CURVES, "Two-vertex lightweight polyline", [
    _point("start"), _point("end", 1, 1, 0), _num("width", 0.0),
], """
Polyline pline = new Polyline();
pline.AddVertexAt(0, new Point2d({start.x}, {start.y}), 0, {width}, {width});
pline.AddVertexAt(1, new Point2d({end.x}, {end.y}), 0, {width}, {width});
""" + _append("pline"))

_schema("POLYLINE3D", CURVES, "Two-vertex 3D polyline", [
    _point("start"), _point("end", 1, 1, 1),
], """
Polyline3d pline3d = new Polyline3d();
btr.AppendEntity(pline3d);
tr.AddNewlyCreatedDBObject(pline3d, true);
PolylineVertex3d vertex1 = new PolylineVertex3d(new Point3d({start}));
PolylineVertex3d vertex2 = new PolylineVertex3d(new Point3d({end}));
pline3d.AppendVertex(vertex1);
pline3d.AppendVertex(vertex2);
tr.AddNewlyCreatedDBObject(vertex1, true);
tr.AddNewlyCreatedDBObject(vertex2, true);
""")

_schema("RAY", CURVES, "Semi-infinite line", [
    _point("basePoint"), _vector("direction", 1, 0, 0),
], """
Ray ray = new Ray();
ray.BasePoint = new Point3d({basePoint});
ray.UnitDir = new Vector3d({direction}).GetNormal();
""" + _append("ray"))

_schema("XLINE", CURVES, "Infinite construction line", [
    _point("basePoint"), _vector("direction", 1, 0, 0),
], """
Xline xline = new Xline();
xline.BasePoint = new Point3d({basePoint});
xline.UnitDir = new Vector3d({direction}).GetNormal();
""" + _append("xline"))


# =============================================================================
# Text and annotations
# =============================================================================

TEXT = "Text and annotations"

_schema("TEXT", TEXT, "Single-line text", [
    _text("text", "Sample Text"), _position(), _num("height", 1.0), _angle("rotation", 0.0),
], """
DBText dbText = new DBText();
dbText.Position = new Point3d({position});
dbText.Height = {height};
dbText.TextString = "{text}";
dbText.Rotation = {rotationRadians};
""" + _append("dbText"), {"rotationRadians": radians("rotation")})

_schema("MTEXT", TEXT, "Multi-line text", [
    _text("text", "Sample MText"), _position(), _num("height", 1.0), _num("width", 10.0),
], """
MText mtext = new MText();
mtext.Location = new Point3d({position});
mtext.TextHeight = {height};
mtext.Width = {width};
mtext.Contents = "{text}";
""" + _append("mtext"))


# =============================================================================
# Dimensions
# =============================================================================

DIMENSIONS = "Dimensions"

_schema("DIMENSION_LINEAR", DIMENSIONS, "Aligned linear dimension", [
    _point("point1"), _point("point2", 5, 0, 0), _point("dimLine", 2.5, 2, 0),
], """
AlignedDimension dim = new AlignedDimension();
dim.XLine1Point = new Point3d({point1});
dim.XLine2Point = new Point3d({point2});
dim.DimLinePoint = new Point3d({dimLine});
""" + _append("dim"))

_schema("DIMENSION_ANGULAR", DIMENSIONS, "Three-point angular dimension", [
    _point("center"), _point("point1", 5, 0, 0), _point("point2", 0, 5, 0), _point("arcPoint", 3, 3, 0),
], """
Point3AngularDimension angDim = new Point3AngularDimension();
angDim.CenterPoint = new Point3d({center});
angDim.XLine1Point = new Point3d({point1});
angDim.XLine2Point = new Point3d({point2});
angDim.ArcPoint = new Point3d({arcPoint});
""" + _append("angDim"))

_schema("DIMENSION_RADIAL", DIMENSIONS, "Radial dimension", [
    _point("center"), _point("chordPoint", 5, 0, 0), _num("leaderLength", 2.0),
], """
RadialDimension radDim = new RadialDimension();
radDim.Center = new Point3d({center});
radDim.ChordPoint = new Point3d({chordPoint});
radDim.LeaderLength = {leaderLength};
""" + _append("radDim"))

_schema("DIMENSION_DIAMETRIC", DIMENSIONS, "Diametric dimension", [
    _point("chordPoint", 5, 0, 0), _point("farChordPoint", -5, 0, 0), _num("leaderLength", 2.0),
], """
DiametricDimension diamDim = new DiametricDimension();
diamDim.ChordPoint = new Point3d({chordPoint});
diamDim.FarChordPoint = new Point3d({farChordPoint});
diamDim.LeaderLength = {leaderLength};
""" + _append("diamDim"))


# =============================================================================
# Surfaces and regions
# =============================================================================

SURFACES = "Surfaces and regions"

_schema("HATCH", SURFACES, "Pattern hatch (boundary added separately)", [
    _text("pattern", "SOLID"), _num("scale", 1.0), _angle("angle", 0.0),
], """
Hatch hatch = new Hatch();
hatch.SetHatchPattern(HatchPatternType.PreDefined, "{pattern}");
hatch.PatternScale = {scale};
hatch.PatternAngle = {angleRadians};
// Note: Boundary must be added after creation
""" + _append("hatch"), {"angleRadians": radians("angle")})

_schema("REGION", SURFACES, "Region from existing curves", [], """
// Region creation requires existing curves
// Use Region.CreateFromCurves() with curve collection
""")

_schema("SURFACE", SURFACES, "Planar surface", [
    _num("width", 10.0), _num("height", 10.0), _position(),
], """
PlaneSurface surface = new PlaneSurface();
surface.CreateByWidthHeight(new Point3d({position}),
    Vector3d.XAxis, Vector3d.YAxis, {width}, {height});
""" + _append("surface"))

_schema("MESH", SURFACES, "Subdivision mesh", [
    _count("subdivisionLevel", 0),
], """
SubDMesh mesh = new SubDMesh();
mesh.SubDivisionLevel = {subdivisionLevel};
// Note: Vertices and faces must be added after creation
""" + _append("mesh"))


# =============================================================================
# Points and blocks
# =============================================================================

BLOCKS = "Points and blocks"

_schema("POINT", BLOCKS, "Point entity", [
    _position(),
], """
DBPoint point = new DBPoint();
point.Position = new Point3d({position});
""" + _append("point"))

_schema("BLOCK_REF", BLOCKS, "Insert a reference to an existing block", [
    _text("blockName", "TestBlock"), _position(), _num("scale", 1.0), _angle("rotation", 0.0),
], """
// Block reference requires existing block definition
BlockTable blockTable = (BlockTable)tr.GetObject(db.BlockTableId, OpenMode.ForRead);
if (blockTable.Has("{blockName}"))
{{
    BlockReference blockRef = new BlockReference(
        new Point3d({position}), blockTable["{blockName}"]);
    blockRef.ScaleFactors = new Scale3d({scale});
    blockRef.Rotation = {rotationRadians};
    btr.AppendEntity(blockRef);
    tr.AddNewlyCreatedDBObject(blockRef, true);
}}
""", {"rotationRadians": radians("rotation")})


# =============================================================================
# Organization
# =============================================================================

ORGANIZATION = "Organization"

_schema("LAYER", ORGANIZATION, "Create a layer if it does not exist", [
    _text("name", "Layer1"), _color("color", 255, 255, 255),
], """
LayerTable lt = (LayerTable)tr.GetObject(db.LayerTableId, OpenMode.ForWrite);
if (!lt.Has("{name}"))
{{
    LayerTableRecord ltr = new LayerTableRecord();
    ltr.Name = "{name}";
    ltr.Color = Color.FromRgb({color});
    lt.Add(ltr);
    tr.AddNewlyCreatedDBObject(ltr, true);
}}
""")

_schema("GROUP", ORGANIZATION, "Named group", [
    _text("name", "Group1"), _text("description", "Generated Group"),
], """
Group group = new Group("{description}", true);
DBDictionary groupDict = (DBDictionary)tr.GetObject(db.GroupDictionaryId, OpenMode.ForWrite);
groupDict.SetAt("{name}", group);
tr.AddNewlyCreatedDBObject(group, true);
""")


# =============================================================================
# Transformations
# =============================================================================

TRANSFORMS = "Transformations"

_schema("MOVE", TRANSFORMS, "Displacement matrix between two points", [
    _point("from"), _point("to", 1, 1, 0),
], """
Vector3d moveVector = new Vector3d({offset});
Matrix3d moveMatrix = Matrix3d.Displacement(moveVector);
// Apply to selected objects: entity.TransformBy(moveMatrix);
""", {"offset": displacement("from", "to")})

_schema("ROTATE", TRANSFORMS, "Rotation matrix about an axis", [
    _point("center"), _angle("angle", 0.0), _vector("axis", 0, 0, 1),
], """
Point3d rotationCenter = new Point3d({center});
Vector3d rotationAxis = new Vector3d({axis});
Matrix3d rotationMatrix = Matrix3d.Rotation({angleRadians}, rotationAxis, rotationCenter);
// Apply to selected objects: entity.TransformBy(rotationMatrix);
""", {"angleRadians": radians("angle")})

_schema("SCALE", TRANSFORMS, "Uniform scaling matrix", [
    _point("center"), _num("factor", 1.0),
], """
Point3d scaleCenter = new Point3d({center});
Matrix3d scaleMatrix = Matrix3d.Scaling({factor}, scaleCenter);
// Apply to selected objects: entity.TransformBy(scaleMatrix);
""")

_schema("MIRROR", TRANSFORMS, "Mirror matrix across a line", [
    _point("point1"), _point("point2", 1, 0, 0),
], """
Point3d mirrorPt1 = new Point3d({point1});
Point3d mirrorPt2 = new Point3d({point2});
Line3d mirrorLine = new Line3d(mirrorPt1, mirrorPt2);
Matrix3d mirrorMatrix = Matrix3d.Mirroring(mirrorLine);
// Apply to selected objects: entity.TransformBy(mirrorMatrix);
""")

_schema("ARRAY_RECTANGULAR", TRANSFORMS, "Rectangular array offsets", [
    _count("rows", 3), _count("cols", 3), _num("rowSpacing", 5.0), _num("colSpacing", 5.0),
], """
// Rectangular array - repeat for each row and column
for (int row = 0; row < {rows}; row++)
{{
    for (int col = 0; col < {cols}; col++)
    {{
        Vector3d offset = new Vector3d(col * {colSpacing}, row * {rowSpacing}, 0);
        Matrix3d transform = Matrix3d.Displacement(offset);
        // Clone and transform entity
    }}
}}
""")

_schema("ARRAY_POLAR", TRANSFORMS, "Polar array rotations", [
    _point("center"), _count("count", 6), _angle("angle", 360.0),
], """
Point3d arrayCenter = new Point3d({center});
double angleStep = {angleRadians} / {count};
for (int i = 0; i < {count}; i++)
{{
    double currentAngle = i * angleStep;
    Matrix3d transform = Matrix3d.Rotation(currentAngle, Vector3d.ZAxis, arrayCenter);
    // Clone and transform entity
}}
""", {"angleRadians": radians("angle")})


# =============================================================================
# Boolean operations
# =============================================================================

BOOLEANS = "Boolean operations"

for _type, _op, _label in (("UNION", "BoolUnite", "Union"),
                           ("SUBTRACT", "BoolSubtract", "Subtract"),
                           ("INTERSECT", "BoolIntersect", "Intersect")):
    _schema(_type, BOOLEANS, f"Boolean {_label.lower()} of two solids", [], f"""
// Boolean {_label} - requires two Solid3d objects
// solid1.BooleanOperation(BooleanOperationType.{_op}, solid2);
""")


# =============================================================================
# Materials and visualization
# =============================================================================

VISUALIZATION = "Materials and visualization"

_schema("MATERIAL", VISUALIZATION, "Material with a diffuse color", [
    _text("name", "CustomMaterial"), _color("color", 128, 128, 128),
], """
// Material creation
Material material = new Material();
material.Name = "{name}";
material.Diffuse = new MaterialColor(Color.FromRgb({color}));
""")

_schema("LIGHT", VISUALIZATION, "Point light", [
    _position(0, 0, 10), _num("intensity", 1.0),
], """
Light light = new Light();
light.Position = new Point3d({position});
light.Intensity = {intensity};
""" + _append("light"))

_schema("CAMERA", VISUALIZATION, "View looking at a target", [
    _position(0, 0, 10), _point("target"),
], """
// Camera setup
ViewTableRecord view = new ViewTableRecord();
view.CenterPoint = new Point2d({target.x}, {target.y});
view.Target = new Point3d({target});
""")


# =============================================================================
# Advanced entities
# =============================================================================

ADVANCED = "Advanced entities"

_schema("LEADER", ADVANCED, "Two-vertex leader", [
    _point("start"), _point("end", 5, 5, 0),
], """
Leader leader = new Leader();
leader.AppendVertex(new Point3d({start}));
leader.AppendVertex(new Point3d({end}));
""" + _append("leader"))

_schema("MLEADER", ADVANCED, "Multileader with text", [
    _position(), _text("text", "Leader Text"),
], """
MLeader mleader = new MLeader();
mleader.SetDatabaseDefaults();
// MLeader setup requires more complex configuration
""" + _append("mleader"))

_schema("MLINE", ADVANCED, "Two-vertex multiline", [
    _point("start"), _point("end", 10, 0, 0),
], """
Mline mline = new Mline();
mline.AppendVertex(new Point3d({start}));
mline.AppendVertex(new Point3d({end}));
""" + _append("mline"))

_schema("TRACE", ADVANCED, "Four-point trace", [
    _point("point1"), _point("point2", 1, 0, 0), _point("point3", 1, 1, 0), _point("point4", 0, 1, 0),
], """
Trace trace = new Trace();
trace.SetPointAt(0, new Point3d({point1}));
trace.SetPointAt(1, new Point3d({point2}));
trace.SetPointAt(2, new Point3d({point3}));
trace.SetPointAt(3, new Point3d({point4}));
""" + _append("trace"))

_schema("SOLID", ADVANCED, "Four-point 2D solid fill", [
    _point("point1"), _point("point2", 1, 0, 0), _point("point3", 1, 1, 0), _point("point4", 0, 1, 0),
], """
Solid solid2d = new Solid();
solid2d.SetPointAt(0, new Point3d({point1}));
solid2d.SetPointAt(1, new Point3d({point2}));
// Third and fourth vertices are swapped: SOLID fills in zig-zag order
solid2d.SetPointAt(2, new Point3d({point4}));
solid2d.SetPointAt(3, new Point3d({point3}));
""" + _append("solid2d"))

_schema("FACE", ADVANCED, "Four-vertex 3D face", [
    _point("point1"), _point("point2", 1, 0, 0), _point("point3", 1, 1, 0), _point("point4", 0, 1, 0),
], """
Face face = new Face();
face.SetVertexAt(0, new Point3d({point1}));
face.SetVertexAt(1, new Point3d({point2}));
face.SetVertexAt(2, new Point3d({point3}));
face.SetVertexAt(3, new Point3d({point4}));
""" + _append("face"))


BUILTIN_SCHEMAS = tuple(SCHEMAS)
