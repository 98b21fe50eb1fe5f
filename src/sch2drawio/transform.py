"""Orientation transforms and symbol instantiation.

A symbol is rendered once, in its own coordinate frame. Placing an
instance copies every rendered object and maps it through the instance's
orientation, then shifts it by the instance position (already scaled to
page units, Y flipped).

Supported orientations are R0, R90, R270 and MY. R180, MX, MYR90 and
MXR90 raise :class:`~sch2drawio.exceptions.UnsupportedOrientationError`
rather than producing an approximation.

Example::

    from sch2drawio.transform import GroupTransform, transform_point
    from sch2drawio.types import Orient

    transform_point((1.0, 2.0), Orient.R90)          # (2.0, -1.0)
    transform_point((1.0, 2.0), Orient.MY, (10, 0))  # (9.0, 2.0)

    group = GroupTransform(Orient.R0, (400.0, -600.0), "U1", "res")
    placed = group.new_obj(symbol_object)           # id "U1-..."
"""

from __future__ import annotations

from typing import Optional, Tuple

from .drawio.objects import DiagramObject, Edge, Vertex
from .drawio.text import Justify
from .exceptions import UnsupportedOrientationError
from .types import BoundingBox, FlipRotation, Orient, Point

INSTANCE_NAME_PLACEHOLDER = "[@cellName]"
CELL_NAME_PLACEHOLDER = "cdsName()"

SUPPORTED_ORIENTS = frozenset({Orient.R0, Orient.R90, Orient.R270, Orient.MY})

Offset = Tuple[float, float]


def check_orient(orient: Orient) -> None:
    """Raise if *orient* is not one of the supported orientations."""
    if orient not in SUPPORTED_ORIENTS:
        raise UnsupportedOrientationError(orient)


def transform_point(point: Point, orient: Orient, offset: Offset = (0.0, 0.0)) -> Point:
    """Map *point* through *orient*, then add *offset*."""
    check_orient(orient)
    x, y = point
    if orient is Orient.MY:
        x = -x
    elif orient is Orient.R90:
        x, y = y, -x
    elif orient is Orient.R270:
        x, y = -y, x
    return (x + offset[0], y + offset[1])


def transform_box(
    box: BoundingBox,
    orient: Orient,
    offset: Offset = (0.0, 0.0),
    flip_rotation: Optional[FlipRotation] = None,
) -> BoundingBox:
    """Map *box* through *orient*, then add *offset*.

    Width and height are kept. Rotations are expressed by moving the box
    so its centre lands on the rotated centre and recording the angle on
    *flip_rotation* (-90 for R90, 90 for R270), since draw.io rotates a
    shape about its own centre.
    """
    check_orient(orient)
    min_x, min_y = box.min_x, box.min_y
    w, h = box.width, box.height

    if orient is Orient.R90:
        min_x, min_y = min_y - (w - h) / 2.0, -min_x - w / 2.0 - h / 2.0
        if flip_rotation is not None:
            flip_rotation.rotation = -90.0
    elif orient is Orient.R270:
        min_x, min_y = -min_y - (w + h) / 2.0, min_x + w / 2.0 - h / 2.0
        if flip_rotation is not None:
            flip_rotation.rotation = 90.0
    elif orient is Orient.MY:
        min_x = -(min_x + w)

    return BoundingBox(min_x + offset[0], min_y + offset[1], w, h)


def transform_justify(justify: Justify, orient: Orient) -> Justify:
    """Map a text anchor through *orient*.

    Mirroring swaps left and right. Rotations leave the anchor as is.
    """
    check_orient(orient)
    if orient is Orient.MY:
        return Justify(justify.x.mirrored(), justify.y)
    return justify


class GroupTransform:
    """Places copies of a symbol's rendered objects for one instance.

    Args:
        orient: Instance orientation.
        offset: Instance position in page units (``x * SCALE, -y * SCALE``).
        inst_name: Instance name; prefixes ids and tags every copy.
        cell_name: Symbol cell name, substituted into label text.
    """

    def __init__(
        self,
        orient: Orient,
        offset: Offset,
        inst_name: str,
        cell_name: str,
    ):
        self.orient = orient
        self.offset = offset
        self.inst_name = inst_name
        self.cell_name = cell_name

    def update_text(self, text: str) -> str:
        text = text.replace(INSTANCE_NAME_PLACEHOLDER, self.inst_name)
        return text.replace(CELL_NAME_PLACEHOLDER, self.cell_name)

    def new_obj(self, obj: DiagramObject) -> DiagramObject:
        """Return a transformed copy of *obj*; *obj* itself is untouched.

        Objects outside any generated layer (groups, bookkeeping cells)
        are renamed and tagged but keep their geometry.

        Raises:
            UnsupportedOrientationError: For a layer-bound object when the
                orientation is not supported.
        """
        new = obj.clone()
        new.id = f"{self.inst_name}-{obj.id}"
        new.value = self.update_text(new.value)
        new.tag = self.inst_name

        if not new.is_layer_bound:
            return new

        check_orient(self.orient)
        if isinstance(new, (Edge, Vertex)):
            geometry = new.geometry
            geometry.map_points(lambda p: transform_point(p, self.orient, self.offset))
        if isinstance(new, Vertex):
            geometry.box = transform_box(
                geometry.box, self.orient, self.offset, geometry.flip_rotation
            )
            justify = new.justify
            if justify is not None:
                new.justify = transform_justify(justify, self.orient)
        return new
