"""Pages and files.

A :class:`DrawFile` is the ``mxfile`` document; each :class:`Page` is one
``diagram`` element holding an ``mxGraphModel`` whose root starts with the
cell ``0``. Everything else on the page (layers included) is added by the
caller.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterable, List, Union

from .. import __version__
from ..exceptions import ExportError
from .objects import Cell, DiagramObject, new_id

DRAWIO_VERSION = "21.6.5"
AGENT = f"sch2drawio/{__version__}"


@dataclass
class Page:
    """One diagram page.

    Attributes:
        name: Page tab title.
        objects: Objects below the root cell, in document order.
    """

    name: str = "Page-1"
    id: str = field(default_factory=new_id)
    page_num: int = 1
    width: int = 850
    height: int = 1100
    grid: bool = True
    grid_size: int = 10
    objects: List[DiagramObject] = field(default_factory=list)

    def add(self, obj: DiagramObject) -> None:
        self.objects.append(obj)

    def extend(self, objs: Iterable[DiagramObject]) -> None:
        self.objects.extend(objs)

    def model_attributes(self) -> Dict[str, str]:
        return {
            "dx": "2037",
            "dy": "830",
            "grid": "1" if self.grid else "0",
            "gridSize": str(self.grid_size),
            "guides": "1",
            "tooltips": "1",
            "connect": "1",
            "arrows": "1",
            "fold": "1",
            "page": str(self.page_num),
            "pageScale": "1",
            "pageWidth": str(self.width),
            "pageHeight": str(self.height),
            "math": "0",
            "shadow": "0",
        }

    def to_element(self) -> ET.Element:
        diagram = ET.Element("diagram", {"name": self.name, "id": self.id})
        model = ET.SubElement(diagram, "mxGraphModel", self.model_attributes())
        root = ET.SubElement(model, "root")
        root.append(Cell(id="0", parent=None).to_element())
        for obj in self.objects:
            root.append(obj.to_element())
        return diagram


@dataclass
class DrawFile:
    """An ``mxfile`` document holding one or more pages."""

    pages: List[Page] = field(default_factory=list)
    host: str = "Electron"
    agent: str = AGENT
    version: str = DRAWIO_VERSION

    def add_page(self, page: Page) -> None:
        page.page_num = len(self.pages) + 1
        self.pages.append(page)

    def to_element(self) -> ET.Element:
        mxfile = ET.Element(
            "mxfile",
            {
                "host": self.host,
                "modified": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ"),
                "agent": self.agent,
                "version": self.version,
                "pages": str(len(self.pages)),
            },
        )
        for page in self.pages:
            mxfile.append(page.to_element())
        return mxfile

    def to_xml(self) -> str:
        tree = ET.ElementTree(self.to_element())
        ET.indent(tree, space="  ")
        return ET.tostring(tree.getroot(), encoding="unicode")

    def write(self, path: Union[str, Path]) -> Path:
        """Write the document to *path*, creating parent directories.

        Raises:
            ExportError: If the file cannot be written.
        """
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(self.to_xml(), encoding="utf-8")
        except OSError as e:
            raise ExportError(
                f"Cannot write drawio file: {e}",
                context={"file": str(path)},
            ) from e
        return path
