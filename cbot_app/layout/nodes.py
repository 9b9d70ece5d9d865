"""
Renderer-agnostic layout tree.

A layout is a tree of three node kinds: containers that stack their children
in a row or a column, text cells, and image cells. Every node carries a
Style record with resolved colors and box metrics; nothing is inherited
between nodes.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Iterator, Optional, Union

Padding = tuple[int, int, int, int]    # top, right, bottom, left


@dataclass(frozen=True)
class Style:
    """Box and typography settings of one node."""
    direction: str = "column"          # Container axis: "row" or "column"
    width: Optional[int] = None        # Fixed width in px (flex basis)
    height: Optional[int] = None       # Minimum height in px
    flex: Optional[float] = None       # Share of the free row space
    padding: Padding = (0, 0, 0, 0)
    margin_bottom: int = 0
    gap: int = 0                       # Space between container children
    justify: str = "start"             # "start", "center", "end", "space-between"
    align: str = "start"               # Cross-axis placement: "start", "center"
    background: Optional[str] = None
    color: Optional[str] = None
    font_size: int = 16
    font_weight: str = "400"
    monospace: bool = False
    text_align: str = "left"
    border_radius: int = 0
    border_top: Optional[str] = None   # 1px line color
    border_bottom: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Only the settings that differ from the defaults."""
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value != f.default:
                result[f.name] = list(value) if isinstance(value, tuple) else value
        return result


@dataclass(frozen=True)
class TextNode:
    text: str
    style: Style = field(default_factory=Style)

    kind = "text"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind, "text": self.text, "style": self.style.to_dict()}


@dataclass(frozen=True)
class ImageNode:
    src: str
    width: int
    height: int
    style: Style = field(default_factory=Style)

    kind = "image"

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.kind,
            "src": self.src,
            "width": self.width,
            "height": self.height,
            "style": self.style.to_dict(),
        }


@dataclass(frozen=True)
class ContainerNode:
    children: tuple["LayoutNode", ...]
    style: Style = field(default_factory=Style)

    kind = "container"

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.kind,
            "style": self.style.to_dict(),
            "children": [child.to_dict() for child in self.children],
        }


LayoutNode = Union[ContainerNode, TextNode, ImageNode]


def make_style(**settings: Any) -> Style:
    """Style from keyword settings; padding may be an int or (vertical, horizontal)."""
    padding = settings.pop("padding", 0)
    if isinstance(padding, int):
        padding = (padding,) * 4
    elif len(padding) == 2:
        padding = (padding[0], padding[1], padding[0], padding[1])
    return Style(padding=tuple(padding), **settings)


def row(*children: LayoutNode, **settings: Any) -> ContainerNode:
    return ContainerNode(children=tuple(children), style=make_style(direction="row", **settings))


def column(*children: LayoutNode, **settings: Any) -> ContainerNode:
    return ContainerNode(children=tuple(children), style=make_style(direction="column", **settings))


def text(value: str, **settings: Any) -> TextNode:
    return TextNode(text=value, style=make_style(**settings))


def image(src: str, width: int, height: int, **settings: Any) -> ImageNode:
    return ImageNode(src=src, width=width, height=height, style=make_style(**settings))


def iter_nodes(node: LayoutNode) -> Iterator[LayoutNode]:
    """Depth-first walk over a layout tree, parents before children."""
    yield node
    if isinstance(node, ContainerNode):
        for child in node.children:
            yield from iter_nodes(child)


def iter_texts(node: LayoutNode) -> Iterator[str]:
    """All text cell contents in document order."""
    for item in iter_nodes(node):
        if isinstance(item, TextNode):
            yield item.text
