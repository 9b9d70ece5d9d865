"""
PNG rasterization of layout trees with matplotlib's Agg backend.

The renderer runs a small box layout over the LayoutNode tree on a canvas of
fixed width, then draws backgrounds, borders, text and images onto a single
axes whose data coordinates are canvas pixels (origin top-left).
"""

import asyncio
import os
from dataclasses import dataclass
from io import BytesIO
from typing import Optional

import matplotlib
matplotlib.use("Agg")
import matplotlib.image as mpimg
import matplotlib.patches as mpatches
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

from ..config.defaults import RenderParams
from ..errors import RenderError
from ..layout.builder import TableModel
from ..layout.nodes import ContainerNode, ImageNode, LayoutNode, Style, TextNode
from ..logging import get_logger

logger = get_logger(__name__)

LINE_HEIGHT = 1.25
CHAR_WIDTH = 0.58            # Average glyph advance as a fraction of font size
FONT_WEIGHTS = {"400": "normal", "500": "medium", "600": "semibold", "700": "bold"}


@dataclass(frozen=True)
class Box:
    x: float
    y: float
    width: float
    height: float


class TableRenderer:
    """
    Rasterizes TableModel layouts to PNG bytes.

    Args:
        width: Canvas width in px; height follows the content
        dpi: Resolution used to convert px font sizes to points
        font_family: Proportional font
        mono_font_family: Font for monospace cells
    """

    def __init__(self, width: int = 2048, dpi: int = 100,
                 font_family: str = "DejaVu Sans",
                 mono_font_family: str = "DejaVu Sans Mono"):
        self.width = width
        self.dpi = dpi
        self.font_family = font_family
        self.mono_font_family = mono_font_family

    @classmethod
    def from_params(cls, params: RenderParams) -> "TableRenderer":
        """Create a renderer from the render configuration section."""
        return cls(
            width=params.width,
            dpi=params.dpi,
            font_family=params.font_family,
            mono_font_family=params.mono_font_family,
        )

    def render(self, model: TableModel) -> bytes:
        """Rasterize one table; any failure is raised as RenderError."""
        try:
            return self.render_node(model.root)
        except RenderError:
            raise
        except Exception as e:
            raise RenderError(f"Failed to render {model.title} table: {e}", title=model.title) from e

    async def render_async(self, model: TableModel) -> bytes:
        """Rasterize in a worker thread so the event loop stays free."""
        return await asyncio.to_thread(self.render, model)

    def render_node(self, root: LayoutNode) -> bytes:
        height = max(1, int(round(self.measure(root, self.width))))

        fig = Figure(figsize=(self.width / self.dpi, height / self.dpi), dpi=self.dpi)
        FigureCanvasAgg(fig)
        ax = fig.add_axes([0, 0, 1, 1])
        ax.set_xlim(0, self.width)
        ax.set_ylim(height, 0)
        ax.set_autoscale_on(False)
        ax.axis("off")

        self.draw(ax, root, Box(0, 0, self.width, height))

        buf = BytesIO()
        fig.savefig(buf, format="png", dpi=self.dpi,
                    facecolor=root.style.background or "#ffffff", edgecolor="none")
        logger.debug("Rendered layout", width=self.width, height=height, size=buf.tell())
        return buf.getvalue()

    # Measurement

    def measure(self, node: LayoutNode, width: float) -> float:
        """Height of node when laid out at the given width."""
        style = node.style
        top, right, bottom, left = style.padding

        if isinstance(node, TextNode):
            content = style.font_size * LINE_HEIGHT
        elif isinstance(node, ImageNode):
            content = node.height
        else:
            inner = width - left - right
            children = node.children
            if not children:
                content = 0
            elif style.direction == "row":
                widths = self.child_widths(node, inner)
                content = max(self.measure(child, w) for child, w in zip(children, widths))
            else:
                content = sum(self.measure(child, self.fixed_width(child, inner)) + child.style.margin_bottom
                              for child in children)
                content += style.gap * (len(children) - 1)

        return max(content + top + bottom, style.height or 0)

    def intrinsic_width(self, node: LayoutNode) -> float:
        """Natural width of a node that has neither a fixed width nor flex."""
        style = node.style
        top, right, bottom, left = style.padding
        if style.width is not None:
            return style.width
        if isinstance(node, TextNode):
            content = len(node.text) * style.font_size * CHAR_WIDTH
        elif isinstance(node, ImageNode):
            content = node.width
        elif not node.children:
            content = 0
        elif style.direction == "row":
            content = sum(self.intrinsic_width(child) for child in node.children)
            content += style.gap * (len(node.children) - 1)
        else:
            content = max(self.intrinsic_width(child) for child in node.children)
        return content + left + right

    def fixed_width(self, node: LayoutNode, available: float) -> float:
        if node.style.width is not None:
            return min(node.style.width, available)
        if isinstance(node, ImageNode):
            return min(node.width + node.style.padding[1] + node.style.padding[3], available)
        return available

    def child_widths(self, node: ContainerNode, inner: float) -> list[float]:
        """Row distribution: fixed and intrinsic widths first, flex shares the rest."""
        children = node.children
        free = inner - node.style.gap * (len(children) - 1)
        widths: list[Optional[float]] = []
        total_flex = 0.0

        for child in children:
            if child.style.flex:
                widths.append(None)
                total_flex += child.style.flex
            else:
                width = self.intrinsic_width(child)
                widths.append(width)
                free -= width

        free = max(free, 0)
        return [w if w is not None else free * child.style.flex / total_flex
                for child, w in zip(children, widths)]

    # Drawing

    def draw(self, ax, node: LayoutNode, box: Box) -> None:
        style = node.style
        self.draw_background(ax, style, box)

        top, right, bottom, left = style.padding
        content = Box(box.x + left, box.y + top,
                      box.width - left - right, box.height - top - bottom)

        if isinstance(node, TextNode):
            self.draw_text(ax, node, content)
        elif isinstance(node, ImageNode):
            self.draw_image(ax, node, content)
        elif style.direction == "row":
            self.draw_row(ax, node, content)
        else:
            self.draw_column(ax, node, content)

    def draw_row(self, ax, node: ContainerNode, content: Box) -> None:
        style = node.style
        children = node.children
        if not children:
            return
        widths = self.child_widths(node, content.width)
        used = sum(widths) + style.gap * (len(children) - 1)
        leftover = max(content.width - used, 0)

        gap = style.gap
        x = content.x
        if style.justify == "space-between" and len(children) > 1:
            gap += leftover / (len(children) - 1)
        elif style.justify == "center":
            x += leftover / 2
        elif style.justify == "end":
            x += leftover

        for child, width in zip(children, widths):
            if style.align == "center":
                height = self.measure(child, width)
                y = content.y + (content.height - height) / 2
            else:
                height = content.height
                y = content.y
            self.draw(ax, child, Box(x, y, width, height))
            x += width + gap

    def draw_column(self, ax, node: ContainerNode, content: Box) -> None:
        y = content.y
        for child in node.children:
            width = self.fixed_width(child, content.width)
            height = self.measure(child, width)
            self.draw(ax, child, Box(content.x, y, width, height))
            y += height + child.style.margin_bottom + node.style.gap

    def draw_background(self, ax, style: Style, box: Box) -> None:
        if style.background:
            radius = min(style.border_radius, box.width / 2, box.height / 2)
            if radius > 0:
                patch = mpatches.FancyBboxPatch(
                    (box.x, box.y), box.width, box.height,
                    boxstyle=f"round,pad=0,rounding_size={radius}",
                    facecolor=style.background, edgecolor="none", linewidth=0)
            else:
                patch = mpatches.Rectangle(
                    (box.x, box.y), box.width, box.height,
                    facecolor=style.background, edgecolor="none", linewidth=0)
            ax.add_patch(patch)

        if style.border_top:
            ax.plot([box.x, box.x + box.width], [box.y, box.y],
                    color=style.border_top, linewidth=72 / self.dpi)
        if style.border_bottom:
            y = box.y + box.height
            ax.plot([box.x, box.x + box.width], [y, y],
                    color=style.border_bottom, linewidth=72 / self.dpi)

    def draw_text(self, ax, node: TextNode, content: Box) -> None:
        if not node.text:
            return
        style = node.style
        if style.text_align == "center":
            x, ha = content.x + content.width / 2, "center"
        elif style.text_align == "right":
            x, ha = content.x + content.width, "right"
        else:
            x, ha = content.x, "left"

        ax.text(
            x, content.y + content.height / 2, node.text,
            ha=ha, va="center",
            fontsize=style.font_size * 72 / self.dpi,
            fontweight=FONT_WEIGHTS.get(style.font_weight, "normal"),
            family=self.mono_font_family if style.monospace else self.font_family,
            color=style.color or "#000000",
        )

    def draw_image(self, ax, node: ImageNode, content: Box) -> None:
        # Remote sources are not fetched; their box stays reserved
        if not node.src or not os.path.isfile(node.src):
            return
        pixels = mpimg.imread(node.src)
        ax.imshow(pixels, extent=(content.x, content.x + node.width,
                                  content.y + node.height, content.y),
                  aspect="auto", zorder=2)
