"""
PNG Renderer module for laid-out diagrams.

Renders a finished Diagram as a high-resolution PNG image with Pillow.
"""

import math
import os
from typing import Optional, Sequence, Tuple

from PIL import Image, ImageDraw, ImageFont

from .models import Diagram, LayoutEdge, LayoutNode, NodeKind, Point, RenderResult
from .svg_renderer import NODE_COLORS


class PNGRenderer:
    """Renders diagrams as PNG images."""

    def __init__(
        self,
        scale: int = 2,  # For high-resolution output
        font_size: int = 14,
        label_font_size: int = 12,
        actor_font_size: int = 10,
        font_path: Optional[str] = None,  # Custom font path
        bg_color: str = "#FFFFFF",
        line_color: str = "#000000",
        text_color: str = "#000000",
        actor_color: str = "#555555",
        error_color: str = "#D32F2F",
    ):
        if scale < 1:
            raise ValueError("scale must be a positive integer")

        self.scale = scale
        self.font_size = font_size
        self.label_font_size = label_font_size
        self.actor_font_size = actor_font_size
        self.font_path = font_path
        self.bg_color = bg_color
        self.line_color = line_color
        self.text_color = text_color
        self.actor_color = actor_color
        self.error_color = error_color

        self._fonts = {}

    def _get_font(self, size: int) -> ImageFont.ImageFont:
        """Get a font of the given point size, scaled for output."""
        if size in self._fonts:
            return self._fonts[size]

        font_size = size * self.scale
        font_options = []
        if self.font_path and os.path.exists(self.font_path):
            font_options.append(self.font_path)
        font_options.extend(
            [
                "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
                "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
                "/usr/share/fonts/truetype/freefont/FreeSans.ttf",
                "/System/Library/Fonts/Helvetica.ttc",
                "C:/Windows/Fonts/arial.ttf",
                "DejaVuSans.ttf",
                "Arial",
            ]
        )

        font = None
        for option in font_options:
            try:
                font = ImageFont.truetype(option, font_size)
                break
            except OSError:
                continue

        if font is None:
            try:
                font = ImageFont.load_default(size=font_size)
            except TypeError:
                # Older Pillow versions don't support size parameter
                font = ImageFont.load_default()

        self._fonts[size] = font
        return font

    def render(self, result: RenderResult, output_path: str = "diagram.png") -> str:
        """
        Render a RenderResult as a PNG image.

        The empty result becomes a small image showing its message.

        Args:
            result: Output of FlowchartGenerator.generate()
            output_path: Path to save the PNG file

        Returns:
            Path to the saved PNG file
        """
        if result.is_empty:
            image = self._render_message(result.message)
        else:
            image = self.render_image(result.diagram)

        image.save(output_path, "PNG")
        return output_path

    def render_image(self, diagram: Diagram) -> Image.Image:
        """Draw a laid-out diagram onto a new image."""
        width = int(math.ceil(diagram.canvas_width * self.scale))
        height = int(math.ceil(diagram.canvas_height * self.scale))

        img = Image.new("RGB", (width, height), self.bg_color)
        draw = ImageDraw.Draw(img)

        # Edges first so shapes cover the line ends
        for edge in diagram.edges:
            if edge.is_routed:
                self._draw_edge(draw, edge)

        for node in diagram.nodes:
            self._draw_node(draw, node)

        return img

    def _render_message(self, message: str) -> Image.Image:
        img = Image.new("RGB", (300 * self.scale, 60 * self.scale), self.bg_color)
        draw = ImageDraw.Draw(img)
        font = self._get_font(self.font_size)
        position = (10 * self.scale, 20 * self.scale)
        draw.text(position, message, fill=self.error_color, font=font)
        return img

    def _scaled(self, points: Sequence[Point]) -> list:
        return [(x * self.scale, y * self.scale) for x, y in points]

    def _draw_edge(self, draw: ImageDraw.ImageDraw, edge: LayoutEdge) -> None:
        """Draw a routed edge with an arrowhead at the target."""
        line_width = max(1, self.scale)
        waypoints = self._scaled(edge.path)

        for i in range(len(waypoints) - 1):
            draw.line(
                [waypoints[i], waypoints[i + 1]], fill=self.line_color, width=line_width
            )

        self._draw_arrowhead(draw, waypoints[-2], waypoints[-1])

        if edge.label and edge.label_position is not None:
            label_x, label_y = edge.label_position
            self._draw_centered_text(
                draw,
                label_x * self.scale,
                label_y * self.scale,
                edge.label,
                self._get_font(self.label_font_size),
                self.text_color,
            )

    def _draw_arrowhead(
        self,
        draw: ImageDraw.ImageDraw,
        from_point: Tuple[float, float],
        to_point: Tuple[float, float],
    ) -> None:
        """Draw an arrowhead at the end of a line."""
        x1, y1 = from_point
        x2, y2 = to_point

        arrow_size = 8 * self.scale

        angle = math.atan2(y2 - y1, x2 - x1)
        angle1 = angle + math.pi * 0.8
        angle2 = angle - math.pi * 0.8

        ax1 = x2 + arrow_size * math.cos(angle1)
        ay1 = y2 + arrow_size * math.sin(angle1)
        ax2 = x2 + arrow_size * math.cos(angle2)
        ay2 = y2 + arrow_size * math.sin(angle2)

        draw.polygon([(x2, y2), (ax1, ay1), (ax2, ay2)], fill=self.line_color)

    def _draw_node(self, draw: ImageDraw.ImageDraw, node: LayoutNode) -> None:
        """Draw a node shape with its label and, for tasks, its actor."""
        fill, outline = NODE_COLORS[node.kind]
        line_width = max(1, self.scale)
        left, top, right, bottom = (
            node.left * self.scale,
            node.top * self.scale,
            node.right * self.scale,
            node.bottom * self.scale,
        )
        cx, cy = node.x * self.scale, node.y * self.scale

        if node.shape == "circle":
            draw.ellipse(
                [left, top, right, bottom], fill=fill, outline=outline, width=line_width
            )
        elif node.shape == "diamond":
            draw.polygon(
                [(cx, top), (right, cy), (cx, bottom), (left, cy)],
                fill=fill,
                outline=outline,
                width=line_width,
            )
        else:
            draw.rounded_rectangle(
                [left, top, right, bottom],
                radius=5 * self.scale,
                fill=fill,
                outline=outline,
                width=line_width,
            )

        self._draw_centered_text(
            draw, cx, cy, node.label, self._get_font(self.font_size), self.text_color
        )

        if node.kind is NodeKind.TASK and node.actor:
            font = self._get_font(self.actor_font_size)
            bbox = draw.textbbox((0, 0), node.actor, font=font)
            text_w, text_h = bbox[2] - bbox[0], bbox[3] - bbox[1]
            inset = 5 * self.scale
            draw.text(
                (right - inset - text_w, bottom - inset - text_h),
                node.actor,
                fill=self.actor_color,
                font=font,
            )

    def _draw_centered_text(
        self,
        draw: ImageDraw.ImageDraw,
        cx: float,
        cy: float,
        text: str,
        font: ImageFont.ImageFont,
        color: str,
    ) -> None:
        bbox = draw.textbbox((0, 0), text, font=font)
        text_w = bbox[2] - bbox[0]
        text_h = bbox[3] - bbox[1]
        draw.text(
            (cx - text_w / 2 - bbox[0], cy - text_h / 2 - bbox[1]),
            text,
            fill=color,
            font=font,
        )


def render_to_png(
    result: RenderResult, output_path: str = "diagram.png", **kwargs
) -> str:
    """
    Convenience function to render a diagram to PNG.

    Args:
        result: Output of FlowchartGenerator.generate()
        output_path: Path to save the PNG file
        **kwargs: Additional parameters for PNGRenderer

    Returns:
        Path to the saved PNG file
    """
    renderer = PNGRenderer(**kwargs)
    return renderer.render(result, output_path)
