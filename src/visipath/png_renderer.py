"""
PNG Renderer module for scenes.

Renders walls, visibility edges, the found path and the nodes as a PNG
image: walls filled black, edges red, nodes as dots (start green, goal red,
corners blue), path drawn as a thick line on top of the edges.
"""

import os
from typing import Optional, Tuple

from PIL import Image, ImageDraw, ImageFont

from .scene import Scene

Color = Tuple[int, int, int]


class ScenePNGRenderer:
    """Renders a Scene as a PNG image."""

    def __init__(
        self,
        width: Optional[int] = None,
        height: Optional[int] = None,
        margin: int = 20,
        node_radius: int = 5,
        scale: int = 1,
        show_edges: bool = True,
        show_labels: bool = False,
        font_size: int = 10,
    ):
        """
        Initialize the renderer.

        Args:
            width: Canvas width in scene units; derived from the scene if None
            height: Canvas height in scene units; derived from the scene if None
            margin: Extra space around the scene's bounding box
            node_radius: Radius of node dots
            scale: Resolution multiplier
            show_edges: Draw visibility edges
            show_labels: Write node ids next to nodes
            font_size: Font size for labels
        """
        if scale < 1:
            raise ValueError("scale must be at least 1")
        if (width is not None and width <= 0) or (height is not None and height <= 0):
            raise ValueError("width and height must be positive")

        self.width = width
        self.height = height
        self.margin = margin
        self.node_radius = node_radius
        self.scale = scale
        self.show_edges = show_edges
        self.show_labels = show_labels
        self.font_size = font_size

        # Colors
        self.bg_color: Color = (255, 255, 255)
        self.wall_color: Color = (0, 0, 0)
        self.edge_color: Color = (255, 0, 0)
        self.path_color: Color = (255, 165, 0)
        self.node_color: Color = (0, 0, 255)
        self.start_color: Color = (0, 128, 0)
        self.goal_color: Color = (255, 0, 0)
        self.text_color: Color = (0, 0, 0)

        self.font = None

    def _get_font(self) -> ImageFont.ImageFont:
        """Get a font for node labels."""
        if self.font is not None:
            return self.font

        font_size = self.font_size * self.scale
        font_options = [
            "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
            "/usr/share/fonts/truetype/liberation/LiberationMono-Regular.ttf",
            "/usr/share/fonts/truetype/freefont/FreeMono.ttf",
        ]

        for path in font_options:
            if os.path.exists(path):
                try:
                    self.font = ImageFont.truetype(path, font_size)
                    return self.font
                except OSError:
                    continue

        # Fallback to default font
        self.font = ImageFont.load_default()
        return self.font

    def _bounds(self, scene: Scene) -> Tuple[float, float, float, float]:
        min_x = min_y = max_x = max_y = 0.0
        for obstacle in scene.obstacles:
            min_x = min(min_x, obstacle.x)
            min_y = min(min_y, obstacle.y)
            max_x = max(max_x, obstacle.right)
            max_y = max(max_y, obstacle.bottom)
        for node in scene.nodes:
            min_x = min(min_x, node.x)
            min_y = min(min_y, node.y)
            max_x = max(max_x, node.x)
            max_y = max(max_y, node.y)
        return min_x, min_y, max_x, max_y

    def origin(self, scene: Scene) -> Tuple[float, float]:
        """
        Offset added to scene coordinates before drawing.

        Zero for scenes in the first quadrant; otherwise the scene is shifted
        so its smallest coordinate sits one margin from the canvas edge.
        """
        min_x, min_y, _, _ = self._bounds(scene)
        offset_x = self.margin - min_x if min_x < 0 else 0.0
        offset_y = self.margin - min_y if min_y < 0 else 0.0
        return offset_x, offset_y

    def canvas_size(self, scene: Scene) -> Tuple[int, int]:
        """Canvas size in scene units, before scaling."""
        _, _, max_x, max_y = self._bounds(scene)
        offset_x, offset_y = self.origin(scene)

        width = (
            self.width if self.width is not None else int(max_x + offset_x) + self.margin
        )
        height = (
            self.height if self.height is not None else int(max_y + offset_y) + self.margin
        )
        return max(width, 1), max(height, 1)

    def render_image(self, scene: Scene) -> Image.Image:
        """
        Draw the scene into a new image.

        Args:
            scene: Scene to draw; its last build and path are used as-is

        Returns:
            PIL Image in RGB mode
        """
        width, height = self.canvas_size(scene)
        s = self.scale
        offset_x, offset_y = self.origin(scene)

        def to_px(x: float, y: float) -> Tuple[float, float]:
            return (x + offset_x) * s, (y + offset_y) * s

        img = Image.new("RGB", (width * s, height * s), self.bg_color)
        draw = ImageDraw.Draw(img)

        # Walls
        for obstacle in scene.obstacles:
            draw.rectangle(
                [*to_px(obstacle.x, obstacle.y), *to_px(obstacle.right, obstacle.bottom)],
                fill=self.wall_color,
            )

        # Visibility edges
        if self.show_edges:
            for edge in scene.edges:
                draw.line(
                    [to_px(edge.source.x, edge.source.y),
                     to_px(edge.target.x, edge.target.y)],
                    fill=self.edge_color,
                    width=s,
                )

        # Path
        if scene.path:
            points = [to_px(node.x, node.y) for node in scene.path]
            if len(points) > 1:
                draw.line(points, fill=self.path_color, width=3 * s)

        # Nodes
        r = self.node_radius * s
        for node in scene.nodes:
            if node is scene.start:
                color = self.start_color
            elif node is scene.goal:
                color = self.goal_color
            else:
                color = self.node_color
            cx, cy = to_px(node.x, node.y)
            draw.ellipse([cx - r, cy - r, cx + r, cy + r], fill=color)
            if self.show_labels:
                draw.text(
                    (cx + r, cy + r), str(node.id), fill=self.text_color,
                    font=self._get_font(),
                )

        return img

    def render(self, scene: Scene, output_path: str = "scene.png") -> str:
        """
        Render the scene to a PNG file.

        Args:
            scene: Scene to draw
            output_path: Path to save the PNG file

        Returns:
            Path to the saved PNG file
        """
        img = self.render_image(scene)
        img.save(output_path, "PNG")
        return output_path


def render_to_png(scene: Scene, output_path: str = "scene.png", **kwargs) -> str:
    """
    Convenience function to render a scene to PNG.

    Args:
        scene: Scene to draw
        output_path: Path to save the PNG file
        **kwargs: Passed to ScenePNGRenderer

    Returns:
        Path to the saved PNG file
    """
    renderer = ScenePNGRenderer(**kwargs)
    return renderer.render(scene, output_path)
