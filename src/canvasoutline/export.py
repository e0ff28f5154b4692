"""
File export functionality for outlines.

This module handles writing generated outlines to disk:
- Text/Markdown files - the outline as produced
- PNG images - the outline typeset by structure: headings get a larger font
  and a rule underneath, bullets get a dot and are indented by nesting

The OutlineExporter class wraps file I/O failures in ExportError so callers
can report them separately from load errors.
"""

import logging
import re
from pathlib import Path
from typing import Dict, List, NamedTuple, Optional, Tuple, Union

from PIL import Image, ImageDraw, ImageFont

logger = logging.getLogger(__name__)

HEADING_RE = re.compile(r"^(#+) (.*)$")
BULLET_RE = re.compile(r"^( *)- (.*)$")


class ExportError(Exception):
    """Raised when an outline cannot be written."""

    pass


class OutlineLine(NamedTuple):
    """
    One outline line, classified for drawing.

    Attributes:
        kind: "heading", "bullet", "text" or "blank"
        level: Heading level for headings, nesting depth for bullets, else 0
        text: The line content without heading marks or bullet prefix
    """

    kind: str
    level: int
    text: str


def classify_line(line: str, indent_width: int = 2) -> OutlineLine:
    """Classify an outline line as heading, bullet, text or blank."""
    if not line.strip():
        return OutlineLine("blank", 0, "")
    match = HEADING_RE.match(line)
    if match:
        return OutlineLine("heading", len(match.group(1)), match.group(2))
    match = BULLET_RE.match(line)
    if match:
        return OutlineLine("bullet", len(match.group(1)) // indent_width, match.group(2))
    return OutlineLine("text", 0, line)


class OutlineExporter:
    """
    Exports outlines to text or PNG files.

    Attributes:
        default_font: Default TrueType font name or path for PNG export.
    """

    def __init__(self, default_font: Optional[str] = None):
        """
        Initialize the outline exporter.

        Args:
            default_font: Default font for PNG export (e.g., "DejaVuSans.ttf").
                Pillow's built-in font is used when it cannot be loaded.
        """
        self.default_font = default_font
        self._fonts: Dict[Tuple[Optional[str], int], ImageFont.ImageFont] = {}

    def save_txt(self, outline: str, filename: Union[str, Path]) -> None:
        """
        Save an outline to a text file (UTF-8).

        Raises:
            ExportError: If the file cannot be written
        """
        output_path = Path(filename)
        try:
            output_path.write_text(outline, encoding="utf-8")
        except OSError as exc:
            raise ExportError(f"Cannot write outline to '{output_path}': {exc}") from exc
        logger.debug("Wrote outline to %s", output_path)

    def save_png(
        self,
        outline: str,
        filename: Union[str, Path],
        font_size: int = 16,
        bg_color: str = "#FFFFFF",
        fg_color: str = "#000000",
        heading_color: str = "#1F3A5F",
        padding: int = 20,
        indent: int = 24,
        font: Optional[str] = None,
        scale: int = 2,
    ) -> None:
        """
        Save an outline as a PNG image.

        Args:
            outline: The outline text to render.
            filename: Output filename (should end in .png).
            font_size: Font size of bullets in points; headings are larger.
            bg_color: Background color as hex string.
            fg_color: Bullet text color as hex string.
            heading_color: Heading text and rule color as hex string.
            padding: Padding around the outline in pixels.
            indent: Indentation per bullet nesting level in pixels.
            font: Font to use (overrides default_font if provided).
            scale: Resolution multiplier.

        Raises:
            ExportError: If the image cannot be written
        """
        font_name = font or self.default_font
        lines = [classify_line(line) for line in outline.rstrip("\n").split("\n")]

        body_size = font_size * scale
        placed, width, height = self._layout(
            lines, font_name, body_size, indent * scale, padding * scale
        )
        img_width = max(width + padding * scale, 100 * scale)
        img_height = max(height + padding * scale, 100 * scale)

        img = Image.new("RGB", (img_width, img_height), bg_color)
        draw = ImageDraw.Draw(img)
        rule_width = max(scale, 1)
        dot_radius = max(body_size // 6, 1)

        for line, x, y, line_font in placed:
            if line.kind == "heading":
                draw.text((x, y), line.text, font=line_font, fill=heading_color)
                bottom = y + self._text_height(line_font) + 2 * rule_width
                draw.line(
                    [(x, bottom), (img_width - padding * scale, bottom)],
                    fill=heading_color,
                    width=rule_width,
                )
            elif line.kind == "bullet":
                center_y = y + self._text_height(line_font) // 2
                draw.ellipse(
                    [
                        (x, center_y - dot_radius),
                        (x + 2 * dot_radius, center_y + dot_radius),
                    ],
                    fill=fg_color,
                )
                draw.text(
                    (x + 4 * dot_radius, y), line.text, font=line_font, fill=fg_color
                )
            else:
                draw.text((x, y), line.text, font=line_font, fill=fg_color)

        output_path = Path(filename)
        try:
            img.save(output_path, "PNG")
        except OSError as exc:
            raise ExportError(f"Cannot write image to '{output_path}': {exc}") from exc
        logger.debug("Wrote %dx%d outline image to %s", img_width, img_height, output_path)

    def _layout(
        self,
        lines: List[OutlineLine],
        font_name: Optional[str],
        body_size: int,
        indent: int,
        padding: int,
    ):
        """
        Place each drawable line.

        Returns:
            ((line, x, y, font) entries, right edge, bottom edge)
        """
        body_font = self._load_font(font_name, body_size)
        body_height = self._text_height(body_font)
        dot_space = 4 * max(body_size // 6, 1)

        placed = []
        right = padding
        y = padding
        for line in lines:
            if line.kind == "blank":
                y += body_height // 2
                continue
            if line.kind == "heading":
                line_font = self._load_font(font_name, self._heading_size(line.level, body_size))
                x = padding
                text_width = int(line_font.getlength(line.text))
                placed.append((line, x, y, line_font))
                y += int(self._text_height(line_font) * 1.6)
            else:
                line_font = body_font
                x = padding + (indent * line.level if line.kind == "bullet" else 0)
                text_width = int(line_font.getlength(line.text))
                if line.kind == "bullet":
                    text_width += dot_space
                placed.append((line, x, y, line_font))
                y += int(body_height * 1.5)
            right = max(right, x + text_width)
        return placed, right, y

    @staticmethod
    def _heading_size(level: int, body_size: int) -> int:
        """Level 1 is twice the body size, shrinking to the body size at level 6."""
        return int(body_size * (1 + max(6 - level, 0) / 5))

    @staticmethod
    def _text_height(loaded_font) -> int:
        bbox = loaded_font.getbbox("Ag")
        return max(bbox[3] - bbox[1], 1)

    def _load_font(self, font_name: Optional[str], size: int):
        """
        Load a font at the given size, falling back to Pillow's default font.

        Args:
            font_name: Optional TrueType font name or path.
            size: Font size in pixels.
        """
        key = (font_name, size)
        if key in self._fonts:
            return self._fonts[key]

        loaded = None
        if font_name:
            try:
                loaded = ImageFont.truetype(font_name, size)
            except OSError:
                logger.debug("Font %s not found, using Pillow default", font_name)
        if loaded is None:
            loaded = ImageFont.load_default(size=size)
        self._fonts[key] = loaded
        return loaded
