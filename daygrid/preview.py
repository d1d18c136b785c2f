"""Pillow preview of a day layout, used to eyeball column and pairing results."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence

from PIL import Image, ImageDraw, ImageFont

from .config import DEFAULT_CONFIG, LayoutConfig
from .engine import DayLayout, LayoutEntry


def _font_length(font: ImageFont.ImageFont, text: str) -> float:
    try:
        return font.getlength(text)  # type: ignore[attr-defined]
    except AttributeError:  # pragma: no cover - fallback for older Pillow
        dummy_img = Image.new("L", (1, 1), color=255)
        draw = ImageDraw.Draw(dummy_img)
        return float(draw.textlength(text, font=font))


def _load_font(path_candidates: Sequence[Path], size: int) -> ImageFont.ImageFont:
    for candidate in path_candidates:
        if candidate and candidate.exists():
            return ImageFont.truetype(str(candidate), size=size)
    return ImageFont.load_default()


def _default_font_candidates(bold: bool) -> List[Path]:
    names = [
        "DejaVuSans-Bold.ttf" if bold else "DejaVuSans.ttf",
        "Arial Bold.ttf" if bold else "Arial.ttf",
    ]
    search_dirs = [
        Path("/usr/share/fonts/truetype/dejavu"),
        Path("/usr/share/fonts"),
        Path("/Library/Fonts"),
        Path.home() / ".fonts",
    ]
    return [directory / name for name in names for directory in search_dirs]


@dataclass
class PreviewConfig:
    """Canvas metrics and colours for the preview image."""

    layout: LayoutConfig = DEFAULT_CONFIG
    canvas_width: int = 480
    header_height: int = 48
    hour_label_width: int = 56
    right_padding: int = 12
    background_color: int = 255
    grid_color: int = 200
    text_color: int = 17
    record_fill: int = 225
    overlap_fill: int = 190
    corner_radius: int = 6
    label_font_size: int = 12
    title_font_size: int = 13
    header_font_size: int = 20
    font_regular_path: Path | None = None
    font_bold_path: Path | None = None

    @property
    def card_left(self) -> int:
        return self.hour_label_width

    @property
    def card_width(self) -> int:
        return self.canvas_width - self.hour_label_width - self.right_padding

    @property
    def canvas_height(self) -> int:
        return int(self.header_height + self.layout.day_height)

    def font(self, size: int, *, bold: bool = False) -> ImageFont.ImageFont:
        provided = self.font_bold_path if bold else self.font_regular_path
        candidates: List[Path] = [Path(provided)] if provided is not None else []
        candidates.extend(_default_font_candidates(bold))
        return _load_font(candidates, size)


class LayoutPreviewRenderer:
    """Draw the rectangles of a :class:`DayLayout` onto a grayscale canvas."""

    def __init__(self, config: PreviewConfig | None = None) -> None:
        self.config = config or PreviewConfig()

    def render(self, layout: DayLayout, *, output_path: Path | None = None) -> Image.Image:
        cfg = self.config
        image = Image.new("L", (cfg.canvas_width, cfg.canvas_height), color=cfg.background_color)
        draw = ImageDraw.Draw(image)

        header_font = cfg.font(cfg.header_font_size, bold=True)
        draw.text(
            (cfg.card_left, 12),
            layout.day.strftime("%A, %B %d"),
            font=header_font,
            fill=cfg.text_color,
        )
        self._draw_hour_grid(draw)
        for entry in layout.entries:
            self._draw_entry(draw, entry)

        if output_path is not None:
            output_path = Path(output_path)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            image.save(output_path)
        return image

    def entry_box(self, entry: LayoutEntry) -> tuple[float, float, float, float]:
        """Canvas bounding box ``(x0, y0, x1, y1)`` of ``entry``."""

        cfg = self.config
        geometry = entry.geometry
        left = geometry.left if geometry.left is not None else 0.0
        width = geometry.width if geometry.width is not None else 100.0
        x0 = cfg.card_left + cfg.card_width * left / 100.0
        x1 = x0 + cfg.card_width * width / 100.0
        y0 = cfg.header_height + geometry.top
        y1 = y0 + geometry.height
        return (x0, y0, x1, y1)

    # ------------------------------------------------------------------
    def _draw_hour_grid(self, draw: ImageDraw.ImageDraw) -> None:
        cfg = self.config
        font = cfg.font(cfg.label_font_size)
        start_hour, end_hour = cfg.layout.day_start_hour, cfg.layout.day_end_hour
        for hour in range(start_hour, end_hour + 1):
            y = cfg.header_height + (hour - start_hour) * cfg.layout.hour_height
            draw.line(
                (cfg.card_left, y, cfg.card_left + cfg.card_width, y),
                fill=cfg.grid_color,
                width=1,
            )
            display_hour = hour % 12 or 12
            suffix = "AM" if hour < 12 or hour == 24 else "PM"
            label = f"{display_hour} {suffix}"
            x = cfg.card_left - 6 - _font_length(font, label)
            draw.text((x, y - cfg.label_font_size // 2), label, font=font, fill=cfg.text_color)

    def _draw_entry(self, draw: ImageDraw.ImageDraw, entry: LayoutEntry) -> None:
        cfg = self.config
        x0, y0, x1, y1 = self.entry_box(entry)
        top_limit = cfg.header_height
        bottom_limit = cfg.canvas_height - 1
        if y1 <= top_limit or y0 >= bottom_limit:
            return
        y0 = max(y0, top_limit)
        y1 = min(y1, bottom_limit)

        fill = None
        if entry.kind == "record":
            fill = cfg.record_fill
        elif entry.kind == "pair" and getattr(entry.item, "has_overlap", False):
            fill = cfg.overlap_fill
        draw.rounded_rectangle(
            (x0 + 1, y0 + 1, x1 - 1, y1 - 1),
            radius=cfg.corner_radius,
            outline=cfg.text_color,
            width=1,
            fill=fill,
        )

        font = cfg.font(cfg.title_font_size, bold=True)
        max_lines = max(1, int((y1 - y0 - 4) // (cfg.title_font_size + 2)))
        lines = _wrap_text(entry.title, font, max_width=int(x1 - x0 - 8), max_lines=max_lines)
        text_y = y0 + 3
        for line in lines:
            draw.text((x0 + 4, text_y), line, font=font, fill=cfg.text_color)
            text_y += cfg.title_font_size + 2


def _wrap_text(
    text: str,
    font: ImageFont.ImageFont,
    *,
    max_width: int,
    max_lines: int,
) -> List[str]:
    words = text.split()
    if not words or max_width <= 0:
        return []
    lines: List[str] = []
    current = words[0]
    for word in words[1:]:
        candidate = f"{current} {word}"
        if _font_length(font, candidate) <= max_width:
            current = candidate
        else:
            lines.append(current)
            current = word
    lines.append(current)

    ellipsis = "…"
    if len(lines) > max_lines:
        lines = lines[:max_lines]
        lines[-1] = lines[-1] + ellipsis
    fitted: List[str] = []
    for line in lines:
        while len(line) > 1 and _font_length(font, line) > max_width:
            line = line[:-2].rstrip() + ellipsis
        fitted.append(line)
    return fitted


__all__ = ["LayoutPreviewRenderer", "PreviewConfig"]
