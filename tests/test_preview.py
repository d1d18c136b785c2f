from __future__ import annotations

from pathlib import Path

from PIL import Image

from daygrid.config import LayoutConfig
from daygrid.engine import layout_day
from daygrid.preview import LayoutPreviewRenderer, PreviewConfig

from factories import DAY, at, make_task


def test_render_returns_canvas_sized_for_visible_hours() -> None:
    layout_config = LayoutConfig(hour_height=40, day_start_hour=8, day_end_hour=18)
    renderer = LayoutPreviewRenderer(PreviewConfig(layout=layout_config))

    image = renderer.render(layout_day([], DAY, layout_config))

    assert isinstance(image, Image.Image)
    assert image.mode == "L"
    assert image.size == (480, 48 + 10 * 40)


def test_record_entries_are_filled() -> None:
    layout_config = LayoutConfig(plan_record_mode="record")
    renderer = LayoutPreviewRenderer(PreviewConfig(layout=layout_config))
    layout = layout_day([make_task("r1", at(9), at(11), title="", kind="record")], DAY, layout_config)

    image = renderer.render(layout)

    x0, y0, x1, y1 = renderer.entry_box(layout.entries[0])
    center = (int((x0 + x1) / 2), int((y0 + y1) / 2))
    assert image.getpixel(center) == renderer.config.record_fill


def test_entry_box_starts_at_the_window_top() -> None:
    layout_config = LayoutConfig(plan_record_mode="plan", day_start_hour=8, day_end_hour=12)
    renderer = LayoutPreviewRenderer(PreviewConfig(layout=layout_config))
    layout = layout_day([make_task("early", at(8), at(9), kind="plan")], DAY, layout_config)

    _, y0, _, y1 = renderer.entry_box(layout.entries[0])

    assert (y0, y1) == (48, 48 + 60)


def test_entries_outside_window_are_skipped() -> None:
    layout_config = LayoutConfig(plan_record_mode="plan", day_start_hour=8, day_end_hour=12)
    renderer = LayoutPreviewRenderer(PreviewConfig(layout=layout_config))
    layout = layout_day([make_task("late", at(20), at(21), kind="plan")], DAY, layout_config)
    empty = renderer.render(layout_day([], DAY, layout_config))

    image = renderer.render(layout)

    assert list(image.getdata()) == list(empty.getdata())


def test_render_writes_preview_file(tmp_path: Path) -> None:
    renderer = LayoutPreviewRenderer()
    output = tmp_path / "nested" / "preview.png"

    renderer.render(layout_day([make_task("t", at(9), at(10))], DAY), output_path=output)

    assert output.exists()
    with Image.open(output) as saved:
        assert saved.size == (480, renderer.config.canvas_height)
