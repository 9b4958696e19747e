from __future__ import annotations

import math

import pytest

import slide_layout as sl
from models import PresentationMetadata, SlideContent
from theme import ThemePalette

PALETTE = ThemePalette()
METADATA = PresentationMetadata(title="TaskFlow", subtitle="Project management that works",
                                author="TaskFlow Team", date="2025-01-15")


def make_slide(layout, content, number=2, title="Slide title") -> SlideContent:
    return SlideContent(slideNumber=number, title=title, content=content, layout=layout)


def text_boxes(primitives, texts):
    return [p for p in primitives if isinstance(p, sl.TextBox) and p.text in texts]


@pytest.mark.parametrize("layout", ["title", "bullets", "two-column", "image-text", "chart", "weird", None])
def test_every_layout_has_title_text_and_accent_shape(layout) -> None:
    slide = make_slide(layout, ["One", "Two", "Three"], title="Headline")
    primitives = sl.layout_slide(slide, 1, PALETTE, METADATA)

    assert len(text_boxes(primitives, {"Headline"})) == 1
    assert any(isinstance(p, sl.Rect) and p.fill == PALETTE.accent for p in primitives)


@pytest.mark.parametrize("layout", ["weird", "", None, "Bullet", "timeline"])
def test_unknown_or_missing_layout_falls_back_to_bullets(layout) -> None:
    content = ["Alpha", "Beta"]
    fallback = sl.layout_slide(make_slide(layout, content), 1, PALETTE)
    bullets = sl.layout_slide(make_slide("bullets", content), 1, PALETTE)

    assert sl.resolve_layout(layout) == "bullets"
    assert fallback == bullets


def test_resolve_layout_ignores_case_and_whitespace() -> None:
    assert sl.resolve_layout(" Two-Column ") == "two-column"
    assert sl.resolve_layout("CHART") == "chart"


def test_bullet_rows_use_fixed_pitch() -> None:
    content = [f"Point {i}" for i in range(12)]
    primitives = sl.layout_slide(make_slide("bullets", content), 3, PALETTE)

    rows = text_boxes(primitives, set(content))
    markers = [p for p in primitives if isinstance(p, sl.Ellipse)]
    assert [r.text for r in rows] == content
    assert len(markers) == len(content)
    for upper, lower in zip(rows, rows[1:]):
        assert lower.y - upper.y == pytest.approx(sl.BULLET_ROW_PITCH)
    assert rows[0].y == pytest.approx(sl.BULLET_TOP)


@pytest.mark.parametrize("n", range(0, 8))
def test_two_column_split(n) -> None:
    content = [f"Item {i}" for i in range(n)]
    primitives = sl.layout_slide(make_slide("two-column", content), 2, PALETTE)

    rows = text_boxes(primitives, set(content))
    left = [r.text for r in rows if r.x < sl.CANVAS_WIDTH / 2]
    right = [r.text for r in rows if r.x > sl.CANVAS_WIDTH / 2]
    assert left == content[: math.ceil(n / 2)]
    assert right == content[math.ceil(n / 2):]
    assert len(right) == n // 2

    dividers = [p for p in primitives if isinstance(p, sl.Rect) and p.fill == PALETTE.divider]
    assert len(dividers) == 1
    assert dividers[0].x == pytest.approx(sl.DIVIDER_X)


def test_split_columns_helper() -> None:
    assert sl.split_columns([]) == ([], [])
    assert sl.split_columns(["a"]) == (["a"], [])
    assert sl.split_columns(["a", "b", "c"]) == (["a", "b"], ["c"])


def test_image_text_places_caption_and_accent_bar_per_entry() -> None:
    content = ["Boards", "Timeline", "Reports"]
    primitives = sl.layout_slide(make_slide("image-text", content), 3, PALETTE)

    assert text_boxes(primitives, {sl.IMAGE_CAPTION})
    rows = text_boxes(primitives, set(content))
    assert all(r.x > sl.IMAGE_BOX[0] + sl.IMAGE_BOX[2] for r in rows)
    assert rows[1].y - rows[0].y == pytest.approx(sl.IMAGE_TEXT_ROW_PITCH)
    assert sl.IMAGE_TEXT_ROW_PITCH > sl.BULLET_ROW_PITCH
    bars = [p for p in primitives if isinstance(p, sl.Rect) and p.x == sl.IMAGE_TEXT_X]
    assert len(bars) == len(content)


@pytest.mark.parametrize("n", [1, 2, 3, 4, 6])
def test_chart_metrics_share_strip_width(n) -> None:
    content = [f"Metric {i}" for i in range(n)]
    primitives = sl.layout_slide(make_slide("chart", content), 4, PALETTE)

    assert text_boxes(primitives, {sl.CHART_CAPTION})
    metrics = text_boxes(primitives, set(content))
    expected = min(n, sl.MAX_CHART_METRICS)
    assert len(metrics) == expected
    for i, metric in enumerate(metrics):
        assert metric.w == pytest.approx(sl.CONTENT_WIDTH / expected)
        assert metric.x == pytest.approx(sl.MARGIN_LEFT + i * sl.CONTENT_WIDTH / expected)


def test_title_layout_uses_metadata_and_works_at_any_index() -> None:
    slide = make_slide("title", ["ignored"], number=5, title="TaskFlow")
    primitives = sl.layout_slide(slide, 4, PALETTE, METADATA)

    texts = [p.text for p in primitives if isinstance(p, sl.TextBox)]
    assert "Project management that works" in texts
    assert "TaskFlow Team | 2025-01-15" in texts


def test_title_layout_without_metadata_uses_first_content_entry() -> None:
    primitives = sl.layout_slide(make_slide("title", ["Tagline here"], number=1), 0, PALETTE)
    assert text_boxes(primitives, {"Tagline here"})


def test_non_title_slides_carry_chrome_and_slide_number() -> None:
    primitives = sl.layout_slide(make_slide("bullets", []), 6, PALETTE)

    assert primitives[0] == sl.Rect(0, 0, sl.CANVAS_WIDTH, sl.TOP_STRIP_HEIGHT, PALETTE.primary)
    footer = text_boxes(primitives, {"7"})
    assert footer and footer[0].align == "right"


@pytest.mark.parametrize("layout", ["bullets", "two-column", "image-text", "chart"])
def test_empty_and_overlong_content_do_not_raise(layout) -> None:
    assert sl.layout_slide(make_slide(layout, []), 1, PALETTE)
    long_primitives = sl.layout_slide(make_slide(layout, [f"Row {i}" for i in range(40)]), 1, PALETTE)
    assert long_primitives


def test_colors_are_six_char_hex_without_hash() -> None:
    for layout in sl.LAYOUT_FUNCTIONS:
        for p in sl.layout_slide(make_slide(layout, ["a", "b"]), 1, PALETTE, METADATA):
            color = p.color if isinstance(p, sl.TextBox) else p.fill
            assert len(color) == 6 and not color.startswith("#")
