import pytest
from logdeck.core import ViewLine
from logdeck.viewport import ViewportRenderer, ViewportState


def make_lines(n, source="app.log", color="#4caf50"):
    return [ViewLine(f"Line {i + 1}", i, source, color) for i in range(n)]


class CountingList(list):
    """Records every index read so tests can prove rows outside the window are never touched."""

    def __init__(self, *args):
        super().__init__(*args)
        self.touched = set()

    def __getitem__(self, index):
        if isinstance(index, int):
            self.touched.add(index)
        return super().__getitem__(index)

    def __iter__(self):
        raise AssertionError("renderer must not iterate the whole list")


def test_starts_idle():
    r = ViewportRenderer()
    frame = r.render()
    assert r.state == ViewportState.IDLE
    assert frame.rows == [] and frame.content_height == 0


def test_scroll_of_10000_lines_materializes_a_window():
    r = ViewportRenderer(row_height=20, viewport_height=600)
    lines = CountingList(make_lines(10000))
    r.load(lines)
    lines.touched.clear()

    frame = r.scroll(123460)
    assert r.state == ViewportState.SCROLLED
    assert len(frame.rows) == 31
    assert r.materialized == len(frame.rows)
    assert lines.touched == {row.index for row in frame.rows}
    assert frame.content_height == 10000 * 20

    # an offset between rows adds at most one partially visible row
    lines.touched.clear()
    frame = r.scroll(123456)
    assert len(frame.rows) <= 32
    assert lines.touched == {row.index for row in frame.rows}


def test_window_formula():
    r = ViewportRenderer(row_height=20, viewport_height=600)
    r.load(make_lines(100))
    assert r.visible_range() == (0, 30)

    r.scroll(210)
    # floor(210/20)=10, ceil(810/20)=41
    assert r.visible_range() == (10, 41)
    frame = r.render()
    assert [row.index for row in frame.rows] == list(range(10, 42))


def test_end_is_clamped_to_last_line():
    r = ViewportRenderer(row_height=20, viewport_height=600)
    frame = r.load(make_lines(5))
    assert [row.index for row in frame.rows] == [0, 1, 2, 3, 4]


def test_rows_are_absolutely_positioned_with_line_numbers():
    r = ViewportRenderer(row_height=20, viewport_height=100)
    lines = [ViewLine("ERROR disk full", 41, "app.log", "#4caf50")]
    row = r.load(lines).rows[0]
    assert row.top == 0
    assert row.height == 20
    assert row.line_number == 42
    assert row.text == "ERROR disk full"
    assert row.color == "#dddddd"

    r2 = ViewportRenderer(row_height=20, viewport_height=100)
    r2.load(make_lines(50))
    frame = r2.scroll(500)
    assert all(row.top == row.index * 20 for row in frame.rows)


def test_synthetic_rows_are_prefixed_and_colorized():
    r = ViewportRenderer()
    lines = [ViewLine("error y", 1, "a.log", "#4caf50"), ViewLine("error w", 1, "b.log", "#2196f3")]
    frame = r.load(lines, synthetic=True)
    assert [(row.text, row.color, row.line_number) for row in frame.rows] == [
        ("[a.log] error y", "#4caf50", 2),
        ("[b.log] error w", "#2196f3", 2),
    ]


def test_empty_synthetic_result_shows_placeholder():
    r = ViewportRenderer()
    frame = r.load([], synthetic=True, placeholder="No result found.")
    assert frame.rows == []
    assert frame.placeholder == "No result found."

    frame = r.load(make_lines(1), synthetic=True, placeholder="No result found.")
    assert frame.placeholder is None


def test_load_resets_scroll():
    r = ViewportRenderer(row_height=20, viewport_height=100)
    r.load(make_lines(1000))
    r.scroll(4000)
    assert r.state == ViewportState.SCROLLED

    frame = r.load(make_lines(500))
    assert r.state == ViewportState.FILTERED
    assert frame.scroll_offset == 0
    assert frame.rows[0].index == 0


def test_scroll_is_clamped():
    r = ViewportRenderer(row_height=20, viewport_height=100)
    r.load(make_lines(10))   # content 200px, max offset 100
    assert r.scroll(10_000).scroll_offset == 100
    frame = r.scroll(-50)
    assert frame.scroll_offset == 0
    assert r.state == ViewportState.FILTERED


def test_scroll_while_idle_does_nothing():
    r = ViewportRenderer()
    frame = r.scroll(300)
    assert r.state == ViewportState.IDLE
    assert frame.rows == []
    assert r.scroll_offset == 0


def test_resize_changes_window_only():
    r = ViewportRenderer(row_height=10, viewport_height=50)
    lines = make_lines(100)
    r.load(lines)
    r.scroll(200)
    frame = r.resize(100)
    assert r.visible_lines is lines
    assert r.state == ViewportState.SCROLLED
    assert [row.index for row in frame.rows] == list(range(20, 31))


def test_resize_that_clamps_to_top_reports_filtered():
    r = ViewportRenderer(row_height=20, viewport_height=100)
    r.load(make_lines(10))
    r.scroll(100)
    assert r.state == ViewportState.SCROLLED

    # the taller viewport fits every row, so the offset clamps back to 0
    frame = r.resize(1000)
    assert frame.scroll_offset == 0
    assert frame.state == ViewportState.FILTERED
    assert r.state == ViewportState.FILTERED
    assert len(frame.rows) == 10


def test_clear_returns_to_idle():
    r = ViewportRenderer()
    r.load(make_lines(3))
    frame = r.clear()
    assert r.state == ViewportState.IDLE
    assert frame.total == 0 and r.materialized == 0


@pytest.mark.parametrize("kwargs", [{"row_height": 0}, {"viewport_height": -1}])
def test_invalid_geometry(kwargs):
    with pytest.raises(ValueError):
        ViewportRenderer(**kwargs)
