from health_pdf.layout import BOTTOM_MARGIN, LINE_HEIGHT, ROW_SPACE, TOP_MARGIN, TextLayout


def test_emit_line_moves_cursor_down():
    layout = TextLayout()
    layout.emit_line("Title", 18, bold=True, advance=25)
    layout.emit_line("Body")
    assert layout.y == TOP_MARGIN - 25 - LINE_HEIGHT
    assert layout.page.lines == ["Title", "Body"]


def test_fields_on_one_row():
    layout = TextLayout()
    layout.emit_line("Age: 34", advance=0)
    layout.emit_line("Gender: F", x_offset=150)
    data = layout.page.to_bytes()

    assert b"1 0 0 1 50 750 Tm\n(Age: 34) Tj" in data
    assert b"1 0 0 1 200 750 Tm\n(Gender: F) Tj" in data
    assert layout.y == TOP_MARGIN - LINE_HEIGHT


def test_emit_row_places_cells_at_offsets():
    layout = TextLayout()
    layout.emit_row([(0, "Vaccine"), (200, "Date Taken")], bold=True)
    data = layout.page.to_bytes()

    assert b"/F2 9 Tf\n1 0 0 1 250 750 Tm\n(Date Taken) Tj" in data
    assert layout.y == TOP_MARGIN - LINE_HEIGHT


def test_ensure_space_keeps_page_when_room_left():
    layout = TextLayout()
    assert layout.ensure_space(80) is False
    assert len(layout.pages) == 1


def test_ensure_space_exactly_at_bottom_margin_fits():
    layout = TextLayout()
    layout.y = BOTTOM_MARGIN + ROW_SPACE
    assert layout.ensure_space(ROW_SPACE) is False
    assert len(layout.pages) == 1


def test_ensure_space_starts_new_page():
    layout = TextLayout()
    layout.emit_line("first page")
    layout.y = 60

    assert layout.ensure_space(ROW_SPACE) is True
    assert len(layout.pages) == 2
    assert layout.pages[0].closed
    assert not layout.page.closed
    assert layout.y == TOP_MARGIN

    layout.emit_line("second page")
    assert layout.pages[1].lines == ["second page"]


def test_finish_closes_last_page():
    layout = TextLayout()
    layout.emit_line("only")
    pages = layout.finish()
    assert len(pages) == 1
    assert pages[0].to_bytes().endswith(b"ET\n")
