import logging

from health_pdf.stream import ContentStream

logger = logging.getLogger(__name__)

# US Letter, in points
PAGE_WIDTH = 612
PAGE_HEIGHT = 792

TOP_MARGIN = 750
BOTTOM_MARGIN = 50
LEFT_MARGIN = 50
LINE_HEIGHT = 14

# Room for a section header and its first row
SECTION_SPACE = 80
ROW_SPACE = LINE_HEIGHT + 5


class TextLayout:
    """Vertical cursor over a growing list of page content streams."""

    def __init__(self, top=TOP_MARGIN, bottom=BOTTOM_MARGIN, left=LEFT_MARGIN,
                 line_height=LINE_HEIGHT):
        self.top = top
        self.bottom = bottom
        self.left = left
        self.line_height = line_height
        self.pages = [ContentStream()]
        self.y = top

    @property
    def page(self):
        return self.pages[-1]

    def emit_line(self, text, font_size=10, bold=False, x_offset=0, advance=None):
        """Draw text at the cursor and move down.

        Pass ``advance=0`` to keep the cursor on the same row for another field.
        """
        self.page.show_text(text, self.left + x_offset, self.y, font_size, bold)
        self.y -= self.line_height if advance is None else advance

    def emit_row(self, cells, font_size=9, bold=False):
        for x_offset, text in cells:
            self.page.show_text(text, self.left + x_offset, self.y, font_size, bold)
        self.y -= self.line_height

    def skip(self, points):
        self.y -= points

    def ensure_space(self, needed):
        """Start a new page if ``needed`` points would cross the bottom margin."""
        if self.y - needed >= self.bottom:
            return False

        self.page.close()
        self.pages.append(ContentStream())
        self.y = self.top
        logger.debug("Page break, now on page %d", len(self.pages))
        return True

    def finish(self):
        self.page.close()
        return self.pages
