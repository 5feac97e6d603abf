REGULAR_FONT = "F1"
BOLD_FONT = "F2"


def escape_text(text):
    """Escape the characters that would end a PDF literal string early"""
    return text.replace('\\', '\\\\').replace('(', '\\(').replace(')', '\\)')


def truncate(value, width):
    """Clip a column value to its display width (None means unlimited)"""
    if value is None:
        return ""
    value = str(value)
    if width is None:
        return value
    return value[:width]


def _num(value):
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}".rstrip('0').rstrip('.')


class ContentStream:
    """Text operators for a single page.

    Every line is positioned absolutely with ``Tm`` so the order in which
    cells are drawn on a row does not matter.
    """

    def __init__(self):
        self._operators = [b"BT"]
        self.lines = []
        self.closed = False

    def show_text(self, text, x, y, font_size=10, bold=False):
        if self.closed:
            raise ValueError("content stream already closed")

        text = str(text).replace('\r\n', ' ').replace('\n', ' ').replace('\r', ' ')
        font = BOLD_FONT if bold else REGULAR_FONT
        self.lines.append(text)

        self._operators.append(f"/{font} {_num(font_size)} Tf".encode('ascii'))
        self._operators.append(f"1 0 0 1 {_num(x)} {_num(y)} Tm".encode('ascii'))
        self._operators.append(
            b"(" + escape_text(text).encode('cp1252', errors='replace') + b") Tj"
        )

    def close(self):
        if not self.closed:
            self._operators.append(b"ET")
            self.closed = True

    def to_bytes(self):
        return b"\n".join(self._operators) + b"\n"
