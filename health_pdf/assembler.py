from dataclasses import dataclass
from typing import List, Optional

from health_pdf.layout import PAGE_HEIGHT, PAGE_WIDTH
from health_pdf.stream import BOLD_FONT, REGULAR_FONT

HEADER = b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n"


def _as_bytes(body):
    if isinstance(body, str):
        return body.encode('ascii')
    return bytes(body)


@dataclass
class PdfObject:
    number: int
    body: Optional[bytes] = None

    def write(self, body):
        self.body = _as_bytes(body)

    def ref(self):
        return f"{self.number} 0 R"


class PdfAssembler:
    """Numbered object table plus the cross-reference bookkeeping.

    Objects are numbered from 1 in the order they are registered. An object
    can be reserved first and written later, which is how the page tree gets
    its number before the pages exist.
    """

    def __init__(self):
        self.objects: List[PdfObject] = []
        self.offsets: List[int] = []

    def reserve(self) -> PdfObject:
        obj = PdfObject(len(self.objects) + 1)
        self.objects.append(obj)
        return obj

    def add(self, body) -> PdfObject:
        obj = self.reserve()
        obj.write(body)
        return obj

    def add_stream(self, data: bytes) -> PdfObject:
        return self.add(
            b"<< /Length %d >>\nstream\n" % len(data) + data + b"\nendstream"
        )

    def serialize(self, root: PdfObject) -> bytes:
        buf = bytearray(HEADER)
        self.offsets = []

        for obj in self.objects:
            if obj.body is None:
                raise ValueError(f"object {obj.number} was reserved but never written")
            self.offsets.append(len(buf))
            buf += b"%d 0 obj\n" % obj.number
            buf += obj.body
            buf += b"\nendobj\n"

        xref_offset = len(buf)
        size = len(self.objects) + 1
        buf += b"xref\n0 %d\n" % size
        buf += b"0000000000 65535 f \n"
        for offset in self.offsets:
            buf += b"%010d 00000 n \n" % offset

        buf += b"trailer\n<< /Size %d /Root %d 0 R >>\n" % (size, root.number)
        buf += b"startxref\n%d\n" % xref_offset
        buf += b"%%EOF\n"
        return bytes(buf)


def _font(base_font):
    return f"<< /Type /Font /Subtype /Type1 /BaseFont /{base_font} /Encoding /WinAnsiEncoding >>"


def assemble(streams) -> bytes:
    """Serialize closed page content streams into a complete PDF file."""
    pdf = PdfAssembler()

    catalog = pdf.reserve()
    page_tree = pdf.reserve()
    catalog.write(f"<< /Type /Catalog /Pages {page_tree.ref()} >>")

    regular = pdf.add(_font("Helvetica"))
    bold = pdf.add(_font("Helvetica-Bold"))
    resources = f"<< /Font << /{REGULAR_FONT} {regular.ref()} /{BOLD_FONT} {bold.ref()} >> >>"

    pages = []
    for stream in streams:
        stream.close()
        content = pdf.add_stream(stream.to_bytes())
        pages.append(pdf.add(
            f"<< /Type /Page /Parent {page_tree.ref()} /MediaBox [0 0 {PAGE_WIDTH} {PAGE_HEIGHT}] "
            f"/Contents {content.ref()} /Resources {resources} >>"
        ))

    kids = " ".join(page.ref() for page in pages)
    page_tree.write(f"<< /Type /Pages /Kids [{kids}] /Count {len(pages)} >>")

    return pdf.serialize(root=catalog)
