import re
from datetime import date, datetime

import pytest


def read_xref(pdf):
    """Parse the xref section and trailer of a finished PDF.

    Returns ``(offsets, size)`` where ``offsets[n - 1]`` is the recorded offset
    of object ``n``.
    """
    startxref = int(pdf.rsplit(b"startxref\n", 1)[1].split(b"\n", 1)[0])
    assert pdf[startxref:].startswith(b"xref\n")

    lines = pdf[startxref:].split(b"\n")
    first, count = (int(part) for part in lines[1].split())
    assert first == 0

    entries = lines[2:2 + count]
    assert entries[0] == b"0000000000 65535 f "
    offsets = []
    for entry in entries[1:]:
        assert len(entry) + 1 == 20
        offset, generation, kind = entry.split()
        assert generation == b"00000" and kind == b"n"
        offsets.append(int(offset))

    size = int(re.search(rb"/Size (\d+)", pdf[startxref:]).group(1))
    return offsets, size


def content_streams(pdf):
    return re.findall(rb"stream\n(.*?)\nendstream", pdf, re.DOTALL)


def page_count(pdf):
    return int(re.search(rb"/Type /Pages /Kids \[[^\]]*\] /Count (\d+)", pdf).group(1))


@pytest.fixture
def pdf_tools():
    class Tools:
        pass

    tools = Tools()
    tools.read_xref = read_xref
    tools.content_streams = content_streams
    tools.page_count = page_count
    return tools


@pytest.fixture
def profile():
    return {
        "name": "Jane Doe",
        "age": 34,
        "gender": None,
        "blood_group": "O+",
        "allergies": "",
        "emergency_contact": "John Doe 555-0100",
    }


@pytest.fixture
def records():
    return {
        "reports": [
            {"report_name": "CBC (fasting)", "report_type": "Lab",
             "report_date": datetime(2026, 3, 2), "description": "Routine"},
            {"report_name": "Chest X-Ray", "report_type": "Imaging", "report_date": "2026-01-15"},
        ],
        "visits": [
            {"doctor_name": "Dr. Alexandra Montgomery-Smythe", "specialization": "Cardiology",
             "visit_date": date(2026, 2, 10), "diagnosis": None},
        ],
        "medications": [
            {"medicine_name": "Atorvastatin", "dosage": "20mg", "frequency": "Once daily",
             "start_date": "2026-02-10", "is_active": True},
            {"medicine_name": "Amoxicillin", "dosage": "500mg", "frequency": "Three times daily",
             "start_date": "2025-11-01", "end_date": "2025-11-08", "is_active": False},
        ],
        "vaccinations": [
            {"vaccine_name": "Influenza", "date_taken": "2025-10-01", "next_due_date": "2026-10-01"},
            {"vaccine_name": "Tetanus", "date_taken": "2020-05-05"},
        ],
    }
