"""Shared fixtures producing small real documents in memory."""

from __future__ import annotations

import io

import docx
import fitz  # PyMuPDF
import openpyxl
import pytest
from pptx import Presentation
from pptx.util import Inches


@pytest.fixture
def pdf_bytes() -> bytes:
    """Two-page PDF, "Alpha" on page 1 and "Beta" on page 2."""
    doc = fitz.open()
    for word in ("Alpha", "Beta"):
        page = doc.new_page()
        page.insert_text((72, 72), word)
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def docx_bytes() -> bytes:
    document = docx.Document()
    document.add_paragraph("First paragraph")
    document.add_paragraph("Second paragraph")
    table = document.add_table(rows=1, cols=2)
    table.cell(0, 0).text = "Cell A"
    table.cell(0, 1).text = "Cell B"
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def xlsx_bytes() -> bytes:
    workbook = openpyxl.Workbook()
    budget = workbook.active
    budget.title = "Budget"
    budget.append(["Item", "Cost"])
    budget.append(["Rent", 1200])
    notes = workbook.create_sheet("Notes")
    notes.append(["hello, world"])
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def pptx_bytes() -> bytes:
    presentation = Presentation()
    first = presentation.slides.add_slide(presentation.slide_layouts[1])
    first.shapes.title.text = "Quarterly Review"
    first.placeholders[1].text = "Revenue grew"
    first.notes_slide.notes_text_frame.text = "Mention the hiring plan"

    second = presentation.slides.add_slide(presentation.slide_layouts[6])
    box = second.shapes.add_textbox(Inches(1), Inches(1), Inches(4), Inches(1))
    box.text_frame.text = "Closing remarks"

    buffer = io.BytesIO()
    presentation.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def empty_pptx_bytes() -> bytes:
    buffer = io.BytesIO()
    Presentation().save(buffer)
    return buffer.getvalue()


@pytest.fixture
def grouped_pptx_bytes() -> bytes:
    """One slide whose text sits only in a group shape and a table."""
    presentation = Presentation()
    slide = presentation.slides.add_slide(presentation.slide_layouts[6])
    group = slide.shapes.add_group_shape()
    inner = group.shapes.add_textbox(Inches(1), Inches(1), Inches(3), Inches(1))
    inner.text_frame.text = "GroupedBody"
    frame = slide.shapes.add_table(1, 1, Inches(1), Inches(3), Inches(2), Inches(1))
    frame.table.cell(0, 0).text = "TableCell"

    buffer = io.BytesIO()
    presentation.save(buffer)
    return buffer.getvalue()
