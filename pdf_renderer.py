"""
Printable question card (one landscape page per question).

Geometry is expressed top-down from the page's top-left corner, the way the
card was designed; it is flipped to reportlab's bottom-up space only when
drawing.
"""
from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfgen import canvas

from dataset import Question

logger = logging.getLogger(__name__)

PAGE_SIZE: Tuple[float, float] = landscape(A4)
FONT = "Helvetica"
MARGIN = 50

LOGO_X = 50
LOGO_Y = 50
LOGO_WIDTH = 100

QUESTION_FONT_SIZE = 24
QUESTION_LEADING = QUESTION_FONT_SIZE * 1.2
QUESTION_GAP = 30           # between prompt and answers, for centering
ANSWER_FONT_SIZE = 20
ANSWER_X = 100
ANSWER_LINE_HEIGHT = 30
ANSWER_OFFSET = 80          # first answer line below the prompt

QR_SIZE = 100
CAPTION_FONT_SIZE = 12
CAPTION_GAP = 20


@dataclass(frozen=True)
class CardLayout:
    page_width: float
    page_height: float
    question_lines: List[str]
    question_height: float
    start_y: float
    answer_lines: List[str]
    answer_start_y: float
    qr_x: float
    qr_y: float
    caption_y: float

    @property
    def content_width(self) -> float:
        return self.page_width - 2 * MARGIN


def layout_card(question: Question, page_size: Tuple[float, float] = PAGE_SIZE) -> CardLayout:
    width, height = page_size
    lines = simpleSplit(question.text, FONT, QUESTION_FONT_SIZE, width - 2 * MARGIN)
    question_height = len(lines) * QUESTION_LEADING
    answers = [opt.label for opt in question.options]

    total = question_height + QUESTION_GAP + len(answers) * ANSWER_LINE_HEIGHT
    start_y = (height - total) / 2

    qr_x = width - MARGIN - QR_SIZE
    qr_y = height - MARGIN - QR_SIZE
    return CardLayout(
        page_width=width,
        page_height=height,
        question_lines=lines,
        question_height=question_height,
        start_y=start_y,
        answer_lines=answers,
        answer_start_y=start_y + question_height + ANSWER_OFFSET,
        qr_x=qr_x,
        qr_y=qr_y,
        caption_y=qr_y - CAPTION_GAP,
    )


def _draw_logo(c: canvas.Canvas, logo_path: Optional[Path], page_height: float) -> None:
    if logo_path is None:
        return
    if not logo_path.is_file():
        logger.warning("Logo not found at %s, drawing card without it", logo_path)
        return
    logo = ImageReader(str(logo_path))
    img_w, img_h = logo.getSize()
    logo_height = LOGO_WIDTH * img_h / img_w
    c.drawImage(logo, LOGO_X, page_height - LOGO_Y - logo_height,
                width=LOGO_WIDTH, height=logo_height, mask="auto")


def render_question_card(
    question: Question,
    qr_png: bytes,
    logo_path: Optional[Path] = None,
    *,
    caption: str = "Réponse :",
    page_size: Tuple[float, float] = PAGE_SIZE,
) -> bytes:
    """
    Draw the card and return the PDF document bytes.

    The prompt and the answer list are centered vertically as one block; the
    QR code for the answer page sits in the bottom-right corner under a caption.
    """
    layout = layout_card(question, page_size)
    h = layout.page_height
    buff = io.BytesIO()

    # invariant=1 keeps the output byte-stable across calls
    c = canvas.Canvas(buff, pagesize=page_size, invariant=1)
    c.setTitle(question.text)
    c.setSubject(f"Question {question.id}")

    _draw_logo(c, logo_path, h)

    c.setFont(FONT, QUESTION_FONT_SIZE)
    center_x = MARGIN + layout.content_width / 2
    for i, line in enumerate(layout.question_lines):
        top = layout.start_y + i * QUESTION_LEADING
        c.drawCentredString(center_x, h - top - QUESTION_FONT_SIZE, line)

    c.setFont(FONT, ANSWER_FONT_SIZE)
    for i, line in enumerate(layout.answer_lines):
        top = layout.answer_start_y + i * ANSWER_LINE_HEIGHT
        c.drawString(ANSWER_X, h - top - ANSWER_FONT_SIZE, line)

    c.setFont(FONT, CAPTION_FONT_SIZE)
    c.drawCentredString(layout.qr_x + QR_SIZE / 2, h - layout.caption_y - CAPTION_FONT_SIZE, caption)
    c.drawImage(ImageReader(io.BytesIO(qr_png)), layout.qr_x, h - layout.qr_y - QR_SIZE,
                width=QR_SIZE, height=QR_SIZE)

    c.showPage()
    c.save()
    return buff.getvalue()
