"""
FastAPI routes for the quiz cards.

We expose:
- GET /                                  (blank landing page)
- GET /health                            (liveness + number of loaded questions)
- GET /questions                         (list view)
- GET /questions/{id}                    (question view, answer hidden)
- GET /questions/{id}/answer             (answer view)
- GET /questions/{id}/answer/qrcode      (PNG QR code pointing to the answer view)
- GET /questions/{id}/pdf-document       (printable card with the QR code)

ASSUMPTION: No auth; everything is read-only.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse, Response
from fastapi.templating import Jinja2Templates
from starlette.concurrency import run_in_threadpool

from config import Settings
from dataset import Question, QuestionStore, parse_question_id
from pdf_renderer import render_question_card
import qr

logger = logging.getLogger(__name__)

router = APIRouter(tags=["questions"])

NOT_FOUND = "Question not found"
QR_ERROR = "Error generating QR code"


def get_store(request: Request) -> QuestionStore:
    return request.app.state.store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_templates(request: Request) -> Jinja2Templates:
    return request.app.state.templates


def _not_found() -> PlainTextResponse:
    return PlainTextResponse(NOT_FOUND, status_code=404)


def _lookup(store: QuestionStore, raw_id: str) -> Question | None:
    question_id = parse_question_id(raw_id)
    if question_id is None:
        return None
    return store.get(question_id)


@router.get("/")
def home() -> Response:
    return Response(status_code=200)


@router.get("/health")
def health(store: QuestionStore = Depends(get_store)) -> dict:
    return {"status": "ok", "questions": len(store)}


@router.get("/questions")
def list_questions(request: Request, store: QuestionStore = Depends(get_store),
                   settings: Settings = Depends(get_settings),
                   templates: Jinja2Templates = Depends(get_templates)):
    return templates.TemplateResponse(
        request, "questions.html", {"questions": store.all(), "logo": settings.logo_filename}
    )


@router.get("/questions/{question_id}")
def show_question(question_id: str, request: Request, store: QuestionStore = Depends(get_store),
                  settings: Settings = Depends(get_settings),
                  templates: Jinja2Templates = Depends(get_templates)):
    question = _lookup(store, question_id)
    if question is None:
        return _not_found()
    return templates.TemplateResponse(
        request, "question.html", {"question": question, "logo": settings.logo_filename}
    )


@router.get("/questions/{question_id}/answer")
def show_answer(question_id: str, request: Request, store: QuestionStore = Depends(get_store),
                settings: Settings = Depends(get_settings),
                templates: Jinja2Templates = Depends(get_templates)):
    question = _lookup(store, question_id)
    if question is None:
        return _not_found()
    return templates.TemplateResponse(
        request, "answer.html",
        {"question": question, "answer": question.correct_option, "logo": settings.logo_filename},
    )


@router.get("/questions/{question_id}/answer/qrcode")
async def answer_qrcode(question_id: str, request: Request) -> Response:
    # The segment is encoded as-is: no parsing, no store lookup.
    url = qr.answer_url(request, question_id)
    try:
        data_url = await qr.encode_data_url(url)
        png = qr.decode_data_url(data_url)
    except qr.QRGenerationError:
        logger.exception("QR generation failed for %s", url)
        return PlainTextResponse(QR_ERROR, status_code=500)
    return Response(content=png, media_type="image/png")


@router.get("/questions/{question_id}/pdf-document")
async def pdf_document(question_id: str, request: Request,
                       store: QuestionStore = Depends(get_store),
                       settings: Settings = Depends(get_settings)) -> Response:
    question = _lookup(store, question_id)
    if question is None:
        return _not_found()

    url = qr.answer_url(request, question.id)
    try:
        qr_png = await qr.encode_png(url)
    except qr.QRGenerationError:
        logger.exception("QR generation failed for %s", url)
        return PlainTextResponse(QR_ERROR, status_code=500)

    pdf = await run_in_threadpool(
        render_question_card, question, qr_png, settings.logo_path, caption=settings.qr_caption
    )
    filename = f"{settings.pdf_filename_prefix}-{question.id}.pdf"
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f"inline; filename={filename}"},
    )
