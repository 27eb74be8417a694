"""End-to-end tests for the HTTP routes."""
import io

import pytest
from fastapi.testclient import TestClient
from pypdf import PdfReader

import qr
from config import Settings
from main import create_app

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


class TestLanding:
    """The landing page and health probe."""

    def test_root_is_blank(self, client) -> None:
        response = client.get("/")

        assert response.status_code == 200
        assert response.content == b""

    def test_health_reports_question_count(self, client) -> None:
        assert client.get("/health").json() == {"status": "ok", "questions": 3}

    def test_logo_is_served_from_public(self, client) -> None:
        response = client.get("/public/logo.png")

        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"


class TestQuestionViews:
    """HTML views over the store."""

    def test_list_shows_every_question_in_order(self, client) -> None:
        response = client.get("/questions")

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        body = response.text
        assert body.index("2+2=?") < body.index("Capitale de la France")

    def test_question_shows_prompt_and_options(self, client) -> None:
        response = client.get("/questions/1")

        assert response.status_code == 200
        assert "2+2=?" in response.text
        assert "A. 3" in response.text
        assert "B. 4" in response.text

    def test_question_does_not_reveal_answer(self, client) -> None:
        body = client.get("/questions/1").text

        assert "correct" not in body
        assert "Réponse" not in body

    def test_answer_identifies_correct_option(self, client) -> None:
        response = client.get("/questions/1/answer")

        assert response.status_code == 200
        assert 'class="correct">B. 4<' in response.text
        assert "Réponse : B. 4" in response.text

    @pytest.mark.parametrize("path", [
        "/questions/999",
        "/questions/999/answer",
        "/questions/abc",
        "/questions/abc/answer",
        "/questions/" + "9" * 5000,
        "/questions/" + "9" * 5000 + "/answer",
    ])
    def test_unknown_question_is_404(self, client, path) -> None:
        response = client.get(path)

        assert response.status_code == 404
        assert response.text == "Question not found"
        assert response.headers["content-type"].startswith("text/plain")

    def test_responses_are_repeatable(self, client) -> None:
        for path in ("/questions", "/questions/2", "/questions/2/answer", "/questions/999"):
            assert client.get(path).content == client.get(path).content

    def test_empty_store_lists_nothing_and_404s(self, empty_client) -> None:
        assert empty_client.get("/questions").status_code == 200
        assert empty_client.get("/questions/1").status_code == 404


class TestAnswerQrCode:
    """PNG QR codes pointing at the answer view."""

    def test_qr_code_encodes_answer_url(self, client) -> None:
        response = client.get("/questions/1/answer/qrcode")

        expected = qr.decode_data_url(qr.encode_data_url_sync("http://testserver/questions/1/answer"))
        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"
        assert response.content == expected

    def test_unknown_and_non_numeric_ids_are_still_encoded(self, client) -> None:
        for raw in ("999", "abc"):
            response = client.get(f"/questions/{raw}/answer/qrcode")

            expected_url = f"http://testserver/questions/{raw}/answer"
            assert response.status_code == 200
            assert response.content.startswith(PNG_SIGNATURE)
            assert response.content == qr.decode_data_url(qr.encode_data_url_sync(expected_url))

    def test_generation_failure_is_500(self, client, monkeypatch) -> None:
        async def boom(text: str) -> str:
            raise qr.QRGenerationError("boom")

        monkeypatch.setattr(qr, "encode_data_url", boom)

        response = client.get("/questions/1/answer/qrcode")

        assert response.status_code == 500
        assert response.text == "Error generating QR code"


class TestPdfDocument:
    """Printable cards."""

    def test_pdf_for_known_question(self, client) -> None:
        response = client.get("/questions/1/pdf-document")

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.headers["content-disposition"] == "inline; filename=quiz-150ans-1.pdf"
        assert response.content.startswith(b"%PDF-")

    def test_filename_uses_parsed_id(self, client) -> None:
        response = client.get("/questions/007/pdf-document")

        assert response.headers["content-disposition"] == "inline; filename=quiz-150ans-7.pdf"

    @pytest.mark.parametrize("raw", ["999", "abc", "9" * 5000])
    def test_unknown_question_is_404_without_pdf(self, client, raw) -> None:
        response = client.get(f"/questions/{raw}/pdf-document")

        assert response.status_code == 404
        assert response.text == "Question not found"
        assert not response.content.startswith(b"%PDF-")

    def test_qr_failure_aborts_pdf(self, client, monkeypatch) -> None:
        async def boom(text: str) -> bytes:
            raise qr.QRGenerationError("boom")

        monkeypatch.setattr(qr, "encode_png", boom)

        response = client.get("/questions/2/pdf-document")

        assert response.status_code == 500
        assert response.text == "Error generating QR code"


class TestAppSettings:
    """Settings passed to create_app drive the routes."""

    @pytest.fixture
    def custom_client(self, store):
        settings = Settings(
            pdf_filename_prefix="carte",
            qr_caption="Scan me",
            public_prefix="/assets",
        )
        with TestClient(create_app(store=store, settings=settings)) as c:
            yield c

    def test_pdf_uses_custom_filename_and_caption(self, custom_client) -> None:
        response = custom_client.get("/questions/2/pdf-document")

        assert response.headers["content-disposition"] == "inline; filename=carte-2.pdf"
        text = PdfReader(io.BytesIO(response.content)).pages[0].extract_text()
        assert "Scan me" in text
        assert "Réponse" not in text

    def test_logo_url_follows_public_prefix(self, custom_client) -> None:
        body = custom_client.get("/questions/1").text

        assert 'src="http://testserver/assets/logo.png"' in body
        assert custom_client.get("/assets/logo.png").status_code == 200
