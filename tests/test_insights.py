"""
Tests for document extraction, feasibility parsing and AI insight endpoints.
"""

import io
import json
from types import SimpleNamespace

import docx
import httpx
import pytest
from pypdf import PdfWriter
from starlette.datastructures import UploadFile

from finsuite.services.documents import (
    DocumentExtractionError,
    UnsupportedDocumentError,
    extract_text,
)
from finsuite.services.feasibility import (
    PREVIEW_LIMIT,
    InvalidModelResponseError,
    build_feasibility_prompt,
    parse_feasibility_response,
)
from finsuite.services.genai import (
    SUGGESTED_TOPICS,
    AIServiceError,
    GenAIService,
    build_explanation_prompt,
)
from finsuite.services.catalog import levenshtein_distance, search_services


def make_docx(*paragraphs):
    document = docx.Document()
    for text in paragraphs:
        document.add_paragraph(text)
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()


def make_blank_pdf():
    writer = PdfWriter()
    writer.add_blank_page(width=72, height=72)
    buf = io.BytesIO()
    writer.write(buf)
    return buf.getvalue()


VALID_REPLY = json.dumps(
    {"feasibilityPercentage": 72, "explanation": "## Summary\nMostly feasible."}
)


def unreachable_genai_service():
    """Configured service whose client cannot connect."""

    async def generate_content(**kwargs):
        raise httpx.ConnectError("connection refused")

    service = GenAIService(api_key="")
    service.client = SimpleNamespace(
        aio=SimpleNamespace(models=SimpleNamespace(generate_content=generate_content))
    )
    return service


class TestDocumentExtraction:

    def test_plain_text(self):
        assert extract_text("scope.txt", b"Build a ledger\n") == "Build a ledger\n"

    def test_docx(self):
        text = extract_text("scope.docx", make_docx("Goal: payroll", "Budget: 10L"))
        assert "Goal: payroll" in text
        assert "Budget: 10L" in text

    def test_type_from_content_type(self):
        text = extract_text("upload", b"hello", content_type="text/plain")
        assert text == "hello"

    def test_unsupported_type(self):
        with pytest.raises(UnsupportedDocumentError):
            extract_text("diagram.png", b"\x89PNG")

    def test_empty_file(self):
        with pytest.raises(DocumentExtractionError):
            extract_text("scope.txt", b"")

    def test_whitespace_only(self):
        with pytest.raises(DocumentExtractionError):
            extract_text("scope.txt", b"   \n\t")

    def test_pdf_without_text(self):
        with pytest.raises(DocumentExtractionError, match="No text content"):
            extract_text("scan.pdf", make_blank_pdf())

    def test_corrupt_pdf(self):
        with pytest.raises(DocumentExtractionError):
            extract_text("broken.pdf", b"this is not a pdf")

    def test_corrupt_docx(self):
        with pytest.raises(DocumentExtractionError):
            extract_text("broken.docx", b"this is not a zip")


class TestFeasibilityParsing:

    def test_direct_json(self):
        result = parse_feasibility_response(VALID_REPLY)
        assert result.feasibility_percentage == 72
        assert result.explanation.startswith("## Summary")

    def test_fenced_json(self):
        result = parse_feasibility_response(f"```json\n{VALID_REPLY}\n```")
        assert result.feasibility_percentage == 72

    def test_json_inside_prose(self):
        reply = f"Here is the analysis you asked for:\n{VALID_REPLY}\nGood luck!"
        assert parse_feasibility_response(reply).feasibility_percentage == 72

    def test_crlf_line_endings(self):
        reply = f"```json\r\n{VALID_REPLY}\r\n```"
        assert parse_feasibility_response(reply).feasibility_percentage == 72

    def test_not_json(self):
        with pytest.raises(InvalidModelResponseError):
            parse_feasibility_response("I cannot analyze this document.")

    def test_missing_fields(self):
        with pytest.raises(InvalidModelResponseError):
            parse_feasibility_response('{"score": 50}')

    def test_percentage_out_of_range(self):
        reply = json.dumps({"feasibilityPercentage": 140, "explanation": "x"})
        with pytest.raises(InvalidModelResponseError, match="out of range"):
            parse_feasibility_response(reply)

    def test_boolean_percentage_rejected(self):
        reply = json.dumps({"feasibilityPercentage": True, "explanation": "x"})
        with pytest.raises(InvalidModelResponseError):
            parse_feasibility_response(reply)

    @pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_percentage_rejected(self, literal):
        reply = f'{{"feasibilityPercentage": {literal}, "explanation": "x"}}'
        with pytest.raises(InvalidModelResponseError):
            parse_feasibility_response(reply)

    def test_huge_integer_percentage_out_of_range(self):
        reply = json.dumps({"feasibilityPercentage": 10 ** 400, "explanation": "x"})
        with pytest.raises(InvalidModelResponseError, match="out of range"):
            parse_feasibility_response(reply)

    def test_preview_truncated(self):
        with pytest.raises(InvalidModelResponseError) as exc_info:
            parse_feasibility_response("x" * (PREVIEW_LIMIT + 500))
        assert exc_info.value.preview.endswith("... (truncated)")
        assert len(exc_info.value.preview) == PREVIEW_LIMIT + len("... (truncated)")

    def test_prompt_contains_document(self):
        prompt = build_feasibility_prompt("Build a mobile banking app")
        assert prompt.endswith("Build a mobile banking app")
        assert '"feasibilityPercentage": number' in prompt


class TestGenAIService:

    def test_unconfigured_without_key(self):
        assert GenAIService(api_key="").is_configured is False

    def test_explanation_prompt(self):
        prompt = build_explanation_prompt("Time Value of Money (TVM)")
        assert '"Time Value of Money (TVM)"' in prompt

    @pytest.mark.anyio
    async def test_blank_topic(self, fake_genai):
        with pytest.raises(ValueError):
            await fake_genai.explain_concept("   ")
        assert fake_genai.prompts == []

    @pytest.mark.anyio
    async def test_transport_error_is_service_error(self):
        service = unreachable_genai_service()
        with pytest.raises(AIServiceError, match="connection refused"):
            await service.explain_concept("ROI")


class TestServiceSearch:

    def test_levenshtein(self):
        assert levenshtein_distance("kitten", "sitting") == 3
        assert levenshtein_distance("", "abc") == 3
        assert levenshtein_distance("npv", "npv") == 0

    def test_empty_query_returns_all(self):
        assert len(search_services("")) == 8

    def test_every_word_must_match(self):
        names = [entry.name for entry in search_services("ai analysis")]
        assert names == ["Project Analytics"]

    def test_typo_tolerance(self):
        names = [entry.name for entry in search_services("calculater")]
        assert "NPV Calculator" in names
        assert "COCOMO Calculator" in names


class TestInsightsAPI:

    def test_topics(self, authenticated_client):
        response = authenticated_client.get("/api/insights/topics")
        assert response.status_code == 200
        assert response.json() == SUGGESTED_TOPICS

    def test_explain(self, authenticated_client, fake_genai):
        fake_genai.reply = "**WACC** is the blended cost of capital."
        response = authenticated_client.post(
            "/api/insights/explain",
            json={"topic": "  Weighted Average Cost of Capital (WACC) "},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["topic"] == "Weighted Average Cost of Capital (WACC)"
        assert data["explanation"].startswith("**WACC**")
        assert len(fake_genai.prompts) == 1

    def test_explain_blank_topic(self, authenticated_client, fake_genai):
        response = authenticated_client.post("/api/insights/explain", json={"topic": " "})
        assert response.status_code == 400

    def test_explain_not_configured(self, authenticated_client):
        from finsuite.main import app
        from finsuite.services.genai import get_genai_service

        app.dependency_overrides[get_genai_service] = lambda: GenAIService(api_key="")
        try:
            response = authenticated_client.post(
                "/api/insights/explain", json={"topic": "ROI"}
            )
        finally:
            app.dependency_overrides.pop(get_genai_service, None)
        assert response.status_code == 503

    def test_explain_upstream_failure(self, authenticated_client, fake_genai):
        fake_genai.error = AIServiceError("quota exceeded")
        response = authenticated_client.post("/api/insights/explain", json={"topic": "ROI"})
        assert response.status_code == 502

    def test_explain_connection_failure(self, authenticated_client):
        from finsuite.main import app
        from finsuite.services.genai import get_genai_service

        app.dependency_overrides[get_genai_service] = unreachable_genai_service
        try:
            response = authenticated_client.post(
                "/api/insights/explain", json={"topic": "ROI"}
            )
        finally:
            app.dependency_overrides.pop(get_genai_service, None)
        assert response.status_code == 502
        assert "connection refused" in response.json()["detail"]

    def test_feasibility(self, authenticated_client, fake_genai):
        fake_genai.reply = f"```json\n{VALID_REPLY}\n```"
        response = authenticated_client.post(
            "/api/insights/feasibility",
            files={"file": ("requirements.txt", b"Build a payroll system", "text/plain")},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["filename"] == "requirements.txt"
        assert data["feasibility_percentage"] == 72
        assert "Build a payroll system" in fake_genai.prompts[0]

    def test_feasibility_docx(self, authenticated_client, fake_genai):
        fake_genai.reply = VALID_REPLY
        response = authenticated_client.post(
            "/api/insights/feasibility",
            files={"file": ("scope.docx", make_docx("Migrate CRM to cloud"), "application/octet-stream")},
        )
        assert response.status_code == 200
        assert "Migrate CRM to cloud" in fake_genai.prompts[0]

    def test_feasibility_invalid_reply(self, authenticated_client, fake_genai):
        fake_genai.reply = "Sorry, I can't help with that."
        response = authenticated_client.post(
            "/api/insights/feasibility",
            files={"file": ("requirements.txt", b"Build a payroll system", "text/plain")},
        )
        assert response.status_code == 502
        assert "Sorry, I can't help with that." in response.json()["detail"]

    def test_feasibility_nan_reply(self, authenticated_client, fake_genai):
        fake_genai.reply = '{"feasibilityPercentage": NaN, "explanation": "x"}'
        response = authenticated_client.post(
            "/api/insights/feasibility",
            files={"file": ("requirements.txt", b"Build a payroll system", "text/plain")},
        )
        assert response.status_code == 502

    def test_feasibility_unsupported_type(self, authenticated_client, fake_genai):
        response = authenticated_client.post(
            "/api/insights/feasibility",
            files={"file": ("photo.png", b"\x89PNG", "image/png")},
        )
        assert response.status_code == 415
        assert fake_genai.prompts == []

    def test_feasibility_empty_document(self, authenticated_client, fake_genai):
        response = authenticated_client.post(
            "/api/insights/feasibility",
            files={"file": ("empty.txt", b"", "text/plain")},
        )
        assert response.status_code == 400

    def test_feasibility_too_large(self, authenticated_client, fake_genai, monkeypatch):
        from finsuite.api import insights

        monkeypatch.setattr(insights.settings, "max_upload_bytes", 10)
        response = authenticated_client.post(
            "/api/insights/feasibility",
            files={"file": ("big.txt", b"x" * 11, "text/plain")},
        )
        assert response.status_code == 413
        assert fake_genai.prompts == []

    def test_feasibility_at_limit(self, authenticated_client, fake_genai, monkeypatch):
        from finsuite.api import insights

        fake_genai.reply = VALID_REPLY
        monkeypatch.setattr(insights.settings, "max_upload_bytes", 10)
        response = authenticated_client.post(
            "/api/insights/feasibility",
            files={"file": ("small.txt", b"x" * 10, "text/plain")},
        )
        assert response.status_code == 200

    def test_feasibility_bounded_read(self, authenticated_client, fake_genai, monkeypatch):
        from finsuite.api import insights

        reads = []
        original_read = UploadFile.read

        async def recording_read(self, size=-1):
            reads.append(size)
            return await original_read(self, size)

        monkeypatch.setattr(UploadFile, "read", recording_read)
        monkeypatch.setattr(insights.settings, "max_upload_bytes", 10)
        response = authenticated_client.post(
            "/api/insights/feasibility",
            files={"file": ("big.txt", b"x" * 5000, "text/plain")},
        )
        assert response.status_code == 413
        assert reads == [11]

    def test_requires_auth(self, client, fake_genai):
        response = client.post("/api/insights/explain", json={"topic": "ROI"})
        assert response.status_code == 401
