"""End-to-end pipeline runs: real resolver, extractor and adapters, fake network."""

import base64
from pathlib import Path

import httpx

from conftest import TEST_MODEL, chat_success, gemini_success, is_chat_request
from pdfanalyzer.core.command_handler import ANALYZE_TOOL_NAME


def _analyze(handler, reference: str, prompt: str = "Summarize this", **extra):
    arguments = {"pdfResourceUri": reference, "originalPrompt": prompt}
    arguments.update(extra)
    return handler.handle_tool_invocation(ANALYZE_TOOL_NAME, arguments)


def test_direct_upload_answers(build_pipeline, sample_pdf: Path):
    handler, transport = build_pipeline(lambda request: gemini_success("Summary."))

    result = _analyze(handler, sample_pdf.as_uri())

    assert result.text == "Summary."
    assert not result.is_error
    assert transport.call_count == 1
    body = transport.json_bodies()[0]
    parts = body["contents"][0]["parts"]
    assert parts[0]["text"] == "Summarize this"
    assert base64.b64decode(parts[1]["inline_data"]["data"]) == sample_pdf.read_bytes()
    assert transport.requests[0].url.path.endswith(f"/models/{TEST_MODEL}:generateContent")


def test_server_error_falls_back_to_extracted_text(build_pipeline, sample_pdf: Path):
    def handler(request: httpx.Request) -> httpx.Response:
        if is_chat_request(request):
            return chat_success("Fallback answer.")
        return httpx.Response(503, text="Service Unavailable")

    handler_, transport = build_pipeline(handler)

    result = _analyze(handler_, sample_pdf.as_uri())

    assert result.text == "Fallback answer."
    assert not result.is_error
    assert transport.call_count == 2
    assert not is_chat_request(transport.requests[0])
    assert is_chat_request(transport.requests[1])

    chat_body = transport.json_bodies()[1]
    content = chat_body["messages"][0]["content"]
    assert content.startswith("Summarize this\n\n--- PDF Content ---\n")
    assert "Page 1 text" in content


def test_both_endpoints_failing_reports_error(build_pipeline, sample_pdf: Path):
    def handler(request: httpx.Request) -> httpx.Response:
        if is_chat_request(request):
            return httpx.Response(500, json={"error": {"message": "chat is down"}})
        return httpx.Response(400, text="unsupported document")

    handler_, transport = build_pipeline(handler)

    result = _analyze(handler_, sample_pdf.as_uri())

    assert result.is_error
    assert result.text.startswith("Error: ")
    assert "500" in result.text
    assert "chat is down" in result.text
    assert transport.call_count == 2


def test_nonexistent_file_makes_no_network_call(build_pipeline, tmp_path: Path):
    handler, transport = build_pipeline(lambda request: gemini_success("never"))

    result = _analyze(handler, (tmp_path / "nope.pdf").as_uri())

    assert result.is_error
    assert "not found or not readable" in result.text
    assert transport.call_count == 0


def test_unsupported_reference_makes_no_network_call(build_pipeline):
    handler, transport = build_pipeline(lambda request: gemini_success("never"))

    result = _analyze(handler, "https://example.com/a.pdf")

    assert result.is_error
    assert transport.call_count == 0


def test_percent_encoded_path_is_found(build_pipeline, tmp_path: Path):
    pdf = tmp_path / "My Report.pdf"
    pdf.write_bytes(b"%PDF-1.4 bytes")
    handler, transport = build_pipeline(lambda request: gemini_success("ok"))

    result = _analyze(handler, pdf.as_uri())

    assert "%20" in pdf.as_uri()
    assert result.text == "ok"
    assert transport.call_count == 1


def test_model_override_reaches_both_endpoints(build_pipeline, sample_pdf: Path):
    def handler(request: httpx.Request) -> httpx.Response:
        if is_chat_request(request):
            return chat_success("Fallback answer.")
        return httpx.Response(404, text="model not found")

    handler_, transport = build_pipeline(handler)

    _analyze(handler_, sample_pdf.as_uri(), modelOverride="gemini-1.5-pro")

    assert "/models/gemini-1.5-pro:generateContent" in transport.requests[0].url.path
    assert transport.json_bodies()[1]["model"] == "gemini-1.5-pro"


def test_unparseable_pdf_after_rejection_is_terminal(build_pipeline, tmp_path: Path):
    bogus = tmp_path / "bogus.pdf"
    bogus.write_bytes(b"not really a pdf")

    def handler(request: httpx.Request) -> httpx.Response:
        if is_chat_request(request):
            return chat_success("never")
        return httpx.Response(400, text="invalid pdf")

    handler_, transport = build_pipeline(handler)

    result = _analyze(handler_, bogus.as_uri())

    assert result.is_error
    assert "Could not extract text" in result.text
    assert transport.call_count == 1


def test_nul_byte_reference_returns_error_result(build_pipeline):
    handler, transport = build_pipeline(lambda request: gemini_success("never"))

    result = _analyze(handler, "file:///tmp/a%00b.pdf")

    assert result.is_error
    assert result.text.startswith("Error: Invalid file reference")
    assert transport.call_count == 0


def test_non_json_fallback_answer_names_the_chat_endpoint(build_pipeline, sample_pdf: Path):
    def handler(request: httpx.Request) -> httpx.Response:
        if is_chat_request(request):
            return httpx.Response(200, content=b"not json", headers={"content-type": "application/json"})
        return httpx.Response(503, text="Service Unavailable")

    handler_, transport = build_pipeline(handler)

    result = _analyze(handler_, sample_pdf.as_uri())

    assert result.is_error
    assert result.text.startswith("Error: Unexpected response format from Gemini chat completions")
    assert "Unexpected failure" not in result.text
    assert transport.call_count == 2
