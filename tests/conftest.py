import json
from pathlib import Path
from typing import Callable, Dict, List

import httpx
import pytest

from pdfanalyzer.core.command_handler import CommandHandler
from pdfanalyzer.core.services.analysis_service import AnalysisService
from pdfanalyzer.core.services.catalog_service import ModelCatalogService
from pdfanalyzer.core.uri_resolver import UriResolver
from pdfanalyzer.infrastructure.ai.gemini.chat_client import GeminiChatClient
from pdfanalyzer.infrastructure.ai.gemini.multimodal_client import GeminiMultimodalClient
from pdfanalyzer.infrastructure.extraction.pdf_extractor import PdfTextExtractor
from pdfanalyzer.infrastructure.filesystem.local_fs import LocalFileSystem

TEST_API_KEY = "test-gemini-key"
TEST_MODEL = "gemini-2.0-flash"


def make_pdf(*page_texts: str) -> bytes:
    """Builds a minimal, valid PDF with one Helvetica text line per page."""
    page_count = len(page_texts)
    page_ids = [4 + 2 * i for i in range(page_count)]
    kids = " ".join(f"{pid} 0 R" for pid in page_ids)

    objects: Dict[int, bytes] = {
        1: b"<< /Type /Catalog /Pages 2 0 R >>",
        2: f"<< /Type /Pages /Kids [{kids}] /Count {page_count} >>".encode(),
        3: b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    }
    for page_id, text in zip(page_ids, page_texts):
        content_id = page_id + 1
        objects[page_id] = (
            f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
            f"/Contents {content_id} 0 R /Resources << /Font << /F1 3 0 R >> >> >>"
        ).encode()
        stream = f"BT /F1 24 Tf 72 720 Td ({text}) Tj ET".encode("latin-1")
        objects[content_id] = b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream"

    out = bytearray(b"%PDF-1.4\n")
    offsets: Dict[int, int] = {}
    for object_id in sorted(objects):
        offsets[object_id] = len(out)
        out += f"{object_id} 0 obj\n".encode() + objects[object_id] + b"\nendobj\n"

    xref_position = len(out)
    size = max(objects) + 1
    out += f"xref\n0 {size}\n".encode()
    out += b"0000000000 65535 f \n"
    for object_id in range(1, size):
        out += f"{offsets[object_id]:010d} 00000 n \n".encode()
    out += f"trailer\n<< /Size {size} /Root 1 0 R >>\nstartxref\n{xref_position}\n%%EOF\n".encode()
    return bytes(out)


class CountingTransport(httpx.MockTransport):
    """MockTransport that records every request it serves."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(recording_handler)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def json_bodies(self) -> List[dict]:
        return [json.loads(request.content) for request in self.requests]


def gemini_success(text: str) -> httpx.Response:
    return httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]})


def chat_success(text: str) -> httpx.Response:
    return httpx.Response(
        200,
        json={
            "id": "chatcmpl-test",
            "object": "chat.completion",
            "created": 0,
            "model": TEST_MODEL,
            "choices": [
                {"index": 0, "message": {"role": "assistant", "content": text}, "finish_reason": "stop"}
            ],
        },
    )


def is_chat_request(request: httpx.Request) -> bool:
    return request.url.path.endswith("/chat/completions")


@pytest.fixture
def sample_pdf(tmp_path: Path) -> Path:
    """A one-page PDF whose text is 'Page 1 text'."""
    path = tmp_path / "sample.pdf"
    path.write_bytes(make_pdf("Page 1 text"))
    return path


@pytest.fixture
def build_pipeline():
    """Factory: wires the real pipeline on top of a counting transport."""
    clients: List[httpx.Client] = []

    def _build(handler: Callable[[httpx.Request], httpx.Response]):
        transport = CountingTransport(handler)
        http_client = httpx.Client(transport=transport)
        clients.append(http_client)
        file_system = LocalFileSystem()
        service = AnalysisService(
            resolver=UriResolver(file_system=file_system),
            file_system=file_system,
            multimodal_client=GeminiMultimodalClient(api_key=TEST_API_KEY, http_client=http_client),
            chat_client=GeminiChatClient(api_key=TEST_API_KEY, http_client=http_client),
            text_extractor=PdfTextExtractor(file_system=file_system),
        )
        handler_ = CommandHandler(
            analysis_service=service,
            catalog_service=ModelCatalogService(default_model=TEST_MODEL),
            default_model=TEST_MODEL,
        )
        return handler_, transport

    yield _build
    for http_client in clients:
        http_client.close()
