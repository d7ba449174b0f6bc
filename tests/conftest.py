import pytest
from pathlib import Path
import sys

# Add project root to path
sys.path.append(str(Path(__file__).parent.parent))

from studio.app import AppConfig, StudioController
from studio.concurrency import VirtualScheduler
from studio.models import FileInput


@pytest.fixture
def scheduler():
    """Virtual clock advanced explicitly by tests."""
    return VirtualScheduler()


@pytest.fixture
def controller(scheduler):
    """Controller on virtual time with default stage durations."""
    return StudioController(config=AppConfig(), scheduler=scheduler)


@pytest.fixture
def events(controller):
    """Every event the controller publishes, in order."""
    received = []
    controller.subscribe(received.append)
    return received


@pytest.fixture
def pdf_input():
    """Factory for accepted PDF uploads."""
    def make(name="book.pdf", pages=None, size=1024):
        return FileInput(name=name, size=size, mime_type="application/pdf", pages=pages)
    return make


@pytest.fixture
def sample_txt(tmp_path):
    """Plain-text document on disk."""
    path = tmp_path / "notes.txt"
    path.write_text("It had begun to snow again. " * 200, encoding="utf-8")
    return path


@pytest.fixture
def sample_pdf(tmp_path):
    """Minimal PDF-looking file on disk."""
    path = tmp_path / "sample.pdf"
    path.write_bytes(b"%PDF-1.4\n%%EOF\n")
    return path
