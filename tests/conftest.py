"""
Pytest fixtures and configuration for keyword density tests.
"""

import pytest
from pathlib import Path

from docx import Document


@pytest.fixture
def filler():
    """Build neutral filler text of an exact word count."""
    def _filler(count: int) -> str:
        return " ".join(["cable"] * count)
    return _filler


@pytest.fixture
def sample_keywords_csv(tmp_path: Path) -> Path:
    """Create a sample keywords CSV file."""
    csv_path = tmp_path / "keywords.csv"
    csv_content = """keyword,min_density,max_density,tier,importance
USB Device Not Recognized,3,5,primary,10
usb driver problems,1.5,3,secondary,7
unknown usb device,,,long-tail,4
usb device not recognized,2,4,primary,1
"""
    csv_path.write_text(csv_content)
    return csv_path


@pytest.fixture
def sample_keywords_excel(tmp_path: Path) -> Path:
    """Create a sample keywords Excel file."""
    import pandas as pd

    xlsx_path = tmp_path / "keywords.xlsx"
    data = {
        "Keyword": ["usb recognized", "usb recognition speed"],
        "Min Density": [3, 1.5],
        "Max Density": [5, 3],
        "Priority": [10, 7],
    }
    df = pd.DataFrame(data)
    df.to_excel(xlsx_path, index=False)
    return xlsx_path


@pytest.fixture
def sample_docx(tmp_path: Path) -> Path:
    """Create a sample Word document."""
    docx_path = tmp_path / "sample.docx"
    doc = Document()

    doc.add_heading("USB Device Not Recognized", level=1)
    doc.add_paragraph(
        "When Windows shows a usb device not recognized message, the port, "
        "the cable or the driver is usually at fault."
    )
    doc.add_paragraph("")
    doc.add_paragraph(
        "Start by trying another port and reinstalling the driver from Device Manager."
    )

    doc.save(str(docx_path))
    return docx_path


@pytest.fixture
def sample_html_content() -> str:
    """Sample HTML page for extraction tests."""
    return """
<!DOCTYPE html>
<html>
<head>
    <title>USB Not Recognized | Troubleshooting Guide</title>
    <style>p { color: red; }</style>
</head>
<body>
    <header>
        <nav>Navigation content</nav>
    </header>
    <main>
        <h1>Fix USB Device Not Recognized Errors</h1>
        <p>A usb device not recognized error usually points to a driver or power problem.</p>
        <h2>Quick Checks</h2>
        <ul>
            <li><p>Try a different port.</p></li>
            <li>Replace the cable.</li>
        </ul>
    </main>
    <script>var tracking = "usb usb usb";</script>
    <footer>Footer content</footer>
</body>
</html>
"""


@pytest.fixture
def text_file(tmp_path: Path):
    """Write text to a file and return its path."""
    def _write(content: str, name: str = "content.txt") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path
    return _write
