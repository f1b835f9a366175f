"""Tests for resume text extraction and signal detection"""
from unittest.mock import MagicMock, Mock, patch

import pytest

from libs.matching.errors import ExtractionError
from libs.observability import PerformanceMetrics, get_metrics_collector
from libs.resume.parser import ParsedResume, ResumeParser

RESUME_TEXT = """Jane Doe
Backend engineer. Skills: Python, SQL, Docker, Kubernetes, leadership
Bachelor of Science, State University
Senior Engineer at Acme Corp from 2019 to 2024, owning the matching platform
AWS Certification: Solutions Architect
"""


def _fake_pdf(*page_texts):
    pdf = MagicMock()
    pdf.pages = [Mock(extract_text=Mock(return_value=text)) for text in page_texts]
    pdf.__enter__.return_value = pdf
    pdf.__exit__.return_value = False
    return pdf


def test_parse_text_signals():
    """Skills, education and experience lines are detected from plain text"""
    parsed = ResumeParser().parse_text(RESUME_TEXT)

    assert isinstance(parsed, ParsedResume)
    assert parsed.text == RESUME_TEXT
    assert {"python", "sql", "docker", "kubernetes", "leadership", "aws"} <= parsed.skills
    assert parsed.education == [
        "Bachelor of Science, State University",
        "AWS Certification: Solutions Architect",
    ]
    assert parsed.experience == [
        "Senior Engineer at Acme Corp from 2019 to 2024, owning the matching platform",
    ]


def test_skill_matching_is_substring_based():
    parsed = ResumeParser().parse_text("Frontend work in JavaScript")

    assert "javascript" in parsed.skills
    assert "java" in parsed.skills


def test_short_lines_with_years_are_not_experience():
    parsed = ResumeParser().parse_text("Acme 2019-2024")

    assert parsed.experience == []


@pytest.mark.parametrize("line, expected", [
    ("Engineer at Acme 2019 ".ljust(50, "x"), False),
    ("Engineer at Acme 2019 ".ljust(51, "x"), True),
    ("Engineer at Acme 1900 ".ljust(60, "x"), True),
    ("Engineer at Acme 2099 ".ljust(60, "x"), True),
    ("Engineer at Acme 1899 ".ljust(60, "x"), False),
    ("Engineer at Acme 2100 ".ljust(60, "x"), False),
    ("Engineer badge 12019 ".ljust(60, "x"), False),
])
def test_experience_line_boundaries(line, expected):
    parsed = ResumeParser().parse_text(line)

    assert (line in parsed.experience) is expected


def test_extract_text_joins_pages():
    parser = ResumeParser()
    with patch("libs.resume.parser.pdfplumber.open", return_value=_fake_pdf("page one", None, "page two")):
        text = parser.extract_text(b"%PDF-1.4 fake")

    assert text == "page one\npage two"


def test_image_only_pdf_yields_empty_text():
    parser = ResumeParser()
    with patch("libs.resume.parser.pdfplumber.open", return_value=_fake_pdf(None, "")):
        parsed = parser.parse_bytes(b"%PDF-1.4 scanned")

    assert parsed.text == ""
    assert parsed.skills == set()


def test_parse_bytes_counts_extractions():
    parser = ResumeParser()
    with patch("libs.resume.parser.pdfplumber.open", return_value=_fake_pdf(RESUME_TEXT)):
        parser.parse_bytes(b"%PDF-1.4 fake")

    metrics = get_metrics_collector().get_metrics(PerformanceMetrics.RESUME_EXTRACTIONS)
    assert len(metrics[PerformanceMetrics.RESUME_EXTRACTIONS]) == 1


def test_non_pdf_bytes_raise_extraction_error():
    with pytest.raises(ExtractionError) as exc_info:
        ResumeParser().parse_bytes(b"this is not a pdf document")
    assert exc_info.value.stage == "extraction"


def test_empty_bytes_raise_extraction_error():
    with pytest.raises(ExtractionError):
        ResumeParser().extract_text(b"")


def test_parse_file_missing(tmp_path):
    with pytest.raises(ExtractionError):
        ResumeParser().parse_file(tmp_path / "missing.pdf")


def test_custom_vocabulary():
    parser = ResumeParser(skill_keywords=["Rust", "Go"], education_keywords=["bootcamp"])
    parsed = parser.parse_text("Rust developer\nCoding bootcamp graduate")

    assert parsed.skills == {"rust"}
    assert parsed.education == ["Coding bootcamp graduate"]
