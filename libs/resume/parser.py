"""
Resume extraction for candidate submissions.

Recovers plain text from an uploaded PDF and derives coarse signals from it
with keyword and pattern matching:

- skills: vocabulary keywords found anywhere in the text (substring match,
  so "java" also fires inside "javascript")
- education: lines mentioning a degree, institution or certification
- experience: long lines that carry a year between 1900 and 2099
"""

from __future__ import annotations
import io
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Set, Union

import pdfplumber

from libs.matching.errors import ExtractionError
from libs.observability import PerformanceMetrics, counter

logger = logging.getLogger(__name__)

SKILL_KEYWORDS = (
    'javascript', 'python', 'java', 'react', 'angular', 'vue', 'node.js',
    'aws', 'azure', 'docker', 'kubernetes', 'sql', 'nosql', 'agile',
    'project management', 'leadership', 'communication', 'problem solving',
)

EDUCATION_KEYWORDS = (
    'bachelor', 'master', 'phd', 'degree', 'university', 'college',
    'certification', 'diploma',
)

YEAR_PATTERN = re.compile(r'\b(19|20)\d{2}\b')
MIN_EXPERIENCE_LINE_LENGTH = 50


@dataclass
class ParsedResume:
    """Text recovered from a resume plus keyword-derived signals"""
    text: str
    skills: Set[str] = field(default_factory=set)
    education: List[str] = field(default_factory=list)
    experience: List[str] = field(default_factory=list)


class ResumeParser:
    """Extracts text from PDF resumes and scans it for skills, education and experience"""

    def __init__(
        self,
        skill_keywords=SKILL_KEYWORDS,
        education_keywords=EDUCATION_KEYWORDS,
    ):
        self.skill_keywords = tuple(k.lower() for k in skill_keywords)
        self.education_keywords = tuple(k.lower() for k in education_keywords)

    def parse_bytes(self, content: bytes) -> ParsedResume:
        """Parse an uploaded PDF held in memory"""
        text = self.extract_text(content)
        counter(PerformanceMetrics.RESUME_EXTRACTIONS)
        return self.parse_text(text)

    def parse_file(self, file_path: Union[str, Path]) -> ParsedResume:
        file_path = Path(file_path)
        if not file_path.exists():
            raise ExtractionError(f"File not found: {file_path}")
        return self.parse_bytes(file_path.read_bytes())

    def extract_text(self, content: bytes) -> str:
        """Extract raw text from PDF bytes, one page after another"""
        if not content:
            raise ExtractionError("Empty resume document")

        try:
            pages = []
            with pdfplumber.open(io.BytesIO(content)) as pdf:
                for page in pdf.pages:
                    page_text = page.extract_text()
                    if page_text:
                        pages.append(page_text)
        except Exception as e:
            logger.error(f"Failed to parse PDF: {e}")
            raise ExtractionError(f"Failed to parse PDF: {e}") from e

        text = "\n".join(pages)
        if not text.strip():
            logger.warning("PDF contained no extractable text (image-only document?)")
        logger.debug(f"Extracted {len(text)} characters from PDF")
        return text

    def parse_text(self, text: str) -> ParsedResume:
        """Derive keyword signals from already-extracted text"""
        lowered = text.lower()
        lines = text.split('\n')

        skills = {skill for skill in self.skill_keywords if skill in lowered}

        education = [
            line for line in lines
            if any(keyword in line.lower() for keyword in self.education_keywords)
        ]

        experience = [
            line for line in lines
            if YEAR_PATTERN.search(line) and len(line) > MIN_EXPERIENCE_LINE_LENGTH
        ]

        logger.info(
            f"Resume signals: {len(skills)} skills, "
            f"{len(education)} education lines, {len(experience)} experience lines"
        )
        return ParsedResume(text=text, skills=skills, education=education, experience=experience)


def create_resume_parser() -> ResumeParser:
    """Factory function to create the resume parser"""
    return ResumeParser()
