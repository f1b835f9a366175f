"""Prompt templates for job posting and candidate profile analysis."""

from enum import Enum


class AnalysisTask(str, Enum):
    JOB = "job"
    CANDIDATE = "candidate"


class AnalysisPrompt:
    """Prompt templates for LLM-based analysis.

    Both templates ask for exactly five sections in a fixed order; the report
    that comes back is passed through untouched.
    """

    JOB_PROMPT = """Analyze the following job posting and provide:
1. Key skills and qualifications required
2. Experience level assessment
3. Main responsibilities
4. Unique benefits or perks
5. Suggested candidate profile

Job Posting:
{document}"""

    CANDIDATE_PROMPT = """Analyze the following candidate profile and provide:
1. A brief summary of their background
2. Key skills identified
3. Experience level assessment
4. Potential role matches
5. Areas for improvement

Profile:
{document}"""

    _TEMPLATES = {
        AnalysisTask.JOB: JOB_PROMPT,
        AnalysisTask.CANDIDATE: CANDIDATE_PROMPT,
    }

    @classmethod
    def format_prompt(cls, task: AnalysisTask, document: str) -> str:
        """Render the template for a task around the canonical document."""
        return cls._TEMPLATES[AnalysisTask(task)].format(document=document)
