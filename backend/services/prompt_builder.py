"""All prompt templates for Gemini API calls."""

import json

from models.requests import JobRequirement
from models.responses import CandidateResult

MAX_JD_CHARS = 12000
MAX_RESUME_CHARS = 16000


def build_keywords_prompt(jd_text: str) -> str:
    """Must/nice competencies with synonyms, from the JD content only."""
    return f"""From the JOB DESCRIPTION below, extract hiring themes/competencies as keywords with realistic synonyms only from the JD content.

Rules:
- 6-10 "must" items (core responsibilities, core competencies, critical tools/processes).
- 4-8 "nice" items (nice-to-have tools, domains, certifications).
- Synonyms: short realistic variants (abbreviations, spelling variants, common phrases). 2-6 per item.
- Do not add skills the JD does not mention.

Respond with ONLY valid JSON (no markdown, no code fences) in this exact structure:
{{
  "must": [{{"name": "", "synonyms": ["", ""]}}],
  "nice": [{{"name": "", "synonyms": ["", ""]}}]
}}

JOB DESCRIPTION:
\"\"\"{jd_text[:MAX_JD_CHARS]}\"\"\""""


def build_profile_prompt(resume_text: str) -> str:
    """Structured resume profile: contact, skills, education, years."""
    return f"""Extract a clean JSON RESUME PROFILE from the following resume text. Be concise but complete.

Respond with ONLY valid JSON (no markdown, no code fences) in this exact structure:
{{
  "name": "",
  "email": "",
  "phone": "",
  "location": "",
  "headline": "",
  "summary": "",
  "skills": ["..."],
  "education": [{{"degree": "", "field": "", "institution": ""}}],
  "yearsExperience": 0
}}

RESUME:
\"\"\"{resume_text[:MAX_RESUME_CHARS]}\"\"\""""


def build_grading_prompt(jd_text: str, resume_text: str) -> str:
    """Recruiter-style grading with evidence-based strengths and questions."""
    return f"""You are a senior recruiter assessing a candidate vs a JOB DESCRIPTION.
Think step-by-step like a human reviewer. Use evidence from the resume.

SCORING RUBRIC (follow strictly):
- 0-20:  No relevant match. Resume is for a completely different field.
- 20-40: Weak match. Some transferable skills but major gaps in core requirements.
- 40-60: Moderate match. Meets some key requirements but missing several important ones.
- 60-80: Strong match. Meets most requirements with minor gaps.
- 80-100: Exceptional match. Meets or exceeds nearly all requirements.

Respond with ONLY valid JSON (no markdown, no code fences) in this exact structure:
{{
  "score": <integer 0-100>,
  "matchedSkills": ["..."],
  "missingSkills": ["..."],
  "strengths": [<3-5 specific strengths with evidence from resume>],
  "weaknesses": [<3-5 specific gaps with reference to JD requirements>],
  "yearsExperienceEstimate": 0,
  "educationSummary": "",
  "questions": [<3-6 interview questions probing the gaps>]
}}

JOB DESCRIPTION:
\"\"\"{jd_text[:MAX_JD_CHARS]}\"\"\"

RESUME:
\"\"\"{resume_text[:MAX_RESUME_CHARS]}\"\"\""""


def build_questions_prompt(job: JobRequirement, candidates: list[CandidateResult]) -> str:
    """Tailored interview questions for a shortlist of screened candidates."""
    shortlist = [
        {
            "id": c.id,
            "name": c.name,
            "matchScore": c.match_score,
            "skills": c.skills[:15],
            "gaps": c.missing_requirements[:8],
            "yearsExperience": c.years_experience,
        }
        for c in candidates
    ]
    return f"""You are preparing interviews for a hiring panel.
For each candidate below write 4-6 interview questions that probe their gaps
against the role and verify their claimed strengths.

ROLE: {job.title}
JOB DESCRIPTION:
\"\"\"{job.description[:MAX_JD_CHARS]}\"\"\"

CANDIDATES:
{json.dumps(shortlist, indent=2)}

Respond with ONLY valid JSON (no markdown, no code fences) in this exact structure:
{{
  "questions": {{"<candidate id>": ["..."]}}
}}"""
