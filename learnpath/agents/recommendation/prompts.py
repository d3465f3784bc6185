"""
Recommendation Prompt Templates

Contains the system prompt and user prompt builder for the learning
recommendation pipeline.

Architecture:
- Pattern: single LLM call, JSON parsed from free-form text
- Model: Gemini (configurable via GEMINI_MODEL)
- Output: JSON array of exactly six records requested in the prompt

Prompt Engineering Pattern:
- System prompt defines the role only
- User prompt carries the profile, link rules and output contract
- XML tags separate profile data from instructions
"""

from learnpath.schemas.recommendations import StudentProfile
from learnpath.utils.constants import (
    ACADEMIC_QUERY_SUFFIX,
    ACADEMIC_TYPE,
    EXTRACURRICULAR_QUERY_SUFFIX,
    EXTRACURRICULAR_TYPE,
    RECOMMENDATION_COUNT,
    SEARCH_BASE_URL,
)

# =============================================================================
# SYSTEM PROMPT
# =============================================================================

RECOMMENDATION_SYSTEM_PROMPT = """You are an AI learning assistant for students.

<role>
You analyze a student's self-reported profile and suggest concrete ways to grow:
- Academic courses and learning resources that fit their interests and goals
- Extracurricular activities (workshops, events, volunteering) that build skills
</role>

<output_format>
Return ONLY a JSON array. No markdown, no explanations before or after it.
</output_format>"""


# =============================================================================
# USER PROMPT BUILDER
# =============================================================================

def build_recommendation_user_prompt(profile: StudentProfile) -> str:
    """
    Build the user prompt for one recommendation request.

    The prompt embeds the four profile fields verbatim and spells out the
    output contract: exactly six entries (three Academic, three
    Extracurricular) with title, type, description and link, where every
    link is a Google search URL built from one of two fixed templates.

    Args:
        profile: The student's four-field profile

    Returns:
        str: Formatted user prompt ready to be sent to Gemini
    """
    half = RECOMMENDATION_COUNT // 2
    academic_template = f"{SEARCH_BASE_URL}[TOPIC]{ACADEMIC_QUERY_SUFFIX}"
    extracurricular_template = f"{SEARCH_BASE_URL}[TOPIC]{EXTRACURRICULAR_QUERY_SUFFIX}"

    return f"""Analyze this student profile and provide {RECOMMENDATION_COUNT} specific recommendations:
{half} for academic courses or resources, and {half} for extracurricular activities.

<student_profile>
Interests: {profile.interests}
Academic Performance: {profile.performance}
Career Aspirations: {profile.career_aspirations}
Skill-building Needs: {profile.skill_building_needs}
</student_profile>

<link_rules>
1. For academic resources, use Google search links in this format:
   "{academic_template}"
2. For extracurricular activities, use Google search links in this format:
   "{extracurricular_template}"
3. Replace [TOPIC] with relevant keywords from the recommendation title, joined with '+'
4. NEVER include direct course or event links (they may expire)
</link_rules>

<output_contract>
Return ONLY a JSON array with exactly {RECOMMENDATION_COUNT} objects, each containing
'title', 'type', 'description' and 'link'.
- 'type' is "{ACADEMIC_TYPE}" for the first {half} entries and "{EXTRACURRICULAR_TYPE}" for the last {half}
- 'description' is one or two sentences addressed to the student
</output_contract>

<example>
[
  {{
    "title": "Cybersecurity Fundamentals",
    "type": "{ACADEMIC_TYPE}",
    "description": "Learn essential cybersecurity concepts and practices",
    "link": "{SEARCH_BASE_URL}Cybersecurity+Fundamentals{ACADEMIC_QUERY_SUFFIX}"
  }},
  {{
    "title": "Coding Bootcamps",
    "type": "{EXTRACURRICULAR_TYPE}",
    "description": "Find intensive programming workshops in your area",
    "link": "{SEARCH_BASE_URL}Coding+Bootcamps{EXTRACURRICULAR_QUERY_SUFFIX}"
  }}
]
</example>"""
