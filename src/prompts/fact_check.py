"""Prompts for the fact-check call.

One call per statement. The model is told to answer in JSON with three
fields:

  grade     — one of the five labels, least to most true:
              Absolutely False, Mostly False, Neutral, Mostly True, Truth
  reasoning — why it chose that grade
  sources   — list of URLs or short citations

Models drift from this (prose around the JSON, "Grade: ..." lines instead
of JSON), which is why src.llm.parser accepts several shapes. Keeping the
prompt strict still makes the clean JSON path the common case.

The user prompt is a template with a {statement} placeholder.
"""

from src.schemas.verdict import Grade

GRADE_CHOICES = ", ".join(f"'{g.value}'" for g in Grade)


FACT_CHECK_SYSTEM = (
    "You are a fact-checking assistant. Analyze the provided text and "
    "determine if it is accurate. Provide a detailed response explaining "
    "your findings, including any potential inaccuracies or areas that need "
    "verification. You MUST respond in valid JSON format. "
    "The 'grade' field MUST be a string."
)


FACT_CHECK_USER = (
    'Fact-check the following statement: "{statement}". '
    "Provide the response in JSON format with the following fields: "
    '"grade": (string, choose from ' + GRADE_CHOICES + "), "
    '"reasoning" (string), and "sources" (array of strings).'
)


def build_user_prompt(statement: str) -> str:
    # str.replace, not str.format: user text may contain braces
    return FACT_CHECK_USER.replace("{statement}", statement)
