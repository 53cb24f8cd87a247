"""
hintlight/services/hint_prompt.py

Jinja2 prompt template for progressive problem hints.

The model plays a competitive-programming coach: it must guide, never solve.
Output format is fixed by the overlay parser (one hint per line, each line
starting with ``*``), so any change here must keep that contract.
"""

from jinja2 import Template

from hintlight.core.logging import get_logger
from hintlight.schemas.problem import ProblemInfo

logger = get_logger(__name__)

# Upper bound on statement characters sent to the model.
MAX_CONTENT_CHARS = 4000

HINT_PROMPT_TEMPLATE = """\
You are an expert competitive programming assistant.
Your task is to provide helpful hints for the following problem without \
giving away the solution or writing any code.
Use the provided problem statement to generate high-quality, relevant hints.

Please generate 3 to 5 short, incremental hints. Start with a very high-level \
concept and gradually become more specific with each hint. The goal is to guide \
the user to discover the solution on their own. Do NOT provide the full \
solution and do NOT write any code.

Format your response in Markdown, with each hint on a new line starting with \
an asterisk (*).

**Problem Details:**
- **Platform:** {{ platform }}
- **Title:** {{ title }}
- **Difficulty:** {{ difficulty or "Not specified" }}
- **Tags:** {{ tags | join(", ") if tags else "Not specified" }}

**Problem Statement:**
{{ content or "Not available" }}
"""

_compiled_template = Template(HINT_PROMPT_TEMPLATE)


def truncate_content(content: str | None) -> str:
    return (content or "")[:MAX_CONTENT_CHARS]


def compile_hint_prompt(problem: ProblemInfo) -> str:
    """Render the hint prompt for a scraped problem.

    The statement is cut to ``MAX_CONTENT_CHARS`` without any marker; the
    model is not told that text is missing.
    """
    content = truncate_content(problem.content)
    rendered = _compiled_template.render(
        platform=problem.platform.value,
        title=problem.title,
        difficulty=problem.difficulty,
        tags=list(problem.tags),
        content=content,
    )

    logger.debug(
        "hint_prompt_compiled",
        prompt_length=len(rendered),
        content_length=len(problem.content),
        truncated=len(problem.content) > MAX_CONTENT_CHARS,
        num_tags=len(problem.tags),
    )

    return rendered
