"""Grounding prompt assembly for page questions."""

SYSTEM_INSTRUCTION = (
    "You are an assistant that reads the provided webpage contents and "
    "answers the user's question based on that content."
)

CONTEXT_LABEL = "Webpage content (context):"

SECTION_SEPARATOR = "----"

QUESTION_LABEL = "User question: "

ANSWER_INSTRUCTION = (
    "Answer concisely and cite (briefly) if the content contains specific "
    "facts. If the information is not present in the content, say you "
    "couldn't find it in the page."
)


def compose_prompt(context: str, question: str) -> str:
    """
    Build the prompt sent to the model.

    Sections are always emitted in the same order and joined by a blank
    line. Context and question are embedded verbatim; callers are expected
    to have checked that both are present.

    Args:
        context: Extracted (and already truncated) page text
        question: The user's question

    Returns:
        The full prompt text
    """
    sections = [
        SYSTEM_INSTRUCTION,
        CONTEXT_LABEL,
        context,
        SECTION_SEPARATOR,
        f"{QUESTION_LABEL}{question}",
        ANSWER_INSTRUCTION,
    ]
    return "\n\n".join(sections)
