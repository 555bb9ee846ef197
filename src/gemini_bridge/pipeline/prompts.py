"""Prompt texts for the reasoning and structuring calls."""

from __future__ import annotations

from gemini_bridge.core.types import PropertyDescriptor

FEASIBILITY_INSTRUCTIONS = (
    "Final response must start with YES or NO, followed by a ':' and then any "
    "additional explanation. Keep it short and concise! If the answer is yes, "
    "no additional explanation is required."
)
PROPERTY_EXTRACTION_INSTRUCTIONS = "Final response must be only the requested value."
VALUE_EXTRACTION_INSTRUCTIONS = (
    "Final response must be only the requested information. Nothing more!"
)
STRUCTURING_INSTRUCTIONS = (
    "You are an agent who converts text to structured json. Your only job is to "
    "convert the user prompt in a json based on the provided schema."
)


def _context(text: str, query: str) -> str:
    return (
        f"Given this text block: <input_text_block>{text}</input_text_block> "
        f"AND In the context of the following query <query>{query}</query>"
    )


def property_feasibility_prompt(
    text: str, query: str, descriptor: PropertyDescriptor
) -> str:
    return (
        f"{_context(text, query)} Do we have enough information to infer this "
        f"property <property>{descriptor.full_description}</property> as part of "
        "fulfilling the presented query?"
    )


def value_feasibility_prompt(text: str, query: str, data_type: str) -> str:
    return (
        f"{_context(text, query)} Do we have enough information to infer this "
        "information, in the shape of the following data type "
        f"<dataType>{data_type}</dataType> as part of fulfilling the presented query?"
    )


def property_extraction_prompt(
    text: str, query: str, descriptor: PropertyDescriptor
) -> str:
    return (
        f"{_context(text, query)} Extract the value of this property "
        f"<property>{descriptor.full_description}</property> as part of fulfilling "
        "the presented query."
    )


def value_extraction_prompt(text: str, query: str, data_type: str) -> str:
    return (
        f"{_context(text, query)} Extract the information in the shape of the "
        f"following dataType <dataType>{data_type}</dataType> as part of "
        "fulfilling the presented query."
    )


def structuring_prompt(corpus: str, schema: str) -> str:
    """Combine the extracted corpus with the schema the output must follow."""
    return (
        f"Respond with valid JSON that matches this structure:\n{schema}\n\n"
        f"Extracted information:\n{corpus}"
    )
