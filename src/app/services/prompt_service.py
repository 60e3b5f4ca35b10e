"""Service layer – instruction text sent with every image."""

from __future__ import annotations

from src.app.config import SchemaVersion

NOT_A_SNAKE_CLAUSE = (
    "If the image does not contain a snake, respond with a simple message stating that."
)

BASIC_PROMPT = (
    "Analyze this snake image and provide the following information:\n"
    "1. Species identification (include confidence level from 0-100)\n"
    "2. Whether it's venomous\n"
    "3. Key identifying features\n"
    "4. Safety concerns\n"
    "Format the response as a JSON object with these fields: species, "
    "confidence (number), venomous (true/false), features, safety_concerns. "
    + NOT_A_SNAKE_CLAUSE
)

EXTENDED_PROMPT = (
    "Analyze this snake image and provide the following information:\n"
    "1. Species identification (include confidence level from 0-100)\n"
    "2. Whether it's venomous\n"
    "3. Key identifying features\n"
    "4. Safety concerns\n"
    "5. Typical habitats and locations\n"
    "6. First aid steps if bitten (provide as an array of clear, complete steps "
    "very specific for the snake in the image)\n"
    "7. Key facts about this species (provide 5 interesting facts)\n"
    "8. Top 3 sources with their URLs\n"
    "Format the response as a JSON object with these fields: species, "
    "confidence (number), venomous (true/false), features, safety_concerns, "
    "habitat, first_aid_steps (array of strings), interesting_facts (array of 5 "
    "strings), sources (array of objects with name and url properties). "
    + NOT_A_SNAKE_CLAUSE
)

PROMPTS: dict[SchemaVersion, str] = {
    "basic": BASIC_PROMPT,
    "extended": EXTENDED_PROMPT,
}


def build_messages(schema_version: SchemaVersion, image_b64: str, mime_type: str) -> list[dict]:
    """Return the single user message: instruction text plus the inline image."""
    return [
        {
            "role": "user",
            "content": [
                {"type": "text", "text": PROMPTS[schema_version]},
                {
                    "type": "image_url",
                    "image_url": {"url": f"data:{mime_type};base64,{image_b64}"},
                },
            ],
        }
    ]
