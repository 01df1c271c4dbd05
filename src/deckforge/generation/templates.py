"""Prompt templates for deckforge content generation.

Templates are plain ``str.format`` strings; ``builder`` functions below fill
them in and attach reference material.
"""

from __future__ import annotations

from deckforge.generation.protocol import Reference

OUTLINE_PROMPT = """You are an expert presentation creator. Generate a structured \
outline for a presentation about "{subject}". The outline should consist of \
several main topics, and each main topic should have a few slides.

Return a JSON object with a "topics" array. Each topic has a "title" and a \
"slides" array; each slide has a "title". Do not include any other properties."""

REFERENCES_HEADER = "\n\nUse the following reference material to inform the outline:\n"

REFERENCE_BLOCK = "\n--- Reference: {name} ---\n{content}\n--- End Reference ---"

TRUNCATION_MARKER = "... [Content Truncated]"

BULLETS_PROMPT = """For a presentation titled "{deck_title}", generate 3-5 concise \
bullet points for a slide with the title "{slide_title}". The bullet points \
should be short and to the point.

Return a JSON object with a "bullets" array of strings, one string per bullet \
point. Do not use markdown formatting."""

NOTES_PROMPT = """You are a presentation coach. For a presentation titled \
"{deck_title}", write speaker notes for a slide titled "{slide_title}".

The content on the slide consists of these bullet points:
{bullet_lines}

The speaker notes should elaborate on the bullet points, provide context, and \
suggest a transition to the next slide. Use a conversational and engaging \
tone and write a few paragraphs. Return only the notes as plain text, without \
any markdown or titles."""


def truncate_reference(content: str, limit: int) -> str:
    """Cut ``content`` to ``limit`` characters, marking the cut."""
    if len(content) <= limit:
        return content
    return f"{content[:limit]}{TRUNCATION_MARKER}"


def build_outline_prompt(
    subject: str, references: list[Reference], *, char_limit: int
) -> str:
    """Build the outline prompt with each reference truncated to ``char_limit``."""
    prompt = OUTLINE_PROMPT.format(subject=subject)
    if references:
        prompt += REFERENCES_HEADER
        for ref in references:
            prompt += REFERENCE_BLOCK.format(
                name=ref.name, content=truncate_reference(ref.content, char_limit)
            )
    return prompt


def build_bullets_prompt(slide_title: str, deck_title: str) -> str:
    return BULLETS_PROMPT.format(slide_title=slide_title, deck_title=deck_title)


def build_notes_prompt(slide_title: str, bullets: list[str], deck_title: str) -> str:
    bullet_lines = "\n".join(f"- {bullet}" for bullet in bullets)
    return NOTES_PROMPT.format(
        slide_title=slide_title,
        deck_title=deck_title,
        bullet_lines=bullet_lines,
    )
