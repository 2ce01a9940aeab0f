"""Render a single recipe for sharing.

Plain text and HTML share one section order: title, category, difficulty,
cooking time, (prep time, HTML only), servings, ingredients, instructions,
notes, tags, footer. A missing or empty field drops its whole section.
"""
import json
from enum import Enum
from typing import Any, Dict, List

from jinja2 import Environment, PackageLoader, select_autoescape
from markupsafe import Markup, escape

from .models import as_utc

FOOTER = "📱 Shared from Recipe Circle"
UNTITLED = "Untitled Recipe"


class ExportTarget(str, Enum):
    plain_text = "plainText"
    html = "html"
    structured_record = "structuredRecord"


class ExportFormat(str, Enum):
    text = "text"
    json = "json"
    pdf = "pdf"


def nl2br(value: str) -> Markup:
    return Markup("<br>").join(escape(line) for line in value.split("\n"))


TEMPLATES = Environment(
    loader=PackageLoader("recipe_circle", "templates"),
    autoescape=select_autoescape(),
)
TEMPLATES.filters["nl2br"] = nl2br


def _positive(value) -> bool:
    return (value or 0) > 0


def _epoch(value) -> float:
    value = as_utc(value)
    return value.timestamp() if value is not None else 0


def plain_text(recipe) -> str:
    text = f"🍽️ {recipe.title or UNTITLED}\n\n"

    if recipe.category is not None:
        text += f"📂 Category: {recipe.category}\n"
    if recipe.difficulty is not None:
        text += f"⭐ Difficulty: {recipe.difficulty}\n"
    if _positive(recipe.cooking_time):
        text += f"⏱️ Cooking Time: {recipe.cooking_time} minutes\n"
    if _positive(recipe.servings):
        text += f"👥 Servings: {recipe.servings}\n"
    text += "\n"

    if recipe.ingredients:
        text += f"🥘 INGREDIENTS:\n{recipe.ingredients}\n\n"
    if recipe.instructions:
        text += f"👨‍🍳 INSTRUCTIONS:\n{recipe.instructions}\n\n"
    if recipe.notes:
        text += f"📝 NOTES:\n{recipe.notes}\n\n"
    if recipe.tags:
        text += f"🏷️ TAGS: {recipe.tags}\n\n"

    return text + FOOTER


def html(recipe) -> str:
    meta: List[str] = []
    if recipe.category is not None:
        meta.append(f"📂 {recipe.category}")
    if recipe.difficulty is not None:
        meta.append(f"⭐ {recipe.difficulty}")
    if _positive(recipe.cooking_time):
        meta.append(f"⏱️ {recipe.cooking_time} min")
    if _positive(recipe.prep_time):
        meta.append(f"🔪 Prep: {recipe.prep_time} min")
    if _positive(recipe.servings):
        meta.append(f"👥 {recipe.servings} servings")

    sections = []
    for heading, body, multiline in (
        ("🥘 Ingredients", recipe.ingredients, True),
        ("👨‍🍳 Instructions", recipe.instructions, True),
        ("📝 Notes", recipe.notes, True),
        ("🏷️ Tags", recipe.tags, False),
    ):
        if body:
            sections.append(
                {"heading": heading, "body": body, "multiline": multiline}
            )

    return TEMPLATES.get_template("recipe_email.html").render(
        title=recipe.title or UNTITLED,
        meta=meta,
        sections=sections,
        footer=FOOTER,
    )


def structured_record(recipe) -> Dict[str, Any]:
    return {
        "title": recipe.title or "",
        "ingredients": recipe.ingredients or "",
        "instructions": recipe.instructions or "",
        "category": recipe.category or "",
        "difficulty": recipe.difficulty or "",
        "cookingTime": recipe.cooking_time or 0,
        "prepTime": recipe.prep_time or 0,
        "servings": recipe.servings or 0,
        "notes": recipe.notes or "",
        "tags": recipe.tags or "",
        "dateCreated": _epoch(recipe.date_created),
        "dateModified": _epoch(recipe.date_modified),
    }


def to_json(recipe) -> str:
    return json.dumps(structured_record(recipe), indent=2, ensure_ascii=False)


def format_recipe(recipe, target: ExportTarget) -> str:
    """Render `recipe` for `target`; the structured record comes back as JSON."""
    target = ExportTarget(target)
    if target == ExportTarget.plain_text:
        return plain_text(recipe)
    if target == ExportTarget.html:
        return html(recipe)
    return to_json(recipe)


def sms_text(recipe) -> str:
    """Compact variant for text messages: one meta line, no notes or tags."""
    text = f"🍽️ {recipe.title or 'Recipe'}\n\n"

    if recipe.category is not None:
        text += f"📂 {recipe.category}"
    if recipe.difficulty is not None:
        text += f" • {recipe.difficulty}"
    if _positive(recipe.cooking_time):
        text += f" • ⏱️ {recipe.cooking_time}min"
    if _positive(recipe.servings):
        text += f" • 👥 {recipe.servings} servings"
    text += "\n\n"

    if recipe.ingredients:
        text += f"🥘 INGREDIENTS:\n{recipe.ingredients}\n\n"
    if recipe.instructions:
        text += f"👨‍🍳 INSTRUCTIONS:\n{recipe.instructions}\n\n"

    return text + FOOTER


def email_subject(recipe) -> str:
    return f"Recipe: {recipe.title or 'Untitled'}"


def export_bytes(recipe, fmt: ExportFormat) -> bytes:
    fmt = ExportFormat(fmt)
    if fmt == ExportFormat.json:
        return to_json(recipe).encode("utf-8")
    # no PDF renderer; pdf falls back to the plain text body
    return plain_text(recipe).encode("utf-8")
