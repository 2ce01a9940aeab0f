# flake8: noqa
import sys
from pathlib import Path

# Ensure project root is on sys.path so `recipe_circle` can be imported when tests are run
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))  # noqa: E402

import json
from datetime import datetime, timezone

import pytest

from recipe_circle import export, models
from recipe_circle.export import ExportFormat, ExportTarget


def make(**kwargs):
    kwargs.setdefault("cooking_time", 0)
    kwargs.setdefault("prep_time", 0)
    kwargs.setdefault("servings", 1)
    return models.Recipe(id=models.new_id(), **kwargs)


@pytest.fixture
def cookies():
    return make(
        title="Chocolate Chip Cookies",
        category="Dessert",
        difficulty="Easy",
        cooking_time=12,
        prep_time=15,
        servings=24,
        ingredients="2 cups flour\n1 cup butter",
        instructions="1. Mix\n2. Bake",
        notes="Chill the dough",
        tags="baking, sweet",
        date_created=datetime(2024, 1, 1, tzinfo=timezone.utc),
        date_modified=datetime(2024, 1, 2, tzinfo=timezone.utc),
    )


def test_plain_text_full(cookies):
    assert export.plain_text(cookies) == (
        "🍽️ Chocolate Chip Cookies\n\n"
        "📂 Category: Dessert\n"
        "⭐ Difficulty: Easy\n"
        "⏱️ Cooking Time: 12 minutes\n"
        "👥 Servings: 24\n"
        "\n"
        "🥘 INGREDIENTS:\n2 cups flour\n1 cup butter\n\n"
        "👨‍🍳 INSTRUCTIONS:\n1. Mix\n2. Bake\n\n"
        "📝 NOTES:\nChill the dough\n\n"
        "🏷️ TAGS: baking, sweet\n\n"
        "📱 Shared from Recipe Circle"
    )


def test_plain_text_omits_absent_sections():
    text = export.plain_text(make(title="Toast", notes="", servings=0))
    assert text == "🍽️ Toast\n\n\n📱 Shared from Recipe Circle"
    assert "NOTES" not in text
    assert "Cooking Time" not in text
    assert "Servings" not in text


def test_plain_text_untitled():
    assert export.plain_text(make()).startswith("🍽️ Untitled Recipe\n\n")


def test_plain_text_has_no_prep_time(cookies):
    assert "Prep" not in export.plain_text(cookies)


def test_html_sections_in_order(cookies):
    html = export.html(cookies)
    markers = [
        "Chocolate Chip Cookies",
        "📂 Dessert",
        "⭐ Easy",
        "⏱️ 12 min",
        "🔪 Prep: 15 min",
        "👥 24 servings",
        "🥘 Ingredients",
        "👨‍🍳 Instructions",
        "📝 Notes",
        "🏷️ Tags",
        "📱 Shared from Recipe Circle",
    ]
    positions = [html.index(m) for m in markers]
    assert positions == sorted(positions)
    assert "2 cups flour<br>1 cup butter" in html
    assert "1. Mix<br>2. Bake" in html


def test_html_line_breaks_in_notes_but_not_tags():
    html = export.html(make(title="Bread", notes="Proof overnight\nBake hot", tags="baking\nyeast"))
    assert "Proof overnight<br>Bake hot" in html
    assert "baking\nyeast" in html
    assert "baking<br>yeast" not in html


def test_html_omits_empty_sections():
    html = export.html(make(title="Toast", ingredients="bread", notes=""))
    assert "Ingredients" in html
    assert "Instructions" not in html
    assert "Notes" not in html
    assert "Tags" not in html
    assert "Prep:" not in html


def test_html_escapes_text():
    html = export.html(make(title="Mac & <Cheese>", ingredients="<b>pasta</b>\ncheese"))
    assert "Mac &amp; &lt;Cheese&gt;" in html
    assert "&lt;b&gt;pasta&lt;/b&gt;<br>cheese" in html


def test_structured_record(cookies):
    record = export.structured_record(cookies)
    assert record == {
        "title": "Chocolate Chip Cookies",
        "ingredients": "2 cups flour\n1 cup butter",
        "instructions": "1. Mix\n2. Bake",
        "category": "Dessert",
        "difficulty": "Easy",
        "cookingTime": 12,
        "prepTime": 15,
        "servings": 24,
        "notes": "Chill the dough",
        "tags": "baking, sweet",
        "dateCreated": 1704067200.0,
        "dateModified": 1704153600.0,
    }


def test_structured_record_defaults():
    record = export.structured_record(models.Recipe(id=models.new_id()))
    assert record["title"] == ""
    assert record["difficulty"] == ""
    assert record["cookingTime"] == 0
    assert record["servings"] == 0
    assert record["dateCreated"] == 0
    assert record["dateModified"] == 0


def test_structured_record_treats_naive_dates_as_utc():
    record = export.structured_record(make(date_created=datetime(2024, 1, 1)))
    assert record["dateCreated"] == 1704067200.0


@pytest.mark.parametrize(
    "target,check",
    (
        (ExportTarget.plain_text, lambda out: out.startswith("🍽️")),
        ("html", lambda out: out.lstrip().startswith("<html>")),
        ("structuredRecord", lambda out: json.loads(out)["title"] == "Chocolate Chip Cookies"),
    ),
)
def test_format_recipe_dispatch(cookies, target, check):
    assert check(export.format_recipe(cookies, target))


def test_format_recipe_rejects_unknown_target(cookies):
    with pytest.raises(ValueError):
        export.format_recipe(cookies, "pdf")


def test_to_json_is_pretty_printed(cookies):
    out = export.to_json(cookies)
    assert out.startswith("{\n  ")
    assert json.loads(out)["prepTime"] == 15


def test_sms_text(cookies):
    assert export.sms_text(cookies) == (
        "🍽️ Chocolate Chip Cookies\n\n"
        "📂 Dessert • Easy • ⏱️ 12min • 👥 24 servings\n\n"
        "🥘 INGREDIENTS:\n2 cups flour\n1 cup butter\n\n"
        "👨‍🍳 INSTRUCTIONS:\n1. Mix\n2. Bake\n\n"
        "📱 Shared from Recipe Circle"
    )
    assert export.sms_text(make()).startswith("🍽️ Recipe\n\n")


def test_email_subject(cookies):
    assert export.email_subject(cookies) == "Recipe: Chocolate Chip Cookies"
    assert export.email_subject(make()) == "Recipe: Untitled"


def test_export_bytes(cookies):
    assert export.export_bytes(cookies, ExportFormat.text) == export.plain_text(cookies).encode("utf-8")
    assert export.export_bytes(cookies, "pdf") == export.plain_text(cookies).encode("utf-8")
    assert json.loads(export.export_bytes(cookies, "json"))["title"] == "Chocolate Chip Cookies"
