import re

from app.utils.slug import generate_slug, random_suffix, slugify

SLUG_RE = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*-[0-9a-z]{6}$")


def test_slugify_normalizes_title():
    assert slugify("Best Cat Photo 2024") == "best-cat-photo-2024"
    assert slugify("  --Hello,   World!!  ") == "hello-world"
    assert slugify("Café & Crème") == "caf-cr-me"


def test_slugify_falls_back_when_nothing_is_left():
    assert slugify("!!!") == "contest"
    assert slugify("") == "contest"


def test_generate_slug_shape():
    for title in ("Best Cat Photo 2024", "a", "Top 10 -- Dogs", "???", "MiXeD CaSe"):
        assert SLUG_RE.match(generate_slug(title)), title


def test_generate_slug_prefix_is_deterministic():
    slug = generate_slug("Best Cat Photo 2024")
    assert slug.startswith("best-cat-photo-2024-")


def test_generate_slug_suffix_is_fresh():
    slugs = {generate_slug("Same Title") for _ in range(20)}
    assert len(slugs) > 1


def test_random_suffix_length():
    assert len(random_suffix(10)) == 10
