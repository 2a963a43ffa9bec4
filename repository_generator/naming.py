"""
Name helpers used to derive class, module and instance names from a model name.
"""

import re

_UNCOUNTABLE = {
    "advice",
    "audio",
    "data",
    "deer",
    "equipment",
    "evidence",
    "feedback",
    "fish",
    "furniture",
    "hardware",
    "information",
    "knowledge",
    "media",
    "metadata",
    "moose",
    "money",
    "music",
    "news",
    "police",
    "rice",
    "series",
    "sheep",
    "software",
    "species",
    "staff",
    "traffic",
}

_IRREGULAR = {
    "alias": "aliases",
    "analysis": "analyses",
    "cactus": "cacti",
    "child": "children",
    "crisis": "crises",
    "criterion": "criteria",
    "echo": "echoes",
    "foot": "feet",
    "goose": "geese",
    "half": "halves",
    "hero": "heroes",
    "index": "indices",
    "knife": "knives",
    "leaf": "leaves",
    "life": "lives",
    "man": "men",
    "matrix": "matrices",
    "mouse": "mice",
    "ox": "oxen",
    "person": "people",
    "potato": "potatoes",
    "quiz": "quizzes",
    "radius": "radii",
    "shelf": "shelves",
    "thesis": "theses",
    "tomato": "tomatoes",
    "tooth": "teeth",
    "vertex": "vertices",
    "wife": "wives",
    "wolf": "wolves",
    "woman": "women",
}

# The final word of a PascalCase or snake_case name, e.g. "Post" in "BlogPost"
_LAST_WORD = re.compile(r"(?:[A-Z]+|[A-Z]?[a-z0-9]+)$")


def studly(name: str) -> str:
    """Convert to StudlyCase: "blog_post", "blog-post" and "blogPost" become "BlogPost"."""
    parts = re.split(r"[-_\s]+", name.strip())
    return "".join(p[0].upper() + p[1:] for p in parts if p)


def snake_case(name: str) -> str:
    """Convert to snake_case: "PostsRepositoryContract" becomes "posts_repository_contract"."""
    s1 = re.sub("(.)([A-Z][a-z]+)", r"\1_\2", name)
    return re.sub("([a-z0-9])([A-Z])", r"\1_\2", s1).lower()


def _match_case(word: str, template: str) -> str:
    if len(template) > 1 and template.isupper():
        return word.upper()
    if template[:1].isupper():
        return word[:1].upper() + word[1:]
    return word


def _suffix(word: str, suffix: str) -> str:
    return suffix.upper() if len(word) > 1 and word.isupper() else suffix


def _pluralize_word(word: str) -> str:
    lower = word.lower()
    if lower in _UNCOUNTABLE:
        return word
    if lower in _IRREGULAR:
        return _match_case(_IRREGULAR[lower], word)
    if lower.endswith("y") and len(lower) > 1 and lower[-2] not in "aeiou":
        return word[:-1] + _suffix(word, "ies")
    if lower.endswith(("s", "x", "z", "ch", "sh")):
        return word + _suffix(word, "es")
    return word + _suffix(word, "s")


def pluralize(name: str) -> str:
    """
    English plural of a (possibly compound) name, pluralising only the last word.

    "Post" -> "Posts", "BlogCategory" -> "BlogCategories", "Person" -> "People",
    "Series" -> "Series".
    """
    if not name:
        return name
    match = _LAST_WORD.search(name)
    last_word = match.group(0) if match else ""
    if not last_word:
        return name
    head = name[: len(name) - len(last_word)]
    return head + _pluralize_word(last_word)
