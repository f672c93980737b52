"""String case and inflection helpers used to derive plugin tokens.

Every function here is pure.  Hyphens, underscores and whitespace are all
treated as word separators, so ``my-plugin`` and ``my_plugin`` produce the
same snake, camel and studly forms.  ``kebab`` only splits on case changes
and whitespace.

Pluralization uses a small rule table (irregular nouns, uncountable nouns,
then suffix rules) applied to the last word only.  Words that already look
plural are returned unchanged, which keeps ``plural(plural(x)) == plural(x)``
for the vocabulary the stubs use.  Irregular nouns outside the table are
pluralized by the suffix rules and may come out wrong; that is accepted.
"""

from __future__ import annotations

import re


# ---------------------------------------------------------------------------
# Case transforms
# ---------------------------------------------------------------------------

_SEPARATORS = re.compile(r"[-_\s]+")


def snake(value: str) -> str:
    """Convert ``SomeThing``, ``some-thing`` or ``some thing`` to ``some_thing``."""
    s1 = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", value.strip())
    s2 = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s1)
    return _SEPARATORS.sub("_", s2).lower()


def kebab(value: str) -> str:
    """Convert ``SomeThing`` or ``some thing`` to ``some-thing``.

    Unlike the other transforms, underscores are kept: ``hello_world`` stays
    ``hello_world``.
    """
    s1 = re.sub(r"(.)([A-Z][a-z]+)", r"\1-\2", value.strip())
    s2 = re.sub(r"([a-z0-9])([A-Z])", r"\1-\2", s1)
    return re.sub(r"\s+", "-", s2).lower()


def upper_snake(value: str) -> str:
    """Convert ``some-thing`` to ``SOME_THING``."""
    return snake(value).upper()


def ucfirst(value: str) -> str:
    """Upper-case the first character and leave the rest untouched."""
    return value[:1].upper() + value[1:]


def studly(value: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``SomeThing``.

    Existing capitals inside a word are kept, so ``helloWorld`` stays
    ``HelloWorld``.
    """
    return "".join(ucfirst(word) for word in _SEPARATORS.split(value.strip()) if word)


def camel(value: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``someThing``."""
    pascal = studly(value)
    return pascal[:1].lower() + pascal[1:]


# ---------------------------------------------------------------------------
# Pluralization
# ---------------------------------------------------------------------------

IRREGULAR_PLURALS: dict[str, str] = {
    "person": "people",
    "man": "men",
    "woman": "women",
    "child": "children",
    "tooth": "teeth",
    "foot": "feet",
    "mouse": "mice",
    "goose": "geese",
    "ox": "oxen",
    "criterion": "criteria",
    "datum": "data",
    "medium": "media",
    "index": "indices",
    "matrix": "matrices",
    "vertex": "vertices",
    "quiz": "quizzes",
}

UNCOUNTABLE: frozenset[str] = frozenset({
    "audio",
    "equipment",
    "feedback",
    "fish",
    "information",
    "metadata",
    "money",
    "news",
    "series",
    "sheep",
    "species",
    "software",
    "staff",
    "traffic",
})

_F_TO_VES: frozenset[str] = frozenset({
    "calf", "elf", "half", "knife", "leaf", "life", "loaf", "self",
    "sheaf", "shelf", "thief", "wife", "wolf",
})

_O_TO_OES: frozenset[str] = frozenset({
    "buffalo", "echo", "hero", "potato", "tomato", "torpedo", "veto",
})

_IRREGULAR_PLURAL_FORMS: frozenset[str] = frozenset(IRREGULAR_PLURALS.values())

_TRAILING_WORD = re.compile(r"([A-Za-z]+)$")


def _looks_plural(word: str) -> bool:
    if word in _IRREGULAR_PLURAL_FORMS:
        return True
    if word.endswith(("ss", "us", "is")):
        return False
    return word.endswith("s") and len(word) > 2


def pluralize_word(word: str) -> str:
    """Return the plural of a single lower-case English word."""
    lower = word.lower()
    if lower in UNCOUNTABLE or _looks_plural(lower):
        return lower
    if lower in IRREGULAR_PLURALS:
        return IRREGULAR_PLURALS[lower]
    if lower in _F_TO_VES:
        stem = lower[:-2] if lower.endswith("fe") else lower[:-1]
        return stem + "ves"
    if lower in _O_TO_OES:
        return lower + "es"
    if lower.endswith("is"):
        return lower[:-2] + "es"
    if lower.endswith("y") and len(lower) > 1 and lower[-2] not in "aeiou":
        return lower[:-1] + "ies"
    if lower.endswith(("s", "sh", "ch", "x", "z")):
        return lower + "es"
    return lower + "s"


def plural(value: str) -> str:
    """Pluralize the last word of *value*, keeping everything before it.

    ``hello_world`` becomes ``hello_worlds`` and ``blog-category`` becomes
    ``blog-categories``.  A value that does not end in a letter gets a plain
    ``s`` suffix.
    """
    match = _TRAILING_WORD.search(value)
    if match is None:
        return value + "s" if value else value

    word = match.group(1)
    result = pluralize_word(word)
    if word.isupper() and len(word) > 1:
        result = result.upper()
    elif word[:1].isupper():
        result = ucfirst(result)
    return value[: match.start(1)] + result
