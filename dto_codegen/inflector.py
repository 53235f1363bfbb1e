"""
String inflection helpers used for DTO, field and accessor names.
"""

import re

_SINGULAR_RULES: list[tuple[re.Pattern, str]] = [
    (re.compile(r"(s)tatuses$", re.IGNORECASE), r"\1tatus"),
    (re.compile(r"^(.*)(menu)s$", re.IGNORECASE), r"\1\2"),
    (re.compile(r"(quiz)zes$", re.IGNORECASE), r"\1"),
    (re.compile(r"(matr)ices$", re.IGNORECASE), r"\1ix"),
    (re.compile(r"(vert|ind)ices$", re.IGNORECASE), r"\1ex"),
    (re.compile(r"^(ox)en", re.IGNORECASE), r"\1"),
    (re.compile(r"(alias|lens)(es)*$", re.IGNORECASE), r"\1"),
    (re.compile(r"(alumn|bacill|cact|foc|fung|nucle|radi|stimul|syllab|termin|viri?)i$", re.IGNORECASE), r"\1us"),
    (re.compile(r"([ftw]ax)es", re.IGNORECASE), r"\1"),
    (re.compile(r"(cris|ax|test)es$", re.IGNORECASE), r"\1is"),
    (re.compile(r"(shoe)s$", re.IGNORECASE), r"\1"),
    (re.compile(r"(o)es$", re.IGNORECASE), r"\1"),
    (re.compile(r"ouses$"), "ouse"),
    (re.compile(r"([^a])uses$"), r"\1us"),
    (re.compile(r"([m|l])ice$", re.IGNORECASE), r"\1ouse"),
    (re.compile(r"(x|ch|ss|sh)es$", re.IGNORECASE), r"\1"),
    (re.compile(r"(m)ovies$", re.IGNORECASE), r"\1ovie"),
    (re.compile(r"(s)eries$", re.IGNORECASE), r"\1eries"),
    (re.compile(r"([^aeiouy]|qu)ies$", re.IGNORECASE), r"\1y"),
    (re.compile(r"([lr])ves$", re.IGNORECASE), r"\1f"),
    (re.compile(r"(tive)s$", re.IGNORECASE), r"\1"),
    (re.compile(r"(hive)s$", re.IGNORECASE), r"\1"),
    (re.compile(r"(drive)s$", re.IGNORECASE), r"\1"),
    (re.compile(r"([^fo])ves$", re.IGNORECASE), r"\1fe"),
    (re.compile(r"(^analy)ses$", re.IGNORECASE), r"\1sis"),
    (re.compile(r"(analy|diagno|parenthe|progno|synop|the|empha|cri|ne)ses$", re.IGNORECASE), r"\1sis"),
    (re.compile(r"([ti])a$", re.IGNORECASE), r"\1um"),
    (re.compile(r"(p)eople$", re.IGNORECASE), r"\1erson"),
    (re.compile(r"(m)en$", re.IGNORECASE), r"\1an"),
    (re.compile(r"(c)hildren$", re.IGNORECASE), r"\1hild"),
    (re.compile(r"(n)ews$", re.IGNORECASE), r"\1ews"),
    (re.compile(r"eaus$"), "eau"),
    (re.compile(r"^(.*us)$"), r"\1"),
    (re.compile(r"s$", re.IGNORECASE), ""),
]

_UNINFLECTED = re.compile(
    r"^(.*[nrlm]ese|.*data|.*deer|.*fish|.*measles|.*media|.*news|.*offspring|.*pox|.*series|.*sheep|.*species|.*swiss)$",
    re.IGNORECASE,
)

_IRREGULAR = {
    "foes": "foe",
    "waves": "wave",
    "curves": "curve",
    "employees": "employee",
    "slaves": "slave",
    "moves": "move",
    "feet": "foot",
    "geese": "goose",
    "teeth": "tooth",
    "criteria": "criterion",
}


def _ucfirst(text: str) -> str:
    return text[:1].upper() + text[1:]


def camelize(text: str) -> str:
    """Convert underscored or dashed text to PascalCase.

    Only the first letter of each word is touched, so ``"userName"``
    becomes ``"UserName"`` and ``"user_name"`` becomes ``"UserName"``.
    """
    normalized = text.replace("_", " ").replace("-", " ")
    return "".join(_ucfirst(word) for word in normalized.split(" "))


def underscore(text: str) -> str:
    """Convert CamelCase or camelCase text to snake_case.

    Examples:
        "UserName" -> "user_name"
        "HTTPClient" -> "http_client"
    """
    result = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", text)
    result = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", result)
    return result.lower()


def variable(text: str) -> str:
    """Convert text to camelCase (first letter lowercase)."""
    camelized = camelize(text)
    return camelized[:1].lower() + camelized[1:]


def dasherize(text: str) -> str:
    return underscore(text).replace("_", "-")


def singularize(word: str) -> str:
    """Return the singular form of a plural English word.

    Words that cannot be singularized (uninflected words such as ``"data"``
    or unknown shapes) are returned unchanged, which callers use to detect
    a failed singularization.
    """
    if not word:
        return word

    if _UNINFLECTED.match(word):
        return word

    lower = word.lower()
    if lower in _IRREGULAR:
        result = _IRREGULAR[lower]
        if word[0].isupper():
            result = _ucfirst(result)
        return result

    for pattern, replacement in _SINGULAR_RULES:
        if pattern.search(word):
            return pattern.sub(replacement, word)

    return word


def field_name_to_accessor_name(name: str) -> str:
    """Return the accessor stem generated for a field.

    The emitted accessors are ``get<Stem>``, ``set<Stem>``, ``has<Stem>`` etc.,
    so two fields with the same stem cannot live in one DTO.
    """
    return camelize(name)
