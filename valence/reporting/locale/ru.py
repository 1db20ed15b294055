"""Russian phrases.

Predicates agree with the subject in gender and number, and " of " puts the
following member name in the genitive: "размер тегов должен быть больше 2".
Member names are not part of the locale; register them with `extra`:

    register_builtin_locale("ru", extra={
        "tags": [
            {"text": "теги", "emits": ["plural"]},
            {"text": "тегов", "requires": ["genitive"], "emits": ["plural"]},
        ],
    })
"""

MASCULINE = "masculine"
FEMININE = "feminine"
NEUTER = "neuter"
PLURAL = "plural"
SINGULAR = "singular"
GENITIVE = "genitive"


def _agreeing(masculine: str, feminine: str, neuter: str, plural: str) -> list[dict]:
    """Predicate forms; masculine is also the form used without a known subject."""
    return [
        {"text": masculine},
        {"text": feminine, "requires": [FEMININE]},
        {"text": neuter, "requires": [NEUTER]},
        {"text": plural, "requires": [PLURAL]},
    ]


def _noun(nominative: str, genitive: str, *categories: str) -> list[dict]:
    return [
        {"text": nominative, "emits": list(categories)},
        {"text": genitive, "requires": [GENITIVE], "emits": list(categories)},
    ]


def _predicate(stem: str) -> list[dict]:
    """Agreeing forms of a "должен ..." predicate."""
    return _agreeing(f"должен {stem}", f"должна {stem}", f"должно {stem}", f"должны {stem}")


TRANSLATIONS: dict = {
    # specials
    "true": "истина",
    "false": "ложь",
    "sample": "образца",
    "of": "",
    " of ": {"text": " ", "emits": [GENITIVE]},
    "element #": _noun("элемент №", "элемента №", MASCULINE, SINGULAR),
    "at least one element": _noun("хотя бы один элемент", "хотя бы одного элемента", MASCULINE, SINGULAR),
    "at least one key": _noun("хотя бы один ключ", "хотя бы одного ключа", MASCULINE, SINGULAR),
    "each element": _noun("каждый элемент", "каждого элемента", MASCULINE, SINGULAR),
    "each key": _noun("каждый ключ", "каждого ключа", MASCULINE, SINGULAR),

    # properties
    "value": _noun("значение", "значения", NEUTER, SINGULAR),
    "size": _noun("размер", "размера", MASCULINE, SINGULAR),
    "length": _noun("длина", "длины", FEMININE, SINGULAR),
    "empty": _noun("пустота", "пустоты", FEMININE, SINGULAR),

    # existence and flags
    "must exist": _agreeing("должен существовать", "должна существовать", "должно существовать", "должны существовать"),
    "must not exist": _agreeing(
        "не должен существовать", "не должна существовать", "не должно существовать", "не должны существовать"
    ),
    "must be empty": _agreeing("должен быть пустым", "должна быть пустой", "должно быть пустым", "должны быть пустыми"),
    "must be not empty": _agreeing(
        "не должен быть пустым", "не должна быть пустой", "не должно быть пустым", "не должны быть пустыми"
    ),
    "must be true": _agreeing("должен быть истинным", "должна быть истинной", "должно быть истинным", "должны быть истинными"),
    "must be false": _agreeing("должен быть ложным", "должна быть ложной", "должно быть ложным", "должны быть ложными"),

    # logical
    " AND ": " И ",
    " OR ": " ИЛИ ",
    "NOT ": "НЕ ",

    # comparison
    "must be equal to": _agreeing("должен быть равен", "должна быть равна", "должно быть равно", "должны быть равны"),
    "must be not equal to": _agreeing(
        "не должен быть равен", "не должна быть равна", "не должно быть равно", "не должны быть равны"
    ),
    "must be less than": _predicate("быть меньше"),
    "must be less than or equal to": _agreeing(
        "должен быть меньше или равен",
        "должна быть меньше или равна",
        "должно быть меньше или равно",
        "должны быть меньше или равны",
    ),
    "must be greater than": _predicate("быть больше"),
    "must be greater than or equal to": _agreeing(
        "должен быть больше или равен",
        "должна быть больше или равна",
        "должно быть больше или равно",
        "должны быть больше или равны",
    ),
    "must contain": _predicate("содержать"),
    "must be in": _predicate("входить в"),
}
