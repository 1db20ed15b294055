"""valence: composable validators with localized failure reports.

    from valence import member, size, gte, ANY, eq, validate

    rule = (member("age") >= 18) & member("tags")(ANY(eq, "admin"))
    report = validate({"age": 15, "tags": ["admin"]}, rule)
    report.message   # "age must be greater than or equal to 18"
"""
__version__ = "0.1.0"

from valence.validation import (
    ALL,
    AND,
    ANY,
    MISSING,
    NOT,
    OR,
    Adapter,
    AggregationKind,
    ElementModifier,
    Member,
    Operator,
    PrevalidationAdapter,
    Property,
    Report,
    Status,
    Validator,
    _,
    apply,
    contains,
    empty,
    eq,
    exists,
    flag,
    gt,
    gte,
    in_,
    lazy,
    length,
    lt,
    lte,
    make_adapter,
    make_prevalidation_adapter,
    make_reporting_adapter,
    master_sample,
    member,
    ne,
    prevalidate,
    property,
    register_container,
    set_validated,
    size,
    validate,
    validator,
    value,
    wrap_op,
)

from valence.reporting import (
    PhraseTranslator,
    QuotesDecorator,
    Reporter,
    get_translator,
    load_translations,
    parse_translations,
    register_builtin_locale,
    register_translations,
)

from valence.core.errors import (
    AppError,
    AppErrorException,
    DefinitionError,
    ErrorCode,
    LocaleError,
    ValidationFailed,
)

__all__ = [
    "__version__",
    # Construction
    "member", "_", "validator", "AND", "OR", "NOT", "ANY", "ALL",
    "Validator", "Member", "Property", "Operator", "AggregationKind", "ElementModifier",
    "value", "size", "length", "empty", "property",
    "eq", "ne", "lt", "lte", "gt", "gte", "contains", "in_", "flag", "exists", "wrap_op",
    "lazy", "master_sample",
    # Checking
    "Status", "Report", "apply", "validate", "prevalidate", "set_validated",
    "MISSING", "Adapter", "PrevalidationAdapter",
    "make_adapter", "make_reporting_adapter", "make_prevalidation_adapter",
    "register_container",
    # Reporting
    "Reporter", "PhraseTranslator", "QuotesDecorator",
    "get_translator", "load_translations", "parse_translations", "register_translations", "register_builtin_locale",
    # Errors
    "AppError", "AppErrorException", "DefinitionError", "ErrorCode", "LocaleError", "ValidationFailed",
]
