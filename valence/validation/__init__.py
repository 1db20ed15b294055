"""Validation Engine

Validator trees are composed once and checked against per-call adapters.

Usage:
    from valence.validation import member, size, gte, ANY, eq, apply

    rule = member("tags")(size, gte, 2) & member("tags")(ANY(eq, "admin"))
    apply(rule, {"tags": ["admin", "dev"]})   # Status.SUCCESS
"""
from .status import Status

from .aggregation import AggregationKind, ElementModifier, AggregationDescriptor

from .properties import Property, value, size, length, empty, property

from .operators import (
    Operator,
    OperatorKind,
    eq,
    ne,
    lt,
    lte,
    gt,
    gte,
    contains,
    in_,
    flag,
    exists,
    wrap_op,
    lazy,
)

from .members import Member, member, _, master_sample

from .capabilities import (
    ContainerCapabilities,
    CapabilityRegistry,
    get_registry,
    register_container,
    reset_registry,
)

from .adapters import (
    MISSING,
    Adapter,
    PrevalidationAdapter,
    make_adapter,
    make_reporting_adapter,
    make_prevalidation_adapter,
)

from .validators import Validator, validator, AND, OR, NOT, ANY, ALL

from .api import Report, apply, validate, prevalidate, set_validated

__all__ = [
    "Status",
    "AggregationKind",
    "ElementModifier",
    "AggregationDescriptor",
    # Properties
    "Property", "value", "size", "length", "empty", "property",
    # Operators
    "Operator", "OperatorKind",
    "eq", "ne", "lt", "lte", "gt", "gte", "contains", "in_", "flag", "exists",
    "wrap_op", "lazy",
    # Members
    "Member", "member", "_", "master_sample",
    # Containers
    "ContainerCapabilities", "CapabilityRegistry", "get_registry", "register_container", "reset_registry",
    # Adapters
    "MISSING", "Adapter", "PrevalidationAdapter",
    "make_adapter", "make_reporting_adapter", "make_prevalidation_adapter",
    # Validators
    "Validator", "validator", "AND", "OR", "NOT", "ANY", "ALL",
    # Entry points
    "Report", "apply", "validate", "prevalidate", "set_validated",
]
