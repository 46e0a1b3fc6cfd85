"""
Name: Ad Listing Options (builder + validator)

Responsibilities:
  - Parse listing query parameters into ListOptions with defaults
  - Validate bounds in a fixed order; first failure wins
  - Clamp oversized limits silently

Collaborators:
  - domain.entities: ListOptions and listing constants
  - api.ad_routes: feeds request query parameters

Notes:
  - Parse errors are surfaced verbatim (the parser's own message)
  - page has no implicit default: an absent page is rejected
  - A repeated parameter uses its first value
"""

from typing import Callable, Mapping, Optional, TypeVar

from ..domain.entities import (
    LIMIT_MAX_VALUE,
    ORDER_BY_ASC,
    ORDER_BY_DESC,
    PARAM_LIMIT,
    PARAM_MAX_PRICE,
    PARAM_MIN_PRICE,
    PARAM_ORDER_BY,
    PARAM_PAGE,
    PARAM_SORT_BY,
    SORT_FIELDS,
    ListOptions,
)
from ..exceptions import InvalidOptionsError

REPORT_NEED_POSITIVE = "{} must be greater than 0"
REPORT_ERROR_IN_COMPARE_PRICES = "min_price cannot be greater than max_price"
REPORT_INVALID_SORT_BY = "invalid sort_by parameter"
REPORT_INVALID_ORDER_BY = "invalid order_by parameter"

T = TypeVar("T")


def _first(params: Mapping[str, str], name: str) -> Optional[str]:
    """R: First value of a possibly repeated query parameter."""
    getlist = getattr(params, "getlist", None)
    if getlist is None:
        return params.get(name)
    values = getlist(name)
    return values[0] if values else None


def _parse(params: Mapping[str, str], name: str, parser: Callable[[str], T], default: T) -> T:
    raw = _first(params, name)
    if raw is None or raw == "":
        return default
    try:
        return parser(raw)
    except ValueError as exc:
        raise InvalidOptionsError(str(exc), original_error=exc) from exc


def parse_list_options(params: Mapping[str, str]) -> ListOptions:
    """
    R: Build validated ListOptions from raw query parameters.

    Raises:
        InvalidOptionsError: On a parse failure or a failed bound check
    """
    defaults = ListOptions()
    options = ListOptions(
        page=_parse(params, PARAM_PAGE, int, defaults.page),
        limit=_parse(params, PARAM_LIMIT, int, defaults.limit),
        sort_by=_first(params, PARAM_SORT_BY) or defaults.sort_by,
        order_by=_parse(params, PARAM_ORDER_BY, int, defaults.order_by),
        min_price=_parse(params, PARAM_MIN_PRICE, float, defaults.min_price),
        max_price=_parse(params, PARAM_MAX_PRICE, float, defaults.max_price),
    )
    validate_list_options(options)
    return options


def validate_list_options(options: ListOptions) -> ListOptions:
    """
    R: Check options in place; clamps limit above the maximum.

    Raises:
        InvalidOptionsError: First failed rule, in declaration order
    """
    if options.page < 1:
        raise InvalidOptionsError(REPORT_NEED_POSITIVE.format(PARAM_PAGE))

    if options.limit < 1:
        raise InvalidOptionsError(REPORT_NEED_POSITIVE.format(PARAM_LIMIT))
    if options.limit > LIMIT_MAX_VALUE:
        options.limit = LIMIT_MAX_VALUE

    if options.min_price < 0:
        raise InvalidOptionsError(REPORT_NEED_POSITIVE.format(PARAM_MIN_PRICE))
    if options.max_price < 0:
        raise InvalidOptionsError(REPORT_NEED_POSITIVE.format(PARAM_MAX_PRICE))
    if options.min_price and options.max_price and options.min_price > options.max_price:
        raise InvalidOptionsError(REPORT_ERROR_IN_COMPARE_PRICES)

    if options.sort_by not in SORT_FIELDS:
        raise InvalidOptionsError(REPORT_INVALID_SORT_BY)

    if options.order_by != 0 and options.order_by not in (ORDER_BY_ASC, ORDER_BY_DESC):
        raise InvalidOptionsError(REPORT_INVALID_ORDER_BY)

    return options
