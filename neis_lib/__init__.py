"""
NEIS school meal client

A Python package for retrieving NEIS (나이스) school meal plans and
rendering them as Korean HTML reports with allergy annotations.
"""

from .allergy import ALLERGY_CODES, allergy_label
from .config import DEFAULT_CONFIG, NeisConfig
from .exceptions import AllProxiesExhausted, MalformedPayload, NeisError
from .fetcher import first_successful, neis_meal_payload_retrieve
from .parser import (
    AllergyMarker,
    AnnotatedMenuItem,
    MealRecord,
    annotate_menu_item,
    find_allergy_markers,
    neis_meal_response_parse,
    strip_allergy_markers,
)
from .report import (
    format_korean_date,
    neis_meal_report_retrieve,
    parse_query_date,
    render_meal_report,
)
from .webpage import neis_meal_api_url, neis_proxy_urls


__version__ = "0.1.0"
__author__ = "NEIS Meal Team"

__all__ = [
    "ALLERGY_CODES",
    "allergy_label",
    "DEFAULT_CONFIG",
    "NeisConfig",
    "NeisError",
    "AllProxiesExhausted",
    "MalformedPayload",
    "first_successful",
    "neis_meal_payload_retrieve",
    "AllergyMarker",
    "AnnotatedMenuItem",
    "MealRecord",
    "annotate_menu_item",
    "find_allergy_markers",
    "neis_meal_response_parse",
    "strip_allergy_markers",
    "format_korean_date",
    "neis_meal_report_retrieve",
    "parse_query_date",
    "render_meal_report",
    "neis_meal_api_url",
    "neis_proxy_urls",
]
