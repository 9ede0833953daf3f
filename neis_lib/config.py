"""
Settings for talking to the NEIS open API.

A single NeisConfig is built at import time (DEFAULT_CONFIG) and passed
around by reference. Use dataclasses.replace() to derive a variant, e.g.
for another school.
"""
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

from .allergy import ALLERGY_CODES


NEIS_MEAL_SERVICE_URL = "https://open.neis.go.kr/hub/mealServiceDietInfo"

# {encoded} is the percent-encoded API URL, {url} is the raw one
PROXY_TEMPLATES = (
    "https://api.allorigins.win/raw?url={encoded}",
    "https://corsproxy.io/?{encoded}",
    "https://cors-anywhere.herokuapp.com/{url}",
)


@dataclass(frozen=True)
class NeisConfig:
    base_url: str = NEIS_MEAL_SERVICE_URL
    office_code: str = "J10"        # 경기도교육청
    school_code: str = "7530478"
    page_size: int = 100
    proxy_templates: Tuple[str, ...] = PROXY_TEMPLATES
    timeout: Optional[float] = 15
    allergy_codes: Mapping[int, str] = field(default_factory=lambda: ALLERGY_CODES)


DEFAULT_CONFIG = NeisConfig()
