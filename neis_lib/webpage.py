from datetime import date
from typing import List
from urllib.parse import quote, urlencode

from .config import DEFAULT_CONFIG, NeisConfig

# Characters encodeURIComponent leaves untouched
_URI_COMPONENT_SAFE = "-_.!~*'()"


def neis_meal_api_url(dt: date, config: NeisConfig = DEFAULT_CONFIG) -> str:
    """
    Generate the NEIS mealServiceDietInfo URL for a given date.

    Parameters:
        dt (date): The date (datetime.date object).
        config (NeisConfig): School and paging settings.

    Returns:
        str: The full URL, e.g. "...&MLSV_YMD=20240306".
    """
    params = [
        ("KEY", ""),
        ("Type", "xml"),
        ("pIndex", 1),
        ("pSize", config.page_size),
        ("ATPT_OFCDC_SC_CODE", config.office_code),
        ("SD_SCHUL_CODE", config.school_code),
        ("MLSV_YMD", dt.strftime("%Y%m%d")),
    ]
    return f"{config.base_url}?{urlencode(params)}"


def neis_proxy_urls(api_url: str, config: NeisConfig = DEFAULT_CONFIG) -> List[str]:
    """Wrap the API URL with each proxy template, in priority order."""
    encoded = quote(api_url, safe=_URI_COMPONENT_SAFE)
    return [template.format(url=api_url, encoded=encoded) for template in config.proxy_templates]
