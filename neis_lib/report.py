import logging
from datetime import date, datetime
from typing import Dict, Mapping, Optional, Sequence, Union

import requests
from bs4 import BeautifulSoup

from .allergy import ALLERGY_CODES
from .config import DEFAULT_CONFIG, NeisConfig
from .exceptions import NeisError
from .fetcher import neis_meal_payload_retrieve
from .parser import MealRecord, annotate_menu_item, neis_meal_response_parse

logger = logging.getLogger(__name__)

WEEKDAYS = ('일', '월', '화', '수', '목', '금', '토')

REPORT_TITLE = '급식 정보'
NO_DATA_NOTICE = '해당 날짜의 급식 정보가 없습니다.'


def parse_query_date(value: Union[date, str]) -> date:
    """Accept a date or a YYYY-MM-DD string; raise ValueError otherwise."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value or not value.strip():
        raise ValueError('날짜를 선택해주세요.')
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise ValueError(f'Invalid date format: {value}. Use YYYY-MM-DD')


def format_korean_date(dt: date) -> str:
    """2024-03-06 -> "2024년 3월 6일 (수)" """
    # isoweekday: Monday=1 ... Sunday=7, table starts at Sunday
    weekday = WEEKDAYS[dt.isoweekday() % 7]
    return f"{dt.year}년 {dt.month}월 {dt.day}일 ({weekday})"


# =============================================================================
# HTML RENDERING
# =============================================================================

def _labeled_paragraph(soup: BeautifulSoup, label: str, text: str):
    paragraph = soup.new_tag('p')
    strong = soup.new_tag('strong')
    strong.string = f"{label}:"
    paragraph.append(strong)
    paragraph.append(f" {text}")
    return paragraph


def render_meal_report(meals: Sequence[MealRecord], dt: date,
                       table: Mapping[int, str] = ALLERGY_CODES) -> str:
    """
    Render parsed meal records as an HTML fragment.

    Parameters:
        meals: Records from neis_meal_response_parse, in display order
        dt (date): Queried day, shown in the header
        table: Allergy code table used to annotate each dish

    Returns:
        str: A <div class="meal-card"> fragment. With no meals it only holds
        the header and a "no data" notice.
    """
    soup = BeautifulSoup('', 'html.parser')
    card = soup.new_tag('div', attrs={'class': 'meal-card'})
    soup.append(card)

    title = soup.new_tag('h2')
    title.string = REPORT_TITLE
    card.append(title)

    date_info = soup.new_tag('div', attrs={'class': 'date-info'})
    date_info.string = f"{format_korean_date(dt)} {REPORT_TITLE}"
    card.append(date_info)

    if not meals:
        notice = soup.new_tag('p', attrs={'class': 'instruction'})
        notice.string = NO_DATA_NOTICE
        card.append(notice)
        return str(soup)

    for meal in meals:
        heading = soup.new_tag('h3')
        heading.string = meal.meal_type
        card.append(heading)

        menu_list = soup.new_tag('ul', attrs={'class': 'meal-list'})
        for raw_item in meal.menu_items:
            item = annotate_menu_item(raw_item, table)
            if not item.display_text:
                continue
            entry = soup.new_tag('li')
            entry.append(item.display_text)
            if item.allergy_labels:
                allergy = soup.new_tag('span', attrs={'class': 'allergy-info'})
                allergy.string = f"(알레르기: {', '.join(item.allergy_labels)})"
                entry.append(' ')
                entry.append(allergy)
            menu_list.append(entry)
        card.append(menu_list)

        if meal.calorie_info:
            card.append(_labeled_paragraph(soup, '칼로리', meal.calorie_info))
        if meal.nutrition_info:
            card.append(_labeled_paragraph(soup, '영양정보', meal.nutrition_info))

    return str(soup)


# =============================================================================
# PIPELINE
# =============================================================================

def neis_meal_report_retrieve(query_date: Union[date, str], config: NeisConfig = DEFAULT_CONFIG,
                              session: Optional[requests.Session] = None) -> Dict:
    """
    Fetch, parse and render the school meal report for one day.

    Parameters:
        query_date: A date or a YYYY-MM-DD string (validated by the caller)
        config (NeisConfig): API, proxy and allergy settings
        session: Optional requests session

    Returns:
        Dict: {"date", "display_date", "meals", "html"} on success, including
        days without data; {"error": message} when every proxy failed or the
        response could not be parsed.
    """
    dt = parse_query_date(query_date)

    try:
        xml_text = neis_meal_payload_retrieve(dt, config, session)
        meals = neis_meal_response_parse(xml_text)
    except NeisError as e:
        logger.error(f"급식 정보를 가져오는데 실패했습니다: {e}")
        return {"error": str(e)}

    logger.info(f"Parsed {len(meals)} meals for {dt}")
    return {
        "date": dt.isoformat(),
        "display_date": format_korean_date(dt),
        "meals": list(meals),
        "html": render_meal_report(meals, dt, config.allergy_codes),
    }
