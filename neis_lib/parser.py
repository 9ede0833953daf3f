import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import List, Mapping, Optional, Tuple

from .allergy import ALLERGY_CODES, allergy_label
from .exceptions import MalformedPayload

logger = logging.getLogger(__name__)

# NEIS separates dishes (and nutrition entries) with a literal <br/> inside the text
BREAK_MARKER = '<br/>'
DEFAULT_MEAL_TYPE = '급식'
NO_DATA_PHRASES = ('해당하는 데이터가 없습니다', '데이터가 없습니다')

_ALLERGY_MARKER = re.compile(r'(\d+)\.')


@dataclass(frozen=True)
class MealRecord:
    """One meal service (조식, 중식, 석식...) for the queried day."""
    meal_type: str
    menu_items: Tuple[str, ...]
    calorie_info: str = ''
    nutrition_info: str = ''


@dataclass(frozen=True)
class AllergyMarker:
    position: int
    code: str


@dataclass(frozen=True)
class AnnotatedMenuItem:
    display_text: str
    allergy_labels: Tuple[str, ...] = ()


# =============================================================================
# MENU ITEM ANNOTATION
# =============================================================================

def find_allergy_markers(text: str) -> List[AllergyMarker]:
    """Find every "<digits>." marker in a dish name, in order of appearance."""
    return [AllergyMarker(m.start(), m.group(1)) for m in _ALLERGY_MARKER.finditer(text)]


def strip_allergy_markers(text: str) -> str:
    """Remove every allergy marker and surrounding whitespace."""
    return _ALLERGY_MARKER.sub('', text).strip()


def annotate_menu_item(text: str, table: Mapping[int, str] = ALLERGY_CODES) -> AnnotatedMenuItem:
    """
    Split a raw dish name into its display text and allergen names.

    Parameters:
        text (str): Raw dish name, e.g. "13.백미밥 2.된장국"
        table: Allergy code table

    Returns:
        AnnotatedMenuItem: e.g. ("백미밥 된장국", ("아황산류", "우유")).
        Duplicated codes are kept; unknown codes show up as their digits.
    """
    labels = tuple(allergy_label(marker.code, table) for marker in find_allergy_markers(text))
    return AnnotatedMenuItem(strip_allergy_markers(text), labels)


# =============================================================================
# XML RESPONSE PARSER
# =============================================================================

def _child_text(row: ET.Element, tag: str, default: str = '') -> str:
    elem = row.find(tag)
    if elem is None or not elem.text:
        return default
    return elem.text


def _split_dishes(dish_text: str) -> Tuple[str, ...]:
    return tuple(item.strip() for item in dish_text.split(BREAK_MARKER) if item.strip())


def _clean_nutrition(nutrition_text: str) -> str:
    """Join <br/>-separated nutrition entries into one line"""
    return ', '.join(part.strip() for part in nutrition_text.split(BREAK_MARKER) if part.strip())


def _no_data_message(root: ET.Element) -> Optional[str]:
    """Return the API message if it says there is no data for the request."""
    for result in root.iter('RESULT'):
        code = _child_text(result, 'CODE')
        message = _child_text(result, 'MESSAGE')
        logger.info(f"API result: {code} {message}")
        if any(phrase in message for phrase in NO_DATA_PHRASES):
            return message
        if code and not code.startswith('INFO'):
            logger.warning(f"Unexpected API result code {code}: {message}")
    return None


def neis_meal_response_parse(xml_text: str) -> Tuple[MealRecord, ...]:
    """
    Parse a mealServiceDietInfo XML response into meal records.

    Parameters:
        xml_text (str): Raw response body

    Returns:
        Tuple[MealRecord, ...]: One record per <row> with at least one dish,
        in document order. Empty when the API reports no data for the date.

    Raises:
        MalformedPayload: the body is not well-formed XML
    """
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as e:
        logger.error(f"XML parse error: {e}")
        raise MalformedPayload(str(e)) from e

    if _no_data_message(root) is not None:
        return ()

    rows = list(root.iter('row'))
    logger.info(f"Found {len(rows)} data rows")

    meals = []
    for index, row in enumerate(rows, start=1):
        menu_items = _split_dishes(_child_text(row, 'DDISH_NM'))
        if not menu_items:
            logger.debug(f"Row {index} has no dishes, skipping")
            continue
        meals.append(MealRecord(
            meal_type=_child_text(row, 'MMEAL_SC_NM', DEFAULT_MEAL_TYPE),
            menu_items=menu_items,
            calorie_info=_child_text(row, 'CAL_INFO').strip(),
            nutrition_info=_clean_nutrition(_child_text(row, 'NTR_INFO')),
        ))
    return tuple(meals)
