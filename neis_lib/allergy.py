"""
Allergy codes used by the NEIS meal service.

Dish names carry allergens as numeric markers, e.g. "백미밥5.13." means
the dish contains 대두 (5) and 아황산류 (13).
"""
from types import MappingProxyType
from typing import Mapping


ALLERGY_CODES: Mapping[int, str] = MappingProxyType({
    1: '난류',
    2: '우유',
    3: '메밀',
    4: '땅콩',
    5: '대두',
    6: '밀',
    7: '고등어',
    8: '게',
    9: '새우',
    10: '돼지고기',
    11: '복숭아',
    12: '토마토',
    13: '아황산류',
    14: '호두',
    15: '닭고기',
    16: '쇠고기',
    17: '오징어',
    18: '조개류',
    19: '잣',
})


def allergy_label(code: str, table: Mapping[int, str] = ALLERGY_CODES) -> str:
    """
    Resolve a numeric allergy code to its allergen name.

    The code is matched as written, so "013" is not 13. Unknown codes are
    returned as-is so the caller can still show them.
    """
    labels = {str(number): name for number, name in table.items()}
    return labels.get(code, code)
