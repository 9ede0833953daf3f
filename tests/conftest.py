from unittest.mock import MagicMock

import pytest
import requests


MEAL_XML = """<?xml version="1.0" encoding="UTF-8"?>
<mealServiceDietInfo>
  <head>
    <list_total_count>2</list_total_count>
    <RESULT>
      <CODE>INFO-000</CODE>
      <MESSAGE>정상 처리되었습니다.</MESSAGE>
    </RESULT>
  </head>
  <row>
    <MMEAL_SC_NM>조식</MMEAL_SC_NM>
    <DDISH_NM><![CDATA[ <br/>  <br/> ]]></DDISH_NM>
    <CAL_INFO>0 Kcal</CAL_INFO>
  </row>
  <row>
    <MMEAL_SC_NM>중식</MMEAL_SC_NM>
    <DDISH_NM><![CDATA[백미밥 <br/>된장국5.6.13.<br/>닭볶음탕15.16.<br/>배추김치9.13.]]></DDISH_NM>
    <CAL_INFO>812.4 Kcal</CAL_INFO>
    <NTR_INFO><![CDATA[탄수화물(g) : 120.1<br/>단백질(g) : 35.2]]></NTR_INFO>
  </row>
</mealServiceDietInfo>
"""

NO_DATA_XML = """<?xml version="1.0" encoding="UTF-8"?>
<RESULT>
  <CODE>INFO-200</CODE>
  <MESSAGE>해당하는 데이터가 없습니다.</MESSAGE>
</RESULT>
"""

MALFORMED_XML = "<mealServiceDietInfo><row><DDISH_NM>밥</DDISH_NM></mealServiceDietInfo>"


def fake_response(text="", status=200):
    response = MagicMock()
    response.status_code = status
    response.text = text
    response.encoding = "utf-8"
    if status >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status} Server Error")
    return response


@pytest.fixture
def meal_xml():
    return MEAL_XML


@pytest.fixture
def no_data_xml():
    return NO_DATA_XML


@pytest.fixture
def malformed_xml():
    return MALFORMED_XML


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)
