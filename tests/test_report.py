"""
Tests for date formatting, HTML rendering and the full report pipeline.
"""
from datetime import date, datetime

import pytest
import requests
from bs4 import BeautifulSoup

from neis_lib.parser import MealRecord
from neis_lib.report import (
    format_korean_date,
    neis_meal_report_retrieve,
    parse_query_date,
    render_meal_report,
)

from conftest import fake_response


def test_format_korean_date_wednesday():
    assert format_korean_date(date(2024, 3, 6)) == "2024년 3월 6일 (수)"


def test_format_korean_date_sunday_and_saturday():
    assert format_korean_date(date(2024, 3, 10)) == "2024년 3월 10일 (일)"
    assert format_korean_date(date(2024, 3, 9)) == "2024년 3월 9일 (토)"


def test_parse_query_date():
    assert parse_query_date("2024-03-06") == date(2024, 3, 6)
    assert parse_query_date(date(2024, 3, 6)) == date(2024, 3, 6)
    assert parse_query_date(datetime(2024, 3, 6, 12, 30)) == date(2024, 3, 6)


@pytest.mark.parametrize("value", ["", "   ", "2024/03/06", "2024-13-01"])
def test_parse_query_date_invalid(value):
    with pytest.raises(ValueError):
        parse_query_date(value)


def test_render_no_meals():
    soup = BeautifulSoup(render_meal_report([], date(2024, 3, 6)), "html.parser")
    assert soup.find("h2").get_text() == "급식 정보"
    assert soup.find("div", class_="date-info").get_text() == "2024년 3월 6일 (수) 급식 정보"
    assert soup.find("p", class_="instruction").get_text() == "해당 날짜의 급식 정보가 없습니다."
    assert soup.find("ul") is None


def test_render_meals():
    meals = [
        MealRecord("조식", ("토스트1.2.", "우유 2.")),
        MealRecord("중식", ("백미밥", "된장국5.13.", "7."), "812.4 Kcal", "단백질(g) : 35.2"),
    ]
    soup = BeautifulSoup(render_meal_report(meals, date(2024, 3, 6)), "html.parser")

    assert [h.get_text() for h in soup.find_all("h3")] == ["조식", "중식"]
    lists = soup.find_all("ul", class_="meal-list")
    breakfast = [li.get_text() for li in lists[0].find_all("li")]
    assert breakfast == ["토스트 (알레르기: 난류, 우유)", "우유 (알레르기: 우유)"]

    lunch = lists[1].find_all("li")
    # "7." has no text left once the marker is removed
    assert len(lunch) == 2
    assert lunch[0].find("span") is None
    assert lunch[1].find("span", class_="allergy-info").get_text() == "(알레르기: 대두, 아황산류)"

    paragraphs = [p.get_text() for p in soup.find_all("p")]
    assert paragraphs == ["칼로리: 812.4 Kcal", "영양정보: 단백질(g) : 35.2"]


def test_render_escapes_text():
    html = render_meal_report([MealRecord("<b>중식</b>", ("A & B",))], date(2024, 3, 6))
    assert "&lt;b&gt;중식&lt;/b&gt;" in html
    assert "A &amp; B" in html


def test_report_success(session, meal_xml):
    session.get.return_value = fake_response(meal_xml)

    report = neis_meal_report_retrieve("2024-03-06", session=session)

    assert "error" not in report
    assert report["date"] == "2024-03-06"
    assert report["display_date"] == "2024년 3월 6일 (수)"
    assert len(report["meals"]) == 1
    assert "닭볶음탕" in report["html"]
    assert "(알레르기: 닭고기, 쇠고기)" in report["html"]


def test_report_no_data_is_not_an_error(session, no_data_xml):
    session.get.return_value = fake_response(no_data_xml)

    report = neis_meal_report_retrieve(date(2024, 3, 9), session=session)

    assert report["meals"] == []
    assert "해당 날짜의 급식 정보가 없습니다." in report["html"]


def test_report_all_proxies_failed(session):
    session.get.side_effect = requests.ConnectionError("no route to host")

    report = neis_meal_report_retrieve("2024-03-06", session=session)

    assert report == {"error": "모든 프록시 서버 실패. 마지막 에러: no route to host"}
    assert session.get.call_count == 3


def test_report_malformed_payload(session, malformed_xml):
    session.get.return_value = fake_response(malformed_xml)

    report = neis_meal_report_retrieve("2024-03-06", session=session)

    assert list(report) == ["error"]
    assert report["error"].startswith("XML 파싱 실패")
