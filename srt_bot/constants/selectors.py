"""Page selectors and URL markers for the SRT web reservation flow."""

from typing import Final, Mapping


RESERVATION_URL: Final[str] = (
    "https://etk.srail.kr/hpg/hra/01/selectScheduleList.do?pageId=TK0101010000"
)


class Selectors:
    """Search page, results table and guest checkout selectors."""

    DEPARTURE_STATION: Final[str] = "input#dptRsStnCdNm"
    ARRIVAL_STATION: Final[str] = "input#arvRsStnCdNm"
    TRAVEL_DATE: Final[str] = "select#dptDt"
    SEARCH_BUTTON: Final[str] = "input[value='조회하기']"

    # NetFunnel queueing interstitial
    GATE: Final[str] = "div#NetFunnel_Skin_Top"

    RESULT_ROWS: Final[str] = "tbody > tr"
    RESULT_CELLS: Final[str] = "td"
    CELL_TIME_TEXT: Final[str] = "em"
    SOLD_OUT: Final[str] = "span:has-text('매진')"
    RESERVE_BUTTON: Final[str] = "a > span:has-text('예약하기')"

    GUEST_CHECKOUT_LINK: Final[str] = "a.btn_midium.btn_pastel1:has-text('미등록고객 예매')"
    PERSONAL_DATA_CONSENT: Final[str] = "input#agreeY"
    PASSENGER_NAME: Final[str] = "input#custNm"


class ResultColumns:
    """Zero-based cell positions inside a results table row."""

    DEPARTURE: Final[int] = 3
    ARRIVAL: Final[int] = 4
    ACTION: Final[int] = 6


class LoginSelectors:
    """Member login form selectors, keyed by login kind value."""

    KIND_TAB: Final[Mapping[str, str]] = {
        "member_id": "input#srchDvCd1",
        "email": "input#srchDvCd2",
        "phone": "input#srchDvCd3",
    }
    IDENTIFIER: Final[Mapping[str, str]] = {
        "member_id": "input#srchDvNm01",
        "email": "input#srchDvNm02",
        "phone": "input#srchDvNm03",
    }
    PASSWORD: Final[Mapping[str, str]] = {
        "member_id": "input#hmpgPwdCphd01",
        "email": "input#hmpgPwdCphd02",
        "phone": "input#hmpgPwdCphd03",
    }
    SUBMIT: Final[str] = "input.loginSubmit:visible"
    CHANGE_LATER: Final[str] = "a:has-text('다음에 변경')"


class UrlMarkers:
    """URL substrings identifying pages reached during checkout."""

    GUEST_RESERVATION_FORM: Final[str] = "selectReservationForm"
    LOGIN_FORM: Final[str] = "selectLoginForm"
