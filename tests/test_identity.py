"""Tests for checkout routing and identity confirmation."""

import pytest

from srt_bot.constants import LoginSelectors, Selectors
from srt_bot.core.cancellation import CancellationToken
from srt_bot.core.exceptions import AutomationError, GuestFormNotReachedError, LoginRejectedError
from srt_bot.models import GuestIdentity, LoginKind, MemberIdentity
from srt_bot.services.booking import IdentityConfirmer

LOGIN_FORM_URL = "https://etk.srail.kr/cmc/01/selectLoginForm.do"


@pytest.fixture
def confirmer(timings):
    return IdentityConfirmer(timings, CancellationToken())


@pytest.fixture
def guest():
    return GuestIdentity(name="홍길동", phone="01012345678", password="12345")


def member(kind: LoginKind, login_id: str) -> MemberIdentity:
    return MemberIdentity(login_kind=kind, login_id=login_id, login_password="pw-1234")


class TestGuest:
    """Unregistered customer checkout."""

    @pytest.mark.asyncio
    async def test_route_clicks_guest_link(self, confirmer, fake_page, guest):
        page = fake_page()

        await confirmer.route_checkout(page, guest)

        assert page.clicks == [Selectors.GUEST_CHECKOUT_LINK]

    @pytest.mark.asyncio
    async def test_route_failure_is_automation_error(self, confirmer, fake_page, guest):
        page = fake_page(failures={Selectors.GUEST_CHECKOUT_LINK: AutomationError("not visible")})

        with pytest.raises(AutomationError, match="Guest checkout link"):
            await confirmer.route_checkout(page, guest)

    @pytest.mark.asyncio
    async def test_confirm_accepts_reservation_form(self, confirmer, fake_page, guest):
        page = fake_page()
        await confirmer.route_checkout(page, guest)

        await confirmer.confirm(page, guest)

    @pytest.mark.asyncio
    async def test_confirm_rejects_other_page(self, confirmer, fake_page, guest):
        page = fake_page(guest_url="https://etk.srail.kr/hpg/hra/01/selectScheduleList.do")
        await confirmer.route_checkout(page, guest)

        with pytest.raises(GuestFormNotReachedError) as exc_info:
            await confirmer.confirm(page, guest)

        assert exc_info.value.recoverable
        assert "selectScheduleList" in exc_info.value.message


class TestMember:
    """Logged-in checkout."""

    @pytest.mark.asyncio
    async def test_route_does_nothing(self, confirmer, fake_page):
        page = fake_page()

        await confirmer.route_checkout(page, member(LoginKind.MEMBER_ID, "1234567890"))

        assert page.calls == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "kind,login_id",
        [
            (LoginKind.MEMBER_ID, "1234567890"),
            (LoginKind.EMAIL, "user@example.com"),
            (LoginKind.PHONE, "01012345678"),
        ],
    )
    async def test_login_uses_fields_for_kind(self, confirmer, fake_page, kind, login_id):
        page = fake_page()

        await confirmer.confirm(page, member(kind, login_id))

        assert page.clicks[0] == LoginSelectors.KIND_TAB[kind.value]
        assert (LoginSelectors.IDENTIFIER[kind.value], login_id) in page.fills
        assert (LoginSelectors.PASSWORD[kind.value], "pw-1234") in page.fills
        assert LoginSelectors.SUBMIT in page.clicks

    @pytest.mark.asyncio
    async def test_still_on_login_page_is_rejected(self, confirmer, fake_page):
        page = fake_page(login_result_url=LOGIN_FORM_URL)

        with pytest.raises(LoginRejectedError):
            await confirmer.confirm(page, member(LoginKind.MEMBER_ID, "1234567890"))

    @pytest.mark.asyncio
    async def test_change_later_prompt_dismissed(self, confirmer, fake_page):
        page = fake_page(change_later_prompt=True)

        await confirmer.confirm(page, member(LoginKind.MEMBER_ID, "1234567890"))

        assert page.clicks[-1] == LoginSelectors.CHANGE_LATER

    @pytest.mark.asyncio
    async def test_no_prompt_no_extra_click(self, confirmer, fake_page):
        page = fake_page()

        await confirmer.confirm(page, member(LoginKind.MEMBER_ID, "1234567890"))

        assert LoginSelectors.CHANGE_LATER not in page.clicks


@pytest.mark.asyncio
async def test_unknown_identity_is_rejected(confirmer, fake_page):
    with pytest.raises(TypeError):
        await confirmer.route_checkout(fake_page(), object())
    with pytest.raises(TypeError):
        await confirmer.confirm(fake_page(), object())
