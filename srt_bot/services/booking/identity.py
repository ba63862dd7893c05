"""Checkout routing and identity confirmation."""

from typing import Union

from loguru import logger

from ...constants import LoginSelectors, Selectors, UrlMarkers
from ...core.cancellation import CancellationToken
from ...core.exceptions import GuestFormNotReachedError, LoginRejectedError
from ...models import GuestIdentity, MemberIdentity
from ..browser import PageAutomationAdapter, describe_failure
from .timings import PipelineTimings

Identity = Union[GuestIdentity, MemberIdentity]


def _unsupported(identity: object) -> TypeError:
    return TypeError(f"Unsupported identity: {type(identity).__name__}")


class IdentityConfirmer:
    """Routes to guest or member checkout and confirms the identity there."""

    def __init__(self, timings: PipelineTimings, token: CancellationToken):
        self.timings = timings
        self.token = token

    async def route_checkout(self, adapter: PageAutomationAdapter, identity: Identity) -> None:
        """
        Pick the checkout path after the reserve click.

        Guests go through the "unregistered customer" link; the
        confirmation dialog it raises is accepted by the run's dialog
        handler. Members are sent to the login form by the site itself.
        """
        if isinstance(identity, GuestIdentity):
            await self.token.sleep(self.timings.before_checkout_route)
            async with describe_failure("Guest checkout link click"):
                await adapter.click(Selectors.GUEST_CHECKOUT_LINK)
            logger.info("✓ Guest checkout selected")
        elif isinstance(identity, MemberIdentity):
            logger.info("Member checkout - waiting for login form")
        else:
            raise _unsupported(identity)

    async def confirm(self, adapter: PageAutomationAdapter, identity: Identity) -> None:
        """
        Raises:
            GuestFormNotReachedError: Guest flow did not reach the passenger form
            LoginRejectedError: Member login was not accepted
        """
        if isinstance(identity, GuestIdentity):
            await self.verify_guest_form(adapter)
        elif isinstance(identity, MemberIdentity):
            await self.login(adapter, identity)
        else:
            raise _unsupported(identity)

    async def verify_guest_form(self, adapter: PageAutomationAdapter) -> None:
        current_url = adapter.current_url()
        if UrlMarkers.GUEST_RESERVATION_FORM not in current_url:
            raise GuestFormNotReachedError(current_url)
        logger.info("✓ Guest reservation form reached")

    async def login(self, adapter: PageAutomationAdapter, member: MemberIdentity) -> None:
        """Select the login tab for the member's kind, submit credentials and verify."""
        kind = member.login_kind.value
        logger.info(f"Logging in as {member.label()}")
        async with describe_failure("Login form"):
            await adapter.click(LoginSelectors.KIND_TAB[kind])
            await adapter.fill(LoginSelectors.IDENTIFIER[kind], member.login_id)
            await adapter.fill(
                LoginSelectors.PASSWORD[kind], member.login_password.get_secret_value()
            )
            await adapter.click(LoginSelectors.SUBMIT)

        await self.token.sleep(self.timings.after_login_submit)

        current_url = adapter.current_url()
        if UrlMarkers.LOGIN_FORM in current_url:
            raise LoginRejectedError(current_url)

        # Sites nag about stale passwords right after login
        if await adapter.count(LoginSelectors.CHANGE_LATER) > 0:
            await adapter.click(LoginSelectors.CHANGE_LATER)
            logger.info("Password change prompt dismissed")

        logger.info("✓ Login accepted")
