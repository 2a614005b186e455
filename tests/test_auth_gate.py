"""Tests for per-navigation token verification."""

import asyncio
from dataclasses import dataclass, field

from mpl_site.errors import NetworkError
from mpl_site.services.auth_gate import ADMIN_PATH, LOGIN_PATH, AuthGate, AuthState
from mpl_site.services.session import Session
from mpl_site.services.tokens import InMemoryTokenStore
from tests.conftest import FakeMplApiClient


def _gate(
    token: str | None, api: FakeMplApiClient | None = None
) -> tuple[AuthGate, InMemoryTokenStore, FakeMplApiClient]:
    api = api or FakeMplApiClient()
    store = InMemoryTokenStore(token=token)
    session = Session(store=store, auth_client=api)
    return AuthGate(session=session, auth_client=api), store, api


def test_no_token_is_unauthenticated_without_network() -> None:
    gate, _, api = _gate(None)

    state = asyncio.run(gate.verify())

    assert state is AuthState.UNAUTHENTICATED
    assert api.calls == []


def test_valid_token_is_authenticated() -> None:
    gate, store, _ = _gate("abc123")

    assert asyncio.run(gate.verify()) is AuthState.AUTHENTICATED
    assert gate.is_admin
    assert store.get() == "abc123"


def test_rejected_token_is_cleared() -> None:
    gate, store, _ = _gate("expired")

    assert asyncio.run(gate.verify()) is AuthState.UNAUTHENTICATED
    assert store.get() is None


def test_network_failure_fails_closed() -> None:
    api = FakeMplApiClient(failures={"verify": NetworkError("offline")})
    gate, store, _ = _gate("abc123", api)

    assert asyncio.run(gate.verify()) is AuthState.UNAUTHENTICATED
    assert store.get() is None


@dataclass
class _PausedVerifyApi(FakeMplApiClient):
    releases: list[asyncio.Event] = field(default_factory=list)
    answers: list[bool] = field(default_factory=list)

    async def verify(self, token: str) -> bool:
        self.calls.append("verify")
        release = asyncio.Event()
        self.releases.append(release)
        answer = self.answers[len(self.releases) - 1]
        await release.wait()
        return answer


def test_verifying_state_hides_content_until_resolved() -> None:
    api = _PausedVerifyApi(answers=[True])
    gate, _, _ = _gate("abc123", api)

    async def scenario() -> None:
        task = asyncio.create_task(gate.navigate(ADMIN_PATH))
        await asyncio.sleep(0)
        assert gate.state is AuthState.VERIFYING
        assert not gate.is_resolved
        assert not gate.is_admin
        assert gate.redirect_for(ADMIN_PATH) is None
        api.releases[0].set()
        await task

    asyncio.run(scenario())

    assert gate.state is AuthState.AUTHENTICATED


def test_superseded_verification_is_ignored() -> None:
    api = _PausedVerifyApi(answers=[False, True])
    gate, store, _ = _gate("abc123", api)

    async def scenario() -> None:
        first = asyncio.create_task(gate.navigate("/"))
        await asyncio.sleep(0)
        second = asyncio.create_task(gate.navigate(ADMIN_PATH))
        await asyncio.sleep(0)
        api.releases[1].set()
        await second
        api.releases[0].set()
        await first

    asyncio.run(scenario())

    assert gate.state is AuthState.AUTHENTICATED
    assert store.get() == "abc123"


def test_every_navigation_reverifies() -> None:
    gate, _, api = _gate("abc123")

    asyncio.run(gate.navigate("/"))
    api.valid_tokens.clear()
    asyncio.run(gate.navigate("/gallery"))

    assert api.calls == ["verify", "verify"]
    assert gate.state is AuthState.UNAUTHENTICATED
    assert gate.path == "/gallery"


def test_redirects() -> None:
    gate, _, _ = _gate(None)
    asyncio.run(gate.verify())
    assert gate.redirect_for(ADMIN_PATH) == LOGIN_PATH
    assert gate.redirect_for("/winners") is None

    admin_gate, _, _ = _gate("abc123")
    asyncio.run(admin_gate.verify())
    assert admin_gate.redirect_for(LOGIN_PATH) == ADMIN_PATH


def test_session_invalidation_revokes_admin() -> None:
    gate, _, _ = _gate("abc123")
    asyncio.run(gate.verify())

    gate.session.invalidate("write rejected")

    assert gate.state is AuthState.UNAUTHENTICATED
    assert not gate.is_admin
