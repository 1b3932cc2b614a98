from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from otp_auth import models  # noqa: F401
from otp_auth.database import Base, get_db
from otp_auth.dependencies import get_clock, get_notifier, get_rng
from otp_auth.exceptions import DeliveryError
from otp_auth.main import app
from otp_auth.repositories.account_store import AccountStore
from otp_auth.repositories.otp_store import OtpStore
from otp_auth.services.auth_service import AuthService, PasswordAuthenticator
from otp_auth.services.otp_service import OtpService
from otp_auth.services.registration_service import RegistrationService
from otp_auth.utils.jwt_handler import JwtTokenIssuer


class FixedRandom:
    """Hands out the given codes in order, repeating the last one."""

    def __init__(self, *codes):
        self.codes = list(codes)

    def choices(self, population, k):
        code = self.codes.pop(0) if len(self.codes) > 1 else self.codes[0]
        assert len(code) == k
        assert all(ch in population for ch in code)
        return list(code)


class FakeClock:
    def __init__(self, start=datetime(2026, 1, 1, 12, 0, 0)):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


class RecordingNotifier:
    def __init__(self, fail=False):
        self.fail = fail
        self.sent = []

    async def send_verification(self, email, code):
        if self.fail:
            raise DeliveryError("SMTP unavailable")
        self.sent.append((email, code))

    def last_code_for(self, email):
        return [code for sent_to, code in self.sent if sent_to == email][-1]


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def rng():
    return FixedRandom("482910")


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def account_store(db):
    return AccountStore(db)


@pytest.fixture
def otp_store(db):
    return OtpStore(db)


@pytest.fixture
def otp_service(otp_store, rng, clock):
    return OtpService(otp_store, rng=rng, clock=clock)


@pytest.fixture
def token_issuer():
    return JwtTokenIssuer(secret_key="test-secret", algorithm="HS256")


@pytest.fixture
def registration(account_store, otp_service, notifier):
    return RegistrationService(account_store, otp_service, notifier)


@pytest.fixture
def auth_service(account_store, token_issuer):
    return AuthService(account_store, PasswordAuthenticator(account_store), token_issuer)


@pytest.fixture
def client(session_factory, rng, clock, notifier):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_rng] = lambda: rng
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_notifier] = lambda: notifier

    yield TestClient(app)

    app.dependency_overrides.clear()
