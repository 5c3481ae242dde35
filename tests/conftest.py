import pytest

from smsapi import SmsApi
from stubs import StubSession


@pytest.fixture
def session():
    return StubSession()


@pytest.fixture
def api(session):
    return SmsApi("K", "S", "https://api.example.com", session=session)
