import pytest

from glenair.models import Stage
from services.builder_sessions import BuilderSessions


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class EmptyReference:
    def get_compatible_contact_sizes(self, wire_value, wire_system):
        return ["20"]

    def get_contacts_by_size(self, size):
        return []

    def get_arrangements_by_contact_count(self, count, size):
        return []


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sessions(clock):
    return BuilderSessions(EmptyReference, ttl=60, clock=clock)


def test_idle_sessions_expire(sessions, clock):
    ids = [sessions.create()[0] for _ in range(1000)]
    assert len(sessions) == 1000

    clock.now += 61
    fresh_id, _ = sessions.create()

    assert len(sessions) == 1
    assert sessions.get(ids[0]) is None
    assert sessions.get(fresh_id) is not None


def test_get_keeps_session_alive(sessions, clock):
    busy_id, builder = sessions.create()
    idle_id, _ = sessions.create()

    clock.now += 40
    assert sessions.get(busy_id) is builder
    clock.now += 40

    assert sessions.get(busy_id) is builder
    assert sessions.get(idle_id) is None
    assert len(sessions) == 1


def test_expired_builder_is_reset(sessions, clock):
    session_id, builder = sessions.create()
    assert builder.select_wire("AWG", "20", 4)

    clock.now += 120
    assert sessions.get(session_id) is None
    assert builder.stage is Stage.WIRE_SELECTION


def test_no_ttl_keeps_every_session(clock):
    sessions = BuilderSessions(EmptyReference, clock=clock)
    session_id, _ = sessions.create()
    clock.now += 10 ** 6
    assert sessions.get(session_id) is not None


def test_discard(sessions):
    session_id, builder = sessions.create()
    builder.select_wire("AWG", "20", 4)

    assert sessions.discard(session_id) is True
    assert builder.stage is Stage.WIRE_SELECTION
    assert sessions.discard(session_id) is False
    assert len(sessions) == 0
