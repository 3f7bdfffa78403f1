"""Session memory tests (each test gets its own database file)."""

import session_store
from session_store import MAX_HISTORY, append_turn, clear_session, get_session


class TestSessionStore:

    def test_empty_session(self):
        assert get_session("nobody") == []

    def test_turns_returned_oldest_first(self):
        append_turn("s1", "Weather in Paris?", "Paris: Partly cloudy, 18°")
        append_turn("s1", "And Tokyo?", "Tokyo: Clear sky, 22°")

        turns = get_session("s1")
        assert [t["user_input"] for t in turns] == ["Weather in Paris?", "And Tokyo?"]
        assert turns[1]["final_response"] == "Tokyo: Clear sky, 22°"

    def test_tool_calls_round_trip(self):
        calls = [{"name": "GetWeather", "arguments": {"location": "Paris"}}]
        append_turn("s1", "Weather in Paris?", "Sunny", calls)
        append_turn("s1", "Thanks", "You're welcome")

        turns = get_session("s1")
        assert turns[0]["tool_calls"] == calls
        assert turns[1]["tool_calls"] == []

    def test_sessions_are_isolated(self):
        append_turn("alice", "Paris?", "Cloudy")
        append_turn("bob", "Lima?", "Foggy")

        assert [t["user_input"] for t in get_session("alice")] == ["Paris?"]
        assert [t["user_input"] for t in get_session("bob")] == ["Lima?"]

    def test_prunes_to_max_history(self):
        for i in range(MAX_HISTORY + 5):
            append_turn("s1", f"message {i}", f"reply {i}")
        append_turn("s2", "other", "other reply")

        turns = get_session("s1", limit=100)
        assert len(turns) == MAX_HISTORY
        assert turns[0]["user_input"] == "message 5"
        assert turns[-1]["user_input"] == f"message {MAX_HISTORY + 4}"
        assert len(get_session("s2")) == 1

    def test_limit(self):
        for i in range(5):
            append_turn("s1", f"message {i}", f"reply {i}")
        turns = get_session("s1", limit=2)
        assert [t["user_input"] for t in turns] == ["message 3", "message 4"]

    def test_clear_session(self):
        append_turn("s1", "Paris?", "Cloudy")
        append_turn("s2", "Lima?", "Foggy")
        clear_session("s1")

        assert get_session("s1") == []
        assert len(get_session("s2")) == 1

    def test_uses_configured_path(self, session_db):
        append_turn("s1", "Paris?", "Cloudy")
        assert session_store.DB_PATH == session_db
        assert session_db.exists()
