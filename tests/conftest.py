import pytest

from critic.utils.storage import ConversationStore


LABELLED_REPLY = (
    "Expert's Advice: The bridge modulates with real confidence.\n"
    "Intermediate Gaps: The second verse sags under its own weight.\n"
    "Rookie Concepts: Tune the guitar before hitting record."
)


class FakeClient:
    """Stands in for GeminiClient; replays canned replies and records calls"""

    def __init__(self, *replies):
        self.replies = list(replies) or [LABELLED_REPLY]
        self.calls = []

    async def generate(self, messages, max_output_tokens):
        self.calls.append(([dict(m) for m in messages], max_output_tokens))
        if len(self.replies) > 1:
            return self.replies.pop(0)
        return self.replies[0]


class FailingClient:
    def __init__(self, message="quota exceeded"):
        self.message = message

    async def generate(self, messages, max_output_tokens):
        raise RuntimeError(self.message)


@pytest.fixture
def store(tmp_path):
    return ConversationStore(tmp_path / "data" / "conversations.json")
