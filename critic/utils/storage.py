"""
Conversation storage utilities

All conversations live in a single JSON file mapping a file id (sha256 of the
uploaded bytes) to its ordered list of {role, content} messages.

The whole mapping is rewritten on every save. Two requests that overlap
(load, mutate, save) can lose the first writer's update, even when they touch
different file ids.
"""
import hashlib
import json
from pathlib import Path
from typing import Dict, List

from critic.config import CONVERSATIONS_FILE


def generate_file_id(buffer: bytes) -> str:
    """Content hash used as the conversation key"""
    return hashlib.sha256(buffer).hexdigest()


class ConversationStore:
    """Flat JSON key-value store of conversation records"""

    def __init__(self, path=None):
        self.path = Path(path or CONVERSATIONS_FILE)

    def load(self) -> Dict[str, List[Dict[str, str]]]:
        """Load all conversations; a missing or unreadable file means no conversations yet"""
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError):
            return {}
        if not isinstance(data, dict):
            return {}
        return data

    def save(self, conversations: Dict[str, List[Dict[str, str]]]):
        """Overwrite the whole conversation file"""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(conversations, f, indent=2)
