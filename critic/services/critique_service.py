"""
Critique service - extraction, prompting, Gemini call and per-file conversation flow
"""
import json
import re
from typing import Dict, Optional

from starlette.concurrency import run_in_threadpool

from critic.config import CRITIQUE_MAX_TOKENS, FOLLOW_UP_MAX_TOKENS
from critic.models.requests import CritiqueResult
from critic.services.extraction import extract_content
from critic.services.gemini_client import GeminiClient
from critic.services.prompts import (
    CONVERSATION_PREAMBLE,
    INITIAL_REQUEST_PLACEHOLDER,
    build_system_prompt,
    build_user_prompt,
)
from critic.utils.storage import ConversationStore, generate_file_id


EXPERT_RE = re.compile(r"Expert's Advice\s*:\s*(.*?)(?=Intermediate Gaps\s*:|\Z)", re.DOTALL)
INTERMEDIATE_RE = re.compile(r"Intermediate Gaps\s*:\s*(.*?)(?=Rookie Concepts\s*:|\Z)", re.DOTALL)
ROOKIE_RE = re.compile(r"Rookie Concepts\s*:\s*(.*)", re.DOTALL)

SECTION_KEYS = {
    "expertAdvice": ("expertAdvice", "Expert's Advice", "expert_advice"),
    "intermediateGaps": ("intermediateGaps", "Intermediate Gaps", "intermediate_gaps"),
    "rookieConcepts": ("rookieConcepts", "Rookie Concepts", "rookie_concepts"),
}


def _section_text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, list):
        return " ".join(str(v).strip() for v in value).strip()
    return str(value).strip()


def _parse_json_sections(text: str) -> Optional[CritiqueResult]:
    # Remove markdown code blocks if present
    if '```json' in text:
        text = text.split('```json')[1].split('```')[0]
    elif '```' in text:
        text = text.split('```')[1].split('```')[0]
    try:
        data = json.loads(text.strip())
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None

    sections = {}
    for field, aliases in SECTION_KEYS.items():
        for alias in aliases:
            if alias in data:
                sections[field] = _section_text(data[alias])
                break
    if not sections:
        return None
    return CritiqueResult(**sections)


def _parse_labelled_sections(text: str) -> CritiqueResult:
    expert = EXPERT_RE.search(text)
    intermediate = INTERMEDIATE_RE.search(text)
    rookie = ROOKIE_RE.search(text)
    return CritiqueResult(
        expertAdvice=expert.group(1).strip() if expert else "",
        intermediateGaps=intermediate.group(1).strip() if intermediate else "",
        rookieConcepts=rookie.group(1).strip() if rookie else "",
    )


def parse_critique_sections(text: str) -> CritiqueResult:
    """
    Split a model reply into the three critique sections

    JSON replies are read directly; anything else falls back to matching the
    "Expert's Advice:", "Intermediate Gaps:" and "Rookie Concepts:" labels.
    A missing label leaves its section empty.
    """
    parsed = _parse_json_sections(text or "")
    if parsed is not None:
        return parsed
    return _parse_labelled_sections(text or "")


class CritiqueService:
    """Generates critiques and keeps one conversation per uploaded file"""

    def __init__(self, store: Optional[ConversationStore] = None, client=None):
        self.store = store or ConversationStore()
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = GeminiClient()
        return self._client

    async def generate_critique(self, category: str, file_buffer: bytes, bluntness) -> CritiqueResult:
        """
        Generate a structured critique for one uploaded file

        Args:
            category: "writing", "art" or "music"
            file_buffer: Raw file bytes
            bluntness: Tone hint, passed through unvalidated

        Returns:
            CritiqueResult with the three sections
        """
        # Parsers are blocking; keep them off the event loop
        extraction = await run_in_threadpool(extract_content, category, file_buffer)
        if extraction.metadata.error:
            print(f"[WARN] Metadata unavailable ({category}): {extraction.metadata.error}")

        messages = [
            {"role": "system", "content": build_system_prompt()},
            {"role": "user", "content": build_user_prompt(
                category,
                extraction.content_description,
                bluntness,
                extraction.metadata,
            )},
        ]
        ai_text = await self.client.generate(messages, max_output_tokens=CRITIQUE_MAX_TOKENS)
        return parse_critique_sections(ai_text)

    async def generate_critique_with_context(
        self,
        category: str,
        file_buffer: bytes,
        bluntness,
        follow_up_question: Optional[str] = None,
    ) -> Dict:
        """
        Run the per-file conversation flow

        - new file: generate and store the initial critique
        - known file with a question: answer it using the whole history
        - known file without a question: return the stored critique

        Returns:
            {"fileId", "initialCritique"} or {"fileId", "followUpReply"}
        """
        file_id = generate_file_id(file_buffer)
        conversations = self.store.load()

        if file_id not in conversations:
            print(f"[CRITIQUE] New {category} file {file_id[:12]}")
            initial_critique = await self.generate_critique(category, file_buffer, bluntness)
            conversations[file_id] = [
                {"role": "system", "content": CONVERSATION_PREAMBLE},
                {"role": "user", "content": INITIAL_REQUEST_PLACEHOLDER},
                {"role": "assistant", "content": initial_critique.model_dump_json()},
            ]
            self.store.save(conversations)
            return {"fileId": file_id, "initialCritique": initial_critique.model_dump()}

        if follow_up_question:
            print(f"[CRITIQUE] Follow-up for {file_id[:12]} ({len(conversations[file_id])} messages)")
            conversations[file_id].append({"role": "user", "content": follow_up_question})

            follow_up_reply = await self.client.generate(
                conversations[file_id],
                max_output_tokens=FOLLOW_UP_MAX_TOKENS
            )
            conversations[file_id].append({"role": "assistant", "content": follow_up_reply})

            self.store.save(conversations)
            return {"fileId": file_id, "followUpReply": follow_up_reply}

        print(f"[CRITIQUE] Returning stored critique for {file_id[:12]}")
        stored = CritiqueResult.model_validate_json(conversations[file_id][2]["content"])
        return {"fileId": file_id, "initialCritique": stored.model_dump()}
