"""
Gemini client for critique generation

Conversations are kept as OpenAI-style {role, content} messages. System
messages become the model's system instruction, assistant messages become
"model" turns.
"""
from typing import Dict, List

import google.generativeai as genai

from critic.config import GEMINI_API_KEY, GEMINI_MODEL


def to_gemini_contents(messages: List[Dict[str, str]]):
    """
    Split role-tagged messages into a system instruction and Gemini contents

    Args:
        messages: Ordered list of {role, content} dicts

    Returns:
        Tuple of (system_instruction or None, contents list)
    """
    system_parts = []
    contents = []
    for message in messages:
        role = message.get("role")
        content = message.get("content") or ""
        if role == "system":
            system_parts.append(content.strip())
        elif role == "assistant":
            contents.append({"role": "model", "parts": [content]})
        else:
            contents.append({"role": "user", "parts": [content]})
    system_instruction = "\n\n".join(p for p in system_parts if p) or None
    return system_instruction, contents


def extract_response_text(response) -> str:
    """Pull the reply text out of a Gemini response"""
    try:
        # Try the standard response.text attribute first
        if hasattr(response, 'text') and response.text:
            return response.text.strip()
    except (AttributeError, ValueError):
        pass

    # .text raises when the reply has no simple text part
    if hasattr(response, 'candidates') and response.candidates:
        candidate = response.candidates[0]
        if hasattr(candidate, 'content') and hasattr(candidate.content, 'parts'):
            if len(candidate.content.parts) > 0:
                return candidate.content.parts[0].text.strip()

    raise ValueError(f"Could not extract text from Gemini response. Response type: {type(response)}")


class GeminiClient:
    """Text-generation client over google.generativeai"""

    def __init__(self, api_key=None, model_name=None):
        api_key = api_key or GEMINI_API_KEY
        if not api_key:
            raise ValueError("GEMINI_API_KEY environment variable not set")
        genai.configure(api_key=api_key)
        self.model_name = (model_name or GEMINI_MODEL).replace('models/', '')

    async def generate(self, messages: List[Dict[str, str]], max_output_tokens: int) -> str:
        """
        Send a whole conversation and return the reply text

        Args:
            messages: Ordered list of {role, content} dicts, last one from the user
            max_output_tokens: Reply length bound

        Returns:
            Generated text
        """
        system_instruction, contents = to_gemini_contents(messages)
        model = genai.GenerativeModel(
            model_name=self.model_name,
            system_instruction=system_instruction
        )
        print(f"[GEMINI] Model: {self.model_name}, turns: {len(contents)}, max tokens: {max_output_tokens}")
        response = await model.generate_content_async(
            contents,
            generation_config={'max_output_tokens': max_output_tokens}
        )
        return extract_response_text(response)
