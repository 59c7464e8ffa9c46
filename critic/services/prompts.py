"""
Prompt builders for critique generation
"""
from typing import Optional

from critic.services.extraction import MetadataResult


SYSTEM_PROMPT = """
You are a witty, professional critic across music, art, and writing.
You balance humor with deep technical insight. Always follow JSON format.
"""

# First entry of every stored conversation
CONVERSATION_PREAMBLE = "You are a witty and balanced creative critic."
INITIAL_REQUEST_PLACEHOLDER = "Initial critique request"


def build_system_prompt():
    return SYSTEM_PROMPT


def build_user_prompt(category, content_description, bluntness, metadata: Optional[MetadataResult] = None):
    """Build the critique prompt; metadata is included only when present"""
    prompt = f"""
You are a professional artist, musician and writer with decades of experience and are expert at each of these, and you are very witty.
Mode: {category}
Bluntness Meter: {bluntness}/10
Content (90% weight):
{content_description}
"""

    if metadata is not None and metadata.has_metadata:
        prompt += f"""
Metadata (10% weight):
{metadata.description}
"""

    prompt += """
Provide feedback divided into three sections in JSON format:
1. Expert's Advice
2. Intermediate Gaps
3. Rookie Concepts
Be witty but balanced, don't overdo jokes.
Make sure to give medium-length feedback, 3 sentences per section
"""
    return prompt
