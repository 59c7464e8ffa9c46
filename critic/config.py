"""
Environment configuration for the critique backend
"""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables - try project root first, then current directory
package_dir = os.path.dirname(os.path.abspath(__file__))  # critic/
project_root = os.path.dirname(package_dir)
env_path = os.path.join(project_root, '.env')

if os.path.exists(env_path):
    load_dotenv(env_path)
else:
    load_dotenv()

GEMINI_API_KEY = os.environ.get('GEMINI_API_KEY')

# Remove 'models/' prefix if present (some APIs include it, others don't)
GEMINI_MODEL = os.environ.get('GEMINI_MODEL', 'gemini-2.0-flash-exp').replace('models/', '')

CONVERSATIONS_FILE = Path(os.environ.get('CONVERSATIONS_FILE', 'data/conversations.json'))

# Output token bounds for the two kinds of calls
CRITIQUE_MAX_TOKENS = int(os.environ.get('CRITIQUE_MAX_TOKENS', '450'))
FOLLOW_UP_MAX_TOKENS = int(os.environ.get('FOLLOW_UP_MAX_TOKENS', '600'))
