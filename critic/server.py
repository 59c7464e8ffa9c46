"""
Server entry point
"""
import os

import uvicorn

from critic.api import app


def main():
    host = os.environ.get("HOST", "0.0.0.0")
    port = int(os.environ.get("PORT", "8000"))

    print("=" * 80)
    print("CREATIVE CRITIC")
    print("=" * 80)
    print("\nStarting server...")
    print(f"   - API: http://localhost:{port}/critique")
    print(f"   - API Docs: http://localhost:{port}/docs")
    print("\nPress CTRL+C to stop\n")

    uvicorn.run(app, host=host, port=port, log_level="info")


if __name__ == "__main__":
    main()
