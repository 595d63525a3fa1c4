import os
from typing import Optional


def check_api_key(api_key: Optional[str]) -> None:
    """Check that the Gemini credential is present"""

    if not api_key or not api_key.strip():
        raise RuntimeError(
            "GEMINI_API_KEY is not set.\n"
            "Export it or add it to a .env file next to the server."
        )


def read_api_key() -> Optional[str]:
    """Read the Gemini credential once, stripped of stray whitespace"""

    value = os.getenv("GEMINI_API_KEY", "").strip().replace("\n", "")
    return value or None
