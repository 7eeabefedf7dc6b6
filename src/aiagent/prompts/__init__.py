"""System prompts shipped with aiagent.

Each prompt is a ``<name>.txt`` file next to this module. A file with the
same name under ``./prompts/`` in the working directory takes precedence,
so the persona can be changed without touching the installed package.
"""

from functools import lru_cache
from pathlib import Path

PACKAGE_PROMPTS = Path(__file__).parent
PERSONA = "persona"


def _candidates(name: str) -> list[Path]:
    filename = f"{name}.txt"
    return [Path.cwd() / "prompts" / filename, PACKAGE_PROMPTS / filename]


@lru_cache(maxsize=16)
def load_prompt(name: str) -> str:
    """Return the text of prompt ``name`` with surrounding whitespace removed.

    Raises:
        FileNotFoundError: If neither the working directory nor the package
            has the prompt
    """
    candidates = _candidates(name)
    for path in candidates:
        if path.is_file():
            return path.read_text(encoding="utf-8").strip()

    searched = ", ".join(str(path) for path in candidates)
    raise FileNotFoundError(f"Prompt '{name}' not found (searched: {searched})")


def get_persona_prompt() -> str:
    """System prompt prepended to every completion request."""
    return load_prompt(PERSONA)


def clear_cache() -> None:
    """Forget loaded prompts so edited files are read again."""
    load_prompt.cache_clear()


__all__ = [
    "PERSONA",
    "clear_cache",
    "get_persona_prompt",
    "load_prompt",
]
