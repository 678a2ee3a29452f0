"""Read-time preparation of stored markup for the runtime MDX compiler"""

from mdprep.config import Settings
from mdprep.core.esm import LINE_SPLIT_RE, is_fence, strip_esm


def fix_code_fences(source: str, language: str = 'javascript') -> str:
    """Give opening fences without a language tag the default language.

    Closing fences are left alone; fence state follows the same single toggle
    as strip_esm.
    """
    lines = []
    in_fence = False
    for line in LINE_SPLIT_RE.split(source):
        if is_fence(line):
            if not in_fence:
                stripped = line.strip()
                run = len(stripped) - len(stripped.lstrip(stripped[0]))
                if not stripped[run:].strip():
                    indent = line[:len(line) - len(line.lstrip())]
                    line = f"{indent}{stripped[:run]}{language}"
            in_fence = not in_fence
        lines.append(line)
    return '\n'.join(lines)


def prepare_source(raw: str, settings: Settings | None = None) -> str:
    """Sanitize raw content for rendering: strip ESM, optionally label bare fences."""
    settings = settings or Settings()
    text = strip_esm(raw)
    if settings.fix_code_fences:
        text = fix_code_fences(text, settings.default_code_language)
    return text
