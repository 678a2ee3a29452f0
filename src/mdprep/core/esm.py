"""Line-oriented, fence-aware removal of top-level ESM import/export statements.

Runtime MDX compilation from stored strings cannot accept module syntax, but
rich editors serialize component blocks with `import ... from` lines. Lines
inside fenced code blocks are always kept.

Fence tracking is a single toggle: backtick and tilde fences are not
distinguished and fence length or info strings are not matched. An
unterminated fence keeps the rest of the document inside the fence.
"""

import re


LINE_SPLIT_RE = re.compile(r'\r?\n')
ESM_RE = re.compile(r'^(import|export)\s')
FENCE_MARKERS = ('```', '~~~')


def is_fence(line: str) -> bool:
    """True if the trimmed line opens or closes a fenced code block."""
    return line.strip().startswith(FENCE_MARKERS)


def strip_esm(source: str) -> str:
    """Drop import/export lines outside fenced code blocks; lines are rejoined with '\\n'."""
    kept = []
    in_fence = False
    for line in LINE_SPLIT_RE.split(source):
        if is_fence(line):
            in_fence = not in_fence
            kept.append(line)
            continue
        if in_fence or not ESM_RE.match(line.strip()):
            kept.append(line)
    return '\n'.join(kept)
