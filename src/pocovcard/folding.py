from __future__ import annotations

FOLD_WIDTH = 75
CONTINUATION = "\n "


def fold_line(line: str, width: int = FOLD_WIDTH) -> str:
    """Fold a fully composed content line every `width` characters.

    Chunk boundaries are counted on the unfolded text, and no break is
    inserted after the final character.
    """
    if len(line) <= width:
        return line
    chunks = [line[i:i + width] for i in range(0, len(line), width)]
    return CONTINUATION.join(chunks)
