def normalize(line: str) -> str:
    """Drop every whitespace character, keeping the rest in order."""
    return ''.join(line.split())
