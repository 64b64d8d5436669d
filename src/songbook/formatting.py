def clean_text(text: str) -> str:
    """Trim leading and trailing whitespace from pasted or extracted text."""
    return text.strip()


def format_for_display(text: str) -> str:
    """Drop trailing whitespace from every line, keeping the line structure."""
    return "\n".join(line.rstrip() for line in text.split("\n"))
