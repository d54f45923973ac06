"""
Formatting utilities.
"""


def format_rate(value: float, decimals: int = 1) -> str:
    """
    Format a 0-1 rate as a percentage.

    Args:
        value: The rate, e.g. 0.853.
        decimals: Number of decimal places.

    Returns:
        Formatted percentage string, e.g. "85.3%".
    """
    return f"{value * 100:.{decimals}f}%"


def format_metric_name(name: str) -> str:
    """
    Turn a camelCase metric name into a display label.

    Example: "requiredFieldsRate" -> "Required Fields Rate"
    """
    words = []
    current = ""
    for char in name:
        if char.isupper() and current:
            words.append(current)
            current = char
        else:
            current += char
    if current:
        words.append(current)
    return " ".join(word[:1].upper() + word[1:] for word in words)
