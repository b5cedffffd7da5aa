# Key names shared by the terminal adapter and the event loop.
# Printable characters are passed through as one-character strings.

UP = "<up>"
DOWN = "<down>"
LEFT = "<left>"
RIGHT = "<right>"
ENTER = "<enter>"
BACKSPACE = "<backspace>"
ESCAPE = "<esc>"


def is_printable(key: str) -> bool:
    return len(key) == 1 and key.isprintable()
