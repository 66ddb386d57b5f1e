SUBSCRIPT_MAP = {
    "0": "₀",
    "1": "₁",
    "2": "₂",
    "3": "₃",
    "4": "₄",
    "5": "₅",
    "6": "₆",
    "7": "₇",
    "8": "₈",
    "9": "₉",
    "+": "₊",
    "-": "₋",
    "=": "₌",
    "(": "₍",
    ")": "₎",
}


def subscript(x: str) -> str:
    """
    Convert the provided string to its subscript
    equivalent in unicode, leaving characters without
    a subscript form unchanged

    Args:
        x (str): the string to be converted

    Returns:
        str: the converted string
    """
    return "".join(SUBSCRIPT_MAP.get(ch, ch) for ch in x)


def overline(x: str) -> str:
    """
    Add a unicode combining overline
    to each character of the provided string.

    Args:
        x (str): the string to be overlined

    Returns:
        str: the overlined string
    """
    return "".join(f"{ch}\u0305" for ch in x)


def hm_unicode(hm: str) -> str:
    """
    Hermann-Mauguin symbol with screw axes as subscripts and
    rotoinversions overlined, e.g. 'P 21/c' -> 'P 2₁/c', 'P -3' -> 'P 3̅'

    Args:
        hm (str): space-separated Hermann-Mauguin symbol

    Returns:
        str: the formatted symbol
    """
    tokens = []
    for token in hm.split():
        if token.startswith("-"):
            token = overline(token[1]) + token[2:]
        elif len(token) > 1 and token[0].isdigit() and token[1].isdigit():
            token = token[0] + subscript(token[1]) + token[2:]
        tokens.append(token)
    return " ".join(tokens)
