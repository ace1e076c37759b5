"""ORP (Optimal Recognition Point) calculator for RSVP reading."""

from .constants import ORP_LENGTH_TABLE, ORP_MAX_INDEX


def calculate_orp(word: str) -> int:
    """
    Calculate the ORP index for a word.

    The ORP is the character the eye fixates on for fastest recognition,
    roughly a third of the way into the word. It stops moving right for
    very long words, since the fixation point does not keep growing with
    length.

    Lengths are counted in characters (code points), not bytes.

    Args:
        word: The word to calculate ORP for.

    Returns:
        The 0-indexed position of the ORP character (0 for an empty word).

    Examples:
        >>> calculate_orp("the")
        0
        >>> calculate_orp("reading")
        2
        >>> calculate_orp("extraordinary")
        3
    """
    length = len(word)
    for max_length, index in ORP_LENGTH_TABLE:
        if length <= max_length:
            return index
    return ORP_MAX_INDEX


def split_for_display(word: str, orp_index: int | None = None) -> tuple[str, str, str]:
    """
    Split a word into three parts for ORP display.

    Renderers highlight the middle part and align it on a fixed column.

    Args:
        word: The word to split.
        orp_index: Precomputed ORP index; calculated when omitted.

    Returns:
        Tuple of (before_orp, orp_char, after_orp).

    Example:
        >>> split_for_display("reading")
        ('re', 'a', 'ding')
    """
    if not word:
        return ("", "", "")

    if orp_index is None:
        orp_index = calculate_orp(word)
    orp_index = min(max(orp_index, 0), len(word) - 1)

    return (word[:orp_index], word[orp_index], word[orp_index + 1:])
