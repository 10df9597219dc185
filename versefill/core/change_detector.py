"""Decide whether a text change is worth rescanning for citations."""
from typing import Optional, Union


def should_rescan(
    previous_text: str,
    current_text: str,
    last_programmatic_edit: Optional[Union[str, bool]] = None,
) -> bool:
    """Gate the matcher on text-change events.

    Only growth is rescanned; deletions never introduce a new citation.
    Text the splicer itself produced is never treated as typed input.

    Args:
        previous_text: Field text before the change
        current_text: Field text after the change
        last_programmatic_edit: Text produced by the splicer's last mutation,
            or True to suppress the pass unconditionally

    Returns:
        True if the matcher should run on current_text
    """
    if len(current_text or "") <= len(previous_text or ""):
        return False

    if last_programmatic_edit is True:
        return False
    if isinstance(last_programmatic_edit, str) and current_text == last_programmatic_edit:
        return False

    return True
