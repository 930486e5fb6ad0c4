"""Read-status classification from page counts."""

from ..records.schemas import ReadingStatus


def classify_status(pages_read: int, total_pages: int) -> ReadingStatus:
    """Determine a book's status from the pages read so far.

    Args:
        pages_read: Pages read
        total_pages: Book's page count

    Returns:
        NOT_STARTED at zero pages, COMPLETED once the page count is
        reached, READING otherwise

    Example:
        >>> classify_status(0, 300)
        <ReadingStatus.NOT_STARTED: 'not_started'>
        >>> classify_status(300, 300)
        <ReadingStatus.COMPLETED: 'completed'>
    """
    if pages_read == 0:
        return ReadingStatus.NOT_STARTED
    if pages_read >= total_pages:
        return ReadingStatus.COMPLETED
    return ReadingStatus.READING
