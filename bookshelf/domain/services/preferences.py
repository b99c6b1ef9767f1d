"""
Session preference composition.

A catalog listing resolves its sort column and filter independently:
an explicit request parameter wins over the value stored for the
session, and whatever value is used becomes the stored value for the
next request. A stored value that no longer parses falls back to the
default; a bad request parameter is a client error.
"""

import logging
from typing import Optional

from bookshelf.domain.errors import InvalidPreferenceError
from bookshelf.domain.value_objects import CatalogFilter, SortColumn, SortFilterPreference

logger = logging.getLogger(__name__)


def resolve_preferences(
    stored: SortFilterPreference,
    sort_param: Optional[str] = None,
    filter_param: Optional[str] = None,
) -> SortFilterPreference:
    """
    Combine request parameters with the stored session preference.

    Args:
        stored: Preference currently held in the session
        sort_param: Raw ``sortBy`` request parameter, None if absent
        filter_param: Raw ``filter`` request parameter, None if absent

    Returns:
        The effective preference (to be used and written back)

    Raises:
        InvalidPreferenceError: If a supplied parameter is not allowed
    """
    sort_by = stored.sort_by if sort_param is None else SortColumn.parse(sort_param)
    selected = stored.filter if filter_param is None else CatalogFilter.parse(filter_param)

    effective = SortFilterPreference(sort_by=sort_by, filter=selected)
    logger.debug("Resolved preference %s (stored %s)", effective, stored)
    return effective


def load_stored_preference(
    sort_value: Optional[str],
    filter_value: Optional[str],
) -> SortFilterPreference:
    """
    Rebuild a preference from raw session values.

    Values that do not parse are replaced by the defaults.
    """
    try:
        sort_by = SortColumn.parse(sort_value)
    except InvalidPreferenceError:
        logger.warning("Ignoring stored sort column %r", sort_value)
        sort_by = SortColumn.PK

    try:
        selected = CatalogFilter.parse(filter_value)
    except InvalidPreferenceError:
        logger.warning("Ignoring stored filter %r", filter_value)
        selected = CatalogFilter.ALL

    return SortFilterPreference(sort_by=sort_by, filter=selected)
