"""
Schema unification.

Decides which columns a collection's worksheet gets: either the caller's
explicit list or every top-level property seen in any document.
"""

from typing import Any, Iterable, List, Mapping, Optional, Sequence

from cosmos2xlsx.logging import get_logger

logger = get_logger("cosmos2xlsx.export.schema")


def parse_column_list(values: Optional[Iterable[str]]) -> List[str]:
    """
    Flatten repeated and/or comma-separated CLI values into one list.

    Example: ["id,name", "age"] -> ["id", "name", "age"]
    """
    if not values:
        return []
    parsed = []
    for value in values:
        parsed.extend(part.strip() for part in str(value).split(",") if part.strip())
    return parsed


def unify_columns(
    documents: Iterable[Mapping[str, Any]],
    override: Optional[Sequence[str]] = None,
) -> List[str]:
    """
    Determine the ordered column set for a collection.

    With a non-empty override, the override is returned in caller order
    (duplicates dropped). Names are not checked against the documents; a
    missing property just yields blank cells.

    Without an override, every top-level property name of every document is
    collected and sorted by code point. Nested objects stay a single column.

    Args:
        documents: All documents of the collection
        override: Explicit column names

    Returns:
        List of unique column names
    """
    if override:
        columns = []
        seen = set()
        for name in override:
            if not name:
                continue
            if name in seen:
                logger.warning(f"Duplicate column '{name}' ignored")
                continue
            seen.add(name)
            columns.append(name)
        return columns

    names = set()
    for document in documents:
        names.update(document.keys())
    return sorted(names)
