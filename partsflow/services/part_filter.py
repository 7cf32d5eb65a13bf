from partsflow.schemas.part import PartOut, PartWithDetailsOut


def _contains(needle: str, values: list[str | None]) -> bool:
    return any(value and needle in value.lower() for value in values)


def matches_search(part: PartOut, query: str) -> bool:
    """Ledger search: name, part number or description, case-insensitive."""
    return _contains(query.lower(), [part.name, part.part_number, part.description])


def _searchable_fields(part: PartWithDetailsOut) -> list[str | None]:
    return [
        part.id,
        part.name,
        part.part_number,
        part.description,
        part.category.name if part.category else None,
        part.supplier.name if part.supplier else None,
        part.location,
        part.stock_status.value,
    ]


def filter_parts(parts: list[PartWithDetailsOut], search: str | None) -> list[PartWithDetailsOut]:
    """Table filter over already-fetched parts.

    Broader than the ledger's own search: also matches id, category and
    supplier names, location and stock status. Missing values never match.
    """
    if not search:
        return list(parts)
    needle = search.lower()
    return [part for part in parts if _contains(needle, _searchable_fields(part))]
