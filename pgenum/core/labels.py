"""Label arithmetic for enum value changes."""

from collections.abc import Iterable, Sequence

# PostgreSQL NAMEDATALEN - 1
MAX_IDENTIFIER_LENGTH = 63


def normalize_labels(values: str | Iterable[str] | None) -> list[str]:
    """Turn a single label, an iterable of labels or None into a list."""
    if values is None:
        return []
    if isinstance(values, str):
        return [values]
    return [str(value) for value in values]


def compute_target_labels(
    current: Sequence[str], add: Sequence[str], remove: Sequence[str]
) -> list[str]:
    """Compute the label set ``current + add - remove``.

    Retained labels keep their relative order and added labels follow in the
    order given. A label that is both added and removed ends up removed.

    Raises:
        ValueError: If a label to add is already present or repeated
    """
    removed = set(remove)
    target = [label for label in current if label not in removed]

    for label in add:
        if label in removed:
            continue
        if label in target:
            raise ValueError(f"Enum label '{label}' is already present or repeated")
        target.append(label)

    return target


def temporary_type_name(name: str, prefix: str) -> str:
    """Name of the placeholder type used while substituting ``name``.

    Raises:
        ValueError: If the name would be truncated by PostgreSQL
    """
    temporary = f"{prefix}{name}"
    if len(temporary.encode("utf-8")) > MAX_IDENTIFIER_LENGTH:
        raise ValueError(
            f"Temporary type name '{temporary}' exceeds {MAX_IDENTIFIER_LENGTH} bytes; "
            f"use a shorter enum name or temporary prefix"
        )
    return temporary
