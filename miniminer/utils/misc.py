from miniminer.constants import SCALAR_TYPES


def freeze_data(data) -> tuple[tuple[str, object], ...]:
    """Validates block data entries and returns them as an immutable tuple"""

    if not isinstance(data, (list, tuple)):
        raise ValueError("Block data must be a list of entries")

    entries = []

    for i, entry in enumerate(data):
        if not isinstance(entry, (list, tuple)) or len(entry) != 2:
            raise ValueError(f"Entry {i} must be a [label, value] pair")

        label, value = entry

        # No floats, the payload must not depend on float formatting
        if not isinstance(label, str) or not isinstance(value, SCALAR_TYPES):
            raise ValueError(f"Entry {i} has an invalid label or value")

        entries.append((label, value))

    return tuple(entries)
