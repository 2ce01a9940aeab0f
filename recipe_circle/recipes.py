import json
from pathlib import Path

from .importer import ParseFailure, from_record


def load_recipes(path):
    """Load exported recipe records from a JSON file.

    Args:
        path (str or Path): Path to a JSON array of structured records.

    Returns:
        list: transient recipes, one per record. Empty if the file is missing.

    Raises:
        ParseFailure: the file is not a JSON array or a record is malformed.
    """
    p = Path(path)
    if not p.exists():
        return []
    with p.open("r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ParseFailure(f"{p} is not valid JSON: {e.msg}") from e
    if not isinstance(data, list):
        raise ParseFailure(f"{p} must contain a JSON array")
    return [from_record(item) for item in data]
