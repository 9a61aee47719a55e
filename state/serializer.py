# Convert game states and benchmark reports to readable formats (for logging or export)
import json
from pathlib import Path


def to_json(data_dict: dict) -> str:
    """
    Convert a dictionary to a JSON string.
    Args:
        data_dict (dict): The dictionary to convert.
    Returns:
        str: The JSON string representation of the dictionary.
    """
    return json.dumps(data_dict, indent=2)


def from_json(json_string: str) -> dict:
    """
    Convert a JSON string back to a dictionary.
    Args:
        json_string (str): The JSON string to convert.
    Returns:
        dict: The resulting dictionary.
    """
    return json.loads(json_string)


def write_report(data_dict: dict, path: str):
    """
    Write a report dictionary to disk as JSON.
    Args:
        data_dict (dict): The report to write.
        path (str): Destination file.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(to_json(data_dict))


def read_report(path: str) -> dict:
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        return from_json(f.read())
