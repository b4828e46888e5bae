"""
Utility Functions Module

Provides helper functions for file loading, logging, configuration
management and line inspection for the poetry graph pipeline.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import yaml


def setup_logging(
    log_file: Optional[str] = "poetry_graph.log",
    level: int = logging.INFO,
    console_output: bool = True
) -> None:
    """
    Configure logging for the project.

    Args:
        log_file: Path to log file (None disables file logging)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        console_output: Whether to output logs to console

    Examples:
        >>> setup_logging("poetry_graph.log", logging.DEBUG)
    """
    handlers: List[logging.Handler] = []

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    if console_output:
        handlers.append(logging.StreamHandler())

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers or None
    )

    logger = logging.getLogger(__name__)
    logger.info(f"Logging initialized. Log file: {log_file}")


def save_json(
    data: Any,
    file_path: Union[str, Path],
    indent: int = 2,
    ensure_ascii: bool = False
) -> None:
    """
    Save data to JSON file.

    Args:
        data: Data to save (must be JSON serializable)
        file_path: Output file path
        indent: JSON indentation level
        ensure_ascii: Whether to escape non-ASCII characters

    Examples:
        >>> save_json({"nodes": ["a graph"]}, "output/graph.json")
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        with open(file_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=indent, ensure_ascii=ensure_ascii)
        logging.info(f"Successfully saved JSON to {file_path}")
    except (OSError, TypeError) as e:
        logging.error(f"Error saving JSON to {file_path}: {e}")
        raise


def load_config(config_path: Union[str, Path] = "config/config.yaml") -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to YAML config file

    Returns:
        Configuration dictionary (empty if the file is empty)

    Examples:
        >>> config = load_config("config/config.yaml")
        >>> config['output']['graph_format']
        'graphml'
    """
    config_path = Path(config_path)

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f)
        logging.info(f"Successfully loaded configuration from {config_path}")
        return config or {}
    except FileNotFoundError:
        logging.error(f"Config file not found: {config_path}")
        raise
    except yaml.YAMLError as e:
        logging.error(f"Invalid YAML in {config_path}: {e}")
        raise


def load_text_file(file_path: Union[str, Path]) -> str:
    """
    Load text from file.

    Args:
        file_path: Path to text file

    Returns:
        File contents as string
    """
    file_path = Path(file_path)

    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            text = f.read()
        logging.info(f"Successfully loaded text from {file_path}")
        return text
    except (OSError, UnicodeDecodeError) as e:
        logging.error(f"Error loading text from {file_path}: {e}")
        raise


def split_lines(text: str) -> List[str]:
    """
    Split text on newlines only (\\n, \\r\\n or \\r).

    Other Unicode line boundaries such as form feed or U+2028 stay part
    of the line.

    Examples:
        >>> split_lines("a\\r\\n  knows b")
        ['a', '  knows b']
    """
    return re.split(r'\r\n|\r|\n', text)


def leading_whitespace(line: str) -> int:
    """
    Count the leading whitespace characters of a line.

    Args:
        line: A single line of text

    Returns:
        Number of whitespace characters before the first non-space character

    Examples:
        >>> leading_whitespace("  has nodes")
        2
        >>> leading_whitespace("a graph")
        0
    """
    return len(line) - len(line.lstrip())


def last_word(text: str) -> Optional[str]:
    """
    Return the last whitespace-separated word of text.

    Examples:
        >>> last_word("has nodes")
        'nodes'
        >>> last_word("   ") is None
        True
    """
    words = text.split()
    return words[-1] if words else None


def time_function(func):
    """
    Decorator to time function execution.

    Logs the execution time of the decorated function.

    Args:
        func: Function to decorate

    Returns:
        Wrapped function
    """
    import time
    from functools import wraps

    @wraps(func)
    def wrapper(*args, **kwargs):
        start = time.time()
        result = func(*args, **kwargs)
        end = time.time()

        logger = logging.getLogger(func.__module__)
        logger.info(f"{func.__name__} took {end - start:.2f} seconds")

        return result

    return wrapper


def ensure_dir(directory: Union[str, Path]) -> Path:
    """
    Ensure directory exists, create if it doesn't.

    Args:
        directory: Directory path

    Returns:
        Path object for the directory
    """
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge two configuration dictionaries.

    Values from ``override`` win; nested dictionaries are merged key by key.

    Examples:
        >>> deep_merge({"a": {"b": 1, "c": 2}}, {"a": {"c": 3}})
        {'a': {'b': 1, 'c': 3}}
    """
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


# Module-level logger
logger = logging.getLogger(__name__)
