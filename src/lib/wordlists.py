"""
Word-list loader for tokenizer configuration.

A word-list file is a YAML mapping with optional `keywords` and `builtins`
lists. A missing key keeps the default list for that category:

    keywords: [if, fi, then, else]
    builtins:
      - hab
      - build
      - sup-run
"""

import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple


class WordListError(Exception):
    """Raised when a word-list file cannot be loaded or validated"""
    pass


def words_validate(key: str, value: Any, path: Path) -> List[str]:
    """
    Check that a YAML value is a list of non-empty strings.

    Raises:
        WordListError: If value is not a list of strings
    """
    if not isinstance(value, list):
        raise WordListError(f"{path}: '{key}' must be a list, got {type(value).__name__}")
    words: List[str] = []
    for item in value:
        if not isinstance(item, str) or not item.strip():
            raise WordListError(f"{path}: '{key}' entries must be non-empty strings, got {item!r}")
        words.append(item.strip())
    return words


def wordlists_load(
    path: str | Path,
    keywords: Optional[List[str]] = None,
    builtins: Optional[List[str]] = None,
) -> Tuple[Optional[List[str]], Optional[List[str]]]:
    """
    Load keyword and builtin lists from a YAML file.

    Args:
        path: YAML word-list file
        keywords: Fallback when the file has no `keywords` key
        builtins: Fallback when the file has no `builtins` key

    Returns:
        Tuple of (keywords, builtins)

    Raises:
        WordListError: If the file is missing, unparsable or malformed
    """
    wordlist_path = Path(path)
    if not wordlist_path.exists():
        raise WordListError(f"Word-list file not found: {wordlist_path}")

    try:
        with open(wordlist_path, 'r', encoding='utf-8') as f:
            config: Any = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise WordListError(f"Failed to parse {wordlist_path}: {e}")
    except OSError as e:
        raise WordListError(f"Failed to read {wordlist_path}: {e}")

    if config is None:
        config = {}
    if not isinstance(config, dict):
        raise WordListError(f"{wordlist_path}: expected a mapping at top level")

    data: Dict[str, Any] = config
    if 'keywords' in data:
        keywords = words_validate('keywords', data['keywords'], wordlist_path)
    if 'builtins' in data:
        builtins = words_validate('builtins', data['builtins'], wordlist_path)
    return keywords, builtins
