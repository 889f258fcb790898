"""Token estimation for rendered agent prompts.

The default estimator approximates one token per four characters, which is
close enough to flag oversized agent prompts without pulling in a tokenizer.
``TiktokenEstimator`` gives exact counts for the ``cl100k_base`` family when
the optional ``tiktoken`` dependency is installed.
"""
from __future__ import annotations

import math
from typing import Any, Callable, Mapping, Optional, Protocol

from ..exceptions import ConfigError

DEFAULT_CHARS_PER_TOKEN = 4


class TokenEstimator(Protocol):
    """Anything that maps text to a token count."""

    def __call__(self, text: str) -> int: ...


class CharRatioEstimator:
    """Estimate tokens as ``ceil(len(text) / chars_per_token)``."""

    name = "chars"

    def __init__(self, chars_per_token: int = DEFAULT_CHARS_PER_TOKEN) -> None:
        if chars_per_token <= 0:
            raise ValueError("chars_per_token must be positive")
        self.chars_per_token = chars_per_token

    def __call__(self, text: str) -> int:
        if not text:
            return 0
        return math.ceil(len(text) / self.chars_per_token)


class TiktokenEstimator:
    """Exact token counts using a tiktoken encoding."""

    name = "tiktoken"

    def __init__(self, encoding: str = "cl100k_base") -> None:
        try:
            import tiktoken
        except ImportError as err:
            raise ConfigError(
                "The 'tiktoken' token estimator requires tiktoken: pip install 'reaper-build[tokens]'",
                context={"estimator": self.name},
            ) from err
        try:
            self.encoding = tiktoken.get_encoding(encoding)
        except Exception as err:
            # Unknown names raise ValueError; a missing cache triggers a download.
            raise ConfigError(
                f"Could not load tiktoken encoding '{encoding}': {err}",
                context={"estimator": self.name, "encoding": encoding},
            ) from err

    def __call__(self, text: str) -> int:
        if not text:
            return 0
        # Prompts may legitimately mention special tokens such as <|endoftext|>.
        return len(self.encoding.encode(text, disallowed_special=()))


_ESTIMATORS: Mapping[str, Callable[..., TokenEstimator]] = {
    CharRatioEstimator.name: CharRatioEstimator,
    TiktokenEstimator.name: TiktokenEstimator,
}


def get_estimator(name: str = CharRatioEstimator.name, **options: Any) -> TokenEstimator:
    """Return the estimator registered under ``name``."""
    factory = _ESTIMATORS.get(name)
    if factory is None:
        raise ConfigError(
            f"Unknown token estimator '{name}'. Valid estimators: {', '.join(sorted(_ESTIMATORS))}",
            context={"estimator": name},
        )
    return factory(**options)


_default_estimator = CharRatioEstimator()


def estimate_tokens(text: str) -> int:
    """Estimate the token count of ``text`` (``ceil(len / 4)``, 0 for empty)."""
    return _default_estimator(text)


def format_token_summary(token_counts: Mapping[str, int], *, heading: str = "Token Summary (agents):") -> str:
    """Render token counts sorted by descending count; ``""`` when empty.

    ``sorted`` is stable, so ties keep their insertion order.
    """
    if not token_counts:
        return ""
    ordered = sorted(token_counts.items(), key=lambda item: item[1], reverse=True)
    width = max(len(name) for name, _ in ordered)
    lines = [heading]
    for name, count in ordered:
        lines.append(f"  {name.ljust(width)}  ~{count:,} tokens")
    return "\n".join(lines)


def print_token_summary(token_counts: Mapping[str, int], *, file: Optional[Any] = None) -> None:
    """Print the token summary; prints nothing at all for an empty mapping."""
    text = format_token_summary(token_counts)
    if text:
        print(text, file=file)


__all__ = [
    "DEFAULT_CHARS_PER_TOKEN",
    "TokenEstimator",
    "CharRatioEstimator",
    "TiktokenEstimator",
    "get_estimator",
    "estimate_tokens",
    "format_token_summary",
    "print_token_summary",
]
