"""Argument parser -- a syntax-only argv tokenizer.

The parser knows nothing about schemas. It splits argv into positional
tokens and a raw option map:

* ``--name value`` / ``--name=value`` -- long option with a value.
* ``--name`` -- ``True`` when the next token is absent or is an option.
* ``--no-name`` -- ``False``.
* ``-n value`` / ``-n=value`` -- short option; ``-abc`` sets ``a`` and
  ``b`` to ``True`` and lets ``c`` take the following value.
* ``--`` -- everything after it is positional.

Values are kept as strings (schemas do the typing). Repeating an option
aggregates its values into a list in occurrence order (``-vvv`` ->
``[True, True, True]``). Dashes in long names become underscores so
``--dry-run`` is reported as ``dry_run``.

Aliases are resolved through an alias map ``{canonical: [alias, ...]}``:
an alias token is recorded under its canonical name, then every alias key
mirrors the canonical value, so both keys are present in the result.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence, Union

_NEGATIVE_NUMBER = re.compile(r"^-\d+(\.\d+)?$")


@dataclass
class ParsedArgs:
    """Output of :func:`parse_args`."""

    positional: list[str] = field(default_factory=list)
    options: dict[str, Any] = field(default_factory=dict)


def normalize_option_name(name: str) -> str:
    """Map a command-line option name to its key (``dry-run`` -> ``dry_run``)."""
    return name.replace("-", "_")


def is_option_token(token: str) -> bool:
    """Return True if *token* starts an option (``-x``/``--x``, not ``-`` or ``-5``)."""
    return (
        token.startswith("-")
        and token.lstrip("-")[:1] not in ("", "=")
        and not _NEGATIVE_NUMBER.match(token)
    )


def parse_args(
    args: Sequence[str],
    alias_map: Optional[Mapping[str, Union[str, Sequence[str]]]] = None,
) -> ParsedArgs:
    """Tokenize *args* into positional arguments and a raw option map.

    Args:
        args: The argv tail left after command resolution.
        alias_map: Canonical option name to one alias or a list of aliases.

    Returns:
        A :class:`ParsedArgs` with positional tokens in order and the raw
        option values keyed by canonical name and by every alias.
    """
    aliases_of = _normalize_alias_map(alias_map or {})
    canonical_of: dict[str, str] = {}
    for name, aliases in aliases_of.items():
        for alias in aliases:
            # first claimant keeps a shared alias
            canonical_of.setdefault(alias, name)

    result = ParsedArgs()

    def record(raw_key: str, value: Any) -> None:
        key = normalize_option_name(raw_key)
        key = canonical_of.get(key, key)
        if key not in result.options:
            result.options[key] = value
        elif isinstance(result.options[key], list):
            result.options[key].append(value)
        else:
            result.options[key] = [result.options[key], value]

    def takes_next(index: int) -> bool:
        return index + 1 < len(args) and not is_option_token(args[index + 1])

    i = 0
    while i < len(args):
        token = args[i]

        if token == "--":
            result.positional.extend(args[i + 1 :])
            break

        if not is_option_token(token):
            result.positional.append(token)
        elif token.startswith("--"):
            body = token[2:]
            if "=" in body:
                key, value = body.split("=", 1)
                record(key, value)
            elif body.startswith("no-") and len(body) > 3:
                record(body[3:], False)
            elif takes_next(i):
                record(body, args[i + 1])
                i += 1
            else:
                record(body, True)
        else:
            body = token[1:]
            if "=" in body:
                letters, value = body.split("=", 1)
                for letter in letters[:-1]:
                    record(letter, True)
                record(letters[-1], value)
            else:
                for letter in body[:-1]:
                    record(letter, True)
                if takes_next(i):
                    record(body[-1], args[i + 1])
                    i += 1
                else:
                    record(body[-1], True)

        i += 1

    for name, aliases in aliases_of.items():
        if name in result.options:
            for alias in aliases:
                value = result.options[name]
                result.options[alias] = list(value) if isinstance(value, list) else value

    return result


def _normalize_alias_map(
    alias_map: Mapping[str, Union[str, Sequence[str]]]
) -> dict[str, list[str]]:
    normalized: dict[str, list[str]] = {}
    for name, aliases in alias_map.items():
        if isinstance(aliases, str):
            aliases = [aliases]
        normalized[normalize_option_name(name)] = [normalize_option_name(a) for a in aliases]
    return normalized
