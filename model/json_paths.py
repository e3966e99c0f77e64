"""JSON path support for body trees.

Supports the subset used by body matchers:

    $            root
    .name        key access (also ['name'] / ["name"])
    [3] / [-1]   array index, negative from the end
    [*] / .*     any child
    ..name       recursive descent to every `name` key

Locations are tuples of dict keys and list indexes from the root. A node
already bound to a matcher (a DualValue) is seen through its literal side,
so paths can reach inside a container that carries a matcher of its own.
"""

import copy
import dataclasses
import re
from dataclasses import dataclass
from typing import Any, List, Tuple, Union

from errors import ConfigurationError
from model.dual_value import DualValue, is_pattern_marker

Location = Tuple[Union[str, int], ...]

_SIMPLE_KEY = re.compile(r"[A-Za-z_][A-Za-z0-9_\-]*")
_DOT_KEY = re.compile(r"[^.\[\]]+")
_INDEX = re.compile(r"-?\d+")

SUPPORTED_SYNTAX = "$, .key, ['key'], [n], [-n], [*], .*, ..key"


@dataclass(frozen=True)
class Key:
    name: str


@dataclass(frozen=True)
class Index:
    index: int


@dataclass(frozen=True)
class Wildcard:
    pass


@dataclass(frozen=True)
class Descendant:
    name: str


Token = Union[Key, Index, Wildcard, Descendant]


def _unsupported(path: str, reason: str) -> ConfigurationError:
    return ConfigurationError(
        f"Unsupported JSON path [{path}]: {reason}. Supported syntax: {SUPPORTED_SYNTAX}",
        key=path,
    )


def _selector_error(path: str, inner: str) -> ConfigurationError:
    if inner.startswith("?"):
        return _unsupported(path, f"filter expressions like [{inner}] are not supported")
    if ":" in inner:
        return _unsupported(path, f"array slices like [{inner}] are not supported")
    if "," in inner:
        return _unsupported(path, f"unions like [{inner}] are not supported")
    return _unsupported(path, f"selector [{inner}]")


def parse_path(path: str) -> List[Token]:
    """Parse a JSON path into tokens."""
    text = path.strip()
    if not text.startswith("$"):
        raise _unsupported(path, "must start with '$'")
    tokens: List[Token] = []
    i, n = 1, len(text)
    while i < n:
        if text.startswith("..", i):
            m = _SIMPLE_KEY.match(text, i + 2)
            if not m:
                raise _unsupported(path, "recursive descent needs a key name")
            tokens.append(Descendant(m.group()))
            i = m.end()
        elif text[i] == ".":
            if text.startswith(".*", i):
                tokens.append(Wildcard())
                i += 2
            elif text.startswith(".[", i):
                i += 1
            else:
                m = _DOT_KEY.match(text, i + 1)
                if not m:
                    raise _unsupported(path, f"empty key at position {i}")
                tokens.append(Key(m.group()))
                i = m.end()
        elif text[i] == "[":
            end = text.find("]", i)
            if end < 0:
                raise _unsupported(path, "unclosed '['")
            inner = text[i + 1:end].strip()
            if inner == "*":
                tokens.append(Wildcard())
            elif _INDEX.fullmatch(inner):
                tokens.append(Index(int(inner)))
            elif len(inner) >= 2 and inner[0] == inner[-1] and inner[0] in "'\"":
                tokens.append(Key(inner[1:-1].replace("\\'", "'")))
            else:
                raise _selector_error(path, inner)
            i = end + 1
        else:
            raise _unsupported(path, f"unexpected character '{text[i]}' at position {i}")
    return tokens


def _literal_attribute(node: DualValue) -> str:
    return "test_value" if is_pattern_marker(node.stub_value) else "stub_value"


def unbound(node: Any) -> Any:
    """The literal side of a node bound to a matcher; other nodes as they are."""
    while isinstance(node, DualValue):
        node = getattr(node, _literal_attribute(node))
    return node


def _children(node: Any) -> List[Tuple[Union[str, int], Any]]:
    node = unbound(node)
    if isinstance(node, dict):
        return list(node.items())
    if isinstance(node, list):
        return list(enumerate(node))
    return []


def _descendants(node: Any, loc: Location, name: str) -> List[Location]:
    found: List[Location] = []
    literal = unbound(node)
    if isinstance(literal, dict) and name in literal:
        found.append(loc + (name,))
    for k, child in _children(literal):
        found.extend(_descendants(child, loc + (k,), name))
    return found


def get_at(tree: Any, location: Location) -> Any:
    """Node at `location`; bound nodes along the way are crossed on their literal side."""
    node = tree
    for step in location:
        node = unbound(node)[step]
    return node


def locate(tree: Any, path: str) -> List[Location]:
    """Return the concrete locations a JSON path selects in `tree`."""
    current: List[Location] = [()]
    for token in parse_path(path):
        following: List[Location] = []
        for loc in current:
            node = unbound(get_at(tree, loc))
            if isinstance(token, Key):
                if isinstance(node, dict) and token.name in node:
                    following.append(loc + (token.name,))
            elif isinstance(token, Index):
                if isinstance(node, list) and -len(node) <= token.index < len(node):
                    following.append(loc + (token.index % len(node),))
            elif isinstance(token, Wildcard):
                following.extend(loc + (k,) for k, _ in _children(node))
            else:
                following.extend(_descendants(node, loc, token.name))
        current = list(dict.fromkeys(following))
    return current


def replace_at(tree: Any, location: Location, value: Any) -> Any:
    """Return a copy of `tree` with the node at `location` replaced.

    A bound node on the way keeps its marker; only its literal side is rebuilt.
    """
    if not location:
        return value
    if isinstance(tree, DualValue):
        attribute = _literal_attribute(tree)
        rebuilt = replace_at(getattr(tree, attribute), location, value)
        return dataclasses.replace(tree, **{attribute: rebuilt})
    result = copy.copy(tree)
    head, rest = location[0], location[1:]
    result[head] = replace_at(tree[head], rest, value)
    return result


def format_path(location: Location) -> str:
    """Render a location as a JSON path string, e.g. `$.items[0]['a b']`."""
    parts = ["$"]
    for step in location:
        if isinstance(step, int):
            parts.append(f"[{step}]")
        elif _SIMPLE_KEY.fullmatch(step):
            parts.append(f".{step}")
        else:
            parts.append("['" + step.replace("'", "\\'") + "']")
    return "".join(parts)


def flatten(tree: Any) -> List[Tuple[str, Any]]:
    """Flatten a body tree into (path, leaf) pairs.

    DualValue nodes are reported as leaves; a bound container is then also
    walked through its literal side, so matchers nested under it show up.
    Empty containers are leaves as well.
    """
    pairs: List[Tuple[str, Any]] = []

    def walk(node: Any, loc: Location) -> None:
        children = _children(node)
        if isinstance(node, DualValue) or not children:
            pairs.append((format_path(loc), node))
        for k, child in children:
            walk(child, loc + (k,))

    walk(tree, ())
    return pairs
