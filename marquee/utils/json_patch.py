"""
A small [RFC 6902](https://datatracker.ietf.org/doc/html/rfc6902) JSON Patch interpreter.

Operations are applied in order to a copy of a JSON compatible document (dicts, lists and scalars).
Locations are [RFC 6901](https://datatracker.ietf.org/doc/html/rfc6901) JSON pointers, like `/address/street`.

```python
document = {"title": "Alien", "genre": "Horror", "duration": 117}
patched = apply_patch(
    document,
    [PatchOperation(op="replace", path="/title", value="Aliens")],
)
```

If an operation can not be applied, a `JsonPatchError` is raised and the original document is left untouched.
"""

import copy
from collections.abc import Sequence
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from marquee.types.exceptions import JsonPatchError

JsonDocument = Any


class PatchOperation(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    op: Literal["add", "remove", "replace", "move", "copy", "test"]
    path: str
    value: Any = None
    # `from` is a Python keyword
    from_: str | None = Field(default=None, alias="from")


def parse_pointer(pointer: str) -> list[str]:
    """
    Split a JSON pointer in its reference tokens.

    The empty pointer `""` designates the whole document.
    """
    if pointer == "":
        return []
    if not pointer.startswith("/"):
        raise JsonPatchError(pointer, f"Invalid JSON pointer '{pointer}'")
    # `~1` must be unescaped before `~0`, see RFC 6901 section 4
    return [
        token.replace("~1", "/").replace("~0", "~")
        for token in pointer[1:].split("/")
    ]


def _array_index(
    array: list[Any],
    token: str,
    pointer: str,
    allow_end: bool = False,
) -> int:
    if allow_end and token == "-":
        return len(array)
    # Leading zeros and signs are not allowed in array indexes
    # `isdigit` alone accepts non ASCII digits like `²`
    if not (token.isascii() and token.isdigit()) or (
        token != "0" and token.startswith("0")
    ):
        raise JsonPatchError(pointer, f"Invalid array index '{token}'")
    index = int(token)
    upper_bound = len(array) if allow_end else len(array) - 1
    if index > upper_bound:
        raise JsonPatchError(pointer, f"Array index {index} is out of range")
    return index


def _get_child(node: JsonDocument, token: str, pointer: str) -> JsonDocument:
    if isinstance(node, dict):
        if token not in node:
            raise JsonPatchError(pointer, f"The target location '{pointer}' does not exist")
        return node[token]
    if isinstance(node, list):
        return node[_array_index(node, token, pointer)]
    raise JsonPatchError(pointer, f"The target location '{pointer}' does not exist")


def resolve(document: JsonDocument, pointer: str) -> JsonDocument:
    """
    Return the value referenced by `pointer` in `document`
    """
    node = document
    for token in parse_pointer(pointer):
        node = _get_child(node, token, pointer)
    return node


def _resolve_parent(
    document: JsonDocument,
    pointer: str,
) -> tuple[JsonDocument, str]:
    tokens = parse_pointer(pointer)
    node = document
    for token in tokens[:-1]:
        node = _get_child(node, token, pointer)
    if not isinstance(node, dict | list):
        raise JsonPatchError(pointer, f"The target location '{pointer}' does not exist")
    return node, tokens[-1]


def json_equal(first: JsonDocument, second: JsonDocument) -> bool:
    """
    Compare two JSON values. Unlike `==`, booleans are never equal to numbers.

    Numbers are equal if they have the same value, `1` equals `1.0`.
    """
    if isinstance(first, bool) or isinstance(second, bool):
        return type(first) is type(second) and first == second
    if isinstance(first, int | float) and isinstance(second, int | float):
        return first == second
    if type(first) is not type(second):
        return False
    if isinstance(first, dict):
        return first.keys() == second.keys() and all(
            json_equal(value, second[key]) for key, value in first.items()
        )
    if isinstance(first, list):
        return len(first) == len(second) and all(
            json_equal(item, other) for item, other in zip(first, second, strict=True)
        )
    return first == second


def _add(document: JsonDocument, pointer: str, value: Any) -> JsonDocument:
    if pointer == "":
        return value
    parent, token = _resolve_parent(document, pointer)
    if isinstance(parent, list):
        parent.insert(_array_index(parent, token, pointer, allow_end=True), value)
    else:
        parent[token] = value
    return document


def _remove(document: JsonDocument, pointer: str) -> JsonDocument:
    if pointer == "":
        raise JsonPatchError(pointer, "The whole document can not be removed")
    parent, token = _resolve_parent(document, pointer)
    if isinstance(parent, list):
        del parent[_array_index(parent, token, pointer)]
    else:
        if token not in parent:
            raise JsonPatchError(pointer, f"The target location '{pointer}' does not exist")
        del parent[token]
    return document


def _replace(document: JsonDocument, pointer: str, value: Any) -> JsonDocument:
    if pointer == "":
        return value
    parent, token = _resolve_parent(document, pointer)
    if isinstance(parent, list):
        parent[_array_index(parent, token, pointer)] = value
    else:
        if token not in parent:
            raise JsonPatchError(pointer, f"The target location '{pointer}' does not exist")
        parent[token] = value
    return document


def _apply_operation(
    document: JsonDocument,
    operation: PatchOperation,
) -> JsonDocument:
    pointer = operation.path

    if operation.op in ("add", "replace", "test") and (
        "value" not in operation.model_fields_set
    ):
        raise JsonPatchError(pointer, f"The '{operation.op}' operation requires a value")
    if operation.op in ("move", "copy") and operation.from_ is None:
        raise JsonPatchError(
            pointer,
            f"The '{operation.op}' operation requires a 'from' location",
        )

    match operation.op:
        case "add":
            return _add(document, pointer, copy.deepcopy(operation.value))
        case "remove":
            return _remove(document, pointer)
        case "replace":
            return _replace(document, pointer, copy.deepcopy(operation.value))
        case "move":
            source = operation.from_ or ""
            if source == pointer:
                return document
            if pointer.startswith(source + "/"):
                raise JsonPatchError(
                    pointer,
                    f"A location can not be moved into one of its children ('{source}')",
                )
            value = resolve(document, source)
            document = _remove(document, source)
            return _add(document, pointer, value)
        case "copy":
            value = copy.deepcopy(resolve(document, operation.from_ or ""))
            return _add(document, pointer, value)
        case "test":
            if not json_equal(resolve(document, pointer), operation.value):
                raise JsonPatchError(
                    pointer,
                    f"The value at '{pointer}' is not equal to the tested value",
                )
            return document


def apply_patch(
    document: JsonDocument,
    operations: Sequence[PatchOperation],
) -> JsonDocument:
    """
    Apply `operations` to a copy of `document` and return the patched copy
    """
    patched = copy.deepcopy(document)
    for operation in operations:
        patched = _apply_operation(patched, operation)
    return patched
