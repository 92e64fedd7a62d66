from collections.abc import Sequence
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from marquee.types.exceptions import JsonPatchError, ValidationProblemException
from marquee.types.sqlalchemy import INTEGER_MAX, INTEGER_MIN
from marquee.utils.json_patch import JsonDocument, PatchOperation, apply_patch

ModelT = TypeVar("ModelT", bound=BaseModel)

# Pydantic and FastAPI prefix error locations with the part of the request that contains the field
REQUEST_LOCATIONS = ("body", "query", "path", "header", "cookie")


def is_storable_id(identifier: int) -> bool:
    """
    Return False if `identifier` can not be stored in an id column. No row can have such an id.

    Drivers raise instead of returning no row when they are given an out of range integer.
    """
    return INTEGER_MIN <= identifier <= INTEGER_MAX


def format_validation_errors(errors: Sequence[Any]) -> dict[str, list[str]]:
    """
    Group Pydantic validation errors by field.

    `{"loc": ("body", "address", "street"), "msg": "Field required"}` becomes `{"address.street": ["Field required"]}`.
    Errors that are not associated with a field are grouped under `$`.
    """
    problems: dict[str, list[str]] = {}
    for error in errors:
        location = [str(part) for part in error["loc"]]
        if location and location[0] in REQUEST_LOCATIONS:
            location = location[1:]
        field = ".".join(location) or "$"
        problems.setdefault(field, []).append(error["msg"])
    return problems


def find_unknown_members(
    model_type: type[BaseModel],
    document: JsonDocument,
    pointer: str = "",
) -> list[str]:
    """
    Return the JSON pointers of the members of `document` that are not fields of `model_type`.

    Nested models are inspected recursively.
    """
    if not isinstance(document, dict):
        return []

    unknown_members: list[str] = []
    for key, value in document.items():
        member_pointer = f"{pointer}/{key}"
        field = model_type.model_fields.get(key)
        if field is None:
            unknown_members.append(member_pointer)
        elif isinstance(field.annotation, type) and issubclass(
            field.annotation,
            BaseModel,
        ):
            unknown_members.extend(
                find_unknown_members(field.annotation, value, member_pointer),
            )
    return unknown_members


def patch_model(model: ModelT, operations: Sequence[PatchOperation]) -> ModelT:
    """
    Apply JSON Patch `operations` to the JSON representation of `model`, then validate the result as a new `model`.

    Raise a `ValidationProblemException` if an operation can not be applied, if it targets a member that the model
    does not define, or if the patched document is not a valid model.
    `model` is never modified.
    """
    model_type = type(model)
    try:
        document = apply_patch(model.model_dump(mode="json"), operations)
    except JsonPatchError as error:
        raise ValidationProblemException({error.pointer: [str(error)]}) from error

    unknown_members = find_unknown_members(model_type, document)
    if unknown_members:
        raise ValidationProblemException(
            {
                member: [f"The target location '{member}' does not exist"]
                for member in unknown_members
            },
        )

    try:
        return model_type.model_validate(document)
    except ValidationError as error:
        raise ValidationProblemException(
            format_validation_errors(error.errors()),
        ) from error
