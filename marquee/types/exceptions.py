from typing import Any

from fastapi import HTTPException


class ContentHTTPException(HTTPException):
    """
    A custom HTTPException allowing to return custom content.

    Instead of returning `{detail: <content>}`, this exception can return a json serialized `<content>`.

    You need to define a custom exception handler to use it:
    ```python
    @app.exception_handler(ContentHTTPException)
    async def content_exception_handler(
        request: Request,
        exc: ContentHTTPException,
    ):
        return JSONResponse(
            status_code=exc.status_code,
            content=jsonable_encoder(exc.content),
            headers=exc.headers,
        )
    ```
    """

    def __init__(
        self,
        status_code: int,
        content: dict[str, Any],
        headers: dict[str, str] | None = None,
    ) -> None:
        super().__init__(status_code=status_code, detail=content, headers=headers)
        self.content = content


class ValidationProblemException(ContentHTTPException):
    """
    A 400 error carrying a validation problem document:
    ```json
    {
        "type": "https://tools.ietf.org/html/rfc9110#section-15.5.1",
        "title": "One or more validation errors occurred.",
        "status": 400,
        "errors": {"title": ["String should have at least 1 character"]}
    }
    ```
    """

    def __init__(self, errors: dict[str, list[str]]) -> None:
        content = {
            "type": "https://tools.ietf.org/html/rfc9110#section-15.5.1",
            "title": "One or more validation errors occurred.",
            "status": 400,
            "errors": errors,
        }

        super().__init__(status_code=400, content=content)
        self.errors = errors


class JsonPatchError(Exception):
    """
    A JSON Patch operation could not be applied to the document.

    `pointer` is the JSON pointer of the operation that failed.
    """

    def __init__(self, pointer: str, message: str):
        super().__init__(message)
        self.pointer = pointer


class InvalidAppStateTypeError(Exception):
    def __init__(self):
        super().__init__(
            "The request state is neither a dict nor a starlette State object",
        )


class FactoryDependencyCycleError(Exception):
    def __init__(self, factories: list[str]):
        super().__init__(
            f"Factories {factories} have unresolvable dependencies and can not be run",
        )


class DotenvMissingVariableError(Exception):
    def __init__(self, variable_name: str):
        super().__init__(f"{variable_name} should be configured in the dotenv")
