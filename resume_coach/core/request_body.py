import json
from typing import Callable, TypeVar

from fastapi import Depends, Request
from pydantic import BaseModel
from pydantic import ValidationError as SchemaError

from resume_coach.core.errors import ValidationError
from resume_coach.core.security import current_user_id

ModelT = TypeVar("ModelT", bound=BaseModel)


def _schema_message(exc: SchemaError) -> str:
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "Invalid request body")
    return f"{location}: {message}" if location else message


def authenticated_body(model: type[ModelT]) -> Callable[..., object]:
    """Build a dependency that reads ``model`` from the JSON body.

    The caller is authenticated first, so a request without a valid token
    gets a 401 no matter what its body looks like.
    """

    async def dependency(request: Request, user_id: str = Depends(current_user_id)) -> ModelT:
        _ = user_id
        raw = await request.body()
        try:
            data = json.loads(raw) if raw.strip() else {}
        except ValueError as exc:
            raise ValidationError("Request body must be valid JSON", detail=str(exc)) from exc
        try:
            return model.model_validate(data)
        except SchemaError as exc:
            raise ValidationError(_schema_message(exc), detail=str(exc)) from exc

    return dependency
