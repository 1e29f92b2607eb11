"""
Input validation utilities
"""
from typing import Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from cheeper.utils.exceptions import ValidationError

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def validate_input(schema: Type[SchemaT], **data) -> SchemaT:
    """Build schema from raw caller arguments, raising our ValidationError"""
    try:
        return schema(**data)
    except PydanticValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'input'}: {err['msg']}"
            for err in e.errors()
        )
        raise ValidationError(f"Invalid {schema.__name__}: {problems}") from e


def validate_positive(value: int, name: str) -> int:
    """Validate a request count is a positive integer"""
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValidationError(f"{name} must be a positive integer, got {value!r}")
    return value
