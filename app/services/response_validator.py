import json
import re
from typing import Any, Union

from google.genai import types
from pydantic import TypeAdapter, ValidationError

from app.core.errors import MalformedResponse
from app.models.schemas import DietPlan, StoreList
from app.services.request_builder import RESPONSE_SCHEMAS, RequestKind

USER_MESSAGES = {
    RequestKind.DIET_PLAN: "The diet plan returned an unexpected format. Please try again.",
    RequestKind.STORE_LOOKUP: "Could not find store information in the right format. Please try again.",
}

RESULT_ADAPTERS = {
    RequestKind.DIET_PLAN: TypeAdapter(DietPlan),
    RequestKind.STORE_LOOKUP: TypeAdapter(StoreList),
}


class ShapeMismatch(Exception):
    pass


def _kind_of(value: Any) -> str:
    if value is None:
        return "null"
    return type(value).__name__


def check_shape(value: Any, schema: types.Schema, path: str = "$") -> None:
    """
    Walk a decoded JSON value against a response schema.

    Checks types, required properties, array bounds and numeric minimums.
    Properties the schema does not declare are ignored.
    """
    expected = schema.type

    if expected == types.Type.OBJECT:
        if not isinstance(value, dict):
            raise ShapeMismatch(f"{path}: expected object, got {_kind_of(value)}")
        for name in schema.required or []:
            if value.get(name) is None:
                raise ShapeMismatch(f"{path}: missing required field '{name}'")
        for name, sub_schema in (schema.properties or {}).items():
            if value.get(name) is not None:
                check_shape(value[name], sub_schema, f"{path}.{name}")

    elif expected == types.Type.ARRAY:
        if not isinstance(value, list):
            raise ShapeMismatch(f"{path}: expected array, got {_kind_of(value)}")
        if schema.min_items is not None and len(value) < int(schema.min_items):
            raise ShapeMismatch(f"{path}: expected at least {schema.min_items} items, got {len(value)}")
        if schema.max_items is not None and len(value) > int(schema.max_items):
            raise ShapeMismatch(f"{path}: expected at most {schema.max_items} items, got {len(value)}")
        if schema.items is not None:
            for index, item in enumerate(value):
                check_shape(item, schema.items, f"{path}[{index}]")

    elif expected == types.Type.STRING:
        if not isinstance(value, str):
            raise ShapeMismatch(f"{path}: expected string, got {_kind_of(value)}")

    elif expected in (types.Type.NUMBER, types.Type.INTEGER):
        # bool is an int subclass but never a valid number here
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ShapeMismatch(f"{path}: expected number, got {_kind_of(value)}")
        if schema.minimum is not None and value < schema.minimum:
            raise ShapeMismatch(f"{path}: {value} is below the minimum {schema.minimum}")

    elif expected == types.Type.BOOLEAN:
        if not isinstance(value, bool):
            raise ShapeMismatch(f"{path}: expected boolean, got {_kind_of(value)}")


def _strip_code_fence(text: str) -> str:
    fenced = re.fullmatch(r'```(?:json)?\s*(.*?)\s*```', text, re.DOTALL)
    if fenced:
        return fenced.group(1)
    return text


def validate_response(kind: RequestKind, raw_text: str) -> Union[DietPlan, StoreList]:
    """
    Parse and structurally validate a generated payload.

    Returns the typed plan or store list, or raises MalformedResponse. Never
    returns a partial result.
    """
    message = USER_MESSAGES[kind]

    try:
        decoded = json.loads(_strip_code_fence((raw_text or "").strip()))
    except (ValueError, RecursionError) as e:
        # Very deep nesting raises RecursionError rather than JSONDecodeError
        print(f"❌ Failed to parse JSON response: {e}. Raw text: {str(raw_text)[:300]}...")
        raise MalformedResponse(message, raw_text=raw_text, reason=f"invalid JSON: {e}")

    try:
        check_shape(decoded, RESPONSE_SCHEMAS[kind])
        return RESULT_ADAPTERS[kind].validate_python(decoded)
    except ShapeMismatch as e:
        reason = str(e)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        reason = f"$.{location}: {first['msg']}"

    print(f"❌ {kind.value} response does not match the expected shape ({reason}). Raw text: {str(raw_text)[:300]}...")
    raise MalformedResponse(message, raw_text=raw_text, reason=reason)
