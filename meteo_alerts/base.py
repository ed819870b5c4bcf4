"""날씨 파이프라인 기반 모델입니다. / Base definitions for weather pipeline models."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict


class MeteoBaseModel(BaseModel):
    """공통 베이스 모델입니다. / Common base model."""

    model_config: ClassVar[ConfigDict] = ConfigDict(
        frozen=True,
        populate_by_name=True,
        use_enum_values=True,
        validate_assignment=True,
    )

    def model_dump_jsonable(self, **kwargs: Any) -> dict[str, Any]:
        """JSON 직렬화 가능한 덤프입니다. / Dump JSON-serializable dict.

        Field aliases are used and ``None`` values are dropped so that the
        output keeps the camelCase wire names expected by front-ends.
        """

        kwargs.setdefault("by_alias", True)
        kwargs.setdefault("exclude_none", True)
        data = self.model_dump(mode="json", **kwargs)
        return data


def format_number(value: float) -> str:
    """숫자를 그대로 표시합니다. / Render a number without rounding.

    Integral values drop the trailing ``.0``; everything else keeps its full
    ``repr`` so readings are never truncated.
    """

    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return repr(value)
