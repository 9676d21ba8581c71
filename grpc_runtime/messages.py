from __future__ import annotations

from typing import Any, Type, TypeVar

from domain.common.exceptions import DowncastMismatch


M = TypeVar("M")


def _type_name(cls: type) -> str:
    descriptor = getattr(cls, "DESCRIPTOR", None)
    full_name = getattr(descriptor, "full_name", None)
    return full_name or f"{cls.__module__}.{cls.__qualname__}"


def ensure_message(value: Any, cls: Type[M], full_method: str) -> M:
    """Narrow an opaque request/response to the RPC's concrete message class.

    Never converts: a mismatch raises DowncastMismatch.
    """
    if not isinstance(value, cls):
        raise DowncastMismatch(full_method, _type_name(cls), _type_name(type(value)))
    return value
