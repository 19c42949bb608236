from __future__ import annotations

from collections.abc import Mapping

from fastapi import HTTPException


def value_error(
    exc: ValueError,
    *,
    code_statuses: Mapping[str, int] | None = None,
    detail_overrides: Mapping[str, str] | None = None,
    default_status: int = 400,
    default_detail: str | None = None,
) -> HTTPException:
    raw_detail = str(exc)

    if code_statuses and raw_detail in code_statuses:
        detail = (
            detail_overrides[raw_detail]
            if detail_overrides and raw_detail in detail_overrides
            else raw_detail
        )
        return HTTPException(status_code=code_statuses[raw_detail], detail=detail)

    return HTTPException(
        status_code=default_status,
        detail=default_detail if default_detail is not None else raw_detail,
    )
