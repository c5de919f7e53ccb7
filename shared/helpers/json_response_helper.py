from typing import Any

from shared.core.schemas import JsonOutResult
from shared.utils.app_status_code import AppStatusCode


def success_response(data: Any, message: str = "Success", status_code: str = AppStatusCode.DATA_RETRIEVED_SUCCESSFULLY):
    return JsonOutResult(
        data=data,
        status="Success",
        status_code=status_code,
        message=message
    )
